from setuptools import setup, find_packages

setup(
    name="streamdeck-nowplaying",
    version="0.1.0",
    description="Now Playing album art, track info and progress on Stream Deck + dials",
    author="mseibert",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    py_modules=["main", "config"],
    python_requires=">=3.10",
    install_requires=[
        "Pillow>=10.1.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "numpy",
        ],
    },
    entry_points={
        "console_scripts": [
            "streamdeck-nowplaying=main:main",
        ],
    },
)
