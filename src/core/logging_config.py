import logging
import sys
import os


def setup_logging(level: str = None, log_file: str = None) -> logging.Logger:
    """Configure logging for the now-playing plugin.

    Logs go to stdout; set LOG_FILE (or pass log_file) to also append to
    a file, which is what the Stream Deck host keeps for plugins.
    """
    log_level = level or os.environ.get("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    log_file = log_file or os.environ.get("LOG_FILE")

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    # Configure our namespace logger
    root = logging.getLogger("nowplaying")
    root.setLevel(numeric_level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.propagate = False  # prevent duplicate output via root logger

    logging.basicConfig(level=logging.WARNING)

    # Pillow logs every plugin probe at DEBUG
    for name in ("PIL", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return root
