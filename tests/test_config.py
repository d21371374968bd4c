"""Tests for YAML config loading with environment overrides."""

import config as config_module
from config import load_config


def test_defaults_when_file_missing(tmp_path, monkeypatch) -> None:
    for var in ("SEEK_SECONDS", "UPDATE_INTERVAL", "RENDER_TIMEOUT", "LCD_FONT_PATH", "PREVIEW_DIR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config_module, "PROJECT_ROOT", tmp_path)

    config = load_config(str(tmp_path / "missing.yaml"))

    assert config["plugin"]["seek_seconds"] == 5.0
    assert config["plugin"]["update_interval"] == 0.5
    assert config["plugin"]["render_timeout"] == 2.0
    assert config["plugin"]["default_icon"] == "assets/action"
    assert config["lcd"]["font_path"] is None
    assert config["preview"]["output_dir"] == "preview"


def test_yaml_values_and_env_overrides(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config_module, "PROJECT_ROOT", tmp_path)
    monkeypatch.delenv("UPDATE_INTERVAL", raising=False)
    monkeypatch.delenv("PREVIEW_DIR", raising=False)
    monkeypatch.setenv("SEEK_SECONDS", "10")
    monkeypatch.setenv("LCD_FONT_PATH", "/fonts/Inter.ttf")
    path = tmp_path / "settings.yaml"
    path.write_text(
        "plugin:\n  seek_seconds: 3\n  update_interval: 0.25\n"
        "preview:\n  output_dir: /tmp/deck\n",
        encoding="utf-8",
    )

    config = load_config(str(path))

    assert config["plugin"]["seek_seconds"] == 10.0
    assert config["plugin"]["update_interval"] == 0.25
    assert config["lcd"]["font_path"] == "/fonts/Inter.ttf"
    assert config["preview"]["output_dir"] == "/tmp/deck"


def test_bundled_settings_file_loads(monkeypatch) -> None:
    monkeypatch.delenv("SEEK_SECONDS", raising=False)
    config = load_config()
    assert config["plugin"]["seek_seconds"] == 5.0
    assert config["preview"]["tick_seconds"] == 1.0
