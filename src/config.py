import os
import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv

log = logging.getLogger("nowplaying.config")

# Project root is one level up from src/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file with .env overrides."""
    load_dotenv(PROJECT_ROOT / ".env")

    yaml_path = Path(config_path) if config_path else CONFIG_DIR / "default_settings.yaml"
    if not yaml_path.exists():
        log.warning("Config file not found: %s — using defaults", yaml_path)
        config = {}
    else:
        with open(yaml_path) as f:
            config = yaml.safe_load(f) or {}

    # Environment variable overrides
    plugin = config.setdefault("plugin", {})
    plugin["seek_seconds"] = float(os.environ.get("SEEK_SECONDS", plugin.get("seek_seconds", 5)))
    plugin["update_interval"] = float(
        os.environ.get("UPDATE_INTERVAL", plugin.get("update_interval", 0.5))
    )
    plugin["render_timeout"] = float(
        os.environ.get("RENDER_TIMEOUT", plugin.get("render_timeout", 2.0))
    )
    plugin.setdefault("default_icon", "assets/action")

    lcd = config.setdefault("lcd", {})
    lcd["font_path"] = os.environ.get("LCD_FONT_PATH", lcd.get("font_path"))

    preview = config.setdefault("preview", {})
    preview["output_dir"] = os.environ.get("PREVIEW_DIR", preview.get("output_dir", "preview"))

    log.info(
        "Config loaded — seek %.0fs, update every %.2fs, render timeout %.1fs",
        plugin["seek_seconds"],
        plugin["update_interval"],
        plugin["render_timeout"],
    )
    return config
