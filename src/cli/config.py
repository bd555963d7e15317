"""Configuration loading."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import BotConfig


def find_config() -> Optional[Path]:
    """Find config file: $VYLOBOT_CONFIG, then standard locations."""
    explicit = os.getenv("VYLOBOT_CONFIG")
    if explicit:
        return Path(explicit).expanduser()

    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".vylobot" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> BotConfig:
    """Load configuration as Pydantic model with validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    if not isinstance(base_config, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(base_config).__name__}")

    try:
        return BotConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
