"""Default locations for config, data, and cache files (XDG via platformdirs)."""

from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir, user_data_dir

APP_NAME = "podscrape"


def get_config_dir() -> Path:
    """Directory holding config.yaml."""
    return Path(user_config_dir(APP_NAME))


def get_config_file() -> Path:
    return get_config_dir() / "config.yaml"


def get_data_dir() -> Path:
    return Path(user_data_dir(APP_NAME))


def get_tracking_file() -> Path:
    """Default location of the tracked-podcast list."""
    return get_data_dir() / "tracking.json"


def get_cache_dir() -> Path:
    return Path(user_cache_dir(APP_NAME))


def get_temp_dir() -> Path:
    """Default scratch directory for downloaded audio."""
    return get_cache_dir() / "temp"
