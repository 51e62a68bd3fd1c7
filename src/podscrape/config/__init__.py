"""Configuration loading and logging setup."""

from podscrape.config.logging import setup_logging
from podscrape.config.manager import ConfigManager
from podscrape.config.schema import Settings

__all__ = ["ConfigManager", "Settings", "setup_logging"]
