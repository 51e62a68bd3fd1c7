"""Utility functions and helpers for podscrape."""

from podscrape.utils.errors import (
    AudioDownloadError,
    AudioNotFoundError,
    ConfigError,
    ConfigurationError,
    FeedFetchError,
    FeedParseError,
    FetchError,
    InvalidConfigError,
    NotFoundError,
    PodscrapeError,
    TranscriptionServiceError,
    ValidationError,
)
from podscrape.utils.paths import (
    get_cache_dir,
    get_config_dir,
    get_config_file,
    get_data_dir,
    get_temp_dir,
    get_tracking_file,
)

__all__ = [
    # Errors
    "PodscrapeError",
    "ConfigError",
    "ConfigurationError",
    "InvalidConfigError",
    "FetchError",
    "FeedFetchError",
    "FeedParseError",
    "AudioDownloadError",
    "AudioNotFoundError",
    "TranscriptionServiceError",
    "ValidationError",
    "NotFoundError",
    # Paths
    "get_config_dir",
    "get_config_file",
    "get_data_dir",
    "get_tracking_file",
    "get_cache_dir",
    "get_temp_dir",
]
