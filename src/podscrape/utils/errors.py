"""Custom exceptions for podscrape."""


class PodscrapeError(Exception):
    """Base exception for all podscrape errors."""

    pass


class ConfigError(PodscrapeError):
    """Configuration-related errors."""

    pass


class ConfigurationError(ConfigError):
    """A required setting (such as an API key) is missing."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class FetchError(PodscrapeError):
    """A feed or file could not be fetched."""

    pass


class FeedFetchError(FetchError):
    """Feed URL unreachable or returned an error status."""

    pass


class FeedParseError(FetchError):
    """Feed document could not be parsed."""

    pass


class AudioDownloadError(FetchError):
    """Audio download or extraction failed."""

    pass


class AudioNotFoundError(PodscrapeError):
    """No usable audio source could be found for an episode."""

    pass


class TranscriptionServiceError(PodscrapeError):
    """The transcription service reported an error."""

    pass


class ValidationError(PodscrapeError):
    """Invalid arguments supplied by the caller."""

    pass


class NotFoundError(PodscrapeError):
    """A requested episode or record does not exist."""

    pass
