"""Text formatting helpers for tool and CLI output."""


def truncate_text(text: str, max_length: int = 500, suffix: str = "...") -> str:
    """Cut ``text`` to ``max_length`` characters, appending ``suffix`` if cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix


def format_duration(seconds: int) -> str:
    """Format seconds as ``"<m>m <s>s"``."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs}s"


def count_words(text: str) -> int:
    """Whitespace-delimited word count."""
    return len(text.split())


def mask_secret(value: str | None) -> str:
    """Show only the last four characters of a secret."""
    if not value:
        return "(not set)"
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"
