"""Date helpers."""

import time
from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def today_slug() -> str:
    """Today's UTC date as YYYY-MM-DD."""
    return now_utc().strftime("%Y-%m-%d")


def date_from_struct(value: time.struct_time | None) -> date | None:
    """Convert a feedparser ``*_parsed`` struct (always UTC) to a date."""
    if value is None:
        return None
    return date(value.tm_year, value.tm_mon, value.tm_mday)


def format_upload_date(value: str | None) -> str:
    """Render yt-dlp's YYYYMMDD upload date as YYYY-MM-DD.

    Values that are not eight characters long are returned unchanged.
    """
    if not value or len(value) != 8:
        return value or ""
    return f"{value[:4]}-{value[4:6]}-{value[6:8]}"
