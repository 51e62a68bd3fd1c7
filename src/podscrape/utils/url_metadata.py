"""URL classification helpers.

Decides whether a scrape query is a YouTube link, a podcast feed, a direct
audio file, or plain search text.
"""

import re
from enum import Enum
from urllib.parse import parse_qs, urlparse

YOUTUBE_URL_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com|youtu\.be)/")

FEED_URL_MARKERS = ("rss", "feed", ".xml", "megaphone", "libsyn", "anchor")
AUDIO_URL_MARKERS = (".mp3", "traffic.", "audio")
AUDIO_FILE_EXTENSIONS = (".mp3", ".m4a", ".aac", ".ogg", ".wav")


class QueryKind(str, Enum):
    """What a scrape query points at."""

    YOUTUBE = "youtube"
    FEED = "feed"
    AUDIO = "audio"
    SEARCH = "search"


def is_youtube_url(url: str) -> bool:
    """Return True for youtube.com / youtu.be URLs.

    Anything else, including malformed or look-alike hosts, is not YouTube.
    """
    return bool(YOUTUBE_URL_PATTERN.match(url))


def extract_youtube_id(url: str) -> str | None:
    """Extract YouTube video ID from URL.

    Handles youtube.com/watch?v=ID, youtu.be/ID, youtube.com/embed/ID and
    youtube.com/v/ID.

    Args:
        url: YouTube URL

    Returns:
        Video ID or None if not a YouTube URL
    """
    parsed = urlparse(url)
    host = parsed.netloc.lower().replace("www.", "")

    if host in ("youtube.com", "m.youtube.com"):
        if parsed.path == "/watch":
            query = parse_qs(parsed.query)
            if "v" in query:
                return query["v"][0]
        elif parsed.path.startswith(("/embed/", "/v/")):
            parts = parsed.path.split("/")
            if len(parts) >= 3 and parts[2]:
                return parts[2]
    elif host == "youtu.be":
        video_id = parsed.path.lstrip("/")
        return video_id or None

    return None


def is_feed_url(url: str) -> bool:
    """Heuristic: an http(s) URL that looks like a podcast feed."""
    return url.startswith("http") and any(marker in url for marker in FEED_URL_MARKERS)


def is_direct_audio_url(url: str) -> bool:
    """Heuristic: an http(s) URL that looks like a hosted audio file."""
    return url.startswith("http") and any(marker in url for marker in AUDIO_URL_MARKERS)


def has_audio_extension(url: str) -> bool:
    """True when the URL path ends in a known audio file extension."""
    return urlparse(url).path.lower().endswith(AUDIO_FILE_EXTENSIONS)


def classify_query(query: str) -> QueryKind:
    """Classify a scrape query.

    YouTube wins first. A URL whose path ends in an audio extension is audio
    even on feed hosts (traffic.megaphone.fm/...mp3); after that the feed
    markers are checked before the looser audio markers.
    """
    if is_youtube_url(query):
        return QueryKind.YOUTUBE
    if query.startswith("http") and has_audio_extension(query):
        return QueryKind.AUDIO
    if is_feed_url(query):
        return QueryKind.FEED
    if is_direct_audio_url(query):
        return QueryKind.AUDIO
    return QueryKind.SEARCH
