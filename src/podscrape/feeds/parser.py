"""RSS feed parser using feedparser."""

import asyncio
import logging
from typing import Any

import feedparser
import requests

from podscrape.feeds.models import Episode, Feed
from podscrape.utils.datetime import date_from_struct
from podscrape.utils.errors import FeedFetchError, FeedParseError

logger = logging.getLogger(__name__)


class RSSParser:
    """Parses RSS feeds and extracts episode information."""

    def __init__(self, timeout: float = 30) -> None:
        """Initialize the RSS parser.

        Args:
            timeout: HTTP request timeout in seconds.
        """
        self.timeout = timeout

    async def fetch_feed(self, url: str) -> Feed:
        """Fetch and parse a podcast feed.

        Args:
            url: Feed URL

        Returns:
            Parsed Feed with episodes in document order

        Raises:
            FeedFetchError: If the URL is unreachable or returns an error status
            FeedParseError: If the document is not a readable feed
        """
        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(None, self._download, url)
        return self.parse(content, url)

    async def get_latest_episode(self, url: str) -> Episode | None:
        """Return the first episode of the feed, if any."""
        feed = await self.fetch_feed(url)
        return feed.latest_episode

    def _download(self, url: str) -> bytes:
        logger.debug("Fetching feed %s", url)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FeedFetchError(f"Failed to fetch feed {url}: {e}") from e

        logger.debug("Fetched %d bytes from %s", len(response.content), url)
        return response.content

    def parse(self, content: bytes | str, url: str = "") -> Feed:
        """Parse an already-downloaded feed document.

        Args:
            content: Raw feed XML
            url: Source URL, used as the link fallback

        Raises:
            FeedParseError: If nothing usable could be parsed
        """
        parsed = feedparser.parse(content)

        if parsed.bozo and not parsed.entries:
            reason = parsed.get("bozo_exception", "unknown error")
            raise FeedParseError(f"Could not parse feed {url or '(inline)'}: {reason}")

        channel = parsed.feed
        episodes = [self._parse_entry(entry) for entry in parsed.entries]

        feed = Feed(
            title=channel.get("title") or "Unknown Podcast",
            description=channel.get("subtitle") or channel.get("description") or "",
            link=channel.get("link") or url,
            episodes=episodes,
        )
        logger.info("Parsed feed '%s' with %d episodes", feed.title, len(episodes))
        return feed

    def _parse_entry(self, entry: Any) -> Episode:
        """Convert a feedparser entry to an Episode, filling defaults."""
        return Episode(
            title=entry.get("title") or "Untitled",
            description=entry.get("summary") or "",
            published=entry.get("published") or "",
            published_date=date_from_struct(entry.get("published_parsed")),
            audio_url=self._extract_audio_url(entry),
            duration=entry.get("itunes_duration") or None,
            guid=entry.get("id") or entry.get("link") or entry.get("title") or "",
        )

    @staticmethod
    def _extract_audio_url(entry: Any) -> str | None:
        for enclosure in entry.get("enclosures") or []:
            href = enclosure.get("href")
            if href:
                return href
        return None
