"""Data models for podcast episodes and feeds."""

from datetime import date

from pydantic import BaseModel, Field

from podscrape.utils.datetime import today_slug


class Episode(BaseModel):
    """Represents a single podcast episode as listed in a feed."""

    title: str = "Untitled"
    description: str = ""
    published: str = ""  # Raw pubDate text, often RFC-822
    published_date: date | None = None
    audio_url: str | None = None  # Enclosure URL
    duration: str | None = None
    guid: str = ""

    @property
    def date_slug(self) -> str:
        """Publish date as YYYY-MM-DD, or today's date when unknown."""
        if self.published_date is None:
            return today_slug()
        return self.published_date.isoformat()


class Feed(BaseModel):
    """A parsed podcast feed."""

    title: str = "Unknown Podcast"
    description: str = ""
    link: str = ""
    episodes: list[Episode] = Field(default_factory=list)

    @property
    def latest_episode(self) -> Episode | None:
        """First item in document order (usually, not always, the newest)."""
        return self.episodes[0] if self.episodes else None
