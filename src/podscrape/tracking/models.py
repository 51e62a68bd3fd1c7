"""Data models for tracked podcasts."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


def generate_id() -> str:
    return uuid.uuid4().hex[:16]


class TrackedPodcast(BaseModel):
    """A podcast feed watched for new episodes."""

    id: str = Field(default_factory=generate_id)
    name: str
    feed_url: str
    enabled: bool = True
    last_checked: datetime | None = None
    last_episode_guid: str | None = None

    def matches(self, name: str, feed_url: str | None = None) -> bool:
        """Case-insensitive name match, or exact feed URL match."""
        if self.name.lower() == name.lower():
            return True
        return feed_url is not None and self.feed_url == feed_url


class TrackingData(BaseModel):
    """Everything stored in the tracking file."""

    podcasts: list[TrackedPodcast] = Field(default_factory=list)
