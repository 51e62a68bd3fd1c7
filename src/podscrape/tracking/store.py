"""JSON-backed list of tracked podcasts.

Every mutation reads the whole file, changes it in memory, and rewrites the
whole file. There is no locking; with overlapping writers the last one wins.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from podscrape.tracking.models import TrackedPodcast, TrackingData
from podscrape.utils.datetime import now_utc

logger = logging.getLogger(__name__)


class TrackingStore:
    """Manage the tracked-podcast file."""

    def __init__(self, tracking_file: Path) -> None:
        """Initialize the store.

        Args:
            tracking_file: JSON file holding the tracked podcasts
        """
        self.tracking_file = tracking_file

    def load(self) -> TrackingData:
        """Load tracking data.

        A missing or unreadable file yields an empty list rather than an error.
        """
        if not self.tracking_file.exists():
            return TrackingData()

        try:
            content = self.tracking_file.read_text(encoding="utf-8")
            return TrackingData.model_validate_json(content)
        except (OSError, UnicodeDecodeError, PydanticValidationError) as e:
            logger.warning(
                "Ignoring unreadable tracking file %s: %s", self.tracking_file, e
            )
            return TrackingData()

    def save(self, data: TrackingData) -> None:
        """Write the whole tracking file via temp file + rename."""
        self.tracking_file.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(data.model_dump(mode="json"), indent=2) + "\n"

        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.tracking_file.parent, prefix=".tmp_", suffix=".json"
        )
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            Path(temp_path).replace(self.tracking_file)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise

    def add(self, name: str, feed_url: str) -> TrackedPodcast:
        """Track a podcast.

        Returns the existing record when the name (case-insensitive) or feed
        URL is already tracked, otherwise the newly added one.
        """
        data = self.load()

        for podcast in data.podcasts:
            if podcast.matches(name, feed_url):
                logger.debug("Podcast '%s' already tracked as '%s'", name, podcast.name)
                return podcast

        podcast = TrackedPodcast(name=name, feed_url=feed_url)
        data.podcasts.append(podcast)
        self.save(data)

        logger.info("Tracking podcast '%s' (%s)", name, feed_url)
        return podcast

    def remove(self, name: str) -> bool:
        """Stop tracking every podcast with this name (case-insensitive).

        Returns:
            True if anything was removed
        """
        data = self.load()
        remaining = [p for p in data.podcasts if not p.matches(name)]

        if len(remaining) == len(data.podcasts):
            return False

        data.podcasts = remaining
        self.save(data)
        logger.info("Stopped tracking podcast '%s'", name)
        return True

    def list_podcasts(self) -> list[TrackedPodcast]:
        return self.load().podcasts

    def update_last_checked(self, podcast_id: str, episode_guid: str | None = None) -> None:
        """Record that a podcast's feed was just checked."""
        data = self.load()

        for podcast in data.podcasts:
            if podcast.id == podcast_id:
                podcast.last_checked = now_utc()
                if episode_guid:
                    podcast.last_episode_guid = episode_guid
                self.save(data)
                return

        logger.debug("No tracked podcast with id %s", podcast_id)
