"""Data models passed through the scrape pipeline."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

AudioSource = Literal["rss", "youtube", "local"]


class EpisodeInfo(BaseModel):
    """Everything needed to locate, transcribe, and file one episode.

    ``(podcast_name, title, episode_date)`` is the episode's identity on disk;
    the feed's own guid is not used.
    """

    podcast_name: str
    title: str
    episode_date: str = Field(..., description="YYYY-MM-DD")
    audio_url: str | None = Field(None, description="Direct audio URL (feed enclosure)")
    video_url: str | None = Field(None, description="YouTube URL named by the query")


class AudioAcquisition(BaseModel):
    """Local audio file and the path that produced it."""

    audio_path: Path
    source: AudioSource


class ScrapeResult(BaseModel):
    """Outcome of a successful scrape."""

    transcript_path: Path
    transcript_preview: str
    word_count: int = Field(0, ge=0)
    source: AudioSource
