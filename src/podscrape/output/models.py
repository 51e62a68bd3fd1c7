"""Data models for the on-disk episode archive."""

from pathlib import Path

from pydantic import BaseModel, Field


class EpisodeRecord(BaseModel):
    """An episode folder found by scanning the archive.

    Example:
        >>> record = EpisodeRecord(
        ...     podcast_name="The Changelog",
        ...     episode_title="Building Better Software",
        ...     episode_date="2025-11-07",
        ...     has_transcript=True,
        ...     has_summary=False,
        ...     folder_path=Path("~/podcasts/The Changelog/2025-11-07 - Building Better Software"),
        ... )
    """

    podcast_name: str = Field(..., description="Podcast folder name (sanitized)")
    episode_title: str = Field(..., description="Title parsed from the folder name")
    episode_date: str = Field(..., description="YYYY-MM-DD parsed from the folder name")
    has_transcript: bool = False
    has_summary: bool = False
    folder_path: Path

    @property
    def is_complete(self) -> bool:
        return self.has_transcript and self.has_summary


class IncompleteEpisode(BaseModel):
    """An episode with a transcript but no summary yet."""

    podcast_name: str
    episode_title: str
    episode_date: str
    transcript_path: Path


class EpisodePaths(BaseModel):
    """Transcript and summary locations for a fully processed episode."""

    transcript_path: Path
    summary_path: Path
