"""Data models for audio sources."""

from pathlib import Path

from pydantic import BaseModel, Field


class VideoInfo(BaseModel):
    """Metadata for a YouTube video or search result."""

    id: str
    title: str = "Unknown Title"
    description: str = ""
    uploader: str = "Unknown"
    upload_date: str = Field(default="", description="YYYY-MM-DD or empty")
    duration: int = Field(default=0, ge=0, description="Length in seconds")
    url: str

    @property
    def duration_minutes(self) -> int:
        return self.duration // 60


class DownloadedVideo(BaseModel):
    """Result of extracting a video's audio track."""

    audio_path: Path
    info: VideoInfo
