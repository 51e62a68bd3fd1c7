"""YouTube search and audio extraction using yt-dlp."""

import asyncio
import logging
from pathlib import Path
from typing import Any

from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError, ExtractorError

from podscrape.audio.models import DownloadedVideo, VideoInfo
from podscrape.utils.datetime import format_upload_date
from podscrape.utils.errors import AudioDownloadError, FetchError

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={id}"

BASE_OPTS: dict[str, Any] = {
    "quiet": True,
    "no_warnings": True,
    "nocheckcertificate": True,
}


def to_video_info(data: dict[str, Any]) -> VideoInfo:
    """Build a VideoInfo from a yt-dlp info dict, filling defaults."""
    video_id = data.get("id") or ""
    return VideoInfo(
        id=video_id,
        title=data.get("title") or "Unknown Title",
        description=data.get("description") or "",
        uploader=data.get("uploader") or data.get("channel") or "Unknown",
        upload_date=format_upload_date(data.get("upload_date")),
        duration=int(data.get("duration") or 0),
        url=data.get("webpage_url") or data.get("url") or WATCH_URL.format(id=video_id),
    )


class YouTubeClient:
    """Search YouTube and download audio tracks with yt-dlp.

    Downloads are transcoded to MP3 and named by video id:
    ``<output_dir>/<id>.mp3``.
    """

    def __init__(self, output_dir: Path | None = None):
        """Initialize the client.

        Args:
            output_dir: Directory to save downloaded audio (default: ./temp)
        """
        self.output_dir = output_dir or Path.cwd() / "temp"

    async def search(self, query: str, max_results: int = 10) -> list[VideoInfo]:
        """Search YouTube.

        Args:
            query: Free-text search
            max_results: Maximum number of candidates

        Returns:
            Up to ``max_results`` candidates in YouTube's ranking order

        Raises:
            FetchError: If the search itself fails
        """
        ydl_opts = {**BASE_OPTS, "extract_flat": True}

        try:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(
                None, self._extract_sync, f"ytsearch{max_results}:{query}", ydl_opts
            )
        except (DownloadError, ExtractorError) as e:
            raise FetchError(f"YouTube search failed for '{query}': {e}") from e

        entries = [entry for entry in result.get("entries") or [] if entry]
        logger.debug("YouTube search '%s' returned %d results", query, len(entries))
        return [to_video_info(entry) for entry in entries]

    async def get_info(self, url: str) -> VideoInfo:
        """Get metadata for a video without downloading.

        Raises:
            AudioDownloadError: If info extraction fails
        """
        try:
            loop = asyncio.get_running_loop()
            data = await loop.run_in_executor(None, self._extract_sync, url, dict(BASE_OPTS))
        except (DownloadError, ExtractorError) as e:
            raise AudioDownloadError(f"Failed to get information from {url}: {e}") from e

        return to_video_info(data)

    async def download(self, url: str) -> DownloadedVideo:
        """Download a video's audio track as MP3.

        Args:
            url: Canonical video URL

        Returns:
            DownloadedVideo with the local path and fresh metadata

        Raises:
            AudioDownloadError: If the video is blocked, unreachable, or
                cannot be converted
        """
        info = await self.get_info(url)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        ydl_opts = {
            **BASE_OPTS,
            "format": "bestaudio/best",
            "postprocessors": [
                {
                    "key": "FFmpegExtractAudio",
                    "preferredcodec": "mp3",
                    "preferredquality": "0",
                }
            ],
            "outtmpl": str(self.output_dir / f"{info.id}.%(ext)s"),
        }

        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._download_sync, url, ydl_opts)
        except (DownloadError, ExtractorError) as e:
            raise AudioDownloadError(
                f"Failed to download audio from {url}. "
                f"The video may be unavailable or blocked. Error: {e}"
            ) from e
        except AudioDownloadError:
            raise
        except Exception as e:
            raise AudioDownloadError(
                f"Unexpected error downloading audio from {url}: {e}"
            ) from e

        audio_path = self.output_dir / f"{info.id}.mp3"
        if not audio_path.exists():
            raise AudioDownloadError(
                f"Download completed but file not found at expected location: {audio_path}"
            )

        logger.info("Downloaded '%s' to %s", info.title, audio_path)
        return DownloadedVideo(audio_path=audio_path, info=info)

    def _extract_sync(self, url: str, ydl_opts: dict[str, Any]) -> dict[str, Any]:
        """Synchronous info extraction for thread pool execution."""
        with YoutubeDL(ydl_opts) as ydl:
            info = ydl.extract_info(url, download=False)
            if not info:
                raise AudioDownloadError(f"Failed to extract information from {url}")
            return info

    def _download_sync(self, url: str, ydl_opts: dict[str, Any]) -> None:
        """Synchronous download for thread pool execution."""
        with YoutubeDL(ydl_opts) as ydl:
            ydl.download([url])
