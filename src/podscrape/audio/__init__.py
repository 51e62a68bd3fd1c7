"""Audio sources for podscrape: YouTube via yt-dlp and direct HTTP downloads."""

from podscrape.audio.direct import DirectAudioDownloader
from podscrape.audio.models import DownloadedVideo, VideoInfo
from podscrape.audio.youtube import YouTubeClient

__all__ = [
    "DirectAudioDownloader",
    "DownloadedVideo",
    "VideoInfo",
    "YouTubeClient",
]
