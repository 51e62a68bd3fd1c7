"""Episode acquisition with YouTube fallback.

Audio acquisition policy:

1. If the query already named a YouTube video, download it.
2. Otherwise, if the feed gave a direct audio URL, try it once. Any failure
   falls through to step 3; the URL is never retried.
3. Search YouTube for ``"<podcast> <title>"`` (5 candidates) and pick the
   first full-length video (> 5 minutes) whose title or uploader mentions the
   podcast, else the first full-length video at all.
4. No full-length candidate: ``AudioNotFoundError``.

Transcription and filing run unconditionally on whatever audio was obtained;
they never trigger a fallback.
"""

import logging
import re
import time
from collections.abc import Sequence

from podscrape.audio.direct import DirectAudioDownloader
from podscrape.audio.models import VideoInfo
from podscrape.audio.youtube import YouTubeClient
from podscrape.output.manager import EpisodeStore
from podscrape.pipeline.models import AudioAcquisition, EpisodeInfo, ScrapeResult
from podscrape.transcription.deepgram import DeepgramTranscriber
from podscrape.utils.display import truncate_text
from podscrape.utils.errors import AudioNotFoundError

logger = logging.getLogger(__name__)

# Anything shorter is treated as a clip, not a full episode
MIN_EPISODE_SECONDS = 300
SEARCH_CANDIDATES = 5
PREVIEW_LENGTH = 500


def select_candidate(podcast_name: str, candidates: Sequence[VideoInfo]) -> VideoInfo | None:
    """Pick the video most likely to be the full episode.

    Prefers a candidate longer than five minutes whose title or uploader
    contains the podcast name (case-insensitive); falls back to the first
    candidate longer than five minutes.
    """
    name = podcast_name.lower()
    full_length = [c for c in candidates if c.duration > MIN_EPISODE_SECONDS]

    for candidate in full_length:
        if name in candidate.title.lower() or name in candidate.uploader.lower():
            logger.info(
                "Found match: '%s' by %s (%d min)",
                candidate.title,
                candidate.uploader,
                candidate.duration_minutes,
            )
            return candidate

    if full_length:
        fallback = full_length[0]
        logger.warning(
            "No name match, using '%s' (%d min)", fallback.title, fallback.duration_minutes
        )
        return fallback

    return None


def audio_filename(podcast_name: str) -> str:
    """Temp filename for a direct download: ``<podcast slug>-<epoch ms>.mp3``."""
    slug = re.sub(r"[^a-z0-9]", "-", podcast_name, flags=re.IGNORECASE)
    return f"{slug}-{int(time.time() * 1000)}.mp3"


class EpisodeScraper:
    """Acquire, transcribe, and file one episode."""

    def __init__(
        self,
        store: EpisodeStore,
        transcriber: DeepgramTranscriber,
        youtube: YouTubeClient,
        direct_downloader: DirectAudioDownloader,
    ):
        self.store = store
        self.transcriber = transcriber
        self.youtube = youtube
        self.direct_downloader = direct_downloader

    async def acquire_audio(self, info: EpisodeInfo) -> AudioAcquisition:
        """Obtain a local audio file for the episode.

        Raises:
            AudioNotFoundError: If no source yields audio
            AudioDownloadError: If the chosen YouTube video fails to download
        """
        if info.video_url:
            downloaded = await self.youtube.download(info.video_url)
            return AudioAcquisition(audio_path=downloaded.audio_path, source="youtube")

        if info.audio_url:
            try:
                logger.info("Attempting download from RSS feed: %s", info.audio_url)
                audio_path = await self.direct_downloader.download(
                    info.audio_url, audio_filename(info.podcast_name)
                )
                return AudioAcquisition(audio_path=audio_path, source="rss")
            except Exception as e:
                logger.warning("RSS download failed (%s); trying YouTube", e)
        else:
            logger.info("No audio URL for '%s'; trying YouTube", info.title)

        video_url = await self._search_youtube(info.podcast_name, info.title)
        if video_url is None:
            raise AudioNotFoundError(f'Could not find episode on YouTube: "{info.title}"')

        downloaded = await self.youtube.download(video_url)
        return AudioAcquisition(audio_path=downloaded.audio_path, source="youtube")

    async def _search_youtube(self, podcast_name: str, title: str) -> str | None:
        query = f"{podcast_name} {title}"
        logger.info("Searching YouTube for: %s", query)

        candidates = await self.youtube.search(query, SEARCH_CANDIDATES)
        chosen = select_candidate(podcast_name, candidates)
        return chosen.url if chosen else None

    async def scrape(self, info: EpisodeInfo) -> ScrapeResult:
        """Acquire audio, transcribe it, and save the transcript.

        The temp audio file is removed only after the transcript is saved. On
        failure it is kept so ``podscrape transcribe`` can retry without a
        new download.
        """
        logger.info("Scraping '%s' (%s)", info.title, info.podcast_name)

        acquisition = await self.acquire_audio(info)
        result = await self.transcribe_audio(info, acquisition)
        self.store.cleanup_temp_file(acquisition.audio_path)
        return result

    async def transcribe_audio(
        self, info: EpisodeInfo, acquisition: AudioAcquisition
    ) -> ScrapeResult:
        """Transcribe an audio file already on disk and save the transcript.

        The audio file is left in place.
        """
        try:
            transcription = await self.transcriber.transcribe(acquisition.audio_path)
            transcript_path = self.store.save_transcript(
                info.podcast_name, info.title, info.episode_date, transcription.text
            )
        except Exception:
            logger.warning("Audio kept for retry: %s", acquisition.audio_path)
            raise

        logger.info("Scraped '%s' (source: %s)", info.title, acquisition.source)
        return ScrapeResult(
            transcript_path=transcript_path,
            transcript_preview=truncate_text(transcription.text, PREVIEW_LENGTH),
            word_count=transcription.word_count,
            source=acquisition.source,
        )
