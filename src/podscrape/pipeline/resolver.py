"""Turn a scrape query into episode metadata without downloading audio."""

import logging

from podscrape.audio.youtube import YouTubeClient
from podscrape.feeds.parser import RSSParser
from podscrape.pipeline.models import EpisodeInfo
from podscrape.utils.datetime import today_slug
from podscrape.utils.errors import AudioNotFoundError, ValidationError
from podscrape.utils.url_metadata import QueryKind, classify_query

logger = logging.getLogger(__name__)


class QueryResolver:
    """Resolve a YouTube URL, feed URL, audio URL, or search text to an episode.

    Caller-supplied podcast name, title, and date always win over detected
    values.
    """

    def __init__(self, rss_parser: RSSParser, youtube: YouTubeClient):
        self.rss_parser = rss_parser
        self.youtube = youtube

    async def resolve(
        self,
        query: str,
        podcast_name: str | None = None,
        episode_title: str | None = None,
        episode_date: str | None = None,
    ) -> EpisodeInfo:
        """Resolve ``query``.

        Raises:
            ValidationError: Feed without audio, or an audio URL without a
                podcast name and episode title
            AudioNotFoundError: Search text with no YouTube results
            FetchError: Feed or video metadata could not be fetched
        """
        kind = classify_query(query)
        logger.debug("Query '%s' classified as %s", query, kind.value)

        if kind is QueryKind.YOUTUBE:
            return await self._from_video(query, podcast_name, episode_title, episode_date)

        if kind is QueryKind.FEED:
            return await self._from_feed(query, podcast_name, episode_title, episode_date)

        if kind is QueryKind.AUDIO:
            if not podcast_name or not episode_title:
                raise ValidationError(
                    "When using a direct audio URL, you must provide podcast_name "
                    "and episode_title"
                )
            return EpisodeInfo(
                podcast_name=podcast_name,
                title=episode_title,
                episode_date=episode_date or today_slug(),
                audio_url=query,
            )

        results = await self.youtube.search(query, 1)
        if not results:
            raise AudioNotFoundError(f"No results found for: {query}")
        return await self._from_video(
            results[0].url, podcast_name, episode_title, episode_date
        )

    async def _from_video(
        self,
        url: str,
        podcast_name: str | None,
        episode_title: str | None,
        episode_date: str | None,
    ) -> EpisodeInfo:
        info = await self.youtube.get_info(url)
        return EpisodeInfo(
            podcast_name=podcast_name or info.uploader,
            title=episode_title or info.title,
            episode_date=episode_date or info.upload_date or today_slug(),
            video_url=url,
        )

    async def _from_feed(
        self,
        url: str,
        podcast_name: str | None,
        episode_title: str | None,
        episode_date: str | None,
    ) -> EpisodeInfo:
        feed = await self.rss_parser.fetch_feed(url)
        latest = feed.latest_episode

        if latest is None or not latest.audio_url:
            raise ValidationError("No episodes with audio found in the RSS feed")

        return EpisodeInfo(
            podcast_name=podcast_name or feed.title,
            title=episode_title or latest.title,
            episode_date=episode_date or latest.date_slug,
            audio_url=latest.audio_url,
        )
