"""Tool handlers behind the MCP server.

Each handler returns markdown text for the calling agent. Failures are raised
as ``PodscrapeError`` subclasses; the server layer turns them into in-band
error results.
"""

import json
import logging
from typing import Literal

from podscrape.audio.direct import DirectAudioDownloader
from podscrape.audio.youtube import YouTubeClient
from podscrape.config.schema import Settings
from podscrape.feeds.parser import RSSParser
from podscrape.output.manager import EpisodeStore
from podscrape.pipeline.resolver import QueryResolver
from podscrape.pipeline.scraper import EpisodeScraper
from podscrape.tracking.store import TrackingStore
from podscrape.transcription.deepgram import DeepgramTranscriber
from podscrape.utils.display import format_duration
from podscrape.utils.errors import (
    FetchError,
    NotFoundError,
    PodscrapeError,
    ValidationError,
)
from podscrape.utils.url_metadata import is_youtube_url

logger = logging.getLogger(__name__)

SearchSource = Literal["youtube", "rss", "all"]

RECENT_EPISODES = 5
SEARCH_RESULTS = 5


def _call(name: str, **kwargs: str) -> str:
    """Render a follow-up tool call hint."""
    args = ",\n".join(
        f"  {key}: {json.dumps(value, ensure_ascii=False)}" for key, value in kwargs.items()
    )
    return f"```\n{name}({{\n{args}\n}})\n```"


class PodcastTools:
    """Implements every tool the server exposes."""

    def __init__(
        self,
        store: EpisodeStore,
        tracking: TrackingStore,
        rss_parser: RSSParser,
        youtube: YouTubeClient,
        resolver: QueryResolver,
        scraper: EpisodeScraper,
    ):
        self.store = store
        self.tracking = tracking
        self.rss_parser = rss_parser
        self.youtube = youtube
        self.resolver = resolver
        self.scraper = scraper

    @classmethod
    def from_settings(cls, settings: Settings) -> "PodcastTools":
        """Wire up all components from one Settings object."""
        store = EpisodeStore(output_dir=settings.output_root, temp_dir=settings.temp_root)
        rss_parser = RSSParser(timeout=settings.http_timeout)
        youtube = YouTubeClient(output_dir=settings.temp_root)
        scraper = EpisodeScraper(
            store=store,
            transcriber=DeepgramTranscriber(
                settings.deepgram_api_key, model=settings.transcription_model
            ),
            youtube=youtube,
            direct_downloader=DirectAudioDownloader(
                output_dir=settings.temp_root, timeout=settings.http_timeout
            ),
        )
        return cls(
            store=store,
            tracking=TrackingStore(settings.tracking_path),
            rss_parser=rss_parser,
            youtube=youtube,
            resolver=QueryResolver(rss_parser, youtube),
            scraper=scraper,
        )

    async def scrape(
        self,
        query: str,
        podcast_name: str | None = None,
        episode_title: str | None = None,
        episode_date: str | None = None,
        force: bool = False,
    ) -> str:
        info = await self.resolver.resolve(query, podcast_name, episode_title, episode_date)
        header = (
            f"**Podcast:** {info.podcast_name}\n"
            f"**Episode:** {info.title}\n"
            f"**Date:** {info.episode_date}\n"
        )

        if not force and self.store.has_transcript(
            info.podcast_name, info.title, info.episode_date
        ):
            location = self.store.episode_dir(info.podcast_name, info.title, info.episode_date)
            if self.store.has_summary(info.podcast_name, info.title, info.episode_date):
                return (
                    "Episode already fully processed. Skipping.\n\n"
                    f"{header}**Location:** {location}\n\n"
                    "Both transcript and summary exist. To re-scrape, set `force: true`."
                )
            return (
                "Transcript already exists (no summary yet).\n\n"
                f"{header}**Location:** {location}\n\n"
                "Use `get_transcript` to read it, then `save_summary` after summarizing.\n"
                "To re-scrape, set `force: true`."
            )

        result = await self.scraper.scrape(info)

        return (
            "✓ Successfully transcribed!\n\n"
            f"{header}"
            f"**Source:** {result.source}\n"
            f"**Words:** ~{result.word_count:,}\n"
            f"**Transcript:** {result.transcript_path}\n\n"
            "---\n\n"
            f"**Preview:**\n{result.transcript_preview}\n\n"
            "---\n\n"
            "**Next steps:**\n"
            "1. Use `get_transcript` to read the full transcript\n"
            "2. Summarize the content\n"
            "3. Use `save_summary` to save your summary\n\n"
            + _call(
                "get_transcript",
                podcast_name=info.podcast_name,
                episode_title=info.title,
                episode_date=info.episode_date,
            )
        )

    async def get_transcript(
        self, podcast_name: str, episode_title: str, episode_date: str
    ) -> str:
        transcript = self.store.read_transcript(podcast_name, episode_title, episode_date)

        if transcript is None:
            raise NotFoundError(
                "Transcript not found for:\n"
                f"- Podcast: {podcast_name}\n"
                f"- Episode: {episode_title}\n"
                f"- Date: {episode_date}\n\n"
                "Use `scrape` to transcribe this episode first."
            )

        return (
            f"{transcript}\n---\n\n**After summarizing, save with:**\n"
            + _call(
                "save_summary",
                podcast_name=podcast_name,
                episode_title=episode_title,
                episode_date=episode_date,
                summary_text="YOUR_SUMMARY_HERE",
            )
        )

    async def save_summary(
        self, podcast_name: str, episode_title: str, episode_date: str, summary_text: str
    ) -> str:
        path = self.store.save_summary(podcast_name, episode_title, episode_date, summary_text)
        return (
            "✓ Summary saved!\n\n"
            f"**Podcast:** {podcast_name}\n"
            f"**Episode:** {episode_title}\n"
            f"**Date:** {episode_date}\n"
            f"**File:** {path}"
        )

    async def check_new_episodes(self) -> str:
        """List recent feed items without a transcript for each enabled podcast.

        "New" means no transcript on disk; last-checked bookkeeping is
        recorded but not used to decide.
        """
        podcasts = self.tracking.list_podcasts()
        if not podcasts:
            return "No podcasts are being tracked. Use `add_tracking` to add podcasts first."

        new_episodes: list[tuple[str, str, str, str]] = []
        errors: list[str] = []

        for podcast in podcasts:
            if not podcast.enabled:
                continue

            if is_youtube_url(podcast.feed_url):
                errors.append(
                    f"{podcast.name}: YouTube channel tracking not supported. "
                    "Use RSS feeds instead."
                )
                continue

            try:
                feed = await self.rss_parser.fetch_feed(podcast.feed_url)
            except PodscrapeError as e:
                logger.warning("Checking '%s' failed: %s", podcast.name, e)
                errors.append(f"{podcast.name}: {e}")
                continue

            for episode in feed.episodes[:RECENT_EPISODES]:
                if not episode.audio_url:
                    continue
                if not self.store.has_transcript(podcast.name, episode.title, episode.date_slug):
                    new_episodes.append(
                        (podcast.name, episode.title, episode.date_slug, episode.audio_url)
                    )

            latest = feed.latest_episode
            self.tracking.update_last_checked(podcast.id, latest.guid if latest else None)

        if not new_episodes and not errors:
            return (
                "✓ All caught up! No new episodes found across "
                f"{len(podcasts)} tracked podcast(s)."
            )

        lines = [f"## New Episodes Found: {len(new_episodes)}", ""]
        for index, (name, title, date, audio_url) in enumerate(new_episodes, 1):
            lines += [
                f"### {index}. {name}",
                f"- **Episode:** {title}",
                f"- **Date:** {date}",
                f"- **Audio URL:** {audio_url}",
                "",
            ]
        if new_episodes:
            lines += [
                "---",
                "",
                "To scrape an episode, call `scrape` with its audio URL as `query` "
                "and the podcast name, episode title, and date shown above.",
            ]
        if errors:
            lines += ["", "## Errors"] + [f"- {error}" for error in errors]

        return "\n".join(lines)

    async def list_incomplete(self) -> str:
        incomplete = self.store.find_incomplete_episodes()
        if not incomplete:
            return "✓ All episodes are complete! No missing summaries found."

        lines = [f"## Episodes Missing Summaries: {len(incomplete)}", ""]
        for index, episode in enumerate(incomplete, 1):
            lines += [
                f"### {index}. {episode.podcast_name}",
                f"- **Episode:** {episode.episode_title}",
                f"- **Date:** {episode.episode_date}",
                f"- **Transcript:** {episode.transcript_path}",
                "",
            ]
        lines += [
            "---",
            "",
            "Use `get_transcript` to read each transcript, summarize it, "
            "then `save_summary` to save.",
        ]
        return "\n".join(lines)

    async def search(self, query: str, source: SearchSource = "all") -> str:
        """Discover episodes on YouTube and/or in an RSS feed. Never writes."""
        lines: list[str] = []

        if source in ("youtube", "all"):
            try:
                videos = await self.youtube.search(query, SEARCH_RESULTS)
            except PodscrapeError as e:
                lines += [f"YouTube search error: {e}", ""]
            else:
                if videos:
                    lines += ["## YouTube Results", ""]
                    for index, video in enumerate(videos, 1):
                        lines += [
                            f"{index}. **{video.title}**",
                            f"   - Channel: {video.uploader}",
                            f"   - Date: {video.upload_date or 'Unknown'}",
                            f"   - Duration: {format_duration(video.duration)}",
                            f"   - URL: {video.url}",
                            "",
                        ]

        if source in ("rss", "all"):
            if query.startswith("http"):
                try:
                    feed = await self.rss_parser.fetch_feed(query)
                except PodscrapeError as e:
                    lines += [f"RSS parse error: {e}", ""]
                else:
                    lines += ["## RSS Feed Results", "", f"**Podcast:** {feed.title}", ""]
                    lines += ["**Recent Episodes:**", ""]
                    for index, episode in enumerate(feed.episodes[:SEARCH_RESULTS], 1):
                        lines += [
                            f"{index}. **{episode.title}**",
                            f"   - Date: {episode.published or 'Unknown'}",
                            f"   - Audio URL: {episode.audio_url or 'Not available'}",
                            "",
                        ]
            elif source == "rss":
                lines += [
                    "**Tip:** Provide a direct RSS feed URL to parse it.",
                    "Find podcast RSS feeds at: https://getrssfeed.com/",
                    "",
                ]

        if not lines:
            return f'No results found for: "{query}"'
        return "\n".join(lines).rstrip()

    async def add_tracking(self, podcast_name: str, feed_url: str) -> str:
        if is_youtube_url(feed_url):
            raise ValidationError(
                "YouTube URLs are not supported for tracking. Please provide an RSS feed URL.\n\n"
                "To find a podcast's RSS feed:\n"
                "- Check the podcast's website\n"
                "- Use https://getrssfeed.com/\n"
                '- Look for the "RSS" link on Apple Podcasts'
            )

        try:
            feed = await self.rss_parser.fetch_feed(feed_url)
        except FetchError as e:
            raise FetchError(
                f"Failed to validate RSS feed: {e}\n\nMake sure the URL is a valid RSS feed."
            ) from e

        podcast = self.tracking.add(podcast_name, feed_url)
        return (
            "✓ Added podcast to tracking list!\n\n"
            f"**Podcast:** {podcast.name}\n"
            f"**Feed URL:** {podcast.feed_url}\n"
            f"**Episodes in feed:** {len(feed.episodes)}\n\n"
            "Use `check_new_episodes` to find new episodes to scrape."
        )

    async def list_tracking(self) -> str:
        podcasts = self.tracking.list_podcasts()
        if not podcasts:
            return (
                "No podcasts are currently being tracked.\n\n"
                "Use `add_tracking` to add a podcast."
            )

        entries = []
        for index, podcast in enumerate(podcasts, 1):
            last_checked = podcast.last_checked.isoformat() if podcast.last_checked else "Never"
            status = "" if podcast.enabled else " (disabled)"
            entries.append(
                f"{index}. **{podcast.name}**{status}\n"
                f"   - Feed: {podcast.feed_url}\n"
                f"   - Last Checked: {last_checked}"
            )

        return f"## Tracked Podcasts ({len(podcasts)})\n\n" + "\n\n".join(entries)

    async def remove_tracking(self, podcast_name: str) -> str:
        if self.tracking.remove(podcast_name):
            return f'✓ Removed "{podcast_name}" from tracking list.'
        return f'Podcast "{podcast_name}" not found in tracking list.'
