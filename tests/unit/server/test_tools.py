"""Tests for the MCP tool handlers."""

from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from podscrape.audio.models import VideoInfo
from podscrape.config.schema import Settings
from podscrape.feeds.models import Episode, Feed
from podscrape.output.manager import EpisodeStore
from podscrape.pipeline import EpisodeInfo, ScrapeResult
from podscrape.server.tools import PodcastTools
from podscrape.tracking.store import TrackingStore
from podscrape.utils.errors import FeedFetchError, FetchError, NotFoundError, ValidationError

FEED = Feed(
    title="The Show",
    episodes=[
        Episode(
            title=f"Episode {n}",
            published_date=date(2025, 1, n),
            audio_url=f"https://cdn.example.com/ep{n}.mp3",
            guid=f"ep-{n}",
        )
        for n in range(7, 0, -1)
    ],
)


@pytest.fixture
def store(tmp_path: Path) -> EpisodeStore:
    return EpisodeStore(output_dir=tmp_path / "podcasts", temp_dir=tmp_path / "temp")


@pytest.fixture
def tracking(tmp_path: Path) -> TrackingStore:
    return TrackingStore(tmp_path / "tracking.json")


@pytest.fixture
def rss_parser() -> MagicMock:
    parser = MagicMock()
    parser.fetch_feed = AsyncMock(return_value=FEED)
    return parser


@pytest.fixture
def youtube() -> MagicMock:
    client = MagicMock()
    client.search = AsyncMock(
        return_value=[
            VideoInfo(
                id="abc",
                title="The Show Episode 7",
                uploader="The Show",
                upload_date="2025-01-07",
                duration=3725,
                url="https://www.youtube.com/watch?v=abc",
            )
        ]
    )
    return client


@pytest.fixture
def resolver() -> MagicMock:
    mock = MagicMock()
    mock.resolve = AsyncMock(
        return_value=EpisodeInfo(
            podcast_name="The Show",
            title="Episode 7",
            episode_date="2025-01-07",
            audio_url="https://cdn.example.com/ep7.mp3",
        )
    )
    return mock


@pytest.fixture
def scraper(store: EpisodeStore) -> MagicMock:
    async def fake_scrape(info: EpisodeInfo) -> ScrapeResult:
        path = store.save_transcript(info.podcast_name, info.title, info.episode_date, "words")
        return ScrapeResult(
            transcript_path=path, transcript_preview="words", word_count=1, source="rss"
        )

    mock = MagicMock()
    mock.scrape = AsyncMock(side_effect=fake_scrape)
    return mock


@pytest.fixture
def tools(
    store: EpisodeStore,
    tracking: TrackingStore,
    rss_parser: MagicMock,
    youtube: MagicMock,
    resolver: MagicMock,
    scraper: MagicMock,
) -> PodcastTools:
    return PodcastTools(
        store=store,
        tracking=tracking,
        rss_parser=rss_parser,
        youtube=youtube,
        resolver=resolver,
        scraper=scraper,
    )


def test_from_settings(settings: Settings) -> None:
    tools = PodcastTools.from_settings(settings)

    assert tools.store.output_dir == settings.output_root
    assert tools.store.temp_dir == settings.temp_root
    assert tools.tracking.tracking_file == settings.tracking_path
    assert tools.scraper.transcriber.api_key == "test-key"


class TestScrape:
    """Tests for the scrape tool."""

    @pytest.mark.asyncio
    async def test_success(self, tools: PodcastTools, scraper: MagicMock) -> None:
        text = await tools.scrape("https://example.com/rss")

        assert "Successfully transcribed" in text
        assert "**Source:** rss" in text
        assert "transcript.md" in text
        assert "get_transcript" in text
        scraper.scrape.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_passes_overrides_to_resolver(
        self, tools: PodcastTools, resolver: MagicMock
    ) -> None:
        await tools.scrape("https://cdn.example.com/ep.mp3", "Show", "Ep", "2025-01-02")

        resolver.resolve.assert_awaited_once_with(
            "https://cdn.example.com/ep.mp3", "Show", "Ep", "2025-01-02"
        )

    @pytest.mark.asyncio
    async def test_existing_transcript_skips(
        self, tools: PodcastTools, store: EpisodeStore, scraper: MagicMock
    ) -> None:
        store.save_transcript("The Show", "Episode 7", "2025-01-07", "old")

        text = await tools.scrape("https://example.com/rss")

        assert "Transcript already exists (no summary yet)" in text
        scraper.scrape.assert_not_called()

    @pytest.mark.asyncio
    async def test_fully_processed_skips(
        self, tools: PodcastTools, store: EpisodeStore, scraper: MagicMock
    ) -> None:
        store.save_transcript("The Show", "Episode 7", "2025-01-07", "old")
        store.save_summary("The Show", "Episode 7", "2025-01-07", "sum")

        text = await tools.scrape("https://example.com/rss")

        assert "already fully processed" in text
        scraper.scrape.assert_not_called()

    @pytest.mark.asyncio
    async def test_force_rescrapes(
        self, tools: PodcastTools, store: EpisodeStore, scraper: MagicMock
    ) -> None:
        store.save_transcript("The Show", "Episode 7", "2025-01-07", "old")
        store.save_summary("The Show", "Episode 7", "2025-01-07", "sum")

        text = await tools.scrape("https://example.com/rss", force=True)

        assert "Successfully transcribed" in text
        scraper.scrape.assert_awaited_once()


class TestTranscriptAndSummary:
    """Tests for get_transcript and save_summary."""

    @pytest.mark.asyncio
    async def test_get_transcript(self, tools: PodcastTools, store: EpisodeStore) -> None:
        store.save_transcript("The Show", "Episode 7", "2025-01-07", "full body")

        text = await tools.get_transcript("The Show", "Episode 7", "2025-01-07")

        assert "full body" in text
        assert "save_summary" in text

    @pytest.mark.asyncio
    async def test_call_hint_escapes_quotes(
        self, tools: PodcastTools, store: EpisodeStore
    ) -> None:
        store.save_transcript("The Show", 'The "Best" Episode', "2025-01-07", "body")

        text = await tools.get_transcript("The Show", 'The "Best" Episode', "2025-01-07")

        assert 'episode_title: "The \\"Best\\" Episode"' in text
        assert 'podcast_name: "The Show"' in text

    @pytest.mark.asyncio
    async def test_get_missing_transcript(self, tools: PodcastTools) -> None:
        with pytest.raises(NotFoundError, match="Transcript not found"):
            await tools.get_transcript("The Show", "Nope", "2025-01-07")

    @pytest.mark.asyncio
    async def test_save_summary(self, tools: PodcastTools, store: EpisodeStore) -> None:
        text = await tools.save_summary("The Show", "Episode 7", "2025-01-07", "- key point")

        assert "Summary saved" in text
        assert store.has_summary("The Show", "Episode 7", "2025-01-07")

    @pytest.mark.asyncio
    async def test_list_incomplete(self, tools: PodcastTools, store: EpisodeStore) -> None:
        assert "All episodes are complete" in await tools.list_incomplete()

        store.save_transcript("The Show", "Episode 7", "2025-01-07", "t")
        text = await tools.list_incomplete()

        assert "Episodes Missing Summaries: 1" in text
        assert "Episode 7" in text

        await tools.save_summary("The Show", "Episode 7", "2025-01-07", "s")
        assert "All episodes are complete" in await tools.list_incomplete()


class TestCheckNewEpisodes:
    """Tests for check_new_episodes."""

    @pytest.mark.asyncio
    async def test_nothing_tracked(self, tools: PodcastTools) -> None:
        assert "No podcasts are being tracked" in await tools.check_new_episodes()

    @pytest.mark.asyncio
    async def test_only_recent_untranscribed(
        self, tools: PodcastTools, tracking: TrackingStore, store: EpisodeStore
    ) -> None:
        tracking.add("The Show", "https://example.com/rss")
        store.save_transcript("The Show", "Episode 7", "2025-01-07", "done")

        text = await tools.check_new_episodes()

        assert "New Episodes Found: 4" in text
        assert "Episode 7" not in text
        for n in (6, 5, 4, 3):
            assert f"Episode {n}" in text
        assert "Episode 2" not in text

    @pytest.mark.asyncio
    async def test_records_last_checked(
        self, tools: PodcastTools, tracking: TrackingStore
    ) -> None:
        tracking.add("The Show", "https://example.com/rss")

        await tools.check_new_episodes()

        podcast = tracking.list_podcasts()[0]
        assert podcast.last_checked is not None
        assert podcast.last_episode_guid == "ep-7"

    @pytest.mark.asyncio
    async def test_all_caught_up(
        self, tools: PodcastTools, tracking: TrackingStore, store: EpisodeStore
    ) -> None:
        tracking.add("The Show", "https://example.com/rss")
        for n in range(3, 8):
            store.save_transcript("The Show", f"Episode {n}", f"2025-01-0{n}", "t")

        assert "All caught up" in await tools.check_new_episodes()

    @pytest.mark.asyncio
    async def test_errors_collected_per_podcast(
        self,
        tools: PodcastTools,
        tracking: TrackingStore,
        rss_parser: MagicMock,
    ) -> None:
        tracking.add("Broken", "https://broken.example.com/rss")
        tracking.add("Tube", "https://www.youtube.com/@channel")
        tracking.add("The Show", "https://example.com/rss")

        async def fetch(url: str) -> Feed:
            if "broken" in url:
                raise FeedFetchError("Failed to fetch feed: 500")
            return FEED

        rss_parser.fetch_feed.side_effect = fetch

        text = await tools.check_new_episodes()

        assert "New Episodes Found: 5" in text
        assert "Broken: Failed to fetch feed: 500" in text
        assert "Tube: YouTube channel tracking not supported" in text

    @pytest.mark.asyncio
    async def test_disabled_podcasts_skipped(
        self, tools: PodcastTools, tracking: TrackingStore, rss_parser: MagicMock
    ) -> None:
        tracking.add("The Show", "https://example.com/rss")
        data = tracking.load()
        data.podcasts[0].enabled = False
        tracking.save(data)

        text = await tools.check_new_episodes()

        assert "All caught up" in text
        rss_parser.fetch_feed.assert_not_called()


class TestSearch:
    """Tests for the search tool."""

    @pytest.mark.asyncio
    async def test_youtube(self, tools: PodcastTools, rss_parser: MagicMock) -> None:
        text = await tools.search("the show", "youtube")

        assert "## YouTube Results" in text
        assert "The Show Episode 7" in text
        assert "62m 5s" in text
        rss_parser.fetch_feed.assert_not_called()

    @pytest.mark.asyncio
    async def test_rss_url(self, tools: PodcastTools, youtube: MagicMock) -> None:
        text = await tools.search("https://example.com/rss", "rss")

        assert "## RSS Feed Results" in text
        assert "**Podcast:** The Show" in text
        assert "Episode 3" in text
        assert "Episode 2" not in text
        youtube.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_rss_needs_url(self, tools: PodcastTools, rss_parser: MagicMock) -> None:
        text = await tools.search("the show", "rss")

        assert "Provide a direct RSS feed URL" in text
        rss_parser.fetch_feed.assert_not_called()

    @pytest.mark.asyncio
    async def test_all_with_text_query_only_searches_youtube(
        self, tools: PodcastTools, rss_parser: MagicMock
    ) -> None:
        text = await tools.search("the show")

        assert "## YouTube Results" in text
        assert "Tip" not in text
        rss_parser.fetch_feed.assert_not_called()

    @pytest.mark.asyncio
    async def test_source_errors_reported_inline(
        self, tools: PodcastTools, youtube: MagicMock, rss_parser: MagicMock
    ) -> None:
        youtube.search.side_effect = FetchError("YouTube search failed")
        rss_parser.fetch_feed.side_effect = FeedFetchError("feed down")

        text = await tools.search("https://example.com/rss")

        assert "YouTube search error: YouTube search failed" in text
        assert "RSS parse error: feed down" in text

    @pytest.mark.asyncio
    async def test_no_results(self, tools: PodcastTools, youtube: MagicMock) -> None:
        youtube.search.return_value = []

        assert await tools.search("zzz", "youtube") == 'No results found for: "zzz"'


class TestTracking:
    """Tests for the tracking tools."""

    @pytest.mark.asyncio
    async def test_add_and_list(self, tools: PodcastTools, tracking: TrackingStore) -> None:
        text = await tools.add_tracking("The Show", "https://example.com/rss")

        assert "Added podcast to tracking list" in text
        assert "**Episodes in feed:** 7" in text
        assert [p.name for p in tracking.list_podcasts()] == ["The Show"]

        listing = await tools.list_tracking()
        assert "Tracked Podcasts (1)" in listing
        assert "https://example.com/rss" in listing
        assert "Last Checked: Never" in listing

    @pytest.mark.asyncio
    async def test_add_rejects_youtube(
        self, tools: PodcastTools, tracking: TrackingStore
    ) -> None:
        with pytest.raises(ValidationError, match="YouTube URLs are not supported"):
            await tools.add_tracking("Tube", "https://www.youtube.com/@channel")

        assert tracking.list_podcasts() == []

    @pytest.mark.asyncio
    async def test_add_invalid_feed(
        self, tools: PodcastTools, tracking: TrackingStore, rss_parser: MagicMock
    ) -> None:
        rss_parser.fetch_feed.side_effect = FeedFetchError("HTTP 404")

        with pytest.raises(FetchError, match="Failed to validate RSS feed"):
            await tools.add_tracking("Gone", "https://example.com/gone.xml")

        assert tracking.list_podcasts() == []

    @pytest.mark.asyncio
    async def test_list_empty(self, tools: PodcastTools) -> None:
        assert "No podcasts are currently being tracked" in await tools.list_tracking()

    @pytest.mark.asyncio
    async def test_remove(self, tools: PodcastTools, tracking: TrackingStore) -> None:
        tracking.add("The Show", "https://example.com/rss")

        assert "Removed" in await tools.remove_tracking("the show")
        assert "not found in tracking list" in await tools.remove_tracking("the show")
