"""FastMCP server exposing the podcast tools."""

import logging
from collections.abc import Awaitable
from typing import Literal

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from podscrape.config.schema import Settings
from podscrape.server.tools import PodcastTools, SearchSource
from podscrape.utils.errors import PodscrapeError

logger = logging.getLogger(__name__)

SERVER_NAME = "podscrape"

INSTRUCTIONS = """\
Podcast scraping and transcription tools.

Typical flow: `scrape` an episode, read it with `get_transcript`, summarize it,
then store the summary with `save_summary`. Use `add_tracking` and
`check_new_episodes` to follow podcasts over time, and `list_incomplete` to
find transcripts that still need a summary.
"""

Transport = Literal["stdio", "http"]


async def _guard(tool: str, call: Awaitable[str]) -> str:
    """Await a handler, reporting failures as in-band tool errors."""
    try:
        return await call
    except PodscrapeError as e:
        logger.warning("%s failed: %s", tool, e)
        raise ToolError(str(e)) from e
    except Exception as e:
        logger.error("%s failed unexpectedly: %s", tool, e, exc_info=True)
        raise ToolError(f"Error: {e}") from e


def create_server(settings: Settings, tools: PodcastTools | None = None) -> FastMCP:
    """Build the MCP server with all tools registered."""
    handlers = tools or PodcastTools.from_settings(settings)
    mcp = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool()
    async def scrape(
        query: str,
        podcast_name: str | None = None,
        episode_title: str | None = None,
        episode_date: str | None = None,
        force: bool = False,
    ) -> str:
        """Scrape and transcribe a podcast episode.

        Args:
            query: YouTube URL, RSS feed URL, direct audio URL, or search text
            podcast_name: Podcast name (required for direct audio URLs)
            episode_title: Episode title (required for direct audio URLs)
            episode_date: Episode date as YYYY-MM-DD (defaults to the detected date or today)
            force: Re-scrape even if a transcript already exists
        """
        return await _guard(
            "scrape",
            handlers.scrape(query, podcast_name, episode_title, episode_date, force),
        )

    @mcp.tool()
    async def get_transcript(podcast_name: str, episode_title: str, episode_date: str) -> str:
        """Read a saved transcript.

        Args:
            podcast_name: Podcast name
            episode_title: Episode title
            episode_date: Episode date (YYYY-MM-DD)
        """
        return await _guard(
            "get_transcript",
            handlers.get_transcript(podcast_name, episode_title, episode_date),
        )

    @mcp.tool()
    async def save_summary(
        podcast_name: str, episode_title: str, episode_date: str, summary_text: str
    ) -> str:
        """Save a summary for an episode.

        Args:
            podcast_name: Podcast name
            episode_title: Episode title
            episode_date: Episode date (YYYY-MM-DD)
            summary_text: Summary body in markdown
        """
        return await _guard(
            "save_summary",
            handlers.save_summary(podcast_name, episode_title, episode_date, summary_text),
        )

    @mcp.tool()
    async def check_new_episodes() -> str:
        """List recent episodes of tracked podcasts that have no transcript yet."""
        return await _guard("check_new_episodes", handlers.check_new_episodes())

    @mcp.tool()
    async def list_incomplete() -> str:
        """List episodes that have a transcript but no summary."""
        return await _guard("list_incomplete", handlers.list_incomplete())

    @mcp.tool()
    async def search(query: str, source: SearchSource = "all") -> str:
        """Search for podcast episodes on YouTube or in an RSS feed.

        Args:
            query: Search text, or an RSS feed URL for source "rss"
            source: "youtube", "rss", or "all"
        """
        return await _guard("search", handlers.search(query, source))

    @mcp.tool()
    async def add_tracking(podcast_name: str, feed_url: str) -> str:
        """Start tracking a podcast by its RSS feed.

        Args:
            podcast_name: Podcast name
            feed_url: RSS feed URL
        """
        return await _guard("add_tracking", handlers.add_tracking(podcast_name, feed_url))

    @mcp.tool()
    async def list_tracking() -> str:
        """List tracked podcasts."""
        return await _guard("list_tracking", handlers.list_tracking())

    @mcp.tool()
    async def remove_tracking(podcast_name: str) -> str:
        """Stop tracking a podcast.

        Args:
            podcast_name: Podcast name (case-insensitive)
        """
        return await _guard("remove_tracking", handlers.remove_tracking(podcast_name))

    return mcp


def run_server(
    settings: Settings,
    transport: Transport = "stdio",
    host: str = "127.0.0.1",
    port: int = 9000,
) -> None:
    """Run the server until the transport closes."""
    tools = PodcastTools.from_settings(settings)
    # Leftovers from an interrupted run
    tools.store.cleanup_temp_directory()

    mcp = create_server(settings, tools)
    logger.info("Starting %s server (%s transport)", SERVER_NAME, transport)

    if transport == "http":
        mcp.run(transport="http", host=host, port=port)
    else:
        mcp.run(transport="stdio")
