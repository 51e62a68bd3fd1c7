"""MCP server and its tool handlers."""

from podscrape.server.app import create_server, run_server
from podscrape.server.tools import PodcastTools

__all__ = ["PodcastTools", "create_server", "run_server"]
