"""Podscrape - podcast scraping and transcription over MCP."""

__version__ = "0.1.0"
