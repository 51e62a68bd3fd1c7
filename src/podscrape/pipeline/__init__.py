"""Scrape pipeline: resolve a query, acquire audio, transcribe, file."""

from podscrape.pipeline.models import AudioAcquisition, EpisodeInfo, ScrapeResult
from podscrape.pipeline.resolver import QueryResolver
from podscrape.pipeline.scraper import EpisodeScraper, select_candidate

__all__ = [
    "AudioAcquisition",
    "EpisodeInfo",
    "EpisodeScraper",
    "QueryResolver",
    "ScrapeResult",
    "select_candidate",
]
