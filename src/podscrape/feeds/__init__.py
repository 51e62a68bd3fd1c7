"""Feed fetching and RSS parsing for podscrape."""

from podscrape.feeds.models import Episode, Feed
from podscrape.feeds.parser import RSSParser

__all__ = ["Episode", "Feed", "RSSParser"]
