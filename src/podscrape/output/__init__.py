"""Episode archive: transcript and summary files on disk."""

from podscrape.output.manager import EpisodeStore, sanitize_filename
from podscrape.output.markdown import MarkdownGenerator
from podscrape.output.models import EpisodePaths, EpisodeRecord, IncompleteEpisode

__all__ = [
    "EpisodeStore",
    "EpisodePaths",
    "EpisodeRecord",
    "IncompleteEpisode",
    "MarkdownGenerator",
    "sanitize_filename",
]
