"""Tracked-podcast list for new-episode checks."""

from podscrape.tracking.models import TrackedPodcast, TrackingData
from podscrape.tracking.store import TrackingStore

__all__ = ["TrackedPodcast", "TrackingData", "TrackingStore"]
