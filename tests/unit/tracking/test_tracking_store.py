"""Tests for the tracked-podcast store."""

import json
import logging
from pathlib import Path

import pytest

from podscrape.tracking import TrackedPodcast, TrackingStore


@pytest.fixture
def tracking_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tracking.json"


@pytest.fixture
def store(tracking_file: Path) -> TrackingStore:
    return TrackingStore(tracking_file)


class TestLoad:
    """Tests for loading the tracking file."""

    def test_missing_file_is_empty(self, store: TrackingStore) -> None:
        assert store.list_podcasts() == []

    def test_corrupt_file_is_empty(
        self, store: TrackingStore, tracking_file: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        tracking_file.parent.mkdir(parents=True)
        tracking_file.write_text("{not json")

        with caplog.at_level(logging.WARNING):
            assert store.list_podcasts() == []

        assert "unreadable tracking file" in caplog.text

    def test_wrong_shape_is_empty(self, store: TrackingStore, tracking_file: Path) -> None:
        tracking_file.parent.mkdir(parents=True)
        tracking_file.write_text(json.dumps({"podcasts": [{"name": "no url"}]}))

        assert store.list_podcasts() == []


class TestAdd:
    """Tests for adding podcasts."""

    def test_add_persists(self, store: TrackingStore, tracking_file: Path) -> None:
        podcast = store.add("The Show", "https://example.com/rss")

        assert podcast.enabled
        assert podcast.last_checked is None
        assert len(podcast.id) == 16

        data = json.loads(tracking_file.read_text())
        assert data["podcasts"][0]["name"] == "The Show"
        assert data["podcasts"][0]["feed_url"] == "https://example.com/rss"

    def test_duplicate_name_is_case_insensitive(self, store: TrackingStore) -> None:
        first = store.add("The Show", "https://example.com/rss")
        second = store.add("the show", "https://other.example.com/rss")

        assert second.id == first.id
        assert len(store.list_podcasts()) == 1

    def test_duplicate_feed_url(self, store: TrackingStore) -> None:
        first = store.add("The Show", "https://example.com/rss")
        second = store.add("Renamed Show", "https://example.com/rss")

        assert second.id == first.id
        assert second.name == "The Show"
        assert len(store.list_podcasts()) == 1

    def test_order_preserved(self, store: TrackingStore) -> None:
        store.add("B Show", "https://b.example.com/rss")
        store.add("A Show", "https://a.example.com/rss")

        assert [p.name for p in store.list_podcasts()] == ["B Show", "A Show"]


class TestSave:
    """Tests for rewriting the tracking file."""

    def test_no_temp_files_left(self, store: TrackingStore, tracking_file: Path) -> None:
        store.add("The Show", "https://ex.com/rss")
        store.add("Other", "https://other.com/rss")

        assert [p.name for p in tracking_file.parent.iterdir()] == ["tracking.json"]

    def test_failed_write_keeps_previous_file(
        self, store: TrackingStore, tracking_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        store.add("The Show", "https://ex.com/rss")
        before = tracking_file.read_text()

        def fail_fsync(fd: int) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("podscrape.tracking.store.os.fsync", fail_fsync)

        with pytest.raises(OSError, match="disk full"):
            store.add("Other", "https://other.com/rss")

        assert tracking_file.read_text() == before
        assert [p.name for p in tracking_file.parent.iterdir()] == ["tracking.json"]


class TestRemove:
    """Tests for removing podcasts."""

    def test_remove_case_insensitive(self, store: TrackingStore) -> None:
        store.add("The Show", "https://example.com/rss")

        assert store.remove("THE SHOW")
        assert store.list_podcasts() == []

    def test_remove_missing(self, store: TrackingStore) -> None:
        store.add("The Show", "https://example.com/rss")

        assert not store.remove("Other Show")
        assert len(store.list_podcasts()) == 1

    def test_add_after_remove(self, store: TrackingStore) -> None:
        store.add("The Show", "https://example.com/rss")
        store.remove("The Show")

        store.add("The Show", "https://example.com/rss")

        assert len(store.list_podcasts()) == 1


class TestUpdateLastChecked:
    """Tests for last-checked bookkeeping."""

    def test_update(self, store: TrackingStore) -> None:
        podcast = store.add("The Show", "https://example.com/rss")

        store.update_last_checked(podcast.id, "ep-2")

        updated = store.list_podcasts()[0]
        assert updated.last_checked is not None
        assert updated.last_checked.tzinfo is not None
        assert updated.last_episode_guid == "ep-2"

    def test_update_without_guid_keeps_previous(self, store: TrackingStore) -> None:
        podcast = store.add("The Show", "https://example.com/rss")
        store.update_last_checked(podcast.id, "ep-1")

        store.update_last_checked(podcast.id)

        assert store.list_podcasts()[0].last_episode_guid == "ep-1"

    def test_unknown_id_is_ignored(self, store: TrackingStore, tracking_file: Path) -> None:
        store.update_last_checked("missing")

        assert not tracking_file.exists()


def test_matches() -> None:
    podcast = TrackedPodcast(name="The Show", feed_url="https://example.com/rss")

    assert podcast.matches("the show")
    assert podcast.matches("Other", "https://example.com/rss")
    assert not podcast.matches("Other")
