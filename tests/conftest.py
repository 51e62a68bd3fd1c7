"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from podscrape.config.manager import ENV_VARS
from podscrape.config.schema import Settings

SAMPLE_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
  <channel>
    <title>The Test Show</title>
    <link>https://example.com/show</link>
    <description>A podcast used in tests</description>
    <item>
      <title>Episode 2: Latest</title>
      <description>The newest episode</description>
      <pubDate>Tue, 07 Jan 2025 10:00:00 GMT</pubDate>
      <guid>ep-2</guid>
      <enclosure url="https://cdn.example.com/ep2.mp3" length="1000" type="audio/mpeg"/>
      <itunes:duration>01:02:03</itunes:duration>
    </item>
    <item>
      <title>Episode 1: First</title>
      <description>The first episode</description>
      <pubDate>Wed, 01 Jan 2025 10:00:00 GMT</pubDate>
      <guid>ep-1</guid>
      <enclosure url="https://cdn.example.com/ep1.mp3" length="1000" type="audio/mpeg"/>
    </item>
    <item>
      <title>Trailer</title>
      <pubDate>Mon, 30 Dec 2024 10:00:00 GMT</pubDate>
      <guid>trailer</guid>
    </item>
  </channel>
</rss>
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real environment settings out of tests."""
    for env_name in ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo setup_logging from CLI tests so caplog sees package records."""
    yield
    logger = logging.getLogger("podscrape")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_feed_xml() -> bytes:
    """RSS document with two audio episodes and one item without audio."""
    return SAMPLE_FEED


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every path into a temporary directory."""
    return Settings(
        output_directory=tmp_path / "podcasts",
        temp_directory=tmp_path / "temp",
        tracking_file=tmp_path / "data" / "tracking.json",
        deepgram_api_key="test-key",
    )
