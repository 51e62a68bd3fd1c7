"""Episode archive on disk.

Layout::

    <output_dir>/<podcast name>/<YYYY-MM-DD> - <episode title>/
        transcript.md
        summary.md

The filesystem is the only index. Existence checks and listings scan the
directory tree on every call.
"""

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path

from .markdown import MarkdownGenerator
from .models import EpisodePaths, EpisodeRecord, IncompleteEpisode

logger = logging.getLogger(__name__)

TRANSCRIPT_FILE = "transcript.md"
SUMMARY_FILE = "summary.md"
MAX_NAME_LENGTH = 100

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WHITESPACE = re.compile(r"\s+")
_FOLDER_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2}) - (.+)$")


def sanitize_filename(name: str) -> str:
    """Make a podcast name or episode title safe for use as a path component.

    Collapses whitespace, replaces ``<>:"/\\|?*`` (and control characters)
    with ``-``, strips, and truncates to 100 characters. Names made only of
    dots would escape the archive, so they become ``Untitled``.
    """
    safe = _WHITESPACE.sub(" ", name)
    safe = _UNSAFE_CHARS.sub("-", safe).strip()
    safe = safe[:MAX_NAME_LENGTH].rstrip()
    if not safe.strip(". "):
        return "Untitled"
    return safe


class EpisodeStore:
    """Read and write transcripts and summaries in the episode archive.

    Example:
        >>> store = EpisodeStore(output_dir=Path("./podcasts"))
        >>> store.save_transcript("Lex Fridman", "Episode 1", "2025-01-02", "Hello")
        PosixPath('podcasts/Lex Fridman/2025-01-02 - Episode 1/transcript.md')
    """

    def __init__(
        self,
        output_dir: Path,
        temp_dir: Path | None = None,
        markdown_generator: MarkdownGenerator | None = None,
    ):
        """Initialize the store.

        Args:
            output_dir: Archive root
            temp_dir: Scratch directory for downloaded audio
            markdown_generator: MarkdownGenerator instance (creates one if None)
        """
        self.output_dir = output_dir
        self.temp_dir = temp_dir
        self.markdown_generator = markdown_generator or MarkdownGenerator()

    # Paths

    def episode_dir(self, podcast_name: str, episode_title: str, episode_date: str) -> Path:
        folder = f"{sanitize_filename(episode_date)} - {sanitize_filename(episode_title)}"
        return self.output_dir / sanitize_filename(podcast_name) / folder

    def transcript_path(self, podcast_name: str, episode_title: str, episode_date: str) -> Path:
        return self.episode_dir(podcast_name, episode_title, episode_date) / TRANSCRIPT_FILE

    def summary_path(self, podcast_name: str, episode_title: str, episode_date: str) -> Path:
        return self.episode_dir(podcast_name, episode_title, episode_date) / SUMMARY_FILE

    # Writes

    def save_transcript(
        self, podcast_name: str, episode_title: str, episode_date: str, transcript: str
    ) -> Path:
        """Write transcript.md, replacing any existing file.

        Returns:
            Path to the written file
        """
        path = self.transcript_path(podcast_name, episode_title, episode_date)
        content = self.markdown_generator.transcript(
            podcast_name, episode_title, episode_date, transcript
        )
        self._write_file_atomic(path, content)
        logger.info("Saved transcript to %s", path)
        return path

    def save_summary(
        self, podcast_name: str, episode_title: str, episode_date: str, summary: str
    ) -> Path:
        """Write summary.md, replacing any existing file.

        Returns:
            Path to the written file
        """
        path = self.summary_path(podcast_name, episode_title, episode_date)
        content = self.markdown_generator.summary(
            podcast_name, episode_title, episode_date, summary
        )
        self._write_file_atomic(path, content)
        logger.info("Saved summary to %s", path)
        return path

    def _write_file_atomic(self, file_path: Path, content: str) -> None:
        """Write via temp file + rename so readers never see a partial file."""
        file_path.parent.mkdir(parents=True, exist_ok=True)

        temp_fd, temp_path = tempfile.mkstemp(
            dir=file_path.parent, prefix=".tmp_", suffix=".md"
        )
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            Path(temp_path).replace(file_path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise

    # Reads

    def has_transcript(self, podcast_name: str, episode_title: str, episode_date: str) -> bool:
        return self.transcript_path(podcast_name, episode_title, episode_date).exists()

    def has_summary(self, podcast_name: str, episode_title: str, episode_date: str) -> bool:
        return self.summary_path(podcast_name, episode_title, episode_date).exists()

    def is_episode_scraped(
        self, podcast_name: str, episode_title: str, episode_date: str
    ) -> bool:
        """True when both transcript and summary exist."""
        return self.has_transcript(
            podcast_name, episode_title, episode_date
        ) and self.has_summary(podcast_name, episode_title, episode_date)

    def get_existing_episode_paths(
        self, podcast_name: str, episode_title: str, episode_date: str
    ) -> EpisodePaths | None:
        """Paths of a fully processed episode, or None if anything is missing."""
        if not self.is_episode_scraped(podcast_name, episode_title, episode_date):
            return None
        return EpisodePaths(
            transcript_path=self.transcript_path(podcast_name, episode_title, episode_date),
            summary_path=self.summary_path(podcast_name, episode_title, episode_date),
        )

    def read_transcript(
        self, podcast_name: str, episode_title: str, episode_date: str
    ) -> str | None:
        """Return transcript.md contents, or None if it doesn't exist."""
        path = self.transcript_path(podcast_name, episode_title, episode_date)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    # Listings

    def list_all_podcasts(self) -> list[str]:
        """Folder names directly under the archive root."""
        if not self.output_dir.exists():
            return []
        return sorted(item.name for item in self.output_dir.iterdir() if item.is_dir())

    def list_podcast_episodes(self, podcast_name: str) -> list[EpisodeRecord]:
        """Episodes of one podcast, newest first.

        Folders not named ``YYYY-MM-DD - title`` are skipped.
        """
        podcast_dir = self.output_dir / sanitize_filename(podcast_name)
        if not podcast_dir.exists():
            return []

        episodes = []
        for folder in podcast_dir.iterdir():
            if not folder.is_dir():
                continue
            match = _FOLDER_PATTERN.match(folder.name)
            if not match:
                continue

            episode_date, episode_title = match.groups()
            episodes.append(
                EpisodeRecord(
                    podcast_name=podcast_dir.name,
                    episode_title=episode_title,
                    episode_date=episode_date,
                    has_transcript=(folder / TRANSCRIPT_FILE).exists(),
                    has_summary=(folder / SUMMARY_FILE).exists(),
                    folder_path=folder,
                )
            )

        return sorted(episodes, key=lambda e: e.episode_date, reverse=True)

    def find_incomplete_episodes(self) -> list[IncompleteEpisode]:
        """Episodes that have a transcript but no summary."""
        incomplete = []
        for podcast_name in self.list_all_podcasts():
            for episode in self.list_podcast_episodes(podcast_name):
                if episode.has_transcript and not episode.has_summary:
                    incomplete.append(
                        IncompleteEpisode(
                            podcast_name=podcast_name,
                            episode_title=episode.episode_title,
                            episode_date=episode.episode_date,
                            transcript_path=episode.folder_path / TRANSCRIPT_FILE,
                        )
                    )
        return incomplete

    # Temp files

    def cleanup_temp_file(self, file_path: Path) -> None:
        """Delete a downloaded audio file. Failures are logged, not raised."""
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to clean up temp file %s: %s", file_path, e)

    def cleanup_temp_directory(self) -> None:
        """Empty the temp directory, recreating it. Failures are logged."""
        if self.temp_dir is None:
            return
        try:
            if self.temp_dir.exists():
                shutil.rmtree(self.temp_dir)
            self.temp_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Failed to clean up temp directory %s: %s", self.temp_dir, e)
