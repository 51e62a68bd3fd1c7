"""Markdown rendering for transcript and summary files."""


class MarkdownGenerator:
    """Render transcript.md and summary.md contents."""

    def _header(self, podcast_name: str, episode_date: str) -> str:
        # Two trailing spaces force a markdown line break
        return f"**Podcast:** {podcast_name}  \n**Date:** {episode_date}\n"

    def transcript(
        self, podcast_name: str, episode_title: str, episode_date: str, text: str
    ) -> str:
        return (
            f"# {episode_title}\n\n"
            f"{self._header(podcast_name, episode_date)}\n"
            "---\n\n"
            "## Transcript\n\n"
            f"{text}\n"
        )

    def summary(
        self, podcast_name: str, episode_title: str, episode_date: str, text: str
    ) -> str:
        return (
            f"# {episode_title} - Summary\n\n"
            f"{self._header(podcast_name, episode_date)}\n"
            "---\n\n"
            f"{text}\n"
        )
