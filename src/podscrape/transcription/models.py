"""Transcription data models."""

from pydantic import BaseModel

from podscrape.utils.display import count_words


class TranscriptionResult(BaseModel):
    """Plain-text transcript returned by the transcription service."""

    text: str = ""

    @property
    def word_count(self) -> int:
        return count_words(self.text)
