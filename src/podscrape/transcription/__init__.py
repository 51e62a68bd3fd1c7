"""Speech-to-text for downloaded episode audio."""

from podscrape.transcription.deepgram import DeepgramTranscriber
from podscrape.transcription.models import TranscriptionResult

__all__ = ["DeepgramTranscriber", "TranscriptionResult"]
