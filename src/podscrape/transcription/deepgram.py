"""Deepgram pre-recorded transcription.

The whole audio file is read into memory and sent as a single request.
There is no chunking, streaming, or retry.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

from deepgram import DeepgramClient, PrerecordedOptions

from podscrape.transcription.models import TranscriptionResult
from podscrape.utils.errors import ConfigurationError, TranscriptionServiceError

logger = logging.getLogger(__name__)


def extract_transcript(payload: dict[str, Any]) -> str:
    """Return channel 0 / alternative 0 transcript text, or ``""``."""
    channels = (payload.get("results") or {}).get("channels") or []
    if not channels:
        return ""
    alternatives = channels[0].get("alternatives") or []
    if not alternatives:
        return ""
    return alternatives[0].get("transcript") or ""


class DeepgramTranscriber:
    """Transcribe local audio files with Deepgram."""

    def __init__(self, api_key: str | None, model: str = "nova-2"):
        """Initialize the transcriber.

        Args:
            api_key: Deepgram API key. May be None; the error is raised on
                first use so the server can start without one.
            model: Deepgram model name
        """
        self.api_key = api_key
        self.model = model

    def _options(self) -> PrerecordedOptions:
        return PrerecordedOptions(
            model=self.model,
            smart_format=True,
            punctuate=True,
            paragraphs=True,
        )

    async def transcribe(self, audio_path: Path) -> TranscriptionResult:
        """Transcribe an audio file.

        Args:
            audio_path: Local audio file

        Returns:
            TranscriptionResult with the transcript text (possibly empty)

        Raises:
            ConfigurationError: If no API key is configured
            FileNotFoundError: If the audio file doesn't exist
            TranscriptionServiceError: If Deepgram reports an error
        """
        if not self.api_key:
            raise ConfigurationError(
                "Deepgram API key not configured. "
                "Set deepgram_api_key in config.yaml or the DEEPGRAM_API_KEY environment variable."
            )
        if not audio_path.exists():
            raise FileNotFoundError(f"Audio file not found: {audio_path}")

        loop = asyncio.get_running_loop()
        payload = await loop.run_in_executor(None, self._transcribe_sync, audio_path)

        text = extract_transcript(payload)
        logger.info("Transcribed %s: %s characters", audio_path.name, f"{len(text):,}")
        return TranscriptionResult(text=text)

    def _transcribe_sync(self, audio_path: Path) -> dict[str, Any]:
        buffer = audio_path.read_bytes()
        logger.info(
            "Sending %s (%.1f MB) to Deepgram model %s",
            audio_path.name,
            len(buffer) / (1024 * 1024),
            self.model,
        )

        try:
            client = DeepgramClient(self.api_key)
            response = client.listen.rest.v("1").transcribe_file(
                {"buffer": buffer}, self._options()
            )
        except Exception as e:
            raise TranscriptionServiceError(f"Deepgram error: {e}") from e

        return response.to_dict()
