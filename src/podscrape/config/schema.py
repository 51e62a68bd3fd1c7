"""Configuration schema models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from podscrape.utils.paths import get_temp_dir, get_tracking_file

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseModel):
    """Effective podscrape configuration.

    Built once at process entry by ``ConfigManager.load_config`` and passed to
    every component that needs it.
    """

    output_directory: Path = Field(default=Path("~/podcasts"))
    deepgram_api_key: str | None = None
    temp_directory: Path = Field(default_factory=get_temp_dir)
    tracking_file: Path = Field(default_factory=get_tracking_file)
    log_level: LogLevel = "INFO"

    # Deepgram pre-recorded model
    transcription_model: str = "nova-2"
    # Seconds to wait for a connection or between bytes; not a total deadline
    http_timeout: float = 30.0

    @property
    def output_root(self) -> Path:
        """Output directory with ``~`` expanded."""
        return self.output_directory.expanduser()

    @property
    def temp_root(self) -> Path:
        return self.temp_directory.expanduser()

    @property
    def tracking_path(self) -> Path:
        return self.tracking_file.expanduser()
