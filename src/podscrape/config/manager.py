"""Configuration manager for loading podscrape settings."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from podscrape.config.schema import Settings
from podscrape.utils.errors import InvalidConfigError
from podscrape.utils.paths import get_config_file

logger = logging.getLogger(__name__)

# Settings field -> environment variable
ENV_VARS: dict[str, str] = {
    "output_directory": "OUTPUT_DIRECTORY",
    "deepgram_api_key": "DEEPGRAM_API_KEY",
    "temp_directory": "TEMP_DIRECTORY",
    "tracking_file": "TRACKING_FILE",
    "log_level": "PODSCRAPE_LOG_LEVEL",
}


def resolve_config_value(*candidates: Any) -> Any:
    """Return the first candidate that is neither None nor an empty string."""
    for value in candidates:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


class ConfigManager:
    """Resolves settings from the environment, config.yaml, and defaults.

    Each field is taken from the first non-empty source in this order:
    environment variable, YAML file, built-in default.
    """

    def __init__(self, config_file: Path | None = None, use_dotenv: bool = True) -> None:
        """Initialize the config manager.

        Args:
            config_file: Optional explicit config.yaml path. Defaults to the
                XDG config dir.
            use_dotenv: Load a ``.env`` file from the working directory first.
        """
        self.config_file = config_file or get_config_file()
        self.use_dotenv = use_dotenv

    def load_file(self) -> dict[str, Any]:
        """Read the YAML config file, or an empty mapping if it doesn't exist.

        Raises:
            InvalidConfigError: If the file is not valid YAML or not a mapping
        """
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: expected a mapping"
            )
        return data

    def load_config(self) -> Settings:
        """Build the effective settings.

        Returns:
            Validated Settings instance

        Raises:
            InvalidConfigError: If the file or the merged values are invalid
        """
        if self.use_dotenv:
            env_file = Path.cwd() / ".env"
            if env_file.exists():
                load_dotenv(env_file, override=False)

        file_data = self.load_file()
        merged: dict[str, Any] = {}

        for field in Settings.model_fields:
            env_name = ENV_VARS.get(field)
            value = resolve_config_value(
                os.environ.get(env_name) if env_name else None,
                file_data.get(field),
            )
            if value is not None:
                merged[field] = value

        unknown = set(file_data) - set(Settings.model_fields)
        if unknown:
            logger.warning(
                "Ignoring unknown config keys in %s: %s",
                self.config_file,
                ", ".join(sorted(unknown)),
            )

        try:
            return Settings(**merged)
        except PydanticValidationError as e:
            raise InvalidConfigError(f"Invalid configuration: {e}") from e
