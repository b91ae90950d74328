"""
Settings management for Filter Maker.

Handles persistent storage of user preferences in settings.ini.
"""

import logging
import os
from configparser import ConfigParser, Error as ConfigError
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger

logger = get_logger("settings")


class Settings:
    """Manages application settings via settings.ini."""

    # Settings file location, overridable with FILTERMAKER_SETTINGS
    DEFAULT_FILE = Path.home() / ".filtermaker" / "settings.ini"
    ENV_VAR = "FILTERMAKER_SETTINGS"

    # Section and keys
    SECTION = "preferences"
    KEY_OUTPUT_DIR = "output_dir"
    KEY_EXTENSION = "output_extension"
    KEY_QUALITY = "jpeg_quality"
    KEY_LOG_LEVEL = "log_level"

    DEFAULTS = {
        KEY_OUTPUT_DIR: "",
        KEY_EXTENSION: "jpg",
        KEY_QUALITY: "90",
        KEY_LOG_LEVEL: "INFO",
    }

    def __init__(self, settings_file: Optional[str] = None):
        """Initialize settings from file or create defaults."""
        if settings_file:
            self.settings_file = Path(settings_file)
        elif os.environ.get(self.ENV_VAR):
            self.settings_file = Path(os.environ[self.ENV_VAR])
        else:
            self.settings_file = self.DEFAULT_FILE
        self.config = ConfigParser()
        self._load()

    def _load(self) -> None:
        """Load settings from file or create defaults."""
        if self.settings_file.exists():
            try:
                self.config.read(self.settings_file)
            except ConfigError as e:
                logger.warning(f"Ignoring unreadable settings file {self.settings_file}: {e}")
        if not self.config.has_section(self.SECTION):
            self.config.add_section(self.SECTION)
        for key, value in self.DEFAULTS.items():
            if not self.config.has_option(self.SECTION, key):
                self.config.set(self.SECTION, key, value)
        if not self.settings_file.exists():
            self._save()

    def _save(self) -> None:
        """Save settings to file."""
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w") as f:
                self.config.write(f)
        except OSError as e:
            logger.warning(f"Could not save settings to {self.settings_file}: {e}")

    def _get(self, key: str) -> str:
        return self.config.get(self.SECTION, key, fallback=self.DEFAULTS[key])

    def _set(self, key: str, value: str) -> None:
        self.config.set(self.SECTION, key, value)
        self._save()

    def get_output_dir(self) -> Optional[str]:
        """Get output directory, None means beside the source image."""
        val = self._get(self.KEY_OUTPUT_DIR).strip()
        return str(Path(val).expanduser()) if val else None

    def set_output_dir(self, path: str) -> None:
        """Set and save output directory."""
        self._set(self.KEY_OUTPUT_DIR, path)

    def get_extension(self) -> str:
        """Get output extension without the dot (default: 'jpg')."""
        val = self._get(self.KEY_EXTENSION).strip().lstrip(".").lower()
        return val or self.DEFAULTS[self.KEY_EXTENSION]

    def set_extension(self, extension: str) -> None:
        """Set and save output extension."""
        self._set(self.KEY_EXTENSION, extension.lstrip("."))

    def get_quality(self) -> int:
        """Get JPEG quality (default: 90)."""
        try:
            return int(self._get(self.KEY_QUALITY))
        except ValueError:
            return int(self.DEFAULTS[self.KEY_QUALITY])

    def set_quality(self, quality: int) -> None:
        """Set and save JPEG quality."""
        self._set(self.KEY_QUALITY, str(quality))

    def get_log_level(self) -> int:
        """Get log level as a logging constant (default: INFO)."""
        level = logging.getLevelName(self._get(self.KEY_LOG_LEVEL).strip().upper())
        return level if isinstance(level, int) else logging.INFO

    def set_log_level(self, level: str) -> None:
        """Set and save log level name."""
        self._set(self.KEY_LOG_LEVEL, level.upper())
