"""Configuration loader for composition settings."""

import json
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from .mime_config import MimeConfig


class ConfigError(Exception):
    """Raised when a configuration file is malformed or invalid."""

    pass


class ConfigLoader:
    """Load and validate composition configuration."""

    DEFAULT_CONFIG_PATHS = [
        Path("~/.mailmimeex/config.json"),
        Path("config/mailmimeex.json"),
    ]

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Optional custom config file path
        """
        self.config_path = config_path
        self._config: Optional[MimeConfig] = None

    def load_config(self) -> MimeConfig:
        """
        Load configuration from file.

        Returns:
            MimeConfig instance (defaults if no config file exists)

        Raises:
            ConfigError: If the config file is not valid JSON or fails validation
        """
        if self._config is not None:
            return self._config

        config_paths = [self.config_path] if self.config_path else self.DEFAULT_CONFIG_PATHS

        for config_path in config_paths:
            if config_path and config_path.expanduser().exists():
                try:
                    with open(config_path.expanduser(), "r", encoding="utf-8") as f:
                        config_data = json.load(f)
                    self._config = MimeConfig(**config_data)
                except (json.JSONDecodeError, TypeError, ValidationError) as e:
                    raise ConfigError(f"Invalid config in {config_path}: {e}") from e
                logger.debug("Loaded config from {}", config_path)
                return self._config

        # Return default config if no file found
        self._config = MimeConfig()
        return self._config

    def reload(self) -> MimeConfig:
        """Reload configuration from file."""
        self._config = None
        return self.load_config()
