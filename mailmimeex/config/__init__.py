"""Configuration management"""

from .config_loader import ConfigError, ConfigLoader
from .mime_config import MimeConfig

__all__ = ["ConfigError", "ConfigLoader", "MimeConfig"]
