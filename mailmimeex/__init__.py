"""mailmimeex - MIME message builder with charset transcoding."""

from loguru import logger

from .config import ConfigError, ConfigLoader, MimeConfig
from .models import FlowedOptions, MimeParams, TransferEncoding
from .services.charset import (
    CharsetError,
    CharsetTranscoder,
    TranscodingError,
    UnsupportedCharsetError,
)
from .services.header import HeaderEncoder
from .services.message import (
    InvalidParameterError,
    MessageBuilder,
    MimeMessage,
    MimeMessageError,
    UnknownOptionError,
    UnknownParameterError,
    build_message,
)

# Library logging is opt-in: logger.enable("mailmimeex")
logger.disable("mailmimeex")

__version__ = "1.0.0"

__all__ = [
    "CharsetError",
    "CharsetTranscoder",
    "ConfigError",
    "ConfigLoader",
    "FlowedOptions",
    "HeaderEncoder",
    "InvalidParameterError",
    "MessageBuilder",
    "MimeConfig",
    "MimeMessage",
    "MimeMessageError",
    "MimeParams",
    "TransferEncoding",
    "TranscodingError",
    "UnknownOptionError",
    "UnknownParameterError",
    "UnsupportedCharsetError",
    "build_message",
]
