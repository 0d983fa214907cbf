"""Message composition services."""

from .base import InvalidParameterError, MimeMessageError, UnknownOptionError, UnknownParameterError
from .builder import MessageBuilder, build_message
from .composer import MimeComposer
from .mime_message import MimeMessage

__all__ = [
    "InvalidParameterError",
    "MessageBuilder",
    "MimeComposer",
    "MimeMessage",
    "MimeMessageError",
    "UnknownOptionError",
    "UnknownParameterError",
    "build_message",
]
