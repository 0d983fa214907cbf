"""Charset codecs and transcoding."""

from .base import CharsetCodec, CharsetError, TranscodingError, UnsupportedCharsetError
from .iso2022jp_ms import Iso2022JpMsCodec
from .registry import CharsetRegistry, default_registry
from .transcoder import CharsetTranscoder

__all__ = [
    "CharsetCodec",
    "CharsetError",
    "CharsetRegistry",
    "CharsetTranscoder",
    "Iso2022JpMsCodec",
    "TranscodingError",
    "UnsupportedCharsetError",
    "default_registry",
]
