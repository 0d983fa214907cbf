"""Abstract interface for charset codecs."""

from abc import ABC, abstractmethod


class CharsetError(Exception):
    """Base exception for charset handling errors."""

    pass


class UnsupportedCharsetError(CharsetError):
    """Raised when a charset name cannot be resolved to a codec."""

    pass


class TranscodingError(CharsetError):
    """Raised when a value cannot be decoded or encoded under a charset."""

    pass


class CharsetCodec(ABC):
    """
    Byte/text conversion for one named charset.

    Besides plain encode/decode, a codec can split an encoded byte string
    into per-character chunks and glue a run of chunks back together, which
    is what header folding needs to avoid splitting a character across
    encoded words.
    """

    #: MIME name of the charset, e.g. "ISO-2022-JP"
    name: str

    @abstractmethod
    def encode(self, text: str) -> bytes:
        """
        Encode text strictly.

        Raises:
            UnicodeEncodeError: If a character has no mapping
        """
        pass

    @abstractmethod
    def decode(self, data: bytes) -> str:
        """
        Decode bytes strictly.

        Raises:
            UnicodeDecodeError: If the bytes are not valid in this charset
        """
        pass

    @abstractmethod
    def split_chars(self, data: bytes) -> list:
        """
        Split encoded bytes into per-character chunks without re-encoding.

        Returns:
            Opaque chunk objects accepted by join_chars()

        Raises:
            UnicodeDecodeError: If the bytes are not valid in this charset
        """
        pass

    @abstractmethod
    def join_chars(self, chunks: list) -> bytes:
        """Join a run of chunks from split_chars() into self-contained bytes."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
