"""Resolution of MIME charset names to codecs."""

import codecs

from loguru import logger

from mailmimeex.utils.charset_utils import base_charset, charset_key
from .base import CharsetCodec, UnsupportedCharsetError
from .iso2022 import Iso2022Codec
from .iso2022jp_ms import Iso2022JpMsCodec
from .stdlib_codec import StdlibCodec


class CharsetRegistry:
    """
    Resolve charset names to CharsetCodec instances.

    Codecs registered explicitly take precedence; any other name is looked
    up in Python's codec registry. Lookups are cached per normalized name.
    """

    def __init__(self):
        self._registered: dict[str, CharsetCodec] = {}
        self._cache: dict[str, CharsetCodec] = {}

    def register(self, codec: CharsetCodec, *aliases: str) -> None:
        """
        Register a codec under its own name and optional aliases.

        Args:
            codec: Codec instance
            aliases: Additional charset names resolving to the codec
        """
        for name in (codec.name, *aliases):
            self._registered[charset_key(name)] = codec
        self._cache.clear()

    def lookup(self, name: str) -> CharsetCodec:
        """
        Resolve a charset name.

        Args:
            name: Charset name; a `;`-delimited suffix is ignored

        Returns:
            CharsetCodec for the name

        Raises:
            UnsupportedCharsetError: If the name is empty or unknown
        """
        key = charset_key(name or "")
        if not key:
            raise UnsupportedCharsetError("Charset name is empty")

        if key in self._registered:
            return self._registered[key]
        if key in self._cache:
            return self._cache[key]

        mime_name = base_charset(name)
        try:
            codec_info = codecs.lookup(mime_name)
        except LookupError as e:
            raise UnsupportedCharsetError(f"Unsupported charset: {mime_name}") from e

        # bytes-to-bytes codecs such as base64 or zlib are not charsets
        if not getattr(codec_info, "_is_text_encoding", True):
            raise UnsupportedCharsetError(f"Not a text encoding: {mime_name}")

        if codec_info.name.startswith("iso2022"):
            codec = Iso2022Codec(mime_name, codec_info)
        else:
            codec = StdlibCodec(mime_name, codec_info)

        logger.debug("Resolved charset {} to codec {}", mime_name, codec_info.name)
        self._cache[key] = codec
        return codec

    def is_supported(self, name: str) -> bool:
        """Return True if the charset name resolves to a codec."""
        try:
            self.lookup(name)
        except UnsupportedCharsetError:
            return False
        return True


default_registry = CharsetRegistry()
default_registry.register(Iso2022JpMsCodec())
