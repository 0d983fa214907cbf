"""RFC 2047 encoding of header field values."""

import re
from email import base64mime, quoprimime
from typing import Optional, Union

from mailmimeex.services.charset.base import TranscodingError
from mailmimeex.services.charset.registry import CharsetRegistry, default_registry

# Printable ASCII plus TAB passes through unencoded.
NEEDS_ENCODING = re.compile(rb"[^\t\x20-\x7e]")


def _payload(word: str) -> str:
    # header_encode() returns a whole "=?charset?x?payload?=" word
    return word.split("?", 3)[3][:-2] if word else ""


def q_encode(data: bytes) -> str:
    """
    Apply the RFC 2047 "Q" encoding, restricted to the phrase-safe set.

    Examples:
        >>> q_encode(b"a b=?")
        'a_b=3D=3F'
    """
    return _payload(quoprimime.header_encode(data))


def b_encode(data: bytes) -> str:
    """Apply the RFC 2047 "B" encoding."""
    return _payload(base64mime.header_encode(data))


class HeaderEncoder:
    """
    Encode raw header values as folded RFC 2047 encoded words.

    Values are split into whole characters straight from their bytes, so a
    value is never re-encoded and a multi-byte character never straddles two
    encoded words.
    """

    def __init__(
        self,
        eol: str = "\r\n",
        max_length: int = 75,
        registry: Optional[CharsetRegistry] = None,
    ):
        """
        Initialize encoder.

        Args:
            eol: Line separator placed before each continuation line
            max_length: Maximum length of one encoded word (RFC 2047: 75)
            registry: Charset registry (default: package registry)
        """
        self.eol = eol
        self.max_length = max_length
        self.registry = registry or default_registry

    def encode_headers(self, headers: dict, charset: str, encoding: str) -> dict:
        """
        Encode every field of a raw header mapping, preserving order.

        Args:
            headers: Mapping of field name to bytes or list of bytes
            charset: Charset the raw values are encoded in
            encoding: "base64" for B words, anything else for Q words

        Returns:
            Mapping of field name to str (or list of str for multi-valued fields)
        """
        return {name: self.encode_field(name, value, charset, encoding) for name, value in headers.items()}

    def encode_field(
        self,
        name: str,
        value: Union[bytes, str, list],
        charset: str,
        encoding: str,
    ) -> Union[str, list[str]]:
        """Encode one field; each value of a multi-valued field is folded on its own."""
        if isinstance(value, list):
            return [self.encode_value(name, v, charset, encoding) for v in value]
        return self.encode_value(name, value, charset, encoding)

    def encode_value(self, name: str, value: Union[bytes, str], charset: str, encoding: str) -> str:
        """
        Encode a single raw value.

        Args:
            name: Field name, used for first-line length and error messages
            value: Raw value bytes in `charset` (str is encoded first)
            charset: Charset name written into the encoded words
            encoding: "base64" or "quoted-printable"

        Returns:
            The value unchanged if it is plain printable ASCII, otherwise
            encoded words joined by EOL + space

        Raises:
            UnsupportedCharsetError: If the charset is unknown
            TranscodingError: If the value is not valid in the charset
        """
        codec = self.registry.lookup(charset)
        if isinstance(value, str):
            try:
                value = codec.encode(value)
            except UnicodeError as e:
                raise TranscodingError(f"Header {name} is not representable in {charset}: {e}") from e

        if not NEEDS_ENCODING.search(value):
            return value.decode("ascii")

        try:
            chars = codec.split_chars(value)
        except UnicodeError as e:
            raise TranscodingError(f"Header {name} is not valid {charset}: {e}") from e

        use_base64 = encoding == "base64"
        word_encode = b_encode if use_base64 else q_encode
        prefix = f"=?{charset}?{'B' if use_base64 else 'Q'}?"
        suffix = "?="
        room = self.max_length - len(prefix) - len(suffix)

        # The first word shares its line with "Name: ".
        limit = room - (len(name) + 2)
        words = []
        run: list = []
        for char in chars:
            candidate = run + [char]
            if run and len(word_encode(codec.join_chars(candidate))) > limit:
                words.append(word_encode(codec.join_chars(run)))
                run = [char]
                limit = room
            else:
                run = candidate
        if run:
            words.append(word_encode(codec.join_chars(run)))

        return (self.eol + " ").join(prefix + word + suffix for word in words)
