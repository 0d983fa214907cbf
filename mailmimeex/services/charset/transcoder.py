"""Conversion of header and body values between charsets."""

from typing import Optional, Union

from .base import CharsetCodec, TranscodingError
from .registry import CharsetRegistry, default_registry

Value = Union[bytes, str]
HeaderValue = Union[Value, list[Value]]


class CharsetTranscoder:
    """
    Convert byte strings between named charsets.

    Conversion is strict: a byte sequence invalid in the source charset or a
    character missing from the target charset raises TranscodingError. The
    instance never touches message state.
    """

    def __init__(
        self,
        default_source_encoding: str = "UTF-8",
        registry: Optional[CharsetRegistry] = None,
    ):
        """
        Initialize transcoder.

        Args:
            default_source_encoding: Charset assumed when a conversion names
                no source charset
            registry: Charset registry (default: package registry)
        """
        self.registry = registry or default_registry
        self.default_source_encoding = default_source_encoding

    def convert(
        self,
        value: HeaderValue,
        to_charset: str,
        from_charset: Optional[str] = None,
    ) -> Union[bytes, list[bytes]]:
        """
        Convert a scalar value or a list of values to another charset.

        Args:
            value: Encoded bytes, text, or a list of either. Text is taken as
                already decoded and only encoded to the target charset.
            to_charset: Target charset name
            from_charset: Source charset name (default: default_source_encoding)

        Returns:
            Converted bytes, or a list of the same length and order

        Raises:
            UnsupportedCharsetError: If either charset is unknown
            TranscodingError: If a value cannot be converted
        """
        target = self.registry.lookup(to_charset)
        source = self.registry.lookup(from_charset or self.default_source_encoding)

        if isinstance(value, list):
            return [self._convert_value(v, target, source) for v in value]
        return self._convert_value(value, target, source)

    def _convert_value(self, value: Value, target: CharsetCodec, source: CharsetCodec) -> bytes:
        if isinstance(value, bytes) and source is target:
            return value

        try:
            text = value if isinstance(value, str) else source.decode(value)
            return target.encode(text)
        except UnicodeError as e:
            raise TranscodingError(
                f"Cannot convert {value!r} from {source.name} to {target.name}: {e}"
            ) from e
