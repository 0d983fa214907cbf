"""Unicode and email header decoding utilities."""

from email.header import decode_header

from mailmimeex.services.charset.base import CharsetError
from mailmimeex.services.charset.registry import default_registry


def decode_email_header(header_value: str) -> str:
    """
    Decode RFC 2047 encoded-word header to Unicode string.

    Charsets are resolved through the package registry, so words declared as
    ISO-2022-JP-MS decode as well.

    Args:
        header_value: Raw header value (may be encoded and folded)

    Returns:
        Decoded Unicode string

    Examples:
        >>> decode_email_header("=?UTF-8?B?5Lit5paH?=")
        '中文'
        >>> decode_email_header("=?UTF-8?Q?=E3=81=A7=E3=81=99?=")
        'です'
    """
    if not header_value:
        return ""

    decoded_parts = []
    for content, encoding in decode_header(header_value):
        if isinstance(content, bytes):
            if encoding:
                try:
                    decoded_parts.append(default_registry.lookup(encoding).decode(content))
                except (CharsetError, UnicodeDecodeError):
                    # Fallback to UTF-8 with error replacement
                    decoded_parts.append(content.decode("utf-8", errors="replace"))
            else:
                try:
                    decoded_parts.append(content.decode("ascii"))
                except UnicodeDecodeError:
                    decoded_parts.append(content.decode("utf-8", errors="replace"))
        else:
            decoded_parts.append(str(content))

    return "".join(decoded_parts)
