"""Charset name normalization utilities."""

import re

_PUNCTUATION = re.compile(r"[-_.\s]")


def base_charset(value: str) -> str:
    """
    Strip any `;`-delimited parameters from a charset parameter value.

    Args:
        value: Charset parameter value (may carry trailing parameters)

    Returns:
        Base charset name, whitespace-trimmed

    Examples:
        >>> base_charset("US-ASCII; format=flowed")
        'US-ASCII'
        >>> base_charset("UTF-8")
        'UTF-8'
    """
    return value.split(";", 1)[0].strip()


def charset_key(name: str) -> str:
    """
    Build a comparison key for a charset name.

    Case and punctuation are ignored, so "ISO-2022-JP", "iso_2022_jp" and
    "ISO2022JP" share one key.
    """
    return _PUNCTUATION.sub("", base_charset(name)).lower()
