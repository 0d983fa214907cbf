"""Structural handling of ISO-2022 (7-bit, escape-framed) byte strings."""

from typing import NamedTuple

from .stdlib_codec import StdlibCodec

ESC = 0x1B
ASCII_DESIGNATION = b"\x1b(B"


class Iso2022Char(NamedTuple):
    """One character together with the designation it was read under."""

    designation: bytes
    data: bytes


def split_iso2022(data: bytes, encoding: str = "iso-2022") -> list[Iso2022Char]:
    """
    Split an ISO-2022 byte string into characters.

    Designations introduced by `ESC $ ...` select a two-byte set; all other
    designations select a single-byte set. Controls and space always belong
    to ASCII.

    Raises:
        UnicodeDecodeError: On a broken escape, an 8-bit byte or a truncated
            double-byte character
    """
    chars = []
    designation = ASCII_DESIGNATION
    width = 1
    i = 0
    while i < len(data):
        byte = data[i]
        if byte == ESC:
            j = i + 1
            while j < len(data) and 0x20 <= data[j] <= 0x2F:
                j += 1
            if j == i + 1 or j >= len(data) or not 0x30 <= data[j] <= 0x7E:
                raise UnicodeDecodeError(encoding, data, i, min(j + 1, len(data)), "invalid escape sequence")
            designation = data[i : j + 1]
            width = 2 if designation[1:2] == b"$" else 1
            i = j + 1
        elif byte >= 0x80:
            raise UnicodeDecodeError(encoding, data, i, i + 1, "8-bit byte in 7-bit charset")
        elif byte <= 0x20:
            chars.append(Iso2022Char(ASCII_DESIGNATION, data[i : i + 1]))
            i += 1
        else:
            if i + width > len(data):
                raise UnicodeDecodeError(encoding, data, i, len(data), "truncated double-byte character")
            chars.append(Iso2022Char(designation, data[i : i + width]))
            i += width
    return chars


def join_iso2022(chars: list[Iso2022Char]) -> bytes:
    """Frame a run of characters so that it starts and ends in ASCII."""
    out = bytearray()
    current = ASCII_DESIGNATION
    for char in chars:
        if char.designation != current:
            out += char.designation
            current = char.designation
        out += char.data
    if current != ASCII_DESIGNATION:
        out += ASCII_DESIGNATION
    return bytes(out)


class Iso2022Codec(StdlibCodec):
    """Stdlib-backed ISO-2022 codec (e.g. ISO-2022-JP) with structural splitting."""

    def split_chars(self, data: bytes) -> list[Iso2022Char]:
        return split_iso2022(data, self.name)

    def join_chars(self, chunks: list[Iso2022Char]) -> bytes:
        return join_iso2022(chunks)
