"""ISO-2022-JP-MS codec.

ISO-2022-JP framing over the CP932 repertoire: besides JIS X 0208 it carries
NEC special characters (row 13, e.g. circled digits and "㈱") and the
NEC-selected IBM extensions (rows 89-92, e.g. "髙" and "﨑"). Python ships no
such codec, so the JIS row/cell table is derived from the stdlib cp932 codec.
"""

from functools import lru_cache
from typing import Optional

from .base import CharsetCodec
from .iso2022 import ASCII_DESIGNATION, Iso2022Char, join_iso2022, split_iso2022

JIS_X0208_DESIGNATION = b"\x1b$B"
KATAKANA_DESIGNATION = b"\x1b(I"

_DOUBLE_BYTE_DESIGNATIONS = (b"\x1b$B", b"\x1b$@")
_SINGLE_BYTE_DESIGNATIONS = (b"\x1b(B", b"\x1b(J")

# JIS X 0208 code points that CP932 maps to different Unicode characters.
MS_COMPATIBLE = {
    "〜": "～",  # WAVE DASH
    "‖": "∥",  # DOUBLE VERTICAL LINE
    "−": "－",  # MINUS SIGN
    "—": "―",  # EM DASH
    "¢": "￠",  # CENT SIGN
    "£": "￡",  # POUND SIGN
    "¬": "￢",  # NOT SIGN
}


def sjis_to_jis(lead: int, trail: int) -> bytes:
    """
    Convert a Shift_JIS double-byte code to its JIS row/cell bytes.

    Examples:
        >>> sjis_to_jis(0x87, 0x40)
        b'-!'
    """
    if lead >= 0xE0:
        lead -= 0x40
    row = (lead - 0x81) * 2 + 0x21
    if trail >= 0x9F:
        row += 1
        cell = trail - 0x7E
    elif trail >= 0x80:
        cell = trail - 0x20
    else:
        cell = trail - 0x1F
    return bytes((row, cell))


def jis_to_sjis(row: int, cell: int) -> bytes:
    """Inverse of sjis_to_jis()."""
    lead = (row + 1) // 2 + 0x70
    if lead >= 0xA0:
        lead += 0x40
    if row % 2:
        trail = cell + 0x1F
        if trail >= 0x7F:
            trail += 1
    else:
        trail = cell + 0x7E
    return bytes((lead, trail))


@lru_cache(maxsize=1)
def jis_table() -> dict[str, bytes]:
    """
    Map characters to JIS row/cell bytes through the CP932 double-byte area.

    Only the lead bytes that correspond to JIS rows 1-94 are scanned, so the
    IBM extension block (0xFA-0xFC) resolves to its NEC-selected duplicate and
    JIS X 0208 codes win over NEC row 13 duplicates.
    """
    table: dict[str, bytes] = {}
    leads = list(range(0x81, 0xA0)) + list(range(0xE0, 0xF0))
    trails = [t for t in range(0x40, 0xFD) if t != 0x7F]
    for lead in leads:
        for trail in trails:
            try:
                char = bytes((lead, trail)).decode("cp932")
            except UnicodeDecodeError:
                continue
            table.setdefault(char, sjis_to_jis(lead, trail))
    return table


class Iso2022JpMsCodec(CharsetCodec):
    """Codec for ISO-2022-JP-MS."""

    name = "ISO-2022-JP-MS"

    def encode(self, text: str) -> bytes:
        table = jis_table()
        out = bytearray()
        current = ASCII_DESIGNATION
        for pos, char in enumerate(text):
            char = MS_COMPATIBLE.get(char, char)
            code = ord(char)
            if code < 0x80:
                designation, data = ASCII_DESIGNATION, bytes((code,))
            elif 0xFF61 <= code <= 0xFF9F:
                designation, data = KATAKANA_DESIGNATION, bytes((code - 0xFF61 + 0x21,))
            else:
                designation, data = JIS_X0208_DESIGNATION, table.get(char)
                if data is None:
                    raise UnicodeEncodeError(self.name, text, pos, pos + 1, "character maps to <undefined>")
            if designation != current:
                out += designation
                current = designation
            out += data
        if current != ASCII_DESIGNATION:
            out += ASCII_DESIGNATION
        return bytes(out)

    def decode(self, data: bytes) -> str:
        chars = []
        for char in split_iso2022(data, self.name):
            decoded = self._decode_char(char)
            if decoded is None:
                raise UnicodeDecodeError(self.name, data, 0, len(data), f"invalid character {char.data!r}")
            chars.append(decoded)
        return "".join(chars)

    def _decode_char(self, char: Iso2022Char) -> Optional[str]:
        if char.designation in _SINGLE_BYTE_DESIGNATIONS:
            return char.data.decode("ascii")
        if char.designation == KATAKANA_DESIGNATION:
            code = char.data[0]
            if 0x21 <= code <= 0x5F:
                return chr(code - 0x21 + 0xFF61)
            return None
        if char.designation in _DOUBLE_BYTE_DESIGNATIONS:
            row, cell = char.data
            try:
                return jis_to_sjis(row, cell).decode("cp932")
            except UnicodeDecodeError:
                return None
        return None

    def split_chars(self, data: bytes) -> list[Iso2022Char]:
        return split_iso2022(data, self.name)

    def join_chars(self, chunks: list[Iso2022Char]) -> bytes:
        return join_iso2022(chunks)
