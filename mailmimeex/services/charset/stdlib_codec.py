"""Charset codecs backed by Python's codec registry."""

import codecs

from .base import CharsetCodec


class StdlibCodec(CharsetCodec):
    """Codec for stateless charsets known to the `codecs` module."""

    def __init__(self, name: str, codec_info: codecs.CodecInfo):
        self.name = name
        self.codec_info = codec_info

    def encode(self, text: str) -> bytes:
        return self.codec_info.encode(text, "strict")[0]

    def decode(self, data: bytes) -> str:
        return self.codec_info.decode(data, "strict")[0]

    def split_chars(self, data: bytes) -> list[bytes]:
        # Feed one byte at a time; a character is complete once the
        # incremental decoder emits text.
        decoder = self.codec_info.incrementaldecoder("strict")
        chunks = []
        pending = bytearray()
        for i in range(len(data)):
            pending += data[i : i + 1]
            if decoder.decode(data[i : i + 1]):
                chunks.append(bytes(pending))
                pending.clear()
        decoder.decode(b"", final=True)
        if pending:
            chunks.append(bytes(pending))
        return chunks

    def join_chars(self, chunks: list[bytes]) -> bytes:
        return b"".join(chunks)
