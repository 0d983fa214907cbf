"""Text-only MIME composer owning the header store, parameters and body."""

import base64
import binascii
import re
from typing import Optional, Union

from pydantic import ValidationError

from mailmimeex.models.params import MimeParams, TransferEncoding
from mailmimeex.services.charset.base import TranscodingError
from mailmimeex.services.charset.registry import CharsetRegistry
from mailmimeex.services.header.encoder import HeaderEncoder
from mailmimeex.utils.charset_utils import base_charset
from .base import InvalidParameterError, UnknownParameterError

RawValue = Union[bytes, list[bytes]]

_LINE_BREAK = re.compile(rb"\r\n|\r|\n")


def to_bytes(value: Union[bytes, str], charset: str, registry: CharsetRegistry) -> bytes:
    """
    Return bytes unchanged, or encode text in the given charset.

    Raises:
        TypeError: If value is neither bytes nor str
        UnsupportedCharsetError: If the charset is unknown
        TranscodingError: If the text is not representable in the charset
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise TypeError(f"Expected bytes or str, got {type(value).__name__}")
    codec = registry.lookup(charset)
    try:
        return codec.encode(value)
    except UnicodeError as e:
        raise TranscodingError(f"Cannot encode {value!r} as {codec.name}: {e}") from e


class MimeComposer:
    """
    Compose a single-part text/plain message.

    Holds the raw header store (field name -> bytes or list of bytes, in
    insertion order), the parameter set and the body. Encoded headers are a
    view derived on every call; the store itself is never encoded.
    """

    def __init__(self, params: MimeParams, encoder: HeaderEncoder, eol: str = "\r\n"):
        self.params = params
        self.encoder = encoder
        self.eol = eol
        self._headers: dict[str, RawValue] = {}
        self._body = b""

    # ---- header store ----

    def set_headers(self, headers: dict) -> dict:
        """
        Replace the raw header store.

        Text values are encoded in the current header charset. The store is
        only replaced once every value encodes under that charset.

        Returns:
            Encoded header view, as headers() returns it

        Raises:
            TranscodingError: If a value is not valid in the header charset
        """
        charset = self.header_charset()
        registry = self.encoder.registry
        store: dict[str, RawValue] = {}
        for name, value in headers.items():
            if isinstance(value, (list, tuple)):
                store[name] = [to_bytes(v, charset, registry) for v in value]
            else:
                store[name] = to_bytes(value, charset, registry)
        view = self._encoded_view(store)
        self._headers = store
        return view

    def raw_headers(self) -> dict[str, RawValue]:
        """Return a copy of the raw header store."""
        return {name: list(value) if isinstance(value, list) else value for name, value in self._headers.items()}

    def headers(self) -> dict:
        """
        Build the encoded header view.

        The derived content headers come first and supersede stored fields of
        the same name; stored fields follow in insertion order.
        """
        return self._encoded_view(self._headers)

    def _encoded_view(self, store: dict) -> dict:
        view: dict = self.content_headers()
        derived = {name.lower() for name in view}
        stored = {name: value for name, value in store.items() if name.lower() not in derived}
        view.update(
            self.encoder.encode_headers(stored, self.header_charset(), self.params.head_encoding.value)
        )
        return view

    def content_headers(self) -> dict[str, str]:
        """Return MIME-Version, Content-Type and Content-Transfer-Encoding."""
        return {
            "MIME-Version": "1.0",
            "Content-Type": f"text/plain; charset={self.params.text_charset or 'US-ASCII'}",
            "Content-Transfer-Encoding": self.params.text_encoding.value,
        }

    def header_charset(self) -> str:
        return base_charset(self.params.head_charset) or "US-ASCII"

    # ---- body ----

    def set_txt_body(self, text: bytes) -> None:
        self._body = text

    def get_txt_body(self) -> bytes:
        return self._body

    # ---- parameters ----

    def set_param(self, name: str, value: Union[str, TransferEncoding]) -> None:
        """
        Set one parameter.

        Raises:
            UnknownParameterError: If the name is not a parameter
            UnsupportedCharsetError: If a charset parameter names an unknown charset
            InvalidParameterError: If the value is otherwise invalid
        """
        if name not in MimeParams.names():
            raise UnknownParameterError(f"Unknown parameter: {name}")
        if name.endswith("_charset") and value is None:
            value = ""
        if name.endswith("_charset") and isinstance(value, str) and base_charset(value):
            self.encoder.registry.lookup(base_charset(value))

        try:
            self.params = self.params.replace(self.encoder.registry, **{name: value})
        except ValidationError as e:
            raise InvalidParameterError(f"Invalid value {value!r} for {name}: {e}") from e

    def get_param(self, name: str) -> Optional[str]:
        """Return a parameter value, or None if it is empty."""
        if name not in MimeParams.names():
            raise UnknownParameterError(f"Unknown parameter: {name}")
        value = getattr(self.params, name)
        if isinstance(value, TransferEncoding):
            return value.value
        return value or None

    # ---- serialization ----

    def get_message(self) -> bytes:
        """
        Serialize headers and body.

        Returns:
            The complete message, lines separated by the configured EOL
        """
        lines = []
        for name, value in self.headers().items():
            for item in value if isinstance(value, list) else [value]:
                lines.append(f"{name}: {item}")
        head = self.eol.join(lines) + self.eol + self.eol
        return head.encode("ascii") + self.encode_body()

    def encode_body(self) -> bytes:
        """Apply the text transfer encoding to the body."""
        eol = self.eol.encode("ascii")
        body = _LINE_BREAK.sub(b"\n", self._body)
        encoding = self.params.text_encoding

        if encoding == TransferEncoding.BASE64:
            # text is encoded in canonical CRLF form
            encoded = base64.encodebytes(body.replace(b"\n", b"\r\n"))
            return encoded.replace(b"\n", eol)
        if encoding == TransferEncoding.QUOTED_PRINTABLE:
            return binascii.b2a_qp(body, istext=True).replace(b"\n", eol)
        return body.replace(b"\n", eol)
