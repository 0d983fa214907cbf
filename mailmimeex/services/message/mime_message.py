"""Mutable MIME message with charset conversion."""

from dataclasses import fields
from typing import Optional, Union

from loguru import logger

from mailmimeex.models.options import FlowedOptions
from mailmimeex.services.charset.base import TranscodingError
from mailmimeex.services.charset.transcoder import CharsetTranscoder
from mailmimeex.utils.charset_utils import base_charset, charset_key
from .base import UnknownOptionError
from .composer import MimeComposer, to_bytes

DEFAULT_CHARSET = "US-ASCII"


class MimeMessage:
    """
    A text/plain message whose header and body charsets can be converted
    after the fact.

    The charset parameters always describe the bytes actually stored: header
    values are held in `head_charset`, the body in `text_charset`. Conversions
    transcode every affected value first and only then update the parameter
    and the stored values, so a failed conversion leaves the message as it was.

    Not thread-safe; callers sharing an instance must serialize access.
    """

    def __init__(self, composer: MimeComposer, options: FlowedOptions, transcoder: CharsetTranscoder):
        """
        Initialize message. Use MessageBuilder or build_message() instead.

        Args:
            composer: Composer holding headers, parameters and body
            options: RFC 3676 options derived at build time
            transcoder: Charset transcoder
        """
        self._composer = composer
        self._options = options
        self._transcoder = transcoder

    # ======== Headers ========

    def get_headers(self) -> dict:
        """
        Get encoded headers.

        Returns:
            Mapping of field name to RFC 2047-encoded str (list of str for
            multi-valued fields), content headers first
        """
        return self._composer.headers()

    def get_raw_headers(self) -> dict:
        """
        Get raw headers as stored, before any RFC 2047 encoding.

        Returns:
            Copy of the header store; pass an edited copy to set_headers()
        """
        return self._composer.raw_headers()

    def set_headers(self, headers: dict) -> dict:
        """
        Replace raw headers.

        Returns:
            Encoded headers after replacement
        """
        return self._composer.set_headers(headers)

    # ======== Body ========

    def get_text_body(self) -> bytes:
        return self._composer.get_txt_body()

    def set_text_body(self, text: Union[bytes, str]) -> None:
        """
        Replace the body.

        Args:
            text: Body bytes in the current text charset, or text to be
                encoded in it

        Raises:
            TranscodingError: If text is not representable in the text charset
        """
        self._composer.set_txt_body(to_bytes(text, self.get_text_charset(), self._transcoder.registry))

    # ======== Options ========

    def get_option(self, name: str) -> Optional[str]:
        self._check_option(name)
        return getattr(self._options, name)

    def set_option(self, name: str, value: Optional[str]) -> None:
        self._check_option(name)
        setattr(self._options, name, value)

    @staticmethod
    def _check_option(name: str) -> None:
        if name not in {f.name for f in fields(FlowedOptions)}:
            raise UnknownOptionError(f"Unknown option: {name}")

    # ======== Parameters ========

    def set_param(self, name: str, value) -> None:
        """Set a parameter; see MimeComposer.set_param() for validation."""
        self._composer.set_param(name, value)

    def get_param(self, name: str) -> Optional[str]:
        return self._composer.get_param(name)

    def get_header_charset(self) -> str:
        """Base charset of `head_charset`, US-ASCII if unset."""
        return self._get_charset("head_charset")

    def get_text_charset(self) -> str:
        """Base charset of `text_charset`, US-ASCII if unset."""
        return self._get_charset("text_charset")

    def _get_charset(self, name: str) -> str:
        charset = self._composer.get_param(name)
        if not charset:
            return DEFAULT_CHARSET
        return base_charset(charset)

    # ======== Charset conversion ========

    def update_header_charset(self, new_charset: str, current_charset: Optional[str] = None) -> None:
        """
        Convert all raw header values to a new charset.

        Args:
            new_charset: Target charset, stored as `head_charset`
            current_charset: Charset the values are in now (default: the
                current `head_charset`)

        Raises:
            UnsupportedCharsetError: If a charset is unknown
            TranscodingError: If a header value cannot be converted
        """
        if not current_charset:
            current_charset = self.get_header_charset()
        if self._same_charset(new_charset, current_charset):
            return

        headers = self.get_raw_headers()
        changed = False
        for name, value in headers.items():
            try:
                new_value = self._transcoder.convert(value, new_charset, current_charset)
            except TranscodingError as e:
                raise TranscodingError(f"Cannot convert header {name}: {e}") from e
            if new_value != value:
                headers[name] = new_value
                changed = True

        self.set_param("head_charset", new_charset)
        if changed:
            self.set_headers(headers)
        logger.debug("Header charset {} -> {} (rewritten: {})", current_charset, new_charset, changed)

    def update_text_charset(self, new_charset: str, current_charset: Optional[str] = None) -> None:
        """
        Convert the body to a new charset.

        The new `text_charset` keeps the RFC 3676 `format`/`delsp` options,
        e.g. "ISO-2022-JP; format=flowed; delsp=yes".

        Args:
            new_charset: Target charset
            current_charset: Charset the body is in now (default: the current
                `text_charset`)

        Raises:
            UnsupportedCharsetError: If a charset is unknown
            TranscodingError: If the body cannot be converted
        """
        if not current_charset:
            current_charset = self.get_text_charset()
        if self._same_charset(new_charset, current_charset):
            return

        text = self._transcoder.convert(self.get_text_body(), new_charset, current_charset)
        self.set_param("text_charset", new_charset + self._options.charset_suffix())
        self.set_text_body(text)
        logger.debug("Text charset {} -> {}", current_charset, new_charset)

    def _same_charset(self, new_charset: str, current_charset: str) -> bool:
        # validates both names before anything is touched
        self._transcoder.registry.lookup(new_charset)
        self._transcoder.registry.lookup(current_charset)
        return charset_key(new_charset) == charset_key(current_charset)

    # ======== Serialization ========

    def get_message(self) -> bytes:
        """Serialize the message with encoded headers and transfer-encoded body."""
        return self._composer.get_message()
