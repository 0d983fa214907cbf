"""Construction of MimeMessage instances from raw headers and body."""

import re
from typing import Optional, Union

from loguru import logger

from mailmimeex.config.config_loader import ConfigLoader
from mailmimeex.config.mime_config import MimeConfig
from mailmimeex.models.options import FlowedOptions
from mailmimeex.services.charset.registry import CharsetRegistry, default_registry
from mailmimeex.services.charset.transcoder import CharsetTranscoder
from mailmimeex.services.header.encoder import HeaderEncoder
from mailmimeex.utils.charset_utils import base_charset
from .composer import MimeComposer, to_bytes
from .mime_message import MimeMessage

CHARSET_PATTERN = re.compile(r"""charset\s*=\s*"?([^";\s]+)"?""", re.IGNORECASE)


class MessageBuilder:
    """
    Build fully initialized MimeMessage instances.

    Defaults come from the configuration: Q-encoded UTF-8 headers and an
    8bit UTF-8 text body. A Content-Type among the input headers contributes
    its charset and its RFC 3676 format/delsp parameters.
    """

    def __init__(self, config: Optional[MimeConfig] = None, registry: Optional[CharsetRegistry] = None):
        """
        Initialize builder.

        Args:
            config: Composition configuration (default: loaded by ConfigLoader
                from the default config paths)
            registry: Charset registry (default: package registry)
        """
        self.config = config or ConfigLoader().load_config()
        self.registry = registry or default_registry

    def build(self, headers: Optional[dict] = None, text: Union[bytes, str] = b"") -> MimeMessage:
        """
        Build a message.

        Args:
            headers: Ordered mapping of field name to value or list of values;
                values are bytes, or text to be encoded in the header charset
            text: Body bytes, or text to be encoded in the text charset

        Returns:
            MimeMessage

        Raises:
            TranscodingError: If a text value is not representable in its charset
        """
        headers = dict(headers or {})
        defaults = self.config.defaults

        content_type = self._find_content_type(headers)
        options = FlowedOptions.from_content_type(content_type)
        text_charset = self._declared_charset(content_type) or base_charset(defaults.text_charset)
        params = defaults.replace(self.registry, text_charset=text_charset + options.charset_suffix())

        encoder = HeaderEncoder(
            eol=self.config.eol,
            max_length=self.config.encoded_word_max_length,
            registry=self.registry,
        )
        composer = MimeComposer(params, encoder, eol=self.config.eol)
        composer.set_txt_body(to_bytes(text, text_charset or "US-ASCII", self.registry))
        composer.set_headers(headers)

        transcoder = CharsetTranscoder(self.config.default_source_encoding, self.registry)
        logger.debug("Built message: {} header fields, options {}", len(headers), options)
        return MimeMessage(composer, options, transcoder)

    @staticmethod
    def _find_content_type(headers: dict) -> Optional[str]:
        for name, value in headers.items():
            if name.lower() != "content-type":
                continue
            if isinstance(value, (list, tuple)):
                value = value[0] if value else ""
            if isinstance(value, bytes):
                value = value.decode("latin-1")
            return value
        return None

    def _declared_charset(self, content_type: Optional[str]) -> Optional[str]:
        if not content_type:
            return None
        match = CHARSET_PATTERN.search(content_type)
        if not match:
            return None
        charset = match.group(1)
        if not self.registry.is_supported(charset):
            logger.warning("Ignoring unsupported Content-Type charset {}", charset)
            return None
        return charset


def build_message(
    headers: Optional[dict] = None,
    text: Union[bytes, str] = b"",
    config: Optional[MimeConfig] = None,
) -> MimeMessage:
    """Build a message with a default MessageBuilder."""
    return MessageBuilder(config).build(headers, text)
