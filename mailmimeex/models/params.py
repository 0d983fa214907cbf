"""MIME parameter set model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from mailmimeex.services.charset.base import UnsupportedCharsetError
from mailmimeex.services.charset.registry import default_registry
from mailmimeex.utils.charset_utils import base_charset


class TransferEncoding(str, Enum):
    """Content-Transfer-Encoding values accepted for headers and bodies."""

    SEVEN_BIT = "7bit"
    EIGHT_BIT = "8bit"
    BASE64 = "base64"
    QUOTED_PRINTABLE = "quoted-printable"


class MimeParams(BaseModel):
    """
    Encodings and charsets used when composing a message.

    Charset fields hold a charset name optionally followed by `;`-separated
    parameters (e.g. "US-ASCII; format=flowed"). An empty charset means
    US-ASCII.

    Charset names are checked against the package registry, or against the
    registry given as `context={"registry": ...}` to model_validate().
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    head_encoding: TransferEncoding = TransferEncoding.QUOTED_PRINTABLE
    text_encoding: TransferEncoding = TransferEncoding.EIGHT_BIT
    html_encoding: TransferEncoding = TransferEncoding.QUOTED_PRINTABLE
    head_charset: str = "UTF-8"
    text_charset: str = "UTF-8"
    html_charset: str = "UTF-8"

    @field_validator("head_charset", "text_charset", "html_charset")
    def validate_charset(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if v:
            registry = (info.context or {}).get("registry", default_registry)
            try:
                registry.lookup(base_charset(v))
            except UnsupportedCharsetError as e:
                raise ValueError(str(e))
        return v

    @classmethod
    def names(cls) -> list[str]:
        """Return the accepted parameter names."""
        return list(cls.model_fields)

    def replace(self, registry=None, **changes) -> "MimeParams":
        """
        Return a validated copy with some fields changed.

        Args:
            registry: Charset registry for name checks (default: package registry)
            changes: Field values to set

        Raises:
            ValidationError: If the resulting parameter set is invalid
        """
        data = self.model_dump()
        data.update(changes)
        context = {"registry": registry} if registry is not None else None
        return type(self).model_validate(data, context=context)
