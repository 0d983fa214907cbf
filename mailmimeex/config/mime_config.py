"""Configuration models for message composition."""

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from mailmimeex.models.params import MimeParams
from mailmimeex.services.charset.base import UnsupportedCharsetError
from mailmimeex.services.charset.registry import default_registry


class MimeConfig(BaseModel):
    """
    Main composition configuration.

    Charset names are checked against the package registry unless another
    one is passed as `context={"registry": ...}` to model_validate().
    """

    schema_version: str = "1.0"
    default_source_encoding: str = "UTF-8"
    eol: str = "\r\n"
    encoded_word_max_length: int = 75
    defaults: MimeParams = Field(default_factory=MimeParams)

    @field_validator("schema_version")
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v

    @field_validator("default_source_encoding")
    def validate_source_encoding(cls, v: str, info: ValidationInfo) -> str:
        registry = (info.context or {}).get("registry", default_registry)
        try:
            registry.lookup(v)
        except UnsupportedCharsetError as e:
            raise ValueError(str(e))
        return v

    @field_validator("eol")
    def validate_eol(cls, v: str) -> str:
        if v not in ("\r\n", "\n"):
            raise ValueError("eol must be CRLF or LF")
        return v

    @field_validator("encoded_word_max_length")
    def validate_max_length(cls, v: int) -> int:
        # prefix and suffix alone take a dozen characters
        if v < 20:
            raise ValueError("encoded_word_max_length must be at least 20")
        return v
