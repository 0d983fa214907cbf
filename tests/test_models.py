"""Tests for parameter and option models."""

import codecs

import pytest
from pydantic import ValidationError

from mailmimeex.models import FlowedOptions, MimeParams, TransferEncoding
from mailmimeex.services.charset import CharsetRegistry
from mailmimeex.services.charset.stdlib_codec import StdlibCodec


class TestFlowedOptions:
    """Test RFC 3676 option derivation."""

    @pytest.mark.parametrize(
        "content_type, expected_format, expected_delsp",
        [
            ("text/plain; charset=X; format=flowed; delsp=yes", "flowed", "yes"),
            ("text/plain; Format=FLOWED; DelSp=Yes", "flowed", "yes"),
            ("text/plain; format=flowed; delsp=no", "flowed", None),
            ("text/plain; format=fixed; delsp=yes", None, None),
            ("text/plain; delsp=yes", None, None),
            ("text/plain; charset=UTF-8", None, None),
            ("format=", None, None),
            ("", None, None),
            (None, None, None),
        ],
    )
    def test_from_content_type(self, content_type, expected_format, expected_delsp):
        """Test parsing is permissive and case-insensitive."""
        options = FlowedOptions.from_content_type(content_type)

        assert options.format == expected_format
        assert options.delsp == expected_delsp

    def test_charset_suffix(self):
        """Test the suffix carries format then delsp."""
        assert FlowedOptions().charset_suffix() == ""
        assert FlowedOptions("flowed").charset_suffix() == "; format=flowed"
        assert FlowedOptions("flowed", "yes").charset_suffix() == "; format=flowed; delsp=yes"

    def test_delsp_without_format_has_no_suffix(self):
        """Test delsp alone is not written."""
        assert FlowedOptions(None, "yes").charset_suffix() == ""


class TestMimeParams:
    """Test parameter set validation."""

    def test_defaults(self):
        """Test default encodings and charsets."""
        params = MimeParams()

        assert params.head_encoding == TransferEncoding.QUOTED_PRINTABLE
        assert params.text_encoding == TransferEncoding.EIGHT_BIT
        assert params.text_charset == "UTF-8"

    def test_names(self):
        """Test the fixed set of parameter names."""
        assert sorted(MimeParams.names()) == [
            "head_charset",
            "head_encoding",
            "html_charset",
            "html_encoding",
            "text_charset",
            "text_encoding",
        ]

    def test_encoding_coerced_from_string(self):
        """Test wire tokens are accepted for encodings."""
        params = MimeParams()
        params.text_encoding = "7bit"
        assert params.text_encoding is TransferEncoding.SEVEN_BIT

    def test_invalid_encoding_rejected(self):
        """Test unknown encodings are rejected on assignment."""
        params = MimeParams()
        with pytest.raises(ValidationError):
            params.head_encoding = "uuencode"

    def test_charset_with_parameters_accepted(self):
        """Test charset values may carry trailing parameters."""
        params = MimeParams(text_charset="US-ASCII; format=flowed")
        assert params.text_charset == "US-ASCII; format=flowed"

    def test_unknown_charset_rejected(self):
        """Test unknown charsets are rejected."""
        with pytest.raises(ValidationError):
            MimeParams(head_charset="X-BOGUS")

    def test_unknown_field_rejected(self):
        """Test the parameter set is closed."""
        with pytest.raises(ValidationError):
            MimeParams(eol="\n")

    def test_replace_validates_changes(self):
        """Test replace() returns a validated copy."""
        params = MimeParams()
        changed = params.replace(text_encoding="base64")

        assert changed.text_encoding is TransferEncoding.BASE64
        assert params.text_encoding is TransferEncoding.EIGHT_BIT
        with pytest.raises(ValidationError):
            params.replace(text_charset="X-MY-SJIS")

    def test_replace_with_custom_registry(self):
        """Test charsets are checked against the given registry."""
        registry = CharsetRegistry()
        registry.register(StdlibCodec("X-MY-SJIS", codecs.lookup("cp932")))

        params = MimeParams().replace(registry, text_charset="X-MY-SJIS; format=flowed")

        assert params.text_charset == "X-MY-SJIS; format=flowed"
