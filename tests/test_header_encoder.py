"""Tests for HeaderEncoder."""

import base64

import pytest

from mailmimeex.services.charset import TranscodingError
from mailmimeex.services.header.encoder import HeaderEncoder, b_encode, q_encode
from mailmimeex.utils.unicode_utils import decode_email_header


class TestQEncode:
    """Test the RFC 2047 Q encoding."""

    def test_space_becomes_underscore(self):
        """Test spaces are written as underscores."""
        assert q_encode(b"a b") == "a_b"

    def test_specials_are_escaped(self):
        """Test characters outside the phrase-safe set are escaped."""
        assert q_encode(b"a=b?c_d") == "a=3Db=3Fc=5Fd"

    def test_safe_characters_are_kept(self):
        """Test letters, digits and !*+-/ pass unchanged."""
        assert q_encode(b"Az09!*+-/") == "Az09!*+-/"

    def test_empty_value(self):
        """Test empty input gives an empty payload."""
        assert q_encode(b"") == ""
        assert b_encode(b"") == ""

    def test_b_encode_is_plain_base64(self):
        """Test the B payload is the base64 of the raw bytes."""
        data = "テスト".encode("utf-8")
        assert b_encode(data) == base64.b64encode(data).decode("ascii")


class TestHeaderEncoder:
    """Test encoded-word generation and folding."""

    @pytest.fixture
    def encoder(self):
        """Create an encoder with CRLF folding."""
        return HeaderEncoder()

    def test_plain_ascii_passes_through(self, encoder):
        """Test printable ASCII values are not encoded."""
        assert encoder.encode_value("Subject", b"Hello, world", "UTF-8", "quoted-printable") == "Hello, world"

    def test_q_words_fold_on_character_boundaries(self, encoder):
        """Test Q words never split a UTF-8 character."""
        value = "テストメールです".encode("utf-8")
        result = encoder.encode_value("Subject", value, "UTF-8", "quoted-printable")

        assert result == (
            "=?UTF-8?Q?=E3=83=86=E3=82=B9=E3=83=88=E3=83=A1=E3=83=BC=E3=83=AB?=\r\n"
            " =?UTF-8?Q?=E3=81=A7=E3=81=99?="
        )

    def test_long_base64_value_respects_line_limit(self, encoder):
        """Test B words stay within 75 characters and decode back."""
        text = "長い件名のテストです。" * 6
        result = encoder.encode_value("Subject", text.encode("utf-8"), "UTF-8", "base64")
        words = result.split("\r\n ")

        assert len(words) > 1
        assert len("Subject: ") + len(words[0]) <= 75
        assert all(len(word) <= 75 for word in words)
        assert all(word.startswith("=?UTF-8?B?") and word.endswith("?=") for word in words)
        assert decode_email_header(result) == text

    def test_iso_2022_jp_words_are_self_contained(self, encoder):
        """Test each ISO-2022-JP word starts with a designation and ends in ASCII."""
        text = "これは折り返しの確認用の少し長めの件名になります"
        value = text.encode("iso2022_jp")
        result = encoder.encode_value("Subject", value, "ISO-2022-JP", "base64")
        words = result.split("\r\n ")

        assert len(words) > 1
        for word in words:
            payload = base64.b64decode(word[len("=?ISO-2022-JP?B?") : -2])
            assert payload.startswith(b"\x1b$B")
            assert payload.endswith(b"\x1b(B")
        assert decode_email_header(result) == text

    def test_multi_valued_field(self, encoder):
        """Test list values are encoded one by one."""
        value = [b"plain", "テスト".encode("utf-8")]
        result = encoder.encode_field("X-Tag", value, "UTF-8", "quoted-printable")

        assert result == ["plain", "=?UTF-8?Q?=E3=83=86=E3=82=B9=E3=83=88?="]

    def test_text_value_encoded_in_charset(self, encoder):
        """Test str values are encoded in the header charset first."""
        result = encoder.encode_value("Subject", "です", "UTF-8", "quoted-printable")
        assert result == "=?UTF-8?Q?=E3=81=A7=E3=81=99?="

    def test_lf_folding(self):
        """Test the configured EOL joins continuation lines."""
        encoder = HeaderEncoder(eol="\n")
        result = encoder.encode_value("Subject", "テストメールです".encode("utf-8"), "UTF-8", "quoted-printable")
        assert "\n =?UTF-8?Q?" in result
        assert "\r" not in result

    def test_invalid_bytes_raise_error(self, encoder):
        """Test bytes invalid in the declared charset name the header."""
        with pytest.raises(TranscodingError) as exc_info:
            encoder.encode_value("Subject", b"\xff\xfe", "UTF-8", "quoted-printable")
        assert "Subject" in str(exc_info.value)
