"""Tests for configuration loading."""

import codecs
import json

import pytest
from pydantic import ValidationError

from mailmimeex.config import ConfigError, ConfigLoader, MimeConfig
from mailmimeex.models import TransferEncoding
from mailmimeex.services.charset import CharsetRegistry
from mailmimeex.services.charset.stdlib_codec import StdlibCodec


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path."""

    def _write(data):
        path = tmp_path / "mailmimeex.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return _write


class TestConfigLoader:
    """Test ConfigLoader."""

    def test_load_from_file(self, config_file):
        """Test values are read from the JSON file."""
        path = config_file(
            {
                "eol": "\n",
                "encoded_word_max_length": 60,
                "defaults": {"head_encoding": "base64", "text_charset": "ISO-2022-JP"},
            }
        )

        config = ConfigLoader(path).load_config()

        assert config.eol == "\n"
        assert config.encoded_word_max_length == 60
        assert config.defaults.head_encoding == TransferEncoding.BASE64
        assert config.defaults.text_charset == "ISO-2022-JP"
        assert config.defaults.head_charset == "UTF-8"

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test defaults are used when the file does not exist."""
        config = ConfigLoader(tmp_path / "missing.json").load_config()

        assert config == MimeConfig()

    def test_config_cached(self, config_file):
        """Test the loaded config is reused until reload."""
        path = config_file({"eol": "\n"})
        loader = ConfigLoader(path)
        first = loader.load_config()

        path.write_text(json.dumps({"eol": "\r\n"}), encoding="utf-8")

        assert loader.load_config() is first
        assert loader.reload().eol == "\r\n"

    def test_invalid_json(self, config_file):
        """Test malformed JSON raises ConfigError."""
        path = config_file("{not json")
        with pytest.raises(ConfigError):
            ConfigLoader(path).load_config()

    def test_non_object_json(self, config_file):
        """Test a JSON array raises ConfigError."""
        path = config_file("[1, 2]")
        with pytest.raises(ConfigError):
            ConfigLoader(path).load_config()

    @pytest.mark.parametrize(
        "data",
        [
            {"eol": "\r"},
            {"encoded_word_max_length": 10},
            {"default_source_encoding": "x-unknown"},
            {"schema_version": ""},
            {"defaults": {"text_encoding": "uuencode"}},
            {"defaults": {"head_charset": "x-unknown"}},
        ],
    )
    def test_invalid_values(self, config_file, data):
        """Test validation failures raise ConfigError."""
        path = config_file(data)
        with pytest.raises(ConfigError):
            ConfigLoader(path).load_config()


class TestMimeConfig:
    """Test MimeConfig validation against a charset registry."""

    def test_custom_registry_charsets(self):
        """Test charsets known only to a given registry validate through context."""
        registry = CharsetRegistry()
        registry.register(StdlibCodec("X-MY-SJIS", codecs.lookup("cp932")))
        data = {"default_source_encoding": "X-MY-SJIS", "defaults": {"text_charset": "X-MY-SJIS"}}

        config = MimeConfig.model_validate(data, context={"registry": registry})

        assert config.default_source_encoding == "X-MY-SJIS"
        assert config.defaults.text_charset == "X-MY-SJIS"
        with pytest.raises(ValidationError):
            MimeConfig.model_validate(data)
