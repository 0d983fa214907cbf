"""Shared fixtures."""

import pytest

from mailmimeex import MessageBuilder, MimeConfig


@pytest.fixture
def builder():
    """Create a MessageBuilder with default configuration."""
    return MessageBuilder(MimeConfig())


@pytest.fixture
def japanese_message(builder):
    """Message with a Japanese subject and body."""
    return builder.build({"Subject": "テストメールです"}, "こんにちは")


@pytest.fixture
def isolated_config_dir(tmp_path, monkeypatch):
    """Run with an empty home and working directory so no config files leak in."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    return tmp_path
