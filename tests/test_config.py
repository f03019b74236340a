"""Tests for configuration loading."""

import pytest

from src.config import Config
from src.podcast.feed_parser import DEFAULT_PODCAST_IMAGE


class TestConfig:
    """Tests for Config."""

    def test_defaults(self, monkeypatch):
        for name in (
            "SHARE_BASE_URL", "SHARE_MAX_CHARS", "SHARE_MINIMAL_MAX_CHARS",
            "SHARE_MAX_URL_LENGTH", "FEED_FETCH_TIMEOUT", "FEED_USER_AGENT",
            "DEFAULT_PODCAST_IMAGE", "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("src.config.load_dotenv", lambda *args, **kwargs: None)

        config = Config()

        assert config.SHARE_BASE_URL == ""
        assert config.SHARE_MAX_CHARS == 1900
        assert config.SHARE_MINIMAL_MAX_CHARS == 800
        assert config.SHARE_MAX_URL_LENGTH == 2000
        assert config.FEED_FETCH_TIMEOUT == 10
        assert config.FEED_USER_AGENT == "PodcastShare/1.0"
        assert config.DEFAULT_PODCAST_IMAGE == DEFAULT_PODCAST_IMAGE
        assert config.LOG_LEVEL == "INFO"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SHARE_MAX_CHARS", "1200")
        monkeypatch.setenv("FEED_USER_AGENT", "Custom/1.0")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config()

        assert config.SHARE_MAX_CHARS == 1200
        assert config.FEED_USER_AGENT == "Custom/1.0"
        assert config.LOG_LEVEL == "DEBUG"

    def test_base_url_trailing_slash_removed(self, monkeypatch):
        monkeypatch.setenv("SHARE_BASE_URL", "https://share.example.com/")

        assert Config().SHARE_BASE_URL == "https://share.example.com"

    def test_base_url_must_be_http(self, monkeypatch):
        monkeypatch.setenv("SHARE_BASE_URL", "share.example.com")

        with pytest.raises(ValueError, match="SHARE_BASE_URL must start with"):
            Config()

    def test_budget_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("SHARE_MAX_CHARS", "0")

        with pytest.raises(ValueError, match="SHARE_MAX_CHARS must be a positive integer"):
            Config()

    def test_budget_must_be_numeric(self, monkeypatch):
        monkeypatch.setenv("SHARE_MINIMAL_MAX_CHARS", "small")

        with pytest.raises(ValueError):
            Config()

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValueError, match="LOG_LEVEL must be one of"):
            Config()

    def test_env_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SHARE_MAX_URL_LENGTH", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("SHARE_MAX_URL_LENGTH=1500\n")

        config = Config(env_file=str(env_file))

        assert config.SHARE_MAX_URL_LENGTH == 1500
