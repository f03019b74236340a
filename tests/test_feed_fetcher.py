"""Tests for the HTTP feed fetcher."""

import pytest
import requests
from unittest.mock import Mock

from src.podcast.feed_fetcher import FeedFetcher


@pytest.fixture
def mock_session():
    """Session double with a successful response."""
    session = Mock()
    session.headers = {}
    response = Mock()
    response.text = "<rss/>"
    response.content = b"<rss/>"
    response.raise_for_status.return_value = None
    session.get.return_value = response
    return session


class TestFeedFetcher:
    """Tests for FeedFetcher."""

    def test_fetch_returns_text(self, mock_session):
        fetcher = FeedFetcher(timeout=5, session=mock_session)

        assert fetcher.fetch("https://example.com/feed.xml") == "<rss/>"
        mock_session.get.assert_called_once_with("https://example.com/feed.xml", timeout=5)

    def test_url_is_trimmed(self, mock_session):
        fetcher = FeedFetcher(session=mock_session)

        fetcher.fetch("  https://example.com/feed.xml  ")

        mock_session.get.assert_called_once_with("https://example.com/feed.xml", timeout=10)

    def test_user_agent(self, mock_session):
        FeedFetcher(user_agent="TestAgent/2.0", session=mock_session)

        assert mock_session.headers["User-Agent"] == "TestAgent/2.0"

    def test_default_user_agent(self, mock_session):
        FeedFetcher(session=mock_session)

        assert mock_session.headers["User-Agent"] == FeedFetcher.USER_AGENT

    @pytest.mark.parametrize("url", ["", "ftp://example.com/feed", "example.com/feed.xml", None])
    def test_invalid_url(self, mock_session, url):
        fetcher = FeedFetcher(session=mock_session)

        with pytest.raises(ValueError, match="Please enter a valid URL."):
            fetcher.fetch(url)
        mock_session.get.assert_not_called()

    def test_http_error_propagates(self, mock_session):
        mock_session.get.return_value.raise_for_status.side_effect = requests.HTTPError("404")
        fetcher = FeedFetcher(session=mock_session)

        with pytest.raises(requests.HTTPError):
            fetcher.fetch("https://example.com/missing.xml")

    def test_connection_error_propagates(self, mock_session):
        mock_session.get.side_effect = requests.ConnectionError("refused")
        fetcher = FeedFetcher(session=mock_session)

        with pytest.raises(requests.RequestException):
            fetcher.fetch("https://example.com/feed.xml")

    def test_close(self, mock_session):
        FeedFetcher(session=mock_session).close()

        mock_session.close.assert_called_once()
