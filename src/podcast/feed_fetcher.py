"""Fetches raw feed text for the parsers.

A single GET with a timeout. Retries and proxy fallbacks are left to the
caller.
"""

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Downloads podcast feeds over HTTP.

    Example:
        fetcher = FeedFetcher(timeout=10)
        text = fetcher.fetch("https://example.com/feed.xml")
    """

    USER_AGENT = "PodcastShare/1.0"

    def __init__(
        self,
        timeout: int = 10,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            user_agent: Custom user agent string for requests
            session: Session to reuse, a new one is created if omitted
        """
        self.timeout = timeout
        self.user_agent = user_agent or self.USER_AGENT
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.user_agent})

    def fetch(self, url: str) -> str:
        """
        Fetch a feed and return its body as text.

        Args:
            url: Feed URL

        Returns:
            Response body

        Raises:
            ValueError: If the URL is not an http(s) URL
            requests.RequestException: If the request fails or returns an
                error status
        """
        sanitized_url = (url or "").strip()
        if not sanitized_url.lower().startswith(("http://", "https://")):
            raise ValueError("Please enter a valid URL.")

        logger.info(f"Fetching feed: {sanitized_url}")
        response = self.session.get(sanitized_url, timeout=self.timeout)
        response.raise_for_status()

        logger.debug(f"Fetched {len(response.content)} bytes from {sanitized_url}")
        return response.text

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()
