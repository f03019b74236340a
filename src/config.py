import os

from dotenv import load_dotenv

from .podcast.feed_parser import DEFAULT_PODCAST_IMAGE

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    def __init__(self, env_file=None):
        """
        Initialize configuration by loading environment variables and setting default attributes.

        Loads environment variables from the provided .env file path when `env_file` is given; otherwise loads from the default environment. After loading, sets share link, feed fetching and logging settings using environment values with sensible defaults.
        Parameters:
            env_file (str | None): Optional path to a .env file to load environment variables from. If omitted, the default environment or default .env discovery is used.

        Raises:
            ValueError: If a setting has an invalid value.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        # Share link configuration
        # Base URL of the web client that opens share links
        share_base_url = os.getenv("SHARE_BASE_URL", "")
        if share_base_url and not share_base_url.lower().startswith(("http://", "https://")):
            raise ValueError(
                f"SHARE_BASE_URL must start with http:// or https://, got: {share_base_url}"
            )
        self.SHARE_BASE_URL = share_base_url.rstrip("/") if share_base_url else ""

        # Character budget for embedded payloads in "auto" mode
        self.SHARE_MAX_CHARS = int(os.getenv("SHARE_MAX_CHARS", "1900"))
        # Character budget for "minimal" mode
        self.SHARE_MINIMAL_MAX_CHARS = int(os.getenv("SHARE_MINIMAL_MAX_CHARS", "800"))
        # Links longer than this get a compatibility warning
        self.SHARE_MAX_URL_LENGTH = int(os.getenv("SHARE_MAX_URL_LENGTH", "2000"))

        for name in ("SHARE_MAX_CHARS", "SHARE_MINIMAL_MAX_CHARS", "SHARE_MAX_URL_LENGTH"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be a positive integer, got {getattr(self, name)}")

        # Feed fetching configuration
        self.FEED_FETCH_TIMEOUT = int(os.getenv("FEED_FETCH_TIMEOUT", "10"))
        self.FEED_USER_AGENT = os.getenv("FEED_USER_AGENT", "PodcastShare/1.0")

        # Artwork used when a feed declares none
        self.DEFAULT_PODCAST_IMAGE = os.getenv("DEFAULT_PODCAST_IMAGE", DEFAULT_PODCAST_IMAGE)

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.LOG_LEVEL}"
            )
