"""Share service for turning podcasts into shareable links.

Converts between ingestion episodes and compact tracks, encodes feeds into
share codes and builds the links the web client opens.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional
from urllib.parse import parse_qs, quote, urlparse

from src.config import Config
from src.packt import (
    CompressionOptions,
    Feed,
    PacktError,
    Track,
    compress_feed,
    decompress_feed,
)
from src.podcast.feed_parser import Episode, Podcast
from src.utils.feed_utils import (
    format_date,
    format_duration,
    parse_date,
    parse_duration,
    strip_html,
)

logger = logging.getLogger(__name__)

SHARE_TYPES = ("track", "frequency")
SHARE_MODES = ("wave-source", "embedded-payload", "rss-source")
COMPRESSION_MODES = ("full", "auto", "minimal")

MAX_SHARED_DESCRIPTION_LENGTH = 300
FULL_MODE_DESCRIPTION_LENGTH = 300
MINIMAL_MODE_TITLE_LENGTH = 15


@dataclass
class FilterOptions:
    """Which optional track fields a share includes."""

    include_descriptions: bool = True
    include_images: bool = True
    include_dates_and_durations: bool = True
    compression_mode: str = "auto"


@dataclass
class ShareLink:
    """A generated share link and its size diagnostics."""

    url: str
    length: int
    is_too_long: bool
    payload_length: int
    warning: Optional[str] = None


def extract_share_code(value: str) -> str:
    """
    Pull the share code out of a share link.

    Accepts either a full link (``https://host/#/?s=CODE``) or a bare code.
    """
    value = value.strip()
    if "s=" not in value:
        return value

    parsed = urlparse(value)
    for part in (parsed.fragment, parsed.query):
        query = part.split("?", 1)[-1]
        codes = parse_qs(query).get("s")
        if codes:
            return codes[0]
    return value


class ShareService:
    """Service for encoding podcasts into share links.

    Example:
        service = ShareService(Config())
        link = service.generate_url(feed, share_type="frequency")
        print(link.url)
    """

    def __init__(
        self,
        config: Config,
        compress: Callable[..., object] = compress_feed,
        decompress: Callable[[str], Feed] = decompress_feed,
    ):
        """Initialize the share service.

        Args:
            config: Application configuration with share settings.
            compress: Feed compression function.
            decompress: Feed decompression function.
        """
        self.config = config
        self._compress = compress
        self._decompress = decompress

    # Conversions

    def sanitize_description(self, html: Optional[str]) -> str:
        """Strip HTML and cap the text at 300 characters."""
        text = strip_html(html)
        if len(text) > MAX_SHARED_DESCRIPTION_LENGTH:
            text = text[: MAX_SHARED_DESCRIPTION_LENGTH - 3] + "..."
        return text.strip()

    def episode_to_track(self, episode: Episode) -> Track:
        """Convert an ingested episode to its compact track form."""
        return Track(
            title=episode.title or None,
            url=episode.audio_url or None,
            description=self.sanitize_description(episode.description) or None,
            date=parse_date(episode.pub_date),
            duration=parse_duration(episode.duration) if episode.duration else None,
            image=episode.image or None,
        )

    def track_to_episode(
        self,
        track: Track,
        podcast_id: str,
        index: int,
        feed_image: Optional[str] = None,
    ) -> Episode:
        """Convert a shared track back to an episode for display."""
        if track.date is not None:
            pub_date = format_date(track.date)
        else:
            pub_date = datetime.now(timezone.utc).isoformat()

        return Episode(
            id=f"shared-{index}",
            podcast_id=podcast_id,
            title=track.title or "Untitled",
            audio_url=track.url or "",
            description=track.description or "",
            pub_date=pub_date,
            duration=format_duration(track.duration) if track.duration else "00:00",
            link=track.url or "",
            image=track.image or feed_image or self.config.DEFAULT_PODCAST_IMAGE,
        )

    def podcast_to_feed(self, podcast: Podcast, episodes: List[Episode]) -> Feed:
        """Build a compact feed from a parsed podcast and its episodes."""
        return Feed(
            title=podcast.title or None,
            description=self.sanitize_description(podcast.description) or None,
            url=podcast.feed_url or None,
            image=podcast.image or None,
            tracks=[self.episode_to_track(episode) for episode in episodes],
        )

    # Encoding

    def encode(
        self,
        feed: Feed,
        compression_mode: str = "auto",
        max_chars: Optional[int] = None,
        remove_images: bool = False,
    ) -> str:
        """
        Compress a feed into a share code.

        Modes:
            full: cap descriptions at 300 characters, no size budget
            auto: fit within max_chars (default SHARE_MAX_CHARS)
            minimal: drop descriptions, cap titles, fit within max_chars
                (default SHARE_MINIMAL_MAX_CHARS)

        Raises:
            ValueError: If the mode is unknown
            CompressionBudgetError: If the feed cannot be made to fit
        """
        if compression_mode == "full":
            options = CompressionOptions(max_description_length=FULL_MODE_DESCRIPTION_LENGTH)
        elif compression_mode == "auto":
            options = CompressionOptions(max_chars=max_chars or self.config.SHARE_MAX_CHARS)
        elif compression_mode == "minimal":
            options = CompressionOptions(
                max_chars=max_chars or self.config.SHARE_MINIMAL_MAX_CHARS,
                remove_descriptions=True,
                max_title_length=MINIMAL_MODE_TITLE_LENGTH,
            )
        else:
            raise ValueError(
                f"Unknown compression mode '{compression_mode}'. "
                f"Expected one of: {', '.join(COMPRESSION_MODES)}"
            )

        options.remove_images = remove_images
        return self._compress(feed, options).data

    def decode(self, code: str) -> Optional[Feed]:
        """
        Decode a share code or share link.

        Returns:
            The shared feed, or None if the code is invalid.
        """
        try:
            return self._decompress(extract_share_code(code))
        except PacktError as e:
            logger.warning(f"Failed to decode share code: {e}")
            return None

    def generate_url(
        self,
        feed: Feed,
        share_type: str = "frequency",
        share_mode: str = "embedded-payload",
        episode_id: Optional[str] = None,
        compression_mode: str = "auto",
        remove_images: bool = False,
    ) -> ShareLink:
        """
        Generate a share link for a feed.

        RSS-source podcast shares and wave-source episode shares link to
        the podcast route by feed URL. Everything else embeds the
        compressed feed in the link.

        Returns:
            ShareLink; when compression fails the url is empty and the
            warning explains why.
        """
        base_url = self.config.SHARE_BASE_URL

        if share_type == "frequency" and share_mode == "rss-source" and feed.url:
            url = f"{base_url}/#/podcast/{quote(feed.url, safe='')}"
            return ShareLink(url=url, length=len(url), is_too_long=False, payload_length=0)

        if share_type == "track" and share_mode == "wave-source" and feed.url and episode_id:
            url = (
                f"{base_url}/#/podcast/{quote(feed.url, safe='')}"
                f"/episode/{quote(episode_id, safe='')}"
            )
            return ShareLink(url=url, length=len(url), is_too_long=False, payload_length=0)

        try:
            code = self.encode(
                feed,
                compression_mode=compression_mode,
                max_chars=self.config.SHARE_MAX_CHARS,
                remove_images=remove_images,
            )
        except PacktError as e:
            logger.warning(f"Share link generation failed: {e}")
            return ShareLink(
                url="",
                length=0,
                is_too_long=True,
                payload_length=0,
                warning=(
                    f"Cannot generate shareable link: {e} Try sharing with RSS/wave "
                    f"mode or reducing the number of episodes."
                ),
            )

        url = f"{base_url}/#/?s={code}"
        max_length = self.config.SHARE_MAX_URL_LENGTH
        is_too_long = len(url) > max_length
        warning = None
        if is_too_long:
            warning = (
                f"URL exceeds {max_length} characters ({len(url)}). Some older "
                f"browsers or platforms may not support URLs this long."
            )

        return ShareLink(
            url=url,
            length=len(url),
            is_too_long=is_too_long,
            payload_length=len(code),
            warning=warning,
        )

    # Episode selection

    def apply_filters(self, tracks: List[Track], filters: FilterOptions) -> List[Track]:
        """Drop the optional fields the filters exclude."""
        filtered = []
        for track in tracks:
            keep_meta = filters.include_dates_and_durations
            filtered.append(Track(
                title=track.title,
                url=track.url,
                description=track.description if filters.include_descriptions else None,
                image=track.image if filters.include_images else None,
                date=track.date if keep_meta else None,
                duration=track.duration if keep_meta else None,
            ))
        return filtered

    def calculate_max_episodes(
        self,
        podcast: Podcast,
        episodes: List[Episode],
        filters: FilterOptions,
    ) -> int:
        """
        Binary search the number of leading episodes whose share link fits.

        Returns:
            Largest episode count whose link stays within
            SHARE_MAX_URL_LENGTH, at least 1 when there are episodes.
        """
        if not episodes:
            return 0

        tracks = [self.episode_to_track(episode) for episode in episodes]
        low, high = 1, len(tracks)
        best = 1

        while low <= high:
            mid = (low + high) // 2
            feed = Feed(
                title=podcast.title or None,
                description=self.sanitize_description(podcast.description) or None,
                url=podcast.feed_url or None,
                tracks=self.apply_filters(tracks[:mid], filters),
            )
            link = self.generate_url(
                feed,
                share_type="frequency",
                share_mode="embedded-payload",
                compression_mode=filters.compression_mode,
                remove_images=not filters.include_images,
            )

            if link.url and link.length <= self.config.SHARE_MAX_URL_LENGTH:
                best = mid
                low = mid + 1
            else:
                high = mid - 1

        logger.info(f"Up to {best} of {len(episodes)} episodes fit in a share link")
        return best
