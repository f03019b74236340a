"""RSS feed parser for podcast metadata and episodes.

Turns raw feed text into a Podcast and its playable Episodes. Parsing is
tolerant: missing tags get defaults, namespaced tags are found with or
without their prefix, and items without audio are dropped.
"""

import base64
import hashlib
import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Union
from xml.dom.minidom import Element

from ..utils.xml_utils import (
    element_text,
    find_all,
    find_channel,
    find_tag,
    parse_document,
    tag_attr,
    tag_text,
)

logger = logging.getLogger(__name__)

DEFAULT_PODCAST_IMAGE = (
    "https://images.unsplash.com/photo-1478737270239-2fccd27ee8fb"
    "?w=800&auto=format&fit=crop&q=60"
)

UNTITLED_PODCAST = "Untitled Broadcast"
UNTITLED_EPISODE = "Untitled Episode"
UNKNOWN_AUTHOR = "Unknown Author"
DEFAULT_DURATION = "0:00"

PODCAST_ID_LENGTH = 16


@dataclass
class Episode:
    """Episode data extracted from an RSS item."""

    id: str
    podcast_id: str
    title: str
    audio_url: str
    description: str = ""
    pub_date: str = ""
    duration: str = DEFAULT_DURATION
    link: str = ""
    image: str = ""


@dataclass
class Podcast:
    """Podcast data extracted from an RSS channel."""

    id: str
    title: str
    feed_url: str
    description: str = ""
    image: str = DEFAULT_PODCAST_IMAGE
    author: str = UNKNOWN_AUTHOR


@dataclass
class ParsedFeed:
    """A podcast together with the episodes of one feed fetch."""

    podcast: Podcast
    episodes: List[Episode] = field(default_factory=list)


def podcast_id_for_url(feed_url: str) -> str:
    """
    Derive a stable podcast ID from its feed URL.

    Non-ASCII characters are dropped before hashing, so the same URL always
    produces the same ID.

    Args:
        feed_url: Canonical feed URL

    Returns:
        16 character URL-safe identifier
    """
    ascii_url = feed_url.encode("ascii", errors="ignore")
    digest = hashlib.sha256(ascii_url).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")[:PODCAST_ID_LENGTH]


class FeedParser:
    """Parser for podcast RSS feeds.

    Example:
        parser = FeedParser()
        parsed = parser.parse_string(text, "https://example.com/feed.xml")
        print(f"Podcast: {parsed.podcast.title}")
        for episode in parsed.episodes:
            print(f"  - {episode.title}")
    """

    def __init__(self, fallback_image: Optional[str] = None):
        """
        Initialize the feed parser.

        Args:
            fallback_image: Artwork URL used when a feed has no image
        """
        self.fallback_image = fallback_image or DEFAULT_PODCAST_IMAGE

    def parse_string(self, content: Union[str, bytes], feed_url: str) -> ParsedFeed:
        """
        Parse a podcast feed from string content.

        Args:
            content: RSS feed content
            feed_url: Canonical URL of the feed, used to derive the podcast ID

        Returns:
            ParsedFeed with podcast and episode data

        Raises:
            FeedParseError: If the content is not XML, is a webpage, or has
                no channel element
        """
        document = parse_document(content)
        channel = find_channel(document, content)

        podcast = self._parse_podcast(channel, feed_url)

        episodes = []
        seen_ids = set()
        # RSS 1.0 places items next to the channel rather than inside it
        for item in find_all(document, "item"):
            episode = self._parse_episode(item, podcast)
            if episode is None:
                continue

            if episode.id in seen_ids:
                base_id = episode.id
                suffix = 2
                while f"{base_id}-{suffix}" in seen_ids:
                    suffix += 1
                episode.id = f"{base_id}-{suffix}"
                logger.debug(f"Duplicate episode id {base_id!r}, using {episode.id!r}")
            seen_ids.add(episode.id)
            episodes.append(episode)

        logger.info(f"Parsed podcast '{podcast.title}' with {len(episodes)} episodes")
        return ParsedFeed(podcast=podcast, episodes=episodes)

    def _parse_podcast(self, channel: Element, feed_url: str) -> Podcast:
        """Extract show-level metadata from the channel."""
        # Channel lookups must not pick up tags from inside items
        skip = ("item",)

        author = (
            tag_text(channel, "itunes:author", skip)
            or tag_text(channel, "author", skip)
            or UNKNOWN_AUTHOR
        )

        return Podcast(
            id=podcast_id_for_url(feed_url),
            title=tag_text(channel, "title", skip) or UNTITLED_PODCAST,
            description=tag_text(channel, "description", skip),
            image=extract_channel_image(channel) or self.fallback_image,
            feed_url=feed_url,
            author=author,
        )

    def _parse_episode(self, item: Element, podcast: Podcast) -> Optional[Episode]:
        """
        Parse an RSS item into an Episode.

        Returns:
            Episode or None if the item has no enclosure URL
        """
        audio_url = tag_attr(item, "enclosure", "url")
        if not audio_url:
            logger.debug(f"Skipping item without enclosure: {tag_text(item, 'title')!r}")
            return None

        episode_id = tag_text(item, "guid") or audio_url or uuid.uuid4().hex[:10]

        return Episode(
            id=episode_id,
            podcast_id=podcast.id,
            title=tag_text(item, "title") or UNTITLED_EPISODE,
            audio_url=audio_url,
            description=tag_text(item, "description"),
            pub_date=tag_text(item, "pubDate"),
            duration=tag_text(item, "itunes:duration") or DEFAULT_DURATION,
            link=tag_text(item, "link"),
            image=tag_attr(item, "itunes:image", "href") or podcast.image,
        )


def extract_channel_image(channel: Element) -> Optional[str]:
    """
    Extract podcast artwork from the channel.

    Tries itunes:image, then image/url, then an href on image.

    Returns:
        Artwork URL or None when the feed declares none
    """
    skip = ("item",)

    href = tag_attr(channel, "itunes:image", "href", skip)
    if href:
        return href

    image = find_tag(channel, "image", skip)
    if image is not None:
        url = element_text(find_tag(image, "url"))
        if url:
            return url
        href = image.getAttribute("href").strip()
        if href:
            return href

    return None
