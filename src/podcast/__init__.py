"""Podcast feed ingestion.

Provides functionality for:
- Fetching raw feed text
- Parsing RSS feeds into podcasts and episodes
"""

from ..utils.xml_utils import FeedParseError
from .feed_fetcher import FeedFetcher
from .feed_parser import Episode, FeedParser, ParsedFeed, Podcast, podcast_id_for_url

__all__ = [
    "Episode",
    "FeedFetcher",
    "FeedParseError",
    "FeedParser",
    "ParsedFeed",
    "Podcast",
    "podcast_id_for_url",
]
