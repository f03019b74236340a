"""Compact, URL-safe share codes for podcast tracks and feeds.

Example:
    result = compress_feed(feed, CompressionOptions(max_chars=1900))
    restored = decompress_feed(result.data)
"""

from .errors import CompressionBudgetError, DecodeError, PacktError
from .models import CompressionOptions, CompressionResult, Feed, Track
from .optimizer import compress_feed, compress_track, decompress_feed, decompress_track
from .parser import parse_rss

__all__ = [
    "CompressionBudgetError",
    "CompressionOptions",
    "CompressionResult",
    "DecodeError",
    "Feed",
    "PacktError",
    "Track",
    "compress_feed",
    "compress_track",
    "decompress_feed",
    "decompress_track",
    "parse_rss",
]
