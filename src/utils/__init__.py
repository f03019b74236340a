"""Utility modules for podcast-share application."""

from .feed_utils import (
    format_date,
    format_duration,
    parse_date,
    parse_duration,
    strip_html,
)
from .xml_utils import FeedParseError

__all__ = [
    'FeedParseError',
    'format_date',
    'format_duration',
    'parse_date',
    'parse_duration',
    'strip_html',
]
