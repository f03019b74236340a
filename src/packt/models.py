"""Data models for the share code codec."""

from dataclasses import dataclass, field
from typing import List, Optional

# Single or double character keys keep the encoded payload small
TRACK_KEYS = {
    "title": "t",
    "url": "u",
    "date": "d",
    "duration": "du",
    "description": "de",
    "image": "i",
}

FEED_KEYS = {
    "title": "t",
    "description": "d",
    "image": "i",
    "url": "u",
    "tracks": "tr",
}


@dataclass
class Track:
    """A single episode in its compact form.

    Every field is optional; None means the value is unknown.
    """

    title: Optional[str] = None
    url: Optional[str] = None
    date: Optional[int] = None  # Unix timestamp, seconds
    duration: Optional[int] = None  # Seconds
    description: Optional[str] = None  # Plain text
    image: Optional[str] = None


@dataclass
class Feed:
    """A podcast and its tracks, in source order."""

    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None
    tracks: List[Track] = field(default_factory=list)


@dataclass
class CompressionOptions:
    """Options for compression.

    When max_chars is set the codec searches for the least destructive
    settings that fit. Otherwise the truncation and removal settings are
    applied as given.
    """

    # Direct compression settings
    max_title_length: Optional[int] = None
    max_description_length: Optional[int] = None
    remove_descriptions: bool = False
    remove_images: bool = False
    remove_fields: Optional[List[str]] = None

    # Auto-optimization
    max_chars: Optional[int] = None
    track_count: Optional[int] = None
    preserve_descriptions: bool = False
    preserve_fields: bool = False


@dataclass
class CompressionResult:
    """Result of a compression call."""

    data: str
    length: int
    track_count: int
    # Only set when the result came out of auto-optimization
    strategy: Optional[CompressionOptions] = None
