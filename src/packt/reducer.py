"""Lossy truncation and removal applied before encoding."""

import dataclasses
from typing import Optional

from .models import CompressionOptions, Feed, Track

ELLIPSIS = "…"


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    """
    Cut a string to ``max_length`` characters, ending in an ellipsis.

    The ellipsis is a single character, so a truncated string is exactly
    ``max_length`` long. Strings within the limit are returned unchanged.
    """
    if not value or len(value) <= max_length:
        return value
    if max_length < 1:
        return ""
    return value[: max_length - 1] + ELLIPSIS


def _remove_fields(record, options: CompressionOptions):
    """Null out each named field that exists on the record."""
    if not options.remove_fields:
        return record
    names = {f.name for f in dataclasses.fields(record)}
    changes = {
        name: None
        for name in options.remove_fields
        if name in names and name != "tracks"
    }
    return dataclasses.replace(record, **changes) if changes else record


def reduce_track(track: Track, options: Optional[CompressionOptions] = None) -> Track:
    """Apply truncation and removal options to a track, returning a new one."""
    options = options or CompressionOptions()
    result = dataclasses.replace(track)

    if options.max_title_length is not None:
        result.title = truncate(result.title, options.max_title_length)

    if options.max_description_length is not None:
        result.description = truncate(result.description, options.max_description_length)

    if options.remove_descriptions:
        result.description = None

    if options.remove_images:
        result.image = None

    return _remove_fields(result, options)


def reduce_feed(feed: Feed, options: Optional[CompressionOptions] = None) -> Feed:
    """
    Apply options to the feed's own metadata and to every track.

    Returns a new Feed; the input is left untouched.
    """
    options = options or CompressionOptions()
    result = dataclasses.replace(
        feed,
        tracks=[reduce_track(track, options) for track in feed.tracks],
    )

    if options.max_title_length is not None:
        result.title = truncate(result.title, options.max_title_length)

    if options.max_description_length is not None:
        result.description = truncate(result.description, options.max_description_length)

    if options.remove_descriptions:
        result.description = None

    if options.remove_images:
        result.image = None

    return _remove_fields(result, options)
