"""Key shortening and MessagePack encoding for tracks and feeds."""

from typing import Any, Dict

import msgpack

from .errors import DecodeError
from .models import FEED_KEYS, TRACK_KEYS, Feed, Track


def track_to_short_keys(track: Track) -> Dict[str, Any]:
    """
    Convert a Track to a short-keyed dict.

    Fields that are None are left out.
    """
    result = {}
    for name, key in TRACK_KEYS.items():
        value = getattr(track, name)
        if value is not None:
            result[key] = value
    return result


def short_keys_to_track(obj: Dict[str, Any]) -> Track:
    """Convert a short-keyed dict back to a Track, missing keys become None."""
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected a track mapping, got {type(obj).__name__}")
    return Track(**{name: obj.get(key) for name, key in TRACK_KEYS.items()})


def feed_to_short_keys(feed: Feed) -> Dict[str, Any]:
    """Convert a Feed to a short-keyed dict, tracks included."""
    result = {}
    for name, key in FEED_KEYS.items():
        if name == "tracks":
            continue
        value = getattr(feed, name)
        if value is not None:
            result[key] = value

    result[FEED_KEYS["tracks"]] = [track_to_short_keys(track) for track in feed.tracks]
    return result


def short_keys_to_feed(obj: Dict[str, Any]) -> Feed:
    """Convert a short-keyed dict back to a Feed."""
    if not isinstance(obj, dict):
        raise DecodeError(f"Expected a feed mapping, got {type(obj).__name__}")

    tracks = obj.get(FEED_KEYS["tracks"]) or []
    if not isinstance(tracks, list):
        raise DecodeError(f"Expected a track list, got {type(tracks).__name__}")

    return Feed(
        title=obj.get(FEED_KEYS["title"]),
        description=obj.get(FEED_KEYS["description"]),
        url=obj.get(FEED_KEYS["url"]),
        image=obj.get(FEED_KEYS["image"]),
        tracks=[short_keys_to_track(track) for track in tracks],
    )


def encode_msgpack(data: Any) -> bytes:
    """Encode data to MessagePack."""
    return msgpack.packb(data, use_bin_type=True)


def decode_msgpack(data: bytes) -> Any:
    """
    Decode MessagePack data.

    Raises:
        DecodeError: If the payload is not valid MessagePack
    """
    try:
        return msgpack.unpackb(data, raw=False)
    except (msgpack.UnpackException, ValueError) as e:
        raise DecodeError(f"Invalid MessagePack payload: {e}") from e
