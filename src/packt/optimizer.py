"""Share code encoding with automatic size optimization.

The encode pipeline is reduce -> shorten keys -> MessagePack -> DEFLATE ->
base64url. When a character budget is given, candidate reductions are
tried from least to most destructive and the first one that fits wins.

For feeds the number of included tracks is binary searched. That search
assumes the encoded length never shrinks when a track is added under the
same strategy. Compression makes this true in practice, not by
construction, so a feed with wildly varying track sizes could end up with
fewer tracks than would actually fit.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from .compressor import compress, decompress, from_base64url, to_base64url
from .encoder import (
    decode_msgpack,
    encode_msgpack,
    feed_to_short_keys,
    short_keys_to_feed,
    short_keys_to_track,
    track_to_short_keys,
)
from .errors import CompressionBudgetError
from .models import CompressionOptions, CompressionResult, Feed, Track
from .reducer import reduce_feed, reduce_track

logger = logging.getLogger(__name__)

# Candidate limits, least destructive first
TRACK_DESCRIPTION_LENGTHS = [None, 150, 100, 60, 40, 25]
FEED_DESCRIPTION_LENGTHS = [None, 150, 100, 60, 40, 25, 15]
MODERATE_TITLE_LENGTHS = [None, 50, 40, 30]
TRACK_AGGRESSIVE_TITLE_LENGTHS = [20, 15, 10, 5]
FEED_AGGRESSIVE_TITLE_LENGTHS = [20, 15, 10, 5, 3]
FEED_FINAL_DESCRIPTION_LENGTHS = [25, 15, 10, 5]


def encode_track(track: Track, options: Optional[CompressionOptions] = None) -> str:
    """Run a track through the full encode pipeline."""
    reduced = reduce_track(track, options)
    packed = encode_msgpack(track_to_short_keys(reduced))
    return to_base64url(compress(packed))


def encode_feed(feed: Feed, options: Optional[CompressionOptions] = None) -> str:
    """Run a feed through the full encode pipeline."""
    reduced = reduce_feed(feed, options)
    packed = encode_msgpack(feed_to_short_keys(reduced))
    return to_base64url(compress(packed))


def compress_track(track: Track, options: Optional[CompressionOptions] = None) -> CompressionResult:
    """
    Compress a track into a share code.

    Args:
        track: Track to compress
        options: Compression options. With max_chars set the result is
            auto-optimized to fit; otherwise the options are applied as-is.

    Returns:
        CompressionResult with the encoded data

    Raises:
        CompressionBudgetError: If max_chars cannot be met

    Example:
        result = compress_track(track, CompressionOptions(max_chars=300))
    """
    options = options or CompressionOptions()

    if options.max_chars is not None:
        return _auto_optimize_track(track, options.max_chars, options)

    data = encode_track(track, options)
    return CompressionResult(data=data, length=len(data), track_count=1)


def decompress_track(code: str) -> Track:
    """
    Decode a track share code.

    Raises:
        DecodeError: If the code is malformed or corrupted
    """
    return short_keys_to_track(decode_msgpack(decompress(from_base64url(code))))


def compress_feed(feed: Feed, options: Optional[CompressionOptions] = None) -> CompressionResult:
    """
    Compress a feed into a share code.

    Args:
        feed: Feed to compress
        options: Compression options. With max_chars set, the strategy and
            the number of tracks are optimized to fit.

    Returns:
        CompressionResult with the encoded data and included track count

    Raises:
        CompressionBudgetError: If max_chars cannot be met

    Example:
        result = compress_feed(feed, CompressionOptions(max_chars=1900, track_count=50))
    """
    options = options or CompressionOptions()

    if options.max_chars is not None:
        return _auto_optimize_feed(feed, options.max_chars, options)

    if options.track_count is not None:
        feed = _slice_feed(feed, options.track_count)

    data = encode_feed(feed, options)
    return CompressionResult(data=data, length=len(data), track_count=len(feed.tracks))


def decompress_feed(code: str) -> Feed:
    """
    Decode a feed share code.

    Raises:
        DecodeError: If the code is malformed or corrupted
    """
    return short_keys_to_feed(decode_msgpack(decompress(from_base64url(code))))


def _inherited(options: CompressionOptions) -> dict:
    """Caller settings every generated strategy keeps."""
    return {
        "remove_images": options.remove_images,
        "remove_fields": None if options.preserve_fields else options.remove_fields,
    }


def track_strategies(options: CompressionOptions) -> List[CompressionOptions]:
    """
    Ordered candidate strategies for a single track.

    1. description caps x moderate title caps
    2. description removal x moderate title caps
    3. aggressive title caps, keeping then removing descriptions

    Description removal is skipped when preserve_descriptions is set.
    """
    base = _inherited(options)
    can_remove = not options.preserve_descriptions
    strategies = []

    for desc_len in TRACK_DESCRIPTION_LENGTHS:
        for title_len in MODERATE_TITLE_LENGTHS:
            strategies.append(CompressionOptions(
                max_title_length=title_len,
                max_description_length=desc_len,
                **base,
            ))

    if can_remove:
        for title_len in MODERATE_TITLE_LENGTHS:
            strategies.append(CompressionOptions(
                max_title_length=title_len,
                remove_descriptions=True,
                **base,
            ))

    for remove_desc in ([False, True] if can_remove else [False]):
        # Caps are moot once descriptions are removed
        desc_lens = [None] if remove_desc else TRACK_DESCRIPTION_LENGTHS
        for desc_len in desc_lens:
            for title_len in TRACK_AGGRESSIVE_TITLE_LENGTHS:
                strategies.append(CompressionOptions(
                    max_title_length=title_len,
                    max_description_length=desc_len,
                    remove_descriptions=remove_desc,
                    **base,
                ))

    return strategies


def feed_strategies(options: CompressionOptions) -> List[CompressionOptions]:
    """
    Ordered candidate strategies for a feed.

    Same shape as the track search with a longer tail: description removal
    with aggressive title caps, then a final sweep over very short
    descriptions and titles.
    """
    base = _inherited(options)
    can_remove = not options.preserve_descriptions
    strategies = []

    for desc_len in FEED_DESCRIPTION_LENGTHS:
        for title_len in MODERATE_TITLE_LENGTHS:
            strategies.append(CompressionOptions(
                max_title_length=title_len,
                max_description_length=desc_len,
                **base,
            ))

    if can_remove:
        for title_len in MODERATE_TITLE_LENGTHS + FEED_AGGRESSIVE_TITLE_LENGTHS:
            strategies.append(CompressionOptions(
                max_title_length=title_len,
                remove_descriptions=True,
                **base,
            ))

    # Removal with aggressive titles is already listed above
    for desc_len in FEED_FINAL_DESCRIPTION_LENGTHS:
        for title_len in FEED_AGGRESSIVE_TITLE_LENGTHS:
            strategies.append(CompressionOptions(
                max_title_length=title_len,
                max_description_length=desc_len,
                **base,
            ))

    return strategies


def _first_fit(
    encode: Callable[[CompressionOptions], str],
    strategies: List[CompressionOptions],
    max_chars: int,
) -> Optional[tuple]:
    """Return (data, strategy) for the first strategy within budget."""
    for strategy in strategies:
        data = encode(strategy)
        if len(data) <= max_chars:
            return data, strategy
    return None


def _auto_optimize_track(
    track: Track,
    max_chars: int,
    options: CompressionOptions,
) -> CompressionResult:
    """Find the least destructive strategy that fits a track into max_chars."""
    fit = _first_fit(
        lambda strategy: encode_track(track, strategy),
        track_strategies(options),
        max_chars,
    )
    if fit is None:
        raise CompressionBudgetError("track", max_chars)

    data, strategy = fit
    logger.debug(f"Track fits in {len(data)}/{max_chars} chars with {strategy}")
    return CompressionResult(data=data, length=len(data), track_count=1, strategy=strategy)


def _slice_feed(feed: Feed, count: int) -> Feed:
    return replace(feed, tracks=feed.tracks[:count])


def _try_feed(
    feed: Feed,
    count: int,
    max_chars: int,
    strategies: List[CompressionOptions],
) -> Optional[CompressionResult]:
    subset = _slice_feed(feed, count)
    fit = _first_fit(lambda strategy: encode_feed(subset, strategy), strategies, max_chars)
    if fit is None:
        return None

    data, strategy = fit
    included = len(subset.tracks)
    return CompressionResult(
        data=data,
        length=len(data),
        track_count=included,
        strategy=replace(strategy, track_count=included),
    )


def _auto_optimize_feed(
    feed: Feed,
    max_chars: int,
    options: CompressionOptions,
) -> CompressionResult:
    """
    Fit a feed into max_chars, including as many leading tracks as possible.

    A fixed track_count skips the search. Otherwise the largest fitting
    count in [1, len(tracks)] is binary searched.
    """
    strategies = feed_strategies(options)
    best = None

    if options.track_count is not None:
        best = _try_feed(feed, options.track_count, max_chars, strategies)
    elif not feed.tracks:
        best = _try_feed(feed, 0, max_chars, strategies)
    else:
        low, high = 1, len(feed.tracks)
        while low <= high:
            mid = (low + high) // 2
            result = _try_feed(feed, mid, max_chars, strategies)
            if result is not None:
                best = result
                low = mid + 1
            else:
                high = mid - 1

    if best is None:
        raise CompressionBudgetError("feed", max_chars)

    logger.debug(
        f"Feed fits {best.track_count}/{len(feed.tracks)} tracks "
        f"in {best.length}/{max_chars} chars"
    )
    return best
