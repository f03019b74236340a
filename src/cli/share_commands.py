"""CLI commands for podcast feeds and share links.

Provides commands for:
- Parsing a feed and listing its episodes
- Building a share link for a whole podcast
- Encoding a single episode as a share code
- Decoding share codes and links
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

import requests

from ..argparse_shared import (
    add_compression_mode_argument,
    add_log_level_argument,
    add_max_chars_argument,
    add_remove_images_argument,
    add_source_argument,
    get_base_parser,
)
from ..config import Config
from ..packt import (
    CompressionOptions,
    PacktError,
    compress_track,
    decompress_track,
    parse_rss,
)
from ..podcast.feed_fetcher import FeedFetcher
from ..podcast.feed_parser import FeedParser, ParsedFeed
from ..services.share_service import ShareService, extract_share_code
from ..utils.xml_utils import FeedParseError

logger = logging.getLogger(__name__)


def load_source(source: str, config: Config) -> str:
    """
    Read feed text from a URL or a local file.

    Parameters:
        source (str): http(s) URL to fetch, or a path to a saved feed.
        config (Config): Provides the fetch timeout and user agent.

    Returns:
        str: Raw feed text.
    """
    if source.lower().startswith(("http://", "https://")):
        fetcher = FeedFetcher(
            timeout=config.FEED_FETCH_TIMEOUT,
            user_agent=config.FEED_USER_AGENT,
        )
        try:
            return fetcher.fetch(source)
        finally:
            fetcher.close()

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Feed file not found: {path}")
    return path.read_text(encoding="utf-8")


def _parse_feed(args, config: Config) -> ParsedFeed:
    content = load_source(args.source, config)
    parser = FeedParser(fallback_image=config.DEFAULT_PODCAST_IMAGE)
    return parser.parse_string(content, args.feed_url or args.source)


def parse_feed(args, config: Config):
    """
    Parse a feed and print the podcast and its episodes.

    With `args.compact` the feed is parsed into the share codec's model
    instead, with plain-text descriptions and numeric dates and durations.
    With `args.json` the result is printed as JSON.
    """
    if args.compact:
        feed = parse_rss(load_source(args.source, config))
        if args.json:
            print(json.dumps(asdict(feed), indent=2, ensure_ascii=False))
            return
        print(f"\n{feed.title or 'Untitled'}")
        print(f"  Tracks: {len(feed.tracks)}")
        for track in feed.tracks[: args.limit]:
            print(f"  - {track.title or 'Untitled'} ({track.duration or 0}s)")
        return

    parsed = _parse_feed(args, config)
    if args.json:
        print(json.dumps(asdict(parsed), indent=2, ensure_ascii=False))
        return

    podcast = parsed.podcast
    print(f"\n{podcast.title}")
    print(f"  ID: {podcast.id}")
    print(f"  Author: {podcast.author}")
    print(f"  Episodes: {len(parsed.episodes)}")

    for episode in parsed.episodes[: args.limit]:
        print(f"  - {episode.title[:60]:<60}  {episode.duration:>9}  {episode.pub_date}")


def share_podcast(args, config: Config):
    """
    Print a share link for a podcast.

    Honors `args.episodes` (share only the first N episodes), `args.mode`,
    `args.max_chars`, `args.remove_images` and `args.rss_link` (link to the
    feed instead of embedding it). Exits with status 1 when no link can be
    built.
    """
    if args.max_chars is not None:
        config.SHARE_MAX_CHARS = args.max_chars

    parsed = _parse_feed(args, config)
    episodes = parsed.episodes
    if args.episodes is not None:
        episodes = episodes[: args.episodes]

    service = ShareService(config)
    feed = service.podcast_to_feed(parsed.podcast, episodes)

    link = service.generate_url(
        feed,
        share_type="frequency",
        share_mode="rss-source" if args.rss_link else "embedded-payload",
        compression_mode=args.mode,
        remove_images=args.remove_images,
    )

    if not link.url:
        print(f"Error: {link.warning}")
        sys.exit(1)

    print(link.url)
    print(f"\nLength: {link.length} (payload {link.payload_length})")
    if link.warning:
        print(f"Warning: {link.warning}")


def share_episode(args, config: Config):
    """
    Print the share code for one episode.

    `args.index` selects the episode (0 = first in feed order); the code is
    optimized to fit `args.max_chars` or SHARE_MAX_CHARS.
    """
    parsed = _parse_feed(args, config)
    if not 0 <= args.index < len(parsed.episodes):
        print(f"Error: episode index {args.index} out of range (0-{len(parsed.episodes) - 1})")
        sys.exit(1)

    service = ShareService(config)
    track = service.episode_to_track(parsed.episodes[args.index])

    options = CompressionOptions(
        max_chars=args.max_chars or config.SHARE_MAX_CHARS,
        remove_images=args.remove_images,
    )
    try:
        result = compress_track(track, options)
    except PacktError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(result.data)
    print(f"\nLength: {result.length}")
    if result.strategy:
        print(f"Title cap: {result.strategy.max_title_length or 'none'}")
        if result.strategy.remove_descriptions:
            print("Description: removed")
        else:
            print(f"Description cap: {result.strategy.max_description_length or 'none'}")


def decode_share(args, config: Config):
    """Decode a feed or track share code (or share link) and print it as JSON."""
    if args.track:
        try:
            decoded = decompress_track(extract_share_code(args.code))
        except PacktError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        decoded = ShareService(config).decode(args.code)
        if decoded is None:
            print("Error: invalid share code")
            sys.exit(1)

    print(json.dumps(asdict(decoded), indent=2, ensure_ascii=False))


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = get_base_parser()
    add_log_level_argument(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a feed and list its episodes",
    )
    add_source_argument(parse_parser)
    parse_parser.add_argument(
        "--feed-url",
        help="Canonical feed URL when reading from a file",
    )
    parse_parser.add_argument(
        "--compact",
        action="store_true",
        help="Parse into the share codec's track model",
    )
    parse_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed feed as JSON",
    )
    parse_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of episodes to list",
    )

    # share command
    share_parser = subparsers.add_parser(
        "share",
        help="Build a share link for a podcast",
    )
    add_source_argument(share_parser)
    share_parser.add_argument(
        "--feed-url",
        help="Canonical feed URL when reading from a file",
    )
    share_parser.add_argument(
        "--episodes",
        type=int,
        help="Share only the first N episodes",
    )
    share_parser.add_argument(
        "--rss-link",
        action="store_true",
        help="Link to the feed instead of embedding it",
    )
    add_compression_mode_argument(share_parser)
    add_max_chars_argument(share_parser)
    add_remove_images_argument(share_parser)

    # share-episode command
    episode_parser = subparsers.add_parser(
        "share-episode",
        help="Encode one episode as a share code",
    )
    add_source_argument(episode_parser)
    episode_parser.add_argument(
        "--feed-url",
        help="Canonical feed URL when reading from a file",
    )
    episode_parser.add_argument(
        "--index",
        type=int,
        default=0,
        help="Episode position in the feed (0 = first)",
    )
    add_max_chars_argument(episode_parser)
    add_remove_images_argument(episode_parser)

    # decode command
    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode a share code or share link",
    )
    decode_parser.add_argument("code", help="Share code or share link")
    decode_parser.add_argument(
        "--track",
        action="store_true",
        help="Decode a single-episode code",
    )

    return parser


def main():
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Load configuration
    config = Config(env_file=args.env_file)

    logging.basicConfig(
        level=(args.log_level or config.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Route to appropriate command
    commands = {
        "parse": parse_feed,
        "share": share_podcast,
        "share-episode": share_episode,
        "decode": decode_share,
    }

    command_func = commands.get(args.command)
    if not command_func:
        parser.print_help()
        sys.exit(1)

    try:
        command_func(args, config)
    except (FeedParseError, FileNotFoundError, ValueError, requests.RequestException) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
