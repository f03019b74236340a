"""
Helpers for turning raw feed values into normalized ones.

Covers duration and publication date parsing, HTML stripping for
descriptions and the reverse formatting used when a shared track is
rendered back as an episode.
"""
import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(value: str) -> int:
    """Parse the leading integer of a string, 0 when there is none."""
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


def parse_duration(value: Optional[str]) -> int:
    """
    Parse a duration string into seconds.

    Handles the formats found in podcast feeds:
    - Seconds: "3600"
    - MM:SS: "60:00"
    - HH:MM:SS: "1:00:00"

    Unparseable components count as zero, so the result is always an int.

    Args:
        value: Duration string

    Returns:
        Duration in seconds

    Examples:
        >>> parse_duration("01:30:45")
        5445
        >>> parse_duration("45:30")
        2730
        >>> parse_duration("3600")
        3600
    """
    if not value:
        return 0

    value_str = str(value).strip()

    if ":" in value_str:
        parts = [_leading_int(part) for part in value_str.split(":")]
        if len(parts) == 3:
            return parts[0] * 3600 + parts[1] * 60 + parts[2]
        if len(parts) == 2:
            return parts[0] * 60 + parts[1]

    return _leading_int(value_str)


def format_duration(seconds: int) -> str:
    """Format seconds as H:MM:SS, or M:SS under an hour."""
    seconds = int(seconds)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_date(value: Optional[str]) -> Optional[int]:
    """
    Parse a publication date into a Unix timestamp in seconds.

    RFC 2822 dates (the RSS format) are tried first, then ISO 8601.
    Dates without a timezone are read as UTC.

    Args:
        value: Date string from a feed

    Returns:
        Unix timestamp or None if the date cannot be parsed
    """
    if not value:
        return None

    value_str = value.strip()
    parsed = None

    try:
        parsed = parsedate_to_datetime(value_str)
    except (TypeError, ValueError, IndexError):
        pass

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value_str.replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Unparseable date: {value_str!r}")
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return int(parsed.timestamp())


def format_date(timestamp: int) -> str:
    """Format a Unix timestamp as an ISO 8601 UTC string."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def strip_html(html: Optional[str]) -> str:
    """
    Reduce an HTML fragment to its text content.

    Tags are dropped without inserting separators, entities are decoded
    and the result is trimmed.

    Args:
        html: Text that may contain HTML

    Returns:
        Plain text, empty string for empty input
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    return soup.get_text().strip()
