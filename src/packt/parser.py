"""Parse RSS feeds straight into the compact Feed/Track model.

Unlike the ingestion parser this one normalizes values for sharing:
descriptions become plain text, durations become seconds and publication
dates become Unix timestamps.
"""

import logging
from typing import Optional, Union
from xml.dom.minidom import Element

from ..podcast.feed_parser import extract_channel_image
from ..utils.feed_utils import parse_date, parse_duration, strip_html
from ..utils.xml_utils import (
    element_text,
    escape_cdata,
    find_all,
    find_channel,
    find_tag,
    parse_document,
    tag_attr,
)
from .models import Feed, Track

logger = logging.getLogger(__name__)


def parse_rss(content: Union[str, bytes]) -> Feed:
    """
    Parse RSS content into a Feed.

    Args:
        content: RSS XML text

    Returns:
        Parsed Feed; items with neither a title nor an audio URL are skipped

    Raises:
        FeedParseError: If the content is not XML, is a webpage, or has no
            channel element
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    # Some engines mishandle CDATA, so payloads are turned into escaped text
    content = escape_cdata(content)

    document = parse_document(content)
    channel = find_channel(document, content)
    skip = ("item",)

    feed = Feed(
        title=element_text(find_tag(channel, "title", skip)),
        description=element_text(find_tag(channel, "description", skip)),
        url=_channel_link(channel),
        image=extract_channel_image(channel),
    )

    for item in find_all(document, "item"):
        track = _parse_track(item)
        if track.title or track.url:
            feed.tracks.append(track)
        else:
            logger.debug("Skipping item without title or enclosure")

    logger.info(f"Parsed feed '{feed.title}' with {len(feed.tracks)} tracks")
    return feed


def _channel_link(channel: Element) -> Optional[str]:
    """Channel link from its text, the following text node, or an href."""
    link = find_tag(channel, "link", ("item",))
    if link is None:
        return None

    return element_text(link, sibling_fallback=True) or link.getAttribute("href").strip() or None


def _parse_track(item: Element) -> Track:
    track = Track(
        title=element_text(find_tag(item, "title")),
        url=tag_attr(item, "enclosure", "url") or None,
        image=tag_attr(item, "itunes:image", "href") or None,
    )

    raw_description = element_text(find_tag(item, "description"))
    if raw_description:
        track.description = strip_html(raw_description) or None

    pub_date = element_text(find_tag(item, "pubDate"))
    if pub_date:
        track.date = parse_date(pub_date)

    duration = element_text(find_tag(item, "itunes:duration"))
    if duration:
        track.duration = parse_duration(duration)

    return track
