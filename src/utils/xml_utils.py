"""
Tolerant XML helpers shared by the feed parsers.

Feeds are parsed with namespace processing turned off, so prefixed tags keep
their literal names (``itunes:duration``) and undeclared prefixes are not an
error. Lookups then fall back from exact names to local names to a
case-insensitive scan, which covers feeds that drop or mangle prefixes.
"""
import logging
import re
from typing import Iterable, Iterator, Optional, Union
from xml.dom import Node
from xml.dom.minidom import Document, Element
from xml.parsers.expat import ExpatError

from defusedxml import DefusedXmlException
from defusedxml.expatbuilder import parseString as safe_parse_string

logger = logging.getLogger(__name__)

# How much of a failed document is inspected for HTML markers
HTML_SNIFF_LENGTH = 200

HTML_MARKERS = ("<!doctype html", "<html")

_CDATA_PATTERN = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)


class FeedParseError(ValueError):
    """Raised when feed content cannot be turned into a podcast."""


def looks_like_html(content: Union[str, bytes]) -> bool:
    """Check the start of a document for HTML markers."""
    if isinstance(content, bytes):
        head = content[:HTML_SNIFF_LENGTH].decode("utf-8", errors="replace")
    else:
        head = content[:HTML_SNIFF_LENGTH]
    head = head.lower()
    return any(marker in head for marker in HTML_MARKERS)


def escape_cdata(content: str) -> str:
    """
    Replace CDATA sections with their entity-escaped payload.

    ``<![CDATA[a & <b>]]>`` becomes ``a &amp; &lt;b&gt;`` so the payload
    survives as plain character data.
    """

    def _escape(match: re.Match) -> str:
        return (
            match.group(1)
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
        )

    return _CDATA_PATTERN.sub(_escape, content)


def parse_document(content: Union[str, bytes]) -> Document:
    """
    Parse feed content into a DOM document.

    Args:
        content: Raw feed text or bytes

    Returns:
        Parsed document

    Raises:
        FeedParseError: If the content is not well-formed XML. The message
            says whether a webpage was returned instead of a feed.
    """
    try:
        return safe_parse_string(content, namespaces=False)
    except (ExpatError, DefusedXmlException) as e:
        if looks_like_html(content):
            raise FeedParseError(
                "A webpage was returned instead of a podcast feed. "
                "Check that the URL points to an RSS feed."
            ) from e
        raise FeedParseError(f"The feed is corrupted or invalid XML: {e}") from e


def find_channel(document: Document, content: Union[str, bytes]) -> Element:
    """
    Locate the RSS channel element.

    Raises:
        FeedParseError: If there is no channel. Well-formed HTML documents
            are reported as a webpage rather than a missing channel.
    """
    channel = find_tag(document, "channel")
    if channel is not None:
        return channel

    root = document.documentElement
    if looks_like_html(content) or (root is not None and local_name(root).lower() == "html"):
        raise FeedParseError(
            "A webpage was returned instead of a podcast feed. "
            "Check that the URL points to an RSS feed."
        )
    raise FeedParseError("Invalid RSS: channel element not found.")


def local_name(element: Element) -> str:
    """Tag name without its namespace prefix."""
    return element.tagName.split(":")[-1]


def iter_elements(parent: Node, exclude: Iterable[str] = ()) -> Iterator[Element]:
    """
    Yield descendant elements in document order.

    Elements whose local name is in ``exclude`` are skipped together with
    their subtree.
    """
    excluded = {name.lower() for name in exclude}
    # Explicit stack, feeds can nest deeper than the recursion limit
    stack = list(reversed(parent.childNodes))
    while stack:
        node = stack.pop()
        if node.nodeType != Node.ELEMENT_NODE:
            continue
        if local_name(node).lower() in excluded:
            continue
        yield node
        stack.extend(reversed(node.childNodes))


def find_tag(parent: Node, tag_name: str, exclude: Iterable[str] = ()) -> Optional[Element]:
    """
    Find the first descendant matching a tag name.

    Tries, in order:
    1. an exact tag name match
    2. a match on the local name (the part after the colon)
    3. a case-insensitive scan over tag names and local names

    Args:
        parent: Document or element to search under
        tag_name: Tag to look for, optionally prefixed (``itunes:image``)
        exclude: Local names of subtrees that are not searched

    Returns:
        The matching element or None
    """
    elements = list(iter_elements(parent, exclude))
    local = tag_name.split(":")[-1]

    for element in elements:
        if element.tagName == tag_name:
            return element

    for element in elements:
        if element.tagName == local:
            return element

    wanted = {tag_name.lower(), local.lower()}
    for element in elements:
        if element.tagName.lower() in wanted or local_name(element).lower() == local.lower():
            return element

    return None


def find_all(parent: Node, tag_name: str) -> list:
    """All descendants whose local name matches, case-insensitively."""
    local = tag_name.split(":")[-1].lower()
    return [el for el in iter_elements(parent) if local_name(el).lower() == local]


def text_content(node: Node) -> str:
    """Concatenated text and CDATA content of a node and its descendants."""
    parts = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.nodeType in (Node.TEXT_NODE, Node.CDATA_SECTION_NODE):
            parts.append(current.data)
        else:
            stack.extend(reversed(current.childNodes))
    return "".join(parts)


def element_text(element: Optional[Element], sibling_fallback: bool = False) -> Optional[str]:
    """
    Trimmed text of an element, or None when empty.

    With ``sibling_fallback`` an empty element borrows the text node that
    follows it. Engines that treat ``link`` as a void HTML element put the
    URL there.
    """
    if element is None:
        return None

    text = text_content(element).strip()

    if not text and sibling_fallback:
        sibling = element.nextSibling
        if sibling is not None and sibling.nodeType == Node.TEXT_NODE:
            text = sibling.data.strip()

    return text or None


def tag_text(parent: Node, tag_name: str, exclude: Iterable[str] = ()) -> str:
    """Trimmed text of the first matching tag, empty string if missing."""
    return element_text(find_tag(parent, tag_name, exclude)) or ""


def tag_attr(parent: Node, tag_name: str, attr: str, exclude: Iterable[str] = ()) -> str:
    """Attribute of the first matching tag, empty string if missing."""
    element = find_tag(parent, tag_name, exclude)
    if element is None:
        return ""
    return element.getAttribute(attr).strip()
