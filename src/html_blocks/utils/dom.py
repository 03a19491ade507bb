"""
Markup Node Tree Supplier

Parses raw HTML with BeautifulSoup, strips content that must never reach the
converter, and hands back the document body as a tree of ElementNode /
TextNode models.

Main entry point: get_safe_body_from_html(html) -> Optional[ElementNode]

Sanitizing Rules:
- Discard executable and embedded content (script, style, iframe, ...)
- Discard HTML comments, doctypes and processing instructions
- Wrap parser output without a <body> in a synthetic body element
- Signal failure with None instead of raising
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Comment, FeatureNotFound, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from ..config import settings
from ..models import ElementNode, TextNode

logger = logging.getLogger(__name__)

FALLBACK_PARSER = "html.parser"

# Elements removed together with their content
TAGS_TO_REMOVE = ["script", "style", "iframe", "noscript", "template", "object", "embed"]


def clean_html_content(soup):
    """Remove unsafe elements and comments from the HTML soup."""

    if soup is None:
        return None

    # Remove by tag name
    for tag_name in TAGS_TO_REMOVE:
        for tag in soup.find_all(tag_name):
            tag.decompose()

    # Remove HTML comments
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    return soup


def parse_html(html_content: str, parser: str | None = None) -> BeautifulSoup:
    """Parse HTML, falling back to the stdlib parser if the backend is missing."""
    parser = parser or settings.html_parser
    try:
        return BeautifulSoup(html_content, parser)
    except FeatureNotFound:
        logger.warning("HTML parser %r is not installed, using %r", parser, FALLBACK_PARSER)
        return BeautifulSoup(html_content, FALLBACK_PARSER)


def _attribute_value(value) -> str:
    # Multi-valued attributes (class, rel) come back as lists
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def node_from_soup(element: Tag) -> ElementNode:
    """Convert a BeautifulSoup tag and its descendants to an ElementNode."""
    children: list[ElementNode | TextNode] = []
    for child in element.children:
        if isinstance(child, Tag):
            children.append(node_from_soup(child))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            children.append(TextNode(content=str(child)))

    return ElementNode(
        tag=element.name.lower(),
        attributes={name.lower(): _attribute_value(value) for name, value in element.attrs.items()},
        children=children,
    )


def get_safe_body_from_html(html_content: str, parser: str | None = None) -> Optional[ElementNode]:
    """Build a sanitized node tree for the body of an HTML document.

    Args:
        html_content: Raw HTML
        parser: BeautifulSoup parser name, defaults to settings.html_parser

    Returns:
        The body element, or None if the markup could not be turned into a tree
    """
    try:
        soup = clean_html_content(parse_html(html_content, parser))
        body = soup.body
        if body is None:
            # html.parser does not synthesize <html>/<body>; <head> is not content
            root = node_from_soup(soup.html or soup)
            children = [
                child for child in root.children
                if not (isinstance(child, ElementNode) and child.tag == "head")
            ]
            return ElementNode(tag="body", children=children)
        return node_from_soup(body)
    except ParserRejectedMarkup as e:
        logger.warning("Parser rejected markup: %s", e)
        return None
    except RecursionError:
        logger.warning("Markup is nested too deeply to convert")
        return None
