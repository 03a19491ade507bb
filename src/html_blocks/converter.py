"""
HTML to Content Blocks Converter

Converts an HTML string into content blocks (text plus per-character
styles and entity references) and the entity map those references point to.

Main entry point: convert_from_html(html) -> Optional[ConversionResult]

Conversion Rules:
- body, ul and ol are transparent containers
- Tags from the block render map start a new block
- b/strong/i/em/u/s/strike/del/code and inline css set inline styles
- Links (http, https, mailto) and images become LINK / IMAGE entities
- Whitespace-only text collapses to a single space outside of <pre>
- Unparseable markup yields None rather than an exception
"""

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any, Optional

from .builder import ContentBlocksBuilder
from .config import Settings, settings
from .models import BlockRenderConfig, ConversionResult, ElementNode
from .render_map import DEFAULT_BLOCK_RENDER_MAP, build_block_type_map, disambiguate
from .utils.dom import get_safe_body_from_html

logger = logging.getLogger(__name__)

DOMBuilder = Callable[[str], Optional[ElementNode]]

NBSP = "&nbsp;"
SPACE = " "

# Used for removing characters from the HTML string
REGEX_CR = re.compile("\r")
REGEX_NBSP = re.compile(NBSP)
REGEX_CARRIAGE = re.compile("&#13;?")
REGEX_ZWS = re.compile("&#8203;?")
REGEX_BOM = re.compile("\ufeff")


def normalize_html(html: str) -> str:
    """Remove funky characters from the HTML string."""
    html = html.strip()
    html = REGEX_CR.sub("", html)
    html = REGEX_NBSP.sub(SPACE, html)
    html = REGEX_CARRIAGE.sub("", html)
    html = REGEX_ZWS.sub("", html)
    return REGEX_BOM.sub("", html)


def convert_from_html(
    html: str,
    dom_builder: DOMBuilder = get_safe_body_from_html,
    block_render_map: Mapping[str, BlockRenderConfig | Mapping[str, Any]] = DEFAULT_BLOCK_RENDER_MAP,
    *,
    tree_data_support: bool | None = None,
    config: Settings | None = None,
) -> Optional[ConversionResult]:
    """Convert HTML to content blocks and an entity map.

    The dom_builder must never execute anything found in the markup;
    the default one parses with BeautifulSoup and strips scripts.

    Args:
        html: Raw HTML
        dom_builder: Turns sanitized HTML into a body node, or None on failure
        block_render_map: Block type -> render config
        tree_data_support: Keep nested blocks as a tree; defaults to the settings flag
        config: Settings override

    Returns:
        ConversionResult, or None if the markup could not be turned into a tree
    """
    html = normalize_html(html)

    safe_body = dom_builder(html)
    if safe_body is None:
        logger.warning("Could not build a node tree from %d characters of HTML", len(html))
        return None

    block_type_map = build_block_type_map(block_render_map)

    builder = ContentBlocksBuilder(
        block_type_map,
        disambiguate,
        tree_data_support=tree_data_support,
        config=config or settings,
    )
    return builder.consume_node(safe_body).finalize()
