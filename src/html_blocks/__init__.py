"""html-blocks - Convert HTML into rich-text content blocks.

This package turns (pasted) HTML into the two inputs a block-based
rich-text editor needs: a list of content blocks, each carrying its text
and per-character inline styles and entity references, and an entity map
holding the links and images those references point to.

Key Features:
- Block types resolved from a configurable render map
- Inline styles from tags and inline css
- LINK and IMAGE entities preserved across block boundaries
- Flat or tree-shaped (nested) block output
- BeautifulSoup-based sanitizing node tree supplier
- FastMCP server and typer CLI front ends
"""

__version__ = "0.1.0"
__author__ = "html-blocks Contributors"
__license__ = "MIT"

# Public API exports
from .builder import ContentBlocksBuilder
from .config import Settings
from .converter import convert_from_html
from .models import CharacterMetadata, ContentBlock, ContentBlockNode, ConversionResult, EntityInstance
from .render_map import DEFAULT_BLOCK_RENDER_MAP, build_block_type_map, disambiguate

__all__ = [
    "ContentBlocksBuilder",
    "CharacterMetadata",
    "ContentBlock",
    "ContentBlockNode",
    "ConversionResult",
    "DEFAULT_BLOCK_RENDER_MAP",
    "EntityInstance",
    "Settings",
    "build_block_type_map",
    "convert_from_html",
    "disambiguate",
    "__version__",
]
