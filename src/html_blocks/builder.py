"""Content blocks builder.

Builds a list of content blocks and an entity map out of one or several
markup trees, in two passes: the first walks the nodes and their children
to build a tree of BlockConfig descriptors, the second resolves
parents/siblings and creates the actual content blocks.

Typical usage:

    builder = ContentBlocksBuilder(block_type_map, disambiguate)
    builder.consume_node(first_body).consume_node(second_body)
    result = builder.finalize()
"""

import logging
from collections.abc import Callable

from .accumulator import BuilderState
from .config import Settings, settings
from .entities import EntityRegistry
from .keys import KeyGenerator
from .materializer import to_content_blocks, to_flat_content_blocks
from .models import (
    LIST_ITEM_TYPES,
    UNSTYLED,
    BlockConfig,
    ContentBlock,
    ConversionResult,
    ElementNode,
    Node,
    TextNode,
)
from .render_map import BlockTypeMap, Disambiguator
from .utils.urls import is_allowed_scheme, normalize_url

logger = logging.getLogger(__name__)

SPACE = " "
IMAGE_PLACEHOLDER = "\U0001F4F7"

# Containers whose children are inlined in the parent block list
STRUCTURAL_TAGS = {"body", "ol", "ul"}

ANCHOR_ATTRIBUTES = ["className", "href", "rel", "target", "title"]
IMAGE_ATTRIBUTES = ["alt", "className", "height", "src", "width"]

HTML_TAG_TO_INLINE_STYLE = {
    "b": "BOLD",
    "code": "CODE",
    "del": "STRIKETHROUGH",
    "em": "ITALIC",
    "i": "ITALIC",
    "s": "STRIKETHROUGH",
    "strike": "STRIKETHROUGH",
    "strong": "BOLD",
    "u": "UNDERLINE",
}

# Depth classes written by the editor's own list styles
KNOWN_LIST_ITEM_DEPTH_CLASSES = {
    "public-DraftStyleDefault-depth0": 0,
    "public-DraftStyleDefault-depth1": 1,
    "public-DraftStyleDefault-depth2": 2,
    "public-DraftStyleDefault-depth3": 3,
    "public-DraftStyleDefault-depth4": 4,
}


def get_list_item_depth(node: ElementNode, depth: int = 0) -> int:
    """Read list nesting from known depth classes, so pasted lists keep their shape."""
    classes = set(node.class_list)
    for depth_class, class_depth in KNOWN_LIST_ITEM_DEPTH_CLASSES.items():
        if depth_class in classes:
            depth = class_depth
    return depth


def _entity_data(node: ElementNode, attributes: list[str]) -> dict[str, str]:
    data = {}
    for attr in attributes:
        value = node.get("class" if attr == "className" else attr)
        if value:
            data[attr] = value
    return data


class ContentBlocksBuilder:
    """Turns markup node trees into content blocks and an entity map.

    Args:
        block_type_map: Tag -> candidate block types
        disambiguate: Picks one block type for tags with several candidates
        tree_data_support: Keep nested blocks as a tree; defaults to the settings flag
        entity_registry: Registry new entities are created in
        key_generator: Produces block keys; defaults to a fresh KeyGenerator per builder
        config: Settings used for link resolution and defaults
    """

    def __init__(
        self,
        block_type_map: BlockTypeMap,
        disambiguate: Disambiguator,
        *,
        tree_data_support: bool | None = None,
        entity_registry: EntityRegistry | None = None,
        key_generator: Callable[[], str] | None = None,
        config: Settings | None = None,
    ) -> None:
        self.config = config or settings
        self.block_type_map = block_type_map
        self.disambiguate = disambiguate
        self.tree_data_support = (
            self.config.tree_data_support if tree_data_support is None else tree_data_support
        )
        self.entity_map = entity_registry if entity_registry is not None else EntityRegistry()
        self.generate_key = key_generator or KeyGenerator().generate
        self.state = BuilderState()
        self.block_configs: list[BlockConfig] = []
        self.content_blocks: list[ContentBlock] = []

    def reset(self) -> None:
        """Clear the walk state and the blocks built so far."""
        self.state.reset()
        self.block_configs = []
        self.content_blocks = []

    def consume_node(self, node: ElementNode) -> "ContentBlocksBuilder":
        """Add a markup tree to the builder. Returns self for chaining."""
        self.content_blocks = []
        self.block_configs.extend(self._to_block_configs([node]))

        # Text left over in the walk state becomes a block of its own
        self._flush_pending_text(self.block_configs)
        return self

    def finalize(self) -> ConversionResult:
        """Return the content blocks and entity map for the nodes added so far."""
        if not self.content_blocks:
            if self.tree_data_support:
                self.content_blocks = to_content_blocks(self.block_configs)
            else:
                self.content_blocks = to_flat_content_blocks(self.block_configs)
            logger.debug(
                "Materialized %d blocks (%s mode), %d entities",
                len(self.content_blocks),
                "tree" if self.tree_data_support else "flat",
                len(self.entity_map),
            )
        return ConversionResult(content_blocks=self.content_blocks, entity_map=self.entity_map.as_dict())

    def add_style(self, inline_style: str) -> None:
        """Add a new inline style to the upcoming nodes."""
        self.state.add_style(inline_style)

    def remove_style(self, inline_style: str) -> None:
        """Remove a currently applied inline style."""
        self.state.remove_style(inline_style)

    # Walk

    def _make_block_config(
        self,
        key: str | None = None,
        type: str | None = None,
        depth: int | None = None,
        child_configs: list[BlockConfig] | None = None,
    ) -> BlockConfig:
        """Build a BlockConfig from the accumulated text and clear it."""
        block_type = type or self.state.block_type
        if depth is None:
            depth = self.state.depth if block_type in LIST_ITEM_TYPES else 0
        text, character_list = self.state.take()
        return BlockConfig(
            key=key or self.generate_key(),
            type=block_type,
            text=text,
            character_list=character_list,
            depth=depth,
            child_configs=child_configs or [],
        )

    def _flush_pending_text(self, block_configs: list[BlockConfig]) -> None:
        self.state.trim()
        if self.state.text:
            block_configs.append(self._make_block_config())

    def _to_block_configs(self, nodes: list[Node]) -> list[BlockConfig]:
        """Convert sibling nodes to a forest of block configs.

        Text may be left in the walk state so successive calls can be chained.
        """
        block_configs: list[BlockConfig] = []

        for node in nodes:
            match node:
                case TextNode():
                    self._add_text_node(node)
                case ElementNode(tag=tag) if tag in STRUCTURAL_TAGS:
                    self._add_structural_node(node, block_configs)
                case ElementNode(tag=tag) if tag in self.block_type_map:
                    self._add_block_node(node, block_configs)
                case ElementNode():
                    self._add_inline_node(node, block_configs)

        return block_configs

    def _add_structural_node(self, node: ElementNode, block_configs: list[BlockConfig]) -> None:
        # body, ol and ul produce no block; their children are inlined
        self._flush_pending_text(block_configs)
        wrapper = node.tag if node.tag in ("ol", "ul") else self.state.wrapper
        with self.state.wrapper_scope(wrapper):
            block_configs.extend(self._to_block_configs(node.children))

    def _add_block_node(self, node: ElementNode, block_configs: list[BlockConfig]) -> None:
        self._flush_pending_text(block_configs)

        wrapper = "pre" if node.tag == "pre" else self.state.wrapper
        candidates = self.block_type_map[node.tag]
        if len(candidates) == 1:
            block_type = candidates[0]
        else:
            block_type = self.disambiguate(node.tag, wrapper) or next(iter(candidates), UNSTYLED)

        depth = self.state.depth
        if self.tree_data_support and block_type in LIST_ITEM_TYPES:
            depth = get_list_item_depth(node)

        key = self.generate_key()
        with self.state.block_scope(wrapper, depth):
            child_configs = self._to_block_configs(node.children)
            self.state.trim()
            block_configs.append(
                self._make_block_config(
                    key=key,
                    type=block_type,
                    depth=depth if block_type in LIST_ITEM_TYPES else 0,
                    child_configs=child_configs,
                )
            )

    def _add_inline_node(self, node: ElementNode, block_configs: list[BlockConfig]) -> None:
        if self._is_valid_image(node):
            self._add_image_node(node)
            return

        url = self._valid_anchor_url(node)
        if url is not None:
            self._add_anchor_node(node, url, block_configs)
            return

        with self.state.style_scope(HTML_TAG_TO_INLINE_STYLE.get(node.tag)):
            block_configs.extend(self._to_block_configs(node.children))

        self.state.update_style_from_attributes(node)

    def _add_text_node(self, node: TextNode) -> None:
        text = node.content

        # Outside of pre blocks, whitespace-only text becomes a single space
        if not text.strip() and self.state.wrapper != "pre":
            text = SPACE

        if self.state.wrapper != "pre":
            # Can't drop newlines outright: MS Word separates words with them
            text = text.replace("\n", SPACE)

        self.state.append_text(text)

    def _add_image_node(self, node: ElementNode) -> None:
        entity = self.entity_map.create("IMAGE", "MUTABLE", _entity_data(node, IMAGE_ATTRIBUTES))

        # The placeholder glyph carries the entity; an empty or space-only
        # image text would be trimmed away
        with self.state.entity_scope(entity):
            self.state.append_text(IMAGE_PLACEHOLDER)

    def _add_anchor_node(self, node: ElementNode, url: str, block_configs: list[BlockConfig]) -> None:
        data = _entity_data(node, ANCHOR_ATTRIBUTES)
        data["url"] = url
        entity = self.entity_map.create("LINK", "MUTABLE", data)

        with self.state.entity_scope(entity):
            block_configs.extend(self._to_block_configs(node.children))

    def _is_valid_image(self, node: ElementNode) -> bool:
        return node.tag == "img" and bool(node.get("src"))

    def _valid_anchor_url(self, node: ElementNode) -> str | None:
        """Return the normalized url if the element can be used to build a link."""
        if node.tag != "a" or not node.get("href"):
            return None
        url = normalize_url(node.get("href"), self.config.base_url)
        if url is None or not is_allowed_scheme(url, self.config.allowed_link_schemes):
            return None
        return url
