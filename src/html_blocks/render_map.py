"""Block render map and tag to block type resolution.

The render map describes which HTML tags each block type is rendered with.
Read in reverse it tells the builder which block type(s) a tag stands for.
For the default render map the block type map is:

    h1 -> ("header-one",)             h2 .. h6 likewise
    li -> ("unordered-list-item", "ordered-list-item")
    blockquote -> ("blockquote",)
    figure -> ("atomic",)
    pre -> ("code-block",)
    div -> ("unstyled",)
    p -> ("unstyled",)
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from .models import BlockRenderConfig

BlockTypeMap = Mapping[str, tuple[str, ...]]
Disambiguator = Callable[[str, str], str | None]

DEFAULT_BLOCK_RENDER_MAP: Mapping[str, BlockRenderConfig] = MappingProxyType({
    "header-one": BlockRenderConfig(element="h1"),
    "header-two": BlockRenderConfig(element="h2"),
    "header-three": BlockRenderConfig(element="h3"),
    "header-four": BlockRenderConfig(element="h4"),
    "header-five": BlockRenderConfig(element="h5"),
    "header-six": BlockRenderConfig(element="h6"),
    "unordered-list-item": BlockRenderConfig(element="li", wrapper="ul"),
    "ordered-list-item": BlockRenderConfig(element="li", wrapper="ol"),
    "blockquote": BlockRenderConfig(element="blockquote"),
    "atomic": BlockRenderConfig(element="figure"),
    "code-block": BlockRenderConfig(element="pre", wrapper="pre"),
    "unstyled": BlockRenderConfig(element="div", aliased_elements=["p"]),
})


def build_block_type_map(
    block_render_map: Mapping[str, BlockRenderConfig | Mapping[str, Any]],
) -> BlockTypeMap:
    """Build a mapping from HTML tags to candidate block types.

    Tags claimed by several block types keep every candidate, in render map
    order.

    Args:
        block_render_map: Block type -> render config (model or plain dict)

    Returns:
        Read-only mapping of tag -> non-empty tuple of block types
    """
    block_type_map: dict[str, list[str]] = {}

    for block_type, desc in block_render_map.items():
        config = BlockRenderConfig.model_validate(desc)
        for element in config.elements:
            block_type_map.setdefault(element, []).append(block_type)

    return MappingProxyType({tag: tuple(types) for tag, types in block_type_map.items()})


def disambiguate(tag: str, wrapper: str) -> str | None:
    """Pick a block type for tags the render map lists more than once."""
    if tag == "li":
        return "ordered-list-item" if wrapper == "ol" else "unordered-list-item"
    return None
