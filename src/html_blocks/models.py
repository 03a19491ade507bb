"""Data models for html-blocks.

Pydantic models for the markup node tree, the intermediate block
descriptors built while walking it, and the content blocks and entities
produced by a conversion.
"""

from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, model_validator

UNSTYLED = "unstyled"
LIST_ITEM_TYPES = frozenset({"unordered-list-item", "ordered-list-item"})

Mutability = Literal["MUTABLE", "IMMUTABLE", "SEGMENTED"]


class TextNode(BaseModel):
    """Text content of the markup tree."""

    kind: Literal["text"] = "text"
    content: str


class ElementNode(BaseModel):
    """Markup element with its attributes and ordered children."""

    kind: Literal["element"] = "element"
    tag: str = Field(..., description="Lower-cased tag name")
    attributes: dict[str, str] = Field(default_factory=dict, description="Attribute values")
    children: list["Node"] = Field(default_factory=list, description="Child nodes in document order")

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value, or default when absent."""
        return self.attributes.get(name, default)

    @property
    def class_list(self) -> list[str]:
        return self.attributes.get("class", "").split()

    @property
    def style(self) -> dict[str, str]:
        """Inline style declarations keyed by lower-cased property name."""
        declarations = {}
        for declaration in self.attributes.get("style", "").split(";"):
            name, sep, value = declaration.partition(":")
            if not sep:
                continue
            value = value.strip().lower().removesuffix("!important").strip()
            declarations[name.strip().lower()] = value
        return declarations


Node = Annotated[TextNode | ElementNode, Field(discriminator="kind")]

ElementNode.model_rebuild()


# Distinct style/entity combinations kept for reuse
CHARACTER_POOL_SIZE = 4096


class CharacterMetadata(BaseModel):
    """Inline styles and entity attached to one character of block text."""

    model_config = {"frozen": True}

    style: frozenset[str] = Field(default_factory=frozenset, description="Active inline styles")
    entity: str | None = Field(None, description="Entity key, if the character belongs to one")

    @classmethod
    def create(
        cls, style: frozenset[str] = frozenset(), entity: str | None = None
    ) -> "CharacterMetadata":
        """Return the shared instance for this style/entity combination."""
        return _shared_metadata(frozenset(style), entity)

    def has_style(self, style: str) -> bool:
        return style in self.style


@lru_cache(maxsize=CHARACTER_POOL_SIZE)
def _shared_metadata(style: frozenset[str], entity: str | None) -> CharacterMetadata:
    return CharacterMetadata(style=style, entity=entity)


class BlockRenderConfig(BaseModel):
    """Render map entry: the tags a block type is rendered with."""

    element: str = Field(..., description="Primary tag")
    aliased_elements: list[str] = Field(default_factory=list, description="Other tags parsed as this type")
    wrapper: str | None = Field(None, description="Container tag the element is rendered in")

    @property
    def elements(self) -> list[str]:
        return [self.element, *self.aliased_elements]


class BlockConfig(BaseModel):
    """Mutable block descriptor built during the markup walk.

    Link fields (parent, children, siblings) stay empty until the
    materializer resolves them.
    """

    key: str = Field(..., description="Unique block key")
    type: str = Field(default=UNSTYLED, description="Block type")
    text: str = Field(default="", description="Block text")
    character_list: list[CharacterMetadata] = Field(default_factory=list, description="Per-character metadata")
    depth: int = Field(default=0, ge=0, description="List nesting level")
    parent: str | None = Field(None, description="Parent block key")
    children: list[str] = Field(default_factory=list, description="Child block keys")
    prev_sibling: str | None = Field(None, description="Previous sibling key")
    next_sibling: str | None = Field(None, description="Next sibling key")
    child_configs: list["BlockConfig"] = Field(default_factory=list, description="Nested descriptors")

    @model_validator(mode="after")
    def check_character_list(self) -> "BlockConfig":
        if len(self.character_list) != len(self.text):
            raise ValueError(
                f"character_list has {len(self.character_list)} entries for {len(self.text)} characters"
            )
        return self


class ContentBlock(BaseModel):
    """Flat content block."""

    model_config = {"frozen": True}

    key: str = Field(..., description="Unique block key")
    type: str = Field(default=UNSTYLED, description="Block type")
    text: str = Field(default="", description="Block text")
    character_list: tuple[CharacterMetadata, ...] = Field(default=(), description="Per-character metadata")
    depth: int = Field(default=0, ge=0, description="List nesting level")

    def get_length(self) -> int:
        return len(self.text)

    def get_inline_style_at(self, offset: int) -> frozenset[str]:
        return self.character_list[offset].style

    def get_entity_at(self, offset: int) -> str | None:
        return self.character_list[offset].entity

    def find_entity_ranges(self) -> list[tuple[str, int, int]]:
        """Return (entity key, start, end) for each run of one entity."""
        ranges = []
        start = 0
        current = None
        for offset, metadata in enumerate(self.character_list):
            if metadata.entity != current:
                if current is not None:
                    ranges.append((current, start, offset))
                current = metadata.entity
                start = offset
        if current is not None:
            ranges.append((current, start, len(self.character_list)))
        return ranges


class ContentBlockNode(ContentBlock):
    """Content block that keeps its position in the block tree."""

    parent: str | None = Field(None, description="Parent block key")
    children: tuple[str, ...] = Field(default=(), description="Child block keys")
    prev_sibling: str | None = Field(None, description="Previous sibling key")
    next_sibling: str | None = Field(None, description="Next sibling key")


class EntityInstance(BaseModel):
    """Rich object referenced from block text (link, image)."""

    model_config = {"frozen": True}

    type: str = Field(..., description="Entity type, e.g. LINK or IMAGE")
    mutability: Mutability = Field(default="MUTABLE", description="How edits affect the entity")
    data: dict[str, str] = Field(default_factory=dict, description="Entity attributes")


class ConversionResult(BaseModel):
    """Blocks and entity map produced from one or more markup trees."""

    content_blocks: list[ContentBlockNode | ContentBlock] = Field(..., description="Blocks in document order")
    entity_map: dict[str, EntityInstance] = Field(default_factory=dict, description="Entities by key")

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content_blocks)


class ErrorResponse(BaseModel):
    """Structured error response for AI agents."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    suggestions: list[str] = Field(default_factory=list, description="Suggested alternatives")
    context: dict[str, Any] = Field(default_factory=dict, description="Additional error context")
