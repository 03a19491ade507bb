"""Mutable walk state for the content blocks builder.

BuilderState holds what the builder has accumulated since the last block
was emitted (text, per-character metadata) together with the context the
next characters are created in (styles, entity, depth, wrapper).
"""

from collections.abc import Iterator
from contextlib import contextmanager

from .models import UNSTYLED, CharacterMetadata, ElementNode

# https://developer.mozilla.org/en-US/docs/Web/CSS/font-weight
BOLD_VALUES = {"bold", "bolder", "500", "600", "700", "800", "900"}
NOT_BOLD_VALUES = {"light", "lighter", "100", "200", "300", "400"}


class BuilderState:
    """Text accumulator and walk context owned by one builder."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.text = ""
        self.character_list: list[CharacterMetadata] = []
        self.block_type = UNSTYLED
        self.depth = 0
        self.entity: str | None = None
        self.style: frozenset[str] = frozenset()
        self.wrapper = "ul"

    def add_style(self, inline_style: str) -> None:
        self.style = self.style | {inline_style}

    def remove_style(self, inline_style: str) -> None:
        self.style = self.style - {inline_style}

    def append_text(self, text: str) -> None:
        """Append text, tagging every character with the current style and entity."""
        self.text += text
        metadata = CharacterMetadata.create(self.style, self.entity)
        self.character_list.extend([metadata] * len(text))

    def trim(self) -> None:
        """Strip surrounding whitespace from the accumulated text.

        Characters from the first to the last one carrying an entity are
        kept even when they are whitespace.
        """
        length = len(self.text)
        begin = length - len(self.text.lstrip())
        end = len(self.text.rstrip())

        entity_offsets = [i for i, metadata in enumerate(self.character_list) if metadata.entity is not None]
        if entity_offsets:
            begin = min(begin, entity_offsets[0])
            end = max(end, entity_offsets[-1] + 1)

        if begin > end:
            self.text = ""
            self.character_list = []
        else:
            self.text = self.text[begin:end]
            self.character_list = self.character_list[begin:end]

    def take(self) -> tuple[str, list[CharacterMetadata]]:
        """Hand over the accumulated text and clear it along with block type and depth."""
        text, character_list = self.text, self.character_list
        self.text = ""
        self.character_list = []
        self.block_type = UNSTYLED
        self.depth = 0
        return text, character_list

    @contextmanager
    def entity_scope(self, entity: str) -> Iterator[None]:
        """Attach characters appended inside the block to entity, then clear it."""
        self.entity = entity
        try:
            yield
        finally:
            self.entity = None

    @contextmanager
    def style_scope(self, inline_style: str | None) -> Iterator[None]:
        """Apply inline_style to characters appended inside the block."""
        if inline_style is not None:
            self.add_style(inline_style)
        try:
            yield
        finally:
            if inline_style is not None:
                self.remove_style(inline_style)

    @contextmanager
    def wrapper_scope(self, wrapper: str) -> Iterator[None]:
        previous = self.wrapper
        self.wrapper = wrapper
        try:
            yield
        finally:
            self.wrapper = previous

    @contextmanager
    def block_scope(self, wrapper: str, depth: int) -> Iterator[None]:
        """Enter a block element; depth and wrapper are restored on exit."""
        previous_depth, previous_wrapper = self.depth, self.wrapper
        self.depth = depth
        self.wrapper = wrapper
        try:
            yield
        finally:
            self.depth = previous_depth
            self.wrapper = previous_wrapper

    def update_style_from_attributes(self, node: ElementNode) -> None:
        """Guess inline styles from an element's css (font-weight, font-style, text-decoration)."""
        style = node.style
        font_weight = style.get("font-weight")
        font_style = style.get("font-style")
        text_decoration = style.get("text-decoration")

        if font_weight in BOLD_VALUES:
            self.add_style("BOLD")
        elif font_weight in NOT_BOLD_VALUES:
            self.remove_style("BOLD")

        if font_style == "italic":
            self.add_style("ITALIC")
        elif font_style == "normal":
            self.remove_style("ITALIC")

        if text_decoration == "underline":
            self.add_style("UNDERLINE")
        if text_decoration == "line-through":
            self.add_style("STRIKETHROUGH")
        if text_decoration == "none":
            self.remove_style("UNDERLINE")
            self.remove_style("STRIKETHROUGH")
