"""Second pass: turn BlockConfig trees into content blocks.

With tree data support every descriptor becomes a ContentBlockNode linked
to its parent, children and siblings. Without it only top-level
descriptors produce blocks, and nested descriptors are folded into their
top-level ancestor's text.
"""

from .models import UNSTYLED, BlockConfig, CharacterMetadata, ContentBlock, ContentBlockNode


def to_content_blocks(block_configs: list[BlockConfig], parent: str | None = None) -> list[ContentBlockNode]:
    """Resolve parent/children/siblings and emit blocks in pre-order.

    A parent block always comes before any of its descendants.
    """
    content_blocks = []
    last = len(block_configs) - 1
    for i, config in enumerate(block_configs):
        config.parent = parent
        config.prev_sibling = block_configs[i - 1].key if i > 0 else None
        config.next_sibling = block_configs[i + 1].key if i < last else None
        config.children = [child.key for child in config.child_configs]
        content_blocks.append(
            ContentBlockNode(
                key=config.key,
                type=config.type,
                text=config.text,
                character_list=config.character_list,
                depth=config.depth,
                parent=config.parent,
                children=config.children,
                prev_sibling=config.prev_sibling,
                next_sibling=config.next_sibling,
            )
        )
        content_blocks.extend(to_content_blocks(config.child_configs, config.key))
    return content_blocks


def to_flat_content_blocks(block_configs: list[BlockConfig]) -> list[ContentBlock]:
    """Same as to_content_blocks but replaces nested blocks by their text content."""
    content_blocks = []
    for config in block_configs:
        text, character_list = extract_text_from_block_configs(config.child_configs)
        content_blocks.append(
            ContentBlock(
                key=config.key,
                type=config.type,
                text=config.text + text,
                character_list=[*config.character_list, *character_list],
                depth=config.depth,
            )
        )
    return content_blocks


def extract_text_from_block_configs(
    block_configs: list[BlockConfig],
) -> tuple[str, list[CharacterMetadata]]:
    """Concatenate the text and inline styles of nested block configs.

    A newline follows the text of every styled block once some text has
    been collected; it reuses the metadata of the character before it.
    """
    text = ""
    character_list: list[CharacterMetadata] = []
    for config in block_configs:
        text += config.text
        character_list.extend(config.character_list)
        if text and config.type != UNSTYLED:
            text += "\n"
            character_list.append(character_list[-1])
        child_text, child_characters = extract_text_from_block_configs(config.child_configs)
        text += child_text
        character_list.extend(child_characters)
    return text, character_list
