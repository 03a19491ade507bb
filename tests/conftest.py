"""Pytest configuration and shared fixtures for html-blocks tests."""

from collections.abc import Callable, Generator

import pytest

from html_blocks.builder import ContentBlocksBuilder
from html_blocks.config import Settings
from html_blocks.converter import convert_from_html
from html_blocks.keys import KeyGenerator
from html_blocks.models import ConversionResult, ElementNode, TextNode
from html_blocks.render_map import DEFAULT_BLOCK_RENDER_MAP, build_block_type_map, disambiguate
from html_blocks.server import HtmlBlocksServer


@pytest.fixture
def test_settings() -> Settings:
    """Create test configuration settings."""
    return Settings(
        debug=True,
        tree_data_support=False,
        html_parser="html.parser",
        base_url=None,
        log_level="DEBUG",
    )


@pytest.fixture
def key_generator() -> KeyGenerator:
    """Seeded key generator for reproducible block keys."""
    return KeyGenerator(seed=42)


@pytest.fixture
def make_builder(test_settings: Settings, key_generator: KeyGenerator) -> Callable[..., ContentBlocksBuilder]:
    """Factory for builders over the default render map."""

    def _make(tree_data_support: bool = False) -> ContentBlocksBuilder:
        return ContentBlocksBuilder(
            build_block_type_map(DEFAULT_BLOCK_RENDER_MAP),
            disambiguate,
            tree_data_support=tree_data_support,
            key_generator=key_generator.generate,
            config=test_settings,
        )

    return _make


@pytest.fixture
def convert(test_settings: Settings) -> Callable[..., ConversionResult | None]:
    """Convert HTML with the test settings."""

    def _convert(html: str, tree: bool = False, **kwargs) -> ConversionResult | None:
        return convert_from_html(html, tree_data_support=tree, config=test_settings, **kwargs)

    return _convert


@pytest.fixture
def element() -> Callable[..., ElementNode]:
    """Build an ElementNode; plain strings become text nodes, trailing _ is dropped from attribute names."""

    def _element(tag: str, *children: ElementNode | TextNode | str, **attributes: str) -> ElementNode:
        return ElementNode(
            tag=tag,
            attributes={name.rstrip("_"): value for name, value in attributes.items()},
            children=[TextNode(content=c) if isinstance(c, str) else c for c in children],
        )

    return _element


@pytest.fixture
def sample_html() -> str:
    """Sample pasted document with lists, styles, a link and an image."""
    return (
        "<h1>Title</h1>"
        "<p>Intro with <b>bold</b> and <a href=\"https://example.com/docs\">a link</a>.</p>"
        "<ul><li>First</li><li>Second <i>item</i></li></ul>"
        "<ol><li>One</li></ol>"
        "<p><img src=\"pic.png\" alt=\"Picture\"></p>"
    )


@pytest.fixture
def html_server(test_settings: Settings) -> Generator[HtmlBlocksServer, None, None]:
    """Create html-blocks MCP server instance for testing."""
    server = HtmlBlocksServer()
    # Override settings for testing
    server._settings = test_settings
    yield server
