"""Tests for the html-blocks MCP server."""

import asyncio

from html_blocks.models import ContentBlockNode, ConversionResult, ErrorResponse
from html_blocks.server import HtmlBlocksServer


class TestHtmlBlocksServer:
    """Test HtmlBlocksServer."""

    def test_registers_tools(self, html_server):
        tools = asyncio.run(html_server.mcp.get_tools())
        assert {"convert_html", "block_type_map"} <= set(tools)

    def test_registers_render_map_resource(self, html_server):
        resources = asyncio.run(html_server.mcp.get_resources())
        assert any(str(uri) == "urn:html-blocks:render-map" for uri in resources)

    def test_custom_name(self):
        assert HtmlBlocksServer(name="custom").mcp.name == "custom"

    def test_convert(self, html_server):
        result = html_server.convert("<h1>Title</h1><p>Body</p>")

        assert isinstance(result, ConversionResult)
        assert [(b.type, b.text) for b in result.content_blocks] == [
            ("header-one", "Title"),
            ("unstyled", "Body"),
        ]

    def test_convert_tree(self, html_server):
        result = html_server.convert("<p>x</p>", tree_data_support=True)
        assert isinstance(result.content_blocks[0], ContentBlockNode)

    def test_convert_with_base_url(self, html_server, test_settings):
        result = html_server.convert('<a href="/docs">docs</a>', base_url="https://example.com")

        assert result.entity_map["1"].data["url"] == "https://example.com/docs"
        # The server settings are not modified
        assert test_settings.base_url is None

    def test_unparseable_html(self, html_server, monkeypatch):
        monkeypatch.setattr("html_blocks.server.convert_from_html", lambda *args, **kwargs: None)

        result = html_server.convert("<p>x</p>")

        assert isinstance(result, ErrorResponse)
        assert result.code == "UNPARSEABLE_HTML"
        assert result.context == {"length": 8}
        assert result.suggestions
