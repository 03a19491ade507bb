"""FastMCP Server implementation for html-blocks.

MCP server class that exposes HTML to content block conversion
as tools and resources over the Model Context Protocol.
"""

from typing import Any

from fastmcp import FastMCP

from .config import Settings, settings
from .converter import convert_from_html
from .models import ConversionResult, ErrorResponse
from .render_map import DEFAULT_BLOCK_RENDER_MAP, build_block_type_map


class HtmlBlocksServer:
    """FastMCP server for HTML conversion."""

    def __init__(self, name: str | None = None):
        """Initialize the html-blocks MCP server."""
        self.mcp = FastMCP(name or settings.mcp_server_name)
        self._settings = settings
        self._setup_tools()
        self._setup_resources()

    def convert(
        self,
        html: str,
        tree_data_support: bool | None = None,
        base_url: str | None = None,
    ) -> ConversionResult | ErrorResponse:
        """Convert HTML, reporting unparseable markup as an ErrorResponse."""
        config: Settings = self._settings
        if base_url is not None:
            config = config.model_copy(update={"base_url": base_url})

        result = convert_from_html(html, tree_data_support=tree_data_support, config=config)
        if result is None:
            return ErrorResponse(
                code="UNPARSEABLE_HTML",
                message="The HTML could not be parsed into a document tree",
                suggestions=["Check the markup is well-formed", "Pass the text as plain text instead"],
                context={"length": len(html)},
            )
        return result

    def _setup_tools(self) -> None:
        """Register MCP tools."""

        @self.mcp.tool()
        async def convert_html(
            html: str,
            tree_data_support: bool | None = None,
            base_url: str | None = None,
        ) -> ConversionResult | ErrorResponse:
            """Convert HTML into content blocks and an entity map.

            Args:
                html: HTML markup to convert
                tree_data_support: Keep nested blocks as a tree (default: server setting)
                base_url: Base URL for resolving relative links

            Returns:
                Content blocks with per-character styles and the entity map
            """
            return self.convert(html, tree_data_support, base_url)

        @self.mcp.tool()
        async def block_type_map() -> dict[str, list[str]]:
            """Get the HTML tag to block type mapping used for conversion.

            Returns:
                Candidate block types per tag
            """
            return {tag: list(types) for tag, types in build_block_type_map(DEFAULT_BLOCK_RENDER_MAP).items()}

    def _setup_resources(self) -> None:
        """Register MCP resources."""

        @self.mcp.resource("urn:html-blocks:render-map")
        async def render_map() -> dict[str, Any]:
            """Default block render map: block type -> element, aliases and wrapper."""
            return {
                block_type: config.model_dump()
                for block_type, config in DEFAULT_BLOCK_RENDER_MAP.items()
            }

    def run(self, **kwargs) -> None:
        """Run the MCP server.

        Args:
            **kwargs: Additional arguments passed to FastMCP.run()
        """
        self.mcp.run(**kwargs)


def main() -> None:
    """Main entry point for the html-blocks MCP server."""
    server = HtmlBlocksServer()
    server.run()


if __name__ == "__main__":
    main()
