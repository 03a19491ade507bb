"""Command-line interface for html-blocks.

Provides CLI commands for converting HTML files to content blocks,
inspecting the block render map and running the MCP server.
"""

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import configure_logging, settings
from .converter import convert_from_html
from .render_map import DEFAULT_BLOCK_RENDER_MAP, build_block_type_map
from .server import HtmlBlocksServer

app = typer.Typer(
    name="html-blocks",
    help="html-blocks - Convert HTML into content blocks and an entity map"
)
console = Console()
err_console = Console(stderr=True)


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


@app.callback()
def main_callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    if debug:
        settings.debug = True
        settings.log_level = "DEBUG"
    configure_logging(settings)


@app.command()
def convert(
    source: str = typer.Argument(..., help="HTML file to convert, or - for stdin"),
    tree: bool = typer.Option(
        settings.tree_data_support, "--tree/--flat", help="Keep nested blocks as a tree"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    base_url: str | None = typer.Option(None, "--base-url", help="Base URL for relative links"),
) -> None:
    """Convert an HTML document to content blocks."""
    try:
        html = _read_source(source)
    except OSError as e:
        console.print(f"[bold red]✗ Could not read {source}: {e}[/bold red]")
        raise typer.Exit(1)

    config = settings.model_copy(update={"base_url": base_url}) if base_url else settings
    result = convert_from_html(html, tree_data_support=tree, config=config)
    if result is None:
        console.print("[bold red]✗ Conversion failed: the HTML could not be parsed[/bold red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    blocks_table = Table(title="Content Blocks")
    blocks_table.add_column("Key", style="dim")
    blocks_table.add_column("Type", style="cyan")
    blocks_table.add_column("Depth", justify="right")
    if tree:
        blocks_table.add_column("Parent", style="dim")
    blocks_table.add_column("Text", style="green")
    blocks_table.add_column("Styles", style="magenta")
    blocks_table.add_column("Entities", style="yellow")

    for block in result.content_blocks:
        styles = sorted({style for metadata in block.character_list for style in metadata.style})
        entities = [f"{entity}[{start}:{end}]" for entity, start, end in block.find_entity_ranges()]
        row = [block.key, block.type, str(block.depth)]
        if tree:
            row.append(getattr(block, "parent", None) or "")
        row.extend([block.text, ", ".join(styles), ", ".join(entities)])
        blocks_table.add_row(*row)

    console.print(blocks_table)

    if result.entity_map:
        entity_table = Table(title="Entity Map")
        entity_table.add_column("Key", style="cyan")
        entity_table.add_column("Type", style="green")
        entity_table.add_column("Mutability", style="dim")
        entity_table.add_column("Data")
        for key, entity in result.entity_map.items():
            data = ", ".join(f"{name}={value}" for name, value in entity.data.items())
            entity_table.add_row(key, entity.type, entity.mutability, data)
        console.print(entity_table)


@app.command("render-map")
def render_map() -> None:
    """Show which block types each HTML tag maps to."""
    table = Table(title="Block Type Map")
    table.add_column("Tag", style="cyan")
    table.add_column("Block Types", style="green")

    for tag, block_types in build_block_type_map(DEFAULT_BLOCK_RENDER_MAP).items():
        table.add_row(tag, ", ".join(block_types))

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option(settings.http_host, "--host", "-h", help="Server host"),
    port: int = typer.Option(settings.http_port, "--port", "-p", help="Server port"),
    transport: str = typer.Option("stdio", "--transport", "-t", help="Transport protocol (stdio, http, sse)"),
) -> None:
    """Start the html-blocks MCP server."""
    err_console.print("[bold green]Starting html-blocks MCP Server[/bold green]")

    server = HtmlBlocksServer()

    if transport in ("http", "sse"):
        err_console.print(f"HTTP Server: http://{host}:{port}")
        server.run(transport=transport, host=host, port=port)
    else:
        # Default STDIO transport
        server.run()


@app.command()
def config() -> None:
    """Show current configuration."""
    table = Table(title="Settings")
    table.add_column("Setting", style="cyan", min_width=25)
    table.add_column("Value", style="green")

    table.add_row("App Name", settings.app_name)
    table.add_row("App Version", settings.app_version)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("MCP Server Name", settings.mcp_server_name)
    table.add_row("Tree Data Support", "✓" if settings.tree_data_support else "✗")
    table.add_row("HTML Parser", settings.html_parser)
    table.add_row("Base URL", settings.base_url or "Not set")
    table.add_row("Link Schemes", ", ".join(settings.allowed_link_schemes))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
