"""Configuration management for html-blocks.

Handles environment-based configuration with layered loading:
1. .env.template (base defaults)
2. .env.local (personal overrides)
3. Environment variables (highest priority)
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from rich.logging import RichHandler


class Settings(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        # Load from multiple env files in order
        env_file=[".env.template", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    app_name: str = Field(default="html-blocks", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")

    # MCP Server Settings
    mcp_server_name: str = Field(default="html-blocks", description="MCP server identifier")

    # Conversion
    tree_data_support: bool = Field(
        default=False,
        description="Keep nested blocks as a tree instead of flattening them into top-level blocks",
    )
    html_parser: str = Field(default="html.parser", description="BeautifulSoup parser backend")
    base_url: str | None = Field(default=None, description="Base URL used to resolve relative link hrefs")
    allowed_link_schemes: list[str] = Field(
        default=["http", "https", "mailto"],
        description="URL schemes accepted for LINK entities",
    )

    # HTTP Server Settings (for HTTP transport)
    http_host: str = Field(default="127.0.0.1", description="HTTP server host")
    http_port: int = Field(default=8000, description="HTTP server port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="%(name)s - %(message)s", description="Log format")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("html_parser")
    @classmethod
    def validate_html_parser(cls, v: str) -> str:
        """Validate parser backend name."""
        valid_parsers = {"html.parser", "lxml", "html5lib"}
        if v not in valid_parsers:
            raise ValueError(f"html_parser must be one of {valid_parsers}")
        return v

    @field_validator("allowed_link_schemes")
    @classmethod
    def normalize_schemes(cls, v: list[str]) -> list[str]:
        """Schemes are compared lower-cased and without the trailing colon."""
        return [scheme.lower().rstrip(":") for scheme in v]


def configure_logging(config: Settings | None = None) -> logging.Logger:
    """Attach a rich handler writing to stderr to the html_blocks logger."""
    config = config or settings
    handler = RichHandler(console=Console(stderr=True), show_path=config.debug, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter(config.log_format, datefmt="[%X]"))

    logger = logging.getLogger("html_blocks")
    logger.setLevel(config.log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


# Global settings instance
settings = Settings()
