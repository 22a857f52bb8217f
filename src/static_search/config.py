"""Centralized configuration for static-search using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration loaded from ``STATIC_SEARCH_*`` environment variables.

    Command-line flags take precedence; these values are the defaults the
    indexing CLI falls back to.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATIC_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Root logging level"
    )
    log_json: bool = Field(default=False, description="Emit structured JSON log lines")

    # Analysis
    analyzer: Literal["default", "english", "english-nostem"] = Field(
        default="english", description="Named analyzer applied to indexed text and lookups"
    )

    # Extraction
    html_parser: Literal["html.parser", "lxml", "html5lib"] = Field(
        default="html.parser", description="BeautifulSoup tree builder; lxml and html5lib need their extras installed"
    )

    # Document discovery
    base_url: str = Field(default="", description="Prefix joined with each file's relative path to form its URL")
    html_extensions: str = Field(default=".html,.htm", description="Comma-separated suffixes indexed as HTML")
    text_extensions: str = Field(default=".txt,.md", description="Comma-separated suffixes indexed as plain text")

    @field_validator("log_level", "analyzer", mode="before")
    @classmethod
    def _lowercase_name(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    def get_html_extensions(self) -> list[str]:
        """Get list of file suffixes treated as HTML."""
        return _split_extensions(self.html_extensions)

    def get_text_extensions(self) -> list[str]:
        """Get list of file suffixes treated as plain text."""
        return _split_extensions(self.text_extensions)


def _split_extensions(raw: str) -> list[str]:
    extensions: list[str] = []
    for item in raw.split(","):
        suffix = item.strip().lower()
        if not suffix:
            continue
        extensions.append(suffix if suffix.startswith(".") else f".{suffix}")
    return extensions
