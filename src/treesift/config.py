"""Configuration for TreeSift using pydantic-settings.

Settings come from ``TREESIFT_*`` environment variables or a ``.env`` file;
CLI options override them per invocation.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class TreeSiftSettings(BaseSettings):
    """Main configuration settings for TreeSift."""

    # Parsing
    parser_backend: Literal["tree-sitter", "babel"] = Field(
        "tree-sitter", description="Syntax tree provider used to parse sources"
    )
    node_path: str = Field("node", description="Node.js executable for the babel backend")
    strict_parsing: bool = Field(
        True, description="Treat syntax errors reported by tree-sitter as fatal"
    )

    # Logging
    log_level: str = Field("WARNING", description="Log level for the treesift loggers")
    structured_logging: bool = Field(False, description="Emit JSON log lines instead of text")
    log_file: Path | None = Field(None, description="Optional file to write logs to")

    # Output
    json_indent: int = Field(2, ge=0, description="Indentation of JSON output")
    include_patterns: list[str] = Field(
        default_factory=lambda: ["*.tsx", "*.jsx", "*.ts", "*.js"],
        description="Glob patterns of files analyzed when the target is a directory",
    )

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_prefix = "TREESIFT_"
        case_sensitive = False
        extra = "ignore"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept standard logging level names in any case."""
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return level


# Singleton instance
_settings: TreeSiftSettings | None = None


def get_settings() -> TreeSiftSettings:
    """Get the singleton settings instance.

    Returns:
        TreeSiftSettings instance
    """
    global _settings

    if _settings is None:
        _settings = TreeSiftSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
