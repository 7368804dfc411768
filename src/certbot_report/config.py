"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables
  - Fall back to a .env file
  - Validate types and constraints at startup

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so REPORT__ENCODING maps to
report.encoding and OUTPUT__FORMAT maps to output.format.
"""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

OutputFormat = Literal["json", "text"]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ReportSettings(BaseModel):
    """How captured report files are read."""

    encoding: str = Field(default="utf-8", description="Text encoding of saved report files")

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, value: str) -> str:
        """Reject codec names Python doesn't know."""
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {value!r}") from e
        return value


class OutputSettings(BaseModel):
    """How the command-line entry point prints certificates."""

    format: OutputFormat = Field(default="json", description="json or text")
    indent: int = Field(default=2, ge=0, le=8, description="JSON indentation")


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values

    Command-line flags override whatever is loaded here.
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    report: ReportSettings = Field(default_factory=lambda: ReportSettings())
    output: OutputSettings = Field(default_factory=lambda: OutputSettings())
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level
