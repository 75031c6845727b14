"""Application configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from sparklr.core.utils.logging import DEFAULT_FORMAT


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = DEFAULT_FORMAT
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file; stderr when unset")


class BakingConfig(BaseModel):
    """Lookup-table baking settings."""

    model_config = ConfigDict(extra="forbid")

    texture_width: int = Field(default=256, ge=2, le=4096, description="Texels per baked table")


class FormatConfig(BaseModel):
    """Asset serialization settings."""

    model_config = ConfigDict(extra="forbid")

    default_format: Literal["json", "yaml"] = Field(
        default="json", description="Format used when writing assets without an explicit extension"
    )


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    logging: LoggingConfig = LoggingConfig()
    baking: BakingConfig = BakingConfig()
    format: FormatConfig = FormatConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("sparklr.json")
