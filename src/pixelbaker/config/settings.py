"""Configuration settings for pixelbaker."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

MAX_CODEPOINT = 0x10FFFF


class ExportFormat(str, Enum):
    """Output file format."""

    C = "c"
    BIN = "bin"


class CodepointRange(BaseModel):
    """Inclusive range of Unicode code points to bake."""

    cp_start: int = Field(
        default=0x20,
        ge=0,
        le=MAX_CODEPOINT,
        description="First code point (inclusive)",
    )
    cp_end: int = Field(
        default=0x7E,
        ge=0,
        le=MAX_CODEPOINT,
        description="Last code point (inclusive)",
    )

    @model_validator(mode="after")
    def _check_order(self) -> "CodepointRange":
        if self.cp_end < self.cp_start:
            raise ValueError(
                f"cp_end ({self.cp_end}) must not be below cp_start ({self.cp_start})"
            )
        return self

    @property
    def glyph_count(self) -> int:
        return self.cp_end - self.cp_start + 1

    def __contains__(self, codepoint: int) -> bool:
        return self.cp_start <= codepoint <= self.cp_end


class OutlineBakeConfig(CodepointRange):
    """Configuration for baking an outline (TTF/OTF) font."""

    cell_height: int = Field(
        default=16,
        ge=1,
        le=0xFFFF,
        description="Cell height in pixels",
    )
    gray_threshold: int = Field(
        default=128,
        ge=0,
        le=255,
        description="Minimum coverage for a pixel to be set",
    )
    oversample: int = Field(
        default=1,
        ge=1,
        le=16,
        description="Rasterize at this many times the resolution and box-filter down",
    )


class DescriptionBakeConfig(CodepointRange):
    """Configuration for baking a BDF bitmap-font description."""

    pass


class ExportConfig(BaseModel):
    """Configuration for writing a baked font."""

    format: ExportFormat = Field(
        default=ExportFormat.C,
        description="Output format",
    )
    symbol_name: str | None = Field(
        default=None,
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="C identifier for the font (derived from the file name if None)",
    )
    include_typedef: bool = Field(
        default=True,
        description="Declare the sFONT typedef in the generated header",
    )
    include_header: bool = Field(
        default=False,
        description="Prefix binary output with the descriptor record",
    )
    pointer_size: int = Field(
        default=4,
        description="Target pointer width in bytes for the descriptor record",
    )
    bytes_per_row: int = Field(
        default=12,
        ge=1,
        le=64,
        description="Hex bytes per line in generated C source",
    )

    @model_validator(mode="after")
    def _check_pointer_size(self) -> "ExportConfig":
        if self.pointer_size not in (4, 8):
            raise ValueError(f"pointer_size must be 4 or 8, got {self.pointer_size}")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class BakerSettings(BaseModel):
    """Main application settings."""

    outline: OutlineBakeConfig = Field(default_factory=OutlineBakeConfig)
    description: DescriptionBakeConfig = Field(default_factory=DescriptionBakeConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> BakerSettings:
    """Get default application settings."""
    return BakerSettings()
