"""Configuration management for pixelbaker.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- CodepointRange: Validated inclusive code point range
- OutlineBakeConfig: Outline font baking settings
- DescriptionBakeConfig: BDF description baking settings
- ExportConfig: Output format settings
- LoggingConfig: Logging settings
- BakerSettings: Main application settings
"""

from pixelbaker.config.settings import (
    BakerSettings,
    CodepointRange,
    DescriptionBakeConfig,
    ExportConfig,
    ExportFormat,
    LoggingConfig,
    OutlineBakeConfig,
    get_default_settings,
)

__all__ = [
    "BakerSettings",
    "CodepointRange",
    "DescriptionBakeConfig",
    "ExportConfig",
    "ExportFormat",
    "LoggingConfig",
    "OutlineBakeConfig",
    "get_default_settings",
]
