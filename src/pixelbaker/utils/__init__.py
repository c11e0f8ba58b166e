"""Utility functions for pixelbaker.

This module provides logging setup and per-run bake statistics.
"""

from pixelbaker.utils.logging import (
    BakeLogger,
    BakeStats,
    configure_logging,
)

__all__ = [
    "BakeLogger",
    "BakeStats",
    "configure_logging",
]
