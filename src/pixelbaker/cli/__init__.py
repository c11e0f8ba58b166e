"""Command-line interface for pixelbaker.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Separate commands for outline (TTF/OTF) and BDF input
- Progress bar while rasterizing
- Glyph previews in the terminal
- C source (sFONT) or raw binary output
"""

from pixelbaker.cli.app import cli, main

__all__ = ["cli", "main"]
