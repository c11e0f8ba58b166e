"""Core baking pipeline for pixelbaker.

This module contains:

- The bit-packing writer shared by the backends
- The outline font backend (coverage thresholding, baseline placement, clipping)
- The BDF description backend (forward-only scanner state machine)
- The public bake operations returning discriminated results

Key classes:
- BitWriter: Row-padded MSB-first bit cursor
- OutlineFontBaker: Bakes from a glyph rasterizer
- DescriptionScanner: Forward-only BDF scanner
- DescriptionFontBaker: Bakes from BDF text

Key functions:
- bake_outline_font: Bake from a TTF/OTF file
- bake_description_font: Bake from a BDF file
- release: Drop a baked font's table
"""

from pixelbaker.core.baker import bake_description_font, bake_outline_font, release
from pixelbaker.core.bitpack import BitWriter
from pixelbaker.core.description import (
    DescriptionFontBaker,
    DescriptionScanner,
    ScanState,
    fill_placeholder,
    placeholder_byte,
)
from pixelbaker.core.outline import GlyphRasterizer, OutlineFontBaker, cell_metrics

__all__ = [
    "BitWriter",
    "DescriptionFontBaker",
    "DescriptionScanner",
    "GlyphRasterizer",
    "OutlineFontBaker",
    "ScanState",
    "bake_description_font",
    "bake_outline_font",
    "cell_metrics",
    "fill_placeholder",
    "placeholder_byte",
    "release",
]
