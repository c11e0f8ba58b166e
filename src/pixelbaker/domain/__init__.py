"""Domain models for pixelbaker.

This module contains the data products of baking and the glyph sources
feeding them. All models are plain dataclasses, independent of fontTools
and of the file formats they were read from.

Key classes:
- PixelFont: Fixed-cell 1-bit glyph table and its firmware descriptor
- CoverageBitmap: Grayscale rasterizer output for one glyph
- VerticalMetrics: Font-wide vertical metrics
- BoundingBox: Global bounding box of a BDF description
- BakeResult: Discriminated success/failure outcome of a bake
"""

from pixelbaker.domain.bitmap import BoundingBox, CoverageBitmap, VerticalMetrics
from pixelbaker.domain.pixel_font import (
    DESCRIPTOR_FORMATS,
    MAX_CELL_DIMENSION,
    SFONT_FORMATS,
    PixelFont,
    bytes_per_line_for,
    release,
)
from pixelbaker.domain.result import BakeResult

__all__: list[str] = [
    "DESCRIPTOR_FORMATS",
    "MAX_CELL_DIMENSION",
    "SFONT_FORMATS",
    "BakeResult",
    "BoundingBox",
    "CoverageBitmap",
    "PixelFont",
    "VerticalMetrics",
    "bytes_per_line_for",
    "release",
]
