"""Glyph source types shared by the backends.

- CoverageBitmap: grayscale rasterizer output for one glyph
- VerticalMetrics: font-wide ascent/descent/line gap in font units
- BoundingBox: the global FONTBOUNDINGBOX of a BDF description
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CoverageBitmap:
    """Grayscale coverage of one rasterized glyph.

    Offsets place the bitmap's top-left pixel relative to the glyph origin
    on the baseline, with y growing downwards (negative y_offset is above the
    baseline).

    Attributes:
        width: Bitmap width in pixels
        height: Bitmap height in pixels
        x_offset: Horizontal offset of the left column from the origin
        y_offset: Vertical offset of the top row from the baseline
        pixels: Row-major coverage values (0-255), top row first
    """

    width: int
    height: int
    x_offset: int
    y_offset: int
    pixels: bytes

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Coverage buffer has {len(self.pixels)} bytes, "
                f"expected {self.width}x{self.height}"
            )

    @classmethod
    def empty(cls) -> "CoverageBitmap":
        """A zero-sized bitmap for glyphs with nothing to draw."""
        return cls(width=0, height=0, x_offset=0, y_offset=0, pixels=b"")

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


@dataclass(frozen=True, slots=True)
class VerticalMetrics:
    """Font-wide vertical metrics in font units (descent is negative)."""

    ascent: int
    descent: int
    line_gap: int


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Global bounding box declared by a BDF description.

    Attributes:
        width: Cell width in pixels
        height: Cell height in pixels
        x_origin: Horizontal offset of the box from the origin
        y_origin: Vertical offset of the box from the baseline
    """

    width: int
    height: int
    x_origin: int
    y_origin: int
