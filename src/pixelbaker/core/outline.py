"""Outline font backend.

Bakes a fixed-cell table from a rasterizer that turns outline glyphs into
grayscale coverage bitmaps. Coverage is thresholded to 1 bit and written
through :class:`~pixelbaker.core.bitpack.BitWriter`, placed on a shared
baseline and clipped to the cell.
"""

import math
from collections.abc import Callable
from typing import Protocol

from pixelbaker.config import OutlineBakeConfig
from pixelbaker.core.bitpack import BitWriter
from pixelbaker.domain import MAX_CELL_DIMENSION, CoverageBitmap, PixelFont, VerticalMetrics
from pixelbaker.exceptions import PixelBakerError, RasterizerError
from pixelbaker.utils import BakeLogger, BakeStats

# Glyph whose advance defines the cell width
REFERENCE_CODEPOINT = ord("W")


class GlyphRasterizer(Protocol):
    """Source of coverage bitmaps for outline glyphs."""

    def scale_for_pixel_height(self, pixel_height: int) -> float:
        """Scale mapping font units so ascent-to-descent spans ``pixel_height``."""
        ...

    def codepoint_advance(self, codepoint: int) -> int:
        """Horizontal advance of a code point in font units."""
        ...

    def vertical_metrics(self) -> VerticalMetrics:
        ...

    def rasterize(self, codepoint: int, scale: float, oversample: int = 1) -> CoverageBitmap:
        """Render a code point at ``scale``.

        Missing code points and glyphs without outlines yield an empty bitmap.
        """
        ...


def cell_metrics(
    rasterizer: GlyphRasterizer, cell_height: int
) -> tuple[float, int, int]:
    """Compute the scale, cell width and baseline for a cell height.

    Args:
        rasterizer: Glyph source
        cell_height: Target cell height in pixels

    Returns:
        Tuple of (scale, cell_width, ascent_px)
    """
    scale = rasterizer.scale_for_pixel_height(cell_height)
    cell_width = math.ceil(rasterizer.codepoint_advance(REFERENCE_CODEPOINT) * scale)
    ascent = math.floor(rasterizer.vertical_metrics().ascent * scale + 0.5)
    return scale, cell_width, ascent


class OutlineFontBaker:
    """Bakes a pixel font from an outline glyph rasterizer.

    The allocated font is exposed as :attr:`font` as soon as it exists, so a
    caller can recover the partially filled table when baking fails.

    Example:
        baker = OutlineFontBaker(rasterizer, OutlineBakeConfig(cell_height=16))
        font = baker.bake()
    """

    def __init__(
        self,
        rasterizer: GlyphRasterizer,
        config: OutlineBakeConfig,
        source: str = "<outline>",
        logger: BakeLogger | None = None,
    ) -> None:
        """Initialize the baker.

        Args:
            rasterizer: Glyph source
            config: Cell height, range, threshold and oversampling
            source: Font path used in error messages
            logger: Bake logger collecting statistics
        """
        self.rasterizer = rasterizer
        self.config = config
        self.source = source
        self.bake_logger = logger if logger is not None else BakeLogger()
        self.font: PixelFont | None = None
        self.ascent = 0

    @property
    def stats(self) -> BakeStats:
        return self.bake_logger.stats

    def bake(
        self,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> PixelFont:
        """Allocate the table and rasterize every code point in range.

        Args:
            progress_callback: Optional callback(completed, total) after each glyph

        Returns:
            The baked font

        Raises:
            AllocationError: If the table cannot be allocated
            RasterizerError: If metrics or a glyph cannot be rasterized
        """
        config = self.config
        scale, cell_width, ascent = cell_metrics(self.rasterizer, config.cell_height)
        if cell_width <= 0:
            raise RasterizerError(self.source, "reference glyph 'W' has no advance width")
        if cell_width > MAX_CELL_DIMENSION:
            raise RasterizerError(
                self.source, f"cell width {cell_width} px exceeds {MAX_CELL_DIMENSION} px"
            )
        self.ascent = ascent

        self.font = PixelFont.allocate(
            char_px_width=cell_width,
            char_px_height=config.cell_height,
            cp_start=config.cp_start,
            cp_end=config.cp_end,
        )
        font = self.font
        self.bake_logger.log_font_allocated(
            width=font.char_px_width,
            height=font.char_px_height,
            bytes_per_line=font.bytes_per_line,
            bytes_per_glyph=font.bytes_per_glyph,
            glyph_count=font.glyph_count,
        )

        writer = BitWriter(font.table)  # type: ignore[arg-type]
        total = font.glyph_count
        for completed, codepoint in enumerate(range(config.cp_start, config.cp_end + 1), 1):
            try:
                bitmap = self.rasterizer.rasterize(codepoint, scale, config.oversample)
            except PixelBakerError:
                raise
            except Exception as e:
                raise RasterizerError(self.source, str(e), codepoint=codepoint) from e

            if bitmap.is_empty():
                self.bake_logger.log_glyph_blank(codepoint)
            else:
                clipped = self.place_glyph(writer, font, codepoint, bitmap)
                self.bake_logger.log_glyph_baked(codepoint, clipped=clipped)

            if progress_callback is not None:
                progress_callback(completed, total)

        return font

    def place_glyph(
        self,
        writer: BitWriter,
        font: PixelFont,
        codepoint: int,
        bitmap: CoverageBitmap,
    ) -> bool:
        """Threshold a coverage bitmap into a glyph slot.

        The bitmap's top-left pixel lands at ``(x_offset, ascent + y_offset)``
        in the cell; rows and columns outside the cell are dropped.

        Returns:
            True if any part of the bitmap fell outside the cell
        """
        threshold = self.config.gray_threshold
        glyph_base = font.glyph_offset(codepoint)

        y_start = self.ascent + bitmap.y_offset
        y_end = y_start + bitmap.height
        x_start = bitmap.x_offset
        x_end = x_start + bitmap.width

        first_row, last_row = max(0, y_start), min(y_end, font.char_px_height)
        first_col, last_col = max(0, x_start), min(x_end, font.char_px_width)
        clipped = (
            first_row != y_start
            or last_row != y_end
            or first_col != x_start
            or last_col != x_end
        )

        for y in range(first_row, last_row):
            writer.begin_row(glyph_base, y, font.bytes_per_line, first_col)
            source_row = (y - y_start) * bitmap.width - x_start
            for x in range(first_col, last_col):
                writer.put_bit(1 if bitmap.pixels[source_row + x] >= threshold else 0)

        return clipped
