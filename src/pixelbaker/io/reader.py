"""Font readers.

This module reads input font files and provides OutlineFontReader, the
rasterizer used by the outline backend. Outlines and metrics come from
fontTools; coverage bitmaps are rendered by FreeType through
fontTools' FreeTypePen.
"""

import math
from io import BytesIO
from pathlib import Path

from fontTools.misc.transform import Transform
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.freetypePen import FreeTypePen
from fontTools.ttLib import TTFont

from pixelbaker.domain import CoverageBitmap, VerticalMetrics
from pixelbaker.exceptions import AllocationError, FontFileError, RasterizerError


def read_font_file(font_path: Path) -> bytes:
    """Read a whole font file into memory.

    Raises:
        FontFileError: If the file cannot be opened or read
        AllocationError: If the contents do not fit in memory
    """
    try:
        with open(font_path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FontFileError(str(font_path), e.strerror or str(e)) from e
    except MemoryError as e:
        size = font_path.stat().st_size
        raise AllocationError(size) from e


def read_description_file(font_path: Path) -> str:
    """Read a BDF description as text.

    BDF is ASCII; Latin-1 decoding keeps any stray high bytes intact.
    """
    return read_font_file(font_path).decode("latin-1")


def downsample(pixels: bytes, width: int, height: int, factor: int) -> bytes:
    """Box-filter a coverage buffer by an integer factor in both directions.

    Args:
        pixels: Row-major coverage of ``width * factor`` by ``height * factor``
        width: Output width
        height: Output height
        factor: Oversampling factor

    Returns:
        Row-major coverage of ``width`` by ``height``
    """
    if factor == 1:
        return bytes(pixels)
    stride = width * factor
    area = factor * factor
    out = bytearray(width * height)
    for y in range(height):
        rows = [
            pixels[(y * factor + dy) * stride : (y * factor + dy + 1) * stride]
            for dy in range(factor)
        ]
        for x in range(width):
            total = 0
            for row in rows:
                total += sum(row[x * factor : (x + 1) * factor])
            out[y * width + x] = total // area
    return bytes(out)


class OutlineFontReader:
    """Loads TTF/OTF fonts and rasterizes their glyphs.

    Implements the rasterizer protocol of the outline backend. Metrics follow
    the ``hhea`` table; missing code points rasterize to an empty bitmap.

    Example:
        with OutlineFontReader(Path("font.ttf")) as reader:
            scale = reader.scale_for_pixel_height(16)
            bitmap = reader.rasterize(ord("A"), scale)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}
        self._glyph_set = None

    def load(self) -> None:
        """Read and parse the font file.

        Raises:
            FontFileError: If the file cannot be opened
            AllocationError: If the file does not fit in memory
            RasterizerError: If the file is not a usable outline font
        """
        data = read_font_file(self._font_path)
        try:
            font = TTFont(BytesIO(data))
            # Tables load lazily; touch the ones rasterization depends on
            font["head"]
            font["hhea"]
            font["hmtx"]
            self._cmap = font.getBestCmap() or {}
            self._glyph_set = font.getGlyphSet()
        except MemoryError as e:
            raise AllocationError(len(data)) from e
        except Exception as e:
            raise RasterizerError(str(self._font_path), str(e)) from e
        self._font = font

    @property
    def font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return 'OpenType' for CFF-flavoured fonts, 'TrueType' otherwise."""
        font = self.font
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        return self.font["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        return len(self.font.getGlyphOrder())

    def scale_for_pixel_height(self, pixel_height: int) -> float:
        """Scale mapping hhea ascent-to-descent onto ``pixel_height`` pixels."""
        metrics = self.vertical_metrics()
        font_height = metrics.ascent - metrics.descent
        if font_height <= 0:
            raise RasterizerError(str(self._font_path), "font has no vertical extent")
        return pixel_height / font_height

    def vertical_metrics(self) -> VerticalMetrics:
        hhea = self.font["hhea"]
        return VerticalMetrics(
            ascent=hhea.ascent,  # type: ignore[attr-defined]
            descent=hhea.descent,  # type: ignore[attr-defined]
            line_gap=hhea.lineGap,  # type: ignore[attr-defined]
        )

    def codepoint_advance(self, codepoint: int) -> int:
        """Advance width in font units; unmapped code points use .notdef."""
        font = self.font
        glyph_name = self._cmap.get(codepoint, font.getGlyphOrder()[0])
        advance, _lsb = font["hmtx"][glyph_name]
        return advance

    def rasterize(self, codepoint: int, scale: float, oversample: int = 1) -> CoverageBitmap:
        """Render a code point to a coverage bitmap.

        The bitmap box is the glyph's outline bounds at ``scale``, snapped
        outwards to whole pixels. With ``oversample`` > 1 the glyph is rendered
        at that multiple of the resolution and box-filtered back down.

        Raises:
            RasterizerError: If FreeType fails to render the outline
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")

        glyph_name = self._cmap.get(codepoint)
        if glyph_name is None:
            return CoverageBitmap.empty()

        glyph = self._glyph_set[glyph_name]  # type: ignore[index]
        bounds_pen = BoundsPen(self._glyph_set)
        glyph.draw(bounds_pen)
        if bounds_pen.bounds is None:
            return CoverageBitmap.empty()

        x_min, y_min, x_max, y_max = bounds_pen.bounds
        x0 = math.floor(x_min * scale)
        y0 = math.floor(-y_max * scale)
        x1 = math.ceil(x_max * scale)
        y1 = math.ceil(-y_min * scale)
        width, height = x1 - x0, y1 - y0
        if width <= 0 or height <= 0:
            return CoverageBitmap.empty()

        # Pixel space has y up with the bitmap's bottom edge at 0
        factor = scale * oversample
        transform = Transform(factor, 0, 0, factor, -x0 * oversample, y1 * oversample)
        pen = FreeTypePen(self._glyph_set)
        try:
            glyph.draw(pen)
            buffer, _size = pen.buffer(
                width=width * oversample,
                height=height * oversample,
                transform=transform,
            )
        except MemoryError as e:
            raise AllocationError(width * height * oversample * oversample) from e
        except Exception as e:
            raise RasterizerError(str(self._font_path), str(e), codepoint=codepoint) from e

        return CoverageBitmap(
            width=width,
            height=height,
            x_offset=x0,
            y_offset=y0,
            pixels=downsample(buffer, width, height, oversample),
        )

    def close(self) -> None:
        """Close the font and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = {}
            self._glyph_set = None

    def __enter__(self) -> "OutlineFontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
