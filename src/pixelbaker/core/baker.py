"""Public bake operations.

Both operations return a :class:`~pixelbaker.domain.BakeResult` instead of
raising on bake failures. When a failure happens after the table was
allocated, the partial font travels in the result and the caller releases it.

Key functions:
- bake_outline_font: Bake from a TTF/OTF outline font
- bake_description_font: Bake from a BDF bitmap-font description
- release: Drop a baked font's table
"""

from collections.abc import Callable
from pathlib import Path

import structlog

from pixelbaker.config import DescriptionBakeConfig, OutlineBakeConfig
from pixelbaker.core.description import DescriptionFontBaker
from pixelbaker.core.outline import OutlineFontBaker
from pixelbaker.domain import BakeResult, PixelFont
from pixelbaker.domain import release as _release_font
from pixelbaker.exceptions import PixelBakerError
from pixelbaker.io import OutlineFontReader, read_description_file
from pixelbaker.utils import BakeLogger

logger = structlog.get_logger(__name__)


def bake_outline_font(
    path: str | Path,
    cell_height_px: int,
    cp_start: int,
    cp_end: int,
    gray_threshold: int = 128,
    oversample: int = 1,
    progress_callback: Callable[[int, int], None] | None = None,
) -> BakeResult:
    """Bake a fixed-cell 1-bit table from an outline font.

    Args:
        path: TTF/OTF font file
        cell_height_px: Cell height in pixels
        cp_start: First code point (inclusive)
        cp_end: Last code point (inclusive)
        gray_threshold: Minimum coverage (0-255) for a pixel to be set
        oversample: Rasterization oversampling factor
        progress_callback: Optional callback(completed, total) after each glyph

    Returns:
        BakeResult holding the font on success, or the error and any
        partially baked font on failure

    Raises:
        pydantic.ValidationError: If the arguments are out of range
    """
    config = OutlineBakeConfig(
        cell_height=cell_height_px,
        cp_start=cp_start,
        cp_end=cp_end,
        gray_threshold=gray_threshold,
        oversample=oversample,
    )
    font_path = Path(path)
    bake_logger = BakeLogger(logger)
    stats = bake_logger.stats
    stats.start()

    logger.info(
        "Starting outline bake",
        input=str(font_path),
        cell_height=config.cell_height,
        cp_start=config.cp_start,
        cp_end=config.cp_end,
        gray_threshold=config.gray_threshold,
        oversample=config.oversample,
    )

    baker: OutlineFontBaker | None = None
    try:
        with OutlineFontReader(font_path) as reader:
            baker = OutlineFontBaker(reader, config, source=str(font_path), logger=bake_logger)
            font = baker.bake(progress_callback=progress_callback)
    except PixelBakerError as e:
        stats.finish()
        bake_logger.log_bake_error(e)
        return BakeResult.failure(e, font=baker.font if baker else None, stats=stats)

    stats.finish()
    _log_complete(font, bake_logger)
    return BakeResult.success(font, stats)


def bake_description_font(path: str | Path, cp_start: int, cp_end: int) -> BakeResult:
    """Bake a fixed-cell 1-bit table from a BDF bitmap-font description.

    Args:
        path: BDF file
        cp_start: First code point (inclusive)
        cp_end: Last code point (inclusive)

    Returns:
        BakeResult holding the font on success, or the error and any
        partially baked font on failure

    Raises:
        pydantic.ValidationError: If the range is invalid
    """
    config = DescriptionBakeConfig(cp_start=cp_start, cp_end=cp_end)
    font_path = Path(path)
    bake_logger = BakeLogger(logger)
    stats = bake_logger.stats
    stats.start()

    logger.info(
        "Starting description bake",
        input=str(font_path),
        cp_start=config.cp_start,
        cp_end=config.cp_end,
    )

    baker: DescriptionFontBaker | None = None
    try:
        text = read_description_file(font_path)
        baker = DescriptionFontBaker(text, config, logger=bake_logger)
        font = baker.bake()
    except PixelBakerError as e:
        stats.finish()
        bake_logger.log_bake_error(e)
        return BakeResult.failure(e, font=baker.font if baker else None, stats=stats)

    stats.finish()
    _log_complete(font, bake_logger)
    return BakeResult.success(font, stats)


def release(font: PixelFont | None) -> None:
    """Release a baked font's table. Accepts None and released fonts."""
    _release_font(font)


def _log_complete(font: PixelFont, bake_logger: BakeLogger) -> None:
    stats = bake_logger.stats
    logger.info(
        "Bake complete",
        width=font.char_px_width,
        height=font.char_px_height,
        glyphs=font.glyph_count,
        baked=stats.glyphs_baked,
        blank=stats.glyphs_blank,
        clipped=stats.glyphs_clipped,
        skipped=stats.glyphs_skipped,
        duration_seconds=round(stats.duration_seconds, 3),
    )
