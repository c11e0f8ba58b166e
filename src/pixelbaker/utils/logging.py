"""Logging utilities for pixelbaker."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class BakeStats:
    """Statistics from a bake run."""

    glyphs_baked: int = 0
    glyphs_blank: int = 0
    glyphs_clipped: int = 0
    glyphs_skipped: int = 0
    skipped_codepoints: list[int] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate bake duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    def start(self) -> None:
        self.start_time = time.time()

    def finish(self) -> None:
        self.end_time = time.time()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and, optionally, a file.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)
        _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("pixelbaker")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class BakeLogger:
    """Logger for tracking per-glyph bake progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("pixelbaker")
        self._stats = BakeStats()

    def log_font_allocated(
        self,
        width: int,
        height: int,
        bytes_per_line: int,
        bytes_per_glyph: int,
        glyph_count: int,
    ) -> None:
        """Log the cell geometry of a freshly allocated table."""
        self._logger.debug(
            "Glyph table allocated",
            width=width,
            height=height,
            bytes_per_line=bytes_per_line,
            bytes_per_glyph=bytes_per_glyph,
            glyph_count=glyph_count,
        )

    def log_glyph_baked(self, codepoint: int, clipped: bool = False) -> None:
        """Log a glyph written into its slot."""
        self._logger.debug("Glyph baked", codepoint=f"U+{codepoint:04X}", clipped=clipped)
        self._stats.glyphs_baked += 1
        if clipped:
            self._stats.glyphs_clipped += 1

    def log_glyph_blank(self, codepoint: int) -> None:
        """Log a glyph slot left blank (nothing to rasterize)."""
        self._logger.debug("Glyph blank", codepoint=f"U+{codepoint:04X}")
        self._stats.glyphs_blank += 1

    def log_glyph_skipped(self, codepoint: int, reason: str) -> None:
        """Log a glyph found in the source but not stored."""
        self._logger.debug("Glyph skipped", codepoint=codepoint, reason=reason)
        self._stats.glyphs_skipped += 1
        self._stats.skipped_codepoints.append(codepoint)

    def log_bake_error(self, error: Exception) -> None:
        """Log the error that ended a bake."""
        self._logger.error(
            "Bake failed",
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> BakeStats:
        """Get current bake statistics."""
        return self._stats
