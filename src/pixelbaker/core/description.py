"""BDF bitmap-font description backend.

A forward-only scanner walks the description text through the states

    SEEKING_BOUNDING_BOX -> SEEKING_ENCODING -> SEEKING_BITMAP -> READING_ROWS
                                  ^                                   |
                                  +-----------------------------------+

and ends in DONE once no ENCODING declaration remains. Bitmap rows in a BDF
file are already packed MSB-first, so they are copied straight into the
glyph slots without going through the bit writer.

Only the elements the baker relies on are interpreted: the global
``FONTBOUNDINGBOX``, each glyph's ``ENCODING`` and its ``BITMAP`` rows.
Keywords are matched at the start of a line.
"""

import re
import string
from enum import Enum, auto

from pixelbaker.config import DescriptionBakeConfig
from pixelbaker.domain import MAX_CELL_DIMENSION, BoundingBox, PixelFont
from pixelbaker.exceptions import (
    CharacterBytesError,
    MalformedBoundingBoxError,
    MalformedCodepointError,
    MissingBoundingBoxError,
)
from pixelbaker.utils import BakeLogger, BakeStats

_HEX_DIGITS = frozenset(string.hexdigits)
_INT_TOKEN = re.compile(r"[+-]?\d+$")


class ScanState(Enum):
    """Position of the scanner in the description."""

    SEEKING_BOUNDING_BOX = auto()
    SEEKING_ENCODING = auto()
    SEEKING_BITMAP = auto()
    READING_ROWS = auto()
    DONE = auto()


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"^{keyword}(?=[ \t\r\n]|$)", re.MULTILINE)


_BOUNDING_BOX = _keyword_pattern("FONTBOUNDINGBOX")
_ENCODING = _keyword_pattern("ENCODING")
_BITMAP = _keyword_pattern("BITMAP")


class DescriptionScanner:
    """Forward-only scanner over the text of a BDF description.

    Each read method is only valid in one state and moves the scanner to the
    next; calling one out of order raises RuntimeError.

    Example:
        scanner = DescriptionScanner(text)
        bbox = scanner.read_bounding_box()
        while (codepoint := scanner.next_encoding()) is not None:
            rows = scanner.read_bitmap(bbox.height, 1, codepoint)
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self.state = ScanState.SEEKING_BOUNDING_BOX

    @property
    def line(self) -> int:
        """1-based line number of the next unread character."""
        return self._text.count("\n", 0, self._pos) + 1

    def read_bounding_box(self) -> BoundingBox:
        """Find the FONTBOUNDINGBOX declaration and parse its four integers.

        Raises:
            MissingBoundingBoxError: If no declaration exists
            MalformedBoundingBoxError: If fewer than four integers follow it,
                or the width or height is not in 1..65535
        """
        self._expect(ScanState.SEEKING_BOUNDING_BOX)
        if not self._seek(_BOUNDING_BOX):
            raise MissingBoundingBoxError()

        fields = self._read_int_fields()
        if len(fields) < 4:
            raise MalformedBoundingBoxError(
                f"expected 4 numeric fields, found {len(fields)}", self.line
            )
        width, height, x_origin, y_origin = fields[:4]
        if width <= 0 or height <= 0:
            raise MalformedBoundingBoxError(f"cell size {width}x{height} is empty", self.line)
        if width > MAX_CELL_DIMENSION or height > MAX_CELL_DIMENSION:
            raise MalformedBoundingBoxError(
                f"cell size {width}x{height} exceeds {MAX_CELL_DIMENSION} px", self.line
            )

        self.state = ScanState.SEEKING_ENCODING
        return BoundingBox(width=width, height=height, x_origin=x_origin, y_origin=y_origin)

    def next_encoding(self) -> int | None:
        """Find the next ENCODING declaration and parse its code point.

        Returns:
            The code point, or None when the description has no more glyphs

        Raises:
            MalformedCodepointError: If the value is missing or not an integer
        """
        self._expect(ScanState.SEEKING_ENCODING)
        if not self._seek(_ENCODING):
            self.state = ScanState.DONE
            return None

        token = self._read_token()
        if not _INT_TOKEN.match(token):
            raise MalformedCodepointError(token, self.line)

        self.state = ScanState.SEEKING_BITMAP
        return int(token)

    def skip_glyph(self) -> None:
        """Abandon the current glyph; the next ENCODING search passes over it."""
        self._expect(ScanState.SEEKING_BITMAP)
        self.state = ScanState.SEEKING_ENCODING

    def read_bitmap(self, height: int, bytes_per_line: int, codepoint: int) -> bytes:
        """Find the glyph's BITMAP marker and read its packed rows.

        Each row is one whitespace-delimited token of exactly
        ``2 * bytes_per_line`` hex digits.

        Args:
            height: Number of rows to read
            bytes_per_line: Two-hex-digit bytes per row
            codepoint: Glyph being read, for error reporting

        Returns:
            ``height * bytes_per_line`` bytes in row order

        Raises:
            CharacterBytesError: If the marker is missing, the rows are
                truncated, or a row is not hexadecimal or has the wrong length
        """
        self._expect(ScanState.SEEKING_BITMAP)
        bitmap = _BITMAP.search(self._text, self._pos)
        following = _ENCODING.search(self._text, self._pos)
        if bitmap is None or (following is not None and following.start() < bitmap.start()):
            raise CharacterBytesError(codepoint, "BITMAP marker not found", self.line)
        self._pos = bitmap.end()
        self._skip_line()

        self.state = ScanState.READING_ROWS
        data = bytearray()
        for row in range(height):
            data += self._read_hex_row(row, bytes_per_line, codepoint)

        self.state = ScanState.SEEKING_ENCODING
        return bytes(data)

    def _expect(self, state: ScanState) -> None:
        if self.state is not state:
            raise RuntimeError(
                f"Scanner is {self.state.name}, expected {state.name}"
            )

    def _seek(self, pattern: re.Pattern[str]) -> bool:
        match = pattern.search(self._text, self._pos)
        if match is None:
            return False
        self._pos = match.end()
        return True

    def _skip_line(self) -> None:
        end = self._text.find("\n", self._pos)
        self._pos = len(self._text) if end == -1 else end + 1

    def _skip_blanks(self) -> None:
        text = self._text
        while self._pos < len(text) and text[self._pos] in " \t":
            self._pos += 1

    def _skip_whitespace(self) -> None:
        text = self._text
        while self._pos < len(text) and text[self._pos].isspace():
            self._pos += 1

    def _read_token(self) -> str:
        """Read the next whitespace-delimited token on the current line."""
        self._skip_blanks()
        start = self._pos
        text = self._text
        while self._pos < len(text) and not text[self._pos].isspace():
            self._pos += 1
        return text[start : self._pos]

    def _read_int_fields(self) -> list[int]:
        """Read leading integer tokens on the current line."""
        fields: list[int] = []
        while True:
            start = self._pos
            token = self._read_token()
            if not token or not _INT_TOKEN.match(token):
                self._pos = start
                return fields
            fields.append(int(token))

    def _read_hex_row(self, row: int, bytes_per_line: int, codepoint: int) -> bytes:
        self._skip_whitespace()
        if self._pos >= len(self._text):
            raise CharacterBytesError(codepoint, "bitmap rows truncated", self.line)
        line = self.line
        token = self._read_token()
        if not all(c in _HEX_DIGITS for c in token):
            raise CharacterBytesError(codepoint, f"{token!r} is not a hex row", line)
        if len(token) != 2 * bytes_per_line:
            raise CharacterBytesError(
                codepoint,
                f"row {row} has {len(token)} hex digits, expected {2 * bytes_per_line}",
                line,
            )
        return bytes.fromhex(token)


def placeholder_byte(index: int, bytes_per_line: int) -> int:
    """Placeholder fill for table byte ``index``.

    Unpopulated slots show a checkerboard for 8- and 16-pixel-wide cells and
    vertical stripes for wider ones.
    """
    if bytes_per_line == 1:
        return 0xAA if index % 2 == 0 else 0x55
    if bytes_per_line == 2:
        return 0xAA if (index // 2) % 2 == 0 else 0x55
    return 0xAA


def fill_placeholder(font: PixelFont) -> None:
    """Overwrite a font's whole table with the placeholder pattern."""
    table = font.table
    if table is None:
        raise RuntimeError("Pixel font has been released.")
    bytes_per_line = font.bytes_per_line
    table[:] = bytes(placeholder_byte(i, bytes_per_line) for i in range(len(table)))


class DescriptionFontBaker:
    """Bakes a pixel font from the text of a BDF description.

    The allocated font is exposed as :attr:`font` as soon as it exists, so a
    caller can recover the partially filled table when baking fails.

    Example:
        baker = DescriptionFontBaker(text, DescriptionBakeConfig(cp_start=32, cp_end=126))
        font = baker.bake()
    """

    def __init__(
        self,
        text: str,
        config: DescriptionBakeConfig,
        logger: BakeLogger | None = None,
    ) -> None:
        self.scanner = DescriptionScanner(text)
        self.config = config
        self.bake_logger = logger if logger is not None else BakeLogger()
        self.font: PixelFont | None = None
        self.bounding_box: BoundingBox | None = None

    @property
    def stats(self) -> BakeStats:
        return self.bake_logger.stats

    def bake(self) -> PixelFont:
        """Scan the description and copy every in-range glyph into the table.

        Returns:
            The baked font; slots with no glyph keep the placeholder pattern

        Raises:
            MissingBoundingBoxError: If FONTBOUNDINGBOX is absent
            MalformedBoundingBoxError: If FONTBOUNDINGBOX is malformed
            AllocationError: If the table cannot be allocated
            MalformedCodepointError: If an ENCODING value is malformed
            CharacterBytesError: If BITMAP rows are truncated or malformed
        """
        config = self.config
        scanner = self.scanner
        self.bounding_box = bbox = scanner.read_bounding_box()

        self.font = font = PixelFont.allocate(
            char_px_width=bbox.width,
            char_px_height=bbox.height,
            cp_start=config.cp_start,
            cp_end=config.cp_end,
        )
        fill_placeholder(font)
        self.bake_logger.log_font_allocated(
            width=font.char_px_width,
            height=font.char_px_height,
            bytes_per_line=font.bytes_per_line,
            bytes_per_glyph=font.bytes_per_glyph,
            glyph_count=font.glyph_count,
        )

        table = font.table
        while (codepoint := scanner.next_encoding()) is not None:
            if codepoint not in config:
                scanner.skip_glyph()
                self.bake_logger.log_glyph_skipped(codepoint, "outside requested range")
                continue

            rows = scanner.read_bitmap(font.char_px_height, font.bytes_per_line, codepoint)
            offset = font.glyph_offset(codepoint)
            table[offset : offset + font.bytes_per_glyph] = rows  # type: ignore[index]
            self.bake_logger.log_glyph_baked(codepoint)

        return font
