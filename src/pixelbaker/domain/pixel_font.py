"""Pixel font: a fixed-cell 1-bit glyph table.

This module defines the baked font produced by both backends, together with
the fixed-layout descriptor record firmware expects. The first three fields of
the descriptor (table pointer, width, height) match Waveshare's ``sFONT``.
"""

import struct
from dataclasses import dataclass, field

from pixelbaker.exceptions import AllocationError

MAX_CELL_DIMENSION = 0xFFFF

# Table pointer, char_px_width (u16), char_px_height (u16),
# bytes_per_line (u32), bytes_per_glyph (u32)
DESCRIPTOR_FORMATS: dict[int, str] = {
    4: "IHHII",
    8: "QHHII4x",
}
SFONT_FORMATS: dict[int, str] = {
    4: "IHH",
    8: "QHH4x",
}

assert struct.calcsize("<" + DESCRIPTOR_FORMATS[4]) == 16
assert struct.calcsize("<" + DESCRIPTOR_FORMATS[8]) == 24
assert struct.calcsize("<" + SFONT_FORMATS[4]) == 8
assert struct.calcsize("<" + SFONT_FORMATS[8]) == 16


def bytes_per_line_for(width: int) -> int:
    """Number of bytes holding one packed row of ``width`` pixels."""
    return (width + 7) // 8


@dataclass
class PixelFont:
    """A baked glyph table for the code points ``cp_start..cp_end``.

    Glyphs are stored contiguously by ascending code point. Each glyph is
    ``char_px_height`` rows of ``bytes_per_line`` bytes, MSB-first, with bit 7
    of a row's first byte being the leftmost pixel.

    Attributes:
        table: Packed glyph rows, or None once released
        char_px_width: Cell width in pixels
        char_px_height: Cell height in pixels
        cp_start: First code point in the table
        cp_end: Last code point in the table (inclusive)
    """

    table: bytearray | None
    char_px_width: int
    char_px_height: int
    cp_start: int
    cp_end: int
    bytes_per_line: int = field(init=False)
    bytes_per_glyph: int = field(init=False)

    def __post_init__(self) -> None:
        for name in ("char_px_width", "char_px_height"):
            value = getattr(self, name)
            if not 0 <= value <= MAX_CELL_DIMENSION:
                raise ValueError(f"{name} must fit in 16 bits, got {value}")
        if self.cp_end < self.cp_start:
            raise ValueError(
                f"Invalid code point range: {self.cp_start}..{self.cp_end}"
            )
        self.bytes_per_line = bytes_per_line_for(self.char_px_width)
        self.bytes_per_glyph = self.bytes_per_line * self.char_px_height

    @classmethod
    def allocate(
        cls,
        char_px_width: int,
        char_px_height: int,
        cp_start: int,
        cp_end: int,
    ) -> "PixelFont":
        """Allocate a zero-filled table for the given cell and range.

        Raises:
            AllocationError: If the table cannot be allocated
        """
        font = cls(
            table=None,
            char_px_width=char_px_width,
            char_px_height=char_px_height,
            cp_start=cp_start,
            cp_end=cp_end,
        )
        size = font.table_size
        try:
            font.table = bytearray(size)
        except MemoryError as e:
            raise AllocationError(size) from e
        return font

    @property
    def glyph_count(self) -> int:
        return self.cp_end - self.cp_start + 1

    @property
    def table_size(self) -> int:
        """Expected table length in bytes."""
        return self.bytes_per_glyph * self.glyph_count

    @property
    def is_released(self) -> bool:
        return self.table is None

    def contains(self, codepoint: int) -> bool:
        return self.cp_start <= codepoint <= self.cp_end

    def glyph_offset(self, codepoint: int) -> int:
        """Byte offset of a code point's glyph slot within the table.

        Raises:
            KeyError: If the code point is outside the baked range
        """
        if not self.contains(codepoint):
            raise KeyError(f"U+{codepoint:04X} not in U+{self.cp_start:04X}..U+{self.cp_end:04X}")
        return (codepoint - self.cp_start) * self.bytes_per_glyph

    def glyph(self, codepoint: int) -> bytes:
        """Return a copy of the packed bytes of one glyph slot."""
        table = self._require_table()
        offset = self.glyph_offset(codepoint)
        return bytes(table[offset : offset + self.bytes_per_glyph])

    def pixel(self, codepoint: int, x: int, y: int) -> bool:
        """Return whether pixel (x, y) of a glyph is set."""
        if not (0 <= x < self.char_px_width and 0 <= y < self.char_px_height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.char_px_width}x{self.char_px_height} cell")
        table = self._require_table()
        index = self.glyph_offset(codepoint) + y * self.bytes_per_line + x // 8
        return bool(table[index] & (0x80 >> (x % 8)))

    def glyph_rows(self, codepoint: int, on: str = "#", off: str = ".") -> list[str]:
        """Render a glyph as text rows for previews and debugging."""
        return [
            "".join(
                on if self.pixel(codepoint, x, y) else off
                for x in range(self.char_px_width)
            )
            for y in range(self.char_px_height)
        ]

    def descriptor(
        self,
        table_address: int = 0,
        pointer_size: int = 4,
        byteorder: str = "<",
        extended: bool = True,
    ) -> bytes:
        """Pack the firmware descriptor record.

        Args:
            table_address: Address the table will live at on the target
            pointer_size: Target pointer width in bytes (4 or 8)
            byteorder: struct byte-order prefix ("<" or ">")
            extended: Append bytes_per_line and bytes_per_glyph after the
                sFONT-compatible fields

        Returns:
            The packed descriptor
        """
        formats = DESCRIPTOR_FORMATS if extended else SFONT_FORMATS
        if pointer_size not in formats:
            raise ValueError(f"Unsupported pointer size: {pointer_size}")
        values: tuple[int, ...] = (table_address, self.char_px_width, self.char_px_height)
        if extended:
            values += (self.bytes_per_line, self.bytes_per_glyph)
        return struct.pack(byteorder + formats[pointer_size], *values)

    def release(self) -> None:
        """Drop the owned table. Safe to call on an already released font."""
        self.table = None

    def _require_table(self) -> bytearray:
        if self.table is None:
            raise RuntimeError("Pixel font has been released.")
        return self.table


def release(font: PixelFont | None) -> None:
    """Release a pixel font's table, tolerating None."""
    if font is not None:
        font.release()
