"""Row-padded, MSB-first bit packing into a glyph table.

The writer is a cursor over a byte buffer. Each output row must be started
with :meth:`BitWriter.begin_row`; the cursor is never carried over from the
previous row, because clipping lets a row start and end mid-byte.
"""

from collections.abc import Iterable


class BitWriter:
    """Writes glyph pixels into a packed 1-bit table.

    Example:
        writer = BitWriter(font.table)
        writer.begin_row(glyph_base, row_index=0, bytes_per_line=1, x_start=2)
        writer.put_bit(1)  # sets bit 5 of the row's first byte
    """

    def __init__(self, buffer: bytearray) -> None:
        """Initialize the writer.

        Args:
            buffer: Table the bits are ORed into
        """
        self._buffer = buffer
        self._cursor = 0
        self._shift = 7

    @property
    def cursor(self) -> int:
        """Index of the byte receiving the next bit."""
        return self._cursor

    @property
    def shift(self) -> int:
        """Bit position (7 = leftmost) receiving the next bit."""
        return self._shift

    def begin_row(
        self,
        glyph_base: int,
        row_index: int,
        bytes_per_line: int,
        x_start: int,
    ) -> None:
        """Position the cursor at column ``x_start`` of a glyph row.

        Args:
            glyph_base: Byte offset of the glyph slot in the buffer
            row_index: Row within the glyph cell
            bytes_per_line: Packed row stride
            x_start: First column to be written in this row (non-negative)
        """
        if x_start < 0:
            raise ValueError(f"x_start must not be negative, got {x_start}")
        self._cursor = glyph_base + row_index * bytes_per_line + x_start // 8
        self._shift = 7 - (x_start % 8)

    def put_bit(self, bit: int) -> None:
        """OR one pixel into the current byte and advance one column.

        Raises:
            IndexError: If the cursor is past the end of the buffer
        """
        if bit:
            if self._cursor >= len(self._buffer):
                raise IndexError(
                    f"Bit cursor {self._cursor} outside buffer of {len(self._buffer)} bytes"
                )
            self._buffer[self._cursor] |= 1 << self._shift
        self._shift -= 1
        if self._shift < 0:
            self._shift = 7
            self._cursor += 1

    def put_bits(self, bits: Iterable[int]) -> None:
        """Write a run of pixels left to right."""
        for bit in bits:
            self.put_bit(bit)
