"""Tests for domain models to verify they work correctly."""

import struct
from unittest.mock import patch

import pytest

from pixelbaker.domain import (
    BakeResult,
    BoundingBox,
    CoverageBitmap,
    PixelFont,
    VerticalMetrics,
    bytes_per_line_for,
    release,
)
from pixelbaker.exceptions import AllocationError, BakeError, MissingBoundingBoxError
from pixelbaker.utils import BakeStats


class TestBytesPerLine:
    """Tests for row stride calculation."""

    @pytest.mark.parametrize(
        ("width", "expected"),
        [(1, 1), (7, 1), (8, 1), (9, 2), (16, 2), (17, 3), (24, 3)],
    )
    def test_rows_are_padded_to_whole_bytes(self, width: int, expected: int) -> None:
        assert bytes_per_line_for(width) == expected


class TestPixelFont:
    """Tests for PixelFont class."""

    def test_allocate_sizes_table_for_range(self) -> None:
        """Test table length is bytes_per_glyph times glyph count."""
        font = PixelFont.allocate(char_px_width=10, char_px_height=16, cp_start=32, cp_end=126)

        assert font.bytes_per_line == 2
        assert font.bytes_per_glyph == 32
        assert font.glyph_count == 95
        assert font.table is not None
        assert len(font.table) == 32 * 95
        assert font.table_size == len(font.table)
        assert not any(font.table)

    def test_single_codepoint_range(self) -> None:
        """Test a one-glyph range produces a one-glyph table."""
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)

        assert font.glyph_count == 1
        assert len(font.table) == 8  # type: ignore[arg-type]

    def test_invalid_range(self) -> None:
        """Test end below start is rejected."""
        with pytest.raises(ValueError, match="Invalid code point range"):
            PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=66, cp_end=65)

    @patch("pixelbaker.domain.pixel_font.bytearray", side_effect=MemoryError, create=True)
    def test_allocation_failure(self, _mock_bytearray) -> None:  # noqa: ARG002
        """Test an exhausted allocator raises AllocationError with the size."""
        with pytest.raises(AllocationError) as excinfo:
            PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=66)

        assert excinfo.value.code == BakeError.ALLOCATION_FAILED
        assert excinfo.value.size == 16

    def test_width_must_fit_u16(self) -> None:
        """Test cell dimensions are limited to 16 bits."""
        with pytest.raises(ValueError, match="16 bits"):
            PixelFont(table=None, char_px_width=70000, char_px_height=8, cp_start=0, cp_end=0)

    def test_glyph_offset(self) -> None:
        """Test slot offset is (cp - cp_start) * bytes_per_glyph."""
        font = PixelFont.allocate(char_px_width=8, char_px_height=12, cp_start=0x20, cp_end=0x7E)

        assert font.glyph_offset(0x20) == 0
        assert font.glyph_offset(0x21) == 12
        assert font.glyph_offset(0x7E) == 94 * 12

    def test_glyph_offset_out_of_range(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=66)

        with pytest.raises(KeyError):
            font.glyph_offset(67)
        assert not font.contains(64)
        assert font.contains(66)

    def test_pixel_reads_msb_first(self) -> None:
        """Test bit 7 of a row's first byte is the leftmost pixel."""
        font = PixelFont.allocate(char_px_width=10, char_px_height=2, cp_start=65, cp_end=65)
        font.table[0] = 0b1000_0001  # type: ignore[index]
        font.table[3] = 0b0100_0000  # type: ignore[index]

        assert font.pixel(65, 0, 0)
        assert font.pixel(65, 7, 0)
        assert not font.pixel(65, 1, 0)
        assert font.pixel(65, 9, 1)
        assert not font.pixel(65, 8, 1)

    def test_pixel_outside_cell(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)

        with pytest.raises(IndexError):
            font.pixel(65, 8, 0)

    def test_glyph_rows(self) -> None:
        """Test text rendering of a glyph."""
        font = PixelFont.allocate(char_px_width=4, char_px_height=2, cp_start=65, cp_end=66)
        font.table[2] = 0xA0  # type: ignore[index]

        assert font.glyph_rows(65) == ["....", "...."]
        assert font.glyph_rows(66) == ["#.#.", "...."]

    def test_glyph_returns_copy(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=2, cp_start=65, cp_end=66)
        font.table[2:4] = b"\xff\x0f"  # type: ignore[index]

        glyph = font.glyph(66)

        assert glyph == b"\xff\x0f"
        assert isinstance(glyph, bytes)

    def test_release(self) -> None:
        """Test release drops the table and tolerates repeats."""
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)

        font.release()
        font.release()

        assert font.is_released
        with pytest.raises(RuntimeError, match="released"):
            font.glyph(65)

    def test_release_function_tolerates_none(self) -> None:
        release(None)


class TestDescriptor:
    """Tests for the firmware descriptor record."""

    def test_sfont_prefix_32bit(self) -> None:
        """Test the first three fields are pointer, u16 width, u16 height."""
        font = PixelFont.allocate(char_px_width=11, char_px_height=16, cp_start=32, cp_end=126)

        record = font.descriptor(table_address=0x08001000, pointer_size=4)

        assert len(record) == 16
        table, width, height = struct.unpack_from("<IHH", record)
        assert (table, width, height) == (0x08001000, 11, 16)
        assert struct.unpack_from("<II", record, 8) == (2, 32)

    def test_sfont_only(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)

        record = font.descriptor(table_address=4, extended=False)

        assert record == struct.pack("<IHH", 4, 8, 8)

    def test_64bit_pointer(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)

        record = font.descriptor(table_address=1, pointer_size=8)

        assert len(record) == 24
        assert struct.unpack_from("<QHHII", record) == (1, 8, 8, 1, 8)

    def test_big_endian(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)

        record = font.descriptor(table_address=1, byteorder=">", extended=False)

        assert record == b"\x00\x00\x00\x01\x00\x08\x00\x08"

    def test_unsupported_pointer_size(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)

        with pytest.raises(ValueError, match="pointer size"):
            font.descriptor(pointer_size=2)


class TestCoverageBitmap:
    """Tests for CoverageBitmap class."""

    def test_row_major_buffer(self) -> None:
        bitmap = CoverageBitmap(width=3, height=2, x_offset=0, y_offset=-2, pixels=bytes(range(6)))

        assert not bitmap.is_empty()
        assert bitmap.pixels[1 * bitmap.width + 1] == 4

    def test_buffer_size_checked(self) -> None:
        with pytest.raises(ValueError, match="expected 2x2"):
            CoverageBitmap(width=2, height=2, x_offset=0, y_offset=0, pixels=b"\x00")

    def test_empty(self) -> None:
        bitmap = CoverageBitmap.empty()

        assert bitmap.is_empty()
        assert bitmap.pixels == b""

    def test_immutable(self) -> None:
        bitmap = CoverageBitmap.empty()
        with pytest.raises(AttributeError):
            bitmap.width = 3  # type: ignore


class TestValueTypes:
    """Tests for small value types."""

    def test_vertical_metrics(self) -> None:
        metrics = VerticalMetrics(ascent=800, descent=-200, line_gap=0)
        assert metrics.ascent - metrics.descent == 1000

    def test_bounding_box(self) -> None:
        bbox = BoundingBox(width=8, height=16, x_origin=0, y_origin=-4)
        assert (bbox.width, bbox.height) == (8, 16)


class TestBakeResult:
    """Tests for BakeResult class."""

    def test_success(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)
        result = BakeResult.success(font, BakeStats())

        assert result.ok
        assert result.error is None
        assert result.unwrap() is font

    def test_failure_keeps_partial_font(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)
        result = BakeResult.failure(MissingBoundingBoxError(), font=font, stats=BakeStats())

        assert not result.ok
        assert result.error == BakeError.MISSING_BOUNDING_BOX
        assert "FONTBOUNDINGBOX" in (result.message or "")
        assert result.font is font
        with pytest.raises(MissingBoundingBoxError):
            result.unwrap()

    def test_release(self) -> None:
        font = PixelFont.allocate(char_px_width=8, char_px_height=8, cp_start=65, cp_end=65)
        result = BakeResult.success(font, BakeStats())

        result.release()
        result.release()

        assert font.is_released

    def test_release_without_font(self) -> None:
        result = BakeResult.failure(MissingBoundingBoxError(), font=None, stats=BakeStats())
        result.release()
