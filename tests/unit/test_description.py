"""Unit tests for the BDF description backend."""

import pytest

from pixelbaker.config import DescriptionBakeConfig
from pixelbaker.core.description import (
    DescriptionFontBaker,
    DescriptionScanner,
    ScanState,
    fill_placeholder,
    placeholder_byte,
)
from pixelbaker.domain import PixelFont
from pixelbaker.exceptions import (
    BakeError,
    CharacterBytesError,
    MalformedBoundingBoxError,
    MalformedCodepointError,
    MissingBoundingBoxError,
)

FULL = ["FF"] * 8
EMPTY = ["00"] * 8


def make_bdf(glyphs, bbox="8 8 0 0", newline="\n"):
    """Build a BDF description.

    ``glyphs`` is a list of (encoding, rows) pairs; rows of None omit the
    BITMAP section entirely.
    """
    lines = [
        "STARTFONT 2.1",
        "FONT -misc-test-medium-r-normal--8-80-75-75-c-80-iso10646-1",
        "SIZE 8 75 75",
    ]
    if bbox is not None:
        lines.append(f"FONTBOUNDINGBOX {bbox}")
    lines += [
        "STARTPROPERTIES 2",
        'CHARSET_REGISTRY "ISO10646"',
        'CHARSET_ENCODING "1"',
        "ENDPROPERTIES",
        f"CHARS {len(glyphs)}",
    ]
    for encoding, rows in glyphs:
        lines += [
            f"STARTCHAR glyph{encoding}",
            f"ENCODING {encoding}",
            "SWIDTH 500 0",
            "DWIDTH 8 0",
            "BBX 8 8 0 0",
        ]
        if rows is not None:
            lines += ["BITMAP", *rows]
        lines.append("ENDCHAR")
    lines.append("ENDFONT")
    return newline.join(lines) + newline


def bake(text, cp_start=65, cp_end=66):
    baker = DescriptionFontBaker(text, DescriptionBakeConfig(cp_start=cp_start, cp_end=cp_end))
    return baker, baker.bake()


class TestDescriptionScanner:
    """Tests for DescriptionScanner class."""

    def test_states(self):
        """Test the scanner walks bbox, encoding, bitmap and finishes."""
        scanner = DescriptionScanner(make_bdf([(65, FULL)]))
        assert scanner.state is ScanState.SEEKING_BOUNDING_BOX

        bbox = scanner.read_bounding_box()
        assert (bbox.width, bbox.height, bbox.x_origin, bbox.y_origin) == (8, 8, 0, 0)
        assert scanner.state is ScanState.SEEKING_ENCODING

        assert scanner.next_encoding() == 65
        assert scanner.state is ScanState.SEEKING_BITMAP

        assert scanner.read_bitmap(8, 1, 65) == b"\xff" * 8
        assert scanner.state is ScanState.SEEKING_ENCODING

        assert scanner.next_encoding() is None
        assert scanner.state is ScanState.DONE

    def test_out_of_order_call(self):
        scanner = DescriptionScanner(make_bdf([(65, FULL)]))
        with pytest.raises(RuntimeError, match="SEEKING_BOUNDING_BOX"):
            scanner.read_bitmap(8, 1, 65)

    def test_skip_glyph(self):
        """Test a skipped glyph's rows are never read."""
        scanner = DescriptionScanner(make_bdf([(64, ["GG"] * 8), (65, FULL)]))
        scanner.read_bounding_box()

        assert scanner.next_encoding() == 64
        scanner.skip_glyph()
        assert scanner.next_encoding() == 65
        assert scanner.read_bitmap(8, 1, 65) == b"\xff" * 8

    def test_charset_encoding_is_not_a_glyph(self):
        """Test ENCODING only matches at the start of a line."""
        scanner = DescriptionScanner(make_bdf([]))
        scanner.read_bounding_box()

        assert scanner.next_encoding() is None

    def test_negative_bounding_box_origin(self):
        scanner = DescriptionScanner(make_bdf([], bbox="6 13 0 -2"))
        bbox = scanner.read_bounding_box()
        assert (bbox.width, bbox.height, bbox.y_origin) == (6, 13, -2)

    def test_line_number(self):
        scanner = DescriptionScanner("A\nB\nFONTBOUNDINGBOX 8 8 0 0\n")
        scanner.read_bounding_box()
        assert scanner.line == 3


class TestBoundingBoxErrors:
    """Tests for FONTBOUNDINGBOX failures."""

    def test_missing(self):
        baker = DescriptionFontBaker(
            make_bdf([(65, FULL)], bbox=None), DescriptionBakeConfig(cp_start=65, cp_end=65)
        )

        with pytest.raises(MissingBoundingBoxError) as excinfo:
            baker.bake()

        assert excinfo.value.code == BakeError.MISSING_BOUNDING_BOX
        assert baker.font is None

    @pytest.mark.parametrize(
        "bbox", ["8 8 0", "8 x 0 0", "", "0 8 0 0", "8 -1 0 0", "70000 1 0 0", "8 70000 0 0"]
    )
    def test_malformed(self, bbox):
        with pytest.raises(MalformedBoundingBoxError) as excinfo:
            bake(make_bdf([(65, FULL)], bbox=bbox))
        assert excinfo.value.code == BakeError.MALFORMED_BOUNDING_BOX
        assert excinfo.value.line == 4


class TestCodepointErrors:
    """Tests for ENCODING failures."""

    def test_non_numeric(self):
        with pytest.raises(MalformedCodepointError) as excinfo:
            bake(make_bdf([(65, FULL), ("abc", FULL)]))

        assert excinfo.value.code == BakeError.MALFORMED_CODEPOINT
        assert excinfo.value.value == "abc"

    def test_missing_value(self):
        with pytest.raises(MalformedCodepointError):
            bake("FONTBOUNDINGBOX 8 8 0 0\nENCODING\n")

    def test_line_reported(self):
        """Test the error names the line of the ENCODING declaration."""
        with pytest.raises(MalformedCodepointError) as excinfo:
            bake(make_bdf([("6x", FULL)]))
        assert excinfo.value.line == 11


class TestCharacterBytesErrors:
    """Tests for BITMAP failures."""

    def test_truncated_rows_keep_partial_font(self):
        """Test earlier glyphs survive in the partial font."""
        text = make_bdf([(65, FULL), (66, ["FF"] * 5)])
        text = text[: text.rindex("ENDCHAR")]
        baker = DescriptionFontBaker(text, DescriptionBakeConfig(cp_start=65, cp_end=66))

        with pytest.raises(CharacterBytesError) as excinfo:
            baker.bake()

        assert excinfo.value.code == BakeError.ERROR_PARSING_CHARACTER_BYTES
        assert excinfo.value.codepoint == 66
        assert baker.font is not None
        assert baker.font.glyph(65) == b"\xff" * 8

    def test_non_hex(self):
        with pytest.raises(CharacterBytesError, match="hex"):
            bake(make_bdf([(65, ["FF", "GG"] + ["00"] * 6)]))

    def test_row_wider_than_cell(self):
        """Test a row with an extra byte fails instead of shifting later rows."""
        text = make_bdf([(65, ["FF00", "AA00"] + ["00"] * 6)], bbox="8 8 0 0")

        with pytest.raises(CharacterBytesError, match="row 0 has 4 hex digits, expected 2") as excinfo:
            bake(text, cp_end=65)

        assert excinfo.value.line == 16

    def test_row_narrower_than_cell(self):
        with pytest.raises(CharacterBytesError, match="expected 4"):
            bake(make_bdf([(65, ["FFFF", "FF", "0000", "0000"])], bbox="16 4 0 0"), cp_end=65)

    def test_missing_bitmap_does_not_steal_next_glyph(self):
        """Test a glyph without BITMAP fails instead of reading the next one."""
        with pytest.raises(CharacterBytesError, match="BITMAP"):
            bake(make_bdf([(65, None), (66, FULL)]))


class TestDescriptionFontBaker:
    """Tests for DescriptionFontBaker class."""

    def test_two_full_glyphs(self):
        """Test two 8x8 all-ones glyphs give sixteen 0xFF bytes."""
        _, font = bake(make_bdf([(65, FULL), (66, FULL)]))

        assert (font.char_px_width, font.char_px_height) == (8, 8)
        assert font.table == bytearray(b"\xff" * 16)

    def test_all_zero_glyph(self):
        _, font = bake(make_bdf([(65, EMPTY)]), cp_end=65)
        assert font.table == bytearray(8)

    def test_rows_copied_in_order(self):
        rows = ["01", "02", "04", "08", "10", "20", "40", "80"]
        _, font = bake(make_bdf([(65, rows)]), cp_end=65)
        assert font.glyph(65) == bytes([1, 2, 4, 8, 16, 32, 64, 128])

    def test_sixteen_wide(self):
        """Test two bytes per row are read for a 16 px cell."""
        text = make_bdf([(65, ["FFFF", "0000", "8001", "ff00"])], bbox="16 4 0 0")

        _, font = bake(text, cp_end=65)

        assert font.bytes_per_line == 2
        assert font.glyph(65) == b"\xff\xff\x00\x00\x80\x01\xff\x00"

    def test_padding_bits_copied_verbatim(self):
        """Test trailing bits of a 12 px row are taken from the source."""
        _, font = bake(make_bdf([(65, ["FFFF"] * 2)], bbox="12 2 0 0"), cp_end=65)
        assert font.glyph(65) == b"\xff" * 4

    def test_out_of_range_glyphs_skipped(self):
        """Test alternating in-range and out-of-range glyphs stay aligned."""
        text = make_bdf(
            [(64, FULL), (65, ["0F"] * 8), (200, FULL), (66, ["F0"] * 8), (-1, FULL)]
        )

        baker, font = bake(text)

        assert font.glyph(65) == b"\x0f" * 8
        assert font.glyph(66) == b"\xf0" * 8
        assert baker.stats.skipped_codepoints == [64, 200, -1]
        assert baker.stats.glyphs_baked == 2

    def test_missing_glyphs_keep_placeholder(self):
        _, font = bake(make_bdf([(65, FULL)]), cp_end=67)

        assert font.glyph(65) == b"\xff" * 8
        assert font.glyph(66) == b"\xaa\x55" * 4
        assert font.glyph(67) == b"\xaa\x55" * 4

    def test_crlf_line_endings(self):
        _, font = bake(make_bdf([(65, FULL), (66, EMPTY)], newline="\r\n"))
        assert font.table == bytearray(b"\xff" * 8 + bytes(8))

    def test_single_codepoint_range(self):
        _, font = bake(make_bdf([(65, FULL), (66, FULL)]), cp_end=65)
        assert font.table == bytearray(b"\xff" * 8)

    def test_idempotent(self):
        text = make_bdf([(65, ["3C"] * 8)])
        _, first = bake(text, cp_end=70)
        _, second = bake(text, cp_end=70)
        assert first.table == second.table


class TestPlaceholder:
    """Tests for the placeholder fill pattern."""

    def test_one_byte_rows_checkerboard(self):
        assert [placeholder_byte(i, 1) for i in range(4)] == [0xAA, 0x55, 0xAA, 0x55]

    def test_two_byte_rows_checkerboard(self):
        assert [placeholder_byte(i, 2) for i in range(6)] == [
            0xAA, 0xAA, 0x55, 0x55, 0xAA, 0xAA,
        ]

    def test_wide_rows_stripes(self):
        assert {placeholder_byte(i, 3) for i in range(12)} == {0xAA}

    def test_fill_whole_table(self):
        font = PixelFont.allocate(char_px_width=16, char_px_height=2, cp_start=0, cp_end=1)

        fill_placeholder(font)

        assert font.table == bytearray(b"\xaa\xaa\x55\x55" * 2)

    def test_fill_released_font(self):
        font = PixelFont.allocate(char_px_width=8, char_px_height=1, cp_start=0, cp_end=0)
        font.release()
        with pytest.raises(RuntimeError):
            fill_placeholder(font)
