"""Writers for baked pixel fonts.

This module provides the FontWriter class, which saves a pixel font either as
a C source/header pair declaring a Waveshare ``sFONT`` or as a raw binary
table, optionally prefixed with the descriptor record.
"""

import re
from pathlib import Path

from pixelbaker.config import ExportConfig, ExportFormat
from pixelbaker.domain import PixelFont
from pixelbaker.exceptions import ExportError

SFONT_TYPEDEF = """\
typedef struct _tFont {
  const uint8_t *table;
  uint16_t Width;
  uint16_t Height;
} sFONT;
"""


def symbol_name_for(path: Path) -> str:
    """Derive a C identifier from a file name.

    Converts: Terminus-Bold-16x32.c -> Terminus_Bold_16x32
              8x13.c -> Font_8x13
    """
    name = re.sub(r"[^A-Za-z0-9_]", "_", path.stem)
    if not name or name[0].isdigit():
        name = f"Font_{name}"
    return name


def _glyph_label(codepoint: int) -> str:
    char = chr(codepoint)
    if char.isprintable() and char not in "\\*/":
        return f"U+{codepoint:04X} '{char}'"
    return f"U+{codepoint:04X}"


class FontWriter:
    """Writes a baked pixel font to disk.

    Example:
        writer = FontWriter(font, Path("Terminus-8x16.c"), ExportConfig())
        paths = writer.save()
    """

    def __init__(
        self,
        font: PixelFont,
        output_path: Path,
        config: ExportConfig | None = None,
    ) -> None:
        """Initialize the font writer.

        Args:
            font: Baked font to write
            output_path: Target file; for C output the header is written
                beside it with a .h suffix
            config: Export settings
        """
        self._font = font
        self._output_path = output_path
        self._config = config if config is not None else ExportConfig()

    @property
    def symbol_name(self) -> str:
        return self._config.symbol_name or symbol_name_for(self._output_path)

    def save(self) -> list[Path]:
        """Write the font in the configured format.

        Returns:
            Paths of the written files

        Raises:
            ExportError: If the font was released or a file cannot be written
        """
        if self._font.table is None:
            raise ExportError(str(self._output_path), "pixel font has been released")

        if self._config.format == ExportFormat.BIN:
            files = {self._output_path: self.render_binary()}
        else:
            header_path = self._output_path.with_suffix(".h")
            files = {
                header_path: self.render_header().encode("utf-8"),
                self._output_path.with_suffix(".c"): self.render_source(header_path.name).encode(
                    "utf-8"
                ),
            }

        for path, content in files.items():
            try:
                path.write_bytes(content)
            except OSError as e:
                raise ExportError(str(path), e.strerror or str(e)) from e
        return list(files)

    def render_binary(self) -> bytes:
        """Table bytes, preceded by the descriptor when configured."""
        table = bytes(self._font.table or b"")
        if not self._config.include_header:
            return table
        return self._font.descriptor(pointer_size=self._config.pointer_size) + table

    def render_header(self) -> str:
        name = self.symbol_name
        font = self._font
        lines = [
            "#pragma once",
            "#include <stdint.h>",
            "",
        ]
        if self._config.include_typedef:
            lines += [SFONT_TYPEDEF]
        lines += [
            f"/* {font.char_px_width}x{font.char_px_height} px, "
            f"U+{font.cp_start:04X}..U+{font.cp_end:04X}, "
            f"{font.bytes_per_glyph} bytes per glyph */",
            f"#define {name.upper()}_FIRST_CODEPOINT 0x{font.cp_start:04X}",
            f"#define {name.upper()}_LAST_CODEPOINT 0x{font.cp_end:04X}",
            f"#define {name.upper()}_BYTES_PER_LINE {font.bytes_per_line}",
            f"#define {name.upper()}_BYTES_PER_GLYPH {font.bytes_per_glyph}",
            "",
            f"extern const uint8_t {name}_Table[];",
            f"extern sFONT {name};",
            "",
        ]
        return "\n".join(lines)

    def render_source(self, header_name: str) -> str:
        """C source with one commented block of hex bytes per glyph."""
        name = self.symbol_name
        font = self._font
        table = font.table or bytearray()
        per_row = self._config.bytes_per_row

        lines = [f'#include "{header_name}"', "", f"const uint8_t {name}_Table[] = {{"]
        for codepoint in range(font.cp_start, font.cp_end + 1):
            offset = font.glyph_offset(codepoint)
            glyph = table[offset : offset + font.bytes_per_glyph]
            lines.append(f"  /* {_glyph_label(codepoint)} */")
            for start in range(0, len(glyph), per_row):
                chunk = glyph[start : start + per_row]
                lines.append("  " + " ".join(f"0x{b:02X}," for b in chunk))
        lines += [
            "};",
            "",
            f"sFONT {name} = {{",
            f"  {name}_Table,",
            f"  {font.char_px_width}, /* Width */",
            f"  {font.char_px_height}, /* Height */",
            "};",
            "",
        ]
        return "\n".join(lines)

    @staticmethod
    def get_output_path(input_path: Path, font: PixelFont, export_format: ExportFormat) -> Path:
        """Generate the default output path beside the input font.

        Converts: Terminus.bdf -> Terminus-8x16.c
                  Roboto-Regular.ttf -> Roboto-Regular-11x16.bin
        """
        size = f"{font.char_px_width}x{font.char_px_height}"
        return input_path.parent / f"{input_path.stem}-{size}.{export_format.value}"
