"""Font I/O layer for pixelbaker.

This module handles reading input fonts and writing baked tables.

Key responsibilities:
- Read font files, releasing the handle on every path
- Rasterize TTF/OTF glyphs through fontTools and FreeType
- Write baked tables as C source (sFONT) or raw binary

Key classes:
- OutlineFontReader: Load outline fonts and rasterize glyphs
- FontWriter: Save baked pixel fonts
"""

from pixelbaker.io.reader import OutlineFontReader, read_description_file, read_font_file
from pixelbaker.io.writer import FontWriter, symbol_name_for

__all__ = [
    "FontWriter",
    "OutlineFontReader",
    "read_description_file",
    "read_font_file",
    "symbol_name_for",
]
