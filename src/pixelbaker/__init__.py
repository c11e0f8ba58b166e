"""pixelbaker - Bake fonts into fixed-cell 1-bit glyph tables.

pixelbaker converts TrueType/OpenType outline fonts and BDF bitmap-font
descriptions into packed, row-padded, MSB-first glyph tables for a range of
Unicode code points, ready for firmware driving monochrome displays such as
e-paper panels.

Example:
    $ pixelbaker outline DejaVuSansMono.ttf --height 16

This will create DejaVuSansMono-10x16.c and DejaVuSansMono-10x16.h declaring
an sFONT with the printable ASCII glyphs.
"""

__version__ = "0.1.0"

from pixelbaker.core import bake_description_font, bake_outline_font, release
from pixelbaker.domain import BakeResult, PixelFont
from pixelbaker.exceptions import BakeError

__all__ = [
    "BakeError",
    "BakeResult",
    "PixelFont",
    "__version__",
    "bake_description_font",
    "bake_outline_font",
    "release",
]
