"""Exception hierarchy for pixelbaker.

Every exception raised while baking carries a ``code`` from :class:`BakeError`
so that the public bake operations can report failures as a discriminated
result instead of propagating them.
"""

from enum import Enum


class BakeError(str, Enum):
    """Reason a bake failed."""

    ALLOCATION_FAILED = "allocation_failed"
    FONT_FILE_COULD_NOT_BE_OPENED = "font_file_could_not_be_opened"
    RASTERIZER_FAILED = "rasterizer_failed"
    MISSING_BOUNDING_BOX = "missing_bounding_box"
    MALFORMED_BOUNDING_BOX = "malformed_bounding_box"
    MALFORMED_CODEPOINT = "malformed_codepoint"
    ERROR_PARSING_CHARACTER_BYTES = "error_parsing_character_bytes"


class PixelBakerError(Exception):
    """Base exception for all pixelbaker errors."""

    code: BakeError | None = None


class AllocationError(PixelBakerError):
    """The glyph table or a working buffer could not be allocated."""

    code = BakeError.ALLOCATION_FAILED

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Could not allocate {size} bytes")


class FontError(PixelBakerError):
    """Errors related to loading an input font."""

    pass


class FontFileError(FontError):
    """The font file could not be opened or read."""

    code = BakeError.FONT_FILE_COULD_NOT_BE_OPENED

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to open font '{path}': {reason}")


class RasterizerError(FontError):
    """The outline rasterizer could not parse the font or render a glyph."""

    code = BakeError.RASTERIZER_FAILED

    def __init__(self, path: str, reason: str, codepoint: int | None = None) -> None:
        self.path = path
        self.reason = reason
        self.codepoint = codepoint
        if codepoint is None:
            super().__init__(f"Rasterizer failed for '{path}': {reason}")
        else:
            super().__init__(
                f"Rasterizer failed for '{path}' at U+{codepoint:04X}: {reason}"
            )


class DescriptionError(PixelBakerError):
    """Errors in a BDF bitmap-font description."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class MissingBoundingBoxError(DescriptionError):
    """No FONTBOUNDINGBOX declaration was found."""

    code = BakeError.MISSING_BOUNDING_BOX

    def __init__(self) -> None:
        super().__init__("FONTBOUNDINGBOX declaration not found")


class MalformedBoundingBoxError(DescriptionError):
    """FONTBOUNDINGBOX does not hold four integers describing a usable cell."""

    code = BakeError.MALFORMED_BOUNDING_BOX

    def __init__(self, reason: str, line: int | None = None) -> None:
        self.reason = reason
        super().__init__(f"Malformed FONTBOUNDINGBOX: {reason}", line)


class MalformedCodepointError(DescriptionError):
    """An ENCODING declaration has a missing or non-numeric value."""

    code = BakeError.MALFORMED_CODEPOINT

    def __init__(self, value: str, line: int | None = None) -> None:
        self.value = value
        super().__init__(f"Malformed ENCODING value {value!r}", line)


class CharacterBytesError(DescriptionError):
    """A glyph's BITMAP rows are truncated or not hexadecimal."""

    code = BakeError.ERROR_PARSING_CHARACTER_BYTES

    def __init__(self, codepoint: int, reason: str, line: int | None = None) -> None:
        self.codepoint = codepoint
        self.reason = reason
        super().__init__(f"Bad BITMAP data for U+{codepoint:04X}: {reason}", line)


class ExportError(PixelBakerError):
    """Error writing a baked font to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export font to '{path}': {reason}")
