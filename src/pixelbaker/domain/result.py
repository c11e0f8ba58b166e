"""Outcome of a bake operation."""

from dataclasses import dataclass, field

from pixelbaker.domain.pixel_font import PixelFont
from pixelbaker.exceptions import BakeError, PixelBakerError
from pixelbaker.utils.logging import BakeStats


@dataclass
class BakeResult:
    """Discriminated result of a bake.

    On failure ``font`` still holds the partially populated table when one
    was allocated before the error; callers release it either way.

    Attributes:
        font: The baked (or partially baked) font, if a table was allocated
        error: Failure reason, None on success
        message: Human-readable failure description
        stats: Counters and timing for the run
    """

    font: PixelFont | None = None
    error: BakeError | None = None
    message: str | None = None
    stats: BakeStats = field(default_factory=BakeStats)
    exception: PixelBakerError | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, font: PixelFont, stats: BakeStats) -> "BakeResult":
        return cls(font=font, stats=stats)

    @classmethod
    def failure(
        cls,
        exception: PixelBakerError,
        font: PixelFont | None,
        stats: BakeStats,
    ) -> "BakeResult":
        """Build a failure result from a bake exception."""
        return cls(
            font=font,
            error=exception.code,
            message=str(exception),
            stats=stats,
            exception=exception,
        )

    def unwrap(self) -> PixelFont:
        """Return the font, or raise the exception that ended the bake.

        Raises:
            PixelBakerError: If the bake failed
        """
        if self.exception is not None:
            raise self.exception
        if self.font is None:
            raise RuntimeError("Bake result holds no font.")
        return self.font

    def release(self) -> None:
        """Release the held font table, if any."""
        if self.font is not None:
            self.font.release()
