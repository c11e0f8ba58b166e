"""Rich console output helpers for the CLI.

Progress while rasterizing, a summary of the baked table, block-character
glyph previews and result messages.
"""

from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

from pixelbaker.domain import PixelFont

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"

PIXEL_ON = "█"
PIXEL_OFF = "·"


def create_progress() -> Progress:
    """Create a progress bar counting rasterized glyphs.

    Returns:
        Progress showing the task, a bar, glyphs done of total and elapsed time.
    """
    return Progress(
        TextColumn("  {task.description}"),
        BarColumn(bar_width=32, complete_style="green", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def print_header(version: str) -> None:
    console.print(f"\n[bold]pixelbaker[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {message}")


def print_source_info(font_type: str, glyph_count: int, upm: int) -> None:
    """Print the format, glyph count and em size of an outline font.

    Args:
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    console.print(f"  {font_type} {SYM_DOT} {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_font_info(font_path: str, font: PixelFont) -> None:
    """Print the source file and the geometry of the baked table.

    Args:
        font_path: Path to the source font file
        font: Baked pixel font
    """
    source = Text("  ")
    source.append(font_path, style="dim")
    console.print(source)
    console.print(
        f"  cell [bold]{font.char_px_width}x{font.char_px_height}[/bold] px {SYM_DOT} "
        f"{font.bytes_per_line} B/row {SYM_DOT} {font.bytes_per_glyph} B/glyph"
    )
    console.print(
        f"  U+{font.cp_start:04X}..U+{font.cp_end:04X} {SYM_DOT} "
        f"{font.glyph_count:,} glyphs {SYM_DOT} {font.table_size:,} bytes"
    )


def print_glyph_preview(font: PixelFont, codepoint: int) -> None:
    """Draw one baked glyph as block characters under a column ruler.

    Args:
        font: Baked pixel font
        codepoint: Code point to draw
    """
    if not font.contains(codepoint):
        console.print(f"\n  [yellow]U+{codepoint:04X} is outside the baked range[/yellow]")
        return

    label = Text(f"\n  U+{codepoint:04X} ")
    label.append(repr(chr(codepoint)), style="bold")
    console.print(label)

    ruler = "".join(str(x % 10) for x in range(font.char_px_width))
    console.print(Text(f"     {ruler}", style="dim"))
    for y, row in enumerate(font.glyph_rows(codepoint, on=PIXEL_ON, off=PIXEL_OFF)):
        line = Text(f"  {y:2d} ", style="dim")
        line.append(row)
        console.print(line)


def _format_time(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    return f"{int(seconds // 60)}m {seconds % 60:.1f}s"


def print_success(
    output_paths: list[Path],
    total_time_s: float,
    baked: int,
    blank: int,
    skipped: int,
    clipped: int = 0,
) -> None:
    """Print the written files and glyph counters.

    Args:
        output_paths: Files written
        total_time_s: Total bake time in seconds
        baked: Glyphs written into the table
        blank: Requested glyphs with nothing to draw
        skipped: Source glyphs outside the requested range
        clipped: Glyphs cut to fit the cell
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}"
    )

    for path in output_paths:
        line = Text(f"  {SYM_STEP} ")
        line.append(str(path), style="bold")
        console.print(line)

    counters = [f"{baked} baked", f"{blank} blank", f"{skipped} skipped"]
    if clipped:
        counters.append(f"[yellow]{clipped} clipped[/yellow]")
    console.print("  " + f" {SYM_DOT} ".join(counters))


def print_error(message: str, details: str | None = None) -> None:
    """Print an error message.

    Args:
        message: Main error message
        details: Optional error code or detail line
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
