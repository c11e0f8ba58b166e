"""CLI application entry point for pixelbaker.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from pixelbaker import __version__
from pixelbaker.cli.output import (
    console,
    create_progress,
    print_error,
    print_font_info,
    print_glyph_preview,
    print_header,
    print_step,
    print_source_info,
    print_success,
)
from pixelbaker.config import ExportConfig, ExportFormat, LoggingConfig
from pixelbaker.core import bake_description_font, bake_outline_font
from pixelbaker.domain import BakeResult
from pixelbaker.exceptions import ExportError, PixelBakerError
from pixelbaker.io import FontWriter, OutlineFontReader
from pixelbaker.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="pixelbaker",
    help="Bake TTF/OTF or BDF fonts into fixed-cell 1-bit glyph tables for firmware.",
    add_completion=False,
    no_args_is_help=True,
)

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Output path (default: {name}-{width}x{height}.{format})",
    ),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (c|bin)"),
]
NameOption = Annotated[
    str | None,
    typer.Option("--name", help="C symbol name (default: derived from output file name)"),
]
DescriptorOption = Annotated[
    bool,
    typer.Option("--descriptor", help="Prefix binary output with the descriptor record"),
]
PointerSizeOption = Annotated[
    int,
    typer.Option("--pointer-size", help="Descriptor pointer width in bytes (4|8)"),
]
StartOption = Annotated[
    str,
    typer.Option("--start", "-s", help="First code point (decimal, 0x.. or U+..)"),
]
EndOption = Annotated[
    str,
    typer.Option("--end", "-e", help="Last code point (decimal, 0x.. or U+..)"),
]
PreviewOption = Annotated[
    str | None,
    typer.Option("--preview", help="Print baked glyphs for these characters"),
]
LogFileOption = Annotated[
    Path | None,
    typer.Option("--log-file", help="Write detailed logs to file"),
]
LogLevelOption = Annotated[
    str,
    typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Verbose console output"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]pixelbaker[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Bake fonts into fixed-cell 1-bit glyph tables."""


def parse_codepoint(value: str) -> int:
    """Parse a code point written as decimal, 0x-hex or U+hex.

    Raises:
        typer.BadParameter: If the value is not a code point
    """
    text = value.strip()
    try:
        if text[:2].upper() == "U+":
            return int(text[2:], 16)
        return int(text, 0)
    except ValueError:
        raise typer.BadParameter(f"Invalid code point: {value}") from None


@app.command()
def outline(
    input_font: Annotated[
        Path,
        typer.Argument(help="Path to input TTF/OTF font file", show_default=False),
    ],
    height: Annotated[
        int,
        typer.Option("--height", "-H", help="Cell height in pixels", min=1, max=0xFFFF),
    ] = 16,
    start: StartOption = "0x20",
    end: EndOption = "0x7E",
    threshold: Annotated[
        int,
        typer.Option(
            "--threshold",
            "-t",
            help="Gray level (0-255) at which a pixel is set",
            min=0,
            max=255,
        ),
    ] = 128,
    oversample: Annotated[
        int,
        typer.Option("--oversample", help="Rasterization oversampling factor", min=1, max=16),
    ] = 1,
    output: OutputOption = None,
    output_format: FormatOption = "c",
    name: NameOption = None,
    descriptor: DescriptorOption = False,
    pointer_size: PointerSizeOption = 4,
    preview: PreviewOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Bake an outline (TTF/OTF) font.

    Example:
        pixelbaker outline DejaVuSansMono.ttf --height 16

    This will create DejaVuSansMono-10x16.c/.h declaring an sFONT with the
    printable ASCII glyphs.
    """
    export_config, cp_start, cp_end = _prepare(
        start, end, output_format, name, descriptor, pointer_size,
        log_file, log_level, verbose, quiet,
    )

    if not quiet:
        print_step("Loading font")
        try:
            with OutlineFontReader(input_font) as reader:
                print_source_info(reader.format, reader.glyph_count, reader.units_per_em)
        except PixelBakerError as e:
            print_error(f"Could not load font: {e}", details=e.code.name)
            raise typer.Exit(code=1)

        print_step("Baking outline font")

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task("Rasterizing", total=cp_end - cp_start + 1)

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                result = bake_outline_font(
                    input_font, height, cp_start, cp_end,
                    gray_threshold=threshold,
                    oversample=oversample,
                    progress_callback=update_progress,
                )
        else:
            result = bake_outline_font(
                input_font, height, cp_start, cp_end,
                gray_threshold=threshold,
                oversample=oversample,
            )
    except ValidationError as e:
        print_error("Invalid arguments", details=str(e))
        raise typer.Exit(code=1)

    _finish(result, input_font, output, export_config, preview, quiet)


@app.command()
def bdf(
    input_font: Annotated[
        Path,
        typer.Argument(help="Path to input BDF font file", show_default=False),
    ],
    start: StartOption = "0x20",
    end: EndOption = "0x7E",
    output: OutputOption = None,
    output_format: FormatOption = "c",
    name: NameOption = None,
    descriptor: DescriptorOption = False,
    pointer_size: PointerSizeOption = 4,
    preview: PreviewOption = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """Bake a BDF bitmap-font description.

    Glyphs missing from the file keep a checkerboard placeholder.

    Example:
        pixelbaker bdf ter-u16n.bdf --start 0x20 --end 0xFF
    """
    export_config, cp_start, cp_end = _prepare(
        start, end, output_format, name, descriptor, pointer_size,
        log_file, log_level, verbose, quiet,
    )

    if not quiet:
        print_step("Baking BDF font")

    try:
        result = bake_description_font(input_font, cp_start, cp_end)
    except ValidationError as e:
        print_error("Invalid arguments", details=str(e))
        raise typer.Exit(code=1)

    _finish(result, input_font, output, export_config, preview, quiet)


def _prepare(
    start: str,
    end: str,
    output_format: str,
    name: str | None,
    descriptor: bool,
    pointer_size: int,
    log_file: Path | None,
    log_level: str,
    verbose: bool,
    quiet: bool,
) -> tuple[ExportConfig, int, int]:
    """Validate shared options, set up logging and print the header.

    Returns:
        Tuple of (export config, first code point, last code point)
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    try:
        export_format = ExportFormat(output_format.lower())
    except ValueError:
        print_error(
            f"Invalid format: {output_format}",
            details="Valid values: c, bin",
        )
        raise typer.Exit(code=1)

    try:
        export_config = ExportConfig(
            format=export_format,
            symbol_name=name,
            include_header=descriptor,
            pointer_size=pointer_size,
        )
    except ValidationError as e:
        print_error("Invalid output options", details=str(e))
        raise typer.Exit(code=1)

    logging_config = LoggingConfig(
        log_file=log_file,
        log_level="INFO" if verbose else log_level,
    )
    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_header(__version__)

    return export_config, parse_codepoint(start), parse_codepoint(end)


def _finish(
    result: BakeResult,
    input_font: Path,
    output: Path | None,
    export_config: ExportConfig,
    preview: str | None,
    quiet: bool,
) -> None:
    """Report a bake result, write the output and release the table."""
    try:
        if not result.ok or result.font is None:
            code = result.error.name if result.error else "UNKNOWN"
            print_error(f"Could not bake font: {result.message}", details=code)
            raise typer.Exit(code=1)

        font = result.font
        if not quiet:
            print_font_info(str(input_font), font)

        if preview:
            for char in preview:
                print_glyph_preview(font, ord(char))

        output_path = output or FontWriter.get_output_path(
            input_font, font, export_config.format
        )
        try:
            written = FontWriter(font, output_path, export_config).save()
        except ExportError as e:
            print_error(f"Could not write font: {e.reason}", details=e.path)
            raise typer.Exit(code=1)

        if not quiet:
            stats = result.stats
            print_success(
                output_paths=written,
                total_time_s=stats.duration_seconds,
                baked=stats.glyphs_baked,
                blank=stats.glyphs_blank,
                skipped=stats.glyphs_skipped,
                clipped=stats.glyphs_clipped,
            )
    finally:
        result.release()


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
