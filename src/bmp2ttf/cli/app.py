"""CLI application entry point for bmp2ttf.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from bmp2ttf import __version__
from bmp2ttf.cli.output import (
    console,
    print_blocks,
    print_cancellation_notice,
    print_dry_run_complete,
    print_error,
    print_header,
    print_processing,
    print_scan_summary,
    print_skipped_entries,
    print_skipping,
    print_step,
    print_success,
)
from bmp2ttf.config import Bmp2TtfSettings, FontConfig, LoggingConfig, ScanConfig
from bmp2ttf.core import ConversionDriver, PathValidator
from bmp2ttf.domain import SUPPORTED_BLOCKS, GlyphSink, SourceRecord
from bmp2ttf.exceptions import Bmp2TtfError, FontBuildError
from bmp2ttf.io import BitmapFontWriter, NullGlyphSink
from bmp2ttf.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="bmp2ttf",
    help="Build a TrueType font from a directory of U-XXXX.bmp glyph images.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]bmp2ttf[/bold blue] v{__version__}")
        raise typer.Exit()


def list_blocks_callback(value: bool) -> None:
    """Print the supported Unicode blocks and exit."""
    if value:
        print_blocks(SUPPORTED_BLOCKS)
        raise typer.Exit()


@app.command()
def convert(
    source_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory of glyph bitmaps named U-XXXX.bmp",
            show_default=False,
        ),
    ],
    dest_font: Annotated[
        Path,
        typer.Argument(
            help="Output TrueType font file",
            show_default=False,
        ),
    ],
    family_name: Annotated[
        str,
        typer.Option(
            "--family-name",
            "-f",
            help="Font family name",
        ),
    ] = "Bitmap",
    style_name: Annotated[
        str,
        typer.Option(
            "--style-name",
            help="Font style name",
        ),
    ] = "Regular",
    units_per_em: Annotated[
        int,
        typer.Option(
            "--units-per-em",
            help="Units per em of the output font (16-16384)",
            min=16,
            max=16384,
        ),
    ] = 1024,
    pixel_size: Annotated[
        int,
        typer.Option(
            "--pixel-size",
            help="Font units per bitmap pixel",
            min=1,
            max=1024,
        ),
    ] = 64,
    follow_symlinks: Annotated[
        bool,
        typer.Option(
            "--follow-symlinks",
            help="Descend into symlinked directories",
        ),
    ] = False,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Threads for scanning top-level subdirectories",
            min=1,
        ),
    ] = 1,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Scan and report without writing a font",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level for --verbose output (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "INFO",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Also write structured logs to stderr",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print warnings and errors",
        ),
    ] = False,
    _list_blocks: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--list-blocks",
            help="List supported Unicode blocks and exit",
            callback=list_blocks_callback,
            is_eager=True,
        ),
    ] = None,
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
    """Convert a directory of glyph bitmaps into a TrueType font.

    Every regular file under SOURCE_DIR is examined. Files named U-XXXX.bmp or
    u_xxxx.bmp (four hex digits, supported Unicode block) become glyphs; all
    other files are reported and skipped.

    Example:
        bmp2ttf glyphs/ MyBitmapFont.ttf
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    # Both paths are checked before anything touches the source tree
    validator = PathValidator(report=print_error)
    if not validator.validate_source_dir(source_dir):
        raise typer.Exit(code=1)
    if not validator.validate_dest_file(dest_font):
        raise typer.Exit(code=1)

    try:
        settings = Bmp2TtfSettings(
            font=FontConfig(
                family_name=family_name,
                style_name=style_name,
                units_per_em=units_per_em,
                pixel_size=pixel_size,
            ),
            scan=ScanConfig(
                follow_symlinks=follow_symlinks,
                max_workers=workers,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level.upper(),
            ),
        )
    except ValueError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=not verbose,
    )

    sink: GlyphSink = NullGlyphSink() if dry_run else BitmapFontWriter(settings.font)
    driver = ConversionDriver(sink=sink, settings=settings, logger=logger)

    def report(record: SourceRecord, accepted: bool) -> None:
        if accepted:
            if not quiet:
                print_processing(record)
        else:
            print_skipping(record.path, "unrecognized file name")

    try:
        if not quiet:
            print_header(__version__)
            print_step("Scanning")

        result = driver.scan(source_dir)

        print_skipped_entries(result.skipped)
        if not quiet:
            print_scan_summary(
                total=len(result),
                valid=len(result.valid_records),
                unreadable=len(result.skipped),
            )
            print_step("Dry run" if dry_run else "Converting")

        stats = driver.convert(result, dest_font, progress_callback=report)

        if not quiet:
            if dry_run:
                print_dry_run_complete(stats.processed_count, stats.skipped_count)
            else:
                print_success(
                    output_path=str(dest_font),
                    file_size=_format_file_size(dest_font),
                    total_time_s=stats.duration_seconds,
                    processed=stats.processed_count,
                    skipped=stats.skipped_count,
                )

    except KeyboardInterrupt:
        print_cancellation_notice()
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except FontBuildError as e:
        print_error(f"Could not build font: {e.reason}", details=str(e.path))
        raise typer.Exit(code=1)
    except Bmp2TtfError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)

    raise typer.Exit(code=stats.exit_status)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
