"""Rich console output helpers for the CLI.

Informational lines go to stdout; warnings and errors go to stderr.
"""

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.text import Text

from bmp2ttf.domain import SkippedEntry, SourceRecord, UnicodeBlock

console = Console()
err_console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]bmp2ttf[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_processing(record: SourceRecord) -> None:
    """Print a file accepted for the font."""
    # Use Text to safely handle paths with special characters
    line = Text("  processing ")
    line.append(str(record.path))
    line.append(f" (U+{record.codepoint:04X})", style="dim")
    console.print(line, soft_wrap=True)


def print_skipping(path: Path, reason: str) -> None:
    """Print a file or directory entry left out of the font."""
    line = Text(f"  {SYM_WARN} ", style="yellow")
    line.append("skipping ")
    line.append(str(path))
    line.append(f" ({reason})", style="dim")
    err_console.print(line, soft_wrap=True)


def print_skipped_entries(entries: Iterable[SkippedEntry]) -> None:
    """Print entries the scanner could not read or classify."""
    for entry in entries:
        print_skipping(entry.path, entry.reason)


def print_scan_summary(total: int, valid: int, unreadable: int) -> None:
    """Print scan result counts.

    Args:
        total: Regular files found
        valid: Files with a usable code point
        unreadable: Directory entries skipped during the walk
    """
    console.print(
        f"  [green]{total}[/green] files {SYM_DOT} {valid} glyphs {SYM_DOT} "
        f"{total - valid} unrecognized {SYM_DOT} {unreadable} unreadable"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    processed: int,
    skipped: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total conversion time in seconds
        processed: Number of glyphs written
        skipped: Number of files skipped
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line, soft_wrap=True)

    skipped_style = "yellow" if skipped > 0 else "green"
    console.print(
        f"  {processed} glyphs {SYM_DOT} [{skipped_style}]{skipped} skipped[/{skipped_style}]"
    )


def print_dry_run_complete(processed: int, skipped: int) -> None:
    """Print dry-run summary."""
    console.print(
        f"\n[bold green]{SYM_OK} Dry run complete[/bold green] {SYM_DOT} "
        f"{processed} glyphs {SYM_DOT} {skipped} skipped {SYM_DOT} no font written"
    )


def print_blocks(blocks: Iterable[UnicodeBlock]) -> None:
    """Print the supported Unicode blocks."""
    blocks = list(blocks)
    console.print(f"\n[bold]{len(blocks)} supported Unicode blocks[/bold]\n")
    for block in blocks:
        console.print(f"  U+{block.low:04X}..U+{block.high:04X}  {block.name}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    line = Text()
    line.append(f"{SYM_ERR} Error: ", style="bold red")
    line.append(message)
    err_console.print(line, soft_wrap=True)
    if details:
        err_console.print(f"  {details}", soft_wrap=True, markup=False)


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    err_console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold] {SYM_DOT} no font written")
