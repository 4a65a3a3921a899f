"""Command-line interface for bmp2ttf.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- One "processing" line per glyph written, one "skipping" warning per file left out
- Dry-run mode that scans without writing a font
- Verbose/quiet output modes
"""

from bmp2ttf.cli.app import cli, main

__all__ = ["cli", "main"]
