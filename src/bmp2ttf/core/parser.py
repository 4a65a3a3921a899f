"""Derive code points from glyph image filenames.

Naming rule:
- extension ``.bmp`` in any letter case
- stem ``U`` or ``u``, then ``-`` or ``_``, then exactly four hex digits

Examples: ``U-0041.bmp`` (A), ``u_4e2d.BMP`` (中). Anything else maps to the
invalid sentinel 0. ``U-0000.bmp`` also maps to 0 because U+0000 is not in any
supported block.
"""

import os
import re
from pathlib import Path

from bmp2ttf.core.ranges import UnicodeRangeTable, default_table
from bmp2ttf.domain.record import INVALID_CODEPOINT, MAX_CODEPOINT

BITMAP_EXTENSION = ".bmp"
STEM_PATTERN = re.compile(r"[Uu][_-]([0-9A-Fa-f]{4})")


def parse_hex(digits: str) -> int | None:
    """Parse a hexadecimal string, returning None instead of raising."""
    try:
        return int(digits, 16)
    except ValueError:
        return None


class FilenameCodepointParser:
    """Maps file paths to code points using the glyph naming rule.

    Example:
        parser = FilenameCodepointParser()
        parser.codepoint_of(Path("glyphs/U-0041.bmp"))  # 65
        parser.codepoint_of(Path("glyphs/readme.txt"))  # 0
    """

    def __init__(self, table: UnicodeRangeTable | None = None) -> None:
        """Initialize the parser.

        Args:
            table: Range table used to validate parsed values (shared default
                if None)
        """
        self.table = table if table is not None else default_table()

    def codepoint_of(self, path: str | os.PathLike[str]) -> int:
        """Return the code point encoded in a filename.

        Args:
            path: Path to a glyph image; only the final component is examined

        Returns:
            The code point, or INVALID_CODEPOINT (0) if the name breaks the
            naming rule or the value is not in a supported block
        """
        name = Path(path)
        if name.suffix.lower() != BITMAP_EXTENSION:
            return INVALID_CODEPOINT

        match = STEM_PATTERN.fullmatch(name.stem)
        if match is None:
            return INVALID_CODEPOINT

        codepoint = parse_hex(match.group(1))
        if codepoint is None or codepoint > MAX_CODEPOINT:
            return INVALID_CODEPOINT

        if not self.table.is_supported(codepoint):
            return INVALID_CODEPOINT

        return codepoint


def codepoint_of(path: str | os.PathLike[str], table: UnicodeRangeTable | None = None) -> int:
    """Convenience wrapper around FilenameCodepointParser.codepoint_of."""
    return FilenameCodepointParser(table).codepoint_of(path)
