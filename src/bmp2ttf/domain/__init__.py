"""Domain models for bmp2ttf.

This module contains the value types passed between the scan, the conversion
driver and the font writer. All models are plain dataclasses independent of
fontTools and Pillow.

Key classes:
- SourceRecord: A scanned file and its derived code point
- SkippedEntry: A directory entry that could not be scanned
- ScanResult: Ordered records from one scan
- GlyphSource: A validated (code point, path) pair for the font writer
- UnicodeBlock: An inclusive block of supported code points
- GlyphSink: Protocol implemented by font writers
"""

from bmp2ttf.domain.interfaces import GlyphSink
from bmp2ttf.domain.record import (
    INVALID_CODEPOINT,
    MAX_CODEPOINT,
    GlyphSource,
    ScanResult,
    SkippedEntry,
    SourceRecord,
)
from bmp2ttf.domain.unicode_block import SUPPORTED_BLOCKS, UnicodeBlock

__all__: list[str] = [
    # Constants
    "INVALID_CODEPOINT",
    "MAX_CODEPOINT",
    "SUPPORTED_BLOCKS",
    # Core types
    "GlyphSink",
    "GlyphSource",
    "ScanResult",
    "SkippedEntry",
    "SourceRecord",
    "UnicodeBlock",
]
