"""Core ingestion pipeline for bmp2ttf.

This module contains:

- Supported-range lookup (lazily built Plane 0 bitset)
- Filename parsing (``U-XXXX.bmp`` naming rule)
- Path validation for the source directory and output font
- Recursive directory scanning
- Conversion orchestration

Key classes:
- UnicodeRangeTable: Membership test for supported code points
- FilenameCodepointParser: Maps file paths to code points
- PathValidator: Validates command-line paths
- DirectoryScanner: Produces SourceRecords from a directory tree
- ConversionDriver: Runs the pipeline end to end
"""

from bmp2ttf.core.driver import ConversionDriver
from bmp2ttf.core.parser import FilenameCodepointParser, codepoint_of, parse_hex
from bmp2ttf.core.ranges import UnicodeRangeTable, default_table
from bmp2ttf.core.scanner import DirectoryScanner, scan
from bmp2ttf.core.validator import PathValidator, check_dest_file, check_source_dir

__all__ = [
    # Driver
    "ConversionDriver",
    # Scanner
    "DirectoryScanner",
    # Parser
    "FilenameCodepointParser",
    # Validator
    "PathValidator",
    # Ranges
    "UnicodeRangeTable",
    "check_dest_file",
    "check_source_dir",
    "codepoint_of",
    "default_table",
    "parse_hex",
    "scan",
]
