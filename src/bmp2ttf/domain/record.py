"""Records produced by the directory scan.

A SourceRecord pairs one regular file with the code point derived from its
filename. Code point 0 is the sentinel for "no usable code point"; U+0000 is
never a glyph target.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

INVALID_CODEPOINT = 0
MAX_CODEPOINT = 0xFFFF


@dataclass(frozen=True)
class SourceRecord:
    """One candidate glyph source found during a scan.

    Attributes:
        path: Path to the regular file, rooted at the scan root as given
        codepoint: Derived code point, or INVALID_CODEPOINT
    """

    path: Path
    codepoint: int = INVALID_CODEPOINT

    @property
    def is_valid(self) -> bool:
        """Check if a usable code point was derived from the filename."""
        return self.codepoint != INVALID_CODEPOINT


@dataclass(frozen=True)
class SkippedEntry:
    """A directory entry the scanner could not turn into a record.

    Attributes:
        path: Path of the entry
        reason: Human-readable reason (e.g. "not a regular file")
    """

    path: Path
    reason: str


@dataclass(frozen=True)
class GlyphSource:
    """A validated (code point, image path) pair handed to a glyph sink."""

    codepoint: int
    path: Path

    @property
    def glyph_name(self) -> str:
        """Production glyph name, e.g. ``uni0041``."""
        return f"uni{self.codepoint:04X}"

    @classmethod
    def from_record(cls, record: SourceRecord) -> "GlyphSource":
        """Build from a valid scan record.

        Raises:
            ValueError: If the record carries the invalid sentinel
        """
        if not record.is_valid:
            raise ValueError(f"Record has no valid code point: {record.path}")
        return cls(codepoint=record.codepoint, path=record.path)


@dataclass
class ScanResult:
    """Ordered records found under one root, plus entries that were skipped.

    Iterating a ScanResult yields its records in traversal order.
    """

    root: Path
    records: list[SourceRecord] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[SourceRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def valid_records(self) -> list[SourceRecord]:
        """Records carrying a usable code point."""
        return [r for r in self.records if r.is_valid]

    @property
    def invalid_records(self) -> list[SourceRecord]:
        """Records whose filename failed parsing or range validation."""
        return [r for r in self.records if not r.is_valid]

    def extend(self, other: "ScanResult") -> None:
        """Append another result (e.g. from a subtree walk) in order."""
        self.records.extend(other.records)
        self.skipped.extend(other.skipped)
