"""Tests for domain models."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from bmp2ttf.domain import (
    INVALID_CODEPOINT,
    MAX_CODEPOINT,
    SUPPORTED_BLOCKS,
    GlyphSink,
    GlyphSource,
    ScanResult,
    SkippedEntry,
    SourceRecord,
    UnicodeBlock,
)
from bmp2ttf.io import BitmapFontWriter, NullGlyphSink


class TestSourceRecord:
    """Tests for SourceRecord."""

    def test_valid_record(self):
        """Test a record with a code point is valid."""
        record = SourceRecord(Path("U-0041.bmp"), 0x41)
        assert record.is_valid

    def test_sentinel_is_invalid(self):
        """Test the zero sentinel marks a record invalid."""
        record = SourceRecord(Path("readme.txt"), INVALID_CODEPOINT)
        assert not record.is_valid

    def test_default_codepoint_is_sentinel(self):
        """Test records default to the invalid sentinel."""
        assert SourceRecord(Path("x")).codepoint == INVALID_CODEPOINT

    def test_frozen(self):
        """Test records are immutable."""
        record = SourceRecord(Path("U-0041.bmp"), 0x41)
        with pytest.raises(FrozenInstanceError):
            record.codepoint = 0x42  # type: ignore[misc]

    def test_equality_by_value(self):
        """Test records compare by path and code point."""
        assert SourceRecord(Path("a.bmp"), 0) == SourceRecord(Path("a.bmp"), 0)


class TestGlyphSource:
    """Tests for GlyphSource."""

    def test_glyph_name(self):
        """Test production glyph names are uniXXXX."""
        assert GlyphSource(0x41, Path("U-0041.bmp")).glyph_name == "uni0041"
        assert GlyphSource(0x4E2D, Path("u_4e2d.bmp")).glyph_name == "uni4E2D"

    def test_from_valid_record(self):
        """Test conversion from a valid record."""
        record = SourceRecord(Path("U-0041.bmp"), 0x41)
        source = GlyphSource.from_record(record)
        assert source.codepoint == 0x41
        assert source.path == Path("U-0041.bmp")

    def test_from_invalid_record_raises(self):
        """Test invalid records cannot become glyph sources."""
        with pytest.raises(ValueError, match="no valid code point"):
            GlyphSource.from_record(SourceRecord(Path("readme.txt"), 0))


class TestScanResult:
    """Tests for ScanResult."""

    def test_iterates_records(self):
        """Test iteration and len cover records only."""
        records = [SourceRecord(Path("a"), 0x41), SourceRecord(Path("b"), 0)]
        result = ScanResult(
            root=Path("."),
            records=records,
            skipped=[SkippedEntry(Path("c"), "not a regular file")],
        )
        assert list(result) == records
        assert len(result) == 2

    def test_valid_and_invalid_split(self):
        """Test valid_records and invalid_records partition the records."""
        valid = SourceRecord(Path("a"), 0x41)
        invalid = SourceRecord(Path("b"), 0)
        result = ScanResult(root=Path("."), records=[valid, invalid])
        assert result.valid_records == [valid]
        assert result.invalid_records == [invalid]

    def test_extend_keeps_order(self):
        """Test extend appends records and skipped entries in order."""
        first = ScanResult(root=Path("."), records=[SourceRecord(Path("a"), 0x41)])
        second = ScanResult(
            root=Path("sub"),
            records=[SourceRecord(Path("sub/b"), 0x42)],
            skipped=[SkippedEntry(Path("sub/c"), "broken symbolic link")],
        )
        first.extend(second)
        assert [r.path for r in first] == [Path("a"), Path("sub/b")]
        assert first.skipped == second.skipped

    def test_fresh_instances_do_not_share_lists(self):
        """Test default lists are per instance."""
        a = ScanResult(root=Path("."))
        b = ScanResult(root=Path("."))
        a.records.append(SourceRecord(Path("x"), 0))
        assert len(b) == 0


class TestUnicodeBlock:
    """Tests for UnicodeBlock and the supported block list."""

    def test_contains_inclusive(self):
        """Test both ends of a block are members."""
        block = UnicodeBlock("Basic Latin", 0x0020, 0x007F)
        assert 0x20 in block
        assert 0x7F in block
        assert 0x1F not in block
        assert 0x80 not in block

    def test_contains_rejects_non_int(self):
        """Test non-integers are never members."""
        assert "A" not in UnicodeBlock("Basic Latin", 0x0020, 0x007F)

    def test_len(self):
        """Test block length counts both ends."""
        assert len(UnicodeBlock("Basic Latin", 0x0020, 0x007F)) == 0x60

    def test_str(self):
        """Test human-readable form."""
        assert str(UnicodeBlock("Arrows", 0x2190, 0x21FF)) == "U+2190..U+21FF Arrows"

    def test_inverted_range_raises(self):
        """Test low above high is rejected."""
        with pytest.raises(ValueError):
            UnicodeBlock("Broken", 0x100, 0xFF)

    def test_supported_blocks_sorted_and_disjoint(self):
        """Test the fixed block list is ordered and non-overlapping."""
        for previous, current in zip(SUPPORTED_BLOCKS, SUPPORTED_BLOCKS[1:]):
            assert previous.high < current.low

    def test_supported_blocks_span(self):
        """Test the list covers the expected span within Plane 0."""
        assert 25 <= len(SUPPORTED_BLOCKS) <= 40
        assert SUPPORTED_BLOCKS[0].low == 0x0020
        assert SUPPORTED_BLOCKS[-1].high == 0xFFEF
        assert all(block.high <= MAX_CODEPOINT for block in SUPPORTED_BLOCKS)

    def test_cjk_unified_ideographs_block(self):
        """Test the CJK Unified Ideographs block ends at U+9FEA."""
        cjk = next(b for b in SUPPORTED_BLOCKS if b.name == "CJK Unified Ideographs")
        assert (cjk.low, cjk.high) == (0x4E00, 0x9FEA)


class TestGlyphSinkProtocol:
    """Tests for the GlyphSink protocol."""

    def test_writers_implement_protocol(self):
        """Test both shipped sinks satisfy GlyphSink."""
        assert isinstance(NullGlyphSink(), GlyphSink)
        assert isinstance(BitmapFontWriter(), GlyphSink)
