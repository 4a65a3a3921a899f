"""Tests for the recursive directory scanner."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from bmp2ttf.core.parser import FilenameCodepointParser
from bmp2ttf.core.ranges import UnicodeRangeTable
from bmp2ttf.core.scanner import DirectoryScanner, scan
from bmp2ttf.domain import SourceRecord

needs_symlinks = pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")


@pytest.fixture
def scanner() -> DirectoryScanner:
    """Create a sequential scanner with its own range table."""
    return DirectoryScanner(parser=FilenameCodepointParser(UnicodeRangeTable()))


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create a nested tree with 6 regular files in 4 subdirectories."""
    root = tmp_path / "root"
    (root / "latin" / "upper").mkdir(parents=True)
    (root / "cjk").mkdir()
    (root / "empty").mkdir()
    (root / "U-0041.bmp").write_bytes(b"BM")
    (root / "notes.txt").write_text("x")
    (root / "latin" / "u_0061.bmp").write_bytes(b"BM")
    (root / "latin" / "upper" / "U-0042.BMP").write_bytes(b"BM")
    (root / "latin" / "upper" / "U-0530.bmp").write_bytes(b"BM")
    (root / "cjk" / "U-4E2D.bmp").write_bytes(b"BM")
    return root


def _names(records: list[SourceRecord], root: Path) -> list[str]:
    return [record.path.relative_to(root).as_posix() for record in records]


class TestScanCompleteness:
    """Tests that every regular file yields exactly one record."""

    def test_one_record_per_regular_file(self, scanner: DirectoryScanner, tree: Path):
        """Test N files in M directories give N records."""
        result = scanner.scan(tree)
        assert len(result) == 6
        assert result.skipped == []

    def test_codepoints(self, scanner: DirectoryScanner, tree: Path):
        """Test each record carries the parsed code point."""
        result = scanner.scan(tree)
        by_name = {record.path.name: record.codepoint for record in result}
        assert by_name == {
            "U-0041.bmp": 0x41,
            "notes.txt": 0,
            "u_0061.bmp": 0x61,
            "U-0042.BMP": 0x42,
            "U-0530.bmp": 0,
            "U-4E2D.bmp": 0x4E2D,
        }

    def test_paths_rooted_at_scan_root(self, scanner: DirectoryScanner, tree: Path):
        """Test record paths start with the root as given."""
        for record in scanner.scan(tree):
            assert record.path.is_relative_to(tree)
            assert record.path.is_file()

    def test_empty_directory(self, scanner: DirectoryScanner, tmp_path: Path):
        """Test an empty root gives no records."""
        result = scanner.scan(tmp_path)
        assert len(result) == 0
        assert result.skipped == []

    def test_no_extension_filter(self, scanner: DirectoryScanner, tmp_path: Path):
        """Test files of any type are recorded."""
        for name in ("a.png", "b", "c.BMP", ".hidden"):
            (tmp_path / name).write_bytes(b"")
        assert len(scanner.scan(tmp_path)) == 4


class TestDeterminism:
    """Tests for traversal order and fresh results."""

    def test_sorted_depth_first_order(self, scanner: DirectoryScanner, tree: Path):
        """Test entries are visited in sorted name order, depth first."""
        result = scanner.scan(tree)
        assert _names(result.records, tree) == [
            "U-0041.bmp",
            "cjk/U-4E2D.bmp",
            "latin/u_0061.bmp",
            "latin/upper/U-0042.BMP",
            "latin/upper/U-0530.bmp",
            "notes.txt",
        ]

    def test_repeated_scans_are_fresh_and_equal(self, scanner: DirectoryScanner, tree: Path):
        """Test a second scan does not accumulate onto the first."""
        first = scanner.scan(tree)
        second = scanner.scan(tree)
        assert first is not second
        assert first.records == second.records
        assert len(second) == 6

    def test_module_scan_helper(self, tree: Path):
        """Test the module-level helper matches the scanner."""
        assert len(scan(tree)) == 6


class TestSkippedEntries:
    """Tests for entries that are neither directories nor regular files."""

    @needs_symlinks
    def test_broken_symlink_skipped(self, scanner: DirectoryScanner, tmp_path: Path):
        """Test dangling links are skipped with a reason."""
        (tmp_path / "U-0041.bmp").write_bytes(b"BM")
        (tmp_path / "dangling.bmp").symlink_to(tmp_path / "missing.bmp")

        result = scanner.scan(tmp_path)

        assert [r.path.name for r in result] == ["U-0041.bmp"]
        assert len(result.skipped) == 1
        assert result.skipped[0].path.name == "dangling.bmp"
        assert result.skipped[0].reason == "broken symbolic link"

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires os.mkfifo")
    def test_fifo_skipped(self, scanner: DirectoryScanner, tmp_path: Path):
        """Test special files are skipped and the scan continues."""
        os.mkfifo(tmp_path / "U-0042.bmp")
        (tmp_path / "U-0043.bmp").write_bytes(b"BM")

        result = scanner.scan(tmp_path)

        assert [r.path.name for r in result] == ["U-0043.bmp"]
        assert result.skipped[0].reason == "not a regular file"

    @needs_symlinks
    def test_symlink_to_file_recorded(self, scanner: DirectoryScanner, tmp_path: Path):
        """Test links to regular files are followed."""
        target = tmp_path / "data.bin"
        target.write_bytes(b"BM")
        (tmp_path / "U-0041.bmp").symlink_to(target)

        result = scanner.scan(tmp_path)

        assert sorted(r.path.name for r in result) == ["U-0041.bmp", "data.bin"]
        assert result.skipped == []

    @needs_symlinks
    def test_symlinked_directory_not_followed_by_default(
        self, scanner: DirectoryScanner, tmp_path: Path
    ):
        """Test directory links are skipped unless following is enabled."""
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "U-0041.bmp").write_bytes(b"BM")
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)

        result = scanner.scan(tmp_path)

        assert len(result) == 1
        assert result.skipped[0].reason == "symbolic link to a directory"

    @needs_symlinks
    def test_symlinked_directory_followed(self, tmp_path: Path):
        """Test directory links are descended when enabled."""
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "U-0041.bmp").write_bytes(b"BM")
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)

        result = DirectoryScanner(follow_symlinks=True).scan(tmp_path)

        assert _names(result.records, tmp_path) == ["link/U-0041.bmp", "real/U-0041.bmp"]
        assert result.skipped == []

    @needs_symlinks
    def test_symlink_cycle_skipped(self, tmp_path: Path):
        """Test a link back to an ancestor is not descended."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "U-0041.bmp").write_bytes(b"BM")
        (tmp_path / "sub" / "loop").symlink_to(tmp_path, target_is_directory=True)

        result = DirectoryScanner(follow_symlinks=True).scan(tmp_path)

        assert len(result) == 1
        assert result.skipped[0].path.name == "loop"
        assert result.skipped[0].reason == "directory cycle"


class TestPartialFailure:
    """Tests that unreadable subtrees do not abort the scan."""

    def test_unreadable_subtree_skipped(
        self,
        scanner: DirectoryScanner,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Test one locked subtree leaves the rest of the scan intact."""
        (tmp_path / "locked").mkdir()
        (tmp_path / "locked" / "U-0044.bmp").write_bytes(b"BM")
        (tmp_path / "U-0041.bmp").write_bytes(b"BM")
        (tmp_path / "z").mkdir()
        (tmp_path / "z" / "U-0042.bmp").write_bytes(b"BM")

        real_scandir: Callable = os.scandir
        locked = tmp_path / "locked"

        def fake_scandir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)

        result = scanner.scan(tmp_path)

        assert _names(result.records, tmp_path) == ["U-0041.bmp", "z/U-0042.bmp"]
        assert len(result.skipped) == 1
        assert result.skipped[0].path == locked
        assert "cannot read directory" in result.skipped[0].reason

    def test_missing_root(self, scanner: DirectoryScanner, tmp_path: Path):
        """Test a root that vanished yields an empty result with one skip."""
        result = scanner.scan(tmp_path / "gone")
        assert len(result) == 0
        assert len(result.skipped) == 1

    @pytest.mark.parametrize("workers", [1, 2])
    def test_deep_tree(self, tmp_path: Path, workers: int):
        """Test nesting far beyond the interpreter's recursion limit is walked."""
        deepest = tmp_path
        for _ in range(600):
            deepest = deepest / "d"
            deepest.mkdir()
        (deepest / "U-0041.bmp").write_bytes(b"BM")
        (tmp_path / "U-0042.bmp").write_bytes(b"BM")

        result = DirectoryScanner(max_workers=workers).scan(tmp_path)

        assert [record.codepoint for record in result] == [0x42, 0x41]
        assert result.records[1].path == deepest / "U-0041.bmp"
        assert result.skipped == []


class TestParallelScan:
    """Tests for the threaded subtree walk."""

    def test_matches_sequential(self, scanner: DirectoryScanner, tree: Path):
        """Test parallel and sequential scans agree exactly."""
        sequential = scanner.scan(tree)
        parallel = DirectoryScanner(max_workers=4).scan(tree)
        assert parallel.records == sequential.records
        assert parallel.skipped == sequential.skipped

    def test_builds_table_before_workers(self, tree: Path):
        """Test the range table is constructed once, up front."""
        table = UnicodeRangeTable()
        scanner = DirectoryScanner(parser=FilenameCodepointParser(table), max_workers=3)

        scanner.scan(tree)

        assert table.build_count == 1

    def test_worker_count_floor(self):
        """Test worker counts below one fall back to sequential."""
        assert DirectoryScanner(max_workers=0).max_workers == 1
