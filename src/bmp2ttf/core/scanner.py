"""Recursive discovery of glyph source files.

Every regular file under the root becomes a SourceRecord, whether or not its
name follows the naming rule. Entries that are neither directories nor regular
files, and subtrees that cannot be read, are recorded as SkippedEntry values
and the walk carries on.

Entries are visited in sorted name order so repeated scans of the same tree
produce the same sequence.
"""

import os
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

import structlog

from bmp2ttf.core.parser import FilenameCodepointParser
from bmp2ttf.domain.record import ScanResult, SkippedEntry, SourceRecord

logger = structlog.get_logger("bmp2ttf.scanner")

# (st_dev, st_ino) of the directories on the current descent path
_Ancestors = frozenset[tuple[int, int]]


def _identity(st: os.stat_result) -> tuple[int, int]:
    return (st.st_dev, st.st_ino)


class DirectoryScanner:
    """Walks a directory tree and parses every regular file it finds.

    Example:
        scanner = DirectoryScanner()
        result = scanner.scan(Path("glyphs"))
        for record in result:
            print(record.path, record.codepoint)
    """

    def __init__(
        self,
        parser: FilenameCodepointParser | None = None,
        follow_symlinks: bool = False,
        max_workers: int = 1,
    ) -> None:
        """Initialize the scanner.

        Args:
            parser: Filename parser (one sharing the default table if None)
            follow_symlinks: Descend into symlinked directories, skipping loops
            max_workers: Threads used for the root's subdirectories
        """
        self.parser = parser if parser is not None else FilenameCodepointParser()
        self.follow_symlinks = follow_symlinks
        self.max_workers = max(1, max_workers)

    def scan(self, root: str | os.PathLike[str]) -> ScanResult:
        """Scan ``root`` recursively.

        Args:
            root: Directory to walk

        Returns:
            A new ScanResult with one record per regular file, in traversal
            order, plus any entries that had to be skipped
        """
        root = Path(root)
        result = ScanResult(root=root)

        try:
            ancestors: _Ancestors = frozenset({_identity(root.stat())})
        except OSError as e:
            self._skip(result, root, f"cannot read directory: {e.strerror or e}")
            return result

        if self.max_workers == 1:
            self._walk(root, result, ancestors)
        else:
            self._walk_parallel(root, result, ancestors)

        logger.info(
            "Scan complete",
            root=str(root),
            records=len(result.records),
            valid=len(result.valid_records),
            skipped=len(result.skipped),
        )
        return result

    def _list(self, directory: Path, result: ScanResult) -> list[os.DirEntry[str]] | None:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            self._skip(result, directory, f"cannot read directory: {e.strerror or e}")
            return None

    def _walk(self, directory: Path, result: ScanResult, ancestors: _Ancestors) -> None:
        entries = self._list(directory, result)
        if entries is None:
            return
        # One iterator per directory on the descent path, innermost last
        stack: list[tuple[Iterator[os.DirEntry[str]], _Ancestors]] = [(iter(entries), ancestors)]
        while stack:
            it, current = stack[-1]
            entry = next(it, None)
            if entry is None:
                stack.pop()
                continue
            descend = self._visit(entry, result, current)
            if descend is None:
                continue
            child, child_ancestors = descend
            children = self._list(child, result)
            if children is not None:
                stack.append((iter(children), child_ancestors))

    def _visit(
        self, entry: os.DirEntry[str], result: ScanResult, ancestors: _Ancestors
    ) -> tuple[Path, _Ancestors] | None:
        """Record a file or skipped entry; return a directory still to be walked."""
        path = Path(entry.path)
        try:
            if entry.is_dir(follow_symlinks=self.follow_symlinks):
                identity = _identity(entry.stat(follow_symlinks=self.follow_symlinks))
                if identity in ancestors:
                    self._skip(result, path, "directory cycle")
                    return None
                return path, ancestors | {identity}
            if entry.is_file():
                codepoint = self.parser.codepoint_of(path)
                result.records.append(SourceRecord(path=path, codepoint=codepoint))
                logger.debug("File scanned", path=str(path), codepoint=codepoint)
                return None
            reason = self._describe_other(entry)
        except OSError as e:
            reason = f"cannot stat entry: {e.strerror or e}"
        self._skip(result, path, reason)
        return None

    def _walk_parallel(self, root: Path, result: ScanResult, ancestors: _Ancestors) -> None:
        # Workers only read the table; build it before any of them start.
        self.parser.table.build()

        entries = self._list(root, result)
        if entries is None:
            return

        # One slot per root entry keeps the merged order equal to _walk.
        slots: list[ScanResult | Future[ScanResult]] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=self.follow_symlinks)
                except OSError:
                    is_dir = False
                if is_dir:
                    slots.append(executor.submit(self._walk_subtree, entry, ancestors))
                else:
                    slots.append(self._walk_subtree(entry, ancestors))

            for slot in slots:
                result.extend(slot.result() if isinstance(slot, Future) else slot)

    def _walk_subtree(self, entry: os.DirEntry[str], ancestors: _Ancestors) -> ScanResult:
        local = ScanResult(root=Path(entry.path))
        descend = self._visit(entry, local, ancestors)
        if descend is not None:
            self._walk(descend[0], local, descend[1])
        return local

    @staticmethod
    def _describe_other(entry: os.DirEntry[str]) -> str:
        if entry.is_symlink():
            if not os.path.exists(entry.path):
                return "broken symbolic link"
            if os.path.isdir(entry.path):
                return "symbolic link to a directory"
        return "not a regular file"

    @staticmethod
    def _skip(result: ScanResult, path: Path, reason: str) -> None:
        result.skipped.append(SkippedEntry(path=path, reason=reason))
        logger.warning("Entry skipped", path=str(path), reason=reason)


def scan(root: str | os.PathLike[str], parser: FilenameCodepointParser | None = None) -> ScanResult:
    """Scan ``root`` sequentially with default options."""
    return DirectoryScanner(parser=parser).scan(root)
