"""Validation of the source directory and destination font paths.

Both checks run before any scanning and never modify the filesystem. The
``check_*`` functions raise typed errors; the ``validate_*`` functions return a
bool and report the reason through a callback.
"""

import os
import stat
from collections.abc import Callable
from pathlib import Path

import structlog

from bmp2ttf.exceptions import (
    DestinationPathError,
    PathProblem,
    PathValidationError,
    SourceDirectoryError,
)

logger = structlog.get_logger("bmp2ttf.validator")

Reporter = Callable[[str], None]


def _stat(path: Path, error: type[PathValidationError]) -> os.stat_result | None:
    """Stat a path; None means it does not exist."""
    try:
        return path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        raise error(path, PathProblem.INACCESSIBLE) from e


def _log_error(message: str) -> None:
    logger.error(message)


def check_source_dir(path: str | os.PathLike[str]) -> Path:
    """Ensure the source path exists and is a directory.

    Returns:
        The path as a Path

    Raises:
        SourceDirectoryError: With NOT_FOUND, NOT_A_DIRECTORY or INACCESSIBLE
    """
    path = Path(path)
    st = _stat(path, SourceDirectoryError)
    if st is None:
        raise SourceDirectoryError(path, PathProblem.NOT_FOUND)
    if not stat.S_ISDIR(st.st_mode):
        raise SourceDirectoryError(path, PathProblem.NOT_A_DIRECTORY)
    return path


def check_dest_file(path: str | os.PathLike[str]) -> Path:
    """Ensure the destination can receive the output font.

    An existing regular file is accepted, as is a path that does not exist yet
    inside an existing directory.

    Returns:
        The path as a Path

    Raises:
        DestinationPathError: With NOT_A_FILE, PARENT_NOT_FOUND or
            INACCESSIBLE
    """
    path = Path(path)
    st = _stat(path, DestinationPathError)
    if st is not None:
        if stat.S_ISREG(st.st_mode):
            return path
        raise DestinationPathError(path, PathProblem.NOT_A_FILE)

    parent = path.parent
    parent_st = _stat(parent, DestinationPathError)
    if parent_st is None or not stat.S_ISDIR(parent_st.st_mode):
        raise DestinationPathError(path, PathProblem.PARENT_NOT_FOUND)
    return path


class PathValidator:
    """Bool-returning gate used by the driver and the CLI.

    Example:
        validator = PathValidator(report=print)
        if not validator.validate_source_dir(Path("glyphs")):
            sys.exit(1)
    """

    def __init__(self, report: Reporter | None = None) -> None:
        """Initialize the validator.

        Args:
            report: Called with one diagnostic line per failure (logs at
                error level if None)
        """
        self._report = report if report is not None else _log_error

    def validate_source_dir(self, path: str | os.PathLike[str]) -> bool:
        """Return True iff ``path`` exists and is a directory."""
        return self._run(check_source_dir, path)

    def validate_dest_file(self, path: str | os.PathLike[str]) -> bool:
        """Return True iff ``path`` can be used as the output font file."""
        return self._run(check_dest_file, path)

    def _run(
        self,
        check: Callable[[str | os.PathLike[str]], Path],
        path: str | os.PathLike[str],
    ) -> bool:
        try:
            check(path)
        except PathValidationError as e:
            self._report(str(e))
            return False
        return True
