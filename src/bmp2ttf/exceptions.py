"""Exception hierarchy for bmp2ttf."""

from enum import Enum
from pathlib import Path


class Bmp2TtfError(Exception):
    """Base exception for all bmp2ttf errors."""

    pass


class PathProblem(str, Enum):
    """Reason a command-line path was rejected."""

    NOT_FOUND = "not found"
    NOT_A_DIRECTORY = "is not a directory"
    NOT_A_FILE = "is not a regular file"
    PARENT_NOT_FOUND = "parent directory not found"
    INACCESSIBLE = "cannot be accessed"


class PathValidationError(Bmp2TtfError):
    """A source or destination path failed validation."""

    def __init__(self, path: Path, problem: PathProblem) -> None:
        self.path = path
        self.problem = problem
        super().__init__(f"[{path}] {problem.value}")


class SourceDirectoryError(PathValidationError):
    """The bitmap source directory is missing or not a directory."""

    pass


class DestinationPathError(PathValidationError):
    """The destination font path cannot be used for output."""

    pass


class FontBuildError(Bmp2TtfError):
    """Error building or saving the output font."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to build font '{path}': {reason}")


class BitmapLoadError(FontBuildError):
    """A source bitmap could not be decoded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        Bmp2TtfError.__init__(self, f"Failed to load bitmap '{path}': {reason}")
