"""Exceptions raised by the lifegrid package."""

from typing import Optional


class LifeGridError(Exception):
    """Base class for all errors raised by lifegrid."""


class OutOfBoundsError(LifeGridError, IndexError):
    """A coordinate or region lies outside the grid extents."""


class InvalidRangeError(LifeGridError, ValueError):
    """A range was given with its start after its end."""


class FormatError(LifeGridError, ValueError):
    """A grid file does not follow the expected format."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class GridIOError(LifeGridError, OSError):
    """A grid file could not be opened, read or written."""


class ReadOnlyGridError(LifeGridError, TypeError):
    """A mutating operation was called on a read-only grid view."""
