"""Dense-grid Conway's Game of Life engine with ascii and binary grid files."""

__version__ = "0.1.0"

from .core.errors import (
    LifeGridError,
    OutOfBoundsError,
    InvalidRangeError,
    FormatError,
    GridIOError,
    ReadOnlyGridError,
)
from .core.grid import Cell, Grid
from .core.world import World
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "Cell",
    "Grid",
    "World",
    "Pattern",
    "PatternLibrary",
    "LifeGridError",
    "OutOfBoundsError",
    "InvalidRangeError",
    "FormatError",
    "GridIOError",
    "ReadOnlyGridError",
]
