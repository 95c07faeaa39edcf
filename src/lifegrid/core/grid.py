"""Grid data structure for cellular automata."""

from enum import IntEnum
from typing import Iterator, List, Optional, Sequence, Tuple, Union
import logging

import numpy as np

from .errors import InvalidRangeError, OutOfBoundsError, ReadOnlyGridError

logger = logging.getLogger(__name__)


class Cell(IntEnum):
    """State of a single grid cell."""

    DEAD = 0
    ALIVE = 1


CellValue = Union[Cell, bool, int]


def to_cell(value: CellValue) -> Cell:
    """Convert a bool, int or Cell into a Cell.

    Raises:
        ValueError: If the value is not one of the two legal states
    """
    if isinstance(value, Cell):
        return value
    if isinstance(value, (bool, np.bool_)):
        return Cell.ALIVE if value else Cell.DEAD
    try:
        return Cell(value)
    except (ValueError, TypeError):
        raise ValueError(f"{value!r} is not a valid cell state") from None


def _check_dimensions(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")


class Grid:
    """A dense 2D grid of cells.

    Cells are stored in a flat numpy buffer in row-major order, so the cell
    at (x, y) lives at index ``x + width * y``. Coordinates are never wrapped
    or clamped: anything outside ``[0, width) x [0, height)`` raises
    OutOfBoundsError.
    """

    def __init__(self, width: int = 0, height: Optional[int] = None) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows (defaults to width for a square grid)
        """
        if height is None:
            height = width
        _check_dimensions(width, height)
        self._width = int(width)
        self._height = int(height)
        self._cells = np.zeros(self._width * self._height, dtype=np.uint8)
        self._read_only = False

    @classmethod
    def from_list(cls, rows: Sequence[Sequence[CellValue]]) -> "Grid":
        """Build a grid from a list of rows.

        Args:
            rows: One sequence per row, each holding truthy/falsy cell states

        Raises:
            ValueError: If the rows are not all the same length
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            for x, value in enumerate(row):
                grid.set(x, y, to_cell(value))
        return grid

    def read_only_view(self) -> "Grid":
        """Return a grid that shares this grid's cells but cannot modify them.

        No cells are copied, so the view follows later changes made through
        this grid. set, clear, resize and merge on the view raise
        ReadOnlyGridError; copy() of the view is an ordinary writable grid.
        """
        view = Grid.__new__(Grid)
        view._width = self._width
        view._height = self._height
        view._cells = self._cells.view()
        view._cells.flags.writeable = False
        view._read_only = True
        return view

    @property
    def read_only(self) -> bool:
        """Whether this grid is a read-only view."""
        return self._read_only

    def _check_writable(self) -> None:
        if self._read_only:
            raise ReadOnlyGridError("Cannot modify a read-only grid view")

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def total_cells(self) -> int:
        """Number of cells (width * height)."""
        return self._width * self._height

    @property
    def cells(self) -> np.ndarray:
        """Read-only 2D view of the cells, indexed ``[y, x]``."""
        view = self._cells.reshape(self._height, self._width).view()
        view.flags.writeable = False
        return view

    def _grid_view(self) -> np.ndarray:
        return self._cells.reshape(self._height, self._width)

    def count_alive(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def count_dead(self) -> int:
        """Get the number of dead cells."""
        return self.total_cells - self.count_alive()

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBoundsError(
                f"Coordinates ({x}, {y}) out of bounds for {self._width}x{self._height} grid"
            )
        return x + self._width * y

    def get(self, x: int, y: int) -> Cell:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Cell.ALIVE or Cell.DEAD

        Raises:
            OutOfBoundsError: If the coordinates are outside the grid
        """
        return Cell(int(self._cells[self._index(x, y)]))

    def set(self, x: int, y: int, value: CellValue) -> None:
        """Set the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            value: New state (Cell or bool)

        Raises:
            OutOfBoundsError: If the coordinates are outside the grid
            ValueError: If value is not a legal cell state
            ReadOnlyGridError: If this grid is a read-only view
        """
        self._check_writable()
        index = self._index(x, y)
        self._cells[index] = to_cell(value)

    def __getitem__(self, key: Tuple[int, int]) -> Cell:
        x, y = key
        return self.get(x, y)

    def __setitem__(self, key: Tuple[int, int], value: CellValue) -> None:
        x, y = key
        self.set(x, y, value)

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._check_writable()
        self._cells.fill(Cell.DEAD)

    def copy(self) -> "Grid":
        """Return an independent copy of this grid."""
        other = Grid(self._width, self._height)
        other._cells[:] = self._cells
        return other

    def resize(self, width: int, height: Optional[int] = None) -> None:
        """Resize the grid in place.

        Cells inside both the old and new extents keep their state, newly
        exposed cells are dead and cells outside the new extents are dropped.

        Args:
            width: New number of columns
            height: New number of rows (defaults to width)

        Raises:
            ReadOnlyGridError: If this grid is a read-only view
        """
        self._check_writable()
        if height is None:
            height = width
        _check_dimensions(width, height)

        resized = np.zeros((height, width), dtype=np.uint8)
        keep_w = min(self._width, width)
        keep_h = min(self._height, height)
        resized[:keep_h, :keep_w] = self._grid_view()[:keep_h, :keep_w]

        logger.debug("Resized grid %dx%d -> %dx%d", self._width, self._height, width, height)
        self._width = int(width)
        self._height = int(height)
        self._cells = resized.reshape(-1)

    def crop(self, x0: int, y0: int, x1: int, y1: int) -> "Grid":
        """Extract the half-open window ``[x0, x1) x [y0, y1)`` as a new grid.

        Raises:
            InvalidRangeError: If x0 > x1 or y0 > y1
            OutOfBoundsError: If any bound lies outside the grid extents
        """
        if x0 > x1 or y0 > y1:
            raise InvalidRangeError(f"Invalid crop window ({x0}, {y0}) -> ({x1}, {y1})")
        if min(x0, y0) < 0 or x1 > self._width or y1 > self._height:
            raise OutOfBoundsError(
                f"Crop window ({x0}, {y0}) -> ({x1}, {y1}) exceeds "
                f"{self._width}x{self._height} grid"
            )

        cropped = Grid(x1 - x0, y1 - y0)
        cropped._grid_view()[:, :] = self._grid_view()[y0:y1, x0:x1]
        return cropped

    def merge(self, other: "Grid", x0: int, y0: int, alive_only: bool = False) -> None:
        """Overlay another grid onto this one with its origin at (x0, y0).

        Args:
            other: Grid to copy cells from
            x0: Column of this grid that receives other's column 0
            y0: Row of this grid that receives other's row 0
            alive_only: Only write cells that are alive in other, leaving
                every other covered cell untouched

        Raises:
            OutOfBoundsError: If other does not fit inside this grid
            ReadOnlyGridError: If this grid is a read-only view
        """
        self._check_writable()
        x1 = x0 + other.width
        y1 = y0 + other.height
        if min(x0, y0) < 0 or x1 > self._width or y1 > self._height:
            raise OutOfBoundsError(
                f"{other.width}x{other.height} grid placed at ({x0}, {y0}) does not fit "
                f"inside {self._width}x{self._height} grid"
            )

        region = self._grid_view()[y0:y1, x0:x1]
        source = other._grid_view()
        if alive_only:
            region[source == Cell.ALIVE] = Cell.ALIVE
        else:
            region[:, :] = source

    def rotate(self, rotation: int) -> "Grid":
        """Return a copy rotated clockwise by ``rotation * 90`` degrees.

        Any integer is accepted; negative values rotate anticlockwise. Odd
        rotations swap width and height.
        """
        quarter_turns = rotation % 4
        # np.rot90 turns anticlockwise for positive k
        rotated_cells = np.rot90(self._grid_view(), k=-quarter_turns)

        rotated = Grid(rotated_cells.shape[1], rotated_cells.shape[0])
        rotated._grid_view()[:, :] = rotated_cells
        return rotated

    def alive_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) coordinates of living cells in row-major order."""
        ys, xs = np.nonzero(self._grid_view())
        for x, y in zip(xs, ys):
            yield (int(x), int(y))

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        ys, xs = np.nonzero(self._grid_view())
        if len(xs) == 0:
            return None
        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def to_list(self) -> List[List[int]]:
        """Convert grid to a list of rows for serialization."""
        return self._grid_view().tolist()

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same size and cells."""
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height}, alive={self.count_alive()})"

    def __str__(self) -> str:
        """Bordered rendering with '#' for living and ' ' for dead cells."""
        border = "+" + "-" * self._width + "+\n"
        lines = [border]
        for row in self._grid_view():
            lines.append("|" + "".join("#" if cell else " " for cell in row) + "|\n")
        lines.append(border)
        return "".join(lines)
