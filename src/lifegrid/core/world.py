"""Conway's Game of Life simulation engine."""

from typing import Optional, Union
import logging

import numpy as np
import torch
import torch.nn.functional as F

from .grid import Cell, Grid

logger = logging.getLogger(__name__)


class World:
    """Conway's Game of Life simulation engine.

    Implements the classic rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    The world holds two equally sized grids. Each step reads only the current
    grid and writes only the scratch grid, then the two are swapped.
    """

    _KERNEL = torch.tensor(
        [[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32
    ).unsqueeze(0).unsqueeze(0)

    def __init__(self, width: Union[int, Grid] = 0, height: Optional[int] = None) -> None:
        """Initialize the world.

        Args:
            width: Number of columns, or a Grid to copy as the initial state
            height: Number of rows (defaults to width for a square world)
        """
        if isinstance(width, Grid):
            if height is not None:
                raise TypeError("height cannot be given together with an initial grid")
            self._current = width.copy()
        else:
            self._current = Grid(width, height)
        self._scratch = Grid(self._current.width, self._current.height)
        self._make_views()
        self._generation = 0

    def _make_views(self) -> None:
        # One read-only view per buffer, swapped together with the buffers
        self._current_view = self._current.read_only_view()
        self._scratch_view = self._scratch.read_only_view()

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._current.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._current.height

    @property
    def total_cells(self) -> int:
        """Number of cells (width * height)."""
        return self._current.total_cells

    @property
    def generation(self) -> int:
        """Number of steps applied since the world was created."""
        return self._generation

    def count_alive(self) -> int:
        """Get the number of living cells in the current generation."""
        return self._current.count_alive()

    def count_dead(self) -> int:
        """Get the number of dead cells in the current generation."""
        return self._current.count_dead()

    def get_state(self) -> Grid:
        """Get an immutable view of the current grid.

        The view shares the world's buffer, so it is only valid until the next
        step or resize; use ``get_state().copy()`` to keep a snapshot. Mutating
        the view raises ReadOnlyGridError.
        """
        return self._current_view

    def resize(self, width: int, height: Optional[int] = None) -> None:
        """Resize the world, keeping the current state where it still fits.

        Args:
            width: New number of columns
            height: New number of rows (defaults to width)
        """
        self._current.resize(width, height)
        self._scratch = Grid(self._current.width, self._current.height)
        self._make_views()

    def count_neighbours(self, x: int, y: int, toroidal: bool = False) -> int:
        """Count living neighbours of a cell in the current grid.

        Args:
            x: Column coordinate
            y: Row coordinate
            toroidal: Whether neighbours wrap around the grid edges

        Returns:
            Number of living neighbours (0-8)

        Raises:
            OutOfBoundsError: If (x, y) is not a cell of the grid
        """
        # validates (x, y)
        self._current.get(x, y)

        width, height = self._current.width, self._current.height
        count = 0
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy

                if toroidal:
                    nx = nx % width
                    ny = ny % height
                elif not (0 <= nx < width and 0 <= ny < height):
                    continue

                if self._current.get(nx, ny) == Cell.ALIVE:
                    count += 1

        return count

    def count_all_neighbours(self, toroidal: bool = False) -> np.ndarray:
        """Count neighbours for all cells using a PyTorch convolution.

        Args:
            toroidal: Whether neighbours wrap around the grid edges

        Returns:
            Array of shape (height, width) with the neighbour count of each cell
        """
        height, width = self._current.height, self._current.width
        if width == 0 or height == 0:
            return np.zeros((height, width), dtype=np.int8)

        cells = torch.from_numpy(self._current.cells.astype(np.float32)).reshape(1, 1, height, width)

        if toroidal:
            padded = F.pad(cells, (1, 1, 1, 1), mode="circular")
            neighbours = F.conv2d(padded, self._KERNEL)
        else:
            neighbours = F.conv2d(cells, self._KERNEL, padding=1)

        return neighbours[0, 0].numpy().astype(np.int8)

    def step(self, toroidal: bool = False) -> None:
        """Advance the simulation by one generation.

        Args:
            toroidal: Whether the grid edges wrap around
        """
        neighbour_counts = self.count_all_neighbours(toroidal)
        alive = self._current.cells == Cell.ALIVE

        # Birth on exactly 3, survival on 2 or 3
        next_state = (neighbour_counts == 3) | (alive & (neighbour_counts == 2))
        self._scratch._grid_view()[:, :] = next_state

        self._current, self._scratch = self._scratch, self._current
        self._current_view, self._scratch_view = self._scratch_view, self._current_view
        self._scratch.clear()
        self._generation += 1

    def advance(self, steps: int, toroidal: bool = False) -> None:
        """Apply ``steps`` generations in sequence.

        Args:
            steps: Number of generations to run (0 does nothing)
            toroidal: Whether the grid edges wrap around
        """
        if steps < 0:
            raise ValueError(f"Cannot advance a negative number of steps: {steps}")

        logger.debug("Advancing %dx%d world by %d steps (toroidal: %s)", self.width, self.height, steps, toroidal)
        for _ in range(steps):
            self.step(toroidal)

    def __repr__(self) -> str:
        return f"World(width={self.width}, height={self.height}, generation={self._generation})"

    def __str__(self) -> str:
        return str(self._current)
