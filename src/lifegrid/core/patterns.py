"""Common Conway's Game of Life patterns and pattern management."""

from typing import Dict, List, Optional, Tuple

from .grid import Cell, Grid


def _grid_of(width: int, height: int, cells: List[Tuple[int, int]]) -> Grid:
    grid = Grid(width, height)
    for x, y in cells:
        grid.set(x, y, Cell.ALIVE)
    return grid


def glider() -> Grid:
    """3x3 grid holding a glider heading towards (+x, +y)."""
    return _grid_of(3, 3, [(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])


def r_pentomino() -> Grid:
    """3x3 grid holding the R-pentomino methuselah."""
    return _grid_of(3, 3, [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)])


def light_weight_spaceship() -> Grid:
    """5x4 grid holding a lightweight spaceship heading towards -x."""
    return _grid_of(
        5,
        4,
        [(1, 0), (4, 0), (0, 1), (0, 2), (4, 2), (0, 3), (1, 3), (2, 3), (3, 3)],
    )


class Pattern:
    """Represents a Game of Life pattern."""

    def __init__(
        self,
        name: str,
        cells: List[Tuple[int, int]],
        description: str = "",
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
        """
        self.name = name
        self.cells = list(cells)
        self.description = description

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (width, height)."""
        if not self.cells:
            return (0, 0)
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates normalized to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description)

        min_x, min_y, _, _ = self.get_bounding_box()
        normalized_cells = [(x - min_x, y - min_y) for x, y in self.cells]

        return Pattern(self.name, normalized_cells, self.description)

    def to_grid(self) -> Grid:
        """Render the pattern into a grid the size of its bounding box."""
        width, height = self.get_size()
        return _grid_of(width, height, self.normalize().cells)

    def apply_to_grid(self, grid: Grid, offset_x: int = 0, offset_y: int = 0) -> None:
        """Draw this pattern onto a grid, leaving existing living cells alone.

        Args:
            grid: Target grid
            offset_x: Column receiving the pattern's left edge
            offset_y: Row receiving the pattern's top edge

        Raises:
            OutOfBoundsError: If the pattern does not fit at the given offset
        """
        grid.merge(self.to_grid(), offset_x, offset_y, alive_only=True)

    @classmethod
    def from_grid(cls, grid: Grid, name: str, description: str = "") -> "Pattern":
        """Create a pattern from the living cells of a grid."""
        return cls(name, list(grid.alive_cells()), description)


class PatternLibrary:
    """Manages a collection of named patterns."""

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        self.add_pattern(Pattern.from_grid(glider(), "Glider", "Smallest spaceship, period-4"))
        self.add_pattern(
            Pattern.from_grid(
                r_pentomino(),
                "R-pentomino",
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )
        self.add_pattern(
            Pattern.from_grid(
                light_weight_spaceship(),
                "Lightweight Spaceship",
                "LWSS - Period-4 spaceship",
            )
        )
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(Pattern("Blinker", [(0, 1), (1, 1), (2, 1)], "Period-2 oscillator"))

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name.lower()] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, ignoring case.

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name.lower())

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return [pattern.name for pattern in self._patterns.values()]
