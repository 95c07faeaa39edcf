"""Tests for the Grid class."""

import pytest
from lifegrid.core.errors import InvalidRangeError, OutOfBoundsError, ReadOnlyGridError
from lifegrid.core.grid import Cell, Grid


def make_grid(rows):
    """Build a grid from strings of '#' and '.' characters."""
    return Grid.from_list([[char == "#" for char in row] for row in rows])


class TestGrid:
    """Test cases for the Grid class."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid(10, 20)
        assert grid.width == 10
        assert grid.height == 20
        assert grid.shape == (10, 20)
        assert grid.total_cells == 200
        assert grid.count_alive() == 0
        assert grid.count_dead() == 200

    def test_square_and_empty_initialization(self):
        """Test square and zero-sized grids."""
        assert Grid(4).shape == (4, 4)
        assert Grid().shape == (0, 0)
        assert Grid(0, 7).total_cells == 0

    def test_negative_dimensions(self):
        """Test that negative sizes are rejected."""
        with pytest.raises(ValueError):
            Grid(-1, 3)

    def test_cell_operations(self):
        """Test basic cell get/set operations."""
        grid = Grid(5, 4)

        assert grid.get(0, 0) is Cell.DEAD

        grid.set(1, 1, Cell.ALIVE)
        grid.set(4, 3, True)

        assert grid.get(1, 1) is Cell.ALIVE
        assert grid.get(4, 3) is Cell.ALIVE
        assert grid.count_alive() == 2
        assert grid.count_dead() == 18

        grid.set(1, 1, Cell.DEAD)
        assert grid.get(1, 1) is Cell.DEAD

    def test_write_read_consistency(self):
        """Every valid cell reads back what was just written to it."""
        grid = Grid(3, 2)
        for y in range(grid.height):
            for x in range(grid.width):
                for value in (Cell.ALIVE, Cell.DEAD, Cell.ALIVE):
                    grid.set(x, y, value)
                    assert grid.get(x, y) == value

    def test_row_major_layout(self):
        """Test that (x, y) is stored at index x + width * y."""
        grid = Grid(4, 3)
        grid.set(3, 1, Cell.ALIVE)
        assert grid.cells[1, 3] == 1
        assert grid.to_list()[1] == [0, 0, 0, 1]

    def test_indexing(self):
        """Test subscript access shares the get/set contract."""
        grid = Grid(3, 3)
        grid[2, 1] = Cell.ALIVE
        assert grid[2, 1] is Cell.ALIVE
        assert grid.get(2, 1) is Cell.ALIVE

        with pytest.raises(OutOfBoundsError):
            grid[3, 0]
        with pytest.raises(OutOfBoundsError):
            grid[0, -1] = Cell.ALIVE

    def test_invalid_cell_value(self):
        """Test that only the two cell states can be stored."""
        grid = Grid(2, 2)
        with pytest.raises(ValueError):
            grid.set(0, 0, 2)
        with pytest.raises(ValueError):
            grid.set(0, 0, "#")

    def test_out_of_bounds(self):
        """Test that coordinates are never wrapped or clamped."""
        grid = Grid(3, 3)

        for x, y in [(-1, 0), (0, -1), (3, 0), (0, 3)]:
            with pytest.raises(OutOfBoundsError):
                grid.set(x, y, Cell.ALIVE)
            with pytest.raises(OutOfBoundsError):
                grid.get(x, y)

        # OutOfBoundsError is still an IndexError
        with pytest.raises(IndexError):
            grid.get(5, 5)
        assert grid.count_alive() == 0

    def test_clear_and_copy(self):
        """Test clearing and copying grids."""
        grid = make_grid(["#.", ".#"])
        copy = grid.copy()
        grid.clear()

        assert grid.count_alive() == 0
        assert copy.count_alive() == 2
        assert copy.get(1, 1) is Cell.ALIVE

    def test_cells_view_is_read_only(self):
        """Test that the cells view cannot be used to mutate the grid."""
        grid = Grid(2, 2)
        with pytest.raises(ValueError):
            grid.cells[0, 0] = 1


class TestResize:
    """Test cases for resizing grids."""

    def test_grow_preserves_cells(self):
        """Test growing keeps existing cells and adds dead ones."""
        grid = make_grid(["#.", ".#"])
        grid.resize(4, 3)

        assert grid.shape == (4, 3)
        assert grid.get(0, 0) is Cell.ALIVE
        assert grid.get(1, 1) is Cell.ALIVE
        assert grid.count_alive() == 2

    def test_shrink_discards_cells(self):
        """Test shrinking drops cells outside the new extent."""
        grid = make_grid(["#..", "...", "..#"])
        grid.resize(2)

        assert grid.shape == (2, 2)
        assert grid.get(0, 0) is Cell.ALIVE
        assert grid.count_alive() == 1

    def test_resize_round_trip(self):
        """Shrinking then restoring keeps only the overlap."""
        grid = make_grid(["#.#", ".#.", "#.#"])
        grid.resize(2, 2)
        grid.resize(3, 3)

        assert grid == make_grid(["#..", ".#.", "..."])

    def test_resize_to_zero(self):
        """Test resizing to an empty grid and back."""
        grid = make_grid(["##"])
        grid.resize(0, 0)
        assert grid.total_cells == 0
        grid.resize(2, 1)
        assert grid.count_alive() == 0


class TestCrop:
    """Test cases for cropping grids."""

    def test_crop_window(self):
        """Test cropping a half-open window."""
        grid = make_grid(["....", ".##.", ".#..", "...."])
        cropped = grid.crop(1, 1, 3, 3)

        assert cropped.shape == (2, 2)
        assert cropped == make_grid(["##", "#."])

    def test_crop_full_extent_is_identity(self):
        """Cropping the whole grid returns an equal, independent grid."""
        grid = make_grid(["#..", ".##"])
        cropped = grid.crop(0, 0, grid.width, grid.height)

        assert cropped == grid
        cropped.set(0, 0, Cell.DEAD)
        assert grid.get(0, 0) is Cell.ALIVE

    def test_crop_empty_window(self):
        """Test a zero-area crop."""
        grid = Grid(3, 3)
        assert grid.crop(1, 1, 1, 3).shape == (0, 2)

    def test_crop_invalid_range(self):
        """Test start after end is rejected."""
        grid = Grid(5, 5)
        with pytest.raises(InvalidRangeError):
            grid.crop(3, 0, 2, 5)
        with pytest.raises(InvalidRangeError):
            grid.crop(0, 4, 5, 1)

    def test_crop_out_of_bounds(self):
        """Test windows extending past the grid are rejected."""
        grid = Grid(5, 5)
        with pytest.raises(OutOfBoundsError):
            grid.crop(0, 0, 6, 5)
        with pytest.raises(OutOfBoundsError):
            grid.crop(0, 0, 5, 6)
        with pytest.raises(OutOfBoundsError):
            grid.crop(-1, 0, 2, 2)


class TestMerge:
    """Test cases for merging grids."""

    def test_merge_overwrites_region(self):
        """Test a full merge copies dead cells too."""
        grid = make_grid(["###", "###", "###"])
        grid.merge(make_grid(["#.", ".#"]), 1, 1)

        assert grid == make_grid(["###", "##.", "#.#"])

    def test_merge_alive_only(self):
        """Test alive-only merge leaves covered cells alone where other is dead."""
        grid = make_grid(["#...", "....", "...#"])
        grid.merge(make_grid(["..", ".#"]), 2, 1, alive_only=True)

        assert grid == make_grid(["#...", "....", "...#"])

        grid.merge(make_grid(["#.", ".."]), 0, 0, alive_only=True)
        assert grid.get(0, 0) is Cell.ALIVE

    def test_merge_alive_only_never_kills(self):
        """Covered cells that were alive stay alive after an alive-only merge."""
        grid = make_grid(["##", "##"])
        grid.merge(Grid(2, 2), 0, 0, alive_only=True)
        assert grid.count_alive() == 4

        grid.merge(Grid(2, 2), 0, 0)
        assert grid.count_alive() == 0

    def test_merge_out_of_bounds(self):
        """Test a placement that does not fit fails without writing."""
        grid = Grid(3, 3)
        with pytest.raises(OutOfBoundsError):
            grid.merge(make_grid(["##", "##"]), 2, 0)
        with pytest.raises(OutOfBoundsError):
            grid.merge(make_grid(["#"]), -1, 0)
        assert grid.count_alive() == 0


class TestRotate:
    """Test cases for rotating grids."""

    def test_rotate_clockwise(self):
        """Test a quarter turn clockwise."""
        grid = make_grid(["##.", "..."])
        rotated = grid.rotate(1)

        assert rotated.shape == (2, 3)
        assert rotated == make_grid([".#", ".#", ".."])

    def test_rotate_half_turn(self):
        """Test a half turn keeps the dimensions."""
        grid = make_grid(["##.", "..."])
        assert grid.rotate(2) == make_grid(["...", ".##"])

    def test_rotate_anticlockwise(self):
        """Test negative rotations match their positive equivalents."""
        grid = make_grid(["##.", "..#"])
        assert grid.rotate(-1) == grid.rotate(3)
        assert grid.rotate(-2) == grid.rotate(2)
        assert grid.rotate(-3) == grid.rotate(1)
        assert grid.rotate(3) == make_grid([".#", "#.", "#."])

    def test_rotate_identities(self):
        """Test multiples of four turns are the identity."""
        grid = make_grid(["#..#", ".#..", "...."])
        assert grid.rotate(0) == grid
        assert grid.rotate(4) == grid
        assert grid.rotate(-8) == grid
        for n in range(-5, 6):
            assert grid.rotate(n) == grid.rotate(n + 4)

    def test_four_quarter_turns(self):
        """Test four successive quarter turns restore the grid."""
        grid = make_grid(["#..", "##.", "..."])
        assert grid.rotate(1).rotate(1).rotate(1).rotate(1) == grid

    def test_rotate_huge_argument(self):
        """Test very large rotations are reduced rather than looped."""
        grid = make_grid(["#.", ".."])
        assert grid.rotate(10**18 + 1) == grid.rotate(1)
        assert grid.rotate(-(10**18) - 1) == grid.rotate(3)

    def test_rotate_swaps_dimensions(self):
        """Test odd rotations swap width and height."""
        grid = Grid(5, 2)
        assert grid.rotate(1).shape == (2, 5)
        assert grid.rotate(3).shape == (2, 5)
        assert grid.rotate(2).shape == (5, 2)

    def test_rotate_does_not_mutate(self):
        """Test the source grid is left unchanged."""
        grid = make_grid(["##.", "..."])
        rotated = grid.rotate(1)
        rotated.set(0, 0, Cell.ALIVE)
        assert grid == make_grid(["##.", "..."])


class TestGridHelpers:
    """Test cases for equality, rendering and helpers."""

    def test_get_bounding_box(self):
        """Test bounding box calculation."""
        grid = Grid(10, 10)
        assert grid.get_bounding_box() is None

        grid.set(5, 3, Cell.ALIVE)
        assert grid.get_bounding_box() == (5, 3, 5, 3)

        grid.set(2, 1, Cell.ALIVE)
        grid.set(7, 8, Cell.ALIVE)
        assert grid.get_bounding_box() == (2, 1, 7, 8)

    def test_alive_cells(self):
        """Test living coordinates are reported in row-major order."""
        grid = make_grid([".#", "#."])
        assert list(grid.alive_cells()) == [(1, 0), (0, 1)]

    def test_from_list_ragged(self):
        """Test ragged rows are rejected."""
        with pytest.raises(ValueError):
            Grid.from_list([[1, 0], [1]])

    def test_equality(self):
        """Test grid equality comparison."""
        grid1 = Grid(3, 3)
        grid2 = Grid(3, 3)
        assert grid1 == grid2

        grid1.set(1, 1, Cell.ALIVE)
        assert grid1 != grid2
        grid2.set(1, 1, Cell.ALIVE)
        assert grid1 == grid2

        assert Grid(3, 3) != Grid(4, 4)
        assert Grid(2, 3) != Grid(3, 2)
        assert grid1 != "not a grid"

    def test_string_representation(self):
        """Test bordered string rendering."""
        grid = make_grid(["#..", ".#."])
        expected = "+---+\n|#  |\n| # |\n+---+\n"
        assert str(grid) == expected

    def test_string_representation_empty(self):
        """Test rendering a zero-sized grid."""
        assert str(Grid(0, 0)) == "++\n++\n"
        assert str(Grid(2, 0)) == "+--+\n+--+\n"


class TestReadOnlyView:
    """Test cases for read-only grid views."""

    def test_view_shares_cells(self):
        """Test the view reflects later writes to the source grid."""
        grid = make_grid(["#.", ".."])
        view = grid.read_only_view()

        assert view.read_only
        assert not grid.read_only
        assert view == grid

        grid.set(1, 1, Cell.ALIVE)
        assert view.get(1, 1) is Cell.ALIVE
        assert view.count_alive() == 2

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda g: g.set(0, 0, Cell.DEAD),
            lambda g: g.__setitem__((1, 1), Cell.ALIVE),
            lambda g: g.clear(),
            lambda g: g.resize(1, 1),
            lambda g: g.merge(Grid(1, 1), 0, 0),
        ],
    )
    def test_view_rejects_mutation(self, mutate):
        """Test every mutator raises and leaves the source grid untouched."""
        grid = make_grid(["#.", ".."])
        view = grid.read_only_view()

        with pytest.raises(ReadOnlyGridError):
            mutate(view)

        assert grid == make_grid(["#.", ".."])
        assert view.shape == (2, 2)

    def test_read_only_error_is_type_error(self):
        """Test ReadOnlyGridError can be caught as TypeError."""
        with pytest.raises(TypeError):
            Grid(1, 1).read_only_view().set(0, 0, Cell.ALIVE)

    def test_view_cells_not_writable(self):
        """Test the numpy buffer behind a view is write-protected."""
        view = Grid(2, 2).read_only_view()
        with pytest.raises(ValueError):
            view.cells[0, 0] = 1

    def test_copy_of_view_is_writable(self):
        """Test copying a view gives an independent writable grid."""
        grid = make_grid(["#.", ".."])
        snapshot = grid.read_only_view().copy()

        assert not snapshot.read_only
        snapshot.set(1, 1, Cell.ALIVE)
        assert grid.get(1, 1) is Cell.DEAD

    def test_derived_grids_are_writable(self):
        """Test crop and rotate of a view return ordinary grids."""
        view = make_grid(["#.", ".#"]).read_only_view()

        cropped = view.crop(0, 0, 1, 2)
        rotated = view.rotate(1)
        cropped.set(0, 1, Cell.ALIVE)
        rotated.clear()

        assert cropped.count_alive() == 2
        assert rotated.count_alive() == 0
