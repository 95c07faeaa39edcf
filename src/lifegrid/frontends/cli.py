"""Command-line interface for running Game of Life simulations on grid files."""

import argparse
import logging
import sys
import time
from typing import Any, Dict, Optional, Sequence, Tuple

from ..core import codecs
from ..core.errors import LifeGridError
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.world import World


class CLISimulation:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self) -> None:
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def load_initial_grid(self, input_path: Optional[str] = None, pattern: Optional[str] = None) -> Grid:
        """Load the starting grid from a file or the pattern library.

        Args:
            input_path: Ascii or binary grid file
            pattern: Name of a library pattern, used when no file is given

        Raises:
            ValueError: If neither source is usable
        """
        if input_path:
            return codecs.load(input_path)

        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise ValueError(f"Pattern '{pattern}' not found")
            return loaded_pattern.to_grid()

        raise ValueError("An input file or a pattern is required")

    def run_simulation(
        self,
        input_path: Optional[str] = None,
        pattern: Optional[str] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        offset_x: Optional[int] = None,
        offset_y: Optional[int] = None,
        generations: int = 1,
        toroidal: bool = False,
        rotate: int = 0,
        crop: Optional[Sequence[int]] = None,
        output: Optional[str] = None,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[Grid, Dict[str, Any]]:
        """Run a Game of Life simulation.

        Args:
            input_path: Grid file holding the initial state
            pattern: Library pattern to start from when no file is given
            width: World width (defaults to the initial grid width)
            height: World height (defaults to the initial grid height)
            offset_x: Column receiving the initial grid (default: centred)
            offset_y: Row receiving the initial grid (default: centred)
            generations: Number of generations to simulate
            toroidal: Whether grid edges wrap around
            rotate: Quarter turns clockwise applied to the initial grid
            crop: Optional (x0, y0, x1, y1) window of the final grid to keep
            output: Optional path to save the final grid to
            verbose: Print progress updates
            show_grid: Show initial and final grid states

        Returns:
            Tuple of (final_grid, statistics)
        """
        initial = self.load_initial_grid(input_path, pattern)
        if rotate % 4:
            initial = initial.rotate(rotate)
            if verbose:
                print(f"Rotated initial grid by {(rotate % 4) * 90} degrees")

        world_width = initial.width if width is None else width
        world_height = initial.height if height is None else height
        if offset_x is None:
            offset_x = max(0, (world_width - initial.width) // 2)
        if offset_y is None:
            offset_y = max(0, (world_height - initial.height) // 2)

        if verbose:
            print(f"Initializing {world_width}x{world_height} world (toroidal: {toroidal})")
            print(f"Placing {initial.width}x{initial.height} grid at ({offset_x}, {offset_y})")

        placed = Grid(world_width, world_height)
        placed.merge(initial, offset_x, offset_y)
        world = World(placed)

        initial_population = world.count_alive()
        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(world.get_state()), end="")

        start_time = time.time()
        world.advance(generations, toroidal)
        duration = time.time() - start_time

        final = world.get_state()
        if crop is not None:
            final = final.crop(*crop)
        else:
            final = final.copy()

        if show_grid:
            print(f"\nFinal grid (generation {world.generation}):")
            print(self._format_grid(final), end="")

        if output:
            codecs.save(output, final)
            if verbose:
                print(f"Saved final grid to {output}")

        stats = {
            "generation": world.generation,
            "grid_size": (world.width, world.height),
            "initial_population": initial_population,
            "population": world.count_alive(),
            "population_density": world.count_alive() / world.total_cells if world.total_cells else 0.0,
            "bounding_box": world.get_state().get_bounding_box(),
            "duration_seconds": duration,
            "generations_per_second": generations / duration if duration > 0 else 0,
        }
        return final, stats

    def _format_grid(self, grid: Grid, max_size: int = 80) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})\n"

        return str(grid)

    def list_patterns(self) -> None:
        """List available patterns."""
        print("Available patterns:")
        for name in self.pattern_library.list_patterns():
            pattern = self.pattern_library.get_pattern(name)
            width, height = pattern.get_size()
            print(f"  {name} ({width}x{height}): {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="lifegrid",
        description="Conway's Game of Life on ascii and binary grid files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Step a grid file once and print the result
  lifegrid world.txt --show

  # Run a glider for 40 generations on a 20x20 torus and save it
  lifegrid --pattern Glider -W 20 -H 20 -g 40 --toroidal -o glider.bin

  # Rotate the initial state a quarter turn anticlockwise before running
  lifegrid world.bin --rotate -1 -g 10 --show

  # List available patterns
  lifegrid --list-patterns
        """,
    )

    parser.add_argument("input", nargs="?", help="Initial grid file (.bin for binary, ascii otherwise)")

    parser.add_argument(
        "-p",
        "--pattern",
        type=str,
        help="Start from a library pattern instead of a file",
    )

    parser.add_argument("-W", "--width", type=int, help="World width (default: initial grid width)")

    parser.add_argument("-H", "--height", type=int, help="World height (default: initial grid height)")

    parser.add_argument(
        "--offset-x",
        type=int,
        help="X offset for placing the initial grid (default: centred)",
    )

    parser.add_argument(
        "--offset-y",
        type=int,
        help="Y offset for placing the initial grid (default: centred)",
    )

    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=1,
        help="Number of generations to simulate (default: 1)",
    )

    parser.add_argument(
        "-t",
        "--toroidal",
        action="store_true",
        help="Enable toroidal (wraparound) edges",
    )

    parser.add_argument(
        "-r",
        "--rotate",
        type=int,
        default=0,
        help="Rotate the initial grid clockwise by N quarter turns (negative for anticlockwise)",
    )

    parser.add_argument(
        "--crop",
        type=int,
        nargs=4,
        metavar=("X0", "Y0", "X1", "Y1"),
        help="Keep only the window [X0,X1) x [Y0,Y1) of the final grid",
    )

    parser.add_argument("-o", "--output", type=str, help="Save the final grid to this file")

    parser.add_argument(
        "-s",
        "--show",
        action="store_true",
        help="Display initial and final grid states",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if not args.input and not args.pattern:
        errors.append("An input file or --pattern is required")

    if args.input and args.pattern:
        errors.append("Give either an input file or --pattern, not both")

    if args.width is not None and args.width <= 0:
        errors.append("Width must be positive")

    if args.height is not None and args.height <= 0:
        errors.append("Height must be positive")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.offset_x is not None and args.offset_x < 0:
        errors.append("X offset must be non-negative")

    if args.offset_y is not None and args.offset_y < 0:
        errors.append("Y offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def print_results(stats: Dict[str, Any], verbose: bool) -> None:
    """Print simulation results.

    Args:
        stats: Statistics dictionary from run_simulation
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {stats['generation']} generations")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        bbox = stats["bounding_box"]
        if bbox:
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]})")
    else:
        print(
            "Population: {} → {}, "
            "Duration: {:.3f}s".format(stats["initial_population"], stats["population"], stats["duration_seconds"])
        )


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    cli = CLISimulation()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        return 1

    try:
        _, stats = cli.run_simulation(
            input_path=args.input,
            pattern=args.pattern,
            width=args.width,
            height=args.height,
            offset_x=args.offset_x,
            offset_y=args.offset_y,
            generations=args.generations,
            toroidal=args.toroidal,
            rotate=args.rotate,
            crop=args.crop,
            output=args.output,
            verbose=args.verbose,
            show_grid=args.show,
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except LifeGridError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    print_results(stats, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
