#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import Grid, World
from lifegrid.core import codecs, glider


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Place a glider in the corner of a larger grid
    grid = Grid(12, 12)
    grid.merge(glider(), 1, 1)
    world = World(grid)

    print("Initial state:")
    print(world.get_state(), end="")
    print(f"Population: {world.count_alive()}")
    print()

    # Run the glider round the torus for a few generations
    for _ in range(8):
        world.step(toroidal=True)
        print(f"Generation {world.generation}:")
        print(world.get_state(), end="")
        print(f"Population: {world.count_alive()}")
        print()

    # Rotate the result and save it in both formats
    rotated = world.get_state().rotate(1)
    codecs.save_ascii("glider.txt", rotated)
    codecs.save_binary("glider.bin", rotated)
    print("Saved rotated grid to glider.txt and glider.bin")


if __name__ == "__main__":
    main()
