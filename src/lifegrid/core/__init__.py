"""Core grid storage and simulation logic."""

from .grid import Cell, Grid
from .world import World
from .patterns import Pattern, PatternLibrary, glider, r_pentomino, light_weight_spaceship
from . import codecs

__all__ = [
    "Cell",
    "Grid",
    "World",
    "Pattern",
    "PatternLibrary",
    "glider",
    "r_pentomino",
    "light_weight_spaceship",
    "codecs",
]
