"""User interface frontends for lifegrid."""

from .cli import CLISimulation

__all__ = ["CLISimulation"]
