"""Level definitions: immutable mazes, the text loader and the catalog."""

from .catalog import LevelCatalog
from .loader import (
    LevelLimits,
    LevelLoadError,
    load_levels,
    parse_levels,
    parse_maze,
    split_by,
    split_lines,
)
from .maze import Cell, Maze

__all__ = [
    "Cell",
    "LevelCatalog",
    "LevelLimits",
    "LevelLoadError",
    "Maze",
    "load_levels",
    "parse_levels",
    "parse_maze",
    "split_by",
    "split_lines",
]
