"""Level catalog.

The ordered, read-only collection of playable mazes. It is built once at
startup and handed to the state machine; game states reference levels by
index only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from pyrsistent import PVector, pvector

from grid_sokoban.levels.maze import Maze
from grid_sokoban.types import LevelIndex


@dataclass(frozen=True)
class LevelCatalog:
    """Indexed sequence of :class:`Maze` values (``0..N-1``)."""

    mazes: PVector[Maze] = pvector()

    @classmethod
    def of(cls, mazes: Iterable[Maze]) -> "LevelCatalog":
        return cls(pvector(mazes))

    def __len__(self) -> int:
        return len(self.mazes)

    def __iter__(self) -> Iterator[Maze]:
        return iter(self.mazes)

    def __getitem__(self, level: LevelIndex) -> Maze:
        return self.mazes[level]

    def clamp(self, level: LevelIndex) -> LevelIndex:
        """Clamp ``level`` into ``[0, len(self) - 1]``.

        An empty catalog clamps everything to ``0``.
        """
        return max(0, min(level, len(self.mazes) - 1))
