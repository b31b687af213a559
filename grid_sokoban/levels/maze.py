"""Immutable maze (level definition) representation.

A :class:`Maze` is produced once by the loader and never mutated. Each occupied
position maps to a *set* of :class:`~grid_sokoban.types.CellType` so combined
symbols (actor on target, box on target) keep both meanings without storing
the same position twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from pyrsistent import PMap, PSet, pmap

from grid_sokoban.components import Position
from grid_sokoban.types import CellType


@dataclass(frozen=True)
class Cell:
    """A single logical cell: one type at one position."""

    position: Position
    type: CellType


@dataclass(frozen=True)
class Maze:
    """Level definition.

    Attributes:
        width (int): Length of the longest source line.
        height (int): Number of source lines.
        layout (PMap[Position, PSet[CellType]]): Cell types present at each
            non-empty position.
    """

    width: int
    height: int
    layout: PMap[Position, PSet[CellType]] = pmap()

    def cells(self) -> Iterator[Cell]:
        """Yield every logical cell in line-major order.

        Positions holding two types yield two cells, in ``CellType`` declaration
        order.
        """
        for pos in sorted(self.layout, key=lambda p: (p.y, p.x)):
            types = self.layout[pos]
            for cell_type in CellType:
                if cell_type in types:
                    yield Cell(pos, cell_type)

    def positions_of_type(self, cell_type: CellType) -> List[Position]:
        """Positions holding ``cell_type`` in line-major order."""
        return [cell.position for cell in self.cells() if cell.type == cell_type]

    def position_of_type(self, cell_type: CellType) -> Position:
        """First position holding ``cell_type``.

        Raises:
            ValueError: If the maze has no cell of that type.
        """
        for cell in self.cells():
            if cell.type == cell_type:
                return cell.position
        raise ValueError(f"Maze has no {cell_type} cell")

    def count_of_type(self, cell_type: CellType) -> int:
        return sum(1 for types in self.layout.values() if cell_type in types)
