"""Position component.

Immutable integer grid coordinates shared by walls, targets, boxes and the
actor.
"""

from dataclasses import dataclass

from grid_sokoban.types import Direction


@dataclass(frozen=True)
class Position:
    """Grid coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Line index (0 at top).
    """

    x: int
    y: int

    def __add__(self, direction: Direction) -> "Position":
        return Position(self.x + direction.dx, self.y + direction.dy)
