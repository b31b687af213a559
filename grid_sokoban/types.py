"""Common type aliases and enumerations.

``Direction`` carries the unit delta used for every grid step; ``CellType``
names the logical contents a maze symbol can decode to.
"""

from enum import Enum, StrEnum, auto


class Direction(Enum):
    """Cardinal movement directions as ``(dx, dy)`` unit vectors.

    ``y`` grows downward, so ``UP`` decrements the line index.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class CellType(StrEnum):
    """Logical cell kinds; a single maze symbol may decode to two of these."""

    WALL = auto()
    TARGET = auto()
    ACTOR = auto()
    BOX = auto()


LevelIndex = int
