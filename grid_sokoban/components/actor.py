"""Actor component.

The player-controlled entity. ``facing`` and ``pushing`` derive from the last
resolved move; renderers read them to pick a pose.
"""

from dataclasses import dataclass

from grid_sokoban.components.position import Position
from grid_sokoban.types import Direction


@dataclass(frozen=True)
class Actor:
    """Player avatar.

    Attributes:
        position: Current cell.
        facing: Direction of the last requested move (``DOWN`` on level entry).
        pushing: True when a box sits directly ahead in ``facing``.
    """

    position: Position
    facing: Direction = Direction.DOWN
    pushing: bool = False
