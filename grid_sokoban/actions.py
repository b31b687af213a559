"""Action enumerations.

Defines the human readable :class:`Action` (string enum) consumed by
:func:`grid_sokoban.step.step` and a stable integer :class:`GymAction` mapping
for Gymnasium compatibility.

``MOVE_ACTIONS`` is the canonical ordered list of movement actions; checks like
``if action in MOVE_ACTIONS`` are preferred over enum name comparisons.
"""

from enum import IntEnum, StrEnum, auto
from typing import Dict

from grid_sokoban.types import Direction


class Action(StrEnum):
    """String enum of player inputs.

    Members:
        UP, DOWN, LEFT, RIGHT: Movement directions.
        UNDO: Revert the last legal move of the current attempt.
        RESET: Restart the current level from its initial layout.
        PREVIOUS_LEVEL, NEXT_LEVEL: Jump to a neighbouring level (clamped).
        ADVANCE: Continue to the next level after solving the current one.
        NOOP: Unrecognized input; leaves the state untouched.
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    UNDO = auto()
    RESET = auto()
    PREVIOUS_LEVEL = auto()
    NEXT_LEVEL = auto()
    ADVANCE = auto()
    NOOP = auto()


MOVE_ACTIONS = [Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT]

ACTION_TO_DIRECTION: Dict[Action, Direction] = {
    Action.UP: Direction.UP,
    Action.DOWN: Direction.DOWN,
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
}


class GymAction(IntEnum):
    """Stable integer mapping for integration with Gymnasium ``Discrete`` spaces."""

    UP = 0  # start at 0 for explicitness
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    UNDO = auto()
    RESET = auto()
    PREVIOUS_LEVEL = auto()
    NEXT_LEVEL = auto()
    ADVANCE = auto()
    NOOP = auto()


def from_gym_action(action: int) -> Action:
    """Translate an integer action index into an :class:`Action`."""
    try:
        return Action[GymAction(int(action)).name]
    except ValueError:
        raise ValueError(f"Invalid action: {action}") from None
