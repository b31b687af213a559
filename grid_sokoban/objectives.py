"""Win condition predicate and play phase.

A level is solved when the box positions and the target positions form the
same set. Checks are O(number of boxes).
"""

from enum import StrEnum, auto

from grid_sokoban.state import GameState


class Phase(StrEnum):
    PLAYING = auto()
    SOLVED = auto()


def is_solved(state: GameState) -> bool:
    """Every box is on a target and every target holds a box."""
    return len(state.boxes) == len(state.targets) and all(
        pos in state.targets for pos in state.boxes
    )


def phase(state: GameState) -> Phase:
    return Phase.SOLVED if is_solved(state) else Phase.PLAYING
