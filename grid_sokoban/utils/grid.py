"""Grid occupancy helpers.

Pure predicates used by the move resolver. Cells outside the maze rectangle
count as walls so neither the actor nor a box can leave the grid.
"""

from typing import Optional

from grid_sokoban.components import Position
from grid_sokoban.state import GameState


def is_in_bounds(state: GameState, pos: Position) -> bool:
    """Return True if ``pos`` lies within the level rectangle."""
    return 0 <= pos.x < state.width and 0 <= pos.y < state.height


def is_wall_at(state: GameState, pos: Position) -> bool:
    """Return True if ``pos`` is a wall or off the grid."""
    return pos in state.walls or not is_in_bounds(state, pos)


def box_index_at(state: GameState, pos: Position) -> Optional[int]:
    """Index of the box at ``pos`` in ``state.boxes``, or ``None``."""
    try:
        return state.boxes.index(pos)
    except ValueError:
        return None


def is_box_at(state: GameState, pos: Position) -> bool:
    return box_index_at(state, pos) is not None


def is_blocked_for_box(state: GameState, pos: Position) -> bool:
    """Return True if a box cannot be pushed into ``pos``."""
    return is_wall_at(state, pos) or is_box_at(state, pos)
