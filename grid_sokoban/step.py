"""Game state machine.

Pure transitions over :class:`~grid_sokoban.state.GameState`. The caller (an
event loop, a Gym wrapper, a test) owns the current state and threads it
through these functions; nothing here holds mutable state.

Phases:

* ``PLAYING``: moves, undo, reset and level navigation are accepted.
* ``SOLVED``: every box is on a target. Movement and undo are ignored; reset,
  level navigation and ``ADVANCE`` (next level, clamped) are accepted.

:func:`step` is the single dispatch entry point; the individual transitions
are exported for direct use.
"""

from dataclasses import dataclass, replace

from grid_sokoban.actions import ACTION_TO_DIRECTION, MOVE_ACTIONS, Action
from grid_sokoban.levels.catalog import LevelCatalog
from grid_sokoban.levels.loader import LevelLoadError
from grid_sokoban.moves import resolve_move
from grid_sokoban.objectives import is_solved
from grid_sokoban.state import GameState, state_from_maze
from grid_sokoban.types import Direction, LevelIndex


def initial_state(catalog: LevelCatalog, level: LevelIndex = 0) -> GameState:
    """Fresh state for ``level`` (clamped into the catalog).

    Raises:
        LevelLoadError: If the catalog holds no level.
    """
    if len(catalog) == 0:
        raise LevelLoadError("Level catalog is empty")
    level = catalog.clamp(level)
    return state_from_maze(level, catalog[level])


def apply_move(state: GameState, direction: Direction) -> GameState:
    """Resolve and apply one move.

    ``move_step`` always increments. A move that relocates the actor also
    increments ``legal_move_count`` and records ``state`` in ``history``. A
    solved state is returned unchanged.
    """
    if is_solved(state):
        return state

    resolution = resolve_move(state, direction)
    if not resolution.changed:
        return replace(state, actor=resolution.actor, move_step=state.move_step + 1)

    return replace(
        state,
        actor=resolution.actor,
        boxes=resolution.boxes,
        move_step=state.move_step + 1,
        legal_move_count=state.legal_move_count + 1,
        history=state.history.append(state),
    )


def undo(state: GameState) -> GameState:
    """Return the snapshot preceding the last legal move, or ``state`` if none.

    The returned snapshot's history excludes the popped entry, so repeated
    undo walks further back one move at a time.
    """
    if not state.history:
        return state
    previous = state.history[-1]
    return replace(previous, history=state.history.delete(len(state.history) - 1))


def reset(catalog: LevelCatalog, state: GameState) -> GameState:
    """Restart the current level from its initial layout."""
    return initial_state(catalog, state.level)


def change_level(catalog: LevelCatalog, state: GameState, delta: int) -> LevelIndex:
    """Clamp ``state.level + delta`` into the catalog's index range.

    Only computes the index; pair with :func:`initial_state` to enter it.
    """
    return catalog.clamp(state.level + delta)


def advance(catalog: LevelCatalog, state: GameState) -> GameState:
    """Enter the next level (clamped to the last one)."""
    return initial_state(catalog, change_level(catalog, state, 1))


def step(catalog: LevelCatalog, state: GameState, action: Action) -> GameState:
    """Apply one player input.

    Args:
        catalog (LevelCatalog): Levels the state indexes into.
        state (GameState): Current snapshot.
        action (Action): Player input.

    Returns:
        GameState: Next snapshot; ``state`` itself when the input is ignored.

    Raises:
        ValueError: If ``action`` is not recognized.
    """
    solved = is_solved(state)

    if action in MOVE_ACTIONS:
        return state if solved else apply_move(state, ACTION_TO_DIRECTION[action])
    if action == Action.UNDO:
        return state if solved else undo(state)
    if action == Action.RESET:
        return reset(catalog, state)
    if action == Action.PREVIOUS_LEVEL:
        return initial_state(catalog, change_level(catalog, state, -1))
    if action == Action.NEXT_LEVEL:
        return initial_state(catalog, change_level(catalog, state, 1))
    if action == Action.ADVANCE:
        return advance(catalog, state) if solved else state
    if action == Action.NOOP:
        return state
    raise ValueError("Action is not valid")


@dataclass(frozen=True)
class Game:
    """State machine bound to a level catalog.

    Holds only the read-only catalog; every method returns a new state.

    Raises:
        LevelLoadError: On construction if the catalog is empty.
    """

    catalog: LevelCatalog

    def __post_init__(self) -> None:
        if len(self.catalog) == 0:
            raise LevelLoadError("Level catalog is empty")

    @property
    def level_count(self) -> int:
        return len(self.catalog)

    def new_state(self, level: LevelIndex = 0) -> GameState:
        return initial_state(self.catalog, level)

    def step(self, state: GameState, action: Action) -> GameState:
        return step(self.catalog, state, action)

    def apply_move(self, state: GameState, direction: Direction) -> GameState:
        return apply_move(state, direction)

    def undo(self, state: GameState) -> GameState:
        return undo(state)

    def reset(self, state: GameState) -> GameState:
        return reset(self.catalog, state)

    def change_level(self, state: GameState, delta: int) -> LevelIndex:
        return change_level(self.catalog, state, delta)

    def is_solved(self, state: GameState) -> bool:
        return is_solved(state)
