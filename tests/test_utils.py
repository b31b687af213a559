from typing import List, Sequence

from grid_sokoban.actions import Action
from grid_sokoban.components import Position
from grid_sokoban.levels.catalog import LevelCatalog
from grid_sokoban.levels.loader import parse_maze
from grid_sokoban.objectives import is_solved
from grid_sokoban.state import GameState, state_from_maze
from grid_sokoban.step import step


def make_state(rows: Sequence[str], level: int = 0) -> GameState:
    """Initial state for a single maze given as text rows."""
    return state_from_maze(level, parse_maze(list(rows)))


def make_catalog(*mazes: Sequence[str]) -> LevelCatalog:
    return LevelCatalog.of(parse_maze(list(rows)) for rows in mazes)


def play(catalog: LevelCatalog, state: GameState, actions: List[Action]) -> GameState:
    for action in actions:
        state = step(catalog, state, action)
    return state


def check_invariants(state: GameState, box_count: int) -> None:
    """Structural invariants that must hold after every transition."""
    boxes = list(state.boxes)
    assert len(boxes) == box_count
    assert len(set(boxes)) == len(boxes)
    assert not set(boxes) & set(state.walls)
    assert state.actor.position not in state.walls
    assert state.actor.position not in set(boxes)
    assert is_solved(state) == (set(boxes) == set(state.targets))


def pos(x: int, y: int) -> Position:
    return Position(x, y)


# Push left twice from the actor to solve.
CORRIDOR = [
    "######",
    "#. $@#",
    "######",
]

# Wall directly above and left of the actor; box still off target.
BESIDE_WALL = [
    "######",
    "#@ $.#",
    "######",
]

OPEN_ROOM = [
    "#######",
    "#     #",
    "#  @  #",
    "#   $.#",
    "#######",
]
