from dataclasses import replace

import pytest
from pyrsistent import pvector

from grid_sokoban.actions import Action
from grid_sokoban.components import Position
from grid_sokoban.levels.catalog import LevelCatalog
from grid_sokoban.levels.loader import LevelLoadError
from grid_sokoban.objectives import Phase, is_solved, phase
from grid_sokoban.step import (
    Game,
    apply_move,
    change_level,
    initial_state,
    reset,
    step,
    undo,
)
from grid_sokoban.types import Direction
from tests.test_utils import (
    BESIDE_WALL,
    CORRIDOR,
    OPEN_ROOM,
    make_catalog,
    make_state,
    play,
)


def test_push_twice_solves_corridor() -> None:
    state = make_state(CORRIDOR)
    assert not is_solved(state)
    state = apply_move(state, Direction.LEFT)
    assert not is_solved(state)
    state = apply_move(state, Direction.LEFT)
    assert is_solved(state)
    assert phase(state) == Phase.SOLVED
    assert state.legal_move_count == 2
    assert state.move_step == 2
    assert len(state.history) == 2


def test_wall_bump_counts_step_only() -> None:
    state = make_state(BESIDE_WALL)
    assert not is_solved(state)
    after = apply_move(state, Direction.UP)
    assert after.actor.position == state.actor.position
    assert after.actor.facing == Direction.UP
    assert after.legal_move_count == state.legal_move_count
    assert after.move_step == state.move_step + 1
    assert after.history == state.history


def test_box_into_box_is_illegal() -> None:
    state = make_state(["######", "#@$$.#", "######"])
    after = apply_move(state, Direction.RIGHT)
    assert after.actor.position == Position(1, 1)
    assert after.boxes == state.boxes
    assert after.legal_move_count == 0
    assert after.move_step == 1


def test_solved_state_ignores_moves() -> None:
    state = make_state(["#####", "#@*.#", "#####"])
    # One box on target, one target still empty.
    assert not is_solved(state)
    solved = make_state(["#####", "#@* #", "#####"])
    assert is_solved(solved)
    assert apply_move(solved, Direction.RIGHT) is solved


def test_level_without_boxes_or_targets_is_solved() -> None:
    assert is_solved(make_state(["###", "#@#", "###"]))


@pytest.mark.parametrize(
    "direction", [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]
)
def test_undo_inverts_legal_move(direction: Direction) -> None:
    state = make_state(
        [
            "#######",
            "#     #",
            "#  $  #",
            "# $@$ #",
            "#  $  #",
            "#     #",
            "#######",
        ]
    )
    moved = apply_move(state, direction)
    assert moved.legal_move_count == 1
    restored = undo(moved)
    assert restored == state
    assert restored.actor == state.actor
    assert restored.boxes == state.boxes
    assert restored.legal_move_count == state.legal_move_count
    assert restored.move_step == state.move_step


def test_undo_after_illegal_move_is_noop() -> None:
    state = make_state(BESIDE_WALL)
    bumped = apply_move(state, Direction.UP)
    assert bumped is not state
    assert bumped.move_step == 1
    assert undo(bumped) is bumped


def test_undo_empty_history_is_noop() -> None:
    state = make_state(OPEN_ROOM)
    assert undo(state) is state


def test_repeated_undo_walks_back() -> None:
    start = make_state(OPEN_ROOM)
    s1 = apply_move(start, Direction.LEFT)
    s2 = apply_move(s1, Direction.UP)
    s3 = apply_move(s2, Direction.RIGHT)
    assert len(s3.history) == 3

    back2 = undo(s3)
    assert back2 == s2
    assert len(back2.history) == 2
    back1 = undo(back2)
    assert back1 == s1
    back0 = undo(back1)
    assert back0 == start
    assert len(back0.history) == 0
    assert undo(back0) is back0


def test_reset_restores_initial_layout() -> None:
    catalog = make_catalog(CORRIDOR)
    start = initial_state(catalog)
    moved = apply_move(apply_move(start, Direction.LEFT), Direction.UP)
    fresh = reset(catalog, moved)
    assert fresh == start
    assert fresh.history == pvector()


def test_reset_is_idempotent() -> None:
    catalog = make_catalog(OPEN_ROOM)
    state = apply_move(initial_state(catalog), Direction.DOWN)
    once = reset(catalog, state)
    assert reset(catalog, once) == once


@pytest.mark.parametrize(
    "level, delta, expected",
    [(0, -1, 0), (0, 1, 1), (1, 1, 2), (2, 1, 2), (2, -5, 0), (1, 0, 1)],
)
def test_change_level_clamps(level: int, delta: int, expected: int) -> None:
    catalog = make_catalog(CORRIDOR, OPEN_ROOM, CORRIDOR)
    state = initial_state(catalog, level)
    assert change_level(catalog, state, delta) == expected


def test_initial_state_requires_levels() -> None:
    with pytest.raises(LevelLoadError):
        initial_state(LevelCatalog())
    with pytest.raises(LevelLoadError):
        Game(LevelCatalog())


def test_step_moves_and_session_controls() -> None:
    catalog = make_catalog(OPEN_ROOM, CORRIDOR)
    state = initial_state(catalog)

    state = step(catalog, state, Action.LEFT)
    assert state.actor.position == Position(2, 2)
    state = step(catalog, state, Action.UNDO)
    assert state.actor.position == Position(3, 2)
    assert state.legal_move_count == 0

    assert step(catalog, state, Action.NOOP) is state
    # Not solved: advance is ignored.
    assert step(catalog, state, Action.ADVANCE) is state

    nxt = step(catalog, state, Action.NEXT_LEVEL)
    assert nxt.level == 1
    assert step(catalog, nxt, Action.NEXT_LEVEL).level == 1
    prev = step(catalog, nxt, Action.PREVIOUS_LEVEL)
    assert prev.level == 0
    assert prev.legal_move_count == 0


def test_solved_phase_accepts_only_navigation() -> None:
    catalog = make_catalog(CORRIDOR, OPEN_ROOM)
    solved = play(catalog, initial_state(catalog), [Action.LEFT, Action.LEFT])
    assert is_solved(solved)

    assert step(catalog, solved, Action.RIGHT) is solved
    assert step(catalog, solved, Action.UNDO) is solved

    assert step(catalog, solved, Action.RESET) == initial_state(catalog, 0)
    advanced = step(catalog, solved, Action.ADVANCE)
    assert advanced.level == 1
    assert advanced.legal_move_count == 0
    assert not is_solved(advanced)


def test_advance_past_last_level_stays_on_last() -> None:
    catalog = make_catalog(OPEN_ROOM, CORRIDOR)
    state = play(catalog, initial_state(catalog, 1), [Action.LEFT, Action.LEFT])
    assert is_solved(state)
    advanced = step(catalog, state, Action.ADVANCE)
    assert advanced.level == 1
    assert advanced == initial_state(catalog, 1)


def test_step_rejects_unknown_action() -> None:
    catalog = make_catalog(OPEN_ROOM)
    with pytest.raises(ValueError):
        step(catalog, initial_state(catalog), "jump")  # type: ignore[arg-type]


def test_game_facade() -> None:
    game = Game(make_catalog(CORRIDOR, OPEN_ROOM))
    assert game.level_count == 2
    state = game.new_state()
    state = game.apply_move(state, Direction.LEFT)
    assert state.legal_move_count == 1
    assert game.undo(state).legal_move_count == 0
    assert game.change_level(state, 5) == 1
    state = game.step(state, Action.LEFT)
    assert game.is_solved(state)
    assert game.reset(state) == game.new_state(0)


def test_render_accessors() -> None:
    state = make_state(["######", "#@$*.#", "######"])
    assert state.boxes_with_target_flag() == [
        (Position(2, 1), False),
        (Position(3, 1), True),
    ]
    assert state.boxes_on_target == 1
    assert state.target_positions == state.targets
    assert len(state.wall_positions) == 14
    assert replace(state, level=3).description["level"] == 3
