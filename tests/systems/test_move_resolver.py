from grid_sokoban.components import Position
from grid_sokoban.moves import MoveOutcome, resolve_move
from grid_sokoban.types import Direction
from tests.test_utils import OPEN_ROOM, make_state


def test_move_into_open_cell() -> None:
    state = make_state(OPEN_ROOM)
    res = resolve_move(state, Direction.RIGHT)
    assert res.outcome == MoveOutcome.MOVED
    assert res.actor.position == Position(4, 2)
    assert res.actor.facing == Direction.RIGHT
    assert not res.actor.pushing
    assert res.boxes == state.boxes


def test_bump_into_wall_only_turns() -> None:
    state = make_state(["####", "#@ #", "####"])
    res = resolve_move(state, Direction.UP)
    assert res.outcome == MoveOutcome.UNCHANGED
    assert not res.changed
    assert res.actor.position == Position(1, 1)
    assert res.actor.facing == Direction.UP
    assert not res.actor.pushing


def test_push_box() -> None:
    state = make_state(["#######", "#@$ $ #", "#######"])
    res = resolve_move(state, Direction.RIGHT)
    assert res.outcome == MoveOutcome.PUSHED
    assert res.actor.position == Position(2, 1)
    assert res.actor.pushing
    # Order preserved, only the pushed entry replaced.
    assert list(res.boxes) == [Position(3, 1), Position(4, 1)]
    assert list(state.boxes) == [Position(2, 1), Position(4, 1)]


def test_push_box_into_wall_is_blocked() -> None:
    state = make_state(["####", "#@$#", "####"])
    res = resolve_move(state, Direction.RIGHT)
    assert res.outcome == MoveOutcome.UNCHANGED
    assert res.actor.position == Position(1, 1)
    assert res.boxes == state.boxes
    assert res.actor.pushing


def test_push_box_into_box_is_blocked() -> None:
    state = make_state(["######", "#@$$ #", "######"])
    res = resolve_move(state, Direction.RIGHT)
    assert res.outcome == MoveOutcome.UNCHANGED
    assert res.actor.position == Position(1, 1)
    assert list(res.boxes) == [Position(2, 1), Position(3, 1)]


def test_walk_up_to_box_sets_pushing() -> None:
    state = make_state(["######", "#@ $ #", "######"])
    res = resolve_move(state, Direction.RIGHT)
    assert res.outcome == MoveOutcome.MOVED
    assert res.actor.pushing


def test_edge_of_grid_blocks_actor() -> None:
    state = make_state(["@ "])
    res = resolve_move(state, Direction.LEFT)
    assert res.outcome == MoveOutcome.UNCHANGED
    assert res.actor.position == Position(0, 0)


def test_edge_of_grid_blocks_box() -> None:
    state = make_state(["@$"])
    res = resolve_move(state, Direction.RIGHT)
    assert res.outcome == MoveOutcome.UNCHANGED
    assert list(res.boxes) == [Position(1, 0)]


def test_resolver_does_not_mutate_state() -> None:
    rows = ["######", "#@$ .#", "######"]
    state = make_state(rows)
    before = make_state(rows)
    resolve_move(state, Direction.RIGHT)
    assert state == before
    assert state.actor.position == Position(1, 1)
