"""Move resolver.

Decides, without mutating anything, what a single directional request does to
the actor and the boxes. Exactly one :class:`MoveOutcome` results per call:

* ``UNCHANGED``: the cell ahead is a wall, or holds a box whose next cell is a
  wall or another box. Only the actor's facing changes.
* ``MOVED``: the cell ahead is free; the actor steps into it.
* ``PUSHED``: the cell ahead holds a box with a free cell behind it; actor and
  box both advance one cell.

In every outcome ``Actor.pushing`` reports whether a box now sits directly
ahead of the actor in its new facing. That flag drives pose selection only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from pyrsistent import PVector

from grid_sokoban.components import Actor, Position
from grid_sokoban.state import GameState
from grid_sokoban.types import Direction
from grid_sokoban.utils.grid import box_index_at, is_blocked_for_box, is_wall_at


class MoveOutcome(StrEnum):
    UNCHANGED = auto()
    MOVED = auto()
    PUSHED = auto()


@dataclass(frozen=True)
class MoveResolution:
    """Result of resolving one move request.

    Attributes:
        outcome (MoveOutcome): Which of the three cases applied.
        actor (Actor): Actor after the move (facing always updated).
        boxes (PVector[Position]): Box positions after the move; identical to
            the input vector unless ``outcome`` is ``PUSHED``.
    """

    outcome: MoveOutcome
    actor: Actor
    boxes: PVector[Position]

    @property
    def changed(self) -> bool:
        return self.outcome != MoveOutcome.UNCHANGED


def _settle(
    outcome: MoveOutcome,
    position: Position,
    direction: Direction,
    boxes: PVector[Position],
) -> MoveResolution:
    actor = Actor(
        position=position,
        facing=direction,
        pushing=position + direction in boxes,
    )
    return MoveResolution(outcome=outcome, actor=actor, boxes=boxes)


def resolve_move(state: GameState, direction: Direction) -> MoveResolution:
    """Resolve the actor's attempt to move one cell in ``direction``.

    Args:
        state (GameState): Current snapshot (not modified).
        direction (Direction): Requested direction.

    Returns:
        MoveResolution: New actor and box collection plus the outcome tag.
    """
    current = state.actor.position
    target_pos = current + direction

    if is_wall_at(state, target_pos):
        return _settle(MoveOutcome.UNCHANGED, current, direction, state.boxes)

    box_idx = box_index_at(state, target_pos)
    if box_idx is None:
        return _settle(MoveOutcome.MOVED, target_pos, direction, state.boxes)

    box_target_pos = target_pos + direction
    if is_blocked_for_box(state, box_target_pos):
        return _settle(MoveOutcome.UNCHANGED, current, direction, state.boxes)

    boxes = state.boxes.set(box_idx, box_target_pos)
    return _settle(MoveOutcome.PUSHED, target_pos, direction, boxes)
