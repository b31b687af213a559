"""Actor render-state and sprite lookup table.

The engine exposes facing, ``move_step`` and the pushing flag; this module
folds them into an enumerated :class:`ActorPose` and resolves it to a sprite
key through an explicit table, so no sprite name is ever assembled from
strings at draw time.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Dict, Optional, Tuple

from grid_sokoban.state import GameState
from grid_sokoban.types import Direction


class WalkPhase(StrEnum):
    """Alternating stride used while walking."""

    LEFT = auto()
    RIGHT = auto()


class TileKey(StrEnum):
    FLOOR = "FLOOR"
    WALL = "WALL"
    TARGET = "TARGET"
    BOX = "BOX"
    BOX_ON_TARGET = "BOX_ON_TARGET"


@dataclass(frozen=True)
class ActorPose:
    """Enumerated presentation state of the actor.

    Attributes:
        facing: Direction the actor looks toward.
        phase: Stride; ignored by the table when ``still``.
        pushing: Box directly ahead.
        still: Idle frame (no recent move).
    """

    facing: Direction
    phase: WalkPhase
    pushing: bool
    still: bool = False


def actor_pose(state: GameState, still: bool = False) -> ActorPose:
    """Derive the actor's pose from a state.

    The stride alternates with ``move_step`` so bumps against walls still
    animate.
    """
    return ActorPose(
        facing=state.actor.facing,
        phase=WalkPhase.LEFT if state.move_step % 2 == 0 else WalkPhase.RIGHT,
        pushing=state.actor.pushing,
        still=still,
    )


PoseKey = Tuple[Direction, Optional[WalkPhase], bool]


def _build_sprite_table() -> Dict[PoseKey, str]:
    table: Dict[PoseKey, str] = {}
    for direction in Direction:
        for pushing in (False, True):
            suffix = "_PUSH" if pushing else ""
            name = direction.name
            table[(direction, None, pushing)] = f"{name}_STILL{suffix}"
            table[(direction, WalkPhase.LEFT, pushing)] = f"{name}_WALK0{suffix}"
            table[(direction, WalkPhase.RIGHT, pushing)] = f"{name}_WALK1{suffix}"
    return table


SPRITE_TABLE: Dict[PoseKey, str] = _build_sprite_table()
"""``(facing, phase or None when still, pushing)`` to sprite key."""


def sprite_key(pose: ActorPose) -> str:
    phase = None if pose.still else pose.phase
    return SPRITE_TABLE[(pose.facing, phase, pose.pushing)]
