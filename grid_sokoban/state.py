"""Core immutable ``GameState`` dataclass.

This module defines the frozen :class:`GameState` that represents one
in-progress attempt at a level. All transitions in :mod:`grid_sokoban.step`
are pure functions that take a previous ``GameState`` plus an input and return
a *new* ``GameState``; nothing is mutated in place.

Design notes:

* ``walls`` and ``targets`` are persistent sets fixed for the lifetime of a
  level attempt. ``boxes`` is a persistent vector whose order is stable; a push
  replaces exactly one entry.
* ``history`` holds the snapshots that preceded each legal move, most recent
  last. A snapshot's own ``history`` is the prefix before it, so returning the
  last entry is a true LIFO pop.
* The read accessors at the bottom are the whole surface a renderer needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

from pyrsistent import PMap, PSet, PVector, pmap, pset, pvector

from grid_sokoban.components import Actor, Position
from grid_sokoban.levels.maze import Maze
from grid_sokoban.types import CellType, LevelIndex


@dataclass(frozen=True)
class GameState:
    """Immutable session snapshot.

    Attributes:
        level (LevelIndex): Index into the level catalog.
        width (int): Maze width in cells.
        height (int): Maze height in cells.
        actor (Actor): Position, facing and pushing flag of the player.
        walls (PSet[Position]): Wall cells.
        targets (PSet[Position]): Target cells.
        boxes (PVector[Position]): One entry per box, order preserved.
        move_step (int): Attempted moves, legal or not (walk animation phase).
        legal_move_count (int): Moves that relocated the actor.
        history (PVector[GameState]): Snapshots preceding each legal move.
    """

    level: LevelIndex
    width: int
    height: int
    actor: Actor
    walls: PSet[Position] = pset()
    targets: PSet[Position] = pset()
    boxes: PVector[Position] = pvector()
    move_step: int = 0
    legal_move_count: int = 0
    history: PVector[GameState] = field(default=pvector(), repr=False, hash=False)

    @property
    def wall_positions(self) -> PSet[Position]:
        return self.walls

    @property
    def target_positions(self) -> PSet[Position]:
        return self.targets

    @property
    def box_positions(self) -> PVector[Position]:
        return self.boxes

    def boxes_with_target_flag(self) -> List[Tuple[Position, bool]]:
        """Each box position paired with whether it sits on a target."""
        return [(pos, pos in self.targets) for pos in self.boxes]

    @property
    def boxes_on_target(self) -> int:
        return sum(1 for pos in self.boxes if pos in self.targets)

    @property
    def description(self) -> PMap[str, Any]:
        """Compact summary for diagnostics (history reduced to its depth)."""
        return pmap(
            {
                "level": self.level,
                "actor": self.actor,
                "boxes": self.boxes,
                "move_step": self.move_step,
                "legal_move_count": self.legal_move_count,
                "history_depth": len(self.history),
            }
        )


def state_from_maze(level: LevelIndex, maze: Maze) -> GameState:
    """Build the initial ``GameState`` for a level from its maze.

    Raises:
        ValueError: If the maze has no actor cell.
    """
    return GameState(
        level=level,
        width=maze.width,
        height=maze.height,
        actor=Actor(position=maze.position_of_type(CellType.ACTOR)),
        walls=pset(maze.positions_of_type(CellType.WALL)),
        targets=pset(maze.positions_of_type(CellType.TARGET)),
        boxes=pvector(maze.positions_of_type(CellType.BOX)),
    )
