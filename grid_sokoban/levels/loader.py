"""Text level-pack loader.

Turns the classic ASCII level-pack format into a :class:`LevelCatalog`.

Pipeline (per document):

1. Drop leading lines until the first maze body line (a non-blank line made
   only of ``#`` and spaces).
2. Split the remaining lines into blocks on blank lines.
3. Trim trailing caption lines from each block (lines containing ``:`` or no
   ``#``).
4. Decode each block cell by cell into a :class:`Maze`.
5. Keep only mazes that fit :class:`LevelLimits`; oversized ones are skipped,
   not reported as errors.

Symbol alphabet::

    #  wall          .  target
    @  actor         M  actor
    $  box           B  box
    +  actor+target  *  box+target
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple, TypeVar, Union

from pyrsistent import pmap, pset

from grid_sokoban.components import Position
from grid_sokoban.levels.catalog import LevelCatalog
from grid_sokoban.levels.maze import Maze
from grid_sokoban.types import CellType

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAZE_BODY_ALPHABET = frozenset("# ")

SYMBOL_TO_CELL_TYPES: Dict[str, Tuple[CellType, ...]] = {
    "#": (CellType.WALL,),
    ".": (CellType.TARGET,),
    "M": (CellType.ACTOR,),
    "@": (CellType.ACTOR,),
    "B": (CellType.BOX,),
    "$": (CellType.BOX,),
    "+": (CellType.ACTOR, CellType.TARGET),
    "*": (CellType.BOX, CellType.TARGET),
}


class LevelLoadError(Exception):
    """Raised when a level source cannot be read or is malformed."""


@dataclass(frozen=True)
class LevelLimits:
    """Exclusive upper bounds a maze must fit to be playable."""

    max_height: int = 13
    max_width: int = 40

    def accepts(self, maze: Maze) -> bool:
        return maze.height < self.max_height and maze.width < self.max_width


DEFAULT_LIMITS = LevelLimits()


def split_by(items: Sequence[T], predicate: Callable[[T], bool]) -> List[List[T]]:
    """Split ``items`` into chunks separated by elements matching ``predicate``.

    Separators are dropped. Consecutive separators yield empty chunks; a
    trailing separator does not.

    >>> split_by([1, 2, -1, 3, 4, -2, -3, 5], lambda n: n < 0)
    [[1, 2], [3, 4], [], [5]]
    """
    chunks: List[List[T]] = []
    start = 0
    for idx, item in enumerate(items):
        if predicate(item):
            chunks.append(list(items[start:idx]))
            start = idx + 1
    if start < len(items):
        chunks.append(list(items[start:]))
    return chunks


def split_lines(text: str) -> List[str]:
    """Split ``text`` on ``\\n``, ``\\r\\n`` and ``\\r`` only.

    Other control characters stay inside the line. A final line terminator
    does not produce a trailing empty line.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_preamble(line: str) -> bool:
    return _is_blank(line) or any(c not in MAZE_BODY_ALPHABET for c in line)


def _is_caption(line: str) -> bool:
    return ":" in line or "#" not in line


def _drop_preamble(lines: Sequence[str]) -> List[str]:
    idx = 0
    while idx < len(lines) and _is_preamble(lines[idx]):
        idx += 1
    return list(lines[idx:])


def _drop_captions(block: List[str]) -> List[str]:
    end = len(block)
    while end > 0 and _is_caption(block[end - 1]):
        end -= 1
    return block[:end]


def parse_maze(lines: Sequence[str]) -> Maze:
    """Decode one maze block.

    Width is the longest line, height the line count. Unknown symbols
    (including floor spaces) produce no cell.
    """
    layout: Dict[Position, List[CellType]] = {}
    for y, line in enumerate(lines):
        for x, symbol in enumerate(line):
            cell_types = SYMBOL_TO_CELL_TYPES.get(symbol)
            if cell_types:
                layout.setdefault(Position(x, y), []).extend(cell_types)
    width = max((len(line) for line in lines), default=0)
    return Maze(
        width=width,
        height=len(lines),
        layout=pmap({pos: pset(types) for pos, types in layout.items()}),
    )


def _validate(maze: Maze, block_index: int) -> None:
    actors = maze.count_of_type(CellType.ACTOR)
    if actors != 1:
        raise LevelLoadError(
            f"Level block {block_index} must contain exactly one actor, found {actors}"
        )


def parse_levels(
    lines: Sequence[str], limits: LevelLimits = DEFAULT_LIMITS
) -> LevelCatalog:
    """Parse a whole level-pack document.

    Args:
        lines: Document lines without line terminators.
        limits: Size bounds; mazes not fitting are silently excluded.

    Returns:
        LevelCatalog: Playable mazes in document order (possibly empty).

    Raises:
        LevelLoadError: If ``lines`` is empty or a kept maze is malformed.
    """
    if not lines:
        raise LevelLoadError("Level source contains no lines")

    blocks = split_by(_drop_preamble(lines), _is_blank)
    mazes: List[Maze] = []
    for block_index, block in enumerate(blocks):
        body = _drop_captions(block)
        if not body:
            logger.debug("Skipping level block %d: no maze body", block_index)
            continue
        maze = parse_maze(body)
        if not limits.accepts(maze):
            logger.debug(
                "Skipping level block %d: %dx%d exceeds %dx%d",
                block_index,
                maze.width,
                maze.height,
                limits.max_width,
                limits.max_height,
            )
            continue
        _validate(maze, block_index)
        mazes.append(maze)

    logger.info("Loaded %d level(s) from %d block(s)", len(mazes), len(blocks))
    return LevelCatalog.of(mazes)


def load_levels(
    path: Union[str, Path], limits: LevelLimits = DEFAULT_LIMITS
) -> LevelCatalog:
    """Read and parse a level-pack file.

    Raises:
        LevelLoadError: If the file cannot be read or decoded, or parsing fails.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LevelLoadError(f"Cannot read level source {path}: {exc}") from exc
    return parse_levels(split_lines(text), limits)
