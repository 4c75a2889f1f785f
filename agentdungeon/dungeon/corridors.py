"""Straight corridor growth from the agent's position.

A corridor leaving a room starts just past the room's far edge: the room
offset (contiguous Room tiles ahead of the agent) shifts both the clearance
("check") region and the carved ("commit") region. The check region is the
corridor widened by one tile on each side and extended one tile past each
end; it must be entirely Void.
"""
from __future__ import annotations

from typing import Callable, List, NamedTuple, Optional, Tuple

from .config import DungeonConfig
from .grid import Grid, TileBlock
from .tiles import CORRIDOR, ROOM, VOID, Direction

# (col1, col2, row1, row2), inclusive
Bounds = Tuple[int, int, int, int]
ProbeCallback = Callable[[TileBlock], None]


class CorridorCandidate(NamedTuple):
    tiles: TileBlock
    h_offset: int
    v_offset: int

    @property
    def length(self) -> int:
        """Tiles carved plus the tiles skipped over the source room."""
        return len(self.tiles) + abs(self.h_offset) + abs(self.v_offset)


class CorridorResult(NamedTuple):
    """Outcome of a corridor attempt.

    ``length`` is how far the agent should advance along ``direction``;
    ``direction`` is None on failure.
    """

    direction: Optional[Direction]
    length: int
    tiles: Optional[TileBlock] = None

    @property
    def ok(self) -> bool:
        return self.direction is not None

    @classmethod
    def failed(cls) -> "CorridorResult":
        return cls(None, 0, None)

    @classmethod
    def from_candidate(cls, direction: Direction, candidate: CorridorCandidate) -> "CorridorResult":
        # the agent's own cell is counted once in the candidate length
        return cls(direction, candidate.length - 1, candidate.tiles)


def room_offset(grid: Grid, col: int, row: int, direction: Direction) -> int:
    """Count contiguous Room tiles ahead of (col, row), starting one tile ahead."""
    offset = 0
    c, r = col + direction.dcol, row + direction.drow
    while grid.in_bounds(c, r) and grid.kind(c, r) == ROOM:
        offset += 1
        c += direction.dcol
        r += direction.drow
    return offset


def too_close_to_edge(grid: Grid, col: int, row: int, direction: Direction, min_size: int) -> bool:
    if direction is Direction.NORTH:
        return row - min_size < 1
    if direction is Direction.EAST:
        return col + min_size > grid.size - 2
    if direction is Direction.SOUTH:
        return row + min_size > grid.size - 2
    return col - min_size < 1


def corridor_bounds(col: int, row: int, direction: Direction, length: int) -> Tuple[Bounds, Bounds]:
    """Unshifted (check, commit) bounds for a corridor of ``length`` from (col, row)."""
    if direction is Direction.NORTH:
        return (col - 1, col + 1, row - length - 1, row), (col, col, row - length, row)
    if direction is Direction.EAST:
        return (col, col + length + 1, row - 1, row + 1), (col, col + length, row, row)
    if direction is Direction.SOUTH:
        return (col - 1, col + 1, row, row + length + 1), (col, col, row, row + length)
    return (col - length - 1, col, row - 1, row + 1), (col - length, col, row, row)


def corridor_offset(grid: Grid, col: int, row: int, direction: Direction) -> Tuple[int, int]:
    """(h, v) shift placing the corridor's first tile just past any room ahead."""
    step = room_offset(grid, col, row, direction) + 1
    return direction.dcol * step, direction.drow * step


def _shift(bounds: Bounds, h: int, v: int) -> Bounds:
    col1, col2, row1, row2 = bounds
    return col1 + h, col2 + h, row1 + v, row2 + v


def search_corridor(
    grid: Grid,
    col: int,
    row: int,
    direction: Direction,
    config: DungeonConfig,
    rng,
    on_probe: Optional[ProbeCallback] = None,
) -> Optional[CorridorCandidate]:
    """Find the longest clear corridor not exceeding a random starting length.

    Lengths shrink from the random start down to ``min_size``. ``on_probe`` is
    shown every in-bounds check region before it is inspected.
    """
    start_length = rng.randint(config.min_size, config.max_size)
    if too_close_to_edge(grid, col, row, direction, config.min_size):
        return None
    h, v = corridor_offset(grid, col, row, direction)
    for length in range(start_length, config.min_size - 1, -1):
        check, commit = corridor_bounds(col, row, direction, length)
        c1, c2, r1, r2 = _shift(check, h, v)
        if c1 < 0 or c2 > grid.size - 1 or r1 < 0 or r2 > grid.size - 1:
            continue
        clearance = grid.range_query(c1, c2, r1, r2)
        if on_probe is not None:
            on_probe(clearance)
        if not clearance.all_kind(VOID):
            continue
        c1, c2, r1, r2 = _shift(commit, h, v)
        if c1 < 1 or c2 > grid.size - 2 or r1 < 1 or r2 > grid.size - 2:
            continue
        return CorridorCandidate(grid.range_query(c1, c2, r1, r2), h, v)
    return None


def add_corridor(
    grid: Grid,
    col: int,
    row: int,
    config: DungeonConfig,
    rng,
    on_probe: Optional[ProbeCallback] = None,
) -> CorridorResult:
    """Try each direction once in random order and carve the first usable corridor."""
    remaining: List[Direction] = list(Direction)
    while remaining:
        direction = remaining.pop(rng.randrange(len(remaining)))
        candidate = search_corridor(grid, col, row, direction, config, rng, on_probe)
        if candidate is not None and len(candidate.tiles) > config.min_size:
            grid.carve(candidate.tiles, CORRIDOR)
            return CorridorResult.from_candidate(direction, candidate)
    return CorridorResult.failed()


__all__ = [
    "CorridorCandidate",
    "CorridorResult",
    "room_offset",
    "corridor_bounds",
    "corridor_offset",
    "search_corridor",
    "add_corridor",
]
