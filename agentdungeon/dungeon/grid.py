"""Dungeon tile storage.

The grid is a dense square matrix addressed column-major (``tiles[col][row]``),
matching the rest of the dungeon code. Callers read through range queries and
immutable views; only :meth:`Grid.carve` writes tile kinds.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from .cells import Coord, Tile
from .tiles import CORRIDOR, ROOM, VOID


class GridBoundsError(IndexError):
    """Raised when a caller addresses a cell outside the grid."""


class TileBlock:
    """Read-only rectangular block of tiles produced by :meth:`Grid.range_query`."""

    __slots__ = ("col1", "col2", "row1", "row2", "_tiles")

    def __init__(self, col1: int, col2: int, row1: int, row2: int, tiles: List[Tile]):
        self.col1 = col1
        self.col2 = col2
        self.row1 = row1
        self.row2 = row2
        self._tiles = tuple(tiles)

    @property
    def width(self) -> int:
        return self.col2 - self.col1 + 1

    @property
    def height(self) -> int:
        return self.row2 - self.row1 + 1

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def coords(self) -> Tuple[Coord, ...]:
        return tuple(t.position for t in self._tiles)

    def any_kind(self, kind: str) -> bool:
        return any(t.kind == kind for t in self._tiles)

    def all_kind(self, kind: str) -> bool:
        return all(t.kind == kind for t in self._tiles)

    def __repr__(self) -> str:
        return f"TileBlock(cols={self.col1}..{self.col2}, rows={self.row1}..{self.row2})"


class GridView:
    """Immutable snapshot of tile kinds handed to renderers."""

    __slots__ = ("size", "_columns")

    def __init__(self, columns: Tuple[Tuple[str, ...], ...]):
        self.size = len(columns)
        self._columns = columns

    def kind(self, col: int, row: int) -> str:
        return self._columns[col][row]

    def rows(self) -> List[str]:
        """Row-major strings, one character per tile (top row first)."""
        return ["".join(self._columns[col][row] for col in range(self.size)) for row in range(self.size)]

    def cells(self) -> Iterator[Tuple[int, int, str]]:
        for col, column in enumerate(self._columns):
            for row, kind in enumerate(column):
                yield col, row, kind

    @property
    def filled_count(self) -> int:
        return sum(1 for column in self._columns for kind in column if kind != VOID)

    def __eq__(self, other) -> bool:
        return isinstance(other, GridView) and self._columns == other._columns

    def __hash__(self) -> int:
        return hash(self._columns)


class Grid:
    def __init__(self, size: int):
        if size < 1:
            raise ValueError("grid size must be positive")
        self.size = size
        self._tiles: List[List[Tile]] = [[Tile(VOID, col, row) for row in range(size)] for col in range(size)]
        self._filled = 0

    @property
    def total(self) -> int:
        return self.size * self.size

    @property
    def filled_count(self) -> int:
        """Number of non-Void tiles."""
        return self._filled

    @property
    def fill_ratio(self) -> float:
        return self._filled / self.total

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.size and 0 <= row < self.size

    def is_interior(self, col: int, row: int) -> bool:
        """True when the cell lies inside the permanently empty 1-tile border."""
        return 1 <= col <= self.size - 2 and 1 <= row <= self.size - 2

    def tile(self, col: int, row: int) -> Tile:
        if not self.in_bounds(col, row):
            raise GridBoundsError(f"cell ({col}, {row}) outside {self.size}x{self.size} grid")
        return self._tiles[col][row]

    def kind(self, col: int, row: int) -> str:
        return self.tile(col, row).kind

    def range_query(self, col1: int, col2: int, row1: int, row2: int) -> TileBlock:
        """Return every tile in the inclusive rectangle, normalizing swapped bounds."""
        if col1 > col2:
            col1, col2 = col2, col1
        if row1 > row2:
            row1, row2 = row2, row1
        if col1 < 0 or row1 < 0 or col2 > self.size - 1 or row2 > self.size - 1:
            raise GridBoundsError(
                f"range cols={col1}..{col2} rows={row1}..{row2} outside {self.size}x{self.size} grid"
            )
        tiles = [self._tiles[col][row] for col in range(col1, col2 + 1) for row in range(row1, row2 + 1)]
        return TileBlock(col1, col2, row1, row2, tiles)

    def carve(self, tiles: Iterable[Tile], kind: str) -> int:
        """Set ``kind`` on the given tiles; return how many were previously Void."""
        if kind not in (ROOM, CORRIDOR):
            raise ValueError(f"cannot carve tiles as {kind!r}")
        newly_filled = 0
        for t in tiles:
            if self._tiles[t.col][t.row] is not t:
                raise ValueError(f"{t!r} does not belong to this grid")
            if t._kind == VOID:
                newly_filled += 1
            t._kind = kind
        self._filled += newly_filled
        return newly_filled

    def view(self) -> GridView:
        return GridView(tuple(tuple(t.kind for t in column) for column in self._tiles))

    def __iter__(self) -> Iterator[Tile]:
        for column in self._tiles:
            yield from column


__all__ = ["Grid", "GridBoundsError", "GridView", "TileBlock"]
