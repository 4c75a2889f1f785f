from typing import Tuple

from .tiles import KINDS

Coord = Tuple[int, int]


class Tile:
    """A single dungeon grid cell.

    Position is fixed at construction. ``kind`` is readable by anyone but only
    the owning :class:`~agentdungeon.dungeon.grid.Grid` writes it.
    """

    __slots__ = ("_kind", "_col", "_row")

    def __init__(self, kind: str, col: int, row: int):
        if kind not in KINDS:
            raise ValueError(f"unknown tile kind {kind!r}")
        self._kind = kind
        self._col = col
        self._row = row

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def col(self) -> int:
        return self._col

    @property
    def row(self) -> int:
        return self._row

    @property
    def position(self) -> Coord:
        return (self._col, self._row)

    def to_dict(self):
        return {"kind": self._kind, "col": self._col, "row": self._row}

    def __repr__(self) -> str:
        return f"Tile({self._kind!r}, {self._col}, {self._row})"


__all__ = ["Tile", "Coord"]
