from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Tuple

from .cells import Coord
from .config import DungeonConfig
from .grid import Grid
from .tiles import ROOM


@dataclass(frozen=True)
class Room:
    col1: int
    col2: int
    row1: int
    row2: int

    @property
    def width(self) -> int:
        return self.col2 - self.col1 + 1

    @property
    def height(self) -> int:
        return self.row2 - self.row1 + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Coord:
        return ((self.col1 + self.col2) // 2, (self.row1 + self.row2) // 2)

    def cells(self) -> Iterator[Coord]:
        for col in range(self.col1, self.col2 + 1):
            for row in range(self.row1, self.row2 + 1):
                yield col, row

    def padded(self, pad: int = 1) -> "Room":
        return Room(self.col1 - pad, self.col2 + pad, self.row1 - pad, self.row2 + pad)


class RoomResult(NamedTuple):
    """Outcome of a room attempt; ``room`` is None on failure."""

    room: Optional[Room]
    filled: int = 0

    @property
    def ok(self) -> bool:
        return self.room is not None

    @property
    def area(self) -> int:
        return self.room.area if self.room is not None else 0

    @classmethod
    def failed(cls) -> "RoomResult":
        return cls(None, 0)


def centered_span(center: int, extent: int) -> Tuple[int, int]:
    """Inclusive span of ``extent`` tiles around ``center``.

    Even extents sit one tile toward the lower index: center 10, extent 4
    spans 8..11 while extent 5 spans 8..12.
    """
    if extent % 2 == 0:
        return center - extent // 2, center + extent // 2 - 1
    return center - (extent - 1) // 2, center + (extent - 1) // 2


def room_candidate(col: int, row: int, width: int, height: int) -> Room:
    col1, col2 = centered_span(col, width)
    row1, row2 = centered_span(row, height)
    return Room(col1, col2, row1, row2)


def room_fits(grid: Grid, room: Room) -> bool:
    """In-bounds (inside the border) and no Room tile within one tile of it."""
    if room.col1 < 1 or room.col2 > grid.size - 2 or room.row1 < 1 or room.row2 > grid.size - 2:
        return False
    p = room.padded()
    return not grid.range_query(p.col1, p.col2, p.row1, p.row2).any_kind(ROOM)


def place_room(grid: Grid, col: int, row: int, config: DungeonConfig, rng) -> RoomResult:
    """Carve the largest room centered on (col, row) that fits, shrinking on failure.

    Width and height start at random sizes; for each width (descending) every
    height from the start down to ``min_size`` is tried. The grid is only
    written on success.
    """
    start_width = rng.randint(config.min_size, config.max_size)
    start_height = rng.randint(config.min_size, config.max_size)
    for width in range(start_width, config.min_size - 1, -1):
        for height in range(start_height, config.min_size - 1, -1):
            room = room_candidate(col, row, width, height)
            if not room_fits(grid, room):
                continue
            filled = grid.carve(grid.range_query(room.col1, room.col2, room.row1, room.row2), ROOM)
            return RoomResult(room, filled)
    return RoomResult.failed()


__all__ = ["Room", "RoomResult", "centered_span", "room_candidate", "room_fits", "place_room"]
