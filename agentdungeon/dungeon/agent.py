from dataclasses import dataclass
from typing import Optional

from .cells import Coord
from .tiles import Direction


@dataclass
class Agent:
    """The walker whose position and facing drive carving."""

    col: int
    row: int
    direction: Optional[Direction] = None
    # stochastic strategy only; percentages
    direction_chance: int = 0
    room_chance: int = 0

    @property
    def position(self) -> Coord:
        return (self.col, self.row)

    def peek(self, direction: Optional[Direction] = None, steps: int = 1) -> Coord:
        d = direction or self.direction
        if d is None:
            raise ValueError("agent has no facing direction")
        return (self.col + d.dcol * steps, self.row + d.drow * steps)

    def advance(self, direction: Direction, steps: int = 1) -> Coord:
        self.col, self.row = self.peek(direction, steps)
        return self.position


__all__ = ["Agent"]
