# Tile kind constants centralized for modular imports
from enum import Enum

VOID = "V"
ROOM = "R"
CORRIDOR = "C"

KINDS = (VOID, ROOM, CORRIDOR)


class Direction(Enum):
    """Facing of the agent; value is the (dcol, drow) step."""

    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dcol(self) -> int:
        return self.value[0]

    @property
    def drow(self) -> int:
        return self.value[1]


__all__ = ["VOID", "ROOM", "CORRIDOR", "KINDS", "Direction"]
