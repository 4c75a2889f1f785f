"""Public dungeon package interface."""

from .agent import Agent
from .cells import Tile
from .config import STRATEGIES, ConfigError, DungeonConfig, coerce_seed
from .corridors import CorridorCandidate, CorridorResult
from .generator import DungeonGenerator, GenerationError, GenerationResult, generate_dungeon
from .grid import Grid, GridBoundsError, GridView, TileBlock
from .render import Frame, NullRenderer, RecordingRenderer, Renderer
from .rooms import Room, RoomResult
from .tiles import CORRIDOR, ROOM, VOID, Direction  # noqa: F401

__all__ = [
    "Agent",
    "Tile",
    "STRATEGIES",
    "ConfigError",
    "DungeonConfig",
    "coerce_seed",
    "CorridorCandidate",
    "CorridorResult",
    "DungeonGenerator",
    "GenerationError",
    "GenerationResult",
    "generate_dungeon",
    "Grid",
    "GridBoundsError",
    "GridView",
    "TileBlock",
    "Frame",
    "NullRenderer",
    "RecordingRenderer",
    "Renderer",
    "Room",
    "RoomResult",
    "VOID",
    "ROOM",
    "CORRIDOR",
    "Direction",
]
