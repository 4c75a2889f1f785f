"""Agent-driven dungeon generation.

A :class:`DungeonGenerator` is one generation session: it owns a grid, an
agent, a seeded random source and a renderer, and runs exactly one of two
strategies:

    * ``generate`` (constructive): alternate room and corridor attempts,
      walking the agent to the end of each new corridor. Stops after two
      consecutive failed phases.
    * ``generate_stochastic``: random walk laying corridor one tile at a
      time, with escalating chances to turn and to drop a room. Stops once
      the filled share of the grid reaches ``fill_target``.

The renderer sees a snapshot after every state change plus corridor-probe
overlays; it never influences the run.
"""
from __future__ import annotations

import random
import time
from dataclasses import replace
from typing import Any, Dict, List, NamedTuple, Optional

from agentdungeon.logging_utils import get_logger

from .agent import Agent
from .cells import Coord
from .config import STRATEGIES, SEED_MAX, ConfigError, DungeonConfig
from .corridors import CorridorCandidate, CorridorResult, add_corridor, room_offset, search_corridor
from .grid import Grid, GridView, TileBlock
from .metrics import init_metrics
from .render import NullRenderer, Renderer
from .rooms import Room, RoomResult, place_room
from .tiles import CORRIDOR, VOID, Direction

log = get_logger("agentdungeon.generator")

# The constructive walk attempts both phases every iteration.
CONSTRUCTIVE_CHANCE = 100


class GenerationError(RuntimeError):
    pass


class GenerationResult(NamedTuple):
    strategy: str
    seed: Optional[int]
    view: GridView
    rooms: List[Room]
    agent: Coord
    metrics: Dict[str, Any]


class DungeonGenerator:
    def __init__(
        self,
        config: DungeonConfig | None = None,
        *,
        renderer: Renderer | None = None,
        rng: random.Random | None = None,
    ):
        config = (config or DungeonConfig()).validate()
        if config.seed is None and rng is None:
            config = replace(config, seed=random.randint(0, SEED_MAX))
        self.config = config
        self.seed = config.seed
        # Local RNG so external random usage does not affect generation
        self._rng = rng if rng is not None else random.Random(config.seed)
        self._grid = Grid(config.size)
        self.renderer = renderer or NullRenderer()
        self.agent: Optional[Agent] = None
        self.rooms: List[Room] = []
        self.metrics: Dict[str, Any] = init_metrics()
        self.strategy: Optional[str] = None
        self._started: Optional[float] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def view(self) -> GridView:
        return self._grid.view()

    @property
    def filled_count(self) -> int:
        return self._grid.filled_count

    def _tile_index(self) -> int:
        return self.agent.row * self.config.size + self.agent.col

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------
    def randomize_direction(self, current: Optional[Direction] = None) -> Direction:
        """Random direction, guaranteed different from ``current`` when given."""
        choices = [d for d in Direction if d is not current]
        return choices[self._rng.randrange(len(choices))]

    def add_room(self) -> RoomResult:
        result = place_room(self._grid, self.agent.col, self.agent.row, self.config, self._rng)
        if result.ok:
            self.rooms.append(result.room)
            self.metrics["rooms_placed"] += 1
            log.debug(
                event="room_added",
                area=result.area,
                col=self.agent.col,
                row=self.agent.row,
                tile=self._tile_index(),
            )
        else:
            self.metrics["room_failures"] += 1
            log.debug(event="room_failed", col=self.agent.col, row=self.agent.row)
        return result

    def room_offset(self, direction: Direction) -> int:
        return room_offset(self._grid, self.agent.col, self.agent.row, direction)

    def generate_corridor(self, direction: Direction) -> Optional[CorridorCandidate]:
        """Search (without carving) for a corridor heading ``direction``."""
        return search_corridor(
            self._grid, self.agent.col, self.agent.row, direction, self.config, self._rng, self._probe
        )

    def add_corridor(self) -> CorridorResult:
        result = add_corridor(self._grid, self.agent.col, self.agent.row, self.config, self._rng, self._probe)
        if result.ok:
            self.metrics["corridors_placed"] += 1
        else:
            self.metrics["corridor_failures"] += 1
        return result

    def _probe(self, block: TileBlock) -> None:
        self._snapshot(CONSTRUCTIVE_CHANCE, CONSTRUCTIVE_CHANCE, debug=block)

    def _snapshot(self, direction_chance: int, room_chance: int, debug: Optional[TileBlock] = None) -> None:
        self.metrics["snapshots"] += 1
        self.renderer.snapshot(self._grid.view(), self.agent.position, direction_chance, room_chance, debug)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------
    def run(self, strategy: str = "constructive") -> GenerationResult:
        if strategy == "constructive":
            return self.generate()
        if strategy == "stochastic":
            return self.generate_stochastic()
        raise ConfigError("strategy", f"must be one of {', '.join(STRATEGIES)}")

    def generate(self) -> GenerationResult:
        """Constructive walk: room, corridor, advance; stop after two straight failures."""
        self._begin("constructive")
        size = self.config.size
        self.agent = Agent(self._rng.randrange(size), self._rng.randrange(size))
        self._snapshot(CONSTRUCTIVE_CHANCE, CONSTRUCTIVE_CHANCE)
        # Shared by both phases: either success resets it.
        failures = 0
        while failures < 2:
            self.metrics["iterations"] += 1
            if self.add_room().ok:
                failures = 0
            else:
                failures += 1
            self._snapshot(CONSTRUCTIVE_CHANCE, CONSTRUCTIVE_CHANCE)
            corridor = self.add_corridor()
            if corridor.ok:
                failures = 0
                self.agent.advance(corridor.direction, corridor.length)
                log.debug(
                    event="corridor_added",
                    direction=corridor.direction.name,
                    length=corridor.length,
                    col=self.agent.col,
                    row=self.agent.row,
                    tile=self._tile_index(),
                )
            else:
                failures += 1
                log.debug(event="corridor_failed", col=self.agent.col, row=self.agent.row)
            self._snapshot(CONSTRUCTIVE_CHANCE, CONSTRUCTIVE_CHANCE)
        return self._finish()

    def generate_stochastic(self) -> GenerationResult:
        """Random walk with escalating turn and room chances until the fill goal is met."""
        self._begin("stochastic")
        cfg = self.config
        step = cfg.chance_step
        grid = self._grid
        agent = self.agent = Agent(self._rng.randint(1, cfg.size - 2), self._rng.randint(1, cfg.size - 2))
        grid.carve([grid.tile(agent.col, agent.row)], CORRIDOR)
        log.debug(event="corridor_tile", col=agent.col, row=agent.row, tile=self._tile_index())
        agent.direction_chance = step
        agent.room_chance = step
        agent.direction = self.randomize_direction()
        self._snapshot(agent.direction_chance, agent.room_chance)
        goal = cfg.fill_goal
        while grid.filled_count < goal:
            self.metrics["iterations"] += 1
            if self._rng.randrange(100) < agent.direction_chance:
                agent.direction_chance = 0
                agent.direction = self.randomize_direction(agent.direction)
                self.metrics["direction_changes"] += 1
                log.debug(event="direction_changed", direction=agent.direction.name)
            else:
                agent.direction_chance += step
            if self._rng.randrange(100) < agent.room_chance and self.add_room().ok:
                agent.room_chance = 0
            else:
                agent.room_chance += step
            col, row = agent.peek()
            if grid.is_interior(col, row):
                agent.advance(agent.direction)
                tile = grid.tile(col, row)
                if tile.kind == VOID:
                    grid.carve([tile], CORRIDOR)
                    log.debug(event="corridor_tile", col=col, row=row, tile=self._tile_index())
            else:
                # the border stays empty; turn in place without spending the roll
                agent.direction = self.randomize_direction(agent.direction)
            self._snapshot(agent.direction_chance, agent.room_chance)
        return self._finish()

    def _begin(self, strategy: str) -> None:
        if self.strategy is not None:
            raise GenerationError(f"generation session already ran ({self.strategy})")
        self.strategy = strategy
        self._started = time.perf_counter()
        log.debug(event="generation_start", strategy=strategy, seed=self.seed, size=self.config.size)

    def _finish(self) -> GenerationResult:
        view = self._grid.view()
        self.metrics["filled_tiles"] = self._grid.filled_count
        self.metrics["fill_ratio"] = round(self._grid.fill_ratio, 4)
        self.metrics["runtime_ms"] = int((time.perf_counter() - self._started) * 1000)
        self.renderer.final(view)
        log.info(
            event="generation_complete",
            strategy=self.strategy,
            seed=self.seed,
            rooms=self.metrics["rooms_placed"],
            corridors=self.metrics["corridors_placed"],
            filled=self.metrics["filled_tiles"],
            fill_ratio=self.metrics["fill_ratio"],
            iterations=self.metrics["iterations"],
            runtime_ms=self.metrics["runtime_ms"],
        )
        return GenerationResult(self.strategy, self.seed, view, list(self.rooms), self.agent.position, dict(self.metrics))


def generate_dungeon(
    strategy: str = "constructive",
    config: DungeonConfig | None = None,
    renderer: Renderer | None = None,
) -> GenerationResult:
    """Convenience wrapper: build a session and run ``strategy`` once."""
    return DungeonGenerator(config, renderer=renderer).run(strategy)


__all__ = [
    "DungeonGenerator",
    "GenerationError",
    "GenerationResult",
    "CONSTRUCTIVE_CHANCE",
    "generate_dungeon",
]
