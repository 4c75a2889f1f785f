"""Renderer (observer) interface for generation progress.

The generator calls ``snapshot`` after every state change and ``final`` once
per run. Nothing a renderer returns is consulted, so the base class, which
does nothing, is a valid renderer for headless runs.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

from .cells import Coord
from .grid import GridView, TileBlock


class Frame(NamedTuple):
    view: GridView
    agent: Coord
    direction_chance: int
    room_chance: int
    debug: Optional[Tuple[Coord, ...]] = None


class Renderer:
    def snapshot(
        self,
        view: GridView,
        agent: Coord,
        direction_chance: int,
        room_chance: int,
        debug: Optional[TileBlock] = None,
    ) -> None:
        pass

    def final(self, view: GridView) -> None:
        pass


NullRenderer = Renderer


class RecordingRenderer(Renderer):
    """Keep every snapshot as a :class:`Frame` for replay.

    ``keep_debug=False`` drops the transient corridor-probe overlays, which
    are the bulk of constructive-run frames.
    """

    def __init__(self, keep_debug: bool = True):
        self.keep_debug = keep_debug
        self.frames: List[Frame] = []
        self.final_view: Optional[GridView] = None
        self.final_calls = 0

    def snapshot(self, view, agent, direction_chance, room_chance, debug=None):
        if debug is not None and not self.keep_debug:
            return
        coords = debug.coords() if debug is not None else None
        self.frames.append(Frame(view, tuple(agent), direction_chance, room_chance, coords))

    def final(self, view):
        self.final_view = view
        self.final_calls += 1


__all__ = ["Frame", "Renderer", "NullRenderer", "RecordingRenderer"]
