"""Terminal renderer for the CLI.

Draws the grid two characters per tile so it looks roughly square. With color
enabled rooms are gray, corridors white, the agent red and corridor probes
green; the final map shows filled vs void only.
"""

from __future__ import annotations

import sys
import time
from typing import Iterable, Optional, Set

from colorama import Back, Cursor, Style
from colorama.ansi import clear_screen

from agentdungeon.dungeon import CORRIDOR, ROOM, VOID, GridView, Renderer
from agentdungeon.dungeon.cells import Coord

GLYPHS = {VOID: "  ", ROOM: "[]", CORRIDOR: ".."}
AGENT_GLYPH = "@@"
DEBUG_GLYPH = "++"
FILLED_GLYPH = "##"

COLORS = {VOID: Back.BLACK, ROOM: Back.LIGHTBLACK_EX, CORRIDOR: Back.WHITE}


def render_map(
    view: GridView,
    agent: Optional[Coord] = None,
    debug: Optional[Iterable[Coord]] = None,
    final: bool = False,
    color: bool = False,
) -> str:
    """Return the map as text, one line per grid row."""
    debug_cells: Set[Coord] = set(debug or ())
    lines = []
    for row in range(view.size):
        out = []
        for col in range(view.size):
            kind = view.kind(col, row)
            if final:
                filled = kind != VOID
                if color:
                    out.append((Back.WHITE if filled else Back.BLACK) + "  ")
                else:
                    out.append(FILLED_GLYPH if filled else GLYPHS[VOID])
                continue
            if (col, row) == agent:
                out.append(Back.RED + "  " if color else AGENT_GLYPH)
            elif (col, row) in debug_cells:
                out.append(Back.GREEN + "  " if color else DEBUG_GLYPH)
            else:
                out.append(COLORS[kind] + "  " if color else GLYPHS[kind])
        line = "".join(out)
        lines.append(line + Style.RESET_ALL if color else line.rstrip())
    return "\n".join(lines)


class ConsoleRenderer(Renderer):
    """Print the finished map, optionally animating every snapshot first."""

    def __init__(self, stream=None, color: bool = False, animate: bool = False, delay: float = 0.05, show_debug: bool = False):
        self.stream = stream or sys.stdout
        self.color = color
        self.animate = animate
        self.delay = delay
        self.show_debug = show_debug

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def snapshot(self, view, agent, direction_chance, room_chance, debug=None):
        if not self.animate or (debug is not None and not self.show_debug):
            return
        body = render_map(view, agent, debug.coords() if debug is not None else None, color=self.color)
        status = f"Chance to change direction: {direction_chance}%  Chance to add a room: {room_chance}%"
        prefix = Cursor.POS(1, 1) + clear_screen() if self.color else ""
        self._write(f"{prefix}{body}\n{status}\n")
        if self.delay > 0:
            time.sleep(self.delay)

    def final(self, view):
        prefix = Cursor.POS(1, 1) + clear_screen() if self.animate and self.color else ""
        self._write(f"{prefix}{render_map(view, final=True, color=self.color)}\n")
