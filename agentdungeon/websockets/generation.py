"""Socket.IO handlers streaming generation progress.

Events:
    - generate: Run one generation session; payload { strategy?, seed?, size?, debug? }

Emits (to the requesting client):
    - dungeon_frame: one per renderer snapshot (corridor probes only when debug is true)
    - dungeon_final: the finished map, once
    - dungeon_summary: seed, strategy, rooms and metrics, once
    - error: invalid payload or configuration { message, field, code }
"""

from flask import current_app
from flask_socketio import emit

from agentdungeon import socketio
from agentdungeon.dungeon import ConfigError, DungeonGenerator, Frame, Renderer
from agentdungeon.dungeon.api_helpers.params import build_generation_config
from agentdungeon.dungeon.api_helpers.payload import frame_payload, result_payload, view_payload
from agentdungeon.logging_utils import get_logger

from .validation import GENERATE, validate

_log = get_logger("agentdungeon.ws")


class SocketIORenderer(Renderer):
    """Forward snapshots to the connected client as they happen."""

    def __init__(self, emit_fn=emit, include_debug: bool = False):
        self._emit = emit_fn
        self.include_debug = include_debug
        self.sent = 0

    def snapshot(self, view, agent, direction_chance, room_chance, debug=None):
        if debug is not None and not self.include_debug:
            return
        frame = Frame(view, tuple(agent), direction_chance, room_chance, debug.coords() if debug is not None else None)
        self._emit("dungeon_frame", frame_payload(frame, self.sent))
        self.sent += 1

    def final(self, view):
        self._emit("dungeon_final", view_payload(view))


@socketio.on("generate")
def handle_generate(data):
    ok, result = validate(data if data is not None else {}, GENERATE)
    if not ok:
        emit("error", {"message": f"Invalid generate: {result['error']}", "field": result["field"], "code": result["code"]})
        return
    try:
        strategy, config = build_generation_config(
            current_app.config["DUNGEON_DEFAULTS"],
            strategy=result.get("strategy"),
            seed=result.get("seed"),
            size=result.get("size"),
        )
    except ConfigError as exc:
        emit("error", {"message": f"Invalid generate: {exc.message}", "field": exc.field, "code": "config"})
        return
    renderer = SocketIORenderer(include_debug=result.get("debug", False))
    outcome = DungeonGenerator(config, renderer=renderer).run(strategy)
    summary = result_payload(outcome)
    summary.pop("rows")
    emit("dungeon_summary", summary)
    _log.info(event="ws_generate", strategy=strategy, seed=outcome.seed, frames=renderer.sent)
