"""
project: Agent Dungeon
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Endpoints:
    GET /api/dungeon/generate   run one generation session and return the map
    GET /api/dungeon/config     default generation parameters
"""

import threading

from flask import Blueprint, current_app, jsonify, request

from agentdungeon.dungeon import STRATEGIES, ConfigError, DungeonGenerator, RecordingRenderer
from agentdungeon.dungeon.api_helpers.params import build_generation_config
from agentdungeon.dungeon.api_helpers.payload import result_payload
from agentdungeon.logging_utils import get_logger

log = get_logger("agentdungeon.api")

bp_dungeon = Blueprint("dungeon", __name__)

# In-process cache (strategy, config)->GenerationResult. Lock-guarded because the
# Socket.IO server may interleave requests across threads/greenlets.
_result_cache = {}
_result_cache_lock = threading.Lock()


def _truthy(value) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def get_cached_result(strategy: str, config):
    """Return a finished result for (strategy, config), generating on a miss.

    The cache holds at most ``DUNGEON_CACHE_MAX`` results, evicting the oldest.
    """
    if current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return DungeonGenerator(config).run(strategy)
    key = (strategy, config.size, config.min_size, config.max_size, config.fill_target, config.chance_step, config.seed)
    with _result_cache_lock:
        result = _result_cache.get(key)
    if result is not None:
        return result
    result = DungeonGenerator(config).run(strategy)
    cap = current_app.config.get("DUNGEON_CACHE_MAX", 8)
    with _result_cache_lock:
        _result_cache[key] = result
        while len(_result_cache) > cap:
            _result_cache.pop(next(iter(_result_cache)))
    return result


def clear_cache() -> None:
    with _result_cache_lock:
        _result_cache.clear()


@bp_dungeon.errorhandler(ConfigError)
def handle_config_error(exc: ConfigError):
    return jsonify({"error": exc.message, "field": exc.field}), 400


@bp_dungeon.route("/api/dungeon/generate")
def generate_dungeon():
    """
    Generate a dungeon.

    Query: strategy=constructive|stochastic, seed=<int|str>, size=<int>, frames=0|1
    Response: { seed, strategy, size, rows, filled, agent, rooms, metrics, frames? }
    Rows are run-length encoded (see agentdungeon.utils.tile_compress).
    """
    strategy, config = build_generation_config(
        current_app.config["DUNGEON_DEFAULTS"],
        strategy=request.args.get("strategy"),
        seed=request.args.get("seed"),
        size=request.args.get("size"),
    )
    if _truthy(request.args.get("frames", "0")):
        # Frame recordings are large; never cached.
        renderer = RecordingRenderer(keep_debug=_truthy(request.args.get("debug", "0")))
        result = DungeonGenerator(config, renderer=renderer).run(strategy)
        payload = result_payload(result, frames=renderer.frames)
    else:
        result = get_cached_result(strategy, config)
        payload = result_payload(result)
    log.info(event="api_generate", strategy=strategy, seed=result.seed, size=config.size)
    return jsonify(payload)


@bp_dungeon.route("/api/dungeon/config")
def dungeon_config():
    """
    Return default generation parameters and available strategies.
    Response: { 'defaults': {...}, 'strategies': [...] }
    """
    defaults = current_app.config["DUNGEON_DEFAULTS"]
    return jsonify({"defaults": defaults.to_dict(), "strategies": list(STRATEGIES)})
