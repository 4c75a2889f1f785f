"""
project: Agent Dungeon
module: __init__.py
License: MIT

Flask application factory and Socket.IO setup.

The dungeon generator itself lives in :mod:`agentdungeon.dungeon` and never
calls into the web layer; this module wires it to an HTTP blueprint and a
Socket.IO handler that streams generation frames. Configuration is sourced
from environment variables (optionally via a ``.env`` file) with defaults
suited to development.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_socketio import SocketIO

__version__ = "0.2.0"

# Load .env if present so DUNGEON_* and server settings can be supplied
# without exporting shell variables during development.
load_dotenv()

socketio = SocketIO()


def create_app(overrides: dict | None = None) -> Flask:
    """Build the Flask app, register routes and bind Socket.IO.

    ``overrides`` is applied to ``app.config`` after environment defaults, so
    tests can pin ``DUNGEON_*`` values.
    """
    from agentdungeon.dungeon import DungeonConfig

    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs can still serve requests; file logging is skipped.
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DUNGEON_DISABLE_CACHE=os.getenv("DUNGEON_DISABLE_CACHE", "0") == "1",
        DUNGEON_CACHE_MAX=int(os.getenv("DUNGEON_CACHE_MAX", "8")),
    )
    if overrides:
        app.config.update(overrides)
    app.config["DUNGEON_DEFAULTS"] = DungeonConfig.from_app_config(app.config, base=DungeonConfig.from_env())

    from agentdungeon.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    # Import websocket handlers so their event decorators register before init_app binds them
    from agentdungeon.websockets import generation as _ws_generation  # noqa: F401

    socketio.init_app(
        app,
        async_mode=os.getenv("SOCKETIO_ASYNC_MODE") or None,
        cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    )

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
