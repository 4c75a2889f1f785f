import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from agentdungeon import create_app, socketio  # noqa: E402
from agentdungeon.dungeon import DungeonConfig, DungeonGenerator, RecordingRenderer  # noqa: E402
from agentdungeon.routes.dungeon_api import clear_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app(tmp_path_factory):
    app = create_app({"TESTING": True, "DUNGEON_CACHE_MAX": 4})
    app.instance_path = str(tmp_path_factory.mktemp("instance"))
    return app


@pytest.fixture()
def client(test_app):
    clear_cache()
    return test_app.test_client()


@pytest.fixture()
def socket_client(test_app):
    # Flask-SocketIO provides a test client we can use against the global socketio instance
    test_client = socketio.test_client(test_app, flask_test_client=test_app.test_client())
    yield test_client
    test_client.disconnect()


@pytest.fixture()
def make_generator():
    """Factory for seeded generators with a recording renderer attached."""

    def _make(seed: int = 1234, **overrides):
        renderer = RecordingRenderer()
        gen = DungeonGenerator(DungeonConfig(seed=seed, **overrides), renderer=renderer)
        return gen, renderer

    return _make
