from agentdungeon.dungeon import Grid
from agentdungeon.utils.tile_compress import decode_rows
from agentdungeon.websockets.generation import SocketIORenderer
from agentdungeon.websockets.validation import GENERATE, validate


def _extract(event_name, received):
    return [p["args"][0] for p in received if p["name"] == event_name]


def test_generate_streams_frames_then_final(socket_client):
    socket_client.emit("generate", {"strategy": "stochastic", "seed": 12, "size": 12})
    received = socket_client.get_received()
    names = [p["name"] for p in received]
    frames = _extract("dungeon_frame", received)
    finals = _extract("dungeon_final", received)
    summaries = _extract("dungeon_summary", received)
    assert frames and len(finals) == 1 and len(summaries) == 1
    assert names.index("dungeon_final") > max(i for i, n in enumerate(names) if n == "dungeon_frame")
    assert [f["index"] for f in frames] == list(range(len(frames)))
    assert frames[0]["direction_chance"] == 2
    assert frames[-1]["filled"] == finals[0]["filled"]
    assert len(decode_rows(finals[0]["rows"])) == 12
    summary = summaries[0]
    assert summary["seed"] == 12 and summary["strategy"] == "stochastic"
    assert "rows" not in summary
    assert summary["metrics"]["iterations"] + 1 == len(frames)


def test_probe_frames_only_when_debug_requested(socket_client):
    socket_client.emit("generate", {"seed": 3, "size": 15})
    plain = _extract("dungeon_frame", socket_client.get_received())
    assert all(f["debug"] is None for f in plain)
    socket_client.emit("generate", {"seed": 3, "size": 15, "debug": True})
    received = socket_client.get_received()
    verbose = _extract("dungeon_frame", received)
    summary = _extract("dungeon_summary", received)[0]
    assert len(verbose) >= len(plain)
    if summary["metrics"]["corridors_placed"]:
        assert any(f["debug"] for f in verbose)


def test_numeric_lookalike_seed_generates(socket_client):
    socket_client.emit("generate", {"seed": "--5", "size": 9})
    received = socket_client.get_received()
    assert not _extract("error", received)
    summary = _extract("dungeon_summary", received)[0]
    assert isinstance(summary["seed"], int)


def test_invalid_payload_emits_error(socket_client):
    socket_client.emit("generate", {"strategy": "maze"})
    errors = _extract("error", socket_client.get_received())
    assert errors and errors[0]["field"] == "strategy"
    assert errors[0]["code"] == "choices"

    socket_client.emit("generate", {"size": 500})
    errors = _extract("error", socket_client.get_received())
    assert errors[0]["code"] == "max"


def test_config_error_emits_error(socket_client):
    socket_client.emit("generate", {"size": 4})
    received = socket_client.get_received()
    errors = _extract("error", received)
    assert errors[0]["code"] == "config"
    assert errors[0]["field"] == "size"
    assert not _extract("dungeon_frame", received)


def test_validate_normalizes_and_rejects():
    ok, data = validate({"strategy": " stochastic ", "seed": "crypt", "debug": False}, GENERATE)
    assert ok and data == {"strategy": "stochastic", "seed": "crypt", "debug": False}
    ok, err = validate({"size": True}, GENERATE)
    assert not ok and err["code"] == "type"
    ok, err = validate({"seed": "x" * 65}, GENERATE)
    assert not ok and err["code"] == "max_len"
    ok, err = validate(["not", "a", "dict"], GENERATE)
    assert not ok and err["field"] == "__root__"
    ok, err = validate({"strategy": "   "}, GENERATE)
    assert not ok and err["code"] == "empty"


def test_socketio_renderer_counts_and_skips_probes():
    sent = []
    g = Grid(7)
    r = SocketIORenderer(emit_fn=lambda name, payload: sent.append((name, payload)))
    r.snapshot(g.view(), (3, 3), 2, 2)
    r.snapshot(g.view(), (3, 3), 100, 100, debug=g.range_query(2, 4, 2, 4))
    r.final(g.view())
    assert [name for name, _ in sent] == ["dungeon_frame", "dungeon_final"]
    assert r.sent == 1
    assert sent[0][1]["agent"] == [3, 3]
