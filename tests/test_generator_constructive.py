import pytest

from agentdungeon.dungeon import (
    ROOM,
    VOID,
    Agent,
    ConfigError,
    CorridorResult,
    Direction,
    DungeonConfig,
    DungeonGenerator,
    GenerationError,
    RecordingRenderer,
    RoomResult,
)
from agentdungeon.dungeon import generator as generator_mod
from agentdungeon.dungeon.generator import CONSTRUCTIVE_CHANCE
from agentdungeon.dungeon.rooms import Room
from tests.dungeon_test_utils import ScriptedRandom, border_cells


def _script(monkeypatch, rooms, corridors):
    """Replace room and corridor placement with scripted outcomes."""
    rooms = list(rooms)
    corridors = list(corridors)
    monkeypatch.setattr(generator_mod, "place_room", lambda *a, **k: rooms.pop(0))
    monkeypatch.setattr(generator_mod, "add_corridor", lambda *a, **k: corridors.pop(0))


def test_stops_after_two_consecutive_failures(monkeypatch):
    _script(monkeypatch, [RoomResult.failed()], [CorridorResult.failed()])
    renderer = RecordingRenderer()
    result = DungeonGenerator(DungeonConfig(seed=3), renderer=renderer).generate()
    assert result.metrics["iterations"] == 1
    assert result.metrics["room_failures"] == 1
    assert result.metrics["corridor_failures"] == 1
    assert result.rooms == []
    # start frame plus one per phase
    assert len(renderer.frames) == 3
    assert renderer.final_calls == 1
    assert renderer.final_view == result.view


def test_failure_counter_is_shared_and_reset_by_either_phase(monkeypatch):
    placed = RoomResult(Room(5, 7, 5, 7), 9)
    _script(
        monkeypatch,
        rooms=[RoomResult.failed(), placed, RoomResult.failed()],
        corridors=[CorridorResult(Direction.EAST, 0), CorridorResult.failed(), CorridorResult.failed()],
    )
    result = DungeonGenerator(DungeonConfig(seed=3)).generate()
    # fail/ok -> 0, ok/fail -> 1, fail/fail -> 3 ends the walk
    assert result.metrics["iterations"] == 3
    assert result.metrics["rooms_placed"] == 1
    assert result.rooms == [Room(5, 7, 5, 7)]
    assert result.metrics["corridors_placed"] == 1


def test_agent_advances_to_corridor_end(monkeypatch):
    _script(
        monkeypatch,
        rooms=[RoomResult.failed(), RoomResult.failed()],
        corridors=[CorridorResult(Direction.SOUTH, 4), CorridorResult.failed()],
    )
    renderer = RecordingRenderer()
    result = DungeonGenerator(DungeonConfig(seed=3), renderer=renderer).generate()
    start_col, start_row = renderer.frames[0].agent
    assert result.agent == (start_col, start_row + 4)


def test_constructive_chances_always_full():
    renderer = RecordingRenderer()
    DungeonGenerator(DungeonConfig(seed=11), renderer=renderer).generate()
    assert renderer.frames
    assert all(f.direction_chance == CONSTRUCTIVE_CHANCE and f.room_chance == CONSTRUCTIVE_CHANCE for f in renderer.frames)


def test_probe_frames_carry_clearance_regions():
    renderer = RecordingRenderer()
    result = DungeonGenerator(DungeonConfig(seed=11), renderer=renderer).generate()
    probes = [f for f in renderer.frames if f.debug is not None]
    if result.metrics["corridors_placed"]:
        assert probes
    for frame in probes:
        cols = {c for c, _ in frame.debug}
        rows = {r for _, r in frame.debug}
        # a probe is a three-wide strip
        assert min(len(cols), len(rows)) == 3


def test_real_run_keeps_border_empty_and_records_rooms():
    result = DungeonGenerator(DungeonConfig(seed=21)).generate()
    view = result.view
    assert all(view.kind(c, r) == VOID for c, r in border_cells(view.size))
    assert result.metrics["rooms_placed"] == len(result.rooms)
    for room in result.rooms:
        assert all(view.kind(c, r) == ROOM for c, r in room.cells())
    assert result.metrics["filled_tiles"] == view.filled_count


def test_second_run_on_same_session_is_rejected():
    gen = DungeonGenerator(DungeonConfig(seed=5))
    gen.generate()
    with pytest.raises(GenerationError):
        gen.generate()
    with pytest.raises(GenerationError):
        gen.generate_stochastic()


def test_unknown_strategy_is_a_config_error():
    with pytest.raises(ConfigError) as exc:
        DungeonGenerator(DungeonConfig(seed=5)).run("maze")
    assert exc.value.field == "strategy"


def test_random_seed_assigned_when_none_given():
    gen = DungeonGenerator(DungeonConfig())
    assert isinstance(gen.seed, int)
    assert gen.config.seed == gen.seed


def test_session_room_offset_and_corridor_search_do_not_carve():
    renderer = RecordingRenderer()
    gen = DungeonGenerator(DungeonConfig(), renderer=renderer, rng=ScriptedRandom(ints=[5, 5, 3]))
    gen.agent = Agent(10, 10)
    assert gen.add_room().room == Room(8, 12, 8, 12)
    assert gen.room_offset(Direction.EAST) == 2
    assert gen.room_offset(Direction.WEST) == 2
    before = gen.view()
    candidate = gen.generate_corridor(Direction.EAST)
    assert candidate.h_offset == 3
    assert [t.col for t in candidate.tiles] == [13, 14, 15, 16]
    assert gen.view() == before
    # the clearance region was shown to the renderer
    assert renderer.frames[-1].debug is not None
    assert renderer.frames[-1].direction_chance == CONSTRUCTIVE_CHANCE
