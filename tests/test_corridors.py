import random

from agentdungeon.dungeon import CORRIDOR, ROOM, VOID, CorridorCandidate, CorridorResult, DungeonConfig, Direction, Grid
from agentdungeon.dungeon.corridors import add_corridor, corridor_bounds, room_offset, search_corridor
from tests.dungeon_test_utils import ScriptedRandom

CFG = DungeonConfig()


def _room_grid():
    g = Grid(25)
    g.carve(g.range_query(8, 12, 8, 12), ROOM)
    return g


def test_room_offset_counts_room_tiles_ahead():
    g = _room_grid()
    assert room_offset(g, 10, 10, Direction.EAST) == 2
    assert room_offset(g, 10, 10, Direction.NORTH) == 2
    assert room_offset(g, 8, 10, Direction.EAST) == 4
    assert room_offset(g, 12, 10, Direction.EAST) == 0
    # outside the room looking in
    assert room_offset(g, 7, 10, Direction.EAST) == 5


def test_room_offset_zero_at_grid_edge():
    g = Grid(25)
    assert room_offset(g, 24, 10, Direction.EAST) == 0
    assert room_offset(g, 0, 10, Direction.WEST) == 0
    assert room_offset(g, 5, 0, Direction.NORTH) == 0


def test_corridor_bounds_shapes():
    check, commit = corridor_bounds(10, 10, Direction.NORTH, 4)
    assert check == (9, 11, 5, 10)
    assert commit == (10, 10, 6, 10)
    check, commit = corridor_bounds(10, 10, Direction.WEST, 3)
    assert check == (6, 10, 9, 11)
    assert commit == (7, 10, 10, 10)


def test_length_metric_counts_tiles_and_offset():
    g = Grid(25)
    five = g.range_query(5, 9, 10, 10)
    candidate = CorridorCandidate(five, 0, 0)
    assert candidate.length == 5
    result = CorridorResult.from_candidate(Direction.EAST, candidate)
    assert result.length == 4
    assert CorridorCandidate(five, -2, 0).length == 7
    assert CorridorCandidate(five, 0, 3).length == 8


def test_east_corridor_in_empty_grid_starts_one_tile_ahead():
    g = Grid(25)
    candidate = search_corridor(g, 10, 10, Direction.EAST, CFG, ScriptedRandom(ints=[4]))
    assert candidate is not None
    assert (candidate.h_offset, candidate.v_offset) == (1, 0)
    assert [t.position for t in candidate.tiles] == [(c, 10) for c in range(11, 16)]
    assert candidate.length == 6


def test_corridor_leaving_room_starts_past_far_edge():
    g = _room_grid()
    candidate = search_corridor(g, 10, 10, Direction.EAST, CFG, ScriptedRandom(ints=[3]))
    assert candidate.h_offset == 3
    cols = [t.col for t in candidate.tiles]
    assert cols == [13, 14, 15, 16]
    assert candidate.length == 7
    # the agent advances length - 1 and lands on the last corridor tile
    assert 10 + CorridorResult.from_candidate(Direction.EAST, candidate).length == 16


def test_corridor_shrinks_around_obstacle():
    g = Grid(25)
    g.carve([g.tile(17, 11)], CORRIDOR)
    probes = []
    candidate = search_corridor(g, 10, 10, Direction.EAST, CFG, ScriptedRandom(ints=[7]), on_probe=probes.append)
    assert candidate is not None
    assert [t.col for t in candidate.tiles] == list(range(11, 16))
    # lengths 7, 6, 5 collide with the obstacle; 4 is clear
    assert len(probes) == 4
    assert all(p.row1 == 9 and p.row2 == 11 for p in probes)
    # search never writes
    assert g.kind(12, 10) == VOID


def test_corridor_shrinks_when_check_region_leaves_grid():
    g = Grid(25)
    probes = []
    candidate = search_corridor(g, 17, 10, Direction.EAST, CFG, ScriptedRandom(ints=[7]), on_probe=probes.append)
    assert len(probes) == 1
    assert [t.col for t in candidate.tiles] == list(range(18, 24))


def test_corridor_rejected_near_edge_without_probing():
    g = Grid(25)
    probes = []
    assert search_corridor(g, 10, 3, Direction.NORTH, CFG, ScriptedRandom(ints=[5]), on_probe=probes.append) is None
    assert search_corridor(g, 3, 10, Direction.WEST, CFG, ScriptedRandom(ints=[5]), on_probe=probes.append) is None
    assert search_corridor(g, 21, 10, Direction.EAST, CFG, ScriptedRandom(ints=[5]), on_probe=probes.append) is None
    assert search_corridor(g, 10, 21, Direction.SOUTH, CFG, ScriptedRandom(ints=[5]), on_probe=probes.append) is None
    assert probes == []


def test_add_corridor_carves_first_usable_direction():
    g = Grid(25)
    # randrange 1 picks EAST from [NORTH, EAST, SOUTH, WEST]
    result = add_corridor(g, 10, 10, CFG, ScriptedRandom(ints=[4], ranges=[1]))
    assert result.ok
    assert result.direction is Direction.EAST
    assert result.length == 5
    assert all(g.kind(c, 10) == CORRIDOR for c in range(11, 16))
    assert g.kind(10, 10) == VOID
    assert g.filled_count == 5


def test_add_corridor_tries_next_direction_after_failure():
    g = Grid(25)
    # NORTH first (too close to the top), then EAST from the remaining three
    result = add_corridor(g, 10, 2, CFG, ScriptedRandom(ints=[5, 3], ranges=[0, 0]))
    assert result.direction is Direction.EAST
    assert [t.position for t in result.tiles] == [(c, 2) for c in range(11, 15)]


def test_add_corridor_all_directions_fail():
    g = Grid(7)
    result = add_corridor(g, 3, 3, DungeonConfig(size=7), random.Random(5))
    assert not result.ok
    assert result == CorridorResult.failed()
    assert result.length == 0 and result.tiles is None
    assert g.filled_count == 0
