"""Tests for grid assembly: tiles, corridors, entry/exit and validation."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.ai.pathfinding import Pathfinder
from delve.config import GenerationConfig
from delve.core.enums import TileType
from delve.core.errors import GenerationError
from delve.core.models import Area, Position
from delve.core.rooms import Door, Room
from delve.engine.map_generation import generate_level
from delve.systems.grid_assembler import GridAssembler

CONFIG = GenerationConfig(map_width=60, map_height=30, room_count=5, max_room_size=8)
MAP_AREA = Area.rectangle(Position(0, 0), 20, 10)


def _two_rooms() -> list[Room]:
    """Two rooms facing each other across a 4-tile strip of rock."""
    left = Room(id=0, area=Area.rectangle(Position(1, 1), 5, 5), doors=[Door(Position(5, 3))])
    right = Room(id=1, area=Area.rectangle(Position(10, 1), 5, 5), doors=[Door(Position(10, 3))])
    left.entry = Position(3, 3)
    right.exit = Position(12, 3)
    return [left, right]


# ---------------------------------------------------------------------------
# Hand-built layouts
# ---------------------------------------------------------------------------

class TestAssemblerPhases:
    def test_build_tiles(self):
        m = GridAssembler().build_tiles(MAP_AREA, _two_rooms())
        assert m.get_tile_type(Position(0, 0)) == TileType.WALL
        assert m.get_tile_type(Position(1, 1)) == TileType.WALL
        assert m.get_tile_type(Position(3, 3)) == TileType.ROOM
        assert m.get_tile_type(Position(5, 3)) == TileType.DOOR
        assert m.get_tile_type(Position(7, 3)) == TileType.WALL

    def test_carve_straight_corridor(self):
        assembler = GridAssembler()
        m = assembler.build_tiles(MAP_AREA, _two_rooms())
        assert assembler.carve_corridors(m) == 4
        for x in range(6, 10):
            assert m.get_tile_type(Position(x, 3)) == TileType.CORRIDOR

    def test_assemble_stamps_entry_exit(self):
        m = GridAssembler().assemble(MAP_AREA, _two_rooms(), seed="hand")
        assert m.get_tile_type(Position(3, 3)) == TileType.ENTRY
        assert m.get_tile_type(Position(12, 3)) == TileType.EXIT
        assert m.seed == "hand"

    def test_assembled_rooms_connected(self):
        m = GridAssembler().assemble(MAP_AREA, _two_rooms())
        path = Pathfinder(m).find_path(Position(3, 3), Position(12, 3))
        assert path[0] == Position(3, 3)
        assert path[-1] == Position(12, 3)

    def test_room_outside_map_rejected(self):
        rooms = [Room(id=0, area=Area.rectangle(Position(18, 1), 5, 5))]
        with pytest.raises(GenerationError):
            GridAssembler().build_tiles(MAP_AREA, rooms)

    def test_finalize_requires_entry_and_exit(self):
        rooms = _two_rooms()
        rooms[1].exit = None
        with pytest.raises(GenerationError, match="one entry and one exit"):
            GridAssembler().assemble(MAP_AREA, rooms)

    def test_finalize_rejects_unstamped_door(self):
        assembler = GridAssembler()
        rooms = _two_rooms()
        m = assembler.assemble(MAP_AREA, rooms)
        rooms[0].doors.append(Door(Position(3, 1)))
        with pytest.raises(GenerationError, match="not stamped"):
            assembler.finalize(m)

    def test_rooms_without_doors_cannot_connect(self):
        rooms = _two_rooms()
        rooms[1].doors = []
        assembler = GridAssembler()
        m = assembler.build_tiles(MAP_AREA, rooms)
        with pytest.raises(GenerationError):
            assembler.carve_corridors(m)


# ---------------------------------------------------------------------------
# Generated levels
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module", params=["alpha", "beta", "gamma"])
def level_map(request):
    return generate_level(CONFIG, seed=request.param)


class TestGeneratedLevel:
    def test_grid_shape(self, level_map):
        assert len(level_map.tiles) == CONFIG.map_height
        assert all(len(row) == CONFIG.map_width for row in level_map.tiles)

    def test_single_entry_and_exit_tile(self, level_map):
        counts = level_map.tile_counts()
        assert counts[TileType.ENTRY] == 1
        assert counts[TileType.EXIT] == 1

    def test_traversability_matches_type(self, level_map):
        walkable = {TileType.ROOM, TileType.CORRIDOR, TileType.DOOR, TileType.ENTRY, TileType.EXIT}
        for row in level_map.tiles:
            for details in row:
                assert details.traversable == (details.tile_type in walkable)

    def test_doors_stamped_on_perimeter(self, level_map):
        for room in level_map.rooms:
            for door in room.doors:
                assert room.is_perimeter(door.position)
                assert level_map.get_tile_type(door.position) == TileType.DOOR

    def test_corridors_stay_outside_rooms(self, level_map):
        for pos in level_map.area.get_positions():
            if level_map.get_tile_type(pos) == TileType.CORRIDOR:
                assert level_map.find_room(pos) is None

    def test_every_room_reachable_from_entry(self, level_map):
        entry = level_map.entry_room().get_entry()
        pf = Pathfinder(level_map)
        for room in level_map.rooms:
            target = room.get_inside_area().start_position
            path = pf.find_path(entry, target)
            assert path, f"room {room.id} unreachable from entry {entry}"
            assert all(level_map.is_traversable(p) for p in path)

    def test_exit_reachable_from_entry(self, level_map):
        entry = level_map.entry_room().get_entry()
        exit_ = level_map.exit_room().get_exit()
        assert Pathfinder(level_map).find_path(entry, exit_)

    def test_ascii_dump(self, level_map):
        lines = level_map.to_ascii().split("\n")
        assert len(lines) == CONFIG.map_height
        assert all(len(line) == CONFIG.map_width for line in lines)


class TestDeterminism:
    def test_same_seed_same_level(self):
        a = generate_level(CONFIG, seed="repeat")
        b = generate_level(CONFIG, seed="repeat")
        assert a.fingerprint() == b.fingerprint()
        assert a.to_ascii() == b.to_ascii()

    def test_different_seed_different_level(self):
        a = generate_level(CONFIG, seed="one")
        b = generate_level(CONFIG, seed="two")
        assert a.fingerprint() != b.fingerprint()
