"""Grid assembler: rasterizes planned rooms into a Map.

Phases, in order:
  1. ``build_tiles``      fill with WALL, stamp room interiors and doors
  2. ``carve_corridors``  connect doors through rock with A*-found corridors
  3. ``stamp_entry_exit`` ENTRY / EXIT tiles at the designated positions
  4. ``finalize``         verify the grid invariants

"Rock" is any WALL cell outside every room area; corridors are only ever
carved through rock (or along existing corridors) and never leave the map.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.ai.pathfinding import Pathfinder
from delve.core.dungeon_map import Map
from delve.core.enums import TileType
from delve.core.errors import GenerationError
from delve.core.models import Area, Position
from delve.core.tiles import tile

if TYPE_CHECKING:
    from delve.core.rooms import Door, Room

logger = logging.getLogger(__name__)

_FLOOR_TYPES = (TileType.ROOM, TileType.ENTRY, TileType.EXIT)
_ALWAYS_TRAVERSABLE = (TileType.ROOM, TileType.CORRIDOR, TileType.DOOR, TileType.ENTRY, TileType.EXIT)


class GridAssembler:
    """Builds the tile grid for one level from its planned rooms."""

    __slots__ = ()

    def assemble(self, map_area: Area, rooms: list[Room], seed: str = "") -> Map:
        """Run every phase without progress reporting."""
        level_map = self.build_tiles(map_area, rooms, seed)
        self.carve_corridors(level_map)
        self.stamp_entry_exit(level_map)
        self.finalize(level_map)
        return level_map

    # -- phase 1 --

    def build_tiles(self, map_area: Area, rooms: list[Room], seed: str = "") -> Map:
        level_map = Map.filled(map_area, TileType.WALL, seed=seed)
        level_map.rooms = rooms
        room_tile = tile(TileType.ROOM)
        door_tile = tile(TileType.DOOR)
        for room in rooms:
            if not map_area.contains_area(room.area):
                raise GenerationError(f"Room {room.id} {room.area!r} lies outside map area {map_area!r}")
            for position in room.get_inside_area().get_positions():
                level_map.set_tile(position, room_tile)
            for door in room.doors:
                level_map.set_tile(door.position, door_tile)
        return level_map

    # -- phase 2 --

    def carve_corridors(self, level_map: Map) -> int:
        """Wire every door to a door of another room. Returns corridor tiles carved.

        Consecutive rooms (in placement order) are always wired together, so
        every room is reachable from every other one.
        """
        rooms = level_map.rooms
        room_cells = {p for room in rooms for p in room.area.get_positions()}
        connected: set[Position] = set()
        carved = 0

        for idx in range(1, len(rooms)):
            door_a, door_b = _closest_door_pair(rooms[idx].doors, rooms[idx - 1].doors)
            carved += self._carve(level_map, room_cells, door_a.position, door_b.position)
            connected.update((door_a.position, door_b.position))

        for room in rooms:
            others = [d for r in rooms if r.id != room.id for d in r.doors]
            for door in room.doors:
                if door.position in connected:
                    continue
                _, target = _closest_door_pair([door], others)
                carved += self._carve(level_map, room_cells, door.position, target.position)
                connected.update((door.position, target.position))

        logger.info("Carved %d corridor tiles between %d doors", carved, len(connected))
        return carved

    def _carve(self, level_map: Map, room_cells: set[Position], start: Position, goal: Position) -> int:
        tiles = level_map.tiles
        origin = level_map.area.start_position

        def passable(x: int, y: int) -> bool:
            if x == goal.x and y == goal.y:
                return True
            if Position(x, y) in room_cells:
                return False
            return tiles[y - origin.y][x - origin.x].tile_type in (TileType.WALL, TileType.CORRIDOR)

        path = Pathfinder(level_map).search(start, goal, passable)
        if not path:
            raise GenerationError(f"Could not carve a corridor from door {start} to door {goal}")

        corridor_tile = tile(TileType.CORRIDOR)
        carved = 0
        for position in path:
            if level_map.get_tile_type(position) == TileType.WALL:
                level_map.set_tile(position, corridor_tile)
                carved += 1
        return carved

    # -- phase 3 --

    def stamp_entry_exit(self, level_map: Map) -> None:
        for room in level_map.rooms:
            if room.entry is not None:
                level_map.set_tile(room.entry, tile(TileType.ENTRY))
            if room.exit is not None:
                level_map.set_tile(room.exit, tile(TileType.EXIT))

    # -- phase 4 --

    def finalize(self, level_map: Map) -> None:
        """Check the assembled grid; raises GenerationError on any violation."""
        area = level_map.area
        if len(level_map.tiles) != area.height or any(len(row) != area.width for row in level_map.tiles):
            raise GenerationError(f"Tile grid does not match map area {area.get_description()}")

        for row in level_map.tiles:
            for details in row:
                if details.tile_type in _ALWAYS_TRAVERSABLE and not details.traversable:
                    raise GenerationError(f"{details.name} tile is not traversable")

        entries = [r.id for r in level_map.rooms if r.entry is not None]
        exits = [r.id for r in level_map.rooms if r.exit is not None]
        if len(entries) != 1 or len(exits) != 1:
            raise GenerationError(f"Expected one entry and one exit room, got {entries} / {exits}")

        for room in level_map.rooms:
            for position in room.get_inside_area().get_positions():
                if level_map.get_tile_type(position) not in _FLOOR_TYPES:
                    raise GenerationError(f"Room {room.id} interior at {position} is not floor")
            for door in room.doors:
                if not room.is_perimeter(door.position):
                    raise GenerationError(f"Door {door.position} is not on room {room.id} perimeter")
                if level_map.get_tile_type(door.position) != TileType.DOOR:
                    raise GenerationError(f"Door {door.position} of room {room.id} is not stamped")


def _closest_door_pair(doors_a: list[Door], doors_b: list[Door]) -> tuple[Door, Door]:
    """The (a, b) pair with the smallest Manhattan distance; first pair wins ties."""
    best: tuple[Door, Door] | None = None
    best_dist = 0
    for a in doors_a:
        for b in doors_b:
            dist = a.position.manhattan(b.position)
            if best is None or dist < best_dist:
                best = (a, b)
                best_dist = dist
    if best is None:
        raise GenerationError("Cannot connect rooms without doors")
    return best
