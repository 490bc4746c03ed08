"""Room & door planner: places non-overlapping rooms and attaches doors.

Rooms are sampled as random rectangles inside the map area (minus a rock
border kept free for corridors) and rejected when they come closer than
``room_gap`` tiles to an accepted room. The sampling loop is bounded by
``max_placement_attempts``; running out of attempts before the target room
count is reached raises InsufficientSpaceError instead of silently
returning fewer rooms.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.core.enums import Domain, Side
from delve.core.errors import InsufficientSpaceError
from delve.core.models import Area, Position
from delve.core.rooms import Door, Room

if TYPE_CHECKING:
    from delve.config import GenerationConfig
    from delve.systems.rng import LevelRNG

logger = logging.getLogger(__name__)


class RoomPlanner:
    """Produces the room arena for one level."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GenerationConfig, rng: LevelRNG) -> None:
        self._config = config
        self._rng = rng

    def plan(self, map_area: Area) -> list[Room]:
        """Place rooms, attach doors, and mark one entry and one exit room."""
        rooms = self.place_rooms(map_area)
        for room in rooms:
            room.doors = self.plan_doors(room)
        self.mark_entry_exit(rooms)
        return rooms

    # -- rooms --

    def place_rooms(self, map_area: Area) -> list[Room]:
        cfg = self._config
        bounds = map_area.shrink(cfg.map_border)
        max_width = min(cfg.max_room_size, bounds.width)
        max_height = min(cfg.max_room_size, bounds.height)

        rooms: list[Room] = []
        attempts = 0
        while len(rooms) < cfg.room_count and attempts < cfg.max_placement_attempts:
            attempts += 1
            width = self._rng.next_int(Domain.ROOMS, cfg.min_room_size, max_width)
            height = self._rng.next_int(Domain.ROOMS, cfg.min_room_size, max_height)
            x = self._rng.next_int(Domain.ROOMS, bounds.start_position.x, bounds.end_position.x - width + 1)
            y = self._rng.next_int(Domain.ROOMS, bounds.start_position.y, bounds.end_position.y - height + 1)
            candidate = Area.rectangle(Position(x, y), width, height)

            clash = next((r for r in rooms if r.area.intersects_or_touches(candidate, cfg.room_gap)), None)
            if clash is not None:
                logger.debug("Cannot fit room %r, too close to room %d %r", candidate, clash.id, clash.area)
                continue

            rooms.append(Room(id=len(rooms), area=candidate))
            logger.debug("Placed room %d at %r (%s)", len(rooms) - 1, candidate, candidate.get_description())

        if len(rooms) < cfg.room_count:
            raise InsufficientSpaceError(len(rooms), cfg.room_count, attempts)

        used = sum(r.area.get_total_area() for r in rooms)
        logger.info(
            "Placed %d rooms in %d attempts (room area usage %d%%)",
            len(rooms), attempts, used * 100 // map_area.get_total_area(),
        )
        return rooms

    # -- doors --

    def plan_doors(self, room: Room) -> list[Door]:
        """1..max_door_count doors, each on a distinct side, never on a corner."""
        door_count = self._rng.next_int(Domain.DOORS, 1, self._config.max_door_count)
        sides = sorted(self._rng.sample(Domain.DOORS, list(Side), door_count))
        room_sides = {area_side.side: area_side for area_side in room.get_sides()}

        doors: list[Door] = []
        for side in sides:
            candidates = room_sides[side].get_door_positions()
            doors.append(Door(position=self._rng.choice(Domain.DOORS, candidates)))
        return doors

    # -- entry / exit --

    def mark_entry_exit(self, rooms: list[Room]) -> None:
        """Pick two distinct rooms and give one an entry and the other an exit."""
        entry_id, exit_id = self._rng.sample(Domain.ENTRY_EXIT, range(len(rooms)), 2)
        entry_room = rooms[entry_id]
        exit_room = rooms[exit_id]
        entry_room.entry = entry_room.random_inside_pos(self._rng, Domain.ENTRY_EXIT)
        exit_room.exit = exit_room.random_inside_pos(self._rng, Domain.ENTRY_EXIT)
        logger.info("Entry in room %d at %s, exit in room %d at %s",
                    entry_id, entry_room.entry, exit_id, exit_room.exit)
