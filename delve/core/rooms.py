"""Room and Door data model.

Rooms live in an arena (``Map.rooms``) and are referenced by id, which is
their index in that list. The planner creates each room once and only
attaches doors and the entry/exit markers afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from delve.core.enums import Domain, Side
from delve.core.models import Area, AreaSide, Position

if TYPE_CHECKING:
    from delve.systems.rng import LevelRNG


DEFAULT_DOOR_HEALTH = 100


@dataclass(slots=True)
class Door:
    """A door on a room perimeter.

    Invariants: an open door is never locked, and a locked door always has
    at least one lock left to turn (``unlocked_locks < locks``).
    """

    position: Position
    open: bool = False
    locked: bool = False
    health: int = DEFAULT_DOOR_HEALTH
    locks: int = 0
    unlocked_locks: int = 0

    @property
    def is_open(self) -> bool:
        return self.open

    @property
    def is_locked(self) -> bool:
        return self.locked

    def open_door(self) -> bool:
        """Open the door unless it is locked. Returns the resulting open state."""
        if not self.locked:
            self.open = True
        return self.open

    def close(self) -> None:
        self.open = False

    def lock(self, locks: int = 1) -> bool:
        """Lock a closed door with *locks* locks. Returns whether the door is locked."""
        if locks < 1:
            raise ValueError("A locked door needs at least one lock")
        if not self.locked and not self.open:
            self.locked = True
            self.locks = locks
            self.unlocked_locks = 0
        return self.locked

    def unlock(self) -> bool:
        """Turn one lock; the door unlocks once every lock is turned.

        Returns whether the door is still locked.
        """
        if self.locked:
            self.unlocked_locks += 1
            if self.unlocked_locks >= self.locks:
                self.locked = False
                self.locks = 0
                self.unlocked_locks = 0
        return self.locked


@dataclass(slots=True)
class Room:
    """A rectangular room: perimeter walls, doors, optional entry/exit marker."""

    id: int
    area: Area
    doors: list[Door] = field(default_factory=list)
    entry: Position | None = None
    exit: Position | None = None

    def get_sides(self) -> list[AreaSide]:
        return self.area.get_sides()

    def get_inside_area(self) -> Area:
        return self.area.get_inside_area()

    def random_inside_pos(self, rng: LevelRNG, domain: Domain = Domain.ROOMS) -> Position:
        return self.area.random_inside_pos(rng, domain)

    def get_entry(self) -> Position | None:
        return self.entry

    def get_exit(self) -> Position | None:
        return self.exit

    def door_at(self, position: Position) -> Door | None:
        for door in self.doors:
            if door.position == position:
                return door
        return None

    def side_of(self, position: Position) -> Side | None:
        """The perimeter side *position* lies on (corners report the first match)."""
        for area_side in self.get_sides():
            if area_side.area.contains_position(position):
                return area_side.side
        return None

    def has_door_on(self, side: Side) -> bool:
        return any(self.side_of(d.position) == side for d in self.doors)

    def is_perimeter(self, position: Position) -> bool:
        return self.area.contains_position(position) and not self.get_inside_area().contains_position(position)
