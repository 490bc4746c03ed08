"""Dungeon level map: tile grid, room arena and container side table."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from delve.core.containers import Container
from delve.core.enums import TileType
from delve.core.errors import OutOfBoundsError
from delve.core.models import Area, Position
from delve.core.rooms import Room
from delve.core.tiles import TileDetails, tile


@dataclass(slots=True)
class Map:
    """2D tile grid (row-major, ``tiles[y][x]``) plus rooms and containers.

    Built once per level by the GridAssembler and handed to the caller;
    regeneration replaces the whole Map instead of mutating it.
    """

    area: Area
    tiles: list[list[TileDetails]]
    rooms: list[Room] = field(default_factory=list)
    containers: dict[Position, Container] = field(default_factory=dict)
    seed: str = ""

    @classmethod
    def filled(cls, area: Area, tile_type: TileType, seed: str = "") -> Map:
        details = tile(tile_type)
        tiles = [[details] * area.width for _ in range(area.height)]
        return cls(area=area, tiles=tiles, seed=seed)

    # -- access --

    @property
    def width(self) -> int:
        return self.area.width

    @property
    def height(self) -> int:
        return self.area.height

    def in_bounds(self, pos: Position) -> bool:
        return self.area.contains_position(pos)

    def in_bounds_xy(self, x: int, y: int) -> bool:
        return self.area.contains(x, y)

    def get_tile(self, pos: Position) -> TileDetails | None:
        if not self.in_bounds(pos):
            return None
        start = self.area.start_position
        return self.tiles[pos.y - start.y][pos.x - start.x]

    def get_tile_type(self, pos: Position) -> TileType | None:
        details = self.get_tile(pos)
        return details.tile_type if details else None

    def set_tile(self, pos: Position, details: TileDetails) -> None:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(pos, self.area)
        start = self.area.start_position
        self.tiles[pos.y - start.y][pos.x - start.x] = details

    def is_traversable(self, pos: Position) -> bool:
        details = self.get_tile(pos)
        return details is not None and details.traversable

    def is_hazardous(self, pos: Position) -> bool:
        details = self.get_tile(pos)
        return details is not None and details.hazardous

    def require_in_bounds(self, pos: Position) -> None:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(pos, self.area)

    # -- rooms --

    def get_rooms(self) -> list[Room]:
        return self.rooms

    def get_room(self, room_id: int) -> Room:
        return self.rooms[room_id]

    def find_room(self, pos: Position) -> Room | None:
        """The room whose area (walls included) contains *pos*."""
        for room in self.rooms:
            if room.area.contains_position(pos):
                return room
        return None

    def entry_room(self) -> Room | None:
        return next((r for r in self.rooms if r.entry is not None), None)

    def exit_room(self) -> Room | None:
        return next((r for r in self.rooms if r.exit is not None), None)

    # -- containers --

    def get_container(self, pos: Position) -> Container | None:
        return self.containers.get(pos)

    # -- inspection --

    def tile_counts(self) -> Counter[TileType]:
        return Counter(t.tile_type for row in self.tiles for t in row)

    def to_ascii(self) -> str:
        """Debug dump: one line per row, containers shown with their symbol."""
        start = self.area.start_position
        lines: list[str] = []
        for row_idx, row in enumerate(self.tiles):
            chars = [t.symbol for t in row]
            for pos, container in self.containers.items():
                if pos.y - start.y == row_idx:
                    chars[pos.x - start.x] = container.symbol
            lines.append("".join(chars))
        return "\n".join(lines)

    def fingerprint(self) -> str:
        """Stable text digest of the layout, used to compare regenerated levels."""
        parts = [f"area={self.area.start_position}..{self.area.end_position}"]
        parts.extend("".join(str(t.id) for t in row) for row in self.tiles)
        for room in self.rooms:
            doors = ",".join(f"{d.position.x}:{d.position.y}" for d in room.doors)
            parts.append(f"room{room.id}@{room.area}|doors={doors}|entry={room.entry}|exit={room.exit}")
        for pos in sorted(self.containers, key=lambda p: (p.y, p.x)):
            parts.append(f"container@{pos}:{self.containers[pos].get_item_count()}")
        return "\n".join(parts)
