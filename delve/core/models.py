"""Geometry value types: Position, Area, AreaSide."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.core.enums import Domain, Side

if TYPE_CHECKING:
    from delve.systems.rng import LevelRNG


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable 2D integer grid coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def offset(self, offset_x: int, offset_y: int) -> Position:
        """Return a shifted copy, clamped so neither coordinate drops below zero."""
        return Position(max(0, self.x + offset_x), max(0, self.y + offset_y))

    def get_neighbors(self) -> list[Position]:
        """4-directional neighbours in Left, Right, Top, Bottom order.

        Neighbours with a negative coordinate are omitted.
        """
        positions: list[Position] = []
        if self.x > 0:
            positions.append(Position(self.x - 1, self.y))
        positions.append(Position(self.x + 1, self.y))
        if self.y > 0:
            positions.append(Position(self.x, self.y - 1))
        positions.append(Position(self.x, self.y + 1))
        return positions

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Cardinal directions (no diagonals)
CARDINAL_OFFSETS: tuple[Position, ...] = (
    Position(-1, 0),
    Position(1, 0),
    Position(0, -1),
    Position(0, 1),
)


@dataclass(frozen=True, slots=True)
class Area:
    """Axis-aligned rectangle with inclusive start and end corners.

    Build with ``Area.square`` / ``Area.rectangle``; a non-positive size is a
    contract violation and raises ``ValueError``.
    """

    start_position: Position
    end_position: Position
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Area must be at least 1x1, got {self.width}x{self.height}")
        if (self.end_position.x - self.start_position.x + 1 != self.width
                or self.end_position.y - self.start_position.y + 1 != self.height):
            raise ValueError(
                f"Area corners {self.start_position}..{self.end_position} "
                f"do not match size {self.width}x{self.height}"
            )

    @classmethod
    def rectangle(cls, start_position: Position, width: int, height: int) -> Area:
        end_position = Position(start_position.x + width - 1, start_position.y + height - 1)
        return cls(start_position, end_position, width, height)

    @classmethod
    def square(cls, start_position: Position, size: int) -> Area:
        return cls.rectangle(start_position, size, size)

    # -- size --

    def get_size_x(self) -> int:
        return self.width

    def get_size_y(self) -> int:
        return self.height

    def get_total_area(self) -> int:
        return self.width * self.height

    def get_description(self) -> str:
        return f"{self.width}x{self.height}"

    # -- containment --

    def contains(self, x: int, y: int) -> bool:
        return (self.start_position.x <= x <= self.end_position.x
                and self.start_position.y <= y <= self.end_position.y)

    def contains_position(self, position: Position) -> bool:
        return self.contains(position.x, position.y)

    def contains_area(self, other: Area) -> bool:
        return self.contains_position(other.start_position) and self.contains_position(other.end_position)

    def can_fit(self, position: Position, width: int, height: int) -> bool:
        """Whether a ``width`` x ``height`` rectangle starting at *position* lies inside."""
        if width < 1 or height < 1 or not self.contains_position(position):
            return False
        return (position.x + width - 1 <= self.end_position.x
                and position.y + height - 1 <= self.end_position.y)

    def intersects(self, other: Area) -> bool:
        return not (
            other.end_position.x < self.start_position.x
            or other.start_position.x > self.end_position.x
            or other.end_position.y < self.start_position.y
            or other.start_position.y > self.end_position.y
        )

    def intersects_or_touches(self, other: Area, gap: int = 1) -> bool:
        """Intersection test with this area grown by *gap* tiles on every side."""
        return not (
            other.end_position.x < self.start_position.x - gap
            or other.start_position.x > self.end_position.x + gap
            or other.end_position.y < self.start_position.y - gap
            or other.start_position.y > self.end_position.y + gap
        )

    # -- derived areas --

    def get_positions(self) -> list[Position]:
        """All positions, column by column (x outer, y inner)."""
        return [
            Position(x, y)
            for x in range(self.start_position.x, self.end_position.x + 1)
            for y in range(self.start_position.y, self.end_position.y + 1)
        ]

    def get_sides(self) -> list[AreaSide]:
        """The four unit-thick perimeter strips: Left, Right, Top, Bottom."""
        start = self.start_position
        end = self.end_position
        return [
            AreaSide(Side.LEFT, Area(start, Position(start.x, end.y), 1, self.height)),
            AreaSide(Side.RIGHT, Area(Position(end.x, start.y), end, 1, self.height)),
            AreaSide(Side.TOP, Area(start, Position(end.x, start.y), self.width, 1)),
            AreaSide(Side.BOTTOM, Area(Position(start.x, end.y), end, self.width, 1)),
        ]

    def get_inside_area(self) -> Area:
        """This area shrunk by one tile on every side.

        Requires at least 3x3; smaller areas have no inside and raise ``ValueError``.
        """
        if self.width < 3 or self.height < 3:
            raise ValueError(f"Area {self.get_description()} is too small to have an inside area")
        return Area.rectangle(
            Position(self.start_position.x + 1, self.start_position.y + 1),
            self.width - 2,
            self.height - 2,
        )

    def shrink(self, border: int) -> Area:
        """Shrink by *border* tiles on every side (``ValueError`` if nothing remains)."""
        return Area.rectangle(
            Position(self.start_position.x + border, self.start_position.y + border),
            self.width - 2 * border,
            self.height - 2 * border,
        )

    def random_inside_pos(self, rng: LevelRNG, domain: Domain = Domain.ROOMS) -> Position:
        """Uniformly random position inside ``get_inside_area()``."""
        inside = self.get_inside_area()
        x = rng.next_int(domain, inside.start_position.x, inside.end_position.x)
        y = rng.next_int(domain, inside.start_position.y, inside.end_position.y)
        return Position(x, y)

    def __repr__(self) -> str:
        return f"Area({self.start_position}..{self.end_position})"


@dataclass(frozen=True, slots=True)
class AreaSide:
    """A 1-tile-thick perimeter strip on one side of an area."""

    side: Side
    area: Area

    def get_mid_point(self) -> Position:
        start = self.area.start_position
        end = self.area.end_position
        match self.side:
            case Side.LEFT | Side.RIGHT:
                return Position(start.x, start.y + (self.area.height - 1) // 2)
            case Side.TOP | Side.BOTTOM:
                return Position(start.x + (self.area.width - 1) // 2, end.y)

    def get_door_positions(self) -> list[Position]:
        """Strip positions excluding the two corners (doors never sit on a corner)."""
        positions = self.area.get_positions()
        return positions[1:-1]
