"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class TileType(IntEnum):
    """Static terrain classification of a single grid cell."""

    NO_TILE = 0
    CORRIDOR = 1
    ROOM = 2
    WALL = 3
    WINDOW = 4
    DOOR = 5
    ENTRY = 6
    EXIT = 7
    DEADLY = 8


@unique
class Colour(IntEnum):
    """Display colour hint carried by tile details (renderer decides the palette)."""

    NONE = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    CYAN = 4
    BROWN = 5
    WHITE = 6
    BLACK = 7


@unique
class Side(IntEnum):
    """Perimeter sides of an area, in the fixed order returned by ``get_sides()``."""

    LEFT = 0
    RIGHT = 1
    TOP = 2
    BOTTOM = 3


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    ROOMS = 0
    DOORS = 1
    ENTRY_EXIT = 2
    CONTAINERS = 3
    NPC = 4


@unique
class ContainerType(IntEnum):
    """Storage behaviour of a container."""

    ITEM = 0      # No storage, just a wrapped item
    OBJECT = 1    # Movable container, e.g. bags
    AREA = 2      # Fixed container, e.g. chests


@unique
class LevelChange(str, Enum):
    """Direction of travel between dungeon levels."""

    UP = "up"
    DOWN = "down"


@unique
class LevelChangeResult(str, Enum):
    """Outcome of ``Levels.change_level``."""

    LEVEL_CHANGED = "level_changed"
    OUT_OF_DUNGEON = "out_of_dungeon"
