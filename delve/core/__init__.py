"""Core data models: geometry, tiles, rooms, containers and the level map."""

from delve.core.enums import ContainerType, Domain, LevelChange, LevelChangeResult, Side, TileType
from delve.core.models import Area, AreaSide, Position
from delve.core.tiles import TILE_LIBRARY, TileDetails, tile
from delve.core.rooms import Door, Room
from delve.core.containers import Container, Item
from delve.core.dungeon_map import Map
from delve.core.progress import StepProgress

__all__ = [
    "Area",
    "AreaSide",
    "Container",
    "ContainerType",
    "Domain",
    "Door",
    "Item",
    "LevelChange",
    "LevelChangeResult",
    "Map",
    "Position",
    "Room",
    "Side",
    "StepProgress",
    "TILE_LIBRARY",
    "TileDetails",
    "TileType",
    "tile",
]
