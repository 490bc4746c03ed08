"""Tile registry: immutable metadata for every TileType.

The library is built once at import time and shared read-only; a missing
tile type is a programming error and fails loudly at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from delve.core.enums import Colour, TileType


@dataclass(frozen=True, slots=True)
class TileDetails:
    """Display and movement metadata for one tile type."""

    id: int
    tile_type: TileType
    traversable: bool
    symbol: str
    colour: Colour
    name: str
    hazardous: bool = False     # Traversable but harmful (tracked apart from blocking)


_TILE_DETAILS: tuple[TileDetails, ...] = (
    TileDetails(0, TileType.NO_TILE,  False, " ", Colour.NONE,  "Empty"),
    TileDetails(1, TileType.CORRIDOR, True,  "-", Colour.BLUE,  "Corridor"),
    TileDetails(2, TileType.ROOM,     True,  "-", Colour.BLUE,  "Room"),
    TileDetails(3, TileType.WALL,     False, "#", Colour.BROWN, "Wall"),
    TileDetails(4, TileType.WINDOW,   False, "%", Colour.CYAN,  "Window"),
    TileDetails(5, TileType.DOOR,     True,  "=", Colour.WHITE, "Door"),
    TileDetails(6, TileType.ENTRY,    True,  "^", Colour.GREEN, "Entry"),
    TileDetails(7, TileType.EXIT,     True,  "^", Colour.RED,   "Exit"),
    TileDetails(8, TileType.DEADLY,   True,  "!", Colour.RED,   "Deadly", hazardous=True),
)


def build_library(details: tuple[TileDetails, ...] = _TILE_DETAILS) -> Mapping[TileType, TileDetails]:
    """Build the read-only TileType -> TileDetails table.

    Raises ``RuntimeError`` if any TileType is missing or defined twice.
    """
    library: dict[TileType, TileDetails] = {}
    for entry in details:
        if entry.tile_type in library:
            raise RuntimeError(f"Tile type {entry.tile_type.name} defined twice in tile library")
        library[entry.tile_type] = entry

    missing = [t.name for t in TileType if t not in library]
    if missing:
        raise RuntimeError(f"Tile library is missing entries for: {', '.join(missing)}")
    return MappingProxyType(library)


TILE_LIBRARY: Mapping[TileType, TileDetails] = build_library()


def tile(tile_type: TileType) -> TileDetails:
    """Look up the shared details for *tile_type*."""
    return TILE_LIBRARY[tile_type]
