"""GET /api/v1/tiles: the tile registry (fetch once)."""

from __future__ import annotations

from fastapi import APIRouter

from delve.api.schemas import TileSchema
from delve.core.tiles import TILE_LIBRARY

router = APIRouter()


@router.get("/tiles", response_model=list[TileSchema])
def get_tiles() -> list[TileSchema]:
    return [
        TileSchema(
            id=d.id,
            tile_type=d.tile_type.name,
            name=d.name,
            symbol=d.symbol,
            colour=d.colour.name,
            traversable=d.traversable,
            hazardous=d.hazardous,
        )
        for d in sorted(TILE_LIBRARY.values(), key=lambda d: d.id)
    ]
