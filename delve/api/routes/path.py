"""GET /api/v1/path: A* route between two positions on the current level."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from delve.ai.pathfinding import path_cost
from delve.api.dependencies import get_level_manager
from delve.api.level_manager import LevelManager
from delve.api.schemas import PathResponse, PositionSchema
from delve.core.errors import OutOfBoundsError
from delve.core.models import Position

router = APIRouter()


@router.get("/path", response_model=PathResponse)
def get_path(
    sx: int = Query(..., ge=0),
    sy: int = Query(..., ge=0),
    gx: int = Query(..., ge=0),
    gy: int = Query(..., ge=0),
    manager: LevelManager = Depends(get_level_manager),
) -> PathResponse:
    if manager.get_map() is None:
        raise HTTPException(status_code=503, detail="No level generated yet.")
    try:
        path = manager.find_path(Position(sx, sy), Position(gx, gy))
    except OutOfBoundsError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return PathResponse(
        found=bool(path),
        cost=path_cost(path),
        path=[PositionSchema(x=p.x, y=p.y) for p in path],
    )
