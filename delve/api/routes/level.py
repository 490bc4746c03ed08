"""Level routes: the current Map, its rooms, generation progress and regeneration."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from delve.api.dependencies import get_level_manager
from delve.api.level_manager import LevelManager
from delve.api.schemas import (
    ContainerSchema,
    DoorSchema,
    LevelResponse,
    PositionSchema,
    ProgressResponse,
    ProgressStepSchema,
    RoomSchema,
)
from delve.core.dungeon_map import Map
from delve.core.errors import GenerationError, InsufficientSpaceError
from delve.core.rooms import Room

router = APIRouter()


def rle_encode(tile_ids: list[int]) -> list[int]:
    """Run-length encode a row-major stream of tile ids.

    Output is flat ``[tile_id, run, tile_id, run, ...]``. Runs continue
    across row ends, so the viewer decodes the whole stream and slices it
    by the level width. Ids resolve against ``GET /tiles``.
    """
    runs: list[int] = []
    if not tile_ids:
        return runs
    tile_id = tile_ids[0]
    run = 1
    for next_id in tile_ids[1:]:
        if next_id == tile_id:
            run += 1
        else:
            runs.extend((tile_id, run))
            tile_id = next_id
            run = 1
    runs.extend((tile_id, run))
    return runs


def _room_schema(room: Room) -> RoomSchema:
    start = room.area.start_position
    entry, exit_ = room.get_entry(), room.get_exit()
    return RoomSchema(
        id=room.id,
        x=start.x,
        y=start.y,
        width=room.area.width,
        height=room.area.height,
        doors=[
            DoorSchema(x=d.position.x, y=d.position.y, open=d.is_open, locked=d.is_locked)
            for d in room.doors
        ],
        entry=PositionSchema(x=entry.x, y=entry.y) if entry is not None else None,
        exit=PositionSchema(x=exit_.x, y=exit_.y) if exit_ is not None else None,
    )


def _level_response(level_map: Map) -> LevelResponse:
    tile_ids = [t.id for row in level_map.tiles for t in row]
    containers = [
        ContainerSchema(
            x=pos.x,
            y=pos.y,
            name=c.name,
            symbol=c.symbol,
            container_type=c.container_type.name,
            weight_total=c.get_weight_total(),
            item_count=c.get_item_count(),
            contents=[inner.name for inner in c.contents],
        )
        for pos, c in sorted(level_map.containers.items(), key=lambda kv: (kv[0].y, kv[0].x))
    ]
    return LevelResponse(
        seed=level_map.seed,
        width=level_map.width,
        height=level_map.height,
        grid=rle_encode(tile_ids),
        rooms=[_room_schema(r) for r in level_map.rooms],
        containers=containers,
    )


def _require_map(manager: LevelManager) -> Map:
    level_map = manager.get_map()
    if level_map is None:
        raise HTTPException(status_code=503, detail="No level generated yet.")
    return level_map


@router.get("/level", response_model=LevelResponse)
def get_level(manager: LevelManager = Depends(get_level_manager)) -> LevelResponse:
    return _level_response(_require_map(manager))


@router.get("/level/rooms", response_model=list[RoomSchema])
def get_rooms(manager: LevelManager = Depends(get_level_manager)) -> list[RoomSchema]:
    return [_room_schema(r) for r in _require_map(manager).rooms]


@router.get("/level/progress", response_model=ProgressResponse)
def get_progress(manager: LevelManager = Depends(get_level_manager)) -> ProgressResponse:
    steps = manager.get_progress()
    return ProgressResponse(
        generating=manager.generating,
        done=bool(steps) and steps[-1].is_done(),
        steps=[
            ProgressStepSchema(
                step_name=s.step_name,
                current_step=s.current_step,
                step_count=s.step_count,
                done=s.is_done(),
            )
            for s in steps
        ],
        last_error=manager.last_error,
    )


@router.post("/level/regenerate", response_model=LevelResponse)
def regenerate(
    seed: str | None = Query(None, description="Seed string; random when omitted"),
    manager: LevelManager = Depends(get_level_manager),
) -> LevelResponse:
    try:
        level_map = manager.regenerate(seed)
    except InsufficientSpaceError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except GenerationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return _level_response(level_map)
