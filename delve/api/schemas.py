"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class PositionSchema(BaseModel):
    x: int
    y: int


# --- Level ---

class DoorSchema(BaseModel):
    x: int
    y: int
    open: bool = False
    locked: bool = False


class RoomSchema(BaseModel):
    id: int
    x: int
    y: int
    width: int
    height: int
    doors: list[DoorSchema] = Field(default_factory=list)
    entry: PositionSchema | None = None
    exit: PositionSchema | None = None


class ContainerSchema(BaseModel):
    x: int
    y: int
    name: str
    symbol: str
    container_type: str
    weight_total: int
    item_count: int
    contents: list[str] = Field(default_factory=list)   # Names of direct contents


class LevelResponse(BaseModel):
    seed: str
    width: int
    height: int
    # RLE encoded tile ids, row-major: [id, count, id, count, ...]
    grid: list[int]
    rooms: list[RoomSchema] = Field(default_factory=list)
    containers: list[ContainerSchema] = Field(default_factory=list)


# --- Progress ---

class ProgressStepSchema(BaseModel):
    step_name: str
    current_step: int
    step_count: int
    done: bool


class ProgressResponse(BaseModel):
    generating: bool
    done: bool
    steps: list[ProgressStepSchema] = Field(default_factory=list)
    last_error: str | None = None


# --- Path ---

class PathResponse(BaseModel):
    found: bool
    cost: int
    path: list[PositionSchema] = Field(default_factory=list)


# --- Registry / config ---

class TileSchema(BaseModel):
    id: int
    tile_type: str
    name: str
    symbol: str
    colour: str
    traversable: bool
    hazardous: bool


class ConfigResponse(BaseModel):
    seed: str | None
    map_width: int
    map_height: int
    map_border: int
    room_count: int
    min_room_size: int
    max_room_size: int
    room_gap: int
    max_placement_attempts: int
    max_door_count: int
    max_containers_per_room: int
    chest_weight_limit: int
    chest_item_count: int
    channel_capacity: int
