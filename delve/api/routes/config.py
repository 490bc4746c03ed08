"""GET /api/v1/config: expose generation configuration."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from delve.api.dependencies import get_level_manager
from delve.api.level_manager import LevelManager
from delve.api.schemas import ConfigResponse

router = APIRouter()


@router.get("/config", response_model=ConfigResponse)
def get_config(
    manager: LevelManager = Depends(get_level_manager),
) -> ConfigResponse:
    fields = asdict(manager.config)
    fields.pop("log_level")
    return ConfigResponse(**fields)
