"""Versioned API route modules."""

from fastapi import APIRouter

from delve.api.routes.config import router as config_router
from delve.api.routes.level import router as level_router
from delve.api.routes.path import router as path_router
from delve.api.routes.tiles import router as tiles_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(level_router, tags=["Level"])
api_router.include_router(path_router, tags=["Path"])
api_router.include_router(tiles_router, tags=["Tiles"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
