"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from delve.api.dependencies import set_level_manager
from delve.api.level_manager import LevelManager
from delve.api.routes import api_router
from delve.config import GenerationConfig
from delve.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GenerationConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GenerationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = LevelManager(_config)
        set_level_manager(manager)
        manager.start()
        logger.info("API server started, serving level inspection.")
        yield
        set_level_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Delve Level Inspector",
        description=(
            "Read-only inspection API for generated dungeon levels.\n\n"
            "## API Groups\n\n"
            "- **Level**: Current tile grid, rooms, containers, generation progress, regeneration\n"
            "- **Path**: A* routes across the current level\n"
            "- **Tiles**: Tile registry (ids, symbols, traversability)\n"
            "- **Config**: Read-only generation configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Level", "description": "The level currently served. Regenerating swaps it atomically."},
            {"name": "Path", "description": "Shortest 4-directional paths between two positions."},
            {"name": "Tiles", "description": "Tile registry. Fetched once; ids match the RLE grid values."},
            {"name": "Config", "description": "Generation configuration parameters."},
        ],
    )

    # CORS: allow any origin for a local viewer
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
