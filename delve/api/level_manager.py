"""LevelManager: singleton owning the level currently served by the API.

Generation runs through ``MapGeneration`` (generator on a worker thread,
progress recorded on the caller's thread). A finished Map is published by
swapping a reference under a lock and is never mutated afterwards, so
readers only ever see a complete level.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from delve.ai.pathfinding import Pathfinder
from delve.core.errors import GenerationError
from delve.engine.map_generation import MapGeneration, MapGenerator
from delve.systems.rng import random_seed

if TYPE_CHECKING:
    from delve.config import GenerationConfig
    from delve.core.dungeon_map import Map
    from delve.core.models import Position
    from delve.core.progress import StepProgress
    from delve.engine.progress_channel import ProgressChannel

logger = logging.getLogger(__name__)


class LevelManager:
    """Thread-safe access to the current level and its generation progress."""

    def __init__(self, config: GenerationConfig) -> None:
        config.validate()
        self._config = config

        self._map_lock = threading.Lock()
        self._map: Map | None = None
        self._progress: list[StepProgress] = []
        self._last_error: str | None = None

        # One generation at a time
        self._generate_lock = threading.Lock()
        self._generating = threading.Event()

    # -- public properties --

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def generating(self) -> bool:
        return self._generating.is_set()

    @property
    def last_error(self) -> str | None:
        with self._map_lock:
            return self._last_error

    # -- lifecycle --

    def start(self) -> None:
        """Generate the initial level; a failure leaves the manager empty."""
        try:
            self.regenerate(self._config.seed)
        except GenerationError as exc:
            logger.error("Initial level generation failed: %s", exc)

    def regenerate(self, seed: str | None = None) -> Map:
        """Generate a new level and publish it. Generation errors propagate.

        Without *seed* a fresh random seed is drawn, so regenerating never
        repeats the configured level.
        """
        with self._generate_lock:
            self._generating.set()
            with self._map_lock:
                self._progress = []
            try:
                generator = MapGenerator(self._config, seed or random_seed())
                generation = MapGeneration(generator, self._config.channel_capacity)
                level_map = generation.generate_level(self._record_progress)
            except GenerationError as exc:
                with self._map_lock:
                    self._last_error = str(exc)
                raise
            finally:
                self._generating.clear()

            with self._map_lock:
                self._map = level_map
                self._last_error = None
            logger.info("Published level with seed %r", level_map.seed)
            return level_map

    def _record_progress(self, channel: ProgressChannel) -> None:
        for progress in channel:
            with self._map_lock:
                self._progress.append(progress)

    # -- read access --

    def get_map(self) -> Map | None:
        with self._map_lock:
            return self._map

    def get_progress(self) -> list[StepProgress]:
        with self._map_lock:
            return list(self._progress)

    def find_path(self, start: Position, goal: Position) -> list[Position]:
        """A* over the current level. Raises OutOfBoundsError for positions off the map."""
        level_map = self.get_map()
        if level_map is None:
            raise LookupError("No level has been generated yet")
        return Pathfinder(level_map).find_path(start, goal)
