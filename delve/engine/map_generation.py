"""Level generation process: generator and progress consumer run side by side.

``MapGenerator`` runs the planner and assembler phases on the calling
thread and reports one milestone per phase. ``MapGeneration`` puts the
generator on a worker thread, runs the progress consumer on the caller's
thread, and joins both, handing the finished Map back by value.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable

from delve.core.models import Area, Position
from delve.engine.progress_channel import ProgressChannel, ProgressReporter
from delve.systems.containers import ContainerPlacer
from delve.systems.grid_assembler import GridAssembler
from delve.systems.rng import LevelRNG, random_seed
from delve.systems.room_planner import RoomPlanner

if TYPE_CHECKING:
    from delve.config import GenerationConfig
    from delve.core.dungeon_map import Map
    from delve.core.progress import StepProgress

logger = logging.getLogger(__name__)

GENERATION_STEPS: tuple[str, ...] = (
    "Placing rooms",
    "Building tiles",
    "Carving corridors",
    "Placing entry and exit",
    "Placing containers",
    "Finalizing",
)

ProgressConsumer = Callable[[ProgressChannel], None]


class MapGenerator:
    """Builds one level from a config and a seed string.

    The seed falls back to ``config.seed`` and then to a fresh random seed.
    Given the same seed and config, ``generate`` returns an identical Map.
    """

    __slots__ = ("_config", "_seed", "_map_area")

    def __init__(self, config: GenerationConfig, seed: str | None = None) -> None:
        config.validate()
        self._config = config
        self._seed = seed or config.seed or random_seed()
        self._map_area = Area.rectangle(Position(0, 0), config.map_width, config.map_height)

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def map_area(self) -> Area:
        return self._map_area

    def generate(self, reporter: ProgressReporter | None = None) -> Map:
        if reporter is None:
            reporter = ProgressReporter(GENERATION_STEPS)
        reporter.check_cancelled()

        cfg = self._config
        rng = LevelRNG(self._seed)
        logger.info("Generating %s map using RNG seed %r", self._map_area.get_description(), self._seed)

        rooms = RoomPlanner(cfg, rng).plan(self._map_area)
        reporter.milestone()

        assembler = GridAssembler()
        level_map = assembler.build_tiles(self._map_area, rooms, seed=self._seed)
        reporter.milestone()

        assembler.carve_corridors(level_map)
        reporter.milestone()

        assembler.stamp_entry_exit(level_map)
        reporter.milestone()

        ContainerPlacer(cfg, rng).place(level_map)
        reporter.milestone()

        assembler.finalize(level_map)
        reporter.milestone()

        logger.info("Map generated: %d rooms, %d containers", len(level_map.rooms), len(level_map.containers))
        return level_map


class MapGeneration:
    """Joins a MapGenerator and a progress consumer over a bounded channel."""

    __slots__ = ("_generator", "_capacity", "_cancel")

    def __init__(
        self,
        generator: MapGenerator,
        channel_capacity: int = 1,
        cancel: threading.Event | None = None,
    ) -> None:
        self._generator = generator
        self._capacity = channel_capacity
        self._cancel = cancel

    @property
    def generator(self) -> MapGenerator:
        return self._generator

    def generate_level(self, consumer: ProgressConsumer | None = None) -> Map:
        """Generate on a worker thread while *consumer* reads progress here.

        Blocks until both sides finish. Generation errors (including
        cancellation) propagate from the worker thread to the caller.
        """
        channel = ProgressChannel(self._capacity)
        reporter = ProgressReporter(
            GENERATION_STEPS,
            channel if consumer is not None else None,
            self._cancel,
        )

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="map-gen") as executor:
            future = executor.submit(self._produce, reporter, channel)
            if consumer is not None:
                try:
                    consumer(channel)
                finally:
                    # Consumer is done; further sends fail and the producer stops reporting
                    channel.close()
            return future.result()

    def _produce(self, reporter: ProgressReporter, channel: ProgressChannel) -> Map:
        """Run the generator (executed in the worker thread)."""
        try:
            return self._generator.generate(reporter)
        finally:
            channel.close()


class ProgressGauge:
    """Default progress consumer: logs a text gauge per milestone.

    After the done message it calls *confirm* (e.g. wait for a key press)
    before handing control back.
    """

    __slots__ = ("_confirm", "_width", "_seen")

    def __init__(self, confirm: Callable[[], object] | None = None, width: int = 20) -> None:
        self._confirm = confirm
        self._width = width
        self._seen: list[StepProgress] = []

    @property
    def seen(self) -> list[StepProgress]:
        return list(self._seen)

    def render(self, progress: StepProgress) -> str:
        filled = self._width * min(progress.current_step, progress.step_count) // max(1, progress.step_count)
        bar = "#" * filled + "." * (self._width - filled)
        return f"[{bar}] {progress.percentage():3d}% {progress.step_name}"

    def __call__(self, channel: ProgressChannel) -> None:
        for progress in channel:
            self._seen.append(progress)
            logger.info("%s", self.render(progress))

        if self._seen and self._seen[-1].is_done() and self._confirm is not None:
            self._confirm()


def generate_level(
    config: GenerationConfig,
    seed: str | None = None,
    consumer: ProgressConsumer | None = None,
    cancel: threading.Event | None = None,
) -> Map:
    """Convenience wrapper: build a generator and run it with *consumer*."""
    generation = MapGeneration(MapGenerator(config, seed), config.channel_capacity, cancel)
    return generation.generate_level(consumer)
