"""Multi-level dungeon: levels built on demand, travel and respawn positions.

Each level gets its own seed derived from the dungeon seed, so a dungeon
seed reproduces every level regardless of the order they are visited in.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from delve.core.enums import Domain, LevelChange, LevelChangeResult
from delve.engine.map_generation import MapGeneration, MapGenerator, ProgressConsumer
from delve.systems.rng import random_seed

if TYPE_CHECKING:
    from delve.config import GenerationConfig
    from delve.core.dungeon_map import Map
    from delve.core.models import Position
    from delve.core.rooms import Room
    from delve.systems.rng import LevelRNG

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Level:
    index: int
    seed: str
    map: Map


class Levels:
    """Ordered stack of generated levels with a current-level cursor.

    The cursor starts above the first level (``current_index == -1``);
    travelling DOWN from there enters the dungeon.
    """

    __slots__ = ("_seed", "_config", "_levels", "_current")

    def __init__(self, seed: str | None, config: GenerationConfig) -> None:
        self._seed = seed or config.seed or random_seed()
        self._config = config
        self._levels: list[Level] = []
        self._current = -1

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def current_level(self) -> Level | None:
        if self._current < 0:
            return None
        return self._levels[self._current]

    def get_levels(self) -> list[Level]:
        return list(self._levels)

    def level_seed(self, index: int) -> str:
        return f"{self._seed}:{index}"

    def must_build_level(self, change: LevelChange) -> bool:
        """True when travelling *change* needs a level that does not exist yet."""
        return change is LevelChange.DOWN and self._current + 1 >= len(self._levels)

    def build_level(
        self,
        consumer: ProgressConsumer | None = None,
        cancel: threading.Event | None = None,
    ) -> Level:
        """Generate the next level below the deepest one and append it."""
        index = len(self._levels)
        seed = self.level_seed(index)
        generation = MapGeneration(MapGenerator(self._config, seed), self._config.channel_capacity, cancel)
        level = Level(index=index, seed=seed, map=generation.generate_level(consumer))
        self._levels.append(level)
        logger.info("Built level %d (seed %r)", index, seed)
        return level

    def change_level(self, change: LevelChange) -> LevelChangeResult:
        if change is LevelChange.UP:
            if self._current <= 0:
                self._current = -1
                return LevelChangeResult.OUT_OF_DUNGEON
            self._current -= 1
        else:
            if self._current + 1 >= len(self._levels):
                raise ValueError(f"Level {self._current + 1} has not been built yet")
            self._current += 1
        logger.info("Changed level %s to %d", change.value, self._current)
        return LevelChangeResult.LEVEL_CHANGED

    def travel(
        self,
        change: LevelChange,
        consumer: ProgressConsumer | None = None,
    ) -> tuple[LevelChangeResult, Position | None]:
        """Build if needed, change level and return the arrival position."""
        if self.must_build_level(change):
            self.build_level(consumer)
        result = self.change_level(change)
        if result is LevelChangeResult.OUT_OF_DUNGEON:
            return result, None
        _, position = spawn_position(self._levels[self._current].map, change)
        return result, position


def spawn_position(level_map: Map, change: LevelChange) -> tuple[Room, Position]:
    """Where a player arrives: the entry going DOWN, the exit coming UP."""
    if change is LevelChange.DOWN:
        room = level_map.entry_room()
        position = room.get_entry() if room is not None else None
    else:
        room = level_map.exit_room()
        position = room.get_exit() if room is not None else None
    if room is None or position is None:
        raise ValueError(f"Map has no {'entry' if change is LevelChange.DOWN else 'exit'} room")
    return room, position


def npc_spawn_position(level_map: Map, rng: LevelRNG, player_room: Room | None = None) -> Position:
    """Random floor position in a room other than *player_room*."""
    candidates = [r for r in level_map.rooms if player_room is None or r.id != player_room.id]
    if not candidates:
        raise ValueError("No room available for an NPC spawn")
    room = rng.choice(Domain.NPC, candidates)
    return room.random_inside_pos(rng, Domain.NPC)
