"""Container placement: populates the map's position -> Container side table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delve.core.containers import Container, Item
from delve.core.enums import ContainerType, Domain, TileType

if TYPE_CHECKING:
    from delve.config import GenerationConfig
    from delve.core.dungeon_map import Map
    from delve.core.models import Position
    from delve.core.rooms import Room
    from delve.systems.rng import LevelRNG

logger = logging.getLogger(__name__)

# (name, symbol, weight, value)
LOOT_TABLE: tuple[tuple[str, str, int, int], ...] = (
    ("Bronze Bar", "X", 1, 50),
    ("Silver Coin", "c", 1, 10),
    ("Torch", "|", 2, 5),
    ("Healing Draught", "!", 1, 30),
    ("Iron Key", "k", 1, 20),
    ("Old Map", "?", 1, 15),
)

BAG_WEIGHT_LIMIT = 50


class ContainerPlacer:
    """Drops chests on free room floor tiles after the grid is assembled."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GenerationConfig, rng: LevelRNG) -> None:
        self._config = config
        self._rng = rng

    def place(self, level_map: Map) -> int:
        """Populate ``level_map.containers``. Returns the number of chests placed."""
        placed = 0
        for room in level_map.rooms:
            for position in self._pick_positions(level_map, room):
                level_map.containers[position] = self.build_chest()
                placed += 1
        logger.info("Added %d containers to %d rooms", placed, len(level_map.rooms))
        return placed

    def _pick_positions(self, level_map: Map, room: Room) -> list[Position]:
        free = [
            p for p in room.get_inside_area().get_positions()
            if level_map.get_tile_type(p) == TileType.ROOM and p not in level_map.containers
        ]
        count = self._rng.next_int(Domain.CONTAINERS, 0, self._config.max_containers_per_room)
        return self._rng.sample(Domain.CONTAINERS, free, min(count, len(free)))

    def _build_item(self) -> Item:
        name, symbol, weight, value = self._rng.choice(Domain.CONTAINERS, LOOT_TABLE)
        return Item(id=self._rng.next_uuid(Domain.CONTAINERS), name=name, symbol=symbol,
                    weight=weight, value=value)

    def build_chest(self) -> Container:
        """A fixed chest holding a few loot items and a bag with one more."""
        chest = Container(
            item=Item(id=self._rng.next_uuid(Domain.CONTAINERS), name="Chest", symbol="$", weight=1, value=1),
            container_type=ContainerType.AREA,
            weight_limit=self._config.chest_weight_limit,
        )
        for _ in range(self._config.chest_item_count):
            chest.add_item(self._build_item())

        bag = Container(
            item=Item(id=self._rng.next_uuid(Domain.CONTAINERS), name="Bag", symbol="$", weight=5, value=50),
            container_type=ContainerType.OBJECT,
            weight_limit=BAG_WEIGHT_LIMIT,
        )
        bag.add_item(self._build_item())
        chest.add(bag)
        return chest
