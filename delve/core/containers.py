"""Minimal container/item model for the map's container side table.

A Container either wraps a single Item (ITEM) or stores other containers
(OBJECT for movable bags, AREA for fixed chests).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from delve.core.enums import ContainerType


@dataclass(frozen=True, slots=True)
class Item:
    """A single carriable thing."""

    id: uuid.UUID
    name: str
    symbol: str
    weight: int
    value: int


@dataclass(slots=True)
class Container:
    """Item wrapper or storage for further containers."""

    item: Item
    container_type: ContainerType
    weight_limit: int
    contents: list[Container] = field(default_factory=list)

    @property
    def id(self) -> uuid.UUID:
        return self.item.id

    @property
    def name(self) -> str:
        return self.item.name

    @property
    def symbol(self) -> str:
        return self.item.symbol

    @classmethod
    def wrap(cls, item: Item) -> Container:
        """Wrap a plain item so it can be stored in another container."""
        return cls(item=item, container_type=ContainerType.ITEM, weight_limit=0)

    def get_weight_total(self) -> int:
        """Own weight plus the weight of everything stored inside."""
        return self.item.weight + self.get_contents_weight_total()

    def get_contents_weight_total(self) -> int:
        return sum(c.get_weight_total() for c in self.contents)

    def get_item_count(self) -> int:
        """Number of plain items, counting through nested containers."""
        if self.container_type == ContainerType.ITEM:
            return 1
        return sum(c.get_item_count() for c in self.contents)

    def can_fit(self, other: Container) -> bool:
        if self.container_type == ContainerType.ITEM:
            return False
        free_weight = self.weight_limit - self.get_contents_weight_total()
        return other.get_weight_total() <= free_weight

    def add(self, other: Container) -> bool:
        """Store *other* if it fits. Returns whether it was added."""
        if not self.can_fit(other):
            return False
        self.contents.append(other)
        return True

    def add_item(self, item: Item) -> bool:
        return self.add(Container.wrap(item))
