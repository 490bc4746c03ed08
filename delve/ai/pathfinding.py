"""A* Pathfinding over the dungeon tile grid.

Provides a `Pathfinder` class that computes shortest 4-directional paths
through a finished Map, respecting the tile registry's traversable flag.

Usage:
    pf = Pathfinder(level_map)
    path = pf.find_path(start, goal)          # list[Position], [] if unreachable
    next_step = pf.next_step(start, goal)     # Position or None
"""

from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING, Callable

from delve.core.models import CARDINAL_OFFSETS, Position

if TYPE_CHECKING:
    from delve.core.dungeon_map import Map

logger = logging.getLogger(__name__)

Passable = Callable[[int, int], bool]


def manhattan_path_cost(a: Position, b: Position) -> int:
    """Manhattan distance: admissible and consistent for unit-cost 4-way moves."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def path_cost(path: list[Position]) -> int:
    """Number of steps along *path* (0 for an empty or single-tile path)."""
    return max(0, len(path) - 1)


# ---------------------------------------------------------------------------
# A* Pathfinder
# ---------------------------------------------------------------------------

class Pathfinder:
    """A* pathfinder operating on a finished Map.

    Each search owns its transient open/closed state; the Map is only read.
    """

    __slots__ = ("_map", "_avoid_hazards")

    def __init__(self, level_map: Map, avoid_hazards: bool = True) -> None:
        self._map = level_map
        self._avoid_hazards = avoid_hazards

    def find_path(self, start: Position, goal: Position) -> list[Position]:
        """Compute an A* path from *start* to *goal*.

        Returns the positions from *start* to *goal* inclusive, or an empty
        list when the goal cannot be reached. Raises ``OutOfBoundsError`` if
        either end lies outside the map.
        """
        self._map.require_in_bounds(start)
        self._map.require_in_bounds(goal)
        if start == goal:
            return [start]
        if not self._map.is_traversable(goal):
            return []
        return self.search(start, goal, self._is_walkable)

    def next_step(self, start: Position, goal: Position) -> Position | None:
        """Return the first move of the A* path, or None if there is none."""
        path = self.find_path(start, goal)
        if len(path) > 1:
            return path[1]
        return None

    def _is_walkable(self, x: int, y: int) -> bool:
        details = self._map.get_tile(Position(x, y))
        if details is None or not details.traversable:
            return False
        return not (self._avoid_hazards and details.hazardous)

    def search(self, start: Position, goal: Position, passable: Passable) -> list[Position]:
        """Core A* over the map area with an arbitrary passability test.

        *start* is always expanded; every other tile, the goal included,
        must satisfy ``passable(x, y)`` and lie inside the map area.
        Ties on f-score are broken by insertion order.
        """
        area = self._map.area
        gx, gy = goal.x, goal.y

        # A* open set: (f_score, counter, x, y)
        counter = 0
        open_heap: list[tuple[int, int, int, int]] = []
        heapq.heappush(open_heap, (manhattan_path_cost(start, goal), counter, start.x, start.y))

        g_score: dict[tuple[int, int], int] = {(start.x, start.y): 0}
        came_from: dict[tuple[int, int], tuple[int, int]] = {}
        closed: set[tuple[int, int]] = set()

        while open_heap:
            _, _, cx, cy = heapq.heappop(open_heap)
            ckey = (cx, cy)

            if cx == gx and cy == gy:
                return self._reconstruct(came_from, ckey)

            if ckey in closed:
                continue
            closed.add(ckey)

            current_g = g_score[ckey]

            for d in CARDINAL_OFFSETS:
                nx, ny = cx + d.x, cy + d.y
                nkey = (nx, ny)

                if nkey in closed or not area.contains(nx, ny):
                    continue
                if not passable(nx, ny):
                    continue

                tentative_g = current_g + 1
                if tentative_g < g_score.get(nkey, 1 << 30):
                    g_score[nkey] = tentative_g
                    came_from[nkey] = ckey
                    h = abs(nx - gx) + abs(ny - gy)  # Manhattan heuristic
                    counter += 1
                    heapq.heappush(open_heap, (tentative_g + h, counter, nx, ny))

        logger.debug("No path from %s to %s after expanding %d nodes", start, goal, len(closed))
        return []

    @staticmethod
    def _reconstruct(
        came_from: dict[tuple[int, int], tuple[int, int]],
        current: tuple[int, int],
    ) -> list[Position]:
        """Walk back through came_from to build the path (start included)."""
        path: list[Position] = [Position(current[0], current[1])]
        while current in came_from:
            current = came_from[current]
            path.append(Position(current[0], current[1]))
        path.reverse()
        return path
