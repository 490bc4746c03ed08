"""AI layer: pathfinding over generated levels."""

from delve.ai.pathfinding import Pathfinder, manhattan_path_cost

__all__ = ["Pathfinder", "manhattan_path_cost"]
