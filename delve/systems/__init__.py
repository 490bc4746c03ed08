"""Generation systems: RNG, room planning, grid assembly, container placement."""

from delve.systems.rng import LevelRNG
from delve.systems.room_planner import RoomPlanner
from delve.systems.grid_assembler import GridAssembler
from delve.systems.containers import ContainerPlacer

__all__ = ["ContainerPlacer", "GridAssembler", "LevelRNG", "RoomPlanner"]
