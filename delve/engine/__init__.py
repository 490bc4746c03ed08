"""Engine layer: generation process, progress channel, multi-level manager."""

from delve.engine.progress_channel import ProgressChannel, ProgressReporter
from delve.engine.map_generation import MapGeneration, MapGenerator, ProgressGauge
from delve.engine.levels import Level, Levels

__all__ = [
    "Level",
    "Levels",
    "MapGeneration",
    "MapGenerator",
    "ProgressChannel",
    "ProgressGauge",
    "ProgressReporter",
]
