"""Exception hierarchy for level generation, progress streaming and pathfinding."""

from __future__ import annotations


class DelveError(Exception):
    """Base class for all engine errors."""


class GenerationError(DelveError):
    """Level generation could not produce a valid map."""


class InsufficientSpaceError(GenerationError):
    """Room placement ran out of attempts before the target room count was reached."""

    def __init__(self, placed: int, target: int, attempts: int) -> None:
        self.placed = placed
        self.target = target
        self.attempts = attempts
        super().__init__(
            f"Insufficient space: placed {placed}/{target} rooms after {attempts} attempts"
        )


class GenerationCancelled(GenerationError):
    """Generation was cancelled between milestones."""


class ChannelClosedError(DelveError):
    """The other end of a progress channel has gone away."""


class OutOfBoundsError(DelveError, ValueError):
    """A position lies outside the map area."""

    def __init__(self, position: object, area: object) -> None:
        self.position = position
        self.area = area
        super().__init__(f"Position {position} is outside map area {area}")
