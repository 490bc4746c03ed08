"""Generation milestone messages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StepProgress:
    """One milestone of a multi-step process (1-indexed ``current_step``)."""

    step_name: str
    current_step: int
    step_count: int

    def __post_init__(self) -> None:
        if self.current_step < 0:
            raise ValueError(f"current_step must be >= 0, got {self.current_step}")
        if self.step_count < 0:
            raise ValueError(f"step_count must be >= 0, got {self.step_count}")

    def is_done(self) -> bool:
        return self.current_step >= self.step_count

    def percentage(self) -> int:
        if self.step_count <= 0:
            return 100
        return min(100, self.current_step * 100 // self.step_count)

    def __str__(self) -> str:
        return f"{self.step_name} ({self.current_step}/{self.step_count})"
