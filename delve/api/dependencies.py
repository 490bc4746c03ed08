"""FastAPI dependency injection: provides the LevelManager singleton."""

from __future__ import annotations

from delve.api.level_manager import LevelManager

_level_manager: LevelManager | None = None


def set_level_manager(manager: LevelManager | None) -> None:
    global _level_manager
    _level_manager = manager


def get_level_manager() -> LevelManager:
    if _level_manager is None:
        raise RuntimeError("LevelManager not initialized, server not started correctly.")
    return _level_manager
