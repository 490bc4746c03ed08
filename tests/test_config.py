"""Tests for GenerationConfig validation."""

import sys
import os
from dataclasses import FrozenInstanceError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.config import GenerationConfig


class TestGenerationConfig:
    def test_defaults_valid(self):
        GenerationConfig().validate()

    def test_frozen(self):
        cfg = GenerationConfig()
        with pytest.raises(FrozenInstanceError):
            cfg.room_count = 3  # type: ignore[misc]

    @pytest.mark.parametrize("overrides", [
        {"min_room_size": 2},
        {"min_room_size": 6, "max_room_size": 5},
        {"room_count": 1},
        {"room_gap": 0},
        {"map_border": 0},
        {"max_door_count": 0},
        {"max_door_count": 5},
        {"max_placement_attempts": 3},
        {"channel_capacity": 0},
        {"map_width": 4},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            GenerationConfig(**overrides).validate()
