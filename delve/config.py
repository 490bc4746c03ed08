"""Level generation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable configuration for level generation."""

    # Seed (None -> fresh random seed per run)
    seed: str | None = None

    # Map
    map_width: int = 80
    map_height: int = 40
    map_border: int = 1                 # Rock ring kept free of rooms for corridors

    # Rooms
    room_count: int = 8
    min_room_size: int = 3
    max_room_size: int = 9
    room_gap: int = 1                   # Minimum rock tiles between two rooms
    max_placement_attempts: int = 500

    # Doors
    max_door_count: int = 4

    # Containers
    max_containers_per_room: int = 2
    chest_weight_limit: int = 100
    chest_item_count: int = 3

    # Progress channel
    channel_capacity: int = 1

    # Logging
    log_level: str = "INFO"

    def validate(self) -> None:
        """Raise ``ValueError`` for parameter combinations generation cannot honour."""
        if self.min_room_size < 3:
            raise ValueError("min_room_size must be >= 3 (rooms need an inside area)")
        if self.max_room_size < self.min_room_size:
            raise ValueError("max_room_size must be >= min_room_size")
        if self.room_count < 2:
            raise ValueError("room_count must be >= 2 (one entry room and one exit room)")
        if self.room_gap < 1:
            raise ValueError("room_gap must be >= 1 so corridors can pass between rooms")
        if self.map_border < 1:
            raise ValueError("map_border must be >= 1")
        if not 1 <= self.max_door_count <= 4:
            raise ValueError("max_door_count must be between 1 and 4")
        if self.max_placement_attempts < self.room_count:
            raise ValueError("max_placement_attempts must be >= room_count")
        if self.channel_capacity < 1:
            raise ValueError("channel_capacity must be >= 1")
        usable_w = self.map_width - 2 * self.map_border
        usable_h = self.map_height - 2 * self.map_border
        if usable_w < self.min_room_size or usable_h < self.min_room_size:
            raise ValueError(
                f"Map {self.map_width}x{self.map_height} is too small for rooms of "
                f"size {self.min_room_size} with border {self.map_border}"
            )
