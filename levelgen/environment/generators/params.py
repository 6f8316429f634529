"""Generation parameters.

All recognized options live on a single `GeneratorParams` dataclass whose
defaults come from `levelgen.config`. Out-of-range values are never rejected;
`GeneratorParams.clamped()` pulls them back to sane minimums before a
pipeline is built.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from levelgen import config


class GenerationMode(Enum):
    """High-level generation mode, dispatched once per generation call."""

    CLASSIC = "classic"  # Rooms joined by thin L-shaped tunnels
    MARBLE = "marble"  # Wide rounded channels with typed tiles
    WFC = "wfc"  # Wave Function Collapse maze, no rooms

    @classmethod
    def parse(cls, name: str) -> GenerationMode:
        """Resolve a user-facing mode name (case-insensitive, with aliases)."""
        key = name.strip().lower()
        if key not in _MODE_ALIASES:
            raise ValueError(f"Invalid mode: {name!r} (expected classic|marble|wfc)")
        return _MODE_ALIASES[key]


_MODE_ALIASES: dict[str, GenerationMode] = {
    "classic": GenerationMode.CLASSIC,
    "dungeon": GenerationMode.CLASSIC,
    "marble": GenerationMode.MARBLE,
    "marbles": GenerationMode.MARBLE,
    "wfc": GenerationMode.WFC,
    "wave": GenerationMode.WFC,
    "maze": GenerationMode.WFC,
}


@dataclass(frozen=True)
class GeneratorParams:
    """Options for one generation call.

    Attributes:
        width: Map width in tiles (at least MIN_MAP_DIM after clamping).
        height: Map height in tiles (at least MIN_MAP_DIM after clamping).
        rooms: Number of rooms to try to place.
        min_room: Minimum room side length (at least MIN_ROOM_DIM).
        max_room: Maximum room side length (at least min_room + 1).
        seed: Master seed; None derives one from OS entropy.
        mode: Which generation pipeline to run.
        channel_width: Marble channel width in tiles.
        corner_radius: Marble corner radius in tiles.
        enable_elevation: Marble: assign room elevations and add slopes.
        max_elevation: Marble: room elevations lie in [-max, max].
        enable_obstacles: Marble: scatter obstacles into large rooms.
        obstacle_density: Marble: obstacle density in [0, 1].
    """

    width: int = config.DEFAULT_WIDTH
    height: int = config.DEFAULT_HEIGHT
    rooms: int = config.DEFAULT_ROOMS
    min_room: int = config.DEFAULT_MIN_ROOM
    max_room: int = config.DEFAULT_MAX_ROOM
    seed: int | None = None
    mode: GenerationMode = GenerationMode.CLASSIC
    channel_width: int = config.DEFAULT_CHANNEL_WIDTH
    corner_radius: int = config.DEFAULT_CORNER_RADIUS
    enable_elevation: bool = False
    max_elevation: int = config.DEFAULT_MAX_ELEVATION
    enable_obstacles: bool = False
    obstacle_density: float = config.DEFAULT_OBSTACLE_DENSITY

    def clamped(self) -> GeneratorParams:
        """Return a copy with every dimension and size pulled into range."""
        min_room = max(self.min_room, config.MIN_ROOM_DIM)
        return replace(
            self,
            width=max(self.width, config.MIN_MAP_DIM),
            height=max(self.height, config.MIN_MAP_DIM),
            rooms=max(self.rooms, 0),
            min_room=min_room,
            max_room=max(self.max_room, min_room + 1),
            channel_width=max(self.channel_width, 1),
            corner_radius=max(self.corner_radius, 0),
            max_elevation=max(self.max_elevation, 0),
            obstacle_density=min(max(self.obstacle_density, 0.0), 1.0),
        )
