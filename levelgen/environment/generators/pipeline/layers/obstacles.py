"""Obstacle placement layer for marble levels.

Scatters static pillars inside larger rooms. Obstacles are placed strictly
inside a room's interior, never on its boundary ring, and only ever replace
a passable tile, so corridors entering a room stay open.
"""

from __future__ import annotations

import logging

from levelgen import config
from levelgen.environment.generators.pipeline.context import GenerationContext
from levelgen.environment.generators.pipeline.layer import GenerationLayer
from levelgen.environment.level import Room
from levelgen.environment.tile_types import TileType

logger = logging.getLogger(__name__)


def obstacle_count(room: Room, density: float) -> int:
    """Obstacles wanted in `room`: at least one, growing with area and density."""
    return max(1, int(room.area * density * config.OBSTACLE_DENSITY_SCALE))


class ObstacleLayer(GenerationLayer):
    """Places obstacles in rooms of at least OBSTACLE_MIN_ROOM_AREA tiles.

    Each obstacle gets a bounded number of random interior positions; when
    none of them lands on a free passable tile the obstacle is skipped.
    """

    def apply(self, ctx: GenerationContext) -> None:
        assert ctx.marble_types is not None
        rng = ctx.rng.get("map.obstacles")
        density = ctx.params.obstacle_density
        placed = skipped = 0

        for room in ctx.rooms:
            if room.area < config.OBSTACLE_MIN_ROOM_AREA:
                continue

            for _ in range(obstacle_count(room, density)):
                for _ in range(config.OBSTACLE_PLACEMENT_ATTEMPTS):
                    x = rng.randint(room.x + 1, room.x + room.w - 2)
                    y = rng.randint(room.y + 1, room.y + room.h - 2)
                    tile_type = TileType(int(ctx.marble_types[x, y]))
                    if tile_type.is_passable:
                        ctx.marble_types[x, y] = TileType.OBSTACLE
                        ctx.metadata.pop((x, y), None)
                        placed += 1
                        break
                else:
                    skipped += 1

        logger.debug("Placed %d obstacles, skipped %d", placed, skipped)
