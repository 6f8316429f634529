"""Room placement layer.

Rejection-samples non-overlapping rectangular rooms and carves each accepted
room into the grid immediately, so later candidates see up-to-date geometry.
"""

from __future__ import annotations

import logging

from levelgen import config
from levelgen.environment.generators.pipeline.context import GenerationContext
from levelgen.environment.generators.pipeline.layer import GenerationLayer
from levelgen.environment.level import Room
from levelgen.environment.tile_types import TileTypeID

logger = logging.getLogger(__name__)


def carve_room(ctx: GenerationContext, room: Room) -> None:
    ctx.tiles[room.x : room.x2, room.y : room.y2] = TileTypeID.FLOOR


class RoomPlacementLayer(GenerationLayer):
    """Places up to `params.rooms` rooms with a one tile margin between them.

    Placement gives up once the attempt budget of
    max(10 * target, 100) candidates is spent. Fewer rooms than requested is
    an expected outcome, not an error.
    """

    def apply(self, ctx: GenerationContext) -> None:
        params = ctx.params
        rng = ctx.rng.get("map.rooms")
        target = params.rooms
        attempts = max(target * config.ROOM_ATTEMPTS_PER_ROOM, config.MIN_ROOM_ATTEMPTS)

        for _ in range(attempts):
            if len(ctx.rooms) >= target:
                break

            w = rng.randint(params.min_room, params.max_room)
            h = rng.randint(params.min_room, params.max_room)

            # Room would leave no space for the border margin.
            if w >= ctx.width - 4 or h >= ctx.height - 4:
                continue

            x = rng.randint(1, ctx.width - w - 2)
            y = rng.randint(1, ctx.height - h - 2)
            candidate = Room(x, y, w, h)

            if any(
                room.intersects(candidate, margin=config.ROOM_MARGIN)
                for room in ctx.rooms
            ):
                continue

            carve_room(ctx, candidate)
            ctx.rooms.append(candidate)

        logger.debug("Placed %d of %d requested rooms", len(ctx.rooms), target)
