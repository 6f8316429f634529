"""Elevation layers for marble levels.

- RoomElevationLayer: gives every room a random elevation
- ElevationDiffusionLayer: spreads room elevations along the corridors and
  smooths jumps larger than one level

Smoothing is a heuristic with a fixed pass cap. On large or adversarial
layouts it can stop with residual jumps greater than one level; those are
logged and left in place.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import replace

import numpy as np

from levelgen import config
from levelgen.environment.generators.pipeline.context import GenerationContext
from levelgen.environment.generators.pipeline.layer import GenerationLayer
from levelgen.environment.tile_types import Direction

logger = logging.getLogger(__name__)


class RoomElevationLayer(GenerationLayer):
    """Draws each room's elevation uniformly from [-max_elevation, max_elevation]."""

    def apply(self, ctx: GenerationContext) -> None:
        rng = ctx.rng.get("map.elevation")
        limit = ctx.params.max_elevation
        ctx.rooms[:] = [
            replace(room, elevation=rng.randint(-limit, limit)) for room in ctx.rooms
        ]


def diffuse_elevation(ctx: GenerationContext) -> None:
    """Multi-source BFS from every room tile over the floor.

    Room tiles take their room's elevation (0 when unset) at distance 0; every
    other reachable floor tile takes the elevation of the room it was first
    reached from.
    """
    queue: deque[tuple[int, int]] = deque()
    for room in ctx.rooms:
        level = room.elevation or 0
        for x, y in room.cells():
            if ctx.room_distance[x, y] == -1:
                ctx.room_distance[x, y] = 0
                ctx.elevation[x, y] = level
                queue.append((x, y))

    while queue:
        x, y = queue.popleft()
        for direction in Direction:
            dx, dy = direction.offset
            nx, ny = x + dx, y + dy
            if ctx.is_floor(nx, ny) and ctx.room_distance[nx, ny] == -1:
                ctx.room_distance[nx, ny] = ctx.room_distance[x, y] + 1
                ctx.elevation[nx, ny] = ctx.elevation[x, y]
                queue.append((nx, ny))


def smooth_elevation(
    ctx: GenerationContext, max_passes: int = config.ELEVATION_SMOOTHING_MAX_PASSES
) -> int:
    """Nudge tiles one level toward neighbors more than one level away.

    A tile only moves when it is at least as far from a room as the neighbor
    it moves toward, so room tiles hold their elevation. Each tile moves at
    most once per pass.

    Returns:
        The number of passes that changed something.
    """
    cells = ctx.floor_cells()
    elevation = ctx.elevation
    distance = ctx.room_distance

    for pass_index in range(max_passes):
        changed = False
        for x, y in cells:
            for direction in Direction:
                dx, dy = direction.offset
                nx, ny = x + dx, y + dy
                if not ctx.is_floor(nx, ny):
                    continue
                diff = int(elevation[nx, ny]) - int(elevation[x, y])
                if abs(diff) > 1 and distance[x, y] >= distance[nx, ny]:
                    elevation[x, y] += 1 if diff > 0 else -1
                    changed = True
                    break
        if not changed:
            return pass_index
    return max_passes


def max_elevation_jump(ctx: GenerationContext) -> int:
    """Largest elevation difference between two 4-adjacent floor tiles."""
    floor = ctx.tiles.astype(bool)
    elevation = ctx.elevation.astype(np.int64)
    jump = 0
    both = floor[1:, :] & floor[:-1, :]
    if both.any():
        jump = max(jump, int(np.abs(np.diff(elevation, axis=0))[both].max()))
    both = floor[:, 1:] & floor[:, :-1]
    if both.any():
        jump = max(jump, int(np.abs(np.diff(elevation, axis=1))[both].max()))
    return jump


class ElevationDiffusionLayer(GenerationLayer):
    """Assigns per-tile elevation from the rooms, then smooths it."""

    def __init__(
        self, max_passes: int = config.ELEVATION_SMOOTHING_MAX_PASSES
    ) -> None:
        self.max_passes = max_passes

    def apply(self, ctx: GenerationContext) -> None:
        diffuse_elevation(ctx)
        passes = smooth_elevation(ctx, self.max_passes)
        logger.debug("Elevation smoothing settled after %d passes", passes)

        if passes >= self.max_passes:
            residual = max_elevation_jump(ctx)
            if residual > 1:
                logger.warning(
                    "Elevation smoothing hit its %d pass cap with a residual "
                    "jump of %d levels",
                    self.max_passes,
                    residual,
                )
