"""Corridor layers: connect each room to its predecessor in center-x order.

- ClassicCorridorLayer: 1-tile-wide L-shaped tunnels
- MarbleChannelLayer: `channel_width` wide channels with a rounded L-turn
- ConnectivityLayer: drops floor fragments cut off from the main network

Carving only ever writes FLOOR, so crossing tunnels are harmless.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum, auto

import numpy as np

from levelgen.environment.generators.pipeline.context import GenerationContext
from levelgen.environment.generators.pipeline.layer import GenerationLayer
from levelgen.environment.tile_types import TileTypeID

logger = logging.getLogger(__name__)


def sort_rooms_by_center(ctx: GenerationContext) -> None:
    ctx.rooms.sort(key=lambda room: room.center()[0])


def carve_h_tunnel(ctx: GenerationContext, x1: int, x2: int, y: int) -> None:
    """Carve row `y` from x1 to x2 inclusive, clipped to the map."""
    if not 0 <= y < ctx.height:
        return
    lo, hi = max(min(x1, x2), 0), min(max(x1, x2), ctx.width - 1)
    if lo <= hi:
        ctx.tiles[lo : hi + 1, y] = TileTypeID.FLOOR


def carve_v_tunnel(ctx: GenerationContext, y1: int, y2: int, x: int) -> None:
    """Carve column `x` from y1 to y2 inclusive, clipped to the map."""
    if not 0 <= x < ctx.width:
        return
    lo, hi = max(min(y1, y2), 0), min(max(y1, y2), ctx.height - 1)
    if lo <= hi:
        ctx.tiles[x, lo : hi + 1] = TileTypeID.FLOOR


def carve_wide_horizontal(
    ctx: GenerationContext, x1: int, x2: int, y: int, channel_width: int
) -> None:
    """Horizontal channel: a band of rows y-half..y+half."""
    half = channel_width // 2
    for dy in range(-half, half + 1):
        carve_h_tunnel(ctx, x1, x2, y + dy)


def carve_wide_vertical(
    ctx: GenerationContext, y1: int, y2: int, x: int, channel_width: int
) -> None:
    """Vertical channel: a band of columns x-half..x+half."""
    half = channel_width // 2
    for dx in range(-half, half + 1):
        carve_v_tunnel(ctx, y1, y2, x + dx)


class Quadrant(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


def carve_quarter_disk(
    ctx: GenerationContext,
    cx: int,
    cy: int,
    corner_radius: int,
    channel_width: int,
    quadrant: Quadrant,
) -> None:
    """Round an L-turn by filling an annular sector around (cx, cy).

    Outer radius is max(corner_radius, channel_width // 2) and the inner radius
    sits half a channel width inside it. The sector is the half-plane of the
    bounding box on the `quadrant` side of the corner; cells are kept when
    inner**2 <= dx**2 + dy**2 <= outer**2.
    """
    half = channel_width // 2
    outer = max(corner_radius, half)
    if outer <= 0:
        return
    inner = outer - half

    full = np.arange(-outer, outer + 1)
    if quadrant is Quadrant.DOWN:
        dxs, dys = full, np.arange(0, outer + 1)
    elif quadrant is Quadrant.UP:
        dxs, dys = full, np.arange(-outer, 1)
    elif quadrant is Quadrant.RIGHT:
        dxs, dys = np.arange(0, outer + 1), full
    else:
        dxs, dys = np.arange(-outer, 1), full

    dx, dy = np.meshgrid(dxs, dys, indexing="ij")
    d2 = dx * dx + dy * dy
    inside = (d2 >= inner * inner) & (d2 <= outer * outer)

    xs = cx + dx[inside]
    ys = cy + dy[inside]
    on_map = (xs >= 0) & (xs < ctx.width) & (ys >= 0) & (ys < ctx.height)
    ctx.tiles[xs[on_map], ys[on_map]] = TileTypeID.FLOOR


class ClassicCorridorLayer(GenerationLayer):
    """Joins consecutive rooms with thin L-shaped tunnels.

    A fair coin picks horizontal-then-vertical or vertical-then-horizontal for
    each pair of room centers.
    """

    def apply(self, ctx: GenerationContext) -> None:
        sort_rooms_by_center(ctx)
        rng = ctx.rng.get("map.corridors")

        for prev, room in zip(ctx.rooms, ctx.rooms[1:], strict=False):
            x1, y1 = prev.center()
            x2, y2 = room.center()
            if bool(rng.getrandbits(1)):
                carve_h_tunnel(ctx, x1, x2, y1)
                carve_v_tunnel(ctx, y1, y2, x2)
            else:
                carve_v_tunnel(ctx, y1, y2, x1)
                carve_h_tunnel(ctx, x1, x2, y2)


class MarbleChannelLayer(GenerationLayer):
    """Joins consecutive rooms with wide channels and a rounded corner.

    Same coin flip as the classic layer; the quarter disk at the turn faces
    the direction the second leg travels.
    """

    def apply(self, ctx: GenerationContext) -> None:
        sort_rooms_by_center(ctx)
        rng = ctx.rng.get("map.corridors")
        width = ctx.params.channel_width
        radius = ctx.params.corner_radius

        for prev, room in zip(ctx.rooms, ctx.rooms[1:], strict=False):
            x1, y1 = prev.center()
            x2, y2 = room.center()
            if bool(rng.getrandbits(1)):
                carve_wide_horizontal(ctx, x1, x2, y1, width)
                turn = Quadrant.DOWN if y2 >= y1 else Quadrant.UP
                carve_quarter_disk(ctx, x2, y1, radius, width, turn)
                carve_wide_vertical(ctx, y1, y2, x2, width)
            else:
                carve_wide_vertical(ctx, y1, y2, x1, width)
                turn = Quadrant.RIGHT if x2 >= x1 else Quadrant.LEFT
                carve_quarter_disk(ctx, x1, y2, radius, width, turn)
                carve_wide_horizontal(ctx, x1, x2, y2, width)


class ConnectivityLayer(GenerationLayer):
    """Reverts floor that is not 4-connected to the first room's center.

    Rooms and the center-to-center legs always form one network; only thin
    slivers of a quarter disk can end up detached from it.
    """

    def apply(self, ctx: GenerationContext) -> None:
        if not ctx.rooms:
            return

        start = ctx.rooms[0].center()
        visited = np.zeros((ctx.width, ctx.height), dtype=bool, order="F")
        visited[start] = True
        queue = deque([start])
        while queue:
            cx, cy = queue.popleft()
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                nx, ny = cx + dx, cy + dy
                if ctx.is_floor(nx, ny) and not visited[nx, ny]:
                    visited[nx, ny] = True
                    queue.append((nx, ny))

        detached = (ctx.tiles == TileTypeID.FLOOR) & ~visited
        removed = int(detached.sum())
        if removed:
            ctx.tiles[detached] = TileTypeID.WALL
            logger.debug("Removed %d detached floor tiles", removed)
