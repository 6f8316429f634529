"""Tile classification layers for marble levels.

These layers turn the carved floor grid into typed marble tiles:
- TileClassificationLayer: base types from local 4-neighbor connectivity
- AdvancedTileLayer: heuristic substitutions (Y-junction, merge, gates, ...)
- SlopeLayer: slopes wherever the floor steps by exactly one level

Base classification by number of passable neighbors (N/E/S/W):
    0-1 -> OPEN_PLATFORM
    2   -> STRAIGHT (opposite pair) or CURVE_90 (adjacent pair)
    3   -> T_JUNCTION, rotation = index of the missing side
    4   -> CROSS_JUNCTION
"""

from __future__ import annotations

import json

import numpy as np

from levelgen import config
from levelgen.environment.generators.pipeline.context import GenerationContext
from levelgen.environment.generators.pipeline.layer import GenerationLayer
from levelgen.environment.tile_types import Direction, TileType

_JUNCTIONS = frozenset({TileType.T_JUNCTION, TileType.CROSS_JUNCTION})
_SLOPE_CANDIDATES = frozenset(
    {TileType.STRAIGHT, TileType.OPEN_PLATFORM, TileType.CROSS_JUNCTION}
)


def open_sides(ctx: GenerationContext, x: int, y: int) -> list[bool]:
    """Passability of the N/E/S/W neighbors of (x, y)."""
    return [ctx.is_floor(x + d.offset[0], y + d.offset[1]) for d in Direction]


def classify_cell(sides: list[bool]) -> tuple[TileType, int]:
    """Base tile type and rotation for a floor cell with the given open sides."""
    count = sum(sides)
    if count <= 1:
        return TileType.OPEN_PLATFORM, 0
    if count == 2:
        if sides[Direction.NORTH] and sides[Direction.SOUTH]:
            return TileType.STRAIGHT, 0
        if sides[Direction.EAST] and sides[Direction.WEST]:
            return TileType.STRAIGHT, 1
        # Curve90 connects N,E at rotation 0; find the rotated pair.
        for d in Direction:
            if sides[d] and sides[d.rotate(1)]:
                return TileType.CURVE_90, int(d)
    if count == 3:
        return TileType.T_JUNCTION, sides.index(False)
    return TileType.CROSS_JUNCTION, 0


def _step(x: int, y: int, direction: Direction, distance: int = 1) -> tuple[int, int]:
    dx, dy = direction.offset
    return x + dx * distance, y + dy * distance


class TileClassificationLayer(GenerationLayer):
    """Classifies every floor cell from its passable neighbors."""

    def apply(self, ctx: GenerationContext) -> None:
        ctx.marble_types = np.zeros((ctx.width, ctx.height), dtype=np.uint8, order="F")
        ctx.rotations = np.zeros((ctx.width, ctx.height), dtype=np.uint8, order="F")

        for x, y in ctx.floor_cells():
            tile_type, rotation = classify_cell(open_sides(ctx, x, y))
            ctx.marble_types[x, y] = tile_type
            ctx.rotations[x, y] = rotation


class AdvancedTileLayer(GenerationLayer):
    """Replaces base tiles with special track pieces.

    Rules read a snapshot of the base classification and the first matching
    rule wins, in this order:
        Y_JUNCTION    T-junction with exactly one floor diagonal flanking its stem
        MERGE         cross-junction with one dominant downstream run
        ONE_WAY_GATE  straight in a narrow run, open two tiles ahead and behind
        LOOP_DE_LOOP  straight beside a tile two or more levels away
        HALF_PIPE     curve beside a tile exactly one level away
        LAUNCH_PAD    straight with nothing two tiles behind, floor two ahead,
                      checked facing either way along its run
    Elevation rules only apply when elevation is enabled.
    """

    def apply(self, ctx: GenerationContext) -> None:
        assert ctx.marble_types is not None and ctx.rotations is not None
        base = ctx.marble_types.copy()
        elevated = ctx.params.enable_elevation

        for x, y in ctx.floor_cells():
            tile_type = TileType(int(base[x, y]))
            rotation = int(ctx.rotations[x, y])
            replacement: tuple[TileType, int, dict] | None = None

            if tile_type is TileType.T_JUNCTION:
                replacement = self._y_junction(ctx, x, y, rotation)
            elif tile_type is TileType.CROSS_JUNCTION:
                replacement = self._merge(ctx, base, x, y)
            elif tile_type is TileType.STRAIGHT:
                replacement = self._one_way_gate(ctx, x, y, rotation)
                if replacement is None and elevated:
                    replacement = self._loop_de_loop(ctx, x, y, rotation)
                if replacement is None:
                    replacement = self._launch_pad(ctx, x, y, rotation)
            elif tile_type is TileType.CURVE_90 and elevated:
                replacement = self._half_pipe(ctx, x, y, rotation)

            if replacement is not None:
                new_type, new_rotation, meta = replacement
                ctx.marble_types[x, y] = new_type
                ctx.rotations[x, y] = new_rotation % 4
                if meta:
                    ctx.metadata[(x, y)] = json.dumps(meta, sort_keys=True)

    def _y_junction(
        self, ctx: GenerationContext, x: int, y: int, rotation: int
    ) -> tuple[TileType, int, dict] | None:
        stem = Direction(rotation).opposite()
        sx, sy = _step(x, y, stem)
        flanks = [
            side
            for side in (stem.rotate(1), stem.rotate(3))
            if ctx.is_floor(*_step(sx, sy, side))
        ]
        if len(flanks) != 1:
            return None
        return TileType.Y_JUNCTION, rotation, {"smooth_side": flanks[0].name.lower()}

    def _merge(
        self, ctx: GenerationContext, base: np.ndarray, x: int, y: int
    ) -> tuple[TileType, int, dict] | None:
        runs = [downstream_run(ctx, base, x, y, d) for d in Direction]
        best = max(runs)
        active = sum(1 for run in runs if run > 0)
        if (
            best < config.MERGE_MIN_RUN
            or runs.count(best) != 1
            or active < config.MERGE_MIN_ACTIVE_DIRECTIONS
        ):
            return None
        output = Direction(runs.index(best))
        return TileType.MERGE, int(output), {"output": output.name.lower()}

    def _one_way_gate(
        self, ctx: GenerationContext, x: int, y: int, rotation: int
    ) -> tuple[TileType, int, dict] | None:
        ahead = Direction.NORTH.rotate(rotation)
        behind = ahead.opposite()
        walled = not ctx.is_floor(*_step(x, y, ahead.rotate(1))) or not ctx.is_floor(
            *_step(x, y, ahead.rotate(3))
        )
        lookahead = config.STRAIGHT_LOOKAHEAD
        if (
            walled
            and ctx.is_floor(*_step(x, y, ahead, lookahead))
            and ctx.is_floor(*_step(x, y, behind, lookahead))
        ):
            return TileType.ONE_WAY_GATE, rotation, {"flow": ahead.name.lower()}
        return None

    def _loop_de_loop(
        self, ctx: GenerationContext, x: int, y: int, rotation: int
    ) -> tuple[TileType, int, dict] | None:
        if max_neighbor_step(ctx, x, y) >= 2:
            return TileType.LOOP_DE_LOOP, rotation, {}
        return None

    def _launch_pad(
        self, ctx: GenerationContext, x: int, y: int, rotation: int
    ) -> tuple[TileType, int, dict] | None:
        # Either end of the run can be the dead start. The pad's single
        # connection is rotated to point along the launch direction.
        lookahead = config.STRAIGHT_LOOKAHEAD
        axis = Direction.NORTH.rotate(rotation)
        for ahead in (axis, axis.opposite()):
            behind = ahead.opposite()
            if ctx.is_floor(*_step(x, y, ahead, lookahead)) and not ctx.is_floor(
                *_step(x, y, behind, lookahead)
            ):
                return TileType.LAUNCH_PAD, int(ahead), {"launch": ahead.name.lower()}
        return None

    def _half_pipe(
        self, ctx: GenerationContext, x: int, y: int, rotation: int
    ) -> tuple[TileType, int, dict] | None:
        if any(abs(step) == 1 for step in neighbor_steps(ctx, x, y)):
            return TileType.HALF_PIPE, rotation, {}
        return None


def downstream_run(
    ctx: GenerationContext, base: np.ndarray, x: int, y: int, direction: Direction
) -> int:
    """Floor tiles in a straight line from (x, y) before a junction or wall."""
    run = 0
    cx, cy = _step(x, y, direction)
    while ctx.is_floor(cx, cy) and TileType(int(base[cx, cy])) not in _JUNCTIONS:
        run += 1
        cx, cy = _step(cx, cy, direction)
    return run


def neighbor_steps(ctx: GenerationContext, x: int, y: int) -> list[int]:
    """Elevation differences to each 4-adjacent floor tile."""
    here = int(ctx.elevation[x, y])
    steps = []
    for direction in Direction:
        nx, ny = _step(x, y, direction)
        if ctx.is_floor(nx, ny):
            steps.append(int(ctx.elevation[nx, ny]) - here)
    return steps


def max_neighbor_step(ctx: GenerationContext, x: int, y: int) -> int:
    return max((abs(step) for step in neighbor_steps(ctx, x, y)), default=0)


class SlopeLayer(GenerationLayer):
    """Turns straights, platforms and crossings into slopes at one-level steps.

    Rotation records the axis of the step: 0 for a north/south neighbor,
    1 for an east/west one.
    """

    def apply(self, ctx: GenerationContext) -> None:
        assert ctx.marble_types is not None and ctx.rotations is not None

        for x, y in ctx.floor_cells():
            if TileType(int(ctx.marble_types[x, y])) not in _SLOPE_CANDIDATES:
                continue
            here = int(ctx.elevation[x, y])
            for direction in Direction:
                nx, ny = _step(x, y, direction)
                if not ctx.is_floor(nx, ny):
                    continue
                rise = int(ctx.elevation[nx, ny]) - here
                if abs(rise) == 1:
                    vertical = direction in (Direction.NORTH, Direction.SOUTH)
                    ctx.marble_types[x, y] = TileType.SLOPE
                    ctx.rotations[x, y] = 0 if vertical else 1
                    ctx.metadata[(x, y)] = json.dumps(
                        {"rise": rise, "toward": direction.name.lower()},
                        sort_keys=True,
                    )
                    break
