from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from typing import Any

from levelgen.environment.generators.params import GeneratorParams
from levelgen.environment.generators.pipeline import GenerationContext
from levelgen.environment.generators.wfc_solver import BOX_TILESET, WfcTile
from levelgen.environment.tile_types import Direction, TileTypeID
from levelgen.types import WorldTilePos


def context_from_rows(
    rows: Sequence[str], seed: int = 0, **overrides: Any
) -> GenerationContext:
    """Build a context whose grid is drawn with '#' (wall) and '.' (floor)."""
    params = GeneratorParams(width=len(rows[0]), height=len(rows), **overrides)
    ctx = GenerationContext.create_empty(params, seed)
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == ".":
                ctx.tiles[x, y] = TileTypeID.FLOOR
    return ctx


def floor_positions(rows: Sequence[str]) -> set[WorldTilePos]:
    return {
        (x, y)
        for y, row in enumerate(rows)
        for x, char in enumerate(row)
        if char == "."
    }


def flood_fill(rows: Sequence[str], start: WorldTilePos) -> set[WorldTilePos]:
    """Floor cells 4-connected to `start` in a '#'/'.' drawing."""
    floor = floor_positions(rows)
    if start not in floor:
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for direction in Direction:
            dx, dy = direction.offset
            nxt = (x + dx, y + dy)
            if nxt in floor and nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def assert_valid_maze(
    rows: Sequence[str], tiles: tuple[WfcTile, ...] = BOX_TILESET
) -> None:
    """Every neighbor pair agrees on its shared edge and no edge leaves the grid."""
    by_symbol = {tile.symbol: tile for tile in tiles}
    height, width = len(rows), len(rows[0])
    for y, row in enumerate(rows):
        assert len(row) == width
        for x, symbol in enumerate(row):
            tile = by_symbol[symbol]
            for direction in Direction:
                dx, dy = direction.offset
                nx, ny = x + dx, y + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    assert not tile.connects(direction), (
                        f"{symbol!r} at ({x},{y}) points off the grid {direction.name}"
                    )
                    continue
                neighbor = by_symbol[rows[ny][nx]]
                assert tile.connects(direction) == neighbor.connects(
                    direction.opposite()
                ), f"Edge mismatch at ({x},{y}) -> ({nx},{ny})"
