from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from levelgen.environment.tile_types import MarbleTile
from levelgen.types import TileCoord, WorldTilePos


@dataclass(frozen=True)
class Room:
    """Axis-aligned rectangular room in tile coordinates.

    `elevation` is only set when a marble level is generated with elevation
    enabled.
    """

    x: TileCoord
    y: TileCoord
    w: TileCoord
    h: TileCoord
    elevation: int | None = None

    @property
    def x2(self) -> TileCoord:
        return self.x + self.w

    @property
    def y2(self) -> TileCoord:
        return self.y + self.h

    @property
    def area(self) -> int:
        return self.w * self.h

    def center(self) -> WorldTilePos:
        """Integer center of the room (floor division)."""
        return (self.x + self.w // 2, self.y + self.h // 2)

    def intersects(self, other: Room, margin: int = 0) -> bool:
        """Whether this room, expanded by `margin` on each side, overlaps `other`."""
        return not (
            self.x2 + margin <= other.x
            or other.x2 <= self.x - margin
            or self.y2 + margin <= other.y
            or other.y2 <= self.y - margin
        )

    def cells(self) -> Iterator[WorldTilePos]:
        for iy in range(self.y, self.y2):
            for ix in range(self.x, self.x2):
                yield ix, iy

    def interior_cells(self) -> Iterator[WorldTilePos]:
        """Cells that are not on the room's outer ring."""
        for iy in range(self.y + 1, self.y2 - 1):
            for ix in range(self.x + 1, self.x2 - 1):
                yield ix, iy


@dataclass(frozen=True)
class Level:
    """A finished level, owned by the caller and never mutated again.

    Attributes:
        width: Width of the level in tiles.
        height: Height of the level in tiles.
        seed: Master seed used to generate this level.
        rooms: Rooms that were placed, sorted by center x. Empty in WFC mode.
        tiles: Row-major rows of single-character symbols. Classic and marble
            levels use '#' for wall and '.' for floor; WFC levels use the
            box-drawing symbols of the maze tileset.
        marble_tiles: Row-major grid of typed tiles, present only for marble
            levels.
    """

    width: int
    height: int
    seed: int
    rooms: tuple[Room, ...]
    tiles: tuple[str, ...]
    marble_tiles: tuple[tuple[MarbleTile, ...], ...] | None = None

    def tile_at(self, x: TileCoord, y: TileCoord) -> str:
        return self.tiles[y][x]

    def marble_tile_at(self, x: TileCoord, y: TileCoord) -> MarbleTile | None:
        if self.marble_tiles is None:
            return None
        return self.marble_tiles[y][x]
