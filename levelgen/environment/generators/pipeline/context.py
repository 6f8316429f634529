"""Generation context for the pipeline level generator.

The GenerationContext is a mutable container that holds all state during
level generation. Each layer in the pipeline receives the same context and
modifies it in place. This avoids copying numpy arrays between layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from levelgen.environment.generators.params import GeneratorParams
from levelgen.environment.level import Level, Room
from levelgen.environment.tile_types import MarbleTile, TileType, TileTypeID
from levelgen.types import WorldTilePos
from levelgen.util.rng import RNGProvider


@dataclass
class GenerationContext:
    """Mutable state container passed through the generation pipeline.

    Attributes:
        width: Map width in tiles.
        height: Map height in tiles.
        seed: Master seed recorded in the finished level.
        params: The clamped parameters of this generation call.
        tiles: 2D numpy array of TileTypeID values. Shape: (width, height).
        rooms: Rooms placed so far. Sorted by center x once corridors exist.
        rng: Provider of per-layer random streams.
        elevation: Per-tile elevation. Shape: (width, height).
        room_distance: BFS distance from the nearest room tile, -1 where
            unreached. Shape: (width, height).
        marble_types: TileType values once classified, None before.
        rotations: Per-tile rotation in 0-3, None before classification.
        metadata: Sparse per-tile JSON metadata keyed by (x, y).
        maze: Resolved WFC symbols as row-major strings (WFC mode only).
    """

    width: int
    height: int
    seed: int
    params: GeneratorParams
    tiles: np.ndarray
    rng: RNGProvider
    elevation: np.ndarray
    room_distance: np.ndarray
    rooms: list[Room] = field(default_factory=list)
    marble_types: np.ndarray | None = None
    rotations: np.ndarray | None = None
    metadata: dict[WorldTilePos, str] = field(default_factory=dict)
    maze: list[str] | None = None

    @classmethod
    def create_empty(
        cls,
        params: GeneratorParams,
        seed: int,
        fill_tile: TileTypeID = TileTypeID.WALL,
    ) -> GenerationContext:
        """Create an empty generation context for clamped params.

        Args:
            params: Clamped generation parameters.
            seed: Resolved master seed.
            fill_tile: Tile type to fill the initial map with.

        Returns:
            A new GenerationContext ready for layer processing.
        """
        width, height = params.width, params.height
        tiles = np.full(
            (width, height),
            fill_value=fill_tile,
            dtype=np.uint8,
            order="F",
        )
        elevation = np.zeros((width, height), dtype=np.int32, order="F")
        room_distance = np.full((width, height), -1, dtype=np.int32, order="F")

        return cls(
            width=width,
            height=height,
            seed=seed,
            params=params,
            tiles=tiles,
            rng=RNGProvider(seed),
            elevation=elevation,
            room_distance=room_distance,
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_floor(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.tiles[x, y] == TileTypeID.FLOOR

    def floor_cells(self) -> list[WorldTilePos]:
        """All floor cells in row-major scan order."""
        ys, xs = np.nonzero(self.tiles.T == TileTypeID.FLOOR)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def marble_tile(self, x: int, y: int) -> MarbleTile:
        """Assemble the typed tile at (x, y) from the classification arrays."""
        if self.marble_types is None or self.rotations is None:
            raise ValueError("Tiles have not been classified yet")
        tile_type = TileType(int(self.marble_types[x, y]))
        if tile_type is TileType.EMPTY:
            return MarbleTile.empty()
        return MarbleTile(
            tile_type,
            elevation=int(self.elevation[x, y]),
            rotation=int(self.rotations[x, y]),
            has_walls=tile_type.has_default_walls,
            metadata=self.metadata.get((x, y), ""),
        )

    def to_level(self) -> Level:
        """Freeze this context into the Level handed back to the caller."""
        if self.maze is not None:
            rows = tuple(self.maze)
        else:
            rows = tuple(
                "".join(TileTypeID(int(v)).char for v in self.tiles[:, y])
                for y in range(self.height)
            )

        marble_tiles = None
        if self.marble_types is not None:
            marble_tiles = tuple(
                tuple(self.marble_tile(x, y) for x in range(self.width))
                for y in range(self.height)
            )

        return Level(
            width=self.width,
            height=self.height,
            seed=self.seed,
            rooms=tuple(self.rooms),
            tiles=rows,
            marble_tiles=marble_tiles,
        )
