"""
Tile types for generated levels.

This module defines two layers of tile vocabulary:
- `TileTypeID`: the raw wall/floor value stored in the carving grid. The
  generators keep a NumPy array of these IDs while rooms and corridors are
  being carved.
- `TileType`, `Direction` and `MarbleTile`: the richly-typed tiles of a marble
  track. Each `TileType` has a fixed connection template (e.g. Straight
  connects North/South) which is rotated clockwise by the tile's rotation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from levelgen import config
from levelgen.types import Offset


class TileTypeID(IntEnum):
    """Raw cell values of the carving grid."""

    WALL = 0
    FLOOR = 1

    @property
    def char(self) -> str:
        if self is TileTypeID.FLOOR:
            return config.TILE_FLOOR_CHAR
        return config.TILE_WALL_CHAR


class Direction(IntEnum):
    """Connection directions, in clockwise order."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def opposite(self) -> Direction:
        return Direction((self + 2) % 4)

    def rotate(self, steps: int) -> Direction:
        """Rotate clockwise by the given number of 90 degree steps."""
        return Direction((self + steps) % 4)

    @property
    def offset(self) -> Offset:
        return _DIRECTION_OFFSETS[self]


_DIRECTION_OFFSETS: dict[Direction, Offset] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class TileType(IntEnum):
    """Core tile types for marble level generation.

    Values are stable: they are stored in uint8 NumPy arrays during
    generation.
    """

    EMPTY = 0  # Empty space / wall / void
    STRAIGHT = 1
    CURVE_90 = 2
    T_JUNCTION = 3
    Y_JUNCTION = 4  # 3-way junction with smooth angles
    CROSS_JUNCTION = 5
    SLOPE = 6  # Connects two elevations differing by 1
    OPEN_PLATFORM = 7  # Open area with no walls
    OBSTACLE = 8  # Static pillar or bumper
    MERGE = 9  # Multiple inputs converge to one output
    ONE_WAY_GATE = 10
    LOOP_DE_LOOP = 11
    HALF_PIPE = 12
    LAUNCH_PAD = 13
    BRIDGE = 14  # Path goes over another
    TUNNEL = 15  # Path goes under another

    @property
    def is_passable(self) -> bool:
        return self not in (TileType.EMPTY, TileType.OBSTACLE)

    @property
    def has_default_walls(self) -> bool:
        return self in _WALLED_TYPES

    @property
    def template(self) -> tuple[Direction, ...]:
        """Connection directions at rotation 0."""
        return _CONNECTION_TEMPLATES[self]

    @property
    def wire_name(self) -> str:
        """CamelCase variant name used in serialized levels (e.g. "Curve90")."""
        return _WIRE_NAMES[self]

    @classmethod
    def from_wire_name(cls, name: str) -> TileType:
        for tile_type, wire_name in _WIRE_NAMES.items():
            if wire_name == name:
                return tile_type
        raise ValueError(f"Unknown tile type: {name!r}")

    def ascii_char(self, has_walls: bool) -> str:
        if self is TileType.EMPTY:
            return config.TILE_WALL_CHAR
        if self is TileType.OBSTACLE:
            return "O"
        return config.TILE_FLOOR_CHAR if has_walls else "·"


_WALLED_TYPES = frozenset(
    {
        TileType.STRAIGHT,
        TileType.CURVE_90,
        TileType.T_JUNCTION,
        TileType.Y_JUNCTION,
        TileType.CROSS_JUNCTION,
        TileType.SLOPE,
        TileType.MERGE,
        TileType.LOOP_DE_LOOP,
    }
)

_WIRE_NAMES: dict[TileType, str] = {
    TileType.EMPTY: "Empty",
    TileType.STRAIGHT: "Straight",
    TileType.CURVE_90: "Curve90",
    TileType.T_JUNCTION: "TJunction",
    TileType.Y_JUNCTION: "YJunction",
    TileType.CROSS_JUNCTION: "CrossJunction",
    TileType.SLOPE: "Slope",
    TileType.OPEN_PLATFORM: "OpenPlatform",
    TileType.OBSTACLE: "Obstacle",
    TileType.MERGE: "Merge",
    TileType.ONE_WAY_GATE: "OneWayGate",
    TileType.LOOP_DE_LOOP: "LoopDeLoop",
    TileType.HALF_PIPE: "HalfPipe",
    TileType.LAUNCH_PAD: "LaunchPad",
    TileType.BRIDGE: "Bridge",
    TileType.TUNNEL: "Tunnel",
}

_N, _E, _S, _W =Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST

_CONNECTION_TEMPLATES: dict[TileType, tuple[Direction, ...]] = {
    TileType.EMPTY: (),
    TileType.STRAIGHT: (_N, _S),
    TileType.CURVE_90: (_N, _E),
    TileType.T_JUNCTION: (_N, _E, _S),
    TileType.Y_JUNCTION: (_N, _E, _S),
    TileType.CROSS_JUNCTION: (_N, _E, _S, _W),
    TileType.SLOPE: (_N, _S),
    TileType.OPEN_PLATFORM: (_N, _E, _S, _W),
    TileType.OBSTACLE: (),
    TileType.MERGE: (_N, _E, _W),
    TileType.ONE_WAY_GATE: (_N, _S),
    TileType.LOOP_DE_LOOP: (_N, _S),
    TileType.HALF_PIPE: (_N, _S),
    TileType.LAUNCH_PAD: (_N,),
    TileType.BRIDGE: (_N, _S),
    TileType.TUNNEL: (_N, _S),
}


@dataclass(frozen=True)
class MarbleTile:
    """A marble track tile with type, elevation, rotation and wall information.

    Attributes:
        tile_type: The type of tile.
        elevation: Elevation level (0 = ground level, can be negative).
        rotation: Clockwise rotation in 90 degree steps, always in 0-3.
        has_walls: Whether this tile has side walls.
        metadata: Additional data for game engines, as a JSON string.
    """

    tile_type: TileType
    elevation: int = 0
    rotation: int = 0
    has_walls: bool = False
    metadata: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", self.rotation % 4)

    @classmethod
    def empty(cls) -> MarbleTile:
        """Create an empty (wall) tile."""
        return cls(TileType.EMPTY)

    @classmethod
    def new(
        cls, tile_type: TileType, elevation: int = 0, rotation: int = 0
    ) -> MarbleTile:
        """Create a tile with the type's default walls."""
        return cls(
            tile_type,
            elevation=elevation,
            rotation=rotation,
            has_walls=tile_type.has_default_walls,
        )

    def connections(self) -> list[Direction]:
        """The directions this tile connects to, after rotation."""
        return [d.rotate(self.rotation) for d in self.tile_type.template]

    def connects(self, direction: Direction) -> bool:
        return direction in self.connections()

    def compatible_with(self, other: MarbleTile, direction: Direction) -> bool:
        """Check whether `other`, lying in `direction`, joins up with this tile.

        Both tiles must connect towards each other. Slopes bridge an elevation
        difference of one level; any other pair must sit at the same elevation.
        """
        if not self.connects(direction):
            return False
        if not other.connects(direction.opposite()):
            return False
        if TileType.SLOPE in (self.tile_type, other.tile_type):
            return abs(self.elevation - other.elevation) <= 1
        return self.elevation == other.elevation

    def ascii_char(self) -> str:
        return self.tile_type.ascii_char(self.has_walls)
