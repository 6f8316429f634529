"""Procedural 2D tile level generator.

Three generation modes share one layered pipeline:
- classic: rectangular rooms joined by thin L-shaped tunnels
- marble: wide rounded channels with elevation, typed track tiles and
  obstacles
- wfc: a box-drawing maze solved with Wave Function Collapse

Generation is a pure function of the parameters and the seed:

    from levelgen import GenerationMode, GeneratorParams, generate

    level = generate(GeneratorParams(mode=GenerationMode.MARBLE, seed=42))
    print("\\n".join(level.tiles))
"""

from levelgen.environment.generators import (
    GenerationMode,
    GeneratorParams,
    create_pipeline,
    generate,
)
from levelgen.environment.level import Level, Room
from levelgen.environment.tile_types import Direction, MarbleTile, TileType
from levelgen.export import level_to_dict, level_to_json, marble_to_ascii, to_ascii

__all__ = [
    "Direction",
    "GenerationMode",
    "GeneratorParams",
    "Level",
    "MarbleTile",
    "Room",
    "TileType",
    "create_pipeline",
    "generate",
    "level_to_dict",
    "level_to_json",
    "marble_to_ascii",
    "to_ascii",
]
