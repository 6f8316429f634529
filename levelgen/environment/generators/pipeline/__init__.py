"""Pipeline-based level generation system.

This package provides a layered architecture for compositional level
generation. Each layer transforms a shared GenerationContext, and the
pipeline freezes the result into a Level.

Example usage:
    from levelgen.environment.generators.pipeline import generate

    level = generate(GeneratorParams(mode=GenerationMode.MARBLE, seed=7))

The pipeline can also be assembled manually for custom configurations:
    from levelgen.environment.generators.pipeline import (
        PipelineGenerator,
        RoomPlacementLayer,
        ClassicCorridorLayer,
    )

    generator = PipelineGenerator(
        layers=[RoomPlacementLayer(), ClassicCorridorLayer()],
        params=GeneratorParams(width=60, height=30).clamped(),
        seed=42,
    )
"""

from .context import GenerationContext
from .factory import create_pipeline, generate
from .layer import GenerationLayer
from .layers import (
    AdvancedTileLayer,
    ClassicCorridorLayer,
    ConnectivityLayer,
    ElevationDiffusionLayer,
    MarbleChannelLayer,
    ObstacleLayer,
    RoomElevationLayer,
    RoomPlacementLayer,
    SlopeLayer,
    TileClassificationLayer,
    WFCMazeLayer,
)
from .pipeline import PipelineGenerator

__all__ = [
    "AdvancedTileLayer",
    "ClassicCorridorLayer",
    "ConnectivityLayer",
    "ElevationDiffusionLayer",
    "GenerationContext",
    "GenerationLayer",
    "MarbleChannelLayer",
    "ObstacleLayer",
    "PipelineGenerator",
    "RoomElevationLayer",
    "RoomPlacementLayer",
    "SlopeLayer",
    "TileClassificationLayer",
    "WFCMazeLayer",
    "create_pipeline",
    "generate",
]
