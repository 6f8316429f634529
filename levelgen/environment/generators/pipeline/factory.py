"""Factory functions for creating pre-configured pipelines.

These functions provide convenient ways to build the pipeline for a
generation mode without needing to manually assemble layers.

Implemented modes:
- "classic": Rooms joined by thin L-shaped tunnels
- "marble": Wide rounded channels, elevation, typed tiles and obstacles
- "wfc": A Wave Function Collapse maze covering the whole map
"""

from __future__ import annotations

import logging

from levelgen.environment.generators.params import GenerationMode, GeneratorParams
from levelgen.environment.level import Level
from levelgen.util.rng import derive_seed

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

logger = logging.getLogger(__name__)


def create_pipeline(params: GeneratorParams, seed: int) -> PipelineGenerator:
    """Create the pipeline for `params.mode`.

    Args:
        params: Clamped generation parameters.
        seed: Resolved master seed.

    Returns:
        A configured PipelineGenerator ready to generate a level.
    """
    match params.mode:
        case GenerationMode.CLASSIC:
            layers = create_classic_layers()
        case GenerationMode.MARBLE:
            layers = create_marble_layers(params)
        case GenerationMode.WFC:
            layers = [WFCMazeLayer()]

    return PipelineGenerator(layers=layers, params=params, seed=seed)


def create_classic_layers() -> list[GenerationLayer]:
    return [
        RoomPlacementLayer(),
        ClassicCorridorLayer(),
        ConnectivityLayer(),
    ]


def create_marble_layers(params: GeneratorParams) -> list[GenerationLayer]:
    """Assemble the marble layers, skipping the optional ones that are disabled.

    The marble pipeline runs:
    1. Rooms, wide channels and connectivity cleanup
    2. Room elevations diffused along the channels (elevation only)
    3. Base tile classification and advanced tile substitution
    4. Slopes at one-level steps (elevation only)
    5. Obstacles in large rooms (obstacles only)
    """
    layers: list[GenerationLayer] = [
        RoomPlacementLayer(),
        MarbleChannelLayer(),
        ConnectivityLayer(),
    ]
    if params.enable_elevation:
        layers += [RoomElevationLayer(), ElevationDiffusionLayer()]
    layers += [TileClassificationLayer(), AdvancedTileLayer()]
    if params.enable_elevation:
        layers.append(SlopeLayer())
    if params.enable_obstacles:
        layers.append(ObstacleLayer())
    return layers


def generate(params: GeneratorParams | None = None) -> Level:
    """Generate a level. Never raises for any parameter values.

    Out-of-range parameters are clamped and a missing seed is drawn from OS
    entropy; the seed used is recorded on the returned level.

    Args:
        params: Generation options, defaults when None.

    Returns:
        The finished Level.
    """
    params = (params or GeneratorParams()).clamped()
    seed = derive_seed() if params.seed is None else params.seed
    logger.debug(
        "Generating %s level %dx%d with seed %d",
        params.mode.value,
        params.width,
        params.height,
        seed,
    )
    return create_pipeline(params, seed).generate()
