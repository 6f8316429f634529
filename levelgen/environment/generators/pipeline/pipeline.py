"""Pipeline generator that orchestrates layer-based level generation.

The PipelineGenerator runs a sequence of GenerationLayers, each transforming
a shared GenerationContext. This enables compositional generation where
each layer focuses on one aspect of the level.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from levelgen.environment.level import Level

from .context import GenerationContext

if TYPE_CHECKING:
    from levelgen.environment.generators.params import GeneratorParams

    from .layer import GenerationLayer

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Level generator that runs layers sequentially on a shared context.

    The pipeline creates an empty GenerationContext and passes it through
    each layer in order. Layers modify the context in place, building up
    the final level.

    Example:
        generator = PipelineGenerator(
            layers=[
                RoomPlacementLayer(),
                ClassicCorridorLayer(),
                ConnectivityLayer(),
            ],
            params=GeneratorParams(width=60, height=25).clamped(),
            seed=12345,
        )
        level = generator.generate()

    Attributes:
        layers: List of GenerationLayer instances to apply.
        params: Clamped parameters shared by every layer.
        seed: Resolved master seed for reproducible generation.
    """

    def __init__(
        self,
        layers: list[GenerationLayer],
        params: GeneratorParams,
        seed: int,
    ) -> None:
        """Initialize the pipeline generator.

        Args:
            layers: List of GenerationLayer instances to apply in order.
            params: Clamped generation parameters.
            seed: Master seed for deterministic generation.
        """
        self.layers = layers
        self.params = params
        self.seed = seed

    def run(self) -> GenerationContext:
        """Run all layers and return the populated context."""
        ctx = GenerationContext.create_empty(self.params, self.seed)

        for layer in self.layers:
            logger.debug("Applying %s", type(layer).__name__)
            layer.apply(ctx)

        return ctx

    def generate(self) -> Level:
        """Generate a level by running all layers in sequence.

        Returns:
            The finished, immutable Level.
        """
        return self.run().to_level()
