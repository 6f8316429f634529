"""Abstract base class for generation layers.

Each layer in the pipeline implements the GenerationLayer interface and
transforms the GenerationContext in some way - carving floor, assigning
elevation, classifying tiles or solving a maze.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext


class GenerationLayer(ABC):
    """Abstract base class for level generation layers.

    Layers are applied sequentially by the PipelineGenerator. Each layer
    receives a GenerationContext and modifies it in place.

    Subclasses must implement the apply() method to perform their specific
    generation logic. Layers never raise for bad input: they degrade.
    """

    @abstractmethod
    def apply(self, ctx: GenerationContext) -> None:
        """Apply this layer's generation logic to the context.

        This method should modify the context in place. It may:
        - Carve tiles (ctx.tiles)
        - Add or update rooms (ctx.rooms)
        - Fill the marble arrays (ctx.elevation, ctx.marble_types, ...)
        - Use a stream from ctx.rng for random decisions

        Args:
            ctx: The generation context to modify.
        """
        raise NotImplementedError
