"""WFC maze layer.

Fills the whole map with box-drawing maze tiles using Wave Function
Collapse. Contradictions are retried with a fresh solver that keeps drawing
from the same random stream; if every attempt fails the map degrades to a
blank maze instead of raising.
"""

from __future__ import annotations

import logging

from levelgen import config
from levelgen.environment.generators.pipeline.context import GenerationContext
from levelgen.environment.generators.pipeline.layer import GenerationLayer
from levelgen.environment.generators.wfc_solver import (
    BLANK_TILE_INDEX,
    BOX_TILESET,
    WFCContradiction,
    WFCSolver,
    WfcTile,
)

logger = logging.getLogger(__name__)


class WFCMazeLayer(GenerationLayer):
    """Resolves a width x height maze and stores it as row strings on the context."""

    def __init__(
        self,
        tiles: tuple[WfcTile, ...] = BOX_TILESET,
        max_attempts: int = config.WFC_MAX_ATTEMPTS,
    ) -> None:
        self.tiles = tiles
        self.max_attempts = max_attempts

    def apply(self, ctx: GenerationContext) -> None:
        rng = ctx.rng.get("map.wfc")

        for attempt in range(self.max_attempts):
            solver = WFCSolver(ctx.width, ctx.height, self.tiles, rng)
            try:
                result = solver.solve()
            except WFCContradiction as exc:
                logger.debug("WFC attempt %d failed: %s", attempt + 1, exc)
                continue

            ctx.maze = [
                "".join(self.tiles[int(result[x, y])].symbol for x in range(ctx.width))
                for y in range(ctx.height)
            ]
            logger.debug("WFC maze resolved on attempt %d", attempt + 1)
            return

        logger.warning(
            "WFC failed after %d attempts, falling back to a blank maze",
            self.max_attempts,
        )
        blank = self.tiles[BLANK_TILE_INDEX].symbol
        ctx.maze = [blank * ctx.width for _ in range(ctx.height)]
