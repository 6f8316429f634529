"""Level generation algorithms.

Pipeline-based generation is the only system. The three generation modes
are created by composing different layers:
- Classic: RoomPlacementLayer + ClassicCorridorLayer + ConnectivityLayer
- Marble: rooms + MarbleChannelLayer + elevation + tile classification
  + obstacles
- WFC: WFCMazeLayer

And a reusable WFC solver for constraint-based generation:
- WFCSolver: Bitmask Wave Function Collapse solver
- WfcTile: Tile definition with per-side edge connections
"""

from .params import GenerationMode, GeneratorParams
from .pipeline import (
    GenerationContext,
    GenerationLayer,
    PipelineGenerator,
    create_pipeline,
    generate,
)
from .wfc_solver import (
    BOX_TILESET,
    WFCContradiction,
    WFCSolver,
    WfcTile,
)

__all__ = [
    "BOX_TILESET",
    "GenerationContext",
    "GenerationLayer",
    "GenerationMode",
    "GeneratorParams",
    "PipelineGenerator",
    "WFCContradiction",
    "WFCSolver",
    "WfcTile",
    "create_pipeline",
    "generate",
]
