"""Generation layers for the pipeline level generator.

Each layer transforms the GenerationContext in a specific way:
- Room layers: Place and carve rectangular rooms
- Corridor layers: Join rooms with tunnels or wide channels
- Elevation layers: Give rooms heights and spread them along the channels
- Classification layers: Turn floor into typed marble tiles
- Obstacle layers: Scatter pillars in large rooms
- Maze layers: Fill the map with a WFC maze
"""

from .classify import AdvancedTileLayer, SlopeLayer, TileClassificationLayer
from .corridors import ClassicCorridorLayer, ConnectivityLayer, MarbleChannelLayer
from .elevation import ElevationDiffusionLayer, RoomElevationLayer
from .maze import WFCMazeLayer
from .obstacles import ObstacleLayer
from .rooms import RoomPlacementLayer

__all__ = [
    "AdvancedTileLayer",
    "ClassicCorridorLayer",
    "ConnectivityLayer",
    "ElevationDiffusionLayer",
    "MarbleChannelLayer",
    "ObstacleLayer",
    "RoomElevationLayer",
    "RoomPlacementLayer",
    "SlopeLayer",
    "TileClassificationLayer",
    "WFCMazeLayer",
]
