from __future__ import annotations

from typing import TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord: TypeAlias = int  # Always integer tile position

# World coordinates - absolute positions on the generated map
WorldTileCoord: TypeAlias = TileCoord  # Example: x=5, y=3
WorldTilePos: TypeAlias = tuple[
    WorldTileCoord, WorldTileCoord
]  # Example: (5, 3) = tile 5,3 on map

# Grid steps
UnitStep: TypeAlias = int  # -1, 0 or 1
Offset: TypeAlias = tuple[UnitStep, UnitStep]  # Example: (0, -1) = northward step

# =============================================================================
# RANDOMNESS
# =============================================================================

# Master seed for a generation call. Levels always record an int seed.
RandomSeed: TypeAlias = int | str | None
