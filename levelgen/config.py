"""
Configuration constants.

Centralizes the defaults, clamps, iteration caps and heuristic thresholds used
by the level generators. Organized by functional area for easy maintenance.
"""

# =============================================================================
# MAP DIMENSIONS
# =============================================================================

# Minimum sensible map dimension to avoid degenerate results.
MIN_MAP_DIM = 10
# Minimum sensible room side length.
MIN_ROOM_DIM = 3

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 25
DEFAULT_ROOMS = 12
DEFAULT_MIN_ROOM = 4
DEFAULT_MAX_ROOM = 10

# =============================================================================
# ROOM PLACEMENT
# =============================================================================

# Attempt budget is max(ROOM_ATTEMPTS_PER_ROOM * target, MIN_ROOM_ATTEMPTS).
ROOM_ATTEMPTS_PER_ROOM = 10
MIN_ROOM_ATTEMPTS = 100
# Rooms expanded by this many tiles may not intersect each other.
ROOM_MARGIN = 1

# =============================================================================
# MARBLE CHANNELS
# =============================================================================

DEFAULT_CHANNEL_WIDTH = 2
DEFAULT_CORNER_RADIUS = 2

# =============================================================================
# ELEVATION
# =============================================================================

DEFAULT_MAX_ELEVATION = 3
ELEVATION_SMOOTHING_MAX_PASSES = 50

# =============================================================================
# OBSTACLES
# =============================================================================

DEFAULT_OBSTACLE_DENSITY = 0.3
OBSTACLE_MIN_ROOM_AREA = 30
OBSTACLE_DENSITY_SCALE = 0.1
OBSTACLE_PLACEMENT_ATTEMPTS = 20

# =============================================================================
# ADVANCED TILES
# =============================================================================

# A Merge needs one downstream run at least this long.
MERGE_MIN_RUN = 3
# ...and at least this many directions with a nonzero run.
MERGE_MIN_ACTIVE_DIRECTIONS = 3
# Look-ahead distance used by the OneWayGate / LaunchPad tests.
STRAIGHT_LOOKAHEAD = 2

# =============================================================================
# WAVE FUNCTION COLLAPSE
# =============================================================================

WFC_MAX_ATTEMPTS = 10

# =============================================================================
# OUTPUT SYMBOLS
# =============================================================================

TILE_WALL_CHAR = "#"
TILE_FLOOR_CHAR = "."
