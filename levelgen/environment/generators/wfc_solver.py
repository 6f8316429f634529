"""Wave Function Collapse solver over edge-connected tiles.

Each tile declares, per side, whether a path leaves it in that direction.
Two tiles may sit next to each other when their facing edges agree: both
connect, or neither does. Cells on the map border may never resolve to a tile
whose edge points off the grid.

Usage:
    from levelgen.environment.generators.wfc_solver import BOX_TILESET, WFCSolver

    solver = WFCSolver(width, height, BOX_TILESET, rng)
    result = solver.solve()  # (width, height) array of tile indices

Performance notes:
    1. Bitset representation: each cell's remaining candidates are stored as a
       uint16 bitmask in a numpy array (bit i = tile i). Intersection is a
       bitwise &, cardinality is a popcount table lookup.

    2. Precomputed compatibility: compat[tile][direction] is the bitmask of
       tiles allowed next to `tile` in `direction`. From it we build, per
       direction, a lookup table mapping "current cell candidates" to "valid
       neighbor candidates", so propagation never iterates over tiles.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np

from levelgen.environment.tile_types import Direction
from levelgen.util.rng import RNG

# Domains are uint16 bitmasks.
MAX_TILES = 16


class WFCContradiction(Exception):
    """Raised when WFC reaches an unsolvable state.

    This occurs when constraint propagation eliminates all candidates for a
    cell, meaning no valid solution exists along the current random choices.
    """

    pass


@dataclass(frozen=True)
class WfcTile:
    """A maze tile: its symbol and whether it connects North/East/South/West."""

    symbol: str
    edges: tuple[bool, bool, bool, bool]

    def connects(self, direction: Direction) -> bool:
        return self.edges[direction]


# Blank tile first: it is the fallback symbol when every attempt contradicts.
BOX_TILESET: tuple[WfcTile, ...] = (
    WfcTile(" ", (False, False, False, False)),
    WfcTile("─", (False, True, False, True)),
    WfcTile("│", (True, False, True, False)),
    WfcTile("┌", (False, True, True, False)),
    WfcTile("┐", (False, False, True, True)),
    WfcTile("└", (True, True, False, False)),
    WfcTile("┘", (True, False, False, True)),
    WfcTile("├", (True, True, True, False)),
    WfcTile("┤", (True, False, True, True)),
    WfcTile("┬", (False, True, True, True)),
    WfcTile("┴", (True, True, False, True)),
    WfcTile("┼", (True, True, True, True)),
)

BLANK_TILE_INDEX = 0


def build_compatibility(tiles: tuple[WfcTile, ...]) -> list[list[int]]:
    """compat[t][d]: bitmask of tiles whose opposite edge matches t's edge d."""
    compat: list[list[int]] = []
    for tile in tiles:
        row = []
        for direction in Direction:
            opposite = direction.opposite()
            mask = 0
            for j, other in enumerate(tiles):
                if other.edges[opposite] == tile.edges[direction]:
                    mask |= 1 << j
            row.append(mask)
        compat.append(row)
    return compat


class WFCSolver:
    """Core Wave Function Collapse solver with bitset domains.

    One solver instance is one attempt:
    1. Initialize every cell with all tiles possible
    2. Remove tiles whose edges would point off the grid, and propagate
    3. Pick the undecided cell with the fewest candidates (scan order ties)
    4. Collapse it to a random candidate and propagate breadth-first
    5. Repeat until every cell holds exactly one tile

    A contradiction raises WFCContradiction; retrying with a fresh solver is
    the caller's job.
    """

    def __init__(
        self,
        width: int,
        height: int,
        tiles: tuple[WfcTile, ...],
        rng: RNG,
    ) -> None:
        """Initialize the WFC solver.

        Args:
            width: Grid width in cells.
            height: Grid height in cells.
            tiles: The tileset; bit i of a domain stands for tiles[i].
            rng: Random number generator for deterministic results.
        """
        self.width = width
        self.height = height
        self.tiles = tiles
        self.rng = rng
        self.num_tiles = len(tiles)

        if not 0 < self.num_tiles <= MAX_TILES:
            raise ValueError(
                f"WFCSolver supports 1 to {MAX_TILES} tiles, got {self.num_tiles}."
            )

        self.all_tiles_mask = (1 << self.num_tiles) - 1
        self.compat = build_compatibility(tiles)

        # Wave: one candidate bitmask per cell. Shape is (width, height).
        self.wave = np.full((width, height), self.all_tiles_mask, dtype=np.uint16)

        self._popcount = np.array(
            [i.bit_count() for i in range(1 << self.num_tiles)], dtype=np.uint8
        )
        self._precompute_propagation_masks()

    def _precompute_propagation_masks(self) -> None:
        """Build, per direction, a table from cell candidates to neighbor candidates.

        The allowed set for a mask is the union of compat over its bits, so
        each entry extends the entry for the mask with its lowest bit cleared.
        """
        size = 1 << self.num_tiles
        self.propagation_masks: dict[Direction, np.ndarray] = {}

        for direction in Direction:
            lookup = np.zeros(size, dtype=np.uint16)
            for mask in range(1, size):
                low_bit = mask & -mask
                tile_index = low_bit.bit_length() - 1
                lookup[mask] = (
                    lookup[mask ^ low_bit] | self.compat[tile_index][direction]
                )
            self.propagation_masks[direction] = lookup

    def candidates(self, x: int, y: int) -> list[int]:
        """Tile indices still possible at (x, y)."""
        mask = int(self.wave[x, y])
        return [i for i in range(self.num_tiles) if mask & (1 << i)]

    def constrain_cell(self, x: int, y: int, allowed_mask: int) -> bool:
        """Intersect a cell's domain with `allowed_mask`.

        Returns True when the domain shrank. Does not propagate.

        Raises:
            WFCContradiction: If no candidate survives.
        """
        old_mask = int(self.wave[x, y])
        new_mask = old_mask & allowed_mask
        if new_mask == 0:
            raise WFCContradiction(f"No valid tiles at ({x}, {y}) after constraint")
        if new_mask == old_mask:
            return False
        self.wave[x, y] = new_mask
        return True

    def apply_border_constraints(self) -> None:
        """Forbid edges pointing off the grid, then propagate the result."""
        no_edge = {
            direction: sum(
                1 << i
                for i, tile in enumerate(self.tiles)
                if not tile.connects(direction)
            )
            for direction in Direction
        }

        changed: list[tuple[int, int]] = []
        for y in range(self.height):
            for x in range(self.width):
                allowed = self.all_tiles_mask
                if y == 0:
                    allowed &= no_edge[Direction.NORTH]
                if x == self.width - 1:
                    allowed &= no_edge[Direction.EAST]
                if y == self.height - 1:
                    allowed &= no_edge[Direction.SOUTH]
                if x == 0:
                    allowed &= no_edge[Direction.WEST]
                if allowed == self.all_tiles_mask:
                    continue
                if self.constrain_cell(x, y, allowed):
                    changed.append((x, y))

        self._propagate(changed)

    def _propagate(self, cells: list[tuple[int, int]]) -> None:
        """Narrow neighbor domains breadth-first, starting from `cells`.

        Raises:
            WFCContradiction: If a neighbor's domain becomes empty.
        """
        queue = deque(cells)
        in_queue = set(cells)

        while queue:
            x, y = queue.popleft()
            in_queue.discard((x, y))

            current_mask = self.wave[x, y]

            for direction in Direction:
                dx, dy = direction.offset
                nx, ny = x + dx, y + dy

                if not (0 <= nx < self.width and 0 <= ny < self.height):
                    continue

                valid_for_neighbor = self.propagation_masks[direction][current_mask]
                if self.constrain_cell(nx, ny, int(valid_for_neighbor)):
                    if (nx, ny) not in in_queue:
                        queue.append((nx, ny))
                        in_queue.add((nx, ny))

    def _select_cell(self) -> tuple[int, int] | None:
        """Lowest-entropy undecided cell, ties broken by row-major scan order."""
        counts = self._popcount[self.wave]
        undecided = counts > 1
        if not undecided.any():
            return None
        # Transpose to (height, width) so argmin's first hit is row-major.
        entropy = np.where(undecided, counts, self.num_tiles + 1).T
        y, x = np.unravel_index(int(np.argmin(entropy)), entropy.shape)
        return int(x), int(y)

    def solve(self) -> np.ndarray:
        """Run the WFC algorithm to completion.

        Returns:
            A (width, height) uint8 array of tile indices.

        Raises:
            WFCContradiction: If any cell runs out of candidates.
        """
        self.apply_border_constraints()

        while (cell := self._select_cell()) is not None:
            x, y = cell
            choice = self.rng.choice(self.candidates(x, y))
            self.wave[x, y] = 1 << choice
            self._propagate([(x, y)])

        # Every domain is now a single bit; its index is the resolved tile.
        result = np.zeros((self.width, self.height), dtype=np.uint8)
        for x in range(self.width):
            for y in range(self.height):
                result[x, y] = int(self.wave[x, y]).bit_length() - 1
        return result

    @property
    def wave_as_sets(self) -> list[list[set[int]]]:
        """Convert the internal bitmask wave to sets for debugging/testing."""
        return [
            [set(self.candidates(x, y)) for y in range(self.height)]
            for x in range(self.width)
        ]
