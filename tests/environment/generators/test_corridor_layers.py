"""Tests for tunnel carving, marble channels and connectivity cleanup."""

from __future__ import annotations

import numpy as np

from levelgen.environment.generators.params import GeneratorParams
from levelgen.environment.generators.pipeline import (
    ClassicCorridorLayer,
    ConnectivityLayer,
    GenerationContext,
    MarbleChannelLayer,
)
from levelgen.environment.generators.pipeline.layers.corridors import (
    Quadrant,
    carve_h_tunnel,
    carve_quarter_disk,
    carve_v_tunnel,
    carve_wide_horizontal,
    carve_wide_vertical,
)
from levelgen.environment.generators.pipeline.layers.rooms import carve_room
from levelgen.environment.level import Room
from levelgen.environment.tile_types import TileTypeID
from tests.helpers import flood_fill


def empty_context(width: int, height: int, **overrides) -> GenerationContext:
    return GenerationContext.create_empty(
        GeneratorParams(width=width, height=height, **overrides), seed=0
    )


def ascii_rows(ctx: GenerationContext) -> list[str]:
    return [
        "".join(TileTypeID(int(ctx.tiles[x, y])).char for x in range(ctx.width))
        for y in range(ctx.height)
    ]


def context_with_rooms(rooms: list[Room], **overrides) -> GenerationContext:
    ctx = empty_context(20, 12, **overrides)
    for room in rooms:
        carve_room(ctx, room)
    ctx.rooms.extend(rooms)
    return ctx


# =============================================================================
# Tunnel Carving
# =============================================================================


class TestTunnels:
    """Tests for the thin and wide tunnel helpers."""

    def test_h_tunnel_is_inclusive_in_either_order(self) -> None:
        ctx = empty_context(10, 5)

        carve_h_tunnel(ctx, 7, 2, 1)

        assert np.all(ctx.tiles[2:8, 1] == TileTypeID.FLOOR)
        assert int(ctx.tiles.sum()) == 6

    def test_tunnels_clip_to_the_map(self) -> None:
        ctx = empty_context(10, 5)

        carve_h_tunnel(ctx, -3, 20, 0)
        carve_v_tunnel(ctx, -1, 99, 9)

        assert np.all(ctx.tiles[:, 0] == TileTypeID.FLOOR)
        assert np.all(ctx.tiles[9, :] == TileTypeID.FLOOR)

    def test_off_map_tunnels_are_ignored(self) -> None:
        ctx = empty_context(10, 5)

        carve_h_tunnel(ctx, 0, 9, 5)
        carve_v_tunnel(ctx, 0, 4, -1)

        assert not ctx.tiles.any()

    def test_wide_horizontal_band(self) -> None:
        """A channel of width w covers rows y - w//2 .. y + w//2."""
        ctx = empty_context(10, 10)

        carve_wide_horizontal(ctx, 2, 5, 4, channel_width=3)

        assert np.all(ctx.tiles[2:6, 3:6] == TileTypeID.FLOOR)
        assert int(ctx.tiles.sum()) == 12

    def test_width_one_is_a_thin_tunnel(self) -> None:
        ctx = empty_context(10, 10)

        carve_wide_vertical(ctx, 1, 8, 4, channel_width=1)

        assert int(ctx.tiles.sum()) == 8
        assert np.all(ctx.tiles[4, 1:9] == TileTypeID.FLOOR)


# =============================================================================
# Rounded Corners
# =============================================================================


class TestQuarterDisk:
    """Tests for carve_quarter_disk()."""

    def test_annulus_on_the_requested_side(self) -> None:
        ctx = empty_context(11, 11)

        carve_quarter_disk(ctx, 5, 5, 2, 2, Quadrant.DOWN)

        assert ctx.tiles[5, 5] == TileTypeID.WALL  # inside the inner radius
        assert ctx.tiles[5, 7] == TileTypeID.FLOOR
        assert ctx.tiles[7, 5] == TileTypeID.FLOOR
        assert ctx.tiles[6, 6] == TileTypeID.FLOOR
        assert ctx.tiles[7, 6] == TileTypeID.WALL  # beyond the outer radius
        assert ctx.tiles[5, 4] == TileTypeID.WALL  # wrong side

    def test_quadrants_mirror_each_other(self) -> None:
        down = empty_context(11, 11)
        up = empty_context(11, 11)

        carve_quarter_disk(down, 5, 5, 3, 2, Quadrant.DOWN)
        carve_quarter_disk(up, 5, 5, 3, 2, Quadrant.UP)

        assert np.array_equal(down.tiles, up.tiles[:, ::-1])

    def test_left_and_right_are_transposes_of_up_and_down(self) -> None:
        down = empty_context(11, 11)
        right = empty_context(11, 11)

        carve_quarter_disk(down, 5, 5, 3, 2, Quadrant.DOWN)
        carve_quarter_disk(right, 5, 5, 3, 2, Quadrant.RIGHT)

        assert np.array_equal(down.tiles, right.tiles.T)

    def test_zero_radius_carves_nothing(self) -> None:
        ctx = empty_context(11, 11)

        carve_quarter_disk(ctx, 5, 5, 0, 1, Quadrant.LEFT)

        assert not ctx.tiles.any()

    def test_disk_near_the_edge_is_clipped(self) -> None:
        ctx = empty_context(11, 11)

        carve_quarter_disk(ctx, 0, 0, 3, 2, Quadrant.UP)

        assert ctx.tiles[2, 0] == TileTypeID.FLOOR


# =============================================================================
# Corridor Layers
# =============================================================================


class TestCorridorLayers:
    """Tests for ClassicCorridorLayer and MarbleChannelLayer."""

    ROOMS = [Room(13, 6, 4, 4), Room(2, 1, 3, 3), Room(8, 2, 3, 3)]

    def test_classic_rooms_end_up_sorted_by_center(self) -> None:
        ctx = context_with_rooms(list(self.ROOMS))

        ClassicCorridorLayer().apply(ctx)

        centers = [room.center()[0] for room in ctx.rooms]
        assert centers == sorted(centers)

    def test_classic_corridors_connect_every_room(self) -> None:
        for seed in range(5):
            ctx = context_with_rooms(list(self.ROOMS))
            ctx.rng.reset(seed)

            ClassicCorridorLayer().apply(ctx)

            rows = ascii_rows(ctx)
            reached = flood_fill(rows, ctx.rooms[0].center())
            assert all(room.center() in reached for room in ctx.rooms)

    def test_marble_channels_connect_every_room(self) -> None:
        for seed in range(5):
            ctx = context_with_rooms(
                list(self.ROOMS), channel_width=2, corner_radius=2
            )
            ctx.rng.reset(seed)

            MarbleChannelLayer().apply(ctx)

            rows = ascii_rows(ctx)
            reached = flood_fill(rows, ctx.rooms[0].center())
            assert all(room.center() in reached for room in ctx.rooms)

    def test_marble_channels_are_wider_than_classic(self) -> None:
        classic = context_with_rooms(list(self.ROOMS))
        marble = context_with_rooms(list(self.ROOMS), channel_width=3)

        ClassicCorridorLayer().apply(classic)
        MarbleChannelLayer().apply(marble)

        assert int(marble.tiles.sum()) > int(classic.tiles.sum())

    def test_single_room_carves_nothing(self) -> None:
        ctx = context_with_rooms([Room(2, 2, 4, 4)])
        before = ctx.tiles.copy()

        MarbleChannelLayer().apply(ctx)

        assert np.array_equal(ctx.tiles, before)


class TestConnectivityLayer:
    """Tests for ConnectivityLayer."""

    def test_detached_floor_is_removed(self) -> None:
        ctx = context_with_rooms([Room(2, 2, 4, 4)])
        ctx.tiles[15, 9] = TileTypeID.FLOOR

        ConnectivityLayer().apply(ctx)

        assert ctx.tiles[15, 9] == TileTypeID.WALL
        assert int(ctx.tiles.sum()) == 16

    def test_connected_floor_is_kept(self) -> None:
        ctx = context_with_rooms([Room(2, 2, 4, 4), Room(10, 2, 4, 4)])
        carve_h_tunnel(ctx, 4, 12, 4)
        before = ctx.tiles.copy()

        ConnectivityLayer().apply(ctx)

        assert np.array_equal(ctx.tiles, before)

    def test_no_rooms_is_a_no_op(self) -> None:
        ctx = empty_context(10, 10)
        ctx.tiles[3, 3] = TileTypeID.FLOOR

        ConnectivityLayer().apply(ctx)

        assert ctx.tiles[3, 3] == TileTypeID.FLOOR
