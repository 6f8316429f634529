"""Collaborators that turn a finished Level into text.

- to_ascii: the `tiles` rows as a newline-joined preview
- marble_to_ascii: the typed marble tiles drawn with their ASCII symbols
- level_to_dict / level_to_json: a structured dump of every Level field

The dict form mirrors the Level dataclasses field for field. Tile types are
written by their CamelCase variant name ("Curve90", "TJunction"), a room's
elevation is omitted when unset and `marble_tiles` is omitted for non-marble
levels.
"""

from __future__ import annotations

import json
from typing import Any

from levelgen.environment.level import Level, Room
from levelgen.environment.tile_types import MarbleTile


def to_ascii(level: Level) -> str:
    return "\n".join(level.tiles)


def marble_to_ascii(level: Level) -> str | None:
    """Render marble tiles with MarbleTile.ascii_char, or None for non-marble levels."""
    if level.marble_tiles is None:
        return None
    return "\n".join(
        "".join(tile.ascii_char() for tile in row) for row in level.marble_tiles
    )


def room_to_dict(room: Room) -> dict[str, Any]:
    data: dict[str, Any] = {"x": room.x, "y": room.y, "w": room.w, "h": room.h}
    if room.elevation is not None:
        data["elevation"] = room.elevation
    return data


def marble_tile_to_dict(tile: MarbleTile) -> dict[str, Any]:
    return {
        "tile_type": tile.tile_type.wire_name,
        "elevation": tile.elevation,
        "rotation": tile.rotation,
        "has_walls": tile.has_walls,
        "metadata": tile.metadata,
    }


def level_to_dict(level: Level) -> dict[str, Any]:
    """Plain-data form of a level, ready for any JSON encoder."""
    data: dict[str, Any] = {
        "width": level.width,
        "height": level.height,
        "seed": level.seed,
        "rooms": [room_to_dict(room) for room in level.rooms],
        "tiles": list(level.tiles),
    }
    if level.marble_tiles is not None:
        data["marble_tiles"] = [
            [marble_tile_to_dict(tile) for tile in row] for row in level.marble_tiles
        ]
    return data


def level_to_json(level: Level, indent: int | None = 2) -> str:
    return json.dumps(level_to_dict(level), indent=indent, ensure_ascii=False)
