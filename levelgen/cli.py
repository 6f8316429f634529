"""Command line front end for the level generator.

Usage:
    # Classic rooms and tunnels
    levelgen --seed 42

    # Marble level with elevation and obstacles, dumped to JSON
    levelgen --mode marble --elevation --obstacles --json-path level.json

    # WFC maze without the ASCII preview
    python -m levelgen --mode maze --width 30 --height 12 --print-json --no-ascii
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from levelgen import config
from levelgen.environment.generators.params import GenerationMode, GeneratorParams
from levelgen.environment.generators.pipeline import generate
from levelgen.export import level_to_json, marble_to_ascii, to_ascii

logger = logging.getLogger(__name__)


def _mode(text: str) -> GenerationMode:
    try:
        return GenerationMode.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="levelgen",
        description="Generate 2D tile levels: classic dungeons, marble tracks "
        "or WFC mazes",
    )
    parser.add_argument("-w", "--width", type=int, default=config.DEFAULT_WIDTH)
    parser.add_argument("-H", "--height", type=int, default=config.DEFAULT_HEIGHT)
    parser.add_argument("-r", "--rooms", type=int, default=config.DEFAULT_ROOMS)
    parser.add_argument(
        "-m", "--min-room", type=int, default=config.DEFAULT_MIN_ROOM
    )
    parser.add_argument(
        "-M", "--max-room", type=int, default=config.DEFAULT_MAX_ROOM
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        default=None,
        help="Master seed (random when omitted)",
    )
    parser.add_argument(
        "--mode",
        type=_mode,
        default=GenerationMode.CLASSIC,
        help="classic|marble|wfc (aliases: dungeon, marbles, wave, maze)",
    )

    marble = parser.add_argument_group("marble options")
    marble.add_argument(
        "--channel-width", type=int, default=config.DEFAULT_CHANNEL_WIDTH
    )
    marble.add_argument(
        "--corner-radius", type=int, default=config.DEFAULT_CORNER_RADIUS
    )
    marble.add_argument(
        "--elevation",
        dest="enable_elevation",
        action="store_true",
        help="Give rooms elevations and add slopes",
    )
    marble.add_argument(
        "--max-elevation", type=int, default=config.DEFAULT_MAX_ELEVATION
    )
    marble.add_argument(
        "--obstacles",
        dest="enable_obstacles",
        action="store_true",
        help="Scatter obstacles in large rooms",
    )
    marble.add_argument(
        "--obstacle-density", type=float, default=config.DEFAULT_OBSTACLE_DENSITY
    )

    output = parser.add_argument_group("output options")
    output.add_argument(
        "-o", "--json-path", type=Path, help="Write the level as JSON here"
    )
    output.add_argument(
        "--print-json", action="store_true", help="Print the level as JSON"
    )
    output.add_argument(
        "--no-ascii", action="store_true", help="Skip the ASCII preview"
    )
    output.add_argument(
        "-v", "--verbose", action="store_true", help="Log generation progress"
    )
    return parser


def params_from_args(args: argparse.Namespace) -> GeneratorParams:
    return GeneratorParams(
        width=args.width,
        height=args.height,
        rooms=args.rooms,
        min_room=args.min_room,
        max_room=args.max_room,
        seed=args.seed,
        mode=args.mode,
        channel_width=args.channel_width,
        corner_radius=args.corner_radius,
        enable_elevation=args.enable_elevation,
        max_elevation=args.max_elevation,
        enable_obstacles=args.enable_obstacles,
        obstacle_density=args.obstacle_density,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    level = generate(params_from_args(args))

    if not args.no_ascii:
        print(to_ascii(level))
        marble = marble_to_ascii(level)
        if marble is not None:
            print()
            print(marble)
        print(f"seed={level.seed} rooms={len(level.rooms)}", file=sys.stderr)

    if args.json_path is not None or args.print_json:
        payload = level_to_json(level)
        if args.json_path is not None:
            args.json_path.parent.mkdir(parents=True, exist_ok=True)
            args.json_path.write_text(payload + "\n", encoding="utf-8")
            logger.info("Wrote %s", args.json_path)
        if args.print_json:
            print(payload)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
