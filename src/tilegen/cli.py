"""Command-line interface for island and dungeon generation."""

import argparse
import logging
import sys
import time

import structlog


def render_preview(tile_map, region, floor: int, glyphs: dict[int, str]) -> str:
    """ASCII picture of a region: one glyph per tile.

    Tiles carrying stacked items are drawn as '#', tiles with no ground as
    blanks, everything else through ``glyphs`` (unknown ids as '?').
    """
    lines = []
    for y in range(region.height):
        row = []
        for x in range(region.width):
            tile = tile_map.get_tile(*region.to_map(x, y), floor)
            if tile is None or tile.ground is None:
                row.append(" ")
            elif tile.items:
                row.append("#")
            else:
                row.append(glyphs.get(tile.ground.item_id, "?"))
        lines.append("".join(row))
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate procedural island or dungeon tile maps"
    )
    parser.add_argument("mode", choices=["island", "dungeon"], help="What to generate")
    parser.add_argument(
        "--width", type=int, default=None, help="Area width (default: 256 island, 128 dungeon)"
    )
    parser.add_argument(
        "--height", type=int, default=None, help="Area height (default: 256 island, 128 dungeon)"
    )
    parser.add_argument("--seed", type=str, default="12345", help="Seed text (default: 12345)")
    parser.add_argument("--origin-x", type=int, default=0, help="Map X of the top-left corner")
    parser.add_argument("--origin-y", type=int, default=0, help="Map Y of the top-left corner")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Bundled preset name or path to a TOML file",
    )
    parser.add_argument(
        "--preview", action="store_true", help="Print an ASCII preview when done"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    # Import here to avoid slow startup for --help
    from .config import GeneratorConfig, find_config, load_config
    from .generator import MapGenerator
    from .host_map import TileMap
    from .types import Region

    config = load_config(find_config(args.config)) if args.config else GeneratorConfig()
    default_size = 256 if args.mode == "island" else 128
    width = args.width if args.width is not None else default_size
    height = args.height if args.height is not None else default_size

    def on_progress(current: int, total: int) -> bool:
        print(f"\r{args.mode}: {current:3d}/{total}", end="", flush=True)
        return True

    print(f"Generating {width}x{height} {args.mode} with seed {args.seed!r}")

    tile_map = TileMap(name=f"{args.mode}-{args.seed}")
    generator = MapGenerator(on_progress)

    start_time = time.time()
    if args.mode == "island":
        mode_config = config.island
        result = generator.generate_island_map(
            tile_map, mode_config, width, height, args.seed, args.origin_x, args.origin_y
        )
        glyphs = {mode_config.water_id: "~", mode_config.ground_id: "."}
    else:
        mode_config = config.dungeon
        result = generator.generate_dungeon_map(
            tile_map, mode_config, width, height, args.seed, args.origin_x, args.origin_y
        )
        glyphs = {mode_config.floor_id: "."}
    gen_time = time.time() - start_time
    print()

    if not result:
        print(f"Generation {result.status.value}", file=sys.stderr)
        return 1

    print(f"Generation complete in {gen_time:.1f}s")
    if result.rooms:
        print(f"Rooms: {len(result.rooms)}, hubs: {len(result.intersections)}")
    if result.validation is not None:
        for error in result.validation.errors:
            print(f"Layout check failed: {error}", file=sys.stderr)

    region = Region(args.origin_x, args.origin_y, width, height)
    if args.preview:
        print(render_preview(tile_map, region, mode_config.target_floor, glyphs))

    return 0


if __name__ == "__main__":
    sys.exit(main())
