"""Generation orchestration: island and dungeon pipelines."""

from dataclasses import dataclass
from enum import Enum

import structlog

from .config import DungeonConfig, IslandConfig
from .dungeon.layout import build_dungeon_layout, commit_layout
from .dungeon.validation import LayoutReport, validate_layout
from .exceptions import GenerationCancelled, InvalidInputError
from .host_map import HostMap
from .progress import ProgressCallback, ProgressReporter
from .seeding import GenerationContext
from .terrain.classification import classify, place_tiles
from .terrain.cleanup import cleanup_terrain
from .terrain.island import apply_island_mask, build_height_map
from .types import Intersection, Region, Room

logger = structlog.get_logger()


class GenerationStatus(str, Enum):
    """How a generation call ended."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one generation call.

    Truthy only when generation completed, so it can stand in for a plain
    success flag. Dungeon runs also carry the layout checks in ``validation``.
    """

    status: GenerationStatus
    width: int = 0
    height: int = 0
    rooms: tuple[Room, ...] = ()
    intersections: tuple[Intersection, ...] = ()
    progress: int = 0
    validation: LayoutReport | None = None

    @property
    def success(self) -> bool:
        return self.status is GenerationStatus.COMPLETED

    def __bool__(self) -> bool:
        return self.success


def _check_request(host: HostMap | None, width: int, height: int) -> None:
    if host is None:
        raise InvalidInputError("No host map given")
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Size must be positive, got {width}x{height}")


class MapGenerator:
    """Runs island and dungeon generation against a host map.

    Holds only the progress callback; every call builds its own noise and
    RNG from the seed, so calls never influence each other.
    """

    def __init__(self, progress_callback: ProgressCallback | None = None):
        self.progress_callback = progress_callback

    def set_progress_callback(self, callback: ProgressCallback | None) -> None:
        """Register the (current, total) -> continue? callback for later calls."""
        self.progress_callback = callback

    def generate_island_map(
        self,
        host: HostMap | None,
        config: IslandConfig,
        width: int,
        height: int,
        seed: str,
        origin_x: int = 0,
        origin_y: int = 0,
    ) -> GenerationResult:
        """Generate an island and write it onto the host map.

        Args:
            host: Map to write tiles into.
            config: Island parameters.
            width: Area width in tiles.
            height: Area height in tiles.
            seed: Seed text; numeric strings are used as-is, others hashed.
            origin_x: Map X of the area's top-left corner.
            origin_y: Map Y of the area's top-left corner.

        Returns:
            GenerationResult; tiles written before a cancellation are kept.
        """
        progress = ProgressReporter(self.progress_callback)
        try:
            _check_request(host, width, height)
        except InvalidInputError as e:
            logger.warning("island_generation_rejected", reason=str(e))
            return GenerationResult(GenerationStatus.INVALID_INPUT, width, height)

        context = GenerationContext.from_seed(seed)
        region = Region(origin_x, origin_y, width, height)
        logger.info(
            "island_generation_started",
            seed=seed,
            seed_value=context.seed_value,
            width=width,
            height=height,
            origin=(origin_x, origin_y),
            floor=config.target_floor,
        )

        try:
            # Stage A: Height map
            progress.report(0)
            field = build_height_map(context.noise, config, width, height)

            # Stage B: Island mask
            progress.report(20)
            apply_island_mask(field, config)

            # Stage C: Classification and placement
            progress.report(40)
            tile_ids = classify(field, config)
            place_tiles(host, tile_ids, region, config.target_floor, progress)

            # Stage D: Cleanup
            if config.enable_cleanup:
                progress.report(70)
                cleanup_terrain(host, region, config, progress)
        except GenerationCancelled as e:
            logger.info("island_generation_cancelled", progress=e.progress)
            return GenerationResult(
                GenerationStatus.CANCELLED, width, height, progress=e.progress
            )

        progress.finish()
        logger.info("island_generation_finished", width=width, height=height)
        return GenerationResult(
            GenerationStatus.COMPLETED, width, height, progress=progress.last
        )

    def generate_dungeon_map(
        self,
        host: HostMap | None,
        config: DungeonConfig,
        width: int,
        height: int,
        seed: str,
        origin_x: int = 0,
        origin_y: int = 0,
    ) -> GenerationResult:
        """Generate a dungeon and write it onto the host map.

        The layout is built entirely in memory and written in one pass at the
        end, so a cancellation before 80% leaves the map untouched.

        Args:
            host: Map to write tiles into.
            config: Dungeon parameters.
            width: Area width in tiles.
            height: Area height in tiles.
            seed: Seed text; numeric strings are used as-is, others hashed.
            origin_x: Map X of the area's top-left corner.
            origin_y: Map Y of the area's top-left corner.

        Returns:
            GenerationResult with the placed rooms and hubs.
        """
        progress = ProgressReporter(self.progress_callback)
        try:
            _check_request(host, width, height)
        except InvalidInputError as e:
            logger.warning("dungeon_generation_rejected", reason=str(e))
            return GenerationResult(GenerationStatus.INVALID_INPUT, width, height)

        context = GenerationContext.from_seed(seed)
        region = Region(origin_x, origin_y, width, height)
        logger.info(
            "dungeon_generation_started",
            seed=seed,
            seed_value=context.seed_value,
            width=width,
            height=height,
            origin=(origin_x, origin_y),
            floor=config.target_floor,
        )

        try:
            progress.report(0)
            layout = build_dungeon_layout(context, config, width, height, progress)
            validation = validate_layout(layout, config.room_count)
            commit_layout(host, layout.grid, config, region, progress)
        except GenerationCancelled as e:
            logger.info("dungeon_generation_cancelled", progress=e.progress)
            return GenerationResult(
                GenerationStatus.CANCELLED, width, height, progress=e.progress
            )

        progress.finish()
        logger.info(
            "dungeon_generation_finished",
            rooms=len(layout.rooms),
            hubs=len(layout.intersections),
            floor_cells=layout.grid.floor_count(),
            valid=validation.passed,
        )
        return GenerationResult(
            GenerationStatus.COMPLETED,
            width,
            height,
            rooms=tuple(layout.rooms),
            intersections=tuple(layout.intersections),
            progress=progress.last,
            validation=validation,
        )


def generate_island_map(
    host: HostMap | None,
    config: IslandConfig,
    width: int,
    height: int,
    seed: str,
    origin_x: int = 0,
    origin_y: int = 0,
    progress_callback: ProgressCallback | None = None,
) -> GenerationResult:
    """One-shot island generation with an optional progress callback."""
    return MapGenerator(progress_callback).generate_island_map(
        host, config, width, height, seed, origin_x, origin_y
    )


def generate_dungeon_map(
    host: HostMap | None,
    config: DungeonConfig,
    width: int,
    height: int,
    seed: str,
    origin_x: int = 0,
    origin_y: int = 0,
    progress_callback: ProgressCallback | None = None,
) -> GenerationResult:
    """One-shot dungeon generation with an optional progress callback."""
    return MapGenerator(progress_callback).generate_dungeon_map(
        host, config, width, height, seed, origin_x, origin_y
    )
