"""Dungeon layout pipeline and the single commit pass onto the host map."""

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..config import DungeonConfig
from ..host_map import HostMap, fetch_or_create_tile
from ..progress import ProgressReporter
from ..seeding import GenerationContext
from ..terrain.fields import FLOOR, CellGrid
from ..terrain.noise import SimplexNoise
from ..types import Intersection, Region, Room
from .corridors import (
    add_dead_ends,
    connect_sequential,
    connect_via_intersections,
)
from .rooms import carve_intersection, carve_rooms, place_intersections, place_rooms

logger = logging.getLogger(__name__)

# Caves sample plain noise at this fixed frequency
CAVE_SCALE = 0.1

# Progress span covered by the commit pass
COMMIT_START = 80
COMMIT_END = 99


@dataclass
class DungeonLayout:
    """In-memory dungeon before it is written to the map."""

    grid: CellGrid
    rooms: list[Room] = field(default_factory=list)
    intersections: list[Intersection] = field(default_factory=list)


def overlay_caves(noise: SimplexNoise, grid: CellGrid, threshold: float) -> int:
    """Open every cell whose noise value exceeds the threshold.

    Only ever adds floor.

    Returns:
        Number of cells that turned from void to floor.
    """
    ys, xs = np.meshgrid(
        np.arange(grid.height, dtype=np.float64),
        np.arange(grid.width, dtype=np.float64),
        indexing="ij",
    )
    open_cells = (noise.sample_array(xs * CAVE_SCALE, ys * CAVE_SCALE) > threshold).reshape(-1)
    opened = int(np.count_nonzero(open_cells & (grid.data != FLOOR)))
    grid.data[open_cells] = FLOOR
    return opened


def build_dungeon_layout(
    context: GenerationContext,
    config: DungeonConfig,
    width: int,
    height: int,
    progress: ProgressReporter | None = None,
) -> DungeonLayout:
    """Run rooms, hubs, corridors, dead ends and caves on a fresh grid.

    Args:
        context: Per-call noise and RNG.
        config: Dungeon parameters.
        width: Grid width.
        height: Grid height.
        progress: Optional reporter, checked at 30, 60 and 80.

    Returns:
        The finished layout.
    """
    rng = context.rng
    grid = CellGrid(width, height)

    # Stage 1: Rooms
    rooms = place_rooms(rng, config, width, height)
    carve_rooms(grid, rooms)
    logger.info(f"Placed {len(rooms)} rooms")

    if progress is not None:
        progress.report(30)

    # Stage 2: Hubs
    hubs: list[Intersection] = []
    if config.add_intersections:
        hubs = place_intersections(rng, config, rooms, width, height)
        for hub in hubs:
            carve_intersection(grid, hub)

    # Stage 3: Corridors
    if hubs:
        corridors = connect_via_intersections(grid, rooms, hubs, config, rng)
    else:
        corridors = connect_sequential(grid, rooms, config, rng)

    # Second sequential pass guarantees every room is linked, hubs or not
    if config.connect_all_rooms and len(rooms) > 1:
        corridors += connect_sequential(grid, rooms, config, rng)
    logger.info(f"Carved {corridors} corridors via {len(hubs)} hubs")

    # Stage 4: Dead ends
    if config.add_dead_ends:
        add_dead_ends(grid, rng)

    if progress is not None:
        progress.report(60)

    # Stage 5: Caves
    if config.generate_caves:
        opened = overlay_caves(context.noise, grid, config.cave_threshold)
        logger.info(f"Cave overlay opened {opened} cells")

    if progress is not None:
        progress.report(80)

    return DungeonLayout(grid=grid, rooms=rooms, intersections=hubs)


def wall_mask(grid: CellGrid) -> NDArray[np.bool_]:
    """Void cells with at least one floor cell among their 8 neighbours."""
    floor = grid.view() == FLOOR
    near_floor = ndimage.binary_dilation(floor, structure=np.ones((3, 3), dtype=bool))
    return near_floor & ~floor


def commit_layout(
    host: HostMap,
    grid: CellGrid,
    config: DungeonConfig,
    region: Region,
    progress: ProgressReporter | None = None,
) -> int:
    """Write the grid onto the host map.

    Floor cells get the floor ground item. Void cells touching floor get the
    floor ground plus a stacked wall item. Other void cells are left with no
    ground.

    Args:
        host: Target map.
        grid: Finished dungeon cells.
        config: Floor/wall ids and target floor.
        region: Where on the map the grid lands.
        progress: Optional reporter, ticked every 1000 tiles.

    Returns:
        Number of wall items placed.
    """
    floor = config.target_floor
    cells = grid.view()
    walls = wall_mask(grid)
    total = grid.size
    written = 0
    wall_count = 0

    for y in range(grid.height):
        for x in range(grid.width):
            mx, my = region.to_map(x, y)
            tile = fetch_or_create_tile(host, mx, my, floor)
            tile.ground = None

            if cells[y, x] == FLOOR:
                tile.ground = host.create_item(config.floor_id)
            elif walls[y, x]:
                tile.ground = host.create_item(config.floor_id)
                tile.add_item(host.create_item(config.wall_id))
                wall_count += 1
            host.set_tile(tile.position, tile)

            written += 1
            if progress is not None:
                progress.tick(written, total, COMMIT_START, COMMIT_END)

    logger.info(f"Committed {written:,} tiles ({wall_count:,} walls) on floor {floor}")
    return wall_count
