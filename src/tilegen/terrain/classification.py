"""Terrain classification: height field to water/ground tiles."""

import logging

import numpy as np
from numpy.typing import NDArray

from ..config import IslandConfig
from ..host_map import HostMap, fetch_or_create_tile, replace_ground
from ..progress import ProgressReporter
from ..types import Region
from .fields import HeightField

logger = logging.getLogger(__name__)

# Progress span covered by tile placement
PLACEMENT_START = 40
PLACEMENT_END = 70


def water_level(config: IslandConfig) -> float:
    """Island threshold remapped from [-1, 1] to the height field's [0, 1]."""
    return (config.island_threshold + 1.0) * 0.5


def classify(field: HeightField, config: IslandConfig) -> NDArray[np.uint16]:
    """Resolve each cell to the water or ground id.

    Args:
        field: Masked height field.
        config: Threshold and tile ids.

    Returns:
        (height, width) array of ground item ids.
    """
    heights = field.view()
    return np.where(
        heights < water_level(config), config.water_id, config.ground_id
    ).astype(np.uint16)


def place_tiles(
    host: HostMap,
    tile_ids: NDArray[np.uint16],
    region: Region,
    floor: int,
    progress: ProgressReporter | None = None,
) -> int:
    """Write classified ground ids onto the host map.

    Every cell's tile is fetched or created, its ground replaced with a new
    item of the resolved id, and the tile handed back to the host.

    Args:
        host: Target map.
        tile_ids: (height, width) ground ids from ``classify``.
        region: Where on the map the grid lands.
        floor: Z-level to write.
        progress: Optional reporter, ticked every 1000 tiles.

    Returns:
        Number of tiles written.
    """
    height, width = tile_ids.shape
    total = width * height
    placed = 0

    for y in range(height):
        for x in range(width):
            mx, my = region.to_map(x, y)
            tile = fetch_or_create_tile(host, mx, my, floor)
            replace_ground(host, tile, int(tile_ids[y, x]))
            host.set_tile(tile.position, tile)

            placed += 1
            if progress is not None:
                progress.tick(placed, total, PLACEMENT_START, PLACEMENT_END)

    logger.info(f"Placed {placed:,} tiles on floor {floor}")
    return placed
