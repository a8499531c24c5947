"""Terrain cleanup on host-map tiles: small components and coastline smoothing.

Unlike the dungeon builder, these passes read and write the host map
directly, so each one sees the previous pass's output.
"""

import logging
from collections import deque

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..config import IslandConfig
from ..host_map import HostMap, ground_id_at, replace_ground
from ..progress import ProgressReporter
from ..types import CARDINAL_DELTAS, Region

logger = logging.getLogger(__name__)

# 8-connected neighbour count, center excluded
_NEIGHBOR_KERNEL = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int32)


def _flood_fill(
    host: HostMap,
    x: int,
    y: int,
    floor: int,
    region: Region,
    target_id: int,
    replacement_id: int,
) -> list[tuple[int, int]]:
    """Breadth-first fill over 4-connected tiles whose ground is target_id.

    Returns the visited cells in local coordinates; empty when the start
    tile isn't target_id.
    """
    if not region.contains(x, y):
        return []
    if ground_id_at(host, *region.to_map(x, y), floor) != target_id:
        return []

    queue: deque[tuple[int, int]] = deque([(x, y)])
    seen = {(x, y)}
    component: list[tuple[int, int]] = []

    while queue:
        cx, cy = queue.popleft()
        component.append((cx, cy))

        if replacement_id != 0:
            tile = host.get_tile(*region.to_map(cx, cy), floor)
            if tile is not None and tile.ground is not None:
                replace_ground(host, tile, replacement_id)

        for dx, dy in CARDINAL_DELTAS:
            nx, ny = cx + dx, cy + dy
            if not region.contains(nx, ny) or (nx, ny) in seen:
                continue
            if ground_id_at(host, *region.to_map(nx, ny), floor) == target_id:
                seen.add((nx, ny))
                queue.append((nx, ny))

    return component


def flood_fill_count(
    host: HostMap,
    x: int,
    y: int,
    floor: int,
    region: Region,
    target_id: int,
    replacement_id: int = 0,
) -> int:
    """Measure (and optionally repaint) the connected region at (x, y).

    Args:
        host: Map holding the tiles.
        x: Start X in local region coordinates.
        y: Start Y in local region coordinates.
        floor: Z-level to inspect.
        region: Map rectangle the fill is confined to.
        target_id: Ground id the region consists of.
        replacement_id: Ground id to repaint with; 0 only counts.

    Returns:
        Number of tiles in the connected region.
    """
    return len(_flood_fill(host, x, y, floor, region, target_id, replacement_id))


def remove_small_components(
    host: HostMap,
    region: Region,
    floor: int,
    target_id: int,
    replacement_id: int,
    size_limit: int,
) -> int:
    """Repaint every target_id component smaller than size_limit.

    One row-major scan; each component is measured once, refilled with
    replacement_id if it is too small, and then marked visited as a whole so
    total work stays proportional to the region size.

    Args:
        host: Map holding the tiles.
        region: Map rectangle to scan.
        floor: Z-level to scan.
        target_id: Ground id of the components to inspect.
        replacement_id: Ground id small components become.
        size_limit: Components with fewer tiles than this are replaced.

    Returns:
        Number of components replaced.
    """
    visited = np.zeros((region.height, region.width), dtype=bool)
    replaced = 0

    for y in range(region.height):
        for x in range(region.width):
            if visited[y, x]:
                continue
            if ground_id_at(host, *region.to_map(x, y), floor) != target_id:
                continue

            component = _flood_fill(host, x, y, floor, region, target_id, 0)
            if 0 < len(component) < size_limit:
                flood_fill_count(host, x, y, floor, region, target_id, replacement_id)
                replaced += 1

            for cx, cy in component:
                visited[cy, cx] = True

    return replaced


def remove_small_patches(host: HostMap, region: Region, config: IslandConfig) -> int:
    """Turn land patches below min_land_patch_size into water."""
    removed = remove_small_components(
        host,
        region,
        config.target_floor,
        target_id=config.ground_id,
        replacement_id=config.water_id,
        size_limit=config.min_land_patch_size,
    )
    logger.info(f"Removed {removed} small land patches")
    return removed


def fill_small_holes(host: HostMap, region: Region, config: IslandConfig) -> int:
    """Turn water holes below max_water_hole_size into land."""
    filled = remove_small_components(
        host,
        region,
        config.target_floor,
        target_id=config.water_id,
        replacement_id=config.ground_id,
        size_limit=config.max_water_hole_size,
    )
    logger.info(f"Filled {filled} small water holes")
    return filled


def snapshot_ground(host: HostMap, region: Region, floor: int) -> NDArray[np.uint16]:
    """Copy the region's ground ids into a (height, width) array (0 = none)."""
    ids = np.zeros((region.height, region.width), dtype=np.uint16)
    for y in range(region.height):
        for x in range(region.width):
            ids[y, x] = ground_id_at(host, *region.to_map(x, y), floor)
    return ids


def majority_flips(
    ids: NDArray[np.uint16],
    water_id: int,
    ground_id: int,
) -> NDArray[np.uint16]:
    """One majority-vote pass over a snapshot of ground ids.

    Interior water with more ground than water neighbours becomes ground and
    vice versa; the outer ring is never changed.

    Args:
        ids: Ground id snapshot.
        water_id: Water ground id.
        ground_id: Land ground id.

    Returns:
        New id array.
    """
    water = (ids == water_id).astype(np.int32)
    land = (ids == ground_id).astype(np.int32)
    water_count = ndimage.convolve(water, _NEIGHBOR_KERNEL, mode="constant", cval=0)
    land_count = ndimage.convolve(land, _NEIGHBOR_KERNEL, mode="constant", cval=0)

    interior = np.zeros(ids.shape, dtype=bool)
    interior[1:-1, 1:-1] = True

    result = ids.copy()
    result[interior & (ids == water_id) & (land_count > water_count)] = ground_id
    result[interior & (ids == ground_id) & (water_count > land_count)] = water_id
    return result


def smooth_coastline(host: HostMap, region: Region, config: IslandConfig) -> int:
    """Smooth the coastline by neighbourhood majority voting.

    Each pass works from a snapshot taken before any change, so the
    scan order doesn't matter.

    Args:
        host: Map holding the tiles.
        region: Map rectangle to smooth.
        config: Tile ids, floor and pass count.

    Returns:
        Number of tile flips over all passes.
    """
    floor = config.target_floor
    flipped = 0

    for _ in range(config.smoothing_passes):
        before = snapshot_ground(host, region, floor)
        after = majority_flips(before, config.water_id, config.ground_id)

        changed_ys, changed_xs = np.nonzero(after != before)
        for y, x in zip(changed_ys.tolist(), changed_xs.tolist()):
            tile = host.get_tile(*region.to_map(x, y), floor)
            if tile is not None:
                replace_ground(host, tile, int(after[y, x]))
        flipped += len(changed_ys)

    logger.info(f"Coastline smoothing flipped {flipped} tiles in {config.smoothing_passes} passes")
    return flipped


def cleanup_terrain(
    host: HostMap,
    region: Region,
    config: IslandConfig,
    progress: ProgressReporter | None = None,
) -> None:
    """Run the enabled cleanup passes in order: patches, holes, smoothing.

    Args:
        host: Map holding the tiles.
        region: Map rectangle to clean.
        config: Cleanup parameters.
        progress: Optional reporter; checked between passes.
    """
    if config.min_land_patch_size > 0:
        remove_small_patches(host, region, config)

    if progress is not None:
        progress.report(80)

    if config.max_water_hole_size > 0:
        fill_small_holes(host, region, config)

    if progress is not None:
        progress.report(90)

    if config.smoothing_passes > 0:
        smooth_coastline(host, region, config)
