"""Island terrain generation.

Simplex noise height maps shaped by a radial island mask, classified into
water and ground tiles, then cleaned up on the host map.
"""

from .classification import classify, place_tiles
from .cleanup import (
    cleanup_terrain,
    fill_small_holes,
    flood_fill_count,
    remove_small_patches,
    smooth_coastline,
)
from .fields import CellGrid, HeightField
from .island import apply_island_mask, build_height_map
from .noise import SimplexNoise

__all__ = [
    "CellGrid",
    "HeightField",
    "SimplexNoise",
    "apply_island_mask",
    "build_height_map",
    "classify",
    "cleanup_terrain",
    "fill_small_holes",
    "flood_fill_count",
    "place_tiles",
    "remove_small_patches",
    "smooth_coastline",
]
