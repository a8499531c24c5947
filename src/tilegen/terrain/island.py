"""Island shaping: noise height map and radial falloff mask."""

import numpy as np
from numpy.typing import NDArray

from ..config import IslandConfig
from .fields import HeightField
from .noise import SimplexNoise


def build_height_map(
    noise: SimplexNoise,
    config: IslandConfig,
    width: int,
    height: int,
) -> HeightField:
    """Sample fractal noise over the domain.

    Args:
        noise: Seeded noise source.
        config: Noise parameters (scale, octaves, persistence, lacunarity).
        width: Field width in tiles.
        height: Field height in tiles.

    Returns:
        HeightField with values remapped from [-1, 1] to [0, 1].
    """
    ys, xs = np.meshgrid(
        np.arange(height, dtype=np.float64),
        np.arange(width, dtype=np.float64),
        indexing="ij",
    )
    values = noise.fractal_array(
        xs * config.noise_scale,
        ys * config.noise_scale,
        config.noise_octaves,
        config.noise_persistence,
        config.noise_lacunarity,
    )
    return HeightField.from_array((values + 1.0) * 0.5)


def falloff_curve(distance: NDArray[np.float64], exponent: float) -> NDArray[np.float64]:
    """Power falloff of a normalized distance.

    Args:
        distance: Distance from center, 1.0 at the island edge.
        exponent: Falloff exponent (higher = sharper coastline).

    Returns:
        0 at or before the center, 1 at or beyond the edge, distance**exponent between.
    """
    inside = np.clip(distance, 0.0, 1.0) ** exponent
    return np.where(distance <= 0.0, 0.0, np.where(distance >= 1.0, 1.0, inside))


def island_falloff(width: int, height: int, config: IslandConfig) -> NDArray[np.float64]:
    """Radial falloff values for every cell, shape (height, width)."""
    # Center snaps to the cell grid
    cx, cy = width // 2, height // 2
    radius = min(width, height) / 2.0 * config.island_size

    ys, xs = np.meshgrid(
        np.arange(height, dtype=np.float64),
        np.arange(width, dtype=np.float64),
        indexing="ij",
    )
    distance = np.sqrt((xs - cx) ** 2 + (ys - cy) ** 2) / radius
    return falloff_curve(distance, config.island_falloff)


def apply_island_mask(field: HeightField, config: IslandConfig) -> HeightField:
    """Subtract the radial falloff from a height field, in place.

    Cells far from the center are pulled toward 0 (water); the result is
    clamped back to [0, 1].

    Args:
        field: Height field to modify.
        config: Island shape parameters.

    Returns:
        The same field, for chaining.
    """
    heights = field.view()
    heights -= island_falloff(field.width, field.height, config)
    np.clip(heights, 0.0, 1.0, out=heights)
    return field
