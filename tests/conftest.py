"""Shared test fixtures for generator tests."""

import numpy as np
import pytest

from tilegen.config import DungeonConfig, IslandConfig
from tilegen.host_map import TileMap
from tilegen.terrain.fields import FLOOR, CellGrid
from tilegen.types import Region

WATER = 4608
GROUND = 4526


@pytest.fixture
def tile_map() -> TileMap:
    """Empty in-memory host map."""
    return TileMap(name="test")


@pytest.fixture
def island_config() -> IslandConfig:
    """Default island parameters."""
    return IslandConfig()


@pytest.fixture
def dungeon_config() -> DungeonConfig:
    """Default dungeon parameters."""
    return DungeonConfig()


@pytest.fixture
def quiet_dungeon_config() -> DungeonConfig:
    """Dungeon parameters without the random extras (caves, dead ends)."""
    return DungeonConfig(generate_caves=False, add_dead_ends=False)


@pytest.fixture
def flat_noise(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin fractal noise to its maximum so only the island mask shapes terrain."""
    from tilegen.terrain.noise import SimplexNoise

    def fractal_array(self, xs, ys, octaves, persistence, lacunarity):
        return np.ones(np.broadcast_shapes(np.shape(xs), np.shape(ys)))

    monkeypatch.setattr(SimplexNoise, "fractal_array", fractal_array)


@pytest.fixture
def paint():
    """Load a picture of '.' (ground) and '~' (water) into a map at (0, 0).

    The returned function gives back the Region covering the picture.
    """

    def _paint(tile_map: TileMap, rows: list[str], floor: int = 7) -> Region:
        ids = {".": GROUND, "~": WATER}
        ground = np.array([[ids[c] for c in row] for row in rows], dtype=np.uint16)
        region = Region(0, 0, ground.shape[1], ground.shape[0])
        tile_map.load_ground_array(ground, region, floor)
        return region

    return _paint


@pytest.fixture
def grid_from_rows():
    """Build a CellGrid from '#' (floor) / '.' (void) rows."""

    def _build(rows: list[str]) -> CellGrid:
        cells = np.array([[FLOOR if c == "#" else 0 for c in row] for row in rows], dtype=np.uint8)
        return CellGrid.from_array(cells)

    return _build
