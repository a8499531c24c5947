"""Tests for height classification and tile placement."""

import numpy as np
import pytest

from tilegen.config import IslandConfig
from tilegen.exceptions import GenerationCancelled
from tilegen.host_map import TileMap
from tilegen.progress import ProgressReporter
from tilegen.terrain.classification import classify, place_tiles, water_level
from tilegen.terrain.fields import HeightField
from tilegen.types import Region


class TestClassify:
    """Tests for water/ground classification."""

    def test_water_level_remap(self) -> None:
        """Threshold in [-1, 1] maps onto [0, 1]."""
        assert water_level(IslandConfig(island_threshold=0.3)) == pytest.approx(0.65)
        assert water_level(IslandConfig(island_threshold=-1.0)) == 0.0

    def test_every_cell_classified(self, island_config: IslandConfig) -> None:
        """Each cell gets exactly the water or ground id."""
        rng = np.random.default_rng(5)
        field = HeightField.from_array(rng.random((30, 40)))
        ids = classify(field, island_config)
        assert ids.shape == (30, 40)
        assert set(np.unique(ids).tolist()) <= {island_config.water_id, island_config.ground_id}

    def test_threshold_boundary(self, island_config: IslandConfig) -> None:
        """Heights below the water level are water, at or above are ground."""
        level = water_level(island_config)
        field = HeightField.from_array(np.array([[level - 1e-9, level, 1.0, 0.0]]))
        ids = classify(field, island_config)
        water, ground = island_config.water_id, island_config.ground_id
        np.testing.assert_array_equal(ids, [[water, ground, ground, water]])


class TestPlaceTiles:
    """Tests for writing classified ids onto the host map."""

    def test_writes_every_tile(self, tile_map: TileMap) -> None:
        """All cells become tiles at the region offset and floor."""
        ids = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint16)
        region = Region(10, 20, 3, 2)
        placed = place_tiles(tile_map, ids, region, 5)

        assert placed == 6
        assert tile_map.tile_count == 6
        assert tile_map.get_tile(10, 20, 5).ground_id == 1
        assert tile_map.get_tile(12, 21, 5).ground_id == 6
        assert tile_map.get_tile(0, 0, 5) is None

    def test_replaces_existing_ground(self, tile_map: TileMap) -> None:
        """Existing tiles are reused and their ground replaced."""
        tile = tile_map.create_tile(0, 0, 7)
        tile.ground = tile_map.create_item(99)
        tile_map.set_tile(tile.position, tile)

        place_tiles(tile_map, np.array([[4526]], dtype=np.uint16), Region(0, 0, 1, 1), 7)
        assert tile_map.get_tile(0, 0, 7) is tile
        assert tile.ground_id == 4526

    def test_progress_ticks(self, tile_map: TileMap) -> None:
        """Placement reports every 1000 tiles within 40..70."""
        seen: list[int] = []
        progress = ProgressReporter(lambda current, total: seen.append(current) or True)
        place_tiles(tile_map, np.ones((50, 50), dtype=np.uint16), Region(0, 0, 50, 50), 7, progress)
        assert seen == [40 + int(1000 / 2500 * 30), 40 + int(2000 / 2500 * 30)]

    def test_cancel_keeps_written_tiles(self, tile_map: TileMap) -> None:
        """Cancelling mid-placement leaves the tiles written so far."""
        progress = ProgressReporter(lambda current, total: False)
        with pytest.raises(GenerationCancelled):
            place_tiles(tile_map, np.ones((50, 50), dtype=np.uint16), Region(0, 0, 50, 50), 7, progress)
        assert tile_map.tile_count == 1000
        assert tile_map.get_tile(0, 0, 7) is not None
        assert tile_map.get_tile(49, 49, 7) is None
