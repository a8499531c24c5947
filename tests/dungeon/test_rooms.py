"""Tests for room and hub placement."""

import numpy as np
import pytest

from tilegen.config import DungeonConfig
from tilegen.dungeon.rooms import (
    HUB_EDGE_MARGIN,
    HUB_ROOM_CLEARANCE,
    carve_intersection,
    carve_rooms,
    place_intersections,
    place_rooms,
)
from tilegen.terrain.fields import FLOOR, CellGrid
from tilegen.types import Intersection, Room


class TestPlaceRooms:
    """Tests for rejection-sampled room placement."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_padded_rooms_never_touch(self, seed: int, dungeon_config: DungeonConfig) -> None:
        """No accepted room's padded rectangle meets an earlier room."""
        rooms = place_rooms(np.random.default_rng(seed), dungeon_config, 80, 60)
        for i, room in enumerate(rooms):
            for earlier in rooms[:i]:
                assert not room.expanded(1).intersects(earlier)

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_bounds_and_sizes(self, seed: int, dungeon_config: DungeonConfig) -> None:
        """Rooms keep a one-tile margin and respect the size bounds."""
        width, height = 70, 50
        rooms = place_rooms(np.random.default_rng(seed), dungeon_config, width, height)
        assert rooms
        for room in rooms:
            assert dungeon_config.min_room_size <= room.width <= dungeon_config.max_room_size
            assert dungeon_config.min_room_size <= room.height <= dungeon_config.max_room_size
            assert 1 <= room.x <= width - room.width - 2
            assert 1 <= room.y <= height - room.height - 2

    def test_under_generation_is_not_an_error(self) -> None:
        """A crowded grid yields fewer rooms than requested."""
        config = DungeonConfig(room_count=30, min_room_size=5, max_room_size=8)
        rooms = place_rooms(np.random.default_rng(0), config, 24, 24)
        assert 0 < len(rooms) < 30

    def test_rooms_that_cannot_fit(self) -> None:
        """Rooms too large for the grid are never placed."""
        config = DungeonConfig(room_count=3, min_room_size=5, max_room_size=5)
        assert place_rooms(np.random.default_rng(0), config, 6, 6) == []

    def test_zero_rooms(self) -> None:
        """room_count 0 places nothing."""
        assert place_rooms(np.random.default_rng(0), DungeonConfig(room_count=0), 64, 64) == []

    def test_deterministic(self, dungeon_config: DungeonConfig) -> None:
        """Same RNG seed places the same rooms."""
        a = place_rooms(np.random.default_rng(42), dungeon_config, 100, 100)
        b = place_rooms(np.random.default_rng(42), dungeon_config, 100, 100)
        assert a == b

    def test_carve_rooms(self) -> None:
        """Carving marks exactly the room cells as floor."""
        grid = CellGrid(20, 20)
        rooms = [Room(1, 1, 3, 4), Room(10, 10, 5, 5)]
        carve_rooms(grid, rooms)
        assert grid.floor_count() == 12 + 25
        for room in rooms:
            assert all(grid.is_floor(x, y) for x, y in room.cells())
        assert not grid.is_floor(0, 0)


class TestPlaceIntersections:
    """Tests for hub placement."""

    def test_hubs_clear_of_rooms_and_edges(self, dungeon_config: DungeonConfig) -> None:
        """Hub centers stay inside the edge margin and away from rooms."""
        rng = np.random.default_rng(3)
        width, height = 120, 120
        rooms = place_rooms(rng, dungeon_config, width, height)
        hubs = place_intersections(rng, dungeon_config, rooms, width, height)

        assert len(hubs) <= dungeon_config.intersection_count
        for hub in hubs:
            assert HUB_EDGE_MARGIN <= hub.x <= width - HUB_EDGE_MARGIN
            assert HUB_EDGE_MARGIN <= hub.y <= height - HUB_EDGE_MARGIN
            assert hub.radius == dungeon_config.intersection_size
            for room in rooms:
                inside_x = room.x - HUB_ROOM_CLEARANCE <= hub.x <= room.x + room.width + HUB_ROOM_CLEARANCE
                inside_y = room.y - HUB_ROOM_CLEARANCE <= hub.y <= room.y + room.height + HUB_ROOM_CLEARANCE
                assert not (inside_x and inside_y)

    def test_empty_map_fills_quota(self, dungeon_config: DungeonConfig) -> None:
        """With no rooms every attempt succeeds."""
        hubs = place_intersections(np.random.default_rng(0), dungeon_config, [], 64, 64)
        assert len(hubs) == dungeon_config.intersection_count

    def test_grid_too_small(self, dungeon_config: DungeonConfig) -> None:
        """No hubs when the edge margins leave no room."""
        assert place_intersections(np.random.default_rng(0), dungeon_config, [], 19, 40) == []

    def test_carve_clipped_at_edge(self) -> None:
        """Hub squares are clipped to the grid."""
        grid = CellGrid(10, 10)
        carve_intersection(grid, Intersection(5, 5, 2))
        assert grid.floor_count() == 25

        corner = CellGrid(10, 10)
        carve_intersection(corner, Intersection(0, 0, 2))
        assert corner.floor_count() == 9
        assert corner.view()[0, 0] == FLOOR
