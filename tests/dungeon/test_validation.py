"""Tests for dungeon layout validation."""

from dataclasses import FrozenInstanceError

import pytest

from tilegen.config import DungeonConfig
from tilegen.dungeon.layout import DungeonLayout, build_dungeon_layout
from tilegen.dungeon.rooms import carve_rooms
from tilegen.dungeon.validation import LayoutReport, label_floor, validate_layout
from tilegen.seeding import GenerationContext
from tilegen.terrain.fields import CellGrid
from tilegen.types import Room


def _layout(rooms: list[Room], size: int = 30) -> DungeonLayout:
    grid = CellGrid(size, size)
    carve_rooms(grid, rooms)
    return DungeonLayout(grid=grid, rooms=rooms)


class TestValidateLayout:
    """Tests for validate_layout."""

    def test_generated_layout_passes(self, dungeon_config: DungeonConfig) -> None:
        """A freshly generated layout has no errors."""
        layout = build_dungeon_layout(GenerationContext.from_seed("ok"), dungeon_config, 96, 96)
        result = validate_layout(layout)
        assert result.passed
        assert result.errors == ()

    def test_disconnected_rooms(self) -> None:
        """Rooms with no corridor between them fail."""
        result = validate_layout(_layout([Room(2, 2, 5, 5), Room(15, 15, 5, 5)]))
        assert not result.passed
        assert any("connected" in error for error in result.errors)

    def test_overlapping_rooms(self) -> None:
        """Rooms closer than the padding fail."""
        result = validate_layout(_layout([Room(2, 2, 5, 5), Room(8, 2, 5, 5)]))
        assert any("overlaps" in error for error in result.errors)

    def test_border_room(self) -> None:
        """Rooms on the outer ring fail."""
        result = validate_layout(_layout([Room(0, 3, 5, 5)]))
        assert any("border" in error for error in result.errors)

    def test_under_generation_warns(self) -> None:
        """Fewer rooms than requested is only a warning."""
        result = validate_layout(_layout([Room(2, 2, 5, 5)]), room_target=4)
        assert result.passed
        assert len(result.warnings) == 1

    def test_label_floor(self) -> None:
        """Separate rooms are separate components."""
        layout = _layout([Room(2, 2, 5, 5), Room(15, 15, 5, 5)])
        labels, count = label_floor(layout.grid)
        assert count == 2
        assert labels[0, 0] == 0

    def test_report_is_frozen(self) -> None:
        """Reports are immutable values; passed follows the errors."""
        report = validate_layout(_layout([Room(2, 2, 5, 5)]), room_target=2)
        assert report == LayoutReport(warnings=("Placed 1 of 2 rooms",))
        with pytest.raises(FrozenInstanceError):
            report.errors = ("late",)
        assert not LayoutReport(errors=("bad",)).passed
