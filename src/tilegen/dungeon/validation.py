"""Post-generation checks on a dungeon layout."""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..terrain.fields import FLOOR, CellGrid
from ..types import Room
from .layout import DungeonLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutReport:
    """Findings for one layout. Errors break an invariant; warnings do not."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.errors


def label_floor(grid: CellGrid) -> tuple[NDArray[np.int32], int]:
    """Label 4-connected floor components.

    Returns:
        (labels, count); label 0 is void.
    """
    structure = ndimage.generate_binary_structure(2, 1)
    labeled, num_features = ndimage.label(grid.view() == FLOOR, structure=structure)
    return labeled, num_features


def rooms_connected(grid: CellGrid, rooms: list[Room]) -> bool:
    """Whether every room center sits in the same floor component."""
    if len(rooms) < 2:
        return True
    labeled, _ = label_floor(grid)
    labels = {int(labeled[room.center[1], room.center[0]]) for room in rooms}
    return len(labels) == 1 and 0 not in labels


def validate_layout(layout: DungeonLayout, room_target: int | None = None) -> LayoutReport:
    """Validate a finished layout.

    Args:
        layout: Layout to check.
        room_target: Requested room count, for an under-generation warning.

    Returns:
        LayoutReport with any errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []
    grid = layout.grid

    # Check 1: Rooms inside the margin
    for room in layout.rooms:
        if room.x < 1 or room.y < 1 or room.x + room.width > grid.width - 1 or (
            room.y + room.height > grid.height - 1
        ):
            errors.append(f"Room {room} touches the grid border")

    # Check 2: Padded rooms don't overlap
    for i, room in enumerate(layout.rooms):
        for earlier in layout.rooms[:i]:
            if room.expanded(1).intersects(earlier):
                errors.append(f"Room {room} overlaps {earlier}")

    # Check 3: One connected floor network
    if not rooms_connected(grid, layout.rooms):
        errors.append("Not all rooms are connected")

    # Check 4: Under-generation
    if room_target is not None and len(layout.rooms) < room_target:
        warnings.append(f"Placed {len(layout.rooms)} of {room_target} rooms")

    report = LayoutReport(tuple(errors), tuple(warnings))
    if report.passed:
        logger.info("Layout validation passed")
    else:
        logger.warning(f"Layout validation failed with {len(report.errors)} errors")
        for error in report.errors:
            logger.error(f"  - {error}")

    for warning in report.warnings:
        logger.warning(f"  - {warning}")

    return report
