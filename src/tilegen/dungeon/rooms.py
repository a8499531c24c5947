"""Room and hub placement by rejection sampling."""

import logging

import numpy as np

from ..config import DungeonConfig
from ..terrain.fields import FLOOR, CellGrid
from ..types import Intersection, Room

logger = logging.getLogger(__name__)

# Attempts allowed per requested room
ROOM_ATTEMPTS_PER_ROOM = 10

HUB_MAX_ATTEMPTS = 100
# Hub centers keep this far from the map edge...
HUB_EDGE_MARGIN = 10
# ...and this far from any room's bounding box
HUB_ROOM_CLEARANCE = 5


def _randint(rng: np.random.Generator, low: int, high: int) -> int:
    """Uniform integer in [low, high], both inclusive."""
    return int(rng.integers(low, high + 1))


def place_rooms(
    rng: np.random.Generator,
    config: DungeonConfig,
    width: int,
    height: int,
) -> list[Room]:
    """Place non-overlapping rooms.

    Draws a random size and position per attempt and keeps the room unless
    its 1-tile padded rectangle touches an accepted room. Stops at
    room_count rooms or after 10 attempts per requested room, whichever
    comes first; running out of attempts just yields fewer rooms.

    Args:
        rng: Per-call random generator.
        config: Room count and size bounds.
        width: Grid width.
        height: Grid height.

    Returns:
        Accepted rooms in placement order.
    """
    rooms: list[Room] = []
    max_attempts = config.room_count * ROOM_ATTEMPTS_PER_ROOM
    attempts = 0

    while len(rooms) < config.room_count and attempts < max_attempts:
        attempts += 1

        w = _randint(rng, config.min_room_size, config.max_room_size)
        h = _randint(rng, config.min_room_size, config.max_room_size)
        # Room has to fit with a margin on every side
        if width - w - 2 < 1 or height - h - 2 < 1:
            continue
        x = _randint(rng, 1, width - w - 2)
        y = _randint(rng, 1, height - h - 2)

        candidate = Room(x, y, w, h)
        padded = candidate.expanded(1)
        if any(padded.intersects(room) for room in rooms):
            continue

        rooms.append(candidate)

    if len(rooms) < config.room_count:
        logger.debug(
            f"Placed {len(rooms)}/{config.room_count} rooms in {attempts} attempts"
        )
    return rooms


def carve_rooms(grid: CellGrid, rooms: list[Room]) -> None:
    """Mark every room cell as floor."""
    cells = grid.view()
    for room in rooms:
        cells[room.y : room.y + room.height, room.x : room.x + room.width] = FLOOR


def _near_room(x: int, y: int, room: Room) -> bool:
    return (
        room.x - HUB_ROOM_CLEARANCE <= x <= room.x + room.width + HUB_ROOM_CLEARANCE
        and room.y - HUB_ROOM_CLEARANCE <= y <= room.y + room.height + HUB_ROOM_CLEARANCE
    )


def place_intersections(
    rng: np.random.Generator,
    config: DungeonConfig,
    rooms: list[Room],
    width: int,
    height: int,
) -> list[Intersection]:
    """Place corridor hubs clear of all rooms.

    Args:
        rng: Per-call random generator.
        config: Hub count and size.
        rooms: Rooms the hubs must keep clear of.
        width: Grid width.
        height: Grid height.

    Returns:
        Accepted hubs in placement order; empty if the grid is too small
        to keep a hub away from the edges.
    """
    low, high_x, high_y = HUB_EDGE_MARGIN, width - HUB_EDGE_MARGIN, height - HUB_EDGE_MARGIN
    if high_x < low or high_y < low:
        return []

    hubs: list[Intersection] = []
    attempts = 0
    while len(hubs) < config.intersection_count and attempts < HUB_MAX_ATTEMPTS:
        attempts += 1
        x = _randint(rng, low, high_x)
        y = _randint(rng, low, high_y)

        if any(_near_room(x, y, room) for room in rooms):
            continue
        hubs.append(Intersection(x, y, config.intersection_size))

    logger.debug(f"Placed {len(hubs)}/{config.intersection_count} hubs")
    return hubs


def carve_intersection(grid: CellGrid, hub: Intersection) -> None:
    """Open the square of half-size ``radius`` around a hub."""
    r = hub.radius
    for y in range(hub.y - r, hub.y + r + 1):
        for x in range(hub.x - r, hub.x + r + 1):
            grid.carve(x, y)
