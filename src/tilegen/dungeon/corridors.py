"""Corridor carving: A* corridors, L-shaped fallback, routing and dead ends."""

import logging

import numpy as np

from ..config import DungeonConfig
from ..terrain.fields import FLOOR, CellGrid
from ..types import Intersection, Room
from .pathfinding import find_shortest_path, manhattan

logger = logging.getLogger(__name__)

DEAD_END_ATTEMPTS = 10
DEAD_END_MIN_LENGTH = 5
DEAD_END_MAX_LENGTH = 15

# Dead-end directions in draw order: E, W, S, N
_DEAD_END_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _step_toward(current: int, target: int) -> int:
    return current + (1 if target > current else -1)


def create_l_corridor(
    grid: CellGrid,
    start: tuple[int, int],
    end: tuple[int, int],
    corridor_width: int,
    rng: np.random.Generator,
) -> None:
    """Carve an L-shaped corridor, leg order chosen by coin flip.

    Horizontal legs widen downward and vertical legs widen rightward.
    Cells falling off the grid are skipped.

    Args:
        grid: Cells to carve into.
        start: (x, y) start cell.
        end: (x, y) end cell.
        corridor_width: Corridor width in tiles.
        rng: Per-call random generator for the coin flip.
    """
    x, y = start
    x2, y2 = end

    def horizontal_leg() -> None:
        nonlocal x
        while x != x2:
            x = _step_toward(x, x2)
            for w in range(corridor_width):
                grid.carve(x, y + w)

    def vertical_leg() -> None:
        nonlocal y
        while y != y2:
            y = _step_toward(y, y2)
            for w in range(corridor_width):
                grid.carve(x + w, y)

    for w in range(corridor_width):
        grid.carve(x + w, y)

    if rng.integers(0, 2):
        horizontal_leg()
        vertical_leg()
    else:
        vertical_leg()
        horizontal_leg()


def carve_path(grid: CellGrid, path: list[tuple[int, int]], corridor_width: int) -> None:
    """Carve a corridor_width square anchored at every path cell."""
    for px, py in path:
        for dy in range(corridor_width):
            for dx in range(corridor_width):
                grid.carve(px + dx, py + dy)


def create_smart_corridor(
    grid: CellGrid,
    start: tuple[int, int],
    end: tuple[int, int],
    config: DungeonConfig,
    rng: np.random.Generator,
) -> bool:
    """Connect two cells, preferring an A* route over existing floor.

    Falls back to an L-shaped corridor when pathfinding is disabled or finds
    no path.

    Returns:
        True if the A* route was used.
    """
    if config.use_smart_pathfinding:
        path = find_shortest_path(grid, start, end)
        if path:
            carve_path(grid, path, config.corridor_width)
            return True
        logger.debug(f"No path from {start} to {end}, using L corridor")

    create_l_corridor(grid, start, end, config.corridor_width, rng)
    return False


def connect_sequential(
    grid: CellGrid,
    rooms: list[Room],
    config: DungeonConfig,
    rng: np.random.Generator,
) -> int:
    """Join each room to the one placed before it.

    Returns:
        Number of corridors carved.
    """
    for previous, room in zip(rooms, rooms[1:]):
        create_smart_corridor(grid, previous.center, room.center, config, rng)
    return max(0, len(rooms) - 1)


def nearest_intersection(room: Room, hubs: list[Intersection]) -> Intersection | None:
    """Hub closest to the room center by Manhattan distance; first wins ties."""
    best: Intersection | None = None
    best_distance = 0
    for hub in hubs:
        distance = manhattan(room.center, hub.center)
        if best is None or distance < best_distance:
            best, best_distance = hub, distance
    return best


def connect_via_intersections(
    grid: CellGrid,
    rooms: list[Room],
    hubs: list[Intersection],
    config: DungeonConfig,
    rng: np.random.Generator,
) -> int:
    """Join each room to its nearest hub, then chain the hubs in order.

    The hub chain follows placement order rather than a spanning tree.

    Returns:
        Number of corridors carved.
    """
    carved = 0
    for room in rooms:
        hub = nearest_intersection(room, hubs)
        if hub is not None:
            create_smart_corridor(grid, room.center, hub.center, config, rng)
            carved += 1

    for previous, hub in zip(hubs, hubs[1:]):
        create_smart_corridor(grid, previous.center, hub.center, config, rng)
        carved += 1

    return carved


def add_dead_ends(grid: CellGrid, rng: np.random.Generator) -> int:
    """Grow short 1-wide corridors out of random floor cells.

    Purely cosmetic; corridors never touch the outermost ring of the grid.

    Returns:
        Number of dead ends grown.
    """
    grown = 0
    for _ in range(DEAD_END_ATTEMPTS):
        floor_cells = np.flatnonzero(grid.data == FLOOR)
        if floor_cells.size == 0:
            break

        start = int(floor_cells[rng.integers(0, floor_cells.size)])
        x, y = start % grid.width, start // grid.width
        length = int(rng.integers(DEAD_END_MIN_LENGTH, DEAD_END_MAX_LENGTH + 1))
        dx, dy = _DEAD_END_DIRECTIONS[int(rng.integers(0, len(_DEAD_END_DIRECTIONS)))]

        for _ in range(length):
            x += dx
            y += dy
            if 0 < x < grid.width - 1 and 0 < y < grid.height - 1:
                grid.carve(x, y)
        grown += 1

    return grown
