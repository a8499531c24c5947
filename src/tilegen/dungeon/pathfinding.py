"""A* corridor routing over the dungeon cell grid."""

import heapq
import itertools

from ..terrain.fields import FLOOR, CellGrid
from ..types import CARDINAL_DELTAS

# Entering existing floor is cheap, digging through void is not
FLOOR_COST = 1
VOID_COST = 5


def step_cost(grid: CellGrid, x: int, y: int) -> int:
    """Cost of moving onto cell (x, y)."""
    return FLOOR_COST if grid.data[y * grid.width + x] == FLOOR else VOID_COST


def manhattan(a: tuple[int, int], b: tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_shortest_path(
    grid: CellGrid,
    start: tuple[int, int],
    goal: tuple[int, int],
) -> list[tuple[int, int]]:
    """Find the cheapest 4-connected path from start to goal.

    Uses A* with a Manhattan heuristic. Equal-priority nodes come out in
    the order they were pushed.

    Args:
        grid: Dungeon cells; floor costs FLOOR_COST to enter, void VOID_COST.
        start: (x, y) start cell.
        goal: (x, y) goal cell.

    Returns:
        (x, y) cells from start to goal inclusive, or an empty list when
        either endpoint lies off the grid or the goal can't be reached.
    """
    if not grid.in_bounds(*start) or not grid.in_bounds(*goal):
        return []

    width, height = grid.width, grid.height
    g_score: dict[tuple[int, int], int] = {start: 0}
    came_from: dict[tuple[int, int], tuple[int, int]] = {}
    counter = itertools.count()

    # (f, push order, g, cell)
    open_set: list[tuple[int, int, int, tuple[int, int]]] = [
        (manhattan(start, goal), next(counter), 0, start)
    ]

    while open_set:
        _, _, g, current = heapq.heappop(open_set)

        if current == goal:
            return _reconstruct(came_from, current)

        # Stale queue entry: a cheaper route was found after this push
        if g > g_score[current]:
            continue

        cx, cy = current
        for dx, dy in CARDINAL_DELTAS:
            nx, ny = cx + dx, cy + dy
            if not (0 <= nx < width and 0 <= ny < height):
                continue

            tentative = g + step_cost(grid, nx, ny)
            neighbor = (nx, ny)
            if tentative < g_score.get(neighbor, tentative + 1):
                g_score[neighbor] = tentative
                came_from[neighbor] = current
                f = tentative + manhattan(neighbor, goal)
                heapq.heappush(open_set, (f, next(counter), tentative, neighbor))

    return []


def _reconstruct(
    came_from: dict[tuple[int, int], tuple[int, int]],
    end: tuple[int, int],
) -> list[tuple[int, int]]:
    path = [end]
    while path[-1] in came_from:
        path.append(came_from[path[-1]])
    path.reverse()
    return path


def path_cost(grid: CellGrid, path: list[tuple[int, int]]) -> int:
    """Total cost of walking a path (the start cell is free)."""
    return sum(step_cost(grid, x, y) for x, y in path[1:])
