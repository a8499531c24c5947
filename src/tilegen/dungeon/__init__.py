"""Dungeon layout: rooms, hubs, A* corridors, dead ends and caves."""

from .layout import DungeonLayout, build_dungeon_layout, commit_layout
from .pathfinding import find_shortest_path, path_cost
from .validation import LayoutReport, validate_layout

__all__ = [
    "DungeonLayout",
    "LayoutReport",
    "build_dungeon_layout",
    "commit_layout",
    "find_shortest_path",
    "path_cost",
    "validate_layout",
]
