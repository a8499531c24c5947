"""Procedural tile-map generation: noise islands and room-and-corridor dungeons."""

from .config import DungeonConfig, GeneratorConfig, IslandConfig, load_config
from .dungeon.validation import LayoutReport
from .exceptions import GenerationCancelled, InvalidInputError, TileGenError
from .generator import (
    GenerationResult,
    GenerationStatus,
    MapGenerator,
    generate_dungeon_map,
    generate_island_map,
)
from .host_map import HostMap, Item, Tile, TileMap
from .progress import ProgressCallback, ProgressReporter
from .seeding import GenerationContext, parse_seed
from .types import Intersection, Position, Region, Room

__all__ = [
    # Config
    "IslandConfig",
    "DungeonConfig",
    "GeneratorConfig",
    "load_config",
    # Generation
    "MapGenerator",
    "GenerationResult",
    "GenerationStatus",
    "LayoutReport",
    "generate_island_map",
    "generate_dungeon_map",
    "GenerationContext",
    "parse_seed",
    # Progress
    "ProgressCallback",
    "ProgressReporter",
    # Host map
    "HostMap",
    "TileMap",
    "Tile",
    "Item",
    # Types
    "Position",
    "Region",
    "Room",
    "Intersection",
    # Exceptions
    "TileGenError",
    "InvalidInputError",
    "GenerationCancelled",
]
