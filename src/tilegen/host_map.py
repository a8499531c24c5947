"""Host tile-map interface and an in-memory reference map.

Generators only ever talk to the host through ``HostMap``: fetch a tile,
allocate one on demand, hand it back, and create items by numeric id.
``TileMap`` is a small dict-backed implementation used by the CLI and tests.
"""

from dataclasses import dataclass, field
from typing import Iterator, Protocol

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, PrivateAttr

from .types import Position, Region


@dataclass
class Item:
    """A placed item, identified by its catalog id."""

    item_id: int


@dataclass
class Tile:
    """Mutable tile: one ground slot plus stacked items."""

    position: Position
    ground: Item | None = None
    items: list[Item] = field(default_factory=list)

    @property
    def ground_id(self) -> int:
        """Ground item id, or 0 if the ground slot is empty."""
        return self.ground.item_id if self.ground is not None else 0

    def add_item(self, item: Item) -> None:
        """Stack an item on top of the tile."""
        self.items.append(item)


class HostMap(Protocol):
    """Operations the generators need from the map that owns the tiles."""

    def get_tile(self, x: int, y: int, z: int) -> Tile | None: ...

    def create_tile(self, x: int, y: int, z: int) -> Tile: ...

    def set_tile(self, position: Position, tile: Tile) -> None: ...

    def create_item(self, item_id: int) -> Item: ...


def fetch_or_create_tile(host: HostMap, x: int, y: int, z: int) -> Tile:
    """Return the tile at (x, y, z), allocating it through the host if needed."""
    tile = host.get_tile(x, y, z)
    if tile is None:
        tile = host.create_tile(x, y, z)
    return tile


def ground_id_at(host: HostMap, x: int, y: int, z: int) -> int:
    """Ground id of the tile at (x, y, z), 0 when there is no tile or ground."""
    tile = host.get_tile(x, y, z)
    if tile is None or tile.ground is None:
        return 0
    return tile.ground.item_id


def replace_ground(host: HostMap, tile: Tile, item_id: int) -> None:
    """Drop the tile's ground item and install a freshly created one."""
    tile.ground = host.create_item(item_id)


class TileMap(BaseModel):
    """
    In-memory host map.

    Tiles are stored sparsely keyed by position; tiles handed out by
    ``create_tile`` are only registered once passed to ``set_tile``.
    """

    name: str = "untitled"

    _tiles: dict[Position, Tile] = PrivateAttr(default_factory=dict)
    _items_created: int = PrivateAttr(default=0)

    # --- HostMap protocol ---

    def get_tile(self, x: int, y: int, z: int) -> Tile | None:
        return self._tiles.get(Position(x=x, y=y, z=z))

    def create_tile(self, x: int, y: int, z: int) -> Tile:
        return Tile(position=Position(x=x, y=y, z=z))

    def set_tile(self, position: Position, tile: Tile) -> None:
        if tile.position != position:
            raise ValueError(f"Tile at {tile.position} cannot be stored at {position}")
        self._tiles[position] = tile

    def create_item(self, item_id: int) -> Item:
        if item_id <= 0:
            raise ValueError(f"Invalid item id: {item_id}")
        self._items_created += 1
        return Item(item_id=item_id)

    # --- Inspection helpers ---

    @property
    def tile_count(self) -> int:
        return len(self._tiles)

    @property
    def items_created(self) -> int:
        return self._items_created

    def tiles(self) -> Iterator[Tile]:
        """Iterate over all stored tiles."""
        return iter(self._tiles.values())

    def ground_array(self, region: Region, z: int) -> NDArray[np.uint16]:
        """Ground ids of a region as a (height, width) array, 0 where unset."""
        result = np.zeros((region.height, region.width), dtype=np.uint16)
        for y in range(region.height):
            for x in range(region.width):
                mx, my = region.to_map(x, y)
                result[y, x] = ground_id_at(self, mx, my, z)
        return result

    def load_ground_array(self, ground: NDArray[np.uint16], region: Region, z: int) -> None:
        """Install ground items from an id array; 0 entries are skipped."""
        height, width = ground.shape
        if (width, height) != (region.width, region.height):
            raise ValueError(
                f"Ground array shape {ground.shape} doesn't match "
                f"region dimensions ({region.height}, {region.width})"
            )
        for y in range(height):
            for x in range(width):
                item_id = int(ground[y, x])
                if item_id == 0:
                    continue
                mx, my = region.to_map(x, y)
                tile = fetch_or_create_tile(self, mx, my, z)
                replace_ground(self, tile, item_id)
                self.set_tile(tile.position, tile)
