"""Core value types shared by the generators."""

from dataclasses import dataclass

from pydantic import BaseModel

# Cardinal neighbour deltas: W, E, N, S
# Coordinate system: +X is East, +Y is South
CARDINAL_DELTAS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Position(BaseModel, frozen=True):
    """Immutable 3D tile coordinate on the host map."""

    x: int
    y: int
    z: int = 0

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def __repr__(self) -> str:
        return f"Position(x={self.x}, y={self.y}, z={self.z})"


@dataclass(frozen=True)
class Region:
    """Rectangle of host-map tiles a generator works on."""

    origin_x: int
    origin_y: int
    width: int
    height: int

    def to_map(self, x: int, y: int) -> tuple[int, int]:
        """Translate local grid coordinates to host-map coordinates."""
        return self.origin_x + x, self.origin_y + y

    def contains(self, x: int, y: int) -> bool:
        """Whether local coordinates fall inside the region."""
        return 0 <= x < self.width and 0 <= y < self.height


@dataclass(frozen=True)
class Room:
    """Axis-aligned dungeon room, in local grid coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> tuple[int, int]:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def expanded(self, pad: int) -> "Room":
        """Return the room grown by pad tiles on every side."""
        return Room(self.x - pad, self.y - pad, self.width + 2 * pad, self.height + 2 * pad)

    def intersects(self, other: "Room") -> bool:
        """Inclusive-edge overlap test: touching rectangles intersect."""
        return (
            self.x <= other.x + other.width
            and self.x + self.width >= other.x
            and self.y <= other.y + other.height
            and self.y + self.height >= other.y
        )

    def cells(self):
        for y in range(self.y, self.y + self.height):
            for x in range(self.x, self.x + self.width):
                yield x, y


@dataclass(frozen=True)
class Intersection:
    """Corridor hub: a square open area corridors converge on."""

    x: int
    y: int
    radius: int

    @property
    def center(self) -> tuple[int, int]:
        return (self.x, self.y)
