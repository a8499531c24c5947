"""Flat row-major buffers for per-cell generator data."""

import numpy as np
from numpy.typing import NDArray

# Dungeon cell states
VOID = 0
FLOOR = 1


class FlatField:
    """Dense width x height buffer stored as one flat array.

    Cell (x, y) lives at ``y * width + x``. ``view()`` exposes the same
    memory as a (height, width) array for vectorized work.
    """

    dtype: type = np.float64

    def __init__(self, width: int, height: int, data: NDArray | None = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Field dimensions must be positive, got {width}x{height}")
        if data is None:
            data = np.zeros(width * height, dtype=self.dtype)
        elif data.shape != (width * height,):
            raise ValueError(
                f"Buffer of shape {data.shape} doesn't hold {width}x{height} cells"
            )
        self.width = width
        self.height = height
        self.data = data

    @classmethod
    def from_array(cls, values: NDArray) -> "FlatField":
        """Copy a (height, width) array into a new field."""
        height, width = values.shape
        return cls(width, height, np.ascontiguousarray(values, dtype=cls.dtype).reshape(-1).copy())

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def __getitem__(self, xy: tuple[int, int]):
        x, y = xy
        return self.data[self.index(x, y)]

    def __setitem__(self, xy: tuple[int, int], value) -> None:
        x, y = xy
        self.data[self.index(x, y)] = value

    def view(self) -> NDArray:
        """(height, width) view sharing memory with the flat buffer."""
        return self.data.reshape(self.height, self.width)

    @property
    def size(self) -> int:
        return self.width * self.height


class HeightField(FlatField):
    """Scalar heights in [0, 1]."""

    dtype = np.float64


class CellGrid(FlatField):
    """Dungeon cells, VOID or FLOOR."""

    dtype = np.uint8

    def carve(self, x: int, y: int) -> None:
        """Mark a cell as floor; out-of-bounds cells are ignored."""
        if self.in_bounds(x, y):
            self.data[y * self.width + x] = FLOOR

    def is_floor(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.data[y * self.width + x] == FLOOR

    def floor_count(self) -> int:
        return int(np.count_nonzero(self.data == FLOOR))
