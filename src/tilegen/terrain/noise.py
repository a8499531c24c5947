"""Seeded 2D simplex noise and fractal (fBm) composition.

The scalar ``sample``/``fractal`` pair is the reference definition; the
``*_array`` variants evaluate the same arithmetic over numpy arrays so whole
fields can be built without a Python loop per cell.
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Skew/unskew factors for the 2D simplex lattice
F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0

# 12 edge-midpoint gradients of a cube, projected onto (x, y)
GRAD3: tuple[tuple[int, int], ...] = (
    (1, 1), (-1, 1), (1, -1), (-1, -1),
    (1, 0), (-1, 0), (1, 0), (-1, 0),
    (0, 1), (0, -1), (0, 1), (0, -1),
)
_GRAD_X = np.array([g[0] for g in GRAD3], dtype=np.float64)
_GRAD_Y = np.array([g[1] for g in GRAD3], dtype=np.float64)

# Scales the summed corner contributions to roughly [-1, 1]
OUTPUT_SCALE = 70.0

PERM_SIZE = 256


def build_permutation(seed: int) -> NDArray[np.int64]:
    """Build the 512-entry permutation table for a seed.

    The identity 0..255 is Fisher-Yates shuffled with a generator seeded
    from ``seed``, then duplicated so lookups never need to wrap.

    Args:
        seed: 32-bit noise seed.

    Returns:
        Permutation table of length 512.
    """
    rng = np.random.default_rng(seed)
    perm = list(range(PERM_SIZE))
    for i in range(PERM_SIZE - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        perm[i], perm[j] = perm[j], perm[i]
    return np.array(perm + perm, dtype=np.int64)


def _corner(t: float, gi: int, x: float, y: float) -> float:
    # Outside the kernel radius: no contribution (never raise a negative t)
    if t < 0:
        return 0.0
    t *= t
    gx, gy = GRAD3[gi]
    return t * t * (gx * x + gy * y)


class SimplexNoise:
    """2D simplex noise bound to one seed.

    The permutation tables are built once at construction; a different seed
    needs a new instance.
    """

    def __init__(self, seed: int = 0):
        self.seed = seed & 0xFFFFFFFF
        self.perm = build_permutation(self.seed)
        self.perm_mod12 = self.perm % 12
        # List copies for scalar lookups
        self._perm = self.perm.tolist()
        self._perm_mod12 = self.perm_mod12.tolist()

    def sample(self, x: float, y: float) -> float:
        """Evaluate simplex noise at one point.

        Args:
            x: X coordinate in noise space.
            y: Y coordinate in noise space.

        Returns:
            Noise value in [-1, 1].
        """
        perm = self._perm
        perm_mod12 = self._perm_mod12

        # Skew into lattice space to find the containing cell
        s = (x + y) * F2
        i = math.floor(x + s)
        j = math.floor(y + s)

        t = (i + j) * G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        # Lower or upper triangle of the cell
        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + G2
        y1 = y0 - j1 + G2
        x2 = x0 - 1.0 + 2.0 * G2
        y2 = y0 - 1.0 + 2.0 * G2

        ii = i & 255
        jj = j & 255
        gi0 = perm_mod12[ii + perm[jj]]
        gi1 = perm_mod12[ii + i1 + perm[jj + j1]]
        gi2 = perm_mod12[ii + 1 + perm[jj + 1]]

        n0 = _corner(0.5 - x0 * x0 - y0 * y0, gi0, x0, y0)
        n1 = _corner(0.5 - x1 * x1 - y1 * y1, gi1, x1, y1)
        n2 = _corner(0.5 - x2 * x2 - y2 * y2, gi2, x2, y2)

        return OUTPUT_SCALE * (n0 + n1 + n2)

    def fractal(
        self,
        x: float,
        y: float,
        octaves: int,
        persistence: float,
        lacunarity: float,
    ) -> float:
        """Sum octaves of noise, normalized by total amplitude.

        Args:
            x: X coordinate in noise space.
            y: Y coordinate in noise space.
            octaves: Number of noise layers to sum.
            persistence: Amplitude multiplier between octaves.
            lacunarity: Frequency multiplier between octaves.

        Returns:
            Noise value in [-1, 1].
        """
        value = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_amplitude = 0.0

        for _ in range(octaves):
            value += self.sample(x * frequency, y * frequency) * amplitude
            max_amplitude += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return value / max_amplitude

    def sample_array(self, xs: ArrayLike, ys: ArrayLike) -> NDArray[np.float64]:
        """Vectorized ``sample`` over broadcastable coordinate arrays."""
        x = np.asarray(xs, dtype=np.float64)
        y = np.asarray(ys, dtype=np.float64)
        x, y = np.broadcast_arrays(x, y)

        s = (x + y) * F2
        i = np.floor(x + s).astype(np.int64)
        j = np.floor(y + s).astype(np.int64)

        t = (i + j) * G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        i1 = (x0 > y0).astype(np.int64)
        j1 = 1 - i1

        x1 = x0 - i1 + G2
        y1 = y0 - j1 + G2
        x2 = x0 - 1.0 + 2.0 * G2
        y2 = y0 - 1.0 + 2.0 * G2

        ii = i & 255
        jj = j & 255
        gi0 = self.perm_mod12[ii + self.perm[jj]]
        gi1 = self.perm_mod12[ii + i1 + self.perm[jj + j1]]
        gi2 = self.perm_mod12[ii + 1 + self.perm[jj + 1]]

        total = (
            _corner_array(0.5 - x0 * x0 - y0 * y0, gi0, x0, y0)
            + _corner_array(0.5 - x1 * x1 - y1 * y1, gi1, x1, y1)
            + _corner_array(0.5 - x2 * x2 - y2 * y2, gi2, x2, y2)
        )
        return OUTPUT_SCALE * total

    def fractal_array(
        self,
        xs: ArrayLike,
        ys: ArrayLike,
        octaves: int,
        persistence: float,
        lacunarity: float,
    ) -> NDArray[np.float64]:
        """Vectorized ``fractal`` over broadcastable coordinate arrays."""
        x = np.asarray(xs, dtype=np.float64)
        y = np.asarray(ys, dtype=np.float64)

        value = np.zeros(np.broadcast_shapes(x.shape, y.shape), dtype=np.float64)
        amplitude = 1.0
        frequency = 1.0
        max_amplitude = 0.0

        for _ in range(octaves):
            value += self.sample_array(x * frequency, y * frequency) * amplitude
            max_amplitude += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return value / max_amplitude


def _corner_array(
    t: NDArray[np.float64],
    gi: NDArray[np.int64],
    x: NDArray[np.float64],
    y: NDArray[np.float64],
) -> NDArray[np.float64]:
    t = np.where(t < 0, 0.0, t)
    t = t * t
    return t * t * (_GRAD_X[gi] * x + _GRAD_Y[gi] * y)
