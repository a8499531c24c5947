"""Tests for simplex noise."""

import numpy as np
import pytest

from tilegen.terrain.noise import SimplexNoise, build_permutation


class TestPermutation:
    """Tests for the seeded permutation table."""

    def test_table_is_doubled_permutation(self) -> None:
        """First half is a permutation of 0..255, second half repeats it."""
        perm = build_permutation(1234)
        assert perm.shape == (512,)
        assert sorted(perm[:256].tolist()) == list(range(256))
        np.testing.assert_array_equal(perm[:256], perm[256:])

    def test_same_seed_same_table(self) -> None:
        """Same seed produces identical tables."""
        np.testing.assert_array_equal(build_permutation(7), build_permutation(7))

    def test_different_seed_different_table(self) -> None:
        """Different seeds shuffle differently."""
        assert not np.array_equal(build_permutation(7), build_permutation(8))

    def test_mod12_table(self) -> None:
        """Gradient index table is perm mod 12."""
        noise = SimplexNoise(99)
        np.testing.assert_array_equal(noise.perm_mod12, noise.perm % 12)
        assert noise.perm_mod12.max() < 12


class TestSample:
    """Tests for single-octave noise."""

    def test_range_over_many_magnitudes(self) -> None:
        """Output stays in [-1, 1] for coordinates across many magnitudes."""
        noise = SimplexNoise(42)
        rng = np.random.default_rng(0)
        for magnitude in (0.01, 1.0, 100.0, 1e4, 1e6):
            xs = rng.uniform(-magnitude, magnitude, 2000)
            ys = rng.uniform(-magnitude, magnitude, 2000)
            values = noise.sample_array(xs, ys)
            assert values.min() >= -1.0
            assert values.max() <= 1.0

    def test_zero_at_lattice_origin(self) -> None:
        """Noise vanishes at a lattice point."""
        assert SimplexNoise(5).sample(0.0, 0.0) == pytest.approx(0.0, abs=1e-12)

    def test_deterministic(self) -> None:
        """Same seed and point always give the same value."""
        a = SimplexNoise(17)
        b = SimplexNoise(17)
        for x, y in [(0.3, 0.7), (12.5, -3.25), (-100.1, 55.5)]:
            assert a.sample(x, y) == b.sample(x, y)

    def test_seed_changes_output(self) -> None:
        """Different seeds give a different field."""
        xs = np.linspace(0.1, 20.0, 200)
        a = SimplexNoise(1).sample_array(xs, xs * 0.7)
        b = SimplexNoise(2).sample_array(xs, xs * 0.7)
        assert not np.allclose(a, b)

    def test_seed_masked_to_32_bits(self) -> None:
        """Seeds differing only above bit 31 are the same noise."""
        assert SimplexNoise(5).seed == SimplexNoise(5 + (1 << 32)).seed

    def test_array_matches_scalar(self) -> None:
        """Vectorized evaluation agrees with the scalar reference."""
        noise = SimplexNoise(2024)
        rng = np.random.default_rng(3)
        xs = rng.uniform(-50, 50, 500)
        ys = rng.uniform(-50, 50, 500)

        vectorized = noise.sample_array(xs, ys)
        scalar = np.array([noise.sample(x, y) for x, y in zip(xs, ys)])
        np.testing.assert_allclose(vectorized, scalar, rtol=0, atol=1e-12)

    def test_array_broadcasts(self) -> None:
        """Coordinate arrays broadcast like numpy operands."""
        noise = SimplexNoise(1)
        result = noise.sample_array(np.arange(8)[None, :] * 0.3, np.arange(5)[:, None] * 0.3)
        assert result.shape == (5, 8)


class TestFractal:
    """Tests for fractal (multi-octave) noise."""

    def test_range(self) -> None:
        """Normalized fractal noise stays in [-1, 1]."""
        noise = SimplexNoise(8)
        rng = np.random.default_rng(1)
        xs = rng.uniform(-500, 500, 5000)
        ys = rng.uniform(-500, 500, 5000)
        values = noise.fractal_array(xs, ys, 6, 0.5, 2.0)
        assert values.min() >= -1.0
        assert values.max() <= 1.0

    def test_single_octave_is_plain_noise(self) -> None:
        """One octave reduces to a single sample."""
        noise = SimplexNoise(11)
        assert noise.fractal(3.3, 4.4, 1, 0.5, 2.0) == pytest.approx(noise.sample(3.3, 4.4))

    def test_normalized_by_amplitude_sum(self) -> None:
        """Two octaves are the amplitude-weighted mean of their samples."""
        noise = SimplexNoise(11)
        x, y = 1.7, -2.9
        expected = (noise.sample(x, y) + 0.5 * noise.sample(2 * x, 2 * y)) / 1.5
        assert noise.fractal(x, y, 2, 0.5, 2.0) == pytest.approx(expected)

    def test_array_matches_scalar(self) -> None:
        """Vectorized fractal agrees with the scalar reference."""
        noise = SimplexNoise(77)
        xs = np.linspace(-10, 10, 100)
        ys = np.linspace(5, -5, 100)
        vectorized = noise.fractal_array(xs, ys, 4, 0.5, 2.0)
        scalar = np.array([noise.fractal(x, y, 4, 0.5, 2.0) for x, y in zip(xs, ys)])
        np.testing.assert_allclose(vectorized, scalar, rtol=0, atol=1e-12)
