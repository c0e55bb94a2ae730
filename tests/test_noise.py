"""Tests for gradient noise and its fractal sums."""

import logging

import numpy as np
import pytest

from pixpro.noise import (
    NoiseConfig,
    fbm,
    make_fbm_image,
    make_noise_image,
    make_ridge_image,
    make_turbulence_image,
    noise,
    ridge,
    turbulence,
)
from pixpro.noise import kernels as noise_kernels
from pixpro.noise.kernels import PERM

IMAGE_MAKERS = [make_noise_image, make_fbm_image, make_ridge_image, make_turbulence_image]


@pytest.fixture
def sample_points():
    """Generate random lattice-space points."""
    rng = np.random.default_rng(42)
    return rng.uniform(-20.0, 20.0, size=(3, 2000))


class TestPermutation:
    """Test the hash table."""

    def test_table_is_doubled_permutation(self):
        """Test the table holds a permutation of 0..255 twice."""
        assert PERM.shape == (512,)
        np.testing.assert_array_equal(np.sort(PERM[:256]), np.arange(256))
        np.testing.assert_array_equal(PERM[:256], PERM[256:])


class TestNoise:
    """Test the base noise function."""

    def test_zero_at_lattice_points(self):
        """Test noise vanishes at every integer lattice point."""
        grid = np.arange(-5, 6, dtype=np.float64)
        x, y, z = np.meshgrid(grid, grid, grid, indexing="ij")

        np.testing.assert_array_equal(noise(x, y, z), 0.0)

    def test_range(self, sample_points):
        """Test values stay in [-1, 1]."""
        values = noise(*sample_points)

        assert values.min() >= -1.0
        assert values.max() <= 1.0

    def test_not_constant(self, sample_points):
        """Test the field actually varies between lattice points."""
        assert np.std(noise(*sample_points)) > 0.05

    def test_scalar_returns_float(self):
        """Test scalar input gives a Python float."""
        value = noise(0.3, 1.7, 2.2)

        assert isinstance(value, float)
        assert -1.0 <= value <= 1.0

    def test_broadcasting(self):
        """Test array inputs broadcast."""
        result = noise(np.linspace(0, 3, 4)[:, np.newaxis], np.linspace(0, 2, 5), 0.5)

        assert result.shape == (4, 5)
        assert result.dtype == np.float64

    def test_deterministic(self, sample_points):
        """Test identical inputs give bit-identical outputs."""
        np.testing.assert_array_equal(noise(*sample_points), noise(*sample_points))

    @pytest.mark.parametrize(
        "kernel",
        [
            noise_kernels.perlin_noise3,
            noise_kernels.fractal_noise3,
            noise_kernels.noise_points_numba,
            noise_kernels.noise_image_numba,
        ],
    )
    def test_kernels_compiled_without_fastmath(self, kernel):
        """Test noise kernels keep strict floating-point semantics."""
        assert not kernel.targetoptions.get("fastmath", False)

    def test_continuity(self, sample_points):
        """Test small steps give small changes (the field is Lipschitz)."""
        h = 1e-4
        x, y, z = sample_points
        for dx, dy, dz in ((h, 0, 0), (0, h, 0), (0, 0, h)):
            delta = np.abs(noise(x + dx, y + dy, z + dz) - noise(x, y, z))
            assert delta.max() <= 10.0 * h

    def test_wrap_tiles(self):
        """Test a power-of-two period repeats the field."""
        x = np.arange(0.0, 4.0, 0.125)
        y = np.full_like(x, 0.375)
        z = np.full_like(x, 1.625)

        base = noise(x, y, z, wrap=(4, 0, 0))
        shifted = noise(x + 4.0, y, z, wrap=(4, 0, 0))
        np.testing.assert_allclose(shifted, base, atol=1e-12)

    def test_natural_period(self):
        """Test the table repeats every 256 lattice cells without wrapping."""
        np.testing.assert_allclose(noise(0.3, 0.6, 0.9), noise(256.3, 0.6, 0.9), atol=1e-9)

    def test_non_power_of_two_wrap_warns(self, caplog):
        """Test non-power-of-two periods are accepted with a warning."""
        with caplog.at_level(logging.WARNING, logger="pixpro.noise.api"):
            noise(0.5, 0.5, 0.5, wrap=(6, 0, 0))

        assert "not a power of two" in caplog.text

    def test_invalid_wrap(self):
        """Test malformed wrap periods are rejected."""
        with pytest.raises(ValueError, match="3 periods"):
            noise(0.5, 0.5, 0.5, wrap=(4, 4))
        with pytest.raises(ValueError, match=">= 0"):
            noise(0.5, 0.5, 0.5, wrap=(-4, 0, 0))
        with pytest.raises(TypeError, match="integer"):
            noise(0.5, 0.5, 0.5, wrap=(4.0, 0, 0))


class TestFractals:
    """Test fbm, ridge and turbulence."""

    @pytest.mark.parametrize("gain", [0.3, 0.5, 0.8])
    @pytest.mark.parametrize("octaves", [1, 3, 6, 10])
    def test_fbm_bounded(self, sample_points, gain, octaves):
        """Test |fbm| never exceeds the sum of octave amplitudes."""
        values = fbm(*sample_points, gain=gain, octaves=octaves)
        bound = sum(gain**k for k in range(octaves))

        assert np.max(np.abs(values)) <= bound + 1e-12

    def test_single_octave_fbm_is_noise(self, sample_points):
        """Test one fbm octave equals the base noise."""
        np.testing.assert_allclose(
            fbm(*sample_points, octaves=1), noise(*sample_points), atol=1e-12
        )

    def test_single_octave_turbulence(self, sample_points):
        """Test one turbulence octave is |noise|."""
        np.testing.assert_allclose(
            turbulence(*sample_points, octaves=1), np.abs(noise(*sample_points)), atol=1e-12
        )

    def test_single_octave_ridge(self, sample_points):
        """Test one ridge octave is 0.5 * (offset - |noise|)^2."""
        n = noise(*sample_points)
        expected = 0.5 * (0.9 - np.abs(n)) ** 2

        np.testing.assert_allclose(
            ridge(*sample_points, offset=0.9, octaves=1), expected, rtol=1e-12, atol=1e-15
        )

    def test_turbulence_non_negative(self, sample_points):
        """Test turbulence is never negative."""
        assert turbulence(*sample_points).min() >= 0.0

    def test_ridge_non_negative_and_bounded(self, sample_points):
        """Test ridge with offset 1 stays in [0, sum of amplitudes]."""
        values = ridge(*sample_points, gain=0.5, offset=1.0, octaves=6)
        bound = sum(0.5 * 0.25**k for k in range(6))

        assert values.min() >= 0.0
        assert values.max() <= bound + 1e-12

    def test_more_octaves_add_detail(self, sample_points):
        """Test additional octaves change the result."""
        assert not np.array_equal(fbm(*sample_points, octaves=2), fbm(*sample_points, octaves=3))

    @pytest.mark.parametrize("gain", [0.3, 0.5, 0.9])
    @pytest.mark.parametrize("octaves", [1, 2, 5, 9])
    def test_extra_octave_bounded_by_its_amplitude(self, sample_points, gain, octaves):
        """Test one more octave changes fbm by at most gain ** octaves."""
        coarse = fbm(*sample_points, gain=gain, octaves=octaves)
        fine = fbm(*sample_points, gain=gain, octaves=octaves + 1)

        assert np.max(np.abs(fine - coarse)) <= gain**octaves + 1e-12

    def test_fbm_wrap_tiles(self):
        """Test the wrap period scales with octave frequency."""
        x = np.arange(0.0, 8.0, 0.25)
        y = np.full_like(x, 2.125)

        base = fbm(x, y, 0.5, octaves=4, wrap=(8, 8, 0))
        shifted = fbm(x + 8.0, y, 0.5, octaves=4, wrap=(8, 8, 0))
        np.testing.assert_allclose(shifted, base, atol=1e-9)

    def test_octave_validation(self):
        """Test octave count range and type checks."""
        with pytest.raises(ValueError, match="outside valid range"):
            fbm(0.5, 0.5, 0.5, octaves=0)
        with pytest.raises(ValueError, match="outside valid range"):
            ridge(0.5, 0.5, 0.5, octaves=100)
        with pytest.raises(TypeError, match="integer"):
            turbulence(0.5, 0.5, 0.5, octaves=2.5)


class TestNoiseConfig:
    """Test NoiseConfig validation."""

    def test_defaults(self):
        """Test default values."""
        config = NoiseConfig()

        assert config.scale == 1.0
        assert config.lacunarity == 2.0
        assert config.gain == 0.5
        assert config.offset == 1.0
        assert config.octaves == 6
        assert config.wrap is True
        assert config.cells == 8.0

    @pytest.mark.parametrize(
        "kwargs", [{"scale": 0.0}, {"lacunarity": -1.0}, {"gain": 0.0}, {"octaves": 0}]
    )
    def test_invalid_values(self, kwargs):
        """Test out-of-range parameters are rejected."""
        with pytest.raises(ValueError):
            NoiseConfig(**kwargs)

    def test_octaves_must_be_integer(self):
        """Test float octave counts are rejected."""
        with pytest.raises(TypeError):
            NoiseConfig(octaves=4.0)


class TestNoiseImages:
    """Test the noise image makers."""

    @pytest.mark.parametrize("maker", IMAGE_MAKERS)
    def test_shape_dtype_range(self, maker):
        """Test output layout and value range."""
        image = maker(48, 32)

        assert image.shape == (32, 48, 3)
        assert image.dtype == np.float32
        assert image.min() >= 0.0
        assert image.max() <= 1.0
        np.testing.assert_array_equal(image[..., 0], image[..., 1])
        np.testing.assert_array_equal(image[..., 0], image[..., 2])

    @pytest.mark.parametrize("maker", IMAGE_MAKERS)
    def test_deterministic(self, maker):
        """Test identical parameters reproduce identical images."""
        config = NoiseConfig(scale=2.0, octaves=4)
        np.testing.assert_array_equal(maker(40, 24, config), maker(40, 24, config))

    def test_noise_image_matches_point_api(self):
        """Test pixel (i, j) samples (i / W * cells, j / H * cells, 0.5)."""
        width, height = 32, 16
        image = make_noise_image(width, height)

        i = np.arange(width)[np.newaxis, :]
        j = np.arange(height)[:, np.newaxis]
        values = noise(i / width * 8.0, j / height * 8.0, 0.5, wrap=(8, 8, 0))

        np.testing.assert_allclose(image[..., 0], np.clip(0.5 + 0.5 * values, 0, 1), atol=1e-5)

    def test_fbm_image_matches_point_api(self):
        """Test the fbm image maps fbm values with 0.5 + 0.5 * v."""
        config = NoiseConfig(octaves=3, wrap=False)
        image = make_fbm_image(16, 16, config)

        i = np.arange(16)[np.newaxis, :]
        j = np.arange(16)[:, np.newaxis]
        values = fbm(i / 16 * 8.0, j / 16 * 8.0, 0.5, octaves=3)

        np.testing.assert_allclose(image[..., 0], np.clip(0.5 + 0.5 * values, 0, 1), atol=1e-5)

    def test_scale_changes_image(self):
        """Test the lattice scale matters."""
        a = make_fbm_image(32, 32, NoiseConfig(scale=1.0))
        b = make_fbm_image(32, 32, NoiseConfig(scale=2.0))
        assert not np.array_equal(a, b)

    def test_non_power_of_two_cells_warn(self, caplog):
        """Test wrapping a non-power-of-two lattice warns but still renders."""
        with caplog.at_level(logging.WARNING, logger="pixpro.noise.api"):
            image = make_noise_image(16, 16, NoiseConfig(scale=1.5))

        assert image.shape == (16, 16, 3)
        assert "power-of-two" in caplog.text

    def test_invalid_dimensions(self):
        """Test size validation."""
        with pytest.raises(ValueError, match="must be positive"):
            make_noise_image(0, 16)
        with pytest.raises(TypeError, match="must be an integer"):
            make_ridge_image(16, 8.0)

    def test_invalid_config(self):
        """Test config type check."""
        with pytest.raises(TypeError, match="NoiseConfig"):
            make_turbulence_image(8, 8, {"scale": 2.0})
