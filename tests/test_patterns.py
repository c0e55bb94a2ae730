"""Tests for the test pattern generators and normal map conversion."""

import numpy as np
import pytest

from pixpro.patterns import (
    bump_to_normal_map,
    make_bumpdimple_image,
    make_checker_image,
    make_gammaramp_image,
    make_grid_image,
    make_ramp_image,
    make_uv_image,
    make_uvgrid_image,
)

C0 = np.float32([0.5, 0.5, 0.5])
C1 = np.float32([0.8, 0.8, 0.8])

GENERATORS = [
    make_grid_image,
    make_checker_image,
    make_bumpdimple_image,
    make_ramp_image,
    make_gammaramp_image,
    make_uv_image,
    make_uvgrid_image,
]


class TestCommon:
    """Behavior shared by every generator."""

    @pytest.mark.parametrize("maker", GENERATORS)
    def test_shape_and_dtype(self, maker):
        """Test (height, width, 3) float32 output."""
        image = maker(40, 24)

        assert image.shape == (24, 40, 3)
        assert image.dtype == np.float32

    @pytest.mark.parametrize("maker", GENERATORS)
    def test_invalid_dimensions(self, maker):
        """Test non-positive sizes are rejected."""
        with pytest.raises(ValueError, match="must be positive"):
            maker(0, 8)
        with pytest.raises(ValueError, match="must be positive"):
            maker(8, -1)

    @pytest.mark.parametrize("maker", [make_grid_image, make_checker_image, make_uvgrid_image])
    def test_invalid_tile(self, maker):
        """Test tile size validation."""
        with pytest.raises(ValueError, match="tile"):
            maker(16, 16, tile=0)
        with pytest.raises(TypeError, match="tile"):
            maker(16, 16, tile=2.0)

    def test_one_pixel(self):
        """Test the smallest possible image."""
        for maker in GENERATORS:
            assert maker(1, 1).shape == (1, 1, 3)


class TestGridAndChecker:
    """Test make_grid_image and make_checker_image."""

    def test_grid_lines(self):
        """Test cell borders get c0 and cell interiors c1."""
        image = make_grid_image(64, 64, tile=8)

        np.testing.assert_array_equal(image[0, 0], C0)
        np.testing.assert_array_equal(image[3, 7], C0)
        np.testing.assert_array_equal(image[8, 3], C0)
        np.testing.assert_array_equal(image[3, 3], C1)
        np.testing.assert_array_equal(image[12, 12], C1)

    def test_grid_custom_colors(self):
        """Test custom colors."""
        image = make_grid_image(16, 16, tile=4, c0=(1.0, 0.0, 0.0), c1=(0.0, 0.0, 1.0))

        np.testing.assert_array_equal(image[0, 0], [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(image[1, 1], [0.0, 0.0, 1.0])

    def test_checker(self):
        """Test alternating squares with c0 at the origin."""
        image = make_checker_image(32, 32, tile=8)

        np.testing.assert_array_equal(image[0, 0], C0)
        np.testing.assert_array_equal(image[7, 7], C0)
        np.testing.assert_array_equal(image[0, 8], C1)
        np.testing.assert_array_equal(image[8, 0], C1)
        np.testing.assert_array_equal(image[8, 8], C0)

    def test_checker_balanced(self):
        """Test a whole number of tiles splits the colors evenly."""
        image = make_checker_image(32, 32, tile=4)
        assert np.sum(image[..., 0] == C0[0]) == 32 * 32 // 2

    def test_bad_color(self):
        """Test colors need three components."""
        with pytest.raises(ValueError, match="3 components"):
            make_checker_image(8, 8, c0=(0.5, 0.5))


class TestBumpDimple:
    """Test make_bumpdimple_image."""

    def test_bump_and_dimple_centers(self):
        """Test even tiles peak at 1 and odd tiles dip to 0 at their centers."""
        image = make_bumpdimple_image(32, 32, tile=8)

        np.testing.assert_allclose(image[4, 4], 1.0)
        np.testing.assert_allclose(image[4, 12], 0.0)
        np.testing.assert_allclose(image[12, 4], 0.0)

    def test_base_level(self):
        """Test tile corners sit at the base level."""
        image = make_bumpdimple_image(32, 32, tile=8)
        np.testing.assert_allclose(image[0, 0], 0.5)

    def test_range_and_gray(self):
        """Test heights stay in [0, 1] and all channels agree."""
        image = make_bumpdimple_image(48, 40, tile=6)

        assert image.min() >= 0.0
        assert image.max() <= 1.0
        np.testing.assert_array_equal(image[..., 0], image[..., 2])


class TestRamps:
    """Test make_ramp_image and make_gammaramp_image."""

    def test_ramp_endpoints(self):
        """Test the first column is c0 and the last c1."""
        image = make_ramp_image(11, 4, c0=(0.0, 0.2, 1.0), c1=(1.0, 0.2, 0.0))

        np.testing.assert_allclose(image[:, 0], np.tile([0.0, 0.2, 1.0], (4, 1)), atol=1e-7)
        np.testing.assert_allclose(image[:, -1], np.tile([1.0, 0.2, 0.0], (4, 1)), atol=1e-7)
        np.testing.assert_allclose(image[2, 5], [0.5, 0.2, 0.5], atol=1e-7)

    def test_ramp_srgb(self):
        """Test the srgb ramp decodes the display-space midpoint."""
        image = make_ramp_image(11, 2, srgb=True)

        np.testing.assert_allclose(image[0, 5], [0.5**2.2] * 3, rtol=1e-6)
        np.testing.assert_allclose(image[0, -1], [1.0, 1.0, 1.0], rtol=1e-6)

    def test_ramp_monotonic(self):
        """Test the default ramp increases left to right."""
        image = make_ramp_image(32, 1)
        assert np.all(np.diff(image[0, :, 0]) > 0)

    def test_gammaramp_bands(self):
        """Test the three bands hold u ** 2.2, u and u ** (1 / 2.2)."""
        image = make_gammaramp_image(9, 11)
        u = 0.5  # Row 5 of 11

        np.testing.assert_allclose(image[5, 0], [u**2.2] * 3, rtol=1e-6)
        np.testing.assert_allclose(image[5, 4], [u] * 3, rtol=1e-6)
        np.testing.assert_allclose(image[5, 8], [u ** (1 / 2.2)] * 3, rtol=1e-6)

    def test_gammaramp_ends(self):
        """Test all bands run from 0 at the top to 1 at the bottom."""
        image = make_gammaramp_image(9, 11)

        np.testing.assert_allclose(image[0], 0.0)
        np.testing.assert_allclose(image[-1], 1.0)


class TestUV:
    """Test make_uv_image and make_uvgrid_image."""

    def test_uv_values(self):
        """Test pixel (i, j) holds (i / width, j / height, 0)."""
        image = make_uv_image(8, 4)

        np.testing.assert_allclose(image[0, 0], [0.0, 0.0, 0.0])
        np.testing.assert_allclose(image[3, 2], [0.25, 0.75, 0.0])
        np.testing.assert_allclose(image[1, 7], [0.875, 0.25, 0.0])

    def test_uvgrid_range(self):
        """Test colors stay in [0, 1]."""
        image = make_uvgrid_image(64, 64)

        assert image.min() >= 0.0
        assert image.max() <= 1.0

    def test_uvgrid_gray(self):
        """Test colored=False gives a gray grid with alternating cell brightness."""
        image = make_uvgrid_image(64, 64, tile=8, colored=False)

        np.testing.assert_allclose(image[..., 0], image[..., 1], atol=1e-6)
        np.testing.assert_allclose(image[..., 0], image[..., 2], atol=1e-6)
        np.testing.assert_allclose(image[1, 1], [0.8, 0.8, 0.8], atol=1e-6)
        np.testing.assert_allclose(image[1, 9], [0.6, 0.6, 0.6], atol=1e-6)
        np.testing.assert_allclose(image[0, 1], [0.4, 0.4, 0.4], atol=1e-6)

    def test_uvgrid_cells_differ(self):
        """Test neighboring cells get distinct hues."""
        image = make_uvgrid_image(64, 64, tile=8)
        assert not np.allclose(image[1, 1], image[1, 17])


class TestNormalMap:
    """Test bump_to_normal_map."""

    def test_flat_height_points_up(self):
        """Test a constant height field encodes the normal (0, 0, 1)."""
        normal = bump_to_normal_map(np.full((8, 8, 3), 0.5, dtype=np.float32))

        assert normal.shape == (8, 8, 3)
        assert normal.dtype == np.float32
        np.testing.assert_allclose(normal, np.tile([0.5, 0.5, 1.0], (8, 8, 1)), atol=1e-6)

    def test_unit_length(self):
        """Test decoded normals have unit length."""
        heights = make_bumpdimple_image(32, 32, tile=8)
        decoded = bump_to_normal_map(heights, scale=0.05) * 2.0 - 1.0

        np.testing.assert_allclose(np.linalg.norm(decoded, axis=-1), 1.0, atol=1e-5)

    def test_slope_direction(self):
        """Test a height rising to the right tilts the normal toward -x."""
        heights = np.tile(np.linspace(0.0, 0.1, 16), (4, 1))
        normal = bump_to_normal_map(heights)

        assert np.all(normal[:, :-1, 0] < 0.5)
        np.testing.assert_allclose(normal[:, :-1, 1], 0.5, atol=1e-6)

    def test_scale_steepens(self):
        """Test a larger scale tilts normals further."""
        heights = np.tile(np.linspace(0.0, 0.1, 16), (4, 1))
        gentle = bump_to_normal_map(heights, scale=0.1)
        steep = bump_to_normal_map(heights, scale=1.0)

        assert steep[0, 0, 0] < gentle[0, 0, 0]

    def test_invalid_scale(self):
        """Test the scale must be positive."""
        with pytest.raises(ValueError, match="must be positive"):
            bump_to_normal_map(np.zeros((4, 4)), scale=0.0)

    def test_input_not_modified(self):
        """Test the height field is left untouched."""
        heights = make_bumpdimple_image(16, 16, tile=4)
        original = heights.copy()
        bump_to_normal_map(heights)

        np.testing.assert_array_equal(heights, original)
