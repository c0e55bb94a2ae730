"""Tests for color conversion primitives."""

import numpy as np
import pytest

from pixpro.color import (
    byte_to_float,
    float_to_byte,
    gamma_to_linear,
    hsv_to_rgb,
    linear_to_gamma,
    luminance,
    luminance_to_rgba,
    rgb_to_hsv,
    rgb_to_rgba,
    rgb_to_xyz,
    rgba_to_alpha,
    rgba_to_blue,
    rgba_to_green,
    rgba_to_luminance,
    rgba_to_red,
    rgba_to_rgb,
    xyY_to_xyz,
    xyz_to_rgb,
    xyz_to_xyY,
)


@pytest.fixture
def sample_image():
    """Generate a small random RGB image in [0, 1]."""
    rng = np.random.default_rng(42)
    return rng.random((16, 24, 3))


@pytest.fixture
def sample_rgba():
    """Generate a small random RGBA image in [0, 1]."""
    rng = np.random.default_rng(7)
    return rng.random((8, 8, 4)).astype(np.float32)


class TestByteConversion:
    """Test 8-bit <-> real conversion."""

    def test_float_to_byte_scales_floors_and_clamps(self):
        """Test scale by 256, floor and clamp to [0, 255]."""
        values = np.array([0.0, 0.5, 0.999, 1.0, -0.1, 1.5])
        result = float_to_byte(values)

        assert result.dtype == np.uint8
        np.testing.assert_array_equal(result, [0, 128, 255, 255, 0, 255])

    def test_byte_to_float(self):
        """Test division by 255."""
        result = byte_to_float(np.array([0, 51, 255], dtype=np.uint8))

        assert result.dtype == np.float32
        np.testing.assert_allclose(result, [0.0, 0.2, 1.0], atol=1e-7)

    def test_round_trip_within_one_step(self):
        """Test byte_to_float(float_to_byte(x)) stays within 1/255 of x."""
        x = np.linspace(0.0, 1.0, 4097)
        result = byte_to_float(float_to_byte(x))

        assert np.max(np.abs(result - x)) <= 1.0 / 255.0

    def test_preserves_shape(self, sample_image):
        """Test image shape is preserved."""
        assert float_to_byte(sample_image).shape == sample_image.shape


class TestGamma:
    """Test gamma encoding and decoding."""

    def test_round_trip(self, sample_image):
        """Test decode then encode returns the input."""
        result = linear_to_gamma(gamma_to_linear(sample_image))
        np.testing.assert_allclose(result, sample_image, atol=1e-10)

    def test_known_value(self):
        """Test the power law with the default exponent."""
        result = gamma_to_linear(np.array([0.5, 0.5, 0.5]))
        np.testing.assert_allclose(result, [0.5**2.2] * 3)

    def test_custom_gamma(self):
        """Test a custom exponent."""
        result = linear_to_gamma(np.array([0.25, 0.25, 0.25]), gamma=2.0)
        np.testing.assert_allclose(result, [0.5, 0.5, 0.5])

    def test_alpha_untouched(self, sample_rgba):
        """Test the fourth component passes through."""
        result = gamma_to_linear(sample_rgba)

        np.testing.assert_array_equal(result[..., 3], sample_rgba[..., 3])
        assert result.dtype == np.float32

    def test_negative_values_clamped(self):
        """Test negative components are treated as zero."""
        result = linear_to_gamma(np.array([-1.0, 0.0, 1.0]))
        np.testing.assert_allclose(result, [0.0, 0.0, 1.0])

    def test_input_not_modified(self, sample_image):
        """Test conversions allocate fresh outputs."""
        original = sample_image.copy()
        linear_to_gamma(sample_image)
        np.testing.assert_array_equal(sample_image, original)

    def test_invalid_gamma(self, sample_image):
        """Test non-positive and non-numeric gamma are rejected."""
        with pytest.raises(ValueError, match="must be positive"):
            gamma_to_linear(sample_image, gamma=0.0)
        with pytest.raises(TypeError, match="must be a number"):
            linear_to_gamma(sample_image, gamma="2.2")


class TestLuminance:
    """Test approximate luminance."""

    def test_single_color(self):
        """Test the unweighted channel mean."""
        assert luminance((0.2, 0.4, 0.6)) == pytest.approx(0.4)

    def test_image(self, sample_image):
        """Test image luminance drops the channel axis."""
        result = luminance(sample_image)

        assert result.shape == sample_image.shape[:2]
        np.testing.assert_allclose(result, sample_image.mean(axis=-1))

    def test_ignores_alpha(self):
        """Test alpha does not contribute."""
        assert luminance((0.3, 0.3, 0.3, 0.0)) == pytest.approx(0.3)


class TestXYZ:
    """Test CIE XYZ and xyY conversions."""

    def test_white_has_unit_luminance(self):
        """Test linear white maps to Y = 1."""
        xyz = rgb_to_xyz(np.array([1.0, 1.0, 1.0]))
        assert xyz[1] == pytest.approx(1.0, abs=1e-4)

    def test_rgb_xyz_round_trip(self, sample_image):
        """Test the matrices are exact inverses."""
        result = xyz_to_rgb(rgb_to_xyz(sample_image))
        np.testing.assert_allclose(result, sample_image, atol=1e-12)

    def test_xyY_round_trip(self, sample_image):
        """Test XYZ -> xyY -> XYZ."""
        xyz = rgb_to_xyz(sample_image)
        result = xyY_to_xyz(xyz_to_xyY(xyz))
        np.testing.assert_allclose(result, xyz, atol=1e-12)

    def test_black_xyY(self):
        """Test black maps to zero chromaticity."""
        np.testing.assert_array_equal(xyz_to_xyY(np.zeros((2, 3))), np.zeros((2, 3)))
        np.testing.assert_array_equal(xyY_to_xyz(np.zeros((2, 3))), np.zeros((2, 3)))

    def test_alpha_preserved(self, sample_rgba):
        """Test rgb_to_xyz keeps alpha."""
        result = rgb_to_xyz(sample_rgba)
        np.testing.assert_array_equal(result[..., 3], sample_rgba[..., 3])

    def test_wrong_component_count(self):
        """Test arrays without 3 or 4 components are rejected."""
        with pytest.raises(ValueError, match="components"):
            rgb_to_xyz(np.zeros((4, 2)))
        with pytest.raises(ValueError, match="components"):
            xyz_to_xyY(np.zeros((4, 4)))


class TestHSV:
    """Test HSV conversions."""

    @pytest.mark.parametrize(
        "rgb,hsv",
        [
            ((1.0, 0.0, 0.0), (0.0, 1.0, 1.0)),
            ((0.0, 1.0, 0.0), (1.0 / 3.0, 1.0, 1.0)),
            ((0.0, 0.0, 1.0), (2.0 / 3.0, 1.0, 1.0)),
            ((0.5, 0.5, 0.5), (0.0, 0.0, 0.5)),
        ],
    )
    def test_primaries(self, rgb, hsv):
        """Test known RGB/HSV pairs in both directions."""
        np.testing.assert_allclose(rgb_to_hsv(np.array(rgb)), hsv, atol=1e-6)
        np.testing.assert_allclose(hsv_to_rgb(np.array(hsv)), rgb, atol=1e-6)

    def test_round_trip(self, sample_image):
        """Test RGB -> HSV -> RGB."""
        result = hsv_to_rgb(rgb_to_hsv(sample_image))
        np.testing.assert_allclose(result, sample_image, atol=1e-6)

    def test_alpha_preserved(self, sample_rgba):
        """Test hsv conversion keeps alpha."""
        result = rgb_to_hsv(sample_rgba)

        assert result.shape == sample_rgba.shape
        np.testing.assert_array_equal(result[..., 3], sample_rgba[..., 3])


class TestChannels:
    """Test channel-count conversions."""

    def test_rgb_to_rgba(self, sample_image):
        """Test alpha is appended."""
        result = rgb_to_rgba(sample_image, alpha=0.5)

        assert result.shape == (16, 24, 4)
        np.testing.assert_array_equal(result[..., :3], sample_image)
        assert np.all(result[..., 3] == 0.5)

    def test_rgba_to_rgb(self, sample_rgba):
        """Test alpha is dropped."""
        np.testing.assert_array_equal(rgba_to_rgb(sample_rgba), sample_rgba[..., :3])

    def test_single_channels(self, sample_rgba):
        """Test channel extraction."""
        np.testing.assert_array_equal(rgba_to_red(sample_rgba), sample_rgba[..., 0])
        np.testing.assert_array_equal(rgba_to_green(sample_rgba), sample_rgba[..., 1])
        np.testing.assert_array_equal(rgba_to_blue(sample_rgba), sample_rgba[..., 2])
        np.testing.assert_array_equal(rgba_to_alpha(sample_rgba), sample_rgba[..., 3])

    def test_luminance_round_trip(self, sample_rgba):
        """Test luminance extraction and expansion to gray RGBA."""
        lum = rgba_to_luminance(sample_rgba)
        gray = luminance_to_rgba(lum)

        assert gray.shape == sample_rgba.shape
        np.testing.assert_allclose(gray[..., 0], lum)
        np.testing.assert_allclose(gray[..., 2], lum)
        assert np.all(gray[..., 3] == 1.0)

    def test_rgba_required(self, sample_image):
        """Test RGBA-only conversions reject RGB input."""
        with pytest.raises(ValueError):
            rgba_to_rgb(sample_image)
