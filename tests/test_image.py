"""Tests for image buffer helpers."""

import numpy as np
import pytest

from pixpro.image import as_image, image_size, make_image


class TestAsImage:
    """Test as_image validation."""

    def test_grayscale_gets_channel_axis(self):
        """Test 2-D input becomes (height, width, 1)."""
        image = as_image(np.zeros((4, 6)))
        assert image.shape == (4, 6, 1)

    def test_view_not_copy(self):
        """Test 3-D arrays pass through without copying."""
        source = np.zeros((4, 6, 3), dtype=np.float32)
        assert np.shares_memory(as_image(source), source)

    @pytest.mark.parametrize("shape", [(4,), (2, 3, 4, 5)])
    def test_bad_rank(self, shape):
        """Test arrays that are not 2-D or 3-D are rejected."""
        with pytest.raises(ValueError, match="must have shape"):
            as_image(np.zeros(shape))

    def test_empty(self):
        """Test zero-sized images are rejected."""
        with pytest.raises(ValueError, match="invalid size"):
            as_image(np.zeros((0, 4, 3)))

    def test_channel_count(self):
        """Test unsupported channel counts are rejected."""
        with pytest.raises(ValueError, match="5 channels"):
            as_image(np.zeros((2, 2, 5)))
        with pytest.raises(ValueError, match="expected one of: 3, 4"):
            as_image(np.zeros((2, 2, 1)), channels={3, 4})


class TestImageSize:
    """Test image_size."""

    def test_width_height_order(self):
        """Test the size is reported as (width, height)."""
        assert image_size(np.zeros((3, 7, 4))) == (7, 3)
        assert image_size(np.zeros((5, 2))) == (2, 5)


class TestMakeImage:
    """Test make_image."""

    def test_defaults(self):
        """Test a zero-filled float32 RGBA image."""
        image = make_image(8, 4)

        assert image.shape == (4, 8, 4)
        assert image.dtype == np.float32
        assert np.all(image == 0.0)

    def test_fill_color(self):
        """Test per-channel fill."""
        image = make_image(3, 2, channels=3, fill=(0.25, 0.5, 1.0))
        np.testing.assert_array_equal(image, np.tile([0.25, 0.5, 1.0], (2, 3, 1)))

    def test_byte_image(self):
        """Test uint8 allocation."""
        image = make_image(2, 2, channels=1, fill=255, dtype=np.uint8)

        assert image.dtype == np.uint8
        assert np.all(image == 255)

    def test_invalid(self):
        """Test size, channel and fill validation."""
        with pytest.raises(ValueError, match="must be positive"):
            make_image(0, 4)
        with pytest.raises(TypeError, match="must be an integer"):
            make_image(4.5, 4)
        with pytest.raises(ValueError, match="channels"):
            make_image(4, 4, channels=5)
        with pytest.raises(ValueError, match="fill"):
            make_image(4, 4, channels=3, fill=(1.0, 1.0))
