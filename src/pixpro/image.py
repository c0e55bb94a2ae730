"""
Image buffer helpers.

Images are numpy arrays of shape (height, width, channels), row-major.
Grayscale images may also be given as (height, width). Every pixpro
operation returns a freshly allocated buffer and never writes to its inputs.
"""

import logging

import numpy as np

from pixpro.constants import VALID_CHANNEL_COUNTS
from pixpro.validators import validate_dimensions

logger = logging.getLogger(__name__)


def as_image(
    image: np.ndarray,
    channels: set[int] | None = None,
    name: str = "image",
) -> np.ndarray:
    """
    Validate an image buffer and return it as a 3-D (height, width, channels) view.

    Args:
        image: Array of shape (height, width) or (height, width, channels)
        channels: Allowed channel counts (default: 1 to 4)
        name: Argument name used in error messages

    Returns:
        3-D view of the input (no copy for arrays that are already 3-D)

    Raises:
        ValueError: If the array is not 2-D/3-D, has a zero dimension, or an
            unsupported channel count
    """
    image = np.asarray(image)
    if image.ndim == 2:
        image = image[:, :, np.newaxis]
    elif image.ndim != 3:
        raise ValueError(
            f"{name} must have shape (height, width) or (height, width, channels), "
            f"got shape {image.shape}"
        )

    height, width, count = image.shape
    if height <= 0 or width <= 0:
        raise ValueError(f"{name} has invalid size {width}x{height}. Images need at least one pixel.")

    allowed = VALID_CHANNEL_COUNTS if channels is None else channels
    if count not in allowed:
        allowed_str = ", ".join(str(c) for c in sorted(allowed))
        raise ValueError(f"{name} has {count} channels, expected one of: {allowed_str}")

    return image


def image_size(image: np.ndarray) -> tuple[int, int]:
    """Return (width, height) of an image buffer."""
    image = as_image(image)
    return image.shape[1], image.shape[0]


@validate_dimensions()
def make_image(
    width: int,
    height: int,
    channels: int = 4,
    fill: float | tuple[float, ...] = 0.0,
    dtype: np.dtype = np.float32,
) -> np.ndarray:
    """
    Allocate a new image filled with a constant color.

    Args:
        width: Image width in pixels (> 0)
        height: Image height in pixels (> 0)
        channels: Number of channels (1 to 4)
        fill: Scalar or per-channel fill value
        dtype: Element type (float32 for real images, uint8 for 8-bit images)

    Returns:
        Array of shape (height, width, channels)

    Example:
        >>> img = make_image(64, 32, channels=3, fill=(0.2, 0.4, 0.6))
        >>> img.shape
        (32, 64, 3)
    """
    if channels not in VALID_CHANNEL_COUNTS:
        raise ValueError(f"channels={channels} is not valid. Use 1, 2, 3 or 4.")

    fill = np.asarray(fill, dtype=np.float64)
    if fill.ndim > 0 and fill.shape != (channels,):
        raise ValueError(f"fill must be a scalar or have {channels} components, got {fill.shape}")

    image = np.empty((height, width, channels), dtype=dtype)
    image[...] = fill
    logger.debug("[Image] Allocated %dx%dx%d %s", width, height, channels, np.dtype(dtype).name)
    return image
