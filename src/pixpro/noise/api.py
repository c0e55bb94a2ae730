"""
Gradient noise API.

Point evaluation of the base noise and its fractal sums (fbm, ridge,
turbulence), plus grayscale image makers built on the same kernels.
Scalars in give a float out; array-likes broadcast and give a float64
array of the broadcast shape.
"""

import logging
import numbers

import numpy as np

from pixpro.constants import (
    DEFAULT_GAIN,
    DEFAULT_LACUNARITY,
    DEFAULT_OCTAVES,
    DEFAULT_RIDGE_OFFSET,
    OCTAVES_MAX,
    OCTAVES_MIN,
)
from pixpro.noise.config import NoiseConfig
from pixpro.noise.kernels import (
    MODE_FBM,
    MODE_NOISE,
    MODE_RIDGE,
    MODE_TURBULENCE,
    noise_image_numba,
    noise_points_numba,
)
from pixpro.validators import validate_dimensions, validate_range

logger = logging.getLogger(__name__)

_MODE_NAMES = {
    MODE_NOISE: "noise",
    MODE_FBM: "fbm",
    MODE_RIDGE: "ridge",
    MODE_TURBULENCE: "turbulence",
}


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def _parse_wrap(wrap) -> np.ndarray:
    """Validate a per-axis wrap period triple and return it as int64 [3]."""
    if len(wrap) != 3:
        raise ValueError(f"wrap must have 3 periods (x, y, z), got {len(wrap)}")

    periods = []
    for axis, period in zip("xyz", wrap):
        if isinstance(period, bool) or not isinstance(period, numbers.Integral):
            raise TypeError(f"wrap period for {axis} must be an integer, got {type(period).__name__}")
        if period < 0:
            raise ValueError(f"wrap period for {axis} must be >= 0 (0 = no wrap), got {period}")
        if period > 0 and not _is_power_of_two(int(period)):
            logger.warning(
                "[Noise] wrap period %d on %s is not a power of two; the lattice will not tile",
                period,
                axis,
            )
        periods.append(int(period))
    return np.array(periods, dtype=np.int64)


def _check_octaves(octaves) -> int:
    if isinstance(octaves, bool) or not isinstance(octaves, numbers.Integral):
        raise TypeError(f"octaves must be an integer, got {type(octaves).__name__}")
    return int(octaves)


def _evaluate(x, y, z, wrap, mode, lacunarity, gain, offset, octaves):
    """Broadcast the coordinates, run the point kernel and restore the shape."""
    periods = _parse_wrap(wrap)
    xs, ys, zs = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    shape = xs.shape
    points = np.ascontiguousarray(np.stack([xs.ravel(), ys.ravel(), zs.ravel()], axis=-1))

    out = np.empty(points.shape[0], dtype=np.float64)
    noise_points_numba(
        points, periods, mode, float(lacunarity), float(gain), float(offset), octaves, out
    )

    if len(shape) == 0:
        return float(out[0])
    return out.reshape(shape)


# ============================================================================
# Point Evaluation
# ============================================================================


def noise(x, y, z, wrap: tuple[int, int, int] = (0, 0, 0)):
    """
    Improved gradient noise at (x, y, z).

    Values lie in [-1, 1] and are exactly 0 at integer lattice points. The
    field is C2 continuous and fully deterministic.

    Args:
        x, y, z: Lattice-space coordinates (scalars or broadcastable arrays)
        wrap: Per-axis lattice period, 0 for none. Periods fold lattice
            coordinates with a bit mask, so only powers of two tile.

    Returns:
        float for scalar input, float64 array of the broadcast shape otherwise

    Example:
        >>> noise(1.0, 2.0, 3.0) == 0.0
        True
        >>> values = noise(np.linspace(0, 4, 100), 0.5, 0.5)
    """
    return _evaluate(x, y, z, wrap, MODE_NOISE, 1.0, 1.0, 0.0, 1)


@validate_range(OCTAVES_MIN, OCTAVES_MAX, "octaves", param_index=5)
def fbm(
    x,
    y,
    z,
    lacunarity: float = DEFAULT_LACUNARITY,
    gain: float = DEFAULT_GAIN,
    octaves: int = DEFAULT_OCTAVES,
    wrap: tuple[int, int, int] = (0, 0, 0),
):
    """
    Fractal Brownian motion: sum of octaves with amplitude *= gain and
    frequency *= lacunarity per octave.

    The magnitude is bounded by sum(gain ** k for k in range(octaves)).
    """
    octaves = _check_octaves(octaves)
    return _evaluate(x, y, z, wrap, MODE_FBM, lacunarity, gain, 0.0, octaves)


@validate_range(OCTAVES_MIN, OCTAVES_MAX, "octaves", param_index=6)
def ridge(
    x,
    y,
    z,
    lacunarity: float = DEFAULT_LACUNARITY,
    gain: float = DEFAULT_GAIN,
    offset: float = DEFAULT_RIDGE_OFFSET,
    octaves: int = DEFAULT_OCTAVES,
    wrap: tuple[int, int, int] = (0, 0, 0),
):
    """
    Ridged multifractal: each octave is (offset - |n|)^2, weighted by the
    previous octave's value; amplitude *= gain^2 per octave.
    """
    octaves = _check_octaves(octaves)
    return _evaluate(x, y, z, wrap, MODE_RIDGE, lacunarity, gain, offset, octaves)


@validate_range(OCTAVES_MIN, OCTAVES_MAX, "octaves", param_index=5)
def turbulence(
    x,
    y,
    z,
    lacunarity: float = DEFAULT_LACUNARITY,
    gain: float = DEFAULT_GAIN,
    octaves: int = DEFAULT_OCTAVES,
    wrap: tuple[int, int, int] = (0, 0, 0),
):
    """Turbulence: fbm of |n|, always non-negative."""
    octaves = _check_octaves(octaves)
    return _evaluate(x, y, z, wrap, MODE_TURBULENCE, lacunarity, gain, 0.0, octaves)


# ============================================================================
# Image Makers
# ============================================================================


def _image_wrap(config: NoiseConfig) -> np.ndarray:
    if not config.wrap:
        return np.zeros(3, dtype=np.int64)

    cells = config.cells
    period = int(cells)
    if period != cells or not _is_power_of_two(period):
        logger.warning(
            "[Noise] wrap requested with %.3f lattice cells; only a power-of-two cell count tiles",
            cells,
        )
    return np.array([max(period, 1), max(period, 1), 0], dtype=np.int64)


def _make_image(width: int, height: int, config: NoiseConfig | None, mode: int) -> np.ndarray:
    config = NoiseConfig() if config is None else config
    if not isinstance(config, NoiseConfig):
        raise TypeError(f"config must be a NoiseConfig, got {type(config).__name__}")

    wrap = _image_wrap(config)
    out = np.empty((height, width, 3), dtype=np.float32)
    noise_image_numba(
        float(config.cells),
        wrap,
        mode,
        float(config.lacunarity),
        float(config.gain),
        float(config.offset),
        int(config.octaves),
        out,
    )

    logger.info(
        "[Noise] Rendered %s image %dx%d (cells=%.2f, octaves=%d, wrap=%s)",
        _MODE_NAMES[mode],
        width,
        height,
        config.cells,
        config.octaves,
        config.wrap,
    )
    return out


@validate_dimensions()
def make_noise_image(width: int, height: int, config: NoiseConfig | None = None) -> np.ndarray:
    """
    Grayscale image of the base noise mapped to [0, 1] with 0.5 + 0.5 * n.

    Args:
        width: Image width in pixels (> 0)
        height: Image height in pixels (> 0)
        config: Noise parameters (default NoiseConfig())

    Returns:
        float32 array [height, width, 3]
    """
    return _make_image(width, height, config, MODE_NOISE)


@validate_dimensions()
def make_fbm_image(width: int, height: int, config: NoiseConfig | None = None) -> np.ndarray:
    """Grayscale fbm image mapped to [0, 1] with 0.5 + 0.5 * v and clamped."""
    return _make_image(width, height, config, MODE_FBM)


@validate_dimensions()
def make_ridge_image(width: int, height: int, config: NoiseConfig | None = None) -> np.ndarray:
    """Grayscale ridge image clamped to [0, 1]."""
    return _make_image(width, height, config, MODE_RIDGE)


@validate_dimensions()
def make_turbulence_image(
    width: int, height: int, config: NoiseConfig | None = None
) -> np.ndarray:
    """Grayscale turbulence image clamped to [0, 1]."""
    return _make_image(width, height, config, MODE_TURBULENCE)
