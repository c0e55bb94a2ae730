"""
Test pattern generators.

Simple reference images for checking samplers, texture coordinates and
display encoding. Every generator returns a new (height, width, 3) float32
array and validates its size before allocating.
"""

import logging
import numbers

import numpy as np

from pixpro.color.conversions import gamma_to_linear, hsv_to_rgb, luminance
from pixpro.constants import DEFAULT_GAMMA, DEFAULT_PATTERN_C0, DEFAULT_PATTERN_C1, DEFAULT_TILE
from pixpro.image import as_image
from pixpro.validators import validate_dimensions, validate_positive

logger = logging.getLogger(__name__)


def _check_tile(tile) -> int:
    if isinstance(tile, bool) or not isinstance(tile, numbers.Integral):
        raise TypeError(f"tile must be an integer, got {type(tile).__name__}")
    if tile <= 0:
        raise ValueError(f"tile={tile} must be positive (> 0)")
    return int(tile)


def _color(name: str, color) -> np.ndarray:
    color = np.asarray(color, dtype=np.float32)
    if color.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {color.shape}")
    return color


def _pixel_grid(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Column and row index arrays broadcastable to (height, width)."""
    return np.arange(width)[np.newaxis, :], np.arange(height)[:, np.newaxis]


def _select(mask: np.ndarray, c0: np.ndarray, c1: np.ndarray) -> np.ndarray:
    return np.where(mask[..., np.newaxis], c0, c1).astype(np.float32)


@validate_dimensions()
def make_grid_image(
    width: int,
    height: int,
    tile: int = DEFAULT_TILE,
    c0: tuple[float, float, float] = DEFAULT_PATTERN_C0,
    c1: tuple[float, float, float] = DEFAULT_PATTERN_C1,
) -> np.ndarray:
    """
    Grid of tile x tile cells: border pixels of each cell get c0, the rest c1.

    Example:
        >>> img = make_grid_image(64, 64, tile=8)
        >>> img[0, 0], img[3, 3]
        (array([0.5, 0.5, 0.5], dtype=float32), array([0.8, 0.8, 0.8], dtype=float32))
    """
    tile = _check_tile(tile)
    i, j = _pixel_grid(width, height)
    ii, jj = i % tile, j % tile
    lines = (ii == 0) | (ii == tile - 1) | (jj == 0) | (jj == tile - 1)
    return _select(lines, _color("c0", c0), _color("c1", c1))


@validate_dimensions()
def make_checker_image(
    width: int,
    height: int,
    tile: int = DEFAULT_TILE,
    c0: tuple[float, float, float] = DEFAULT_PATTERN_C0,
    c1: tuple[float, float, float] = DEFAULT_PATTERN_C1,
) -> np.ndarray:
    """Checkerboard of tile x tile squares, c0 on the square at the origin."""
    tile = _check_tile(tile)
    i, j = _pixel_grid(width, height)
    even = (i // tile + j // tile) % 2 == 0
    return _select(even, _color("c0", c0), _color("c1", c1))


@validate_dimensions()
def make_bumpdimple_image(width: int, height: int, tile: int = DEFAULT_TILE) -> np.ndarray:
    """
    Height field of alternating bumps and dimples, one per tile.

    The base level is 0.5; within half a tile radius of a tile center the
    height rises (even tiles) or falls (odd tiles) linearly toward the center.
    """
    tile = _check_tile(tile)
    i, j = _pixel_grid(width, height)
    bump = (i // tile + j // tile) % 2 == 0
    di = i % tile - tile // 2
    dj = j % tile - tile // 2
    r = np.sqrt((di * di + dj * dj).astype(np.float64)) / max(tile / 2, 1e-6)

    dome = np.clip(0.5 - r, 0.0, None)
    h = 0.5 + np.where(bump, dome, -dome)
    return np.repeat(h[..., np.newaxis], 3, axis=-1).astype(np.float32)


@validate_dimensions()
def make_ramp_image(
    width: int,
    height: int,
    c0: tuple[float, float, float] = (0.0, 0.0, 0.0),
    c1: tuple[float, float, float] = (1.0, 1.0, 1.0),
    srgb: bool = False,
) -> np.ndarray:
    """
    Horizontal ramp from c0 (left column) to c1 (right column).

    With srgb=True the ramp is interpolated in display space and decoded to
    linear, so it looks even on screen.
    """
    u = np.arange(width, dtype=np.float64) / max(width - 1, 1)
    c0 = _color("c0", c0).astype(np.float64)
    c1 = _color("c1", c1).astype(np.float64)
    row = c0 + u[:, np.newaxis] * (c1 - c0)
    if srgb:
        row = gamma_to_linear(row)
    return np.broadcast_to(row, (height, width, 3)).astype(np.float32)


@validate_dimensions()
def make_gammaramp_image(width: int, height: int) -> np.ndarray:
    """
    Vertical ramps in three column bands: u ** 2.2, u and u ** (1 / 2.2).

    u runs from 0 at the top row to 1 at the bottom row.
    """
    u = np.arange(height, dtype=np.float64) / max(height - 1, 1)
    i = np.arange(width)
    band = np.where(i < width / 3, 0, np.where(i < 2 * width / 3, 1, 2))

    ramps = np.stack([u ** DEFAULT_GAMMA, u, u ** (1.0 / DEFAULT_GAMMA)], axis=-1)
    values = ramps[:, band]
    return np.repeat(values[..., np.newaxis], 3, axis=-1).astype(np.float32)


@validate_dimensions()
def make_uv_image(width: int, height: int) -> np.ndarray:
    """Texture coordinates as color: (i / width, j / height, 0)."""
    out = np.zeros((height, width, 3), dtype=np.float32)
    out[..., 0] = (np.arange(width, dtype=np.float32) / width)[np.newaxis, :]
    out[..., 1] = (np.arange(height, dtype=np.float32) / height)[:, np.newaxis]
    return out


@validate_dimensions()
def make_uvgrid_image(
    width: int, height: int, tile: int = DEFAULT_TILE, colored: bool = True
) -> np.ndarray:
    """
    UV test grid: tile x tile cells, each with its own hue, alternating
    brightness, and darker lines every half cell.

    Args:
        width: Image width in pixels (> 0)
        height: Image height in pixels (> 0)
        tile: Number of cells along each axis
        colored: Use a distinct hue per cell (False gives a gray grid)

    Returns:
        float32 array [height, width, 3]
    """
    tile = _check_tile(tile)
    cell_w = max(width // tile, 1)
    cell_h = max(height // tile, 1)
    half_w = max(cell_w // 2, 1)
    half_h = max(cell_h // 2, 1)

    i, j = _pixel_grid(width, height)
    ci = np.minimum(i // cell_w, tile - 1)
    cj = np.minimum(j // cell_h, tile - 1)
    ci, cj = np.broadcast_arrays(ci, cj)

    hue = (ci * tile + cj) / float(tile * tile)
    saturation = np.full(hue.shape, 0.8 if colored else 0.0)
    value = np.where((ci + cj) % 2 == 0, 0.8, 0.6)

    lines = (i % half_w == 0) | (j % half_h == 0)
    saturation = np.where(lines, saturation * 0.5, saturation)
    value = np.where(lines, 0.4, value)

    hsv = np.stack([hue, saturation, value], axis=-1)
    return hsv_to_rgb(hsv).astype(np.float32)


@validate_positive("scale", param_index=1)
def bump_to_normal_map(image: np.ndarray, scale: float = 1.0) -> np.ndarray:
    """
    Convert a height field to a tangent-space normal map.

    Heights are the mean of the color channels (the single channel for
    grayscale input). Gradients use forward differences that wrap at the
    borders; the green channel points up the image.

    Args:
        image: Height field [H, W] or [H, W, C]
        scale: Height multiplier (> 0)

    Returns:
        float32 array [H, W, 3] with normals encoded as n * 0.5 + 0.5
    """
    pixels = as_image(image).astype(np.float64)
    height, width, channels = pixels.shape
    if channels >= 3:
        g = luminance(pixels[..., :3])
    else:
        g = pixels[..., 0]

    dx = 1.0 / width
    dy = 1.0 / height
    g10 = np.roll(g, -1, axis=1)
    g01 = np.roll(g, -1, axis=0)

    normal = np.stack(
        [scale * (g - g10) / dx, -(scale * (g - g01) / dy), np.ones_like(g)], axis=-1
    )
    normal /= np.linalg.norm(normal, axis=-1, keepdims=True)

    logger.debug("[Patterns] Normal map %dx%d (scale=%.3f)", width, height, scale)
    return (normal * 0.5 + 0.5).astype(np.float32)
