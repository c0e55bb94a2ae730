"""
Color conversion primitives.

All functions are pure and element-wise over the last axis, so they accept a
single color (tuple or 1-D array) as well as whole images of shape
(height, width, channels). When the last axis has four components the fourth
is alpha and passes through untouched.

Conversions:
- 8-bit <-> real (scale-and-clamp)
- gamma encode/decode (power law, default exponent 2.2)
- approximate luminance (unweighted channel mean)
- linear RGB <-> CIE XYZ <-> xyY, RGB <-> HSV
- channel-count conversions (RGB <-> RGBA, RGBA -> single channel)
"""

import logging

import numpy as np

from pixpro.color.kernels import hsv_to_rgb_numba, rgb_to_hsv_numba
from pixpro.constants import BYTE_MAX, BYTE_SCALE, DEFAULT_GAMMA, RGB_TO_XYZ_MATRIX
from pixpro.validators import validate_positive

logger = logging.getLogger(__name__)

_RGB_TO_XYZ = np.array(RGB_TO_XYZ_MATRIX, dtype=np.float64)
_XYZ_TO_RGB = np.linalg.inv(_RGB_TO_XYZ)


def _as_float(a) -> np.ndarray:
    """Return a as a float array (float64 stays float64, everything else float32)."""
    a = np.asarray(a)
    if a.dtype == np.float64:
        return a
    return a.astype(np.float32)


def _check_components(a: np.ndarray, name: str, allowed: tuple[int, ...] = (3, 4)) -> None:
    if a.ndim == 0 or a.shape[-1] not in allowed:
        allowed_str = " or ".join(str(n) for n in allowed)
        raise ValueError(
            f"{name} must have {allowed_str} components on its last axis, got shape {a.shape}"
        )


def _with_alpha(result: np.ndarray, source: np.ndarray) -> np.ndarray:
    """Append source's alpha channel to a 3-component result when source has one."""
    if source.shape[-1] == 4:
        return np.concatenate([result, source[..., 3:4].astype(result.dtype)], axis=-1)
    return result


# ============================================================================
# 8-bit <-> Real
# ============================================================================


def float_to_byte(a) -> np.ndarray:
    """
    Convert real components to 8-bit by scaling with 256, flooring and clamping.

    byte_to_float(float_to_byte(x)) is within 1/255 of x for x in [0, 1].

    Args:
        a: Real values, any shape

    Returns:
        uint8 array of the same shape
    """
    a = np.asarray(a, dtype=np.float64)
    return np.clip(np.floor(a * BYTE_SCALE), 0, BYTE_MAX).astype(np.uint8)


def byte_to_float(a) -> np.ndarray:
    """Convert 8-bit components to float32 in [0, 1]."""
    return np.asarray(a, dtype=np.float32) / np.float32(BYTE_MAX)


# ============================================================================
# Gamma
# ============================================================================


@validate_positive("gamma")
def gamma_to_linear(srgb, gamma: float = DEFAULT_GAMMA) -> np.ndarray:
    """
    Decode gamma-encoded color to linear with a power law.

    Negative components are treated as zero. Alpha (fourth component) is kept.

    Args:
        srgb: Colors with 3 or 4 components on the last axis
        gamma: Exponent (default 2.2)

    Returns:
        Linear colors, same shape
    """
    srgb = _as_float(srgb)
    _check_components(srgb, "srgb")
    linear = np.power(np.maximum(srgb[..., :3], 0), gamma)
    return _with_alpha(linear.astype(srgb.dtype), srgb)


@validate_positive("gamma")
def linear_to_gamma(lin, gamma: float = DEFAULT_GAMMA) -> np.ndarray:
    """
    Encode linear color with the power law x ** (1 / gamma).

    Args:
        lin: Colors with 3 or 4 components on the last axis
        gamma: Exponent (default 2.2)

    Returns:
        Gamma-encoded colors, same shape
    """
    lin = _as_float(lin)
    _check_components(lin, "lin")
    encoded = np.power(np.maximum(lin[..., :3], 0), 1.0 / gamma)
    return _with_alpha(encoded.astype(lin.dtype), lin)


# ============================================================================
# Luminance
# ============================================================================


def luminance(a) -> np.ndarray | float:
    """
    Approximate luminance as the unweighted mean of R, G and B.

    This is a deliberate simplification, not CIE luminance.

    Args:
        a: Colors with 3 or 4 components on the last axis

    Returns:
        Array with the last axis removed (float for a single color)
    """
    a = _as_float(a)
    _check_components(a, "color")
    lum = a[..., :3].mean(axis=-1)
    return float(lum) if lum.ndim == 0 else lum


# ============================================================================
# CIE XYZ / xyY
# ============================================================================


def rgb_to_xyz(rgb) -> np.ndarray:
    """Convert linear sRGB (D65) to CIE XYZ."""
    rgb = _as_float(rgb)
    _check_components(rgb, "rgb")
    xyz = rgb[..., :3] @ _RGB_TO_XYZ.T
    return _with_alpha(xyz.astype(rgb.dtype), rgb)


def xyz_to_rgb(xyz) -> np.ndarray:
    """Convert CIE XYZ to linear sRGB (exact inverse of rgb_to_xyz)."""
    xyz = _as_float(xyz)
    _check_components(xyz, "xyz")
    rgb = xyz[..., :3] @ _XYZ_TO_RGB.T
    return _with_alpha(rgb.astype(xyz.dtype), xyz)


def xyz_to_xyY(xyz) -> np.ndarray:
    """
    Convert CIE XYZ to chromaticity xyY.

    Black (X + Y + Z == 0) maps to (0, 0, 0).
    """
    xyz = _as_float(xyz)
    _check_components(xyz, "xyz", allowed=(3,))
    total = xyz.sum(axis=-1)
    safe = np.where(total == 0, 1, total)
    out = np.stack(
        [xyz[..., 0] / safe, xyz[..., 1] / safe, xyz[..., 1]],
        axis=-1,
    )
    out[total == 0] = 0
    return out.astype(xyz.dtype)


def xyY_to_xyz(xyY) -> np.ndarray:
    """
    Convert chromaticity xyY to CIE XYZ.

    Colors with y == 0 map to (0, 0, 0).
    """
    xyY = _as_float(xyY)
    _check_components(xyY, "xyY", allowed=(3,))
    x, y, Y = xyY[..., 0], xyY[..., 1], xyY[..., 2]
    safe = np.where(y == 0, 1, y)
    out = np.stack([x * Y / safe, Y, (1 - x - y) * Y / safe], axis=-1)
    out[y == 0] = 0
    return out.astype(xyY.dtype)


# ============================================================================
# HSV
# ============================================================================


def _run_hsv_kernel(kernel, a: np.ndarray) -> np.ndarray:
    flat = np.ascontiguousarray(a[..., :3]).reshape(-1, 3)
    out = np.empty_like(flat)
    kernel(flat, out)
    return _with_alpha(out.reshape(a.shape[:-1] + (3,)), a)


def rgb_to_hsv(rgb) -> np.ndarray:
    """
    Convert RGB to HSV with all components in [0, 1].

    Args:
        rgb: Colors with 3 or 4 components on the last axis

    Returns:
        HSV colors (alpha kept), same shape

    Example:
        >>> rgb_to_hsv(np.array([0.0, 1.0, 0.0]))
        array([0.33333333, 1.        , 1.        ])
    """
    rgb = _as_float(rgb)
    _check_components(rgb, "rgb")
    return _run_hsv_kernel(rgb_to_hsv_numba, rgb)


def hsv_to_rgb(hsv) -> np.ndarray:
    """
    Convert HSV (components in [0, 1], hue wraps around) to RGB.

    Args:
        hsv: Colors with 3 or 4 components on the last axis

    Returns:
        RGB colors (alpha kept), same shape
    """
    hsv = _as_float(hsv)
    _check_components(hsv, "hsv")
    return _run_hsv_kernel(hsv_to_rgb_numba, hsv)


# ============================================================================
# Channel Conversions
# ============================================================================


def rgb_to_rgba(rgb, alpha: float = 1.0) -> np.ndarray:
    """Append a constant alpha channel to RGB colors."""
    rgb = _as_float(rgb)
    _check_components(rgb, "rgb", allowed=(3,))
    alpha_channel = np.full(rgb.shape[:-1] + (1,), alpha, dtype=rgb.dtype)
    return np.concatenate([rgb, alpha_channel], axis=-1)


def rgba_to_rgb(rgba) -> np.ndarray:
    """Drop the alpha channel."""
    rgba = _as_float(rgba)
    _check_components(rgba, "rgba", allowed=(4,))
    return rgba[..., :3].copy()


def _rgba_channel(rgba, index: int) -> np.ndarray:
    rgba = _as_float(rgba)
    _check_components(rgba, "rgba", allowed=(4,))
    return rgba[..., index].copy()


def rgba_to_red(rgba) -> np.ndarray:
    """Extract the red channel."""
    return _rgba_channel(rgba, 0)


def rgba_to_green(rgba) -> np.ndarray:
    """Extract the green channel."""
    return _rgba_channel(rgba, 1)


def rgba_to_blue(rgba) -> np.ndarray:
    """Extract the blue channel."""
    return _rgba_channel(rgba, 2)


def rgba_to_alpha(rgba) -> np.ndarray:
    """Extract the alpha channel."""
    return _rgba_channel(rgba, 3)


def rgba_to_luminance(rgba) -> np.ndarray:
    """Extract approximate luminance (mean of R, G, B)."""
    rgba = _as_float(rgba)
    _check_components(rgba, "rgba", allowed=(4,))
    return rgba[..., :3].mean(axis=-1)


def luminance_to_rgba(lum) -> np.ndarray:
    """Expand a single-channel image to opaque gray RGBA."""
    lum = _as_float(lum)
    alpha = np.ones_like(lum)
    return np.stack([lum, lum, lum, alpha], axis=-1)
