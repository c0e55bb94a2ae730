"""
Tone adjustment primitives: exposure, filmic curve and display encoding.

Inputs are unclamped linear HDR colors (3 or 4 components on the last axis);
alpha is never modified.
"""

import logging

import numpy as np

from pixpro.color.conversions import _as_float, _check_components, _with_alpha, linear_to_gamma
from pixpro.constants import (
    DEFAULT_EXPOSURE,
    DEFAULT_GAMMA,
    FILMIC_A,
    FILMIC_B,
    FILMIC_C,
    FILMIC_D,
    FILMIC_TOE,
)
from pixpro.validators import validate_positive

logger = logging.getLogger(__name__)


def expose_image(hdr, exposure: float = DEFAULT_EXPOSURE) -> np.ndarray:
    """
    Scale RGB by 2 ** exposure (exposure in stops).

    Args:
        hdr: Linear colors with 3 or 4 components on the last axis
        exposure: Exposure in stops (0 = no change)

    Returns:
        Exposed colors, same shape and dtype
    """
    hdr = _as_float(hdr)
    _check_components(hdr, "hdr")
    scale = 2.0 ** exposure
    return _with_alpha((hdr[..., :3] * scale).astype(hdr.dtype), hdr)


def filmic_curve(x: np.ndarray) -> np.ndarray:
    """
    Hejl / Burgess-Dawson filmic curve.

    Maps linear radiance to display values with gamma already applied.
    """
    x = np.maximum(x - FILMIC_TOE, 0)
    return (x * (FILMIC_A * x + FILMIC_B)) / (x * (FILMIC_A * x + FILMIC_C) + FILMIC_D)


def filmic_tonemap_image(hdr) -> np.ndarray:
    """
    Apply the filmic curve to RGB (display-encoded output in [0, 1)).

    Args:
        hdr: Linear colors with 3 or 4 components on the last axis

    Returns:
        Tone mapped colors, same shape and dtype
    """
    hdr = _as_float(hdr)
    _check_components(hdr, "hdr")
    return _with_alpha(filmic_curve(hdr[..., :3]).astype(hdr.dtype), hdr)


@validate_positive("gamma", param_index=2)
def tonemap_image(
    hdr,
    exposure: float = DEFAULT_EXPOSURE,
    gamma: float = DEFAULT_GAMMA,
    filmic: bool = False,
) -> np.ndarray:
    """
    Convert a linear HDR image to display values in [0, 1].

    Applies exposure, then either the filmic curve or plain gamma encoding,
    then clamps.

    Args:
        hdr: Linear colors with 3 or 4 components on the last axis
        exposure: Exposure in stops
        gamma: Display gamma (ignored when filmic=True, the curve includes it)
        filmic: Use the filmic curve instead of gamma encoding

    Returns:
        Display-ready colors in [0, 1], same shape

    Example:
        >>> ldr = tonemap_image(sky, exposure=-1.0, filmic=True)
        >>> bytes_ = float_to_byte(ldr)
    """
    exposed = expose_image(hdr, exposure)
    if filmic:
        mapped = filmic_tonemap_image(exposed)
    else:
        mapped = linear_to_gamma(exposed, gamma)

    logger.debug(
        "[Tonemap] exposure=%.2f, gamma=%.2f, filmic=%s on shape %s",
        exposure,
        gamma,
        filmic,
        mapped.shape,
    )
    return np.clip(mapped, 0.0, 1.0)
