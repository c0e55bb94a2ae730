"""
Color processing module.

Provides color-space conversions, tone mapping primitives and the
composable Tonemap pipeline.
"""

from pixpro.color.conversions import (
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
from pixpro.color.pipeline import Tonemap
from pixpro.color.tonemap import expose_image, filmic_tonemap_image, tonemap_image

__all__ = [
    # Pipeline
    "Tonemap",
    # Byte / float
    "float_to_byte",
    "byte_to_float",
    # Gamma and luminance
    "gamma_to_linear",
    "linear_to_gamma",
    "luminance",
    # Color spaces
    "rgb_to_xyz",
    "xyz_to_rgb",
    "xyz_to_xyY",
    "xyY_to_xyz",
    "rgb_to_hsv",
    "hsv_to_rgb",
    # Channels
    "rgb_to_rgba",
    "rgba_to_rgb",
    "rgba_to_red",
    "rgba_to_green",
    "rgba_to_blue",
    "rgba_to_alpha",
    "rgba_to_luminance",
    "luminance_to_rgba",
    # Tone mapping
    "expose_image",
    "filmic_tonemap_image",
    "tonemap_image",
]
