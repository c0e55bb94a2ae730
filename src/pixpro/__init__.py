"""
pixpro - Pixel Processing Primitives

CPU-optimized pixel-level building blocks for a rendering pipeline.

Features:
- Color conversions: 8-bit <-> real, gamma, luminance, XYZ/xyY, HSV, channel counts
- Tone adjustment: exposure, filmic curve, gamma encoding, composable Tonemap pipeline
- Separable resampling with box, triangle, cubic B-spline, Catmull-Rom and Mitchell
  kernels and clamp, reflect, wrap and zero edge modes
- Deterministic gradient noise with fbm, ridge and turbulence fractal sums
- Analytic Preetham sun-sky radiance images with optional sun disk
- Test patterns: grid, checker, bump/dimple, ramps, UV grids, normal maps

Images are numpy arrays of shape (height, width, channels). Every operation
returns a new array and never modifies its inputs.

Example - Resampling:
    >>> from pixpro import resize_image
    >>>
    >>> thumb = resize_image(image, 128, 128)                   # Mitchell (downsampling)
    >>> tiled = resize_image(texture, 1024, 1024, edge="wrap")  # Catmull-Rom (upsampling)

Example - Procedural images:
    >>> from pixpro import NoiseConfig, SkyConfig, make_fbm_image, make_sunsky_image
    >>>
    >>> clouds = make_fbm_image(256, 256, NoiseConfig(scale=2.0, octaves=8))
    >>> sky = make_sunsky_image(512, 256, SkyConfig(elevation=0.4, has_sun=True))

Example - Tone mapping:
    >>> from pixpro import Tonemap, float_to_byte
    >>>
    >>> ldr = Tonemap().exposure(-1.0).filmic().clamp()(sky)
    >>> pixels = float_to_byte(ldr)
"""

__version__ = "0.1.0"

# Color primitives and tone adjustment
from pixpro.color import (
    Tonemap,
    byte_to_float,
    expose_image,
    filmic_tonemap_image,
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
    tonemap_image,
    xyY_to_xyz,
    xyz_to_rgb,
    xyz_to_xyY,
)

# Image buffers
from pixpro.image import as_image, image_size, make_image

# Noise
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

# Test patterns
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

# Resampling
from pixpro.resize import EdgeMode, ResizeFilter, compute_contributors, resize_image

# Sky
from pixpro.sky import (
    LightsConfig,
    SkyConfig,
    make_lights_image,
    make_sunsky_image,
    sky_radiance,
    sun_radiance,
)

__all__ = [
    # Version
    "__version__",
    # Image buffers
    "as_image",
    "image_size",
    "make_image",
    # Color
    "float_to_byte",
    "byte_to_float",
    "gamma_to_linear",
    "linear_to_gamma",
    "luminance",
    "rgb_to_xyz",
    "xyz_to_rgb",
    "xyz_to_xyY",
    "xyY_to_xyz",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_rgba",
    "rgba_to_rgb",
    "rgba_to_red",
    "rgba_to_green",
    "rgba_to_blue",
    "rgba_to_alpha",
    "rgba_to_luminance",
    "luminance_to_rgba",
    # Tone adjustment
    "Tonemap",
    "expose_image",
    "filmic_tonemap_image",
    "tonemap_image",
    # Resampling
    "resize_image",
    "compute_contributors",
    "ResizeFilter",
    "EdgeMode",
    # Noise
    "NoiseConfig",
    "noise",
    "fbm",
    "ridge",
    "turbulence",
    "make_noise_image",
    "make_fbm_image",
    "make_ridge_image",
    "make_turbulence_image",
    # Sky
    "SkyConfig",
    "LightsConfig",
    "make_sunsky_image",
    "make_lights_image",
    "sky_radiance",
    "sun_radiance",
    # Patterns
    "make_grid_image",
    "make_checker_image",
    "make_bumpdimple_image",
    "make_ramp_image",
    "make_gammaramp_image",
    "make_uv_image",
    "make_uvgrid_image",
    "bump_to_normal_map",
]
