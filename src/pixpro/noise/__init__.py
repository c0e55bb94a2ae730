"""
Noise module.

Provides deterministic improved gradient noise, its fractal sums (fbm,
ridge, turbulence) and grayscale noise image makers.
"""

from pixpro.noise.api import (
    fbm,
    make_fbm_image,
    make_noise_image,
    make_ridge_image,
    make_turbulence_image,
    noise,
    ridge,
    turbulence,
)
from pixpro.noise.config import NoiseConfig

__all__ = [
    "NoiseConfig",
    # Point evaluation
    "noise",
    "fbm",
    "ridge",
    "turbulence",
    # Images
    "make_noise_image",
    "make_fbm_image",
    "make_ridge_image",
    "make_turbulence_image",
]
