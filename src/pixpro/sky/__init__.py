"""
Sky module.

Provides the analytic sun-sky radiance model, latitude-longitude sky
images and a simple area-light probe generator.
"""

from pixpro.sky.config import LightsConfig, SkyConfig
from pixpro.sky.model import make_lights_image, make_sunsky_image, sky_radiance, sun_radiance

__all__ = [
    "SkyConfig",
    "LightsConfig",
    "make_sunsky_image",
    "make_lights_image",
    "sky_radiance",
    "sun_radiance",
]
