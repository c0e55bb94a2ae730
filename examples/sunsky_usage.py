"""
Example: procedural environment maps.

Demonstrates how to use pixpro for:
- Rendering a sun-sky environment map
- Adding a light probe ring
- Tone mapping and resizing the result
- Noise and test pattern textures
"""

import logging
import math

import numpy as np

from pixpro import (
    LightsConfig,
    NoiseConfig,
    SkyConfig,
    Tonemap,
    float_to_byte,
    make_fbm_image,
    make_lights_image,
    make_sunsky_image,
    make_uvgrid_image,
    resize_image,
)

# Configure logging to see rendering statistics
logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")


def example_1_sunsky():
    """Example 1: Sun-sky environment map."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Sun-Sky Environment Map")
    print("=" * 70)

    config = SkyConfig(elevation=math.radians(30), turbidity=3.0, has_sun=True, lit_ground=True)
    sky = make_sunsky_image(512, 256, config)

    print(f"Shape:      {sky.shape}")
    print(f"Radiance:   min={sky.min():.4f} max={sky.max():.1f} mean={sky.mean():.4f}")
    print(f"Ground:     {sky[-1, 0]}")
    return sky


def example_2_display(sky: np.ndarray):
    """Example 2: Tone map and downsample for display."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Tone Mapping and Resizing")
    print("=" * 70)

    tonemap = Tonemap().exposure(-1.0).filmic().clamp()
    ldr = tonemap(sky)
    preview = resize_image(ldr, 128, 64)
    pixels = float_to_byte(preview)

    print(f"Pipeline:   {tonemap}")
    print(f"Preview:    {pixels.shape} {pixels.dtype}")


def example_3_lights():
    """Example 3: Light probe ring."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Light Probe Ring")
    print("=" * 70)

    lights = make_lights_image(256, 128, LightsConfig(count=6, emission=(5.0, 5.0, 5.0)))
    lit = np.count_nonzero(lights[..., 0])
    print(f"Lit pixels: {lit} of {lights.shape[0] * lights.shape[1]}")


def example_4_textures():
    """Example 4: Noise and pattern textures."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Textures")
    print("=" * 70)

    clouds = make_fbm_image(256, 256, NoiseConfig(scale=2.0, octaves=6))
    grid = make_uvgrid_image(256, 256)
    blend = 0.5 * clouds + 0.5 * grid

    print(f"Clouds:     mean={clouds.mean():.3f}")
    print(f"Blend:      {blend.shape} {blend.dtype}")


if __name__ == "__main__":
    sky = example_1_sunsky()
    example_2_display(sky)
    example_3_lights()
    example_4_textures()
