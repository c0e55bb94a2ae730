"""
Sky and light-probe configuration.

Out-of-range turbidity and elevation are not rejected here: the model
extrapolates (and warns) so callers can sweep past the fitted range.
"""

from dataclasses import dataclass

from pixpro.constants import (
    DEFAULT_GROUND_ALBEDO,
    DEFAULT_LIGHT_ANGLE,
    DEFAULT_LIGHT_COUNT,
    DEFAULT_LIGHT_EMISSION,
    DEFAULT_LIGHT_SIZE,
    DEFAULT_SUN_ELEVATION,
    DEFAULT_SUN_INTENSITY,
    DEFAULT_SUN_RADIUS,
    DEFAULT_TURBIDITY,
)


def _check_color(name: str, color: tuple[float, float, float]) -> None:
    if len(color) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(color)}")
    if any(c < 0.0 for c in color):
        raise ValueError(f"{name} components must be non-negative, got {tuple(color)}")


@dataclass
class SkyConfig:
    """
    Configuration for the analytic sun-sky image.

    Attributes:
        elevation: Sun elevation above the horizon in radians (0 to pi/2)
        turbidity: Atmospheric turbidity (fitted for 1.7 to 10)
        ground_albedo: Linear RGB color of the ground below the horizon
        has_sun: Add the solar disk
        sun_radius: Angular radius of the solar disk in radians
        sun_intensity: Multiplier on the solar disk radiance
        lit_ground: Shade the ground with the sky irradiance instead of
            filling it with the flat albedo color
    """

    elevation: float = DEFAULT_SUN_ELEVATION
    turbidity: float = DEFAULT_TURBIDITY
    ground_albedo: tuple[float, float, float] = DEFAULT_GROUND_ALBEDO
    has_sun: bool = False
    sun_radius: float = DEFAULT_SUN_RADIUS
    sun_intensity: float = DEFAULT_SUN_INTENSITY
    lit_ground: bool = False

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.turbidity <= 0.0:
            raise ValueError(f"turbidity must be positive, got {self.turbidity}")

        _check_color("ground_albedo", self.ground_albedo)

        if self.sun_radius <= 0.0:
            raise ValueError(f"sun_radius must be positive, got {self.sun_radius}")

        if self.sun_intensity < 0.0:
            raise ValueError(f"sun_intensity must be non-negative, got {self.sun_intensity}")


@dataclass
class LightsConfig:
    """
    Configuration for a ring of rectangular area lights on a light probe.

    Attributes:
        count: Number of lights, evenly spaced in azimuth
        angle: Zenith angle of the ring center in radians
        width: Angular extent of each light in azimuth (radians)
        height: Angular extent of each light in zenith (radians)
        emission: Linear RGB radiance of each light
    """

    count: int = DEFAULT_LIGHT_COUNT
    angle: float = DEFAULT_LIGHT_ANGLE
    width: float = DEFAULT_LIGHT_SIZE
    height: float = DEFAULT_LIGHT_SIZE
    emission: tuple[float, float, float] = DEFAULT_LIGHT_EMISSION

    def __post_init__(self):
        """Validate configuration parameters."""
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError(f"count must be an integer, got {type(self.count).__name__}")
        if self.count < 1:
            raise ValueError(f"count must be at least 1, got {self.count}")

        if self.width <= 0.0 or self.height <= 0.0:
            raise ValueError(
                f"light size must be positive, got width={self.width}, height={self.height}"
            )

        _check_color("emission", self.emission)
