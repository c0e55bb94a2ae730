"""
Analytic sun-sky model.

Sky radiance follows the Preetham et al. daylight model: the Perez
all-weather distribution for luminance Y and chromaticities x, y, with
zenith values and distribution coefficients fitted as functions of
turbidity and sun zenith angle. The sun disk uses the spectral
transmittance of the atmosphere (Rayleigh, aerosol, ozone, mixed gases
and water vapor) at three representative wavelengths.

The fit is validated for turbidity in [1.7, 10] and sun elevation in
[0, pi/2]. Other values are extrapolated with a warning; exponents are
bounded and non-finite or negative radiance is clipped to zero so the
output is always usable.

Image layout (latitude-longitude):
    row j    -> zenith angle theta = pi * (j + 0.5) / height
    column i -> azimuth phi = 2 pi * (i + 0.5) / width
    direction = (cos(phi) sin(theta), cos(theta), sin(phi) sin(theta))
The sun sits at azimuth pi/2.
"""

import logging
import math

import numpy as np

from pixpro.color.conversions import xyY_to_xyz, xyz_to_rgb
from pixpro.constants import (
    ELEVATION_MAX,
    ELEVATION_MIN,
    HORIZON_EPSILON,
    PEREZ_EXPONENT_MAX,
    SKY_RADIANCE_SCALE,
    SUN_GAS_K,
    SUN_OZONE_K,
    SUN_SOLAR_RADIANCE,
    SUN_WATER_K,
    SUN_WAVELENGTHS_NM,
    TURBIDITY_MAX,
    TURBIDITY_MIN,
)
from pixpro.sky.config import LightsConfig, SkyConfig
from pixpro.validators import validate_dimensions

logger = logging.getLogger(__name__)

# Perez coefficients as (slope, intercept) in turbidity, for A..E
_PEREZ_Y = ((0.17872, -1.46303), (-0.35540, 0.42749), (-0.02266, 5.32505),
            (0.12064, -2.57705), (-0.06696, 0.37027))
_PEREZ_X = ((-0.01925, -0.25922), (-0.06651, 0.00081), (-0.00041, 0.21247),
            (-0.06409, -0.89887), (-0.00325, 0.04517))
_PEREZ_CHROMA_Y = ((-0.01669, -0.26078), (-0.09495, 0.00921), (-0.00792, 0.21023),
                   (-0.04405, -1.65369), (-0.01092, 0.05291))

# Zenith chromaticity polynomials: rows are t^2, t^1, t^0; columns theta^3..theta^0
_ZENITH_X = ((0.00165, -0.00374, 0.00208, 0.0),
             (-0.02902, 0.06377, -0.03202, 0.00394),
             (0.11693, -0.21196, 0.06052, 0.25885))
_ZENITH_CHROMA_Y = ((0.00275, -0.00610, 0.00316, 0.0),
                    (-0.04212, 0.08970, -0.04153, 0.00515),
                    (0.15346, -0.26756, 0.06669, 0.26688))


def _check_sky_parameters(elevation: float, turbidity: float) -> float:
    """Warn about extrapolated parameters and return the clamped elevation."""
    if not TURBIDITY_MIN <= turbidity <= TURBIDITY_MAX:
        logger.warning(
            "[Sky] turbidity=%.3f outside fitted range [%.1f, %.1f]; extrapolating",
            turbidity,
            TURBIDITY_MIN,
            TURBIDITY_MAX,
        )
    if not ELEVATION_MIN <= elevation <= ELEVATION_MAX:
        clamped = min(max(elevation, ELEVATION_MIN), ELEVATION_MAX)
        logger.warning(
            "[Sky] elevation=%.4f outside [0, pi/2]; clamped to %.4f", elevation, clamped
        )
        return clamped
    return elevation


# ============================================================================
# Sky Radiance
# ============================================================================


def _zenith_chromaticity(coefficients, turbidity: float, theta_sun: float) -> float:
    t_powers = (turbidity * turbidity, turbidity, 1.0)
    theta_powers = (theta_sun ** 3, theta_sun ** 2, theta_sun, 1.0)
    return sum(
        tp * sum(c * thp for c, thp in zip(row, theta_powers))
        for tp, row in zip(t_powers, coefficients)
    )


def _zenith_luminance(turbidity: float, theta_sun: float) -> float:
    chi = (4.0 / 9.0 - turbidity / 120.0) * (math.pi - 2.0 * theta_sun)
    return (
        (4.0453 * turbidity - 4.9710) * math.tan(chi) - 0.2155 * turbidity + 2.4192
    ) * 1000.0


def _perez(coefficients, turbidity, theta, gamma, theta_sun, zenith):
    """Perez distribution relative to the zenith value."""
    A, B, C, D, E = (slope * turbidity + intercept for slope, intercept in coefficients)

    def shape(cos_theta, g):
        sky = 1.0 + A * np.exp(np.minimum(B / cos_theta, PEREZ_EXPONENT_MAX))
        sun = 1.0 + C * np.exp(np.minimum(D * g, PEREZ_EXPONENT_MAX)) + E * np.cos(g) ** 2
        return sky * sun

    numerator = shape(np.cos(theta), gamma)
    denominator = shape(1.0, theta_sun)
    return zenith * numerator / denominator


def sky_radiance(theta, gamma, theta_sun: float, turbidity: float) -> np.ndarray:
    """
    Linear RGB sky radiance for view directions.

    Args:
        theta: View zenith angle(s) in radians, below pi/2
        gamma: Angle(s) between the view and sun directions in radians
        theta_sun: Sun zenith angle in radians
        turbidity: Atmospheric turbidity

    Returns:
        float64 array [..., 3], finite and non-negative

    Example:
        >>> rgb = sky_radiance(np.linspace(0, 1.5, 16), 0.3, math.pi / 4, 3.0)
        >>> rgb.shape
        (16, 3)
    """
    theta, gamma = np.broadcast_arrays(
        np.asarray(theta, dtype=np.float64), np.asarray(gamma, dtype=np.float64)
    )
    theta = np.minimum(theta, math.pi / 2 - HORIZON_EPSILON)
    theta_sun = float(theta_sun)
    turbidity = float(turbidity)

    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        Y = _perez(
            _PEREZ_Y, turbidity, theta, gamma, theta_sun,
            _zenith_luminance(turbidity, theta_sun),
        )
        x = _perez(
            _PEREZ_X, turbidity, theta, gamma, theta_sun,
            _zenith_chromaticity(_ZENITH_X, turbidity, theta_sun),
        )
        y = _perez(
            _PEREZ_CHROMA_Y, turbidity, theta, gamma, theta_sun,
            _zenith_chromaticity(_ZENITH_CHROMA_Y, turbidity, theta_sun),
        )
        xyY = np.stack([x, y, Y], axis=-1)
        xyY = np.nan_to_num(xyY, nan=0.0, posinf=0.0, neginf=0.0)
        rgb = xyz_to_rgb(xyY_to_xyz(xyY)) * SKY_RADIANCE_SCALE

    rgb = np.nan_to_num(rgb, nan=0.0, posinf=0.0, neginf=0.0)
    # Stay representable once stored as float32
    return np.clip(rgb, 0.0, np.finfo(np.float32).max)


# ============================================================================
# Sun Radiance
# ============================================================================


def sun_radiance(theta_sun: float, turbidity: float) -> np.ndarray:
    """
    Linear RGB radiance of the solar disk after atmospheric attenuation.

    Args:
        theta_sun: Sun zenith angle in radians
        turbidity: Atmospheric turbidity

    Returns:
        float64 array [3]
    """
    theta_sun = float(theta_sun)
    turbidity = float(turbidity)
    wavelength = np.array(SUN_WAVELENGTHS_NM, dtype=np.float64) / 1000.0  # micrometers

    beta = 0.04608365822050 * turbidity - 0.04586025928522
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        # Relative optical air mass (Kasten)
        m = 1.0 / (math.cos(theta_sun) + 0.000940 * (1.6386 - theta_sun) ** -1.253)

        tau_rayleigh = np.exp(-m * 0.008735 * wavelength ** -4.08)
        tau_aerosol = np.exp(-m * beta * wavelength ** -1.3)
        tau_ozone = np.exp(-m * np.array(SUN_OZONE_K) * 0.35)
        kg_m = np.array(SUN_GAS_K) * m
        tau_gas = np.exp(-1.41 * kg_m / (1.0 + 118.93 * kg_m) ** 0.45)
        kwa_m = np.array(SUN_WATER_K) * 2.0 * m
        tau_water = np.exp(-0.2385 * kwa_m / (1.0 + 20.07 * kwa_m) ** 0.45)

        radiance = (
            np.array(SUN_SOLAR_RADIANCE)
            * tau_rayleigh
            * tau_aerosol
            * tau_ozone
            * tau_gas
            * tau_water
        )

    radiance = np.nan_to_num(radiance, nan=0.0, posinf=0.0, neginf=0.0)
    return np.maximum(radiance, 0.0)


def _sun_falloff(gamma: np.ndarray, radius: float) -> np.ndarray:
    """1 inside radius, smoothstep down to 0 at 2 * radius, 0 beyond."""
    t = np.clip((2.0 * radius - gamma) / radius, 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


# ============================================================================
# Images
# ============================================================================


def _directions(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    theta = math.pi * (np.arange(height, dtype=np.float64) + 0.5) / height
    phi = 2.0 * math.pi * (np.arange(width, dtype=np.float64) + 0.5) / width
    return theta, phi


@validate_dimensions()
def make_sunsky_image(width: int, height: int, config: SkyConfig | None = None) -> np.ndarray:
    """
    Render a latitude-longitude sky dome with optional sun disk.

    Rows above the horizon hold sky radiance; rows below (theta > pi/2)
    hold the ground albedo color, or the albedo lit by the sky when
    config.lit_ground is set.

    Args:
        width: Image width in pixels (> 0)
        height: Image height in pixels (> 0)
        config: Sky parameters (default SkyConfig())

    Returns:
        float32 array [height, width, 3] of unclamped linear radiance

    Example:
        >>> sky = make_sunsky_image(512, 256, SkyConfig(elevation=0.3, turbidity=4.0))
    """
    config = SkyConfig() if config is None else config
    if not isinstance(config, SkyConfig):
        raise TypeError(f"config must be a SkyConfig, got {type(config).__name__}")

    elevation = _check_sky_parameters(config.elevation, config.turbidity)
    theta_sun = math.pi / 2 - elevation

    theta, phi = _directions(width, height)
    sky_rows = theta <= math.pi / 2
    out = np.zeros((height, width, 3), dtype=np.float32)

    if np.any(sky_rows):
        th = theta[sky_rows][:, np.newaxis]
        ph = phi[np.newaxis, :]
        # Dot product with the sun direction (0, cos(theta_sun), sin(theta_sun))
        cos_gamma = np.cos(th) * math.cos(theta_sun) + np.sin(ph) * np.sin(th) * math.sin(theta_sun)
        gamma = np.arccos(np.clip(cos_gamma, -1.0, 1.0))

        sky = sky_radiance(np.broadcast_to(th, gamma.shape), gamma, theta_sun, config.turbidity)

        if config.has_sun:
            sun = sun_radiance(theta_sun, config.turbidity) * config.sun_intensity
            sky = sky + _sun_falloff(gamma, config.sun_radius)[..., np.newaxis] * sun

        out[sky_rows] = sky

    ground_rows = ~sky_rows
    if np.any(ground_rows):
        albedo = np.array(config.ground_albedo, dtype=np.float64)
        if config.lit_ground:
            # Horizontal irradiance integrated over the synthesized sky rows
            d_theta = math.pi / height
            d_phi = 2.0 * math.pi / width
            weights = np.cos(theta) * np.sin(theta) * d_theta * d_phi
            weights[ground_rows] = 0.0
            irradiance = np.einsum("h,hwc->c", weights, out.astype(np.float64))
            ground = albedo / math.pi * irradiance
        else:
            ground = albedo
        out[ground_rows] = ground

    logger.info(
        "[Sky] Rendered %dx%d sun-sky (elevation=%.3f, turbidity=%.2f, sun=%s)",
        width,
        height,
        elevation,
        config.turbidity,
        config.has_sun,
    )
    return out


@validate_dimensions()
def make_lights_image(width: int, height: int, config: LightsConfig | None = None) -> np.ndarray:
    """
    Render a light probe with a ring of rectangular area lights.

    Light l is centered at azimuth 2 pi (l + 0.5) / count and zenith
    config.angle, spanning config.width in azimuth and config.height in
    zenith. Only the upper hemisphere is lit; everything else is black.

    Returns:
        float32 array [height, width, 3]
    """
    config = LightsConfig() if config is None else config
    if not isinstance(config, LightsConfig):
        raise TypeError(f"config must be a LightsConfig, got {type(config).__name__}")

    theta, phi = _directions(width, height)
    rows = (theta <= math.pi / 2) & (np.abs(theta - config.angle) <= config.height / 2)

    centers = 2.0 * math.pi * (np.arange(config.count) + 0.5) / config.count
    cols = np.any(np.abs(phi[:, np.newaxis] - centers[np.newaxis, :]) <= config.width / 2, axis=1)

    out = np.zeros((height, width, 3), dtype=np.float32)
    out[np.ix_(rows, cols)] = np.array(config.emission, dtype=np.float32)

    logger.info(
        "[Sky] Rendered %dx%d light probe with %d lights", width, height, config.count
    )
    return out
