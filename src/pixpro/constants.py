"""
Constants and default values for pixpro operations.

Centralizes magic numbers and configuration defaults for better maintainability.
"""

from __future__ import annotations

import math

# =============================================================================
# Color Constants
# =============================================================================

DEFAULT_GAMMA = 2.2  # Display gamma for encode/decode

BYTE_MAX = 255  # Largest 8-bit channel value
BYTE_SCALE = 256.0  # float_to_byte quantization scale (floor then clamp)

# Linear sRGB primaries (D65) to CIE XYZ
RGB_TO_XYZ_MATRIX = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9504),
)

# =============================================================================
# Tone Mapping Constants
# =============================================================================

DEFAULT_EXPOSURE = 0.0  # Stops
EXPOSURE_MIN = -20.0
EXPOSURE_MAX = 20.0

# Hejl / Burgess-Dawson filmic curve (gamma included)
FILMIC_TOE = 0.004
FILMIC_A = 6.2
FILMIC_B = 0.5
FILMIC_C = 1.7
FILMIC_D = 0.06

# =============================================================================
# Resize Constants
# =============================================================================

BOX_SUPPORT = 0.5
TRIANGLE_SUPPORT = 1.0
CUBIC_SUPPORT = 2.0  # Cubic spline, Catmull-Rom and Mitchell

# Worst-case overshoot of one resampling pass for kernels with negative lobes,
# as a fraction of the contributing source range (max - min).
OVERSHOOT_MARGIN = {
    "box": 0.0,
    "triangle": 0.0,
    "cubic_spline": 0.0,
    "catmull_rom": 0.25,
    "mitchell": 0.1,
}

# =============================================================================
# Noise Constants
# =============================================================================

NOISE_BASE_CELLS = 8  # Lattice cells across an image at scale=1

DEFAULT_NOISE_SCALE = 1.0
DEFAULT_LACUNARITY = 2.0
DEFAULT_GAIN = 0.5
DEFAULT_RIDGE_OFFSET = 1.0
DEFAULT_OCTAVES = 6
OCTAVES_MIN = 1
OCTAVES_MAX = 32

# =============================================================================
# Sky Constants
# =============================================================================

DEFAULT_SUN_ELEVATION = math.pi / 4
DEFAULT_TURBIDITY = 3.0
TURBIDITY_MIN = 1.7  # Validated range of the Perez fit
TURBIDITY_MAX = 10.0
ELEVATION_MIN = 0.0
ELEVATION_MAX = math.pi / 2

DEFAULT_GROUND_ALBEDO = (0.7, 0.7, 0.7)
DEFAULT_SUN_RADIUS = 9.35e-3 / 2  # Angular radius of the solar disk (radians)
DEFAULT_SUN_INTENSITY = 1.0

SKY_RADIANCE_SCALE = 1.0 / 10000.0  # cd/m^2 to output units
HORIZON_EPSILON = 1e-5  # Sky rows never evaluate exactly at the horizon
PEREZ_EXPONENT_MAX = 20.0  # Bound on Perez exponents, keeps extrapolated skies finite

# Sun transmittance model (Preetham et al. 1999, appendix)
SUN_WAVELENGTHS_NM = (680.0, 530.0, 480.0)
SUN_SOLAR_RADIANCE = (20000.0, 27000.0, 30000.0)
SUN_OZONE_K = (0.48, 0.75, 0.14)
SUN_GAS_K = (0.1, 0.0, 0.065)
SUN_WATER_K = (0.02, 0.0, 0.0)

# Light probe defaults
DEFAULT_LIGHT_COUNT = 4
DEFAULT_LIGHT_ANGLE = math.pi / 4
DEFAULT_LIGHT_SIZE = math.pi / 16
DEFAULT_LIGHT_EMISSION = (1.0, 1.0, 1.0)

# =============================================================================
# Pattern Constants
# =============================================================================

DEFAULT_TILE = 8
DEFAULT_PATTERN_C0 = (0.5, 0.5, 0.5)
DEFAULT_PATTERN_C1 = (0.8, 0.8, 0.8)

# =============================================================================
# General Constants
# =============================================================================

VALID_CHANNEL_COUNTS = {1, 2, 3, 4}
