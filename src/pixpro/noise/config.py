"""
Noise image configuration.

Provides the parameter record shared by the noise, fbm, ridge and
turbulence image makers.
"""

from dataclasses import dataclass

from pixpro.constants import (
    DEFAULT_GAIN,
    DEFAULT_LACUNARITY,
    DEFAULT_NOISE_SCALE,
    DEFAULT_OCTAVES,
    DEFAULT_RIDGE_OFFSET,
    NOISE_BASE_CELLS,
    OCTAVES_MAX,
    OCTAVES_MIN,
)


@dataclass
class NoiseConfig:
    """
    Configuration for procedural noise images.

    Attributes:
        scale: Lattice density multiplier (cells across the image = 8 * scale)
        lacunarity: Frequency multiplier per octave
        gain: Amplitude multiplier per octave
        offset: Ridge offset (ridge images only)
        octaves: Number of octaves summed by fbm, ridge and turbulence
        wrap: Tile the lattice across the image borders
    """

    scale: float = DEFAULT_NOISE_SCALE
    lacunarity: float = DEFAULT_LACUNARITY
    gain: float = DEFAULT_GAIN
    offset: float = DEFAULT_RIDGE_OFFSET
    octaves: int = DEFAULT_OCTAVES
    wrap: bool = True

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.scale <= 0.0:
            raise ValueError(f"scale must be positive, got {self.scale}")

        if self.lacunarity <= 0.0:
            raise ValueError(f"lacunarity must be positive, got {self.lacunarity}")

        if self.gain <= 0.0:
            raise ValueError(f"gain must be positive, got {self.gain}")

        if isinstance(self.octaves, bool) or not isinstance(self.octaves, int):
            raise TypeError(f"octaves must be an integer, got {type(self.octaves).__name__}")
        if not OCTAVES_MIN <= self.octaves <= OCTAVES_MAX:
            raise ValueError(
                f"octaves must be between {OCTAVES_MIN} and {OCTAVES_MAX}, got {self.octaves}"
            )

    @property
    def cells(self) -> float:
        """Lattice cells spanned by the image along each axis."""
        return NOISE_BASE_CELLS * self.scale
