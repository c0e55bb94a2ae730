"""
Tonemap: composable HDR-to-display pipeline with operation stacking.

Provides a fluent API for chaining tone operations. Stacked operations are
reduced to a minimal set of parameters at compile time and applied in a
fixed order: exposure, then filmic curve or gamma encoding, then clamping.

Example:
    >>> pipeline = (Tonemap()
    ...     .exposure(1.0)      # +1 stop
    ...     .exposure(-0.5)     # Optimized to +0.5 stops total
    ...     .gamma(2.2)
    ...     .clamp()
    ... )
    >>> ldr = pipeline(hdr)
"""

from __future__ import annotations

import logging
from typing import Self

import numpy as np

from pixpro.color.conversions import linear_to_gamma
from pixpro.color.tonemap import expose_image, filmic_tonemap_image
from pixpro.constants import EXPOSURE_MAX, EXPOSURE_MIN
from pixpro.validators import validate_positive, validate_range

logger = logging.getLogger(__name__)


class Tonemap:
    """
    Composable tone mapping pipeline.

    Operations (stackable, order-independent):
    - exposure: Scale by 2 ** stops (additive composition in stops)
    - gamma: Power-law display encoding (multiplicative composition)
    - filmic: Filmic curve with built-in gamma (replaces gamma encoding)
    - clamp: Clamp the result to [0, 1]

    Optimization:
        - exposure(1).exposure(0.5) -> exposure(1.5)
        - gamma(2.0).gamma(1.1) -> gamma(2.2) because (x^(1/a))^(1/b) = x^(1/(a*b))

    The pipeline never modifies its input; every call returns a new array.
    """

    __slots__ = (
        "_exposure_operations",
        "_gamma_operations",
        "_filmic",
        "_clamp",
        "_is_dirty",
        "_cached_exposure",
        "_cached_gamma",
    )

    def __init__(self):
        self._exposure_operations: list[float] = []
        self._gamma_operations: list[float] = []
        self._filmic: bool = False
        self._clamp: bool = False
        self._is_dirty: bool = True
        self._cached_exposure = 0.0
        self._cached_gamma = 1.0

        logger.info("[Tonemap] Initialized")

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def is_compiled(self) -> bool:
        """Check if optimized parameters are up-to-date."""
        return not self._is_dirty

    # ========================================================================
    # Operations
    # ========================================================================

    @validate_range(EXPOSURE_MIN, EXPOSURE_MAX, "stops")
    def exposure(self, stops: float) -> Self:
        """
        Add an exposure adjustment in stops.

        Multiple exposures add: exposure(a).exposure(b) -> exposure(a + b)

        Returns:
            Self for method chaining
        """
        self._exposure_operations.append(float(stops))
        self._is_dirty = True
        return self

    @validate_positive("gamma")
    def gamma(self, gamma: float) -> Self:
        """
        Add gamma encoding (x ** (1 / gamma)).

        Multiple gammas multiply: gamma(a).gamma(b) -> gamma(a * b)

        Returns:
            Self for method chaining
        """
        self._gamma_operations.append(float(gamma))
        self._is_dirty = True
        return self

    def filmic(self, enabled: bool = True) -> Self:
        """
        Use the filmic curve for display encoding.

        The curve includes gamma, so gamma operations are ignored while it is on.

        Returns:
            Self for method chaining
        """
        self._filmic = bool(enabled)
        self._is_dirty = True
        return self

    def clamp(self, enabled: bool = True) -> Self:
        """
        Clamp the output to [0, 1].

        Returns:
            Self for method chaining
        """
        self._clamp = bool(enabled)
        self._is_dirty = True
        return self

    # ========================================================================
    # Compilation and Application
    # ========================================================================

    def _optimize_operations(self) -> dict[str, float]:
        exposure = 0.0
        for stops in self._exposure_operations:
            exposure += stops
        gamma = 1.0
        for value in self._gamma_operations:
            gamma *= value
        return {"exposure": exposure, "gamma": gamma}

    def compile(self) -> Self:
        """
        Reduce stacked operations to one exposure and one gamma value.

        Returns:
            Self for method chaining
        """
        if self.is_compiled:
            logger.debug("[Tonemap] Already compiled, skipping")
            return self

        optimized = self._optimize_operations()
        self._cached_exposure = optimized["exposure"]
        self._cached_gamma = optimized["gamma"]

        if self._filmic and self._gamma_operations:
            logger.warning(
                "[Tonemap] gamma=%.3f ignored: the filmic curve already encodes gamma",
                self._cached_gamma,
            )

        logger.debug(
            "[Tonemap] Optimized %d operations -> exposure=%.3f, gamma=%.3f, filmic=%s, clamp=%s",
            len(self),
            self._cached_exposure,
            self._cached_gamma,
            self._filmic,
            self._clamp,
        )
        self._is_dirty = False
        return self

    def is_identity(self) -> bool:
        """Check if this pipeline applies no tone operations."""
        return len(self) == 0

    def apply(self, image: np.ndarray) -> np.ndarray:
        """
        Apply the pipeline to an RGB or RGBA image.

        Args:
            image: Linear colors with 3 or 4 components on the last axis

        Returns:
            New array with the tone mapped colors
        """
        if self.is_identity():
            return np.array(image, copy=True)

        if not self.is_compiled:
            self.compile()

        result = expose_image(image, self._cached_exposure)
        if self._filmic:
            result = filmic_tonemap_image(result)
        elif self._cached_gamma != 1.0:
            result = linear_to_gamma(result, self._cached_gamma)

        if self._clamp:
            result = np.clip(result, 0.0, 1.0)

        logger.debug("[Tonemap] Applied to image of shape %s", result.shape)
        return result

    def __call__(self, image: np.ndarray) -> np.ndarray:
        """Apply the pipeline when called as a function."""
        return self.apply(image)

    def reset(self) -> Self:
        """
        Reset all operations to defaults.

        Returns:
            Self for method chaining
        """
        self._exposure_operations = []
        self._gamma_operations = []
        self._filmic = False
        self._clamp = False
        self._is_dirty = True
        logger.debug("[Tonemap] Reset to defaults")
        return self

    def __len__(self) -> int:
        """Return number of operations in pipeline."""
        return (
            len(self._exposure_operations)
            + len(self._gamma_operations)
            + int(self._filmic)
            + int(self._clamp)
        )

    def __repr__(self) -> str:
        optimized = self._optimize_operations()
        return (
            f"Tonemap(exposure={optimized['exposure']:.3f}, gamma={optimized['gamma']:.3f}, "
            f"filmic={self._filmic}, clamp={self._clamp})"
        )
