"""
Reconstruction kernels and edge modes for separable resampling.

Each filter variant is a pure, vectorized function of the sample offset
(in destination-normalized source pixels) with a finite support radius.
Adding a filter means adding an enum member, its function and its radius.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from pixpro.constants import BOX_SUPPORT, CUBIC_SUPPORT, OVERSHOOT_MARGIN, TRIANGLE_SUPPORT


class ResizeFilter(Enum):
    """Reconstruction kernel used by resize_image."""

    DEFAULT = "default"  # Catmull-Rom when upsampling, Mitchell when downsampling
    BOX = "box"
    TRIANGLE = "triangle"
    CUBIC_SPLINE = "cubic_spline"
    CATMULL_ROM = "catmull_rom"
    MITCHELL = "mitchell"

    @classmethod
    def parse(cls, value: ResizeFilter | str) -> ResizeFilter:
        """Accept an enum member or its string value ("box", "mitchell", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"filter='{value}' is not valid. Valid options are: {choices}") from None


class EdgeMode(Enum):
    """Boundary policy for taps that fall outside the source image."""

    DEFAULT = "default"  # Clamp
    CLAMP = "clamp"
    REFLECT = "reflect"
    WRAP = "wrap"
    ZERO = "zero"

    @classmethod
    def parse(cls, value: EdgeMode | str) -> EdgeMode:
        """Accept an enum member or its string value ("clamp", "wrap", ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"edge='{value}' is not valid. Valid options are: {choices}") from None


# ============================================================================
# Kernel Functions
# ============================================================================


def box_kernel(x: np.ndarray) -> np.ndarray:
    """Box filter: 1 on [-0.5, 0.5), else 0."""
    x = np.asarray(x, dtype=np.float64)
    return np.where((x >= -0.5) & (x < 0.5), 1.0, 0.0)


def triangle_kernel(x: np.ndarray) -> np.ndarray:
    """Tent filter: 1 - |x| on [-1, 1]."""
    x = np.abs(np.asarray(x, dtype=np.float64))
    return np.maximum(1.0 - x, 0.0)


def _bc_cubic(x: np.ndarray, b: float, c: float) -> np.ndarray:
    """Mitchell-Netravali family of cubics with parameters (B, C), support 2."""
    x = np.abs(np.asarray(x, dtype=np.float64))
    x2 = x * x
    x3 = x2 * x
    near = ((12 - 9 * b - 6 * c) * x3 + (-18 + 12 * b + 6 * c) * x2 + (6 - 2 * b)) / 6
    far = (
        (-b - 6 * c) * x3 + (6 * b + 30 * c) * x2 + (-12 * b - 48 * c) * x + (8 * b + 24 * c)
    ) / 6
    return np.where(x < 1, near, np.where(x < 2, far, 0.0))


def cubic_spline_kernel(x: np.ndarray) -> np.ndarray:
    """Cubic B-spline (B=1, C=0): smooth, non-negative, not interpolating."""
    return _bc_cubic(x, 1.0, 0.0)


def catmull_rom_kernel(x: np.ndarray) -> np.ndarray:
    """Catmull-Rom spline (B=0, C=1/2): interpolating, with negative lobes."""
    return _bc_cubic(x, 0.0, 0.5)


def mitchell_kernel(x: np.ndarray) -> np.ndarray:
    """Mitchell-Netravali (B=C=1/3): small negative lobes."""
    return _bc_cubic(x, 1.0 / 3.0, 1.0 / 3.0)


_KERNELS = {
    ResizeFilter.BOX: (box_kernel, BOX_SUPPORT),
    ResizeFilter.TRIANGLE: (triangle_kernel, TRIANGLE_SUPPORT),
    ResizeFilter.CUBIC_SPLINE: (cubic_spline_kernel, CUBIC_SUPPORT),
    ResizeFilter.CATMULL_ROM: (catmull_rom_kernel, CUBIC_SUPPORT),
    ResizeFilter.MITCHELL: (mitchell_kernel, CUBIC_SUPPORT),
}


def resolve_filter(filter: ResizeFilter | str, src_size: int, dst_size: int) -> ResizeFilter:
    """Replace DEFAULT by Catmull-Rom (upsampling) or Mitchell (downsampling)."""
    filter = ResizeFilter.parse(filter)
    if filter is ResizeFilter.DEFAULT:
        return ResizeFilter.CATMULL_ROM if dst_size >= src_size else ResizeFilter.MITCHELL
    return filter


def resolve_edge(edge: EdgeMode | str) -> EdgeMode:
    """Replace DEFAULT by CLAMP."""
    edge = EdgeMode.parse(edge)
    return EdgeMode.CLAMP if edge is EdgeMode.DEFAULT else edge


def filter_support(filter: ResizeFilter | str) -> float:
    """
    Return the support radius of a kernel (at unit scale).

    Raises:
        ValueError: For DEFAULT, which has no fixed kernel
    """
    filter = ResizeFilter.parse(filter)
    if filter is ResizeFilter.DEFAULT:
        raise ValueError("ResizeFilter.DEFAULT has no fixed support; resolve it first")
    return _KERNELS[filter][1]


def filter_overshoot(filter: ResizeFilter | str) -> float:
    """
    Return the worst-case overshoot of one resampling pass, as a fraction of
    the source range (0 for kernels without negative lobes).
    """
    filter = ResizeFilter.parse(filter)
    if filter is ResizeFilter.DEFAULT:
        return max(OVERSHOOT_MARGIN["catmull_rom"], OVERSHOOT_MARGIN["mitchell"])
    return OVERSHOOT_MARGIN[filter.value]


def evaluate_filter(filter: ResizeFilter | str, x) -> np.ndarray:
    """
    Evaluate a kernel at offsets x (vectorized).

    Example:
        >>> evaluate_filter("triangle", [-1.0, -0.5, 0.0, 0.5])
        array([0. , 0.5, 1. , 0.5])
    """
    filter = ResizeFilter.parse(filter)
    if filter is ResizeFilter.DEFAULT:
        raise ValueError("ResizeFilter.DEFAULT has no fixed kernel; resolve it first")
    return _KERNELS[filter][0](x)


# ============================================================================
# Edge Remapping
# ============================================================================


def remap_indices(indices: np.ndarray, size: int, edge: EdgeMode) -> np.ndarray:
    """
    Map possibly out-of-range source indices into [0, size) per edge mode.

    ZERO marks out-of-range taps with -1 (they contribute nothing).
    """
    indices = np.asarray(indices, dtype=np.int64)
    if edge is EdgeMode.CLAMP:
        return np.clip(indices, 0, size - 1)
    if edge is EdgeMode.WRAP:
        return np.mod(indices, size)
    if edge is EdgeMode.REFLECT:
        # Mirror with the edge sample repeated: ... 1 0 | 0 1 ... n-1 | n-1 n-2 ...
        period = 2 * size
        folded = np.mod(indices, period)
        return np.where(folded >= size, period - 1 - folded, folded)
    if edge is EdgeMode.ZERO:
        return np.where((indices >= 0) & (indices < size), indices, -1)
    raise ValueError(f"Unresolved edge mode: {edge}")
