"""
Resize module.

Provides separable image resampling with selectable reconstruction kernels
(box, triangle, cubic B-spline, Catmull-Rom, Mitchell) and edge modes
(clamp, reflect, wrap, zero).
"""

from pixpro.resize.api import compute_contributors, resize_image
from pixpro.resize.filters import (
    EdgeMode,
    ResizeFilter,
    evaluate_filter,
    filter_overshoot,
    filter_support,
)

__all__ = [
    "resize_image",
    "compute_contributors",
    "ResizeFilter",
    "EdgeMode",
    "filter_support",
    "filter_overshoot",
    "evaluate_filter",
]
