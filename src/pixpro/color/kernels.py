"""
Numba-optimized kernels for per-pixel color conversions.

Conversions with branches (HSV) run as JIT-compiled parallel loops over
flattened [N, 3] pixel arrays; matrix conversions stay in NumPy.
"""

import numpy as np
from numba import njit, prange

# ============================================================================
# HSV Conversion Kernels
# ============================================================================


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def rgb_to_hsv_numba(rgb: np.ndarray, out: np.ndarray) -> None:
    """
    Convert RGB to HSV with hue, saturation and value in [0, 1].

    Branch-light formulation: sort the channels with two conditional swaps
    and track the hue sector offset in k.

    Args:
        rgb: Input colors [N, 3]
        out: Output buffer [N, 3] (h, s, v)
    """
    N = rgb.shape[0]

    for i in prange(N):
        r = rgb[i, 0]
        g = rgb[i, 1]
        b = rgb[i, 2]
        k = 0.0

        if g < b:
            g, b = b, g
            k = -1.0
        if r < g:
            r, g = g, r
            k = -2.0 / 6.0 - k

        chroma = r - (g if g < b else b)
        out[i, 0] = abs(k + (g - b) / (6.0 * chroma + 1e-20))
        out[i, 1] = chroma / (r + 1e-20)
        out[i, 2] = r


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def hsv_to_rgb_numba(hsv: np.ndarray, out: np.ndarray) -> None:
    """
    Convert HSV (all components in [0, 1], hue wraps) to RGB.

    Args:
        hsv: Input colors [N, 3] (h, s, v)
        out: Output buffer [N, 3]
    """
    N = hsv.shape[0]

    for i in prange(N):
        h = hsv[i, 0]
        s = hsv[i, 1]
        v = hsv[i, 2]

        if s == 0.0:
            out[i, 0] = v
            out[i, 1] = v
            out[i, 2] = v
            continue

        sector = (h % 1.0) * 6.0
        idx = int(sector)
        f = sector - idx
        p = v * (1.0 - s)
        q = v * (1.0 - s * f)
        t = v * (1.0 - s * (1.0 - f))

        if idx == 0:
            r, g, b = v, t, p
        elif idx == 1:
            r, g, b = q, v, p
        elif idx == 2:
            r, g, b = p, v, t
        elif idx == 3:
            r, g, b = p, q, v
        elif idx == 4:
            r, g, b = t, p, v
        else:
            r, g, b = v, p, q

        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b


# ============================================================================
# Helper Functions
# ============================================================================


def warmup_color_kernels() -> None:
    """
    Warm up Numba JIT compilation for color kernels.

    Call this once at import time to avoid first-call compilation overhead.
    """
    for dtype in (np.float32, np.float64):
        colors = np.linspace(0, 1, 300, dtype=dtype).reshape(100, 3)
        out = np.empty_like(colors)
        rgb_to_hsv_numba(colors, out)
        hsv_to_rgb_numba(out, colors)


# Warmup on import to avoid first-call overhead
warmup_color_kernels()
