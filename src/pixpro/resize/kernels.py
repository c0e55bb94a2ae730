"""
Numba-optimized kernels for separable image resampling.

Each pass gathers a fixed number of taps per destination sample from a
precomputed contributor table (indices [dst, taps], weights [dst, taps]).
A negative index marks a tap that contributes nothing (zero edge mode).
Rows (or columns) are processed in parallel; every output element is
accumulated in a fixed tap order, so results are deterministic.
"""

import numpy as np
from numba import njit, prange

# ============================================================================
# Resampling Passes
# ============================================================================


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def resample_horizontal_numba(
    src: np.ndarray,
    indices: np.ndarray,
    weights: np.ndarray,
    out: np.ndarray,
) -> None:
    """
    Resample along the width axis.

    Args:
        src: Source image [H, W, C]
        indices: Source column per destination column and tap [W', T]
        weights: Normalized tap weights [W', T]
        out: Output buffer [H, W', C]
    """
    H = src.shape[0]
    C = src.shape[2]
    W_out = indices.shape[0]
    T = indices.shape[1]

    for y in prange(H):
        for x in range(W_out):
            for c in range(C):
                acc = 0.0
                for k in range(T):
                    idx = indices[x, k]
                    if idx >= 0:
                        acc += weights[x, k] * src[y, idx, c]
                out[y, x, c] = acc


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def resample_vertical_numba(
    src: np.ndarray,
    indices: np.ndarray,
    weights: np.ndarray,
    out: np.ndarray,
) -> None:
    """
    Resample along the height axis.

    Args:
        src: Source image [H, W, C]
        indices: Source row per destination row and tap [H', T]
        weights: Normalized tap weights [H', T]
        out: Output buffer [H', W, C]
    """
    W = src.shape[1]
    C = src.shape[2]
    H_out = indices.shape[0]
    T = indices.shape[1]

    for y in prange(H_out):
        for x in range(W):
            for c in range(C):
                acc = 0.0
                for k in range(T):
                    idx = indices[y, k]
                    if idx >= 0:
                        acc += weights[y, k] * src[idx, x, c]
                out[y, x, c] = acc


# ============================================================================
# Alpha Handling
# ============================================================================


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def premultiply_alpha_numba(image: np.ndarray, out: np.ndarray) -> None:
    """
    Multiply RGB by alpha.

    Args:
        image: RGBA image [H, W, 4]
        out: Output buffer [H, W, 4]
    """
    H = image.shape[0]
    W = image.shape[1]

    for y in prange(H):
        for x in range(W):
            a = image[y, x, 3]
            out[y, x, 0] = image[y, x, 0] * a
            out[y, x, 1] = image[y, x, 1] * a
            out[y, x, 2] = image[y, x, 2] * a
            out[y, x, 3] = a


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def unpremultiply_alpha_numba(image: np.ndarray, out: np.ndarray) -> None:
    """
    Divide RGB by alpha; pixels with alpha <= 0 become transparent black.

    Args:
        image: Premultiplied RGBA image [H, W, 4]
        out: Output buffer [H, W, 4]
    """
    H = image.shape[0]
    W = image.shape[1]

    for y in prange(H):
        for x in range(W):
            a = image[y, x, 3]
            if a > 0.0:
                inv = 1.0 / a
                out[y, x, 0] = image[y, x, 0] * inv
                out[y, x, 1] = image[y, x, 1] * inv
                out[y, x, 2] = image[y, x, 2] * inv
                out[y, x, 3] = a
            else:
                out[y, x, 0] = 0.0
                out[y, x, 1] = 0.0
                out[y, x, 2] = 0.0
                out[y, x, 3] = 0.0


# ============================================================================
# Helper Functions
# ============================================================================


def warmup_resize_kernels() -> None:
    """
    Warm up Numba JIT compilation for resize kernels.

    Call this once at import time to avoid first-call compilation overhead.
    """
    image = np.linspace(0, 1, 8 * 8 * 4, dtype=np.float32).reshape(8, 8, 4)
    indices = np.tile(np.arange(4, dtype=np.int64), (4, 1))
    weights = np.full((4, 4), 0.25, dtype=np.float64)

    tmp = np.empty((8, 4, 4), dtype=np.float32)
    resample_horizontal_numba(image, indices, weights, tmp)
    out = np.empty((4, 4, 4), dtype=np.float32)
    resample_vertical_numba(tmp, indices, weights, out)

    scratch = np.empty_like(image)
    premultiply_alpha_numba(image, scratch)
    unpremultiply_alpha_numba(scratch, image)


# Warmup on import to avoid first-call overhead
warmup_resize_kernels()
