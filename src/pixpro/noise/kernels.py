"""
Numba-optimized kernels for gradient noise.

Improved gradient noise on the integer lattice (quintic fade, twelve edge
gradients hashed through a fixed 256-entry permutation), plus the fbm,
ridge and turbulence fractal sums. There is no seed: the table is fixed,
so identical inputs always produce bit-identical outputs. The kernels are
compiled without fastmath, so results do not depend on how the compiler
reassociates floating-point arithmetic.

Lattice wrapping: a positive period p folds lattice coordinates with the
mask p - 1, which tiles correctly only when p is a power of two. A period
of 0 leaves the table's natural period of 256.
"""

import numpy as np
from numba import njit, prange

# Fractal modes shared by the point and image kernels
MODE_NOISE = 0
MODE_FBM = 1
MODE_RIDGE = 2
MODE_TURBULENCE = 3

# Reference permutation of 0..255, repeated so that hashes never index past the end
_PERMUTATION = np.array(
    [
        151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
        140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
        247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
        57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
        74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
        60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
        65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
        200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
        52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
        207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
        119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
        129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
        218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
        81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
        184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
        222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
    ],
    dtype=np.int64,
)
PERM = np.concatenate([_PERMUTATION, _PERMUTATION])


# ============================================================================
# Base Noise
# ============================================================================


@njit(cache=True, nogil=True)
def _fade(t: float) -> float:
    """Quintic fade 6t^5 - 15t^4 + 10t^3 (zero first and second derivative at 0 and 1)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@njit(cache=True, nogil=True)
def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


@njit(cache=True, nogil=True)
def _grad(hash_value: int, x: float, y: float, z: float) -> float:
    """Dot product with one of twelve cube-edge gradients (four repeated)."""
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    if h & 1:
        u = -u
    if h & 2:
        v = -v
    return u + v


@njit(cache=True, nogil=True)
def _lattice_mask(period: int) -> int:
    if period > 0:
        return (period - 1) & 255
    return 255


@njit(cache=True, nogil=True)
def perlin_noise3(
    x: float, y: float, z: float, wrap_x: int, wrap_y: int, wrap_z: int
) -> float:
    """
    Evaluate gradient noise at one point.

    Args:
        x, y, z: Lattice-space coordinates
        wrap_x, wrap_y, wrap_z: Per-axis lattice period (0 = no wrap)

    Returns:
        Noise value in [-1, 1]; exactly 0 at integer lattice points
    """
    fx0 = np.floor(x)
    fy0 = np.floor(y)
    fz0 = np.floor(z)
    ix = np.int64(fx0)
    iy = np.int64(fy0)
    iz = np.int64(fz0)
    x -= fx0
    y -= fy0
    z -= fz0

    mx = _lattice_mask(wrap_x)
    my = _lattice_mask(wrap_y)
    mz = _lattice_mask(wrap_z)
    x0 = ix & mx
    x1 = (ix + 1) & mx
    y0 = iy & my
    y1 = (iy + 1) & my
    z0 = iz & mz
    z1 = (iz + 1) & mz

    r0 = PERM[x0]
    r1 = PERM[x1]
    r00 = PERM[r0 + y0]
    r01 = PERM[r0 + y1]
    r10 = PERM[r1 + y0]
    r11 = PERM[r1 + y1]

    n000 = _grad(PERM[r00 + z0], x, y, z)
    n001 = _grad(PERM[r00 + z1], x, y, z - 1.0)
    n010 = _grad(PERM[r01 + z0], x, y - 1.0, z)
    n011 = _grad(PERM[r01 + z1], x, y - 1.0, z - 1.0)
    n100 = _grad(PERM[r10 + z0], x - 1.0, y, z)
    n101 = _grad(PERM[r10 + z1], x - 1.0, y, z - 1.0)
    n110 = _grad(PERM[r11 + z0], x - 1.0, y - 1.0, z)
    n111 = _grad(PERM[r11 + z1], x - 1.0, y - 1.0, z - 1.0)

    u = _fade(x)
    v = _fade(y)
    w = _fade(z)

    n00 = _lerp(n000, n001, w)
    n01 = _lerp(n010, n011, w)
    n10 = _lerp(n100, n101, w)
    n11 = _lerp(n110, n111, w)
    n0 = _lerp(n00, n01, v)
    n1 = _lerp(n10, n11, v)
    result = _lerp(n0, n1, u)

    if result > 1.0:
        return 1.0
    if result < -1.0:
        return -1.0
    return result


# ============================================================================
# Fractal Sums
# ============================================================================


@njit(cache=True, nogil=True)
def _scaled_period(period: int, frequency: float) -> int:
    if period <= 0:
        return 0
    return np.int64(period * frequency)


@njit(cache=True, nogil=True)
def fractal_noise3(
    x: float,
    y: float,
    z: float,
    wrap_x: int,
    wrap_y: int,
    wrap_z: int,
    mode: int,
    lacunarity: float,
    gain: float,
    offset: float,
    octaves: int,
) -> float:
    """
    Evaluate the base noise or one of its fractal sums at one point.

    fbm: amplitude starts at 1 and is multiplied by gain per octave.
    turbulence: same weights applied to |noise|.
    ridge: r = (offset - |noise|)^2 weighted by the previous octave's r,
    amplitude starts at 0.5 and is multiplied by gain^2 per octave.
    In every sum the lattice period is scaled with the octave frequency.
    """
    if mode == MODE_NOISE:
        return perlin_noise3(x, y, z, wrap_x, wrap_y, wrap_z)

    frequency = 1.0
    total = 0.0

    if mode == MODE_RIDGE:
        amplitude = 0.5
        previous = 1.0
        gain_sq = gain * gain
        for _ in range(octaves):
            n = perlin_noise3(
                x * frequency,
                y * frequency,
                z * frequency,
                _scaled_period(wrap_x, frequency),
                _scaled_period(wrap_y, frequency),
                _scaled_period(wrap_z, frequency),
            )
            r = offset - abs(n)
            r = r * r
            total += r * amplitude * previous
            previous = r
            frequency *= lacunarity
            amplitude *= gain_sq
        return total

    amplitude = 1.0
    for _ in range(octaves):
        n = perlin_noise3(
            x * frequency,
            y * frequency,
            z * frequency,
            _scaled_period(wrap_x, frequency),
            _scaled_period(wrap_y, frequency),
            _scaled_period(wrap_z, frequency),
        )
        if mode == MODE_TURBULENCE:
            n = abs(n)
        total += n * amplitude
        frequency *= lacunarity
        amplitude *= gain
    return total


# ============================================================================
# Batch Kernels
# ============================================================================


@njit(parallel=True, cache=True, nogil=True)
def noise_points_numba(
    points: np.ndarray,
    wrap: np.ndarray,
    mode: int,
    lacunarity: float,
    gain: float,
    offset: float,
    octaves: int,
    out: np.ndarray,
) -> None:
    """
    Evaluate noise at many points.

    Args:
        points: Lattice-space coordinates [N, 3]
        wrap: Per-axis lattice period [3] (0 = no wrap)
        mode: MODE_NOISE, MODE_FBM, MODE_RIDGE or MODE_TURBULENCE
        lacunarity: Frequency multiplier per octave
        gain: Amplitude multiplier per octave
        offset: Ridge offset (ridge mode only)
        octaves: Number of octaves (fractal modes only)
        out: Output values [N] (modified in-place)
    """
    n = points.shape[0]

    for i in prange(n):
        out[i] = fractal_noise3(
            points[i, 0],
            points[i, 1],
            points[i, 2],
            wrap[0],
            wrap[1],
            wrap[2],
            mode,
            lacunarity,
            gain,
            offset,
            octaves,
        )


@njit(parallel=True, cache=True, nogil=True)
def noise_image_numba(
    cells: float,
    wrap: np.ndarray,
    mode: int,
    lacunarity: float,
    gain: float,
    offset: float,
    octaves: int,
    out: np.ndarray,
) -> None:
    """
    Render a grayscale noise image.

    Pixel (i, j) samples the lattice at (i / W * cells, j / H * cells, 0.5).
    Signed modes (noise, fbm) are mapped with 0.5 + 0.5 * v, unsigned modes
    (ridge, turbulence) are used as is; the result is clamped to [0, 1].

    Args:
        cells: Lattice cells across the image
        wrap: Per-axis lattice period [3] (0 = no wrap)
        mode: MODE_NOISE, MODE_FBM, MODE_RIDGE or MODE_TURBULENCE
        lacunarity: Frequency multiplier per octave
        gain: Amplitude multiplier per octave
        offset: Ridge offset (ridge mode only)
        octaves: Number of octaves (fractal modes only)
        out: Output image [H, W, 3] (modified in-place)
    """
    H = out.shape[0]
    W = out.shape[1]
    signed = mode == MODE_NOISE or mode == MODE_FBM

    for j in prange(H):
        y = j / H * cells
        for i in range(W):
            x = i / W * cells
            v = fractal_noise3(
                x, y, 0.5, wrap[0], wrap[1], wrap[2], mode, lacunarity, gain, offset, octaves
            )
            if signed:
                v = 0.5 + 0.5 * v
            if v < 0.0:
                v = 0.0
            elif v > 1.0:
                v = 1.0
            out[j, i, 0] = v
            out[j, i, 1] = v
            out[j, i, 2] = v


# ============================================================================
# Helper Functions
# ============================================================================


def warmup_noise_kernels() -> None:
    """
    Warm up Numba JIT compilation for noise kernels.

    Call this once at import time to avoid first-call compilation overhead.
    """
    points = np.linspace(0.0, 4.0, 8 * 3, dtype=np.float64).reshape(8, 3)
    wrap = np.zeros(3, dtype=np.int64)
    values = np.empty(8, dtype=np.float64)
    noise_points_numba(points, wrap, MODE_FBM, 2.0, 0.5, 1.0, 2, values)

    image = np.empty((4, 4, 3), dtype=np.float32)
    noise_image_numba(8.0, wrap, MODE_FBM, 2.0, 0.5, 1.0, 2, image)


# Warmup on import to avoid first-call overhead
warmup_noise_kernels()
