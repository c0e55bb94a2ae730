"""
Benchmark noise performance.

Tests point evaluation and image generation for each noise flavor.
"""

import logging
import time

import numpy as np

from pixpro.noise import (
    NoiseConfig,
    fbm,
    make_fbm_image,
    make_noise_image,
    make_ridge_image,
    make_turbulence_image,
    noise,
)

# Suppress logging for cleaner output
logging.getLogger("pixpro.noise.api").setLevel(logging.WARNING)


def _time(func, iterations: int) -> tuple[float, float]:
    func()  # Warmup
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func()
        end = time.perf_counter()
        times.append((end - start) * 1000)  # Convert to ms
    return float(np.mean(times)), float(np.std(times))


def benchmark_points(n: int = 1_000_000, iterations: int = 20):
    """Benchmark point evaluation of noise and fbm."""
    print("\n" + "=" * 80)
    print(f"POINT EVALUATION ({n:,} points, {iterations} iterations)")
    print("=" * 80)

    rng = np.random.default_rng(42)
    x, y, z = rng.uniform(-50.0, 50.0, size=(3, n))

    for name, func in (
        ("noise", lambda: noise(x, y, z)),
        ("fbm x6", lambda: fbm(x, y, z, octaves=6)),
    ):
        avg_time, std_time = _time(func, iterations)
        rate = n / (avg_time / 1000) / 1e6
        print(f"{name:<10} {avg_time:8.3f} ms +/- {std_time:.3f} ms  ({rate:.1f}M points/sec)")


def benchmark_images(size: int = 1024, iterations: int = 10):
    """Benchmark the image makers."""
    print("\n" + "=" * 80)
    print(f"IMAGE GENERATION ({size}x{size}, {iterations} iterations)")
    print("=" * 80)

    config = NoiseConfig(octaves=6)
    for maker in (make_noise_image, make_fbm_image, make_ridge_image, make_turbulence_image):
        avg_time, std_time = _time(lambda: maker(size, size, config), iterations)
        print(f"{maker.__name__:<24} {avg_time:8.3f} ms +/- {std_time:.3f} ms")


def main():
    """Run all noise benchmarks."""
    benchmark_points()
    benchmark_images()


if __name__ == "__main__":
    main()
