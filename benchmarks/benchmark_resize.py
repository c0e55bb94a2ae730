"""
Benchmark resize performance.

Tests separable resampling at common image sizes and filters.
"""

import logging
import time

import numpy as np

from pixpro.resize import ResizeFilter, resize_image

# Suppress logging for cleaner output
logging.getLogger("pixpro.resize.api").setLevel(logging.WARNING)


def generate_image(width: int, height: int, channels: int = 4) -> np.ndarray:
    """Generate a random float image."""
    rng = np.random.default_rng(42)
    return rng.random((height, width, channels)).astype(np.float32)


def benchmark_resize(
    src: tuple[int, int],
    dst: tuple[int, int],
    filter: ResizeFilter = ResizeFilter.DEFAULT,
    iterations: int = 20,
):
    """Benchmark one resize configuration."""
    print("\n" + "=" * 80)
    label = f"{src[0]}x{src[1]} -> {dst[0]}x{dst[1]}"
    print(f"RESIZE {label} ({filter.value}, {iterations} iterations)")
    print("=" * 80)

    image = generate_image(*src)

    # Warmup
    for _ in range(3):
        resize_image(image, dst[0], dst[1], filter=filter)

    # Benchmark
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        resize_image(image, dst[0], dst[1], filter=filter)
        end = time.perf_counter()
        times.append((end - start) * 1000)  # Convert to ms

    avg_time = np.mean(times)
    std_time = np.std(times)
    pixels = dst[0] * dst[1]

    print(f"Time:       {avg_time:.3f} ms +/- {std_time:.3f} ms")
    print(f"Throughput: {pixels / (avg_time / 1000) / 1e6:.1f}M output pixels/sec")


def benchmark_byte_resize(iterations: int = 20):
    """Benchmark 8-bit resizing (includes the byte <-> float conversions)."""
    print("\n" + "=" * 80)
    print(f"RESIZE uint8 2048x2048 -> 512x512 ({iterations} iterations)")
    print("=" * 80)

    image = (generate_image(2048, 2048) * 255).astype(np.uint8)
    resize_image(image, 512, 512)

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        resize_image(image, 512, 512)
        end = time.perf_counter()
        times.append((end - start) * 1000)

    print(f"Time:       {np.mean(times):.3f} ms +/- {np.std(times):.3f} ms")


def main():
    """Run all resize benchmarks."""
    benchmark_resize((1024, 1024), (512, 512))
    benchmark_resize((1024, 1024), (2048, 2048))
    for filter in (ResizeFilter.BOX, ResizeFilter.TRIANGLE, ResizeFilter.MITCHELL):
        benchmark_resize((2048, 1024), (640, 320), filter=filter)
    benchmark_byte_resize()


if __name__ == "__main__":
    main()
