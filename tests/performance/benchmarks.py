"""
Performance benchmarks for the GS1 symbol encoder.
"""

import time
import statistics
from typing import Tuple

from gs1_encoder import EncodeOptions, PackedField, RasterOrder, Symbology, encode


def benchmark(func, iterations: int = 1000) -> Tuple[float, float, float]:
    """
    Run a benchmark and return timing statistics.

    Returns:
        (mean_ms, min_ms, max_ms)
    """
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        times.append(elapsed * 1000)  # Convert to ms

    return (
        statistics.mean(times),
        min(times),
        max(times)
    )


def fixed_packer(size: int):
    """Bit packer stand-in returning a fixed field of `size` data characters."""
    bits = bytes(range(0x10, 0x10 + 33))
    return lambda data, linkage: PackedField(bits, size)


def cc_rows(data: str, columns: int):
    return [[2] * 49 + [1] for _ in range(6)]


def run_benchmarks():
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("GS1 Symbol Encoder Benchmarks")
    print("=" * 60)
    print()

    test_cases = [
        ("EAN-13", "590123412345", Symbology.EAN13),
        ("UPC-A", "03600029145", Symbology.UPCA),
        ("EAN-8", "0123456", Symbology.EAN8),
        ("UPC-E", "04210000526", Symbology.UPCE),
    ]

    print("Linear symbols:")
    print("-" * 60)

    for name, data, symbology in test_cases:
        mean, min_t, max_t = benchmark(
            lambda d=data, s=symbology: encode(d, s),
            iterations=1000
        )
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("RSS Expanded (data characters / row width):")
    print("-" * 60)

    for size, seg_width in [(3, 22), (11, 22), (21, 22), (21, 4), (21, 2)]:
        options = EncodeOptions(seg_width=seg_width)
        packer = fixed_packer(size)
        mean, min_t, max_t = benchmark(
            lambda o=options, p=packer: encode("0112345678901231", Symbology.RSS_EXPANDED,
                                               o, bit_packer=p),
            iterations=200
        )
        name = f"{size} chars, {seg_width} per row"
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Composite symbols:")
    print("-" * 60)

    for order in RasterOrder:
        options = EncodeOptions(seg_width=6, raster_order=order)
        packer = fixed_packer(15)
        mean, min_t, max_t = benchmark(
            lambda o=options, p=packer: encode("0112345678901231|10ABC", Symbology.RSS_EXPANDED,
                                               o, bit_packer=p, cc_encoder=cc_rows),
            iterations=200
        )
        name = f"RSS Expanded CC {order.value}"
        print(f"  {name:30} {mean:8.3f}ms avg ({min_t:.3f}-{max_t:.3f})")

    print()
    print("Throughput test (1000 iterations):")
    print("-" * 60)

    start = time.perf_counter()
    for _ in range(1000):
        encode("590123412345", Symbology.EAN13)
    total = time.perf_counter() - start

    throughput = 1000 / total
    print(f"  Throughput: {throughput:.0f} encodes/second")
    print(f"  Total time: {total:.3f}s for 1000 encodes")

    print()
    print("=" * 60)


if __name__ == "__main__":
    run_benchmarks()
