"""
Benchmark of the baseline RLE codec against the multi-strategy codec:
synthetic test patterns, timing, round-trip verification and a
comparison table.
"""

import argparse
import time

import numpy as np

from compressor_ABC import Compressor
from multi_strategy import MultiStrategyCompressor
from RLE import RLECompressor

ORIGINAL_EXAMPLE = bytes(
    [
        0x03, 0x74, 0x04, 0x04, 0x04, 0x35, 0x35, 0x64,
        0x64, 0x64, 0x64, 0x00, 0x00, 0x00, 0x00, 0x00,
        0x56, 0x45, 0x56, 0x56, 0x56, 0x09, 0x09, 0x09,
    ]
)

PATTERNS = {
    "zeros": "All zeros",
    "runs": "Random runs",
    "sequence": "Incrementing",
    "pattern": "Repeating pattern",
    "nibbles": "Small values <16",
    "mixed": "Mixed patterns",
    "random": "Random data",
}

SCALING_SIZES = (16, 64, 256, 1024, 4096)


def generate_pattern(kind: str, size: int, rng: np.random.Generator) -> bytes:
    """
    Build a synthetic test buffer of 7-bit values.

    Args:
        kind: one of the PATTERNS keys
        size: buffer length in bytes
        rng: numpy random generator

    Returns:
        The generated buffer
    """
    if kind == "zeros":
        data = np.zeros(size, dtype=np.uint8)
    elif kind == "random":
        data = rng.integers(0, 0x80, size, dtype=np.uint8)
    elif kind == "runs":
        chunks = []
        total = 0
        while total < size:
            run_len = int(rng.integers(1, 11))
            chunks.append(np.full(run_len, rng.integers(0, 0x80), dtype=np.uint8))
            total += run_len
        data = np.concatenate(chunks)[:size] if chunks else np.zeros(0, np.uint8)
    elif kind == "sequence":
        data = (np.arange(size) % 128).astype(np.uint8)
    elif kind == "pattern":
        data = np.resize(np.array([0x12, 0x34, 0x56, 0x78], dtype=np.uint8), size)
    elif kind == "nibbles":
        data = rng.integers(0, 0x10, size, dtype=np.uint8)
    elif kind == "mixed":
        data = np.zeros(size, dtype=np.uint8)
        pos = 0
        while pos < size:
            choice = int(rng.integers(0, 4))
            end = min(size, pos + int(rng.integers(5, 25)))
            idx = np.arange(pos, end)
            if choice == 1:
                data[pos:end] = idx & 0x7F
            elif choice == 2:
                data[pos:end] = (idx // 3) & 0x7F
            elif choice == 3:
                data[pos:end] = rng.integers(0, 0x80, end - pos)
            pos = end
    else:
        raise ValueError(f"Unknown pattern: {kind}")
    return data.astype(np.uint8).tobytes()


def run_single_test(codec: Compressor, data: bytes) -> dict:
    """Compress and decompress data once, timing both and verifying."""
    start_time = time.perf_counter()
    compressed = codec.encode(data)
    compress_time = (time.perf_counter() - start_time) * 1000

    start_time = time.perf_counter()
    restored = codec.decode(compressed)
    decompress_time = (time.perf_counter() - start_time) * 1000

    ratio = (1 - len(compressed) / len(data)) * 100 if data else 0.0
    return {
        "original_size": len(data),
        "compressed_size": len(compressed),
        "compression_ratio": ratio,
        "compress_time_ms": compress_time,
        "decompress_time_ms": decompress_time,
        "verified": restored == data,
    }


def pick_winner(simple: dict, advanced: dict) -> tuple[str, float]:
    """Winner of a comparison row and its advantage in percentage points."""
    s, a = simple["compression_ratio"], advanced["compression_ratio"]
    if s > a + 0.1:
        return "Simple", s - a
    if a > s + 0.1:
        return "Advanced", a - s
    return "Draw", 0.0


class CodecBenchmark:
    """Runs the comparison between the two codecs and prints the results."""

    def __init__(self, seed: int | None = None, size: int = 256, iterations: int = 1000):
        self.rng = np.random.default_rng(seed)
        self.size = size
        self.iterations = iterations
        self.algorithms = {
            "Simple RLE": RLECompressor(),
            "Advanced Multi-Strategy": MultiStrategyCompressor(),
        }
        self.totals = {name: [] for name in self.algorithms}

    def _print_header(self):
        print(f"\n{'Test Case':<26} | {'Simple RLE':>17} | {'Advanced Multi':>17} | "
              f"{'Winner':<9} | Advantage")
        print("-" * 90)

    def _print_row(self, name: str, simple: dict, advanced: dict):
        winner, advantage = pick_winner(simple, advanced)
        print(
            f"{name:<26} | "
            f"{simple['compression_ratio']:6.1f}% ({simple['compressed_size']:4d} B) | "
            f"{advanced['compression_ratio']:6.1f}% ({advanced['compressed_size']:4d} B) | "
            f"{winner:<9} | {advantage:+6.1f}%"
        )

    def _compare(self, data: bytes) -> tuple[dict, dict]:
        simple, advanced = (
            run_single_test(codec, data) for codec in self.algorithms.values()
        )
        return simple, advanced

    def run_example(self) -> dict:
        print("\n1. ORIGINAL EXAMPLE TEST")
        results = {}
        for name, codec in self.algorithms.items():
            result = run_single_test(codec, ORIGINAL_EXAMPLE)
            results[name] = result
            status = "PASSED" if result["verified"] else "FAILED"
            print(f"   {name}:")
            print(f"   - Compression: {result['original_size']} -> "
                  f"{result['compressed_size']} bytes "
                  f"({result['compression_ratio']:.1f}% saved)")
            print(f"   - Time: {result['compress_time_ms']:.3f} ms compress, "
                  f"{result['decompress_time_ms']:.3f} ms decompress")
            print(f"   - Verification: {status}")
        return results

    def run_pattern_tests(self) -> list[tuple[str, dict, dict]]:
        print(f"\n2. PATTERN-BASED PERFORMANCE TESTS ({self.size} bytes each)")
        self._print_header()
        rows = []
        for kind, description in PATTERNS.items():
            data = generate_pattern(kind, self.size, self.rng)
            simple, advanced = self._compare(data)
            self._print_row(description, simple, advanced)
            self.totals["Simple RLE"].append(simple["compression_ratio"])
            self.totals["Advanced Multi-Strategy"].append(advanced["compression_ratio"])
            rows.append((description, simple, advanced))
        return rows

    def run_size_scaling(self) -> list[tuple[str, dict, dict]]:
        print("\n3. SIZE SCALING TESTS (Mixed Pattern)")
        self._print_header()
        rows = []
        for size in SCALING_SIZES:
            data = generate_pattern("mixed", size, self.rng)
            simple, advanced = self._compare(data)
            self._print_row(f"{size} bytes", simple, advanced)
            rows.append((f"{size} bytes", simple, advanced))
        return rows

    def run_speed(self) -> dict:
        print(f"\n4. SPEED BENCHMARK ({self.iterations} iterations on "
              f"{self.size}-byte buffer)")
        data = generate_pattern("mixed", self.size, self.rng)
        speeds = {}
        for name, codec in self.algorithms.items():
            start = time.perf_counter()
            for _ in range(self.iterations):
                codec.encode(data)
            elapsed_ms = (time.perf_counter() - start) * 1000
            throughput = (self.size * self.iterations) / (elapsed_ms * 1000) if elapsed_ms else 0.0
            speeds[name] = elapsed_ms
            print(f"   {name}:")
            print(f"   - Compression: {elapsed_ms:.2f} ms total, "
                  f"{elapsed_ms * 1000 / self.iterations:.4f} us per operation")
            print(f"   - Throughput: {throughput:.2f} MB/s")
        return speeds

    def summary(self) -> tuple[float, float]:
        print("\n5. SUMMARY")
        simple = self.totals["Simple RLE"]
        advanced = self.totals["Advanced Multi-Strategy"]
        avg_simple = sum(simple) / len(simple) if simple else 0.0
        avg_advanced = sum(advanced) / len(advanced) if advanced else 0.0
        print(f"   - Average compression: Simple RLE = {avg_simple:.1f}%, "
              f"Advanced = {avg_advanced:.1f}%")
        print(f"   - Advanced achieves {avg_advanced - avg_simple:.1f}% better "
              f"compression on average")
        return avg_simple, avg_advanced

    def run_all(self):
        self.run_example()
        self.run_pattern_tests()
        self.run_size_scaling()
        self.run_speed()
        return self.summary()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare baseline RLE with the multi-strategy codec")
    parser.add_argument("--seed", type=int, default=None, help="random seed for test data")
    parser.add_argument("--size", type=int, default=256, help="buffer size for pattern tests")
    parser.add_argument("--iterations", type=int, default=10000, help="speed benchmark iterations")
    args = parser.parse_args(argv)

    CodecBenchmark(seed=args.seed, size=args.size, iterations=args.iterations).run_all()


if __name__ == "__main__":
    main()
