"""
Timing benchmark for the RLE and LZ77 codecs.
"""

import time
from dataclasses import dataclass

import numpy as np

from .LZ77 import LZ77
from .RLE import RLECompressor

SAMPLE_TEXT = (
    b"It is a truth universally acknowledged, that a single man in possession "
    b"of a good fortune, must be in want of a wife. "
)


@dataclass
class BenchmarkResult:
    algorithm: str
    data_kind: str
    size: int
    compressed_size: int
    compress_time: float
    decompress_time: float
    roundtrip_ok: bool

    @property
    def ratio(self) -> float:
        return self.compressed_size / self.size


def make_samples(size: int, seed: int = 0) -> dict[str, bytes]:
    """Repetitive, text-like and random inputs of the given size."""
    rng = np.random.default_rng(seed)
    repeats = -(-size // len(SAMPLE_TEXT))
    # runs of random length, like a scanned bitmap
    run_values = rng.integers(0, 4, size=size, dtype=np.uint8)
    run_lengths = rng.integers(1, 40, size=size)
    runs = np.repeat(run_values, run_lengths)[:size]
    return {
        "runs": runs.tobytes(),
        "text": (SAMPLE_TEXT * repeats)[:size],
        "random": rng.integers(0, 256, size=size, dtype=np.uint8).tobytes(),
    }


def _median_time(func, data, repeats: int) -> tuple[float, bytes]:
    timings = np.empty(repeats)
    result = b""
    for i in range(repeats):
        start = time.perf_counter()
        result = func(data)
        timings[i] = time.perf_counter() - start
    return float(np.median(timings)), result


def run_benchmark(
    sizes=(1000, 10000),
    repeats: int = 3,
    seed: int = 0,
    window_size: int | None = None,
    verbose: bool = False,
) -> list[BenchmarkResult]:
    """
    Encode and decode every sample with both codecs.

    Args:
        sizes: input sizes in bytes
        repeats: runs per measurement, the median is kept
        seed: numpy RNG seed for the generated samples
        window_size: LZ77 search window
        verbose: print each result as it is measured

    Returns:
        List of BenchmarkResult
    """
    if repeats < 1:
        raise ValueError("repeats must be at least 1")
    codecs = (RLECompressor(), LZ77(window_size))
    results = []

    for size in sizes:
        for kind, data in make_samples(size, seed).items():
            for codec in codecs:
                compress_time, compressed = _median_time(codec.encode, data, repeats)
                decompress_time, restored = _median_time(codec.decode, compressed, repeats)
                result = BenchmarkResult(
                    algorithm=codec.name,
                    data_kind=kind,
                    size=size,
                    compressed_size=len(compressed),
                    compress_time=compress_time,
                    decompress_time=decompress_time,
                    roundtrip_ok=restored == data,
                )
                if verbose:
                    print(format_results([result], header=False))
                results.append(result)

    return results


def format_results(results: list[BenchmarkResult], header: bool = True) -> str:
    lines = []
    if header:
        lines.append(
            f"{'algorithm':<10}{'data':<8}{'size':>9}{'packed':>9}{'ratio':>8}"
            f"{'compress s':>12}{'decompress s':>14}  ok"
        )
        lines.append("-" * 74)
    for r in results:
        lines.append(
            f"{r.algorithm:<10}{r.data_kind:<8}{r.size:>9}{r.compressed_size:>9}"
            f"{r.ratio:>8.2f}{r.compress_time:>12.4f}{r.decompress_time:>14.4f}"
            f"  {'yes' if r.roundtrip_ok else 'NO'}"
        )
    return "\n".join(lines)
