#!/usr/bin/env python3
"""
Experiment: Benchmark Huffman codec encode/decode throughput.

Measures:
1. Encode throughput (bytes/sec)
2. Decode throughput (bytes/sec)
3. Compression ratio and distance from the Shannon limit
"""

import sys
from pathlib import Path
import time
import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from huffpack.analysis import analyze_codebook
from huffpack.codec import encode_frame, decode_frame


def synthetic_data(n_bytes: int, distribution: str = 'gaussian') -> bytes:
    """Generate byte data with a given symbol distribution."""
    rng = np.random.default_rng(42)

    if distribution == 'gaussian':
        values = rng.normal(128, 16, n_bytes)
    elif distribution == 'laplacian':
        values = rng.laplace(128, 8, n_bytes)
    elif distribution == 'uniform':
        values = rng.uniform(0, 255, n_bytes)
    elif distribution == 'text':
        alphabet = np.frombuffer(b"etaoin shrdlu", dtype=np.uint8)
        weights = np.linspace(2.0, 0.5, len(alphabet))
        return rng.choice(alphabet, size=n_bytes, p=weights / weights.sum()).astype(np.uint8).tobytes()
    else:
        raise ValueError(f"Unknown distribution: {distribution}")

    # Clip below 255 so there are at most 255 distinct symbols
    return np.clip(np.round(values), 0, 254).astype(np.uint8).tobytes()


def benchmark_synthetic(n_bytes: int, distribution: str = 'gaussian', n_trials: int = 3) -> dict:
    """Benchmark on synthetic data."""
    data = synthetic_data(n_bytes, distribution)
    stats = analyze_codebook(data)

    # Benchmark encode
    encode_times = []
    for _ in range(n_trials):
        t0 = time.perf_counter()
        frame = encode_frame(data)
        encode_times.append(time.perf_counter() - t0)

    avg_encode = np.mean(encode_times)

    # Benchmark decode
    decode_times = []
    for _ in range(n_trials):
        t0 = time.perf_counter()
        decoded = decode_frame(frame)
        decode_times.append(time.perf_counter() - t0)

    avg_decode = np.mean(decode_times)

    return {
        'n_bytes': n_bytes,
        'distribution': distribution,
        'entropy': stats['entropy'],
        'average_code_length': stats['average_code_length'],
        'compression_ratio': frame.compression_ratio,
        'bits_per_symbol': frame.bits_per_symbol,
        'encode_time_ms': avg_encode * 1000,
        'decode_time_ms': avg_decode * 1000,
        'encode_throughput_MB': n_bytes / avg_encode / 1e6,
        'decode_throughput_MB': n_bytes / avg_decode / 1e6,
        'is_correct': decoded == data,
    }


def main():
    print("="*70)
    print(" Huffman Codec Benchmark")
    print("="*70)
    print(f"{'Distribution':<12} {'Size':>10} {'Entropy':>8} {'Avg len':>8} "
          f"{'Ratio':>7} {'Enc MB/s':>9} {'Dec MB/s':>9} {'OK':>4}")
    print("-"*70)

    for distribution in ('gaussian', 'laplacian', 'uniform', 'text'):
        for n_bytes in (10_000, 100_000):
            r = benchmark_synthetic(n_bytes, distribution)
            print(f"{r['distribution']:<12} {r['n_bytes']:>10,} {r['entropy']:>8.3f} "
                  f"{r['average_code_length']:>8.3f} {r['compression_ratio']:>6.2f}x "
                  f"{r['encode_throughput_MB']:>9.2f} {r['decode_throughput_MB']:>9.2f} "
                  f"{'✓' if r['is_correct'] else '✗':>4}")

    print("="*70)


if __name__ == "__main__":
    main()
