#!/usr/bin/env python3
"""
Benchmark the prime engine's sieve and Miller-Rabin paths.

Compares:
1. Batch sizes: sieving up to N with a few batch sizes (cache cleared between runs)
2. Primality paths: Miller-Rabin vs sieve-then-trial-division on the same values

Run at N=10^7 or 10^8 for quick comparison.
"""

import argparse
import time

import numpy as np

from prime_engine.engine import PrimeEngine


def benchmark(N: int, samples: int = 2000, seed: int = 42):
    """Run benchmark comparing batch sizes and primality paths."""
    print("=" * 60)
    print(f"Prime Engine Benchmark: N = {N:,}")
    print("=" * 60)
    print()

    # ============================================================
    # Benchmark 1: Batch sizes
    # ============================================================
    print("-" * 60)
    print("Sieve up to N with different batch sizes")
    print("-" * 60)

    counts = {}
    for batch_size in [1 << 16, 1 << 20, 1 << 24]:
        engine = PrimeEngine(max_batch_size=batch_size)
        t0 = time.time()
        batches = engine.sieve_up_to(N)
        elapsed = time.time() - t0
        counts[batch_size] = len(engine.cache)
        print(f"  batch={batch_size:>10,}: {elapsed:.2f}s  ({batches:,} batches, {counts[batch_size]:,} primes)")

        # Second call must be free
        t0 = time.time()
        assert engine.sieve_up_to(N) == 0
        print(f"  {'':>17}repeat: {time.time() - t0:.6f}s")
        engine.clear_cache()
    print()

    # ============================================================
    # Benchmark 2: Miller-Rabin vs trial division
    # ============================================================
    print("-" * 60)
    print(f"Primality of {samples:,} random values below N")
    print("-" * 60)

    rng = np.random.default_rng(seed)
    values = [int(v) for v in rng.integers(2, N, size=samples)]

    fast = PrimeEngine()
    t0 = time.time()
    fast_results = [fast.is_prime(v) for v in values]
    t_fast = time.time() - t0
    print(f"  Miller-Rabin:    {t_fast:.3f}s")

    slow = PrimeEngine()
    t0 = time.time()
    slow_results = [slow.is_prime_by_trial_division(v) for v in values]
    t_slow = time.time() - t0
    print(f"  Trial division:  {t_slow:.3f}s")
    print()

    # ============================================================
    # Summary
    # ============================================================
    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    if t_fast > 0:
        print(f"Miller-Rabin speedup: {t_slow / t_fast:.2f}x")

    print()
    print("Verifying correctness...")
    if len(set(counts.values())) == 1:
        print(f"  Batch sizes: OK ({next(iter(counts.values())):,} primes)")
    else:
        print(f"  Batch sizes: MISMATCH! {counts}")
    mismatches = sum(1 for a, b in zip(fast_results, slow_results) if a != b)
    if mismatches == 0:
        print(f"  Primality paths: OK ({sum(fast_results):,} primes among samples)")
    else:
        print(f"  Primality paths: MISMATCH! {mismatches} values differ")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Benchmark the prime engine')
    parser.add_argument('--N', type=float, default=1e7, help='Sieve limit')
    parser.add_argument('--samples', type=int, default=2000, help='Random values to test')
    parser.add_argument('--seed', type=int, default=42, help='Random seed')
    args = parser.parse_args()

    benchmark(int(args.N), args.samples, args.seed)
