"""
Benchmark script comparing the pure-Python vs JIT-compiled alias table.

This script builds alias tables of increasing size with both the heapq
reference builder and the numba kernel, times batch sampling, and plots the
empirical frequencies of the JIT sampler against the target distribution.

Usage:
    python benchmark_jit_alias.py
"""

import numpy as np
import time
import matplotlib.pyplot as plt
from aliasmethod import (
    AliasTable,
    build_alias_table,
    build_alias_table_reference,
    sample_alias_table_many,
)


def create_pmf(n, seed=0):
    """Create a skewed (Zipf-like) probability mass function over n outcomes."""
    rng = np.random.default_rng(seed)
    weights = 1.0 / np.arange(1, n + 1) ** 1.1
    rng.shuffle(weights)
    return weights / weights.sum()


def benchmark_build(pmf, use_jit=False):
    """
    Build one table and time it.

    Args:
        pmf: Probability mass function
        use_jit: Whether to use the numba kernel

    Returns:
        Elapsed time in seconds and the (table_probs, table_aliases) pair
    """
    start_time = time.time()
    if use_jit:
        table = build_alias_table(pmf)
    else:
        table = build_alias_table_reference(pmf)
    elapsed = time.time() - start_time
    return elapsed, table


def benchmark_sampling(table, n_draws, rng, use_jit=False):
    """Draw n_draws indices from a table and time it."""
    table_probs, table_aliases = table
    us = rng.random(n_draws)

    start_time = time.time()
    if use_jit:
        draws = sample_alias_table_many(us, table_probs, table_aliases)
    else:
        n = len(table_probs)
        draws = np.empty(n_draws, dtype=np.int64)
        for k, u in enumerate(us):
            i = min(int(n * u), n - 1)
            draws[k] = i if n * u - i < table_probs[i] else table_aliases[i]
    elapsed = time.time() - start_time
    return elapsed, draws


def create_frequency_plot(pmf, draws, alias_fraction):
    """
    Plot empirical frequencies of the JIT sampler against the target PMF.

    Args:
        pmf: Target probability mass function
        draws: Sampled indices
        alias_fraction: Share of draws expected to take the alias branch
    """
    n = len(pmf)
    freqs = np.bincount(draws, minlength=n) / len(draws)
    order = np.argsort(pmf)[::-1]

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax = axes[0]
    ax.bar(np.arange(n), pmf[order], color='steelblue', alpha=0.6, label='Target')
    ax.plot(np.arange(n), freqs[order], color='crimson', linewidth=1, label='Empirical')
    ax.set_xlabel('Outcome (sorted by probability)')
    ax.set_ylabel('Probability')
    ax.set_title(f'JIT sampler, {len(draws):,} draws\nalias fraction {alias_fraction:.3f}')
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.plot(np.arange(n), (freqs[order] - pmf[order]) / np.sqrt(pmf[order] / len(draws)),
            '.', color='darkred', markersize=2)
    ax.axhline(0.0, color='black', linewidth=0.5)
    ax.set_xlabel('Outcome (sorted by probability)')
    ax.set_ylabel('Standardized deviation')
    ax.set_title('Empirical minus target, in standard errors')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.show()


def main():
    """Run benchmark comparison."""
    print("=" * 70)
    print("Alias Method JIT Compilation Benchmark")
    print("=" * 70)
    print()

    sizes = [1_000, 100_000]
    n_draws = 1_000_000
    rng = np.random.default_rng(12345)

    # compile jit first time
    print(f"  Performing a first jit build and sample for compilation")
    _, table = benchmark_build(create_pmf(10), use_jit=True)
    benchmark_sampling(table, 10, rng, use_jit=True)
    print()

    for n in sizes:
        pmf = create_pmf(n)
        print(f"Benchmarking with {n:,} outcomes...")
        print("-" * 70)

        print(f"  Building with reference version...")
        time_ref, table_ref = benchmark_build(pmf, use_jit=False)
        print(f"    Time: {time_ref:.3f} seconds")

        print(f"  Building with JIT version...")
        time_jit, table_jit = benchmark_build(pmf, use_jit=True)
        print(f"    Time: {time_jit:.3f} seconds")
        print(f"    Speedup: {time_ref / time_jit:.2f}x")
        print()

        print(f"  Sampling {n_draws:,} draws with reference loop...")
        time_ref, _ = benchmark_sampling(table_ref, n_draws, rng, use_jit=False)
        print(f"    Time: {time_ref:.3f} seconds")

        print(f"  Sampling {n_draws:,} draws with JIT kernel...")
        time_jit, draws = benchmark_sampling(table_jit, n_draws, rng, use_jit=True)
        print(f"    Time: {time_jit:.3f} seconds")
        print(f"    Speedup: {time_ref / time_jit:.2f}x")
        print()

        table = AliasTable(probs=table_jit[0], aliases=table_jit[1])
        alias_fraction = table.alias_fraction()
        max_err = np.max(np.abs(table.implied_pmf() - pmf))

        print(f"  Validation:")
        print(f"    Alias fraction: {alias_fraction:.4f}")
        print(f"    Max |implied - target|: {max_err:.2e}")

        if max_err < 1e-9:
            print(f"    ✓ Table reproduces the target distribution")
        else:
            print(f"    ⚠ Table deviates from the target - check implementation")

        if n == sizes[0]:
            print()
            print(f"  Creating frequency plot for {n:,} outcomes...")
            create_frequency_plot(pmf, draws, alias_fraction)

        print()
        print()

    print("=" * 70)
    print("Benchmark Complete")
    print("=" * 70)


if __name__ == "__main__":
    main()
