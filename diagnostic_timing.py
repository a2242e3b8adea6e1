"""Quick diagnostic script to measure where time is spent in the JIT alias table."""

import numpy as np
import time
from aliasmethod import build_alias_table, sample_alias_table_many

n = 200_000
n_draws = 2_000_000
rng = np.random.default_rng(0)

weights = rng.gamma(0.5, size=n)
pmf = weights / weights.sum()

print("Running diagnostic on JIT alias table...")
print(f"Outcomes: {n:,}")
print(f"Draws: {n_draws:,}")
print()


def timed_run(prob_dtype, index_dtype):
    t0 = time.time()
    table_probs, table_aliases = build_alias_table(
        pmf, index_dtype=index_dtype, prob_dtype=prob_dtype
    )
    build_time = time.time() - t0

    t1 = time.time()
    us = rng.random(n_draws).astype(prob_dtype)
    rng_time = time.time() - t1

    t2 = time.time()
    sample_alias_table_many(us, table_probs, table_aliases)
    sample_time = time.time() - t2

    print(f"  Build:    {build_time*1000:.2f}ms")
    print(f"  Uniforms: {rng_time*1000:.2f}ms")
    print(f"  Sampling: {sample_time*1000:.2f}ms")
    print(f"  TOTAL: {(build_time + rng_time + sample_time)*1000:.2f}ms")


for prob_dtype, index_dtype in [(np.float64, np.uint64), (np.float32, np.uint32)]:
    label = f"{np.dtype(prob_dtype).name}/{np.dtype(index_dtype).name}"

    print(f"=== First {label} run (includes compilation) ===")
    timed_run(prob_dtype, index_dtype)

    print()
    print(f"=== Second {label} run (no compilation) ===")
    timed_run(prob_dtype, index_dtype)
    print()
