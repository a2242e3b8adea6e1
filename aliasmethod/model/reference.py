"""
Pure-Python alias table construction.

Same algorithm as the numba kernel, written with ``heapq``. Used as the
baseline in benchmarks and as an independent cross-check in tests.
"""

import heapq

import numpy as np


def build_alias_table_reference(probabilities, index_dtype=np.uint32):
    """
    Build an alias table without JIT compilation.

    Ties between equal scaled probabilities are broken by the smaller index,
    which can differ from the numba kernel; both tables describe the same
    distribution.

    Args:
        probabilities: Sequence of n probabilities
        index_dtype: Unsigned integer dtype of the alias array

    Returns:
        (table_probs, table_aliases) as float64 and `index_dtype` arrays
    """
    q = [float(p) * len(probabilities) for p in probabilities]
    unset = int(np.iinfo(index_dtype).max)
    aliases = [unset] * len(q)

    small = []
    large = []
    for i, qi in enumerate(q):
        if qi < 1.0:
            heapq.heappush(small, (qi, i))
        else:
            heapq.heappush(large, (-qi, i))

    while small and large:
        _, s = heapq.heappop(small)
        _, l = heapq.heappop(large)
        aliases[s] = l
        q[l] = (q[l] + q[s]) - 1.0
        if q[l] < 1.0:
            heapq.heappush(small, (q[l], l))
        else:
            heapq.heappush(large, (-q[l], l))

    for _, leftover in small + large:
        q[leftover] = 1.0

    return np.array(q, dtype=np.float64), np.array(aliases, dtype=index_dtype)
