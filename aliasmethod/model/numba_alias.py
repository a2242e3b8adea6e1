"""
Numba-optimized alias table construction and sampling.

This module implements Vose's alias method with heap-based worklists: the
largest bucket of the "large" worklist always gives its excess to the
smallest bucket of the "small" worklist. Pairing the extremes keeps the
mass handed to aliases low, so fewer draws take the alias branch.

All kernels are compiled per dtype combination, so the same code serves
float32/float64 probability tables and any unsigned index dtype.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def _heap_before(keys, a, b, is_max):
    """Heap ordering of two indices by their current key."""
    if is_max:
        return keys[a] > keys[b]
    return keys[a] < keys[b]


@njit(cache=True)
def _heap_push(heap, size, keys, idx, is_max):
    """
    Push an index onto a binary heap stored in the first `size` slots.

    Args:
        heap: int64 array used as heap storage
        size: Current number of entries
        keys: Array holding the key of every index
        idx: Index to push
        is_max: True for a max-heap, False for a min-heap

    Returns:
        New heap size
    """
    pos = size
    heap[pos] = idx
    while pos > 0:
        parent = (pos - 1) // 2
        if _heap_before(keys, heap[pos], heap[parent], is_max):
            heap[pos], heap[parent] = heap[parent], heap[pos]
            pos = parent
        else:
            break
    return size + 1


@njit(cache=True)
def _heap_pop(heap, size, keys, is_max):
    """
    Pop the top index of a binary heap.

    Keys of indices still in the heap must not change between push and pop.

    Returns:
        (top index, new heap size)
    """
    top = heap[0]
    size -= 1
    heap[0] = heap[size]

    pos = 0
    while True:
        left = 2 * pos + 1
        if left >= size:
            break
        best = left
        right = left + 1
        if right < size and _heap_before(keys, heap[right], heap[left], is_max):
            best = right
        if _heap_before(keys, heap[best], heap[pos], is_max):
            heap[pos], heap[best] = heap[best], heap[pos]
            pos = best
        else:
            break
    return top, size


@njit(cache=True)
def _build_alias_table_jit(probabilities, table_probs, table_aliases, unset):
    """
    Fill an alias table in place from a probability mass function.

    The input is neither validated nor renormalized: a PMF that does not sum
    to 1 gives a table that reflects the values as given.

    Args:
        probabilities: Array of shape (n,) with the probability mass function
        table_probs: Output array of shape (n,) for the scaled probabilities
        table_aliases: Output array of shape (n,) for the alias indices
        unset: Sentinel written to every alias slot before pairing
    """
    n = probabilities.shape[0]

    small = np.empty(n, dtype=np.int64)
    large = np.empty(n, dtype=np.int64)
    n_small = 0
    n_large = 0

    for i in range(n):
        table_aliases[i] = unset
        table_probs[i] = probabilities[i] * n

        if table_probs[i] < 1.0:
            n_small = _heap_push(small, n_small, table_probs, i, False)
        else:
            n_large = _heap_push(large, n_large, table_probs, i, True)

    while n_small > 0 and n_large > 0:
        s, n_small = _heap_pop(small, n_small, table_probs, False)
        l, n_large = _heap_pop(large, n_large, table_probs, True)

        table_aliases[s] = l
        # Same value as table_probs[l] - (1 - table_probs[s]) with less cancellation
        table_probs[l] = (table_probs[l] + table_probs[s]) - 1.0

        if table_probs[l] < 1.0:
            n_small = _heap_push(small, n_small, table_probs, l, False)
        else:
            n_large = _heap_push(large, n_large, table_probs, l, True)

    # Leftovers only differ from 1 by accumulated rounding error
    for k in range(n_small):
        table_probs[small[k]] = 1.0
    for k in range(n_large):
        table_probs[large[k]] = 1.0


@njit(cache=True)
def sample_alias_table(u, table_probs, table_aliases):
    """
    Sample an index from an alias table in constant time.

    Args:
        u: Uniform random number in [0, 1), not checked
        table_probs: Scaled probabilities of the table
        table_aliases: Alias indices of the table

    Returns:
        Sampled index in [0, n) as int64
    """
    n = table_probs.shape[0]
    nu = n * u

    # n * u can round up to n when u is the largest float below 1
    i = int(nu)
    if i > n - 1:
        i = n - 1
    fraction = nu - i

    if fraction < table_probs[i]:
        return np.int64(i)
    return np.int64(table_aliases[i])


@njit(cache=True)
def sample_alias_table_square_histogram(u, table_probs, table_aliases):
    """
    Sample an index using Marsaglia's square histogram test.

    Uses the same table as `sample_alias_table` but compares `u` against the
    bucket threshold (table_probs[i] + i) / n instead of the fractional part
    of n * u.
    """
    n = table_probs.shape[0]
    i = int(n * u)
    if i > n - 1:
        i = n - 1

    threshold = (table_probs[i] + i) / n
    if u < threshold:
        return np.int64(i)
    return np.int64(table_aliases[i])


@njit(cache=True)
def _sample_alias_table_many_jit(us, table_probs, table_aliases, out):
    """Draw one index per uniform value into `out`."""
    for k in range(us.shape[0]):
        out[k] = sample_alias_table(us[k], table_probs, table_aliases)
    return out
