"""
Input validation and table consistency checks.

Nothing here is called by the JIT kernels. Validation of the probability
mass function is opt-in; the table check is meant for tests and debugging.
"""

import numpy as np

from .errors import AliasTableInvariantError, InvalidDistributionError


def validate_pmf(probabilities: np.ndarray, atol: float = 1e-6) -> None:
    """
    Check that an array is a probability mass function.

    Args:
        probabilities: Array of shape (n,)
        atol: Allowed absolute deviation of the sum from 1

    Raises:
        InvalidDistributionError: If a value is non-finite or negative, or
            if the values do not sum to 1 within `atol`
    """
    p = np.asarray(probabilities)
    if p.ndim != 1 or p.size == 0:
        raise InvalidDistributionError(f"PMF must be a non-empty 1D array, got shape {p.shape}")

    if not np.all(np.isfinite(p)):
        bad = np.flatnonzero(~np.isfinite(p))
        raise InvalidDistributionError(f"PMF has non-finite values at indices {bad.tolist()}")

    if np.any(p < 0):
        bad = np.flatnonzero(p < 0)
        raise InvalidDistributionError(f"PMF has negative values at indices {bad.tolist()}")

    total = float(np.sum(p, dtype=np.float64))
    if abs(total - 1.0) > atol:
        raise InvalidDistributionError(f"PMF must sum to 1 (atol={atol}), got {total!r}")


def check_alias_table(table_probs: np.ndarray, table_aliases: np.ndarray, unset=None) -> None:
    """
    Check the invariants of a built alias table.

    Every probability must lie in [0, 1]. An alias may only be left unset
    (or otherwise out of range) for a bucket whose probability is exactly 1,
    since the direct branch always wins for such a bucket.

    Args:
        table_probs: Scaled probabilities of shape (n,)
        table_aliases: Alias indices of shape (n,)
        unset: Sentinel for unset aliases, defaults to the dtype maximum

    Raises:
        AliasTableInvariantError: On the first violated invariant
    """
    probs = np.asarray(table_probs)
    aliases = np.asarray(table_aliases)
    n = probs.shape[0]

    if aliases.shape != probs.shape:
        raise AliasTableInvariantError(
            f"Table arrays differ in shape: {probs.shape} vs {aliases.shape}"
        )

    if unset is None:
        unset = np.iinfo(aliases.dtype).max

    out_of_range = ~((probs >= 0) & (probs <= 1))
    if np.any(out_of_range):
        bad = np.flatnonzero(out_of_range)
        raise AliasTableInvariantError(
            f"Scaled probabilities outside [0, 1] at buckets {bad.tolist()}"
        )

    partial = probs < 1
    left_unset = partial & (aliases == unset)
    if np.any(left_unset):
        bad = np.flatnonzero(left_unset)
        raise AliasTableInvariantError(f"Alias left unset for partial buckets {bad.tolist()}")

    bad_alias = partial & (aliases >= n)
    if np.any(bad_alias):
        bad = np.flatnonzero(bad_alias)
        raise AliasTableInvariantError(f"Alias index out of range at buckets {bad.tolist()}")


def implied_pmf(table_probs: np.ndarray, table_aliases: np.ndarray) -> np.ndarray:
    """
    Recover the distribution sampled by an alias table.

    Bucket i returns i with probability table_probs[i] and its alias with the
    rest, each bucket being chosen with probability 1/n.

    Returns:
        float64 array of shape (n,)
    """
    probs = np.asarray(table_probs, dtype=np.float64)
    aliases = np.asarray(table_aliases)
    n = probs.shape[0]

    out = probs.copy()
    partial = probs < 1.0
    np.add.at(out, aliases[partial].astype(np.int64), 1.0 - probs[partial])
    return out / n
