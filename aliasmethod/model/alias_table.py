"""
Alias table construction and sampling entry points.

The functions here prepare numpy arrays (dtypes, unset sentinel, output
buffers) and hand them to the numba kernels in `numba_alias`.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .. import config
from ..errors import InvalidDistributionError
from ..validation import check_alias_table, implied_pmf, validate_pmf
from .numba_alias import (
    _build_alias_table_jit,
    _sample_alias_table_many_jit,
    sample_alias_table,
    sample_alias_table_square_histogram,
)

logger = logging.getLogger(__name__)

# Floating dtypes the numba kernels compile for
_KERNEL_FLOAT_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


def _as_pmf_array(probabilities, prob_dtype) -> np.ndarray:
    pmf = np.asarray(probabilities)
    if pmf.ndim != 1:
        raise InvalidDistributionError(f"PMF must be 1D, got shape {pmf.shape}")
    if pmf.size == 0:
        raise InvalidDistributionError("PMF must have at least one value")

    if prob_dtype is None:
        prob_dtype = pmf.dtype if pmf.dtype.kind == "f" else np.float64
    prob_dtype = np.dtype(prob_dtype)
    if prob_dtype.kind != "f":
        raise InvalidDistributionError(f"Probability dtype must be floating, got {prob_dtype}")
    if prob_dtype not in _KERNEL_FLOAT_DTYPES:
        raise InvalidDistributionError(
            f"Probability dtype must be float32 or float64, got {prob_dtype}"
        )

    return np.ascontiguousarray(pmf, dtype=prob_dtype)


def _as_index_dtype(index_dtype, n: int) -> np.dtype:
    index_dtype = np.dtype(index_dtype)
    if index_dtype.kind != "u":
        raise InvalidDistributionError(f"Index dtype must be unsigned, got {index_dtype}")
    # The maximum value is reserved for unset aliases
    if n > np.iinfo(index_dtype).max:
        raise InvalidDistributionError(f"{n} outcomes do not fit index dtype {index_dtype}")
    return index_dtype


def build_alias_table(
    probabilities,
    index_dtype=np.uint32,
    prob_dtype=None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build an alias table over a probability mass function.

    The PMF is used as given: it is not validated and not renormalized. Alias
    slots of buckets that end up with probability exactly 1 keep the unset
    sentinel (the maximum value of `index_dtype`).

    Args:
        probabilities: Array-like of shape (n,) summing to 1
        index_dtype: Unsigned integer dtype for the alias indices
        prob_dtype: Floating dtype for the table probabilities. Defaults to
            the dtype of `probabilities` when floating, float64 otherwise.

    Returns:
        table_probs: (n,) array of scaled probabilities in [0, 1]
        table_aliases: (n,) array of alias indices
    """
    pmf = _as_pmf_array(probabilities, prob_dtype)
    n = pmf.shape[0]
    index_dtype = _as_index_dtype(index_dtype, n)

    table_probs = np.empty(n, dtype=pmf.dtype)
    table_aliases = np.empty(n, dtype=index_dtype)
    unset = index_dtype.type(np.iinfo(index_dtype).max)

    _build_alias_table_jit(pmf, table_probs, table_aliases, unset)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Built alias table: n=%d, prob_dtype=%s, index_dtype=%s, alias_fraction=%.6f",
            n, table_probs.dtype, index_dtype, float(np.mean(1.0 - table_probs)),
        )
    return table_probs, table_aliases


def sample_alias_table_many(us, table_probs: np.ndarray, table_aliases: np.ndarray) -> np.ndarray:
    """
    Sample one index per uniform value.

    Args:
        us: Array-like of uniform random numbers in [0, 1), any shape
        table_probs: Scaled probabilities of the table
        table_aliases: Alias indices of the table

    Returns:
        Array of indices with the shape of `us` and the dtype of `table_aliases`
    """
    us = np.asarray(us)
    if us.dtype not in _KERNEL_FLOAT_DTYPES:
        us = us.astype(np.float64)
    flat = np.ascontiguousarray(us.ravel())
    out = np.empty(flat.shape[0], dtype=table_aliases.dtype)
    _sample_alias_table_many_jit(flat, table_probs, table_aliases, out)
    return out.reshape(us.shape)


@dataclass(frozen=True)
class AliasTable:
    """Immutable alias table for O(1) sampling of a discrete distribution.

    Attributes
    ----------
    probs
        Read-only array of shape (n,) with scaled probabilities in [0, 1].
    aliases
        Read-only array of shape (n,) with alias indices in [0, n), or the
        unset sentinel where ``probs`` is exactly 1.
    """

    probs: np.ndarray
    aliases: np.ndarray

    def __post_init__(self):
        # Writable arrays may still be shared with the caller
        for name in ("probs", "aliases"):
            arr = np.asarray(getattr(self, name))
            if arr.flags.writeable:
                arr = arr.copy()
                arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    @classmethod
    def from_pmf(
        cls,
        probabilities,
        index_dtype=np.uint32,
        prob_dtype=None,
        validate: Optional[bool] = None,
        check: Optional[bool] = None,
    ) -> "AliasTable":
        """
        Build a table from a probability mass function.

        Args:
            probabilities: Array-like of shape (n,) summing to 1
            index_dtype: Unsigned integer dtype for the alias indices
            prob_dtype: Floating dtype for the table probabilities
            validate: Run `validate_pmf` first. Defaults to
                ``ALIASMETHOD_VALIDATE``.
            check: Run `check_alias_table` on the result. Defaults to
                ``ALIASMETHOD_CHECK_INVARIANTS``.
        """
        if validate is None:
            validate = config.VALIDATE
        if check is None:
            check = config.CHECK_INVARIANTS

        if validate:
            validate_pmf(probabilities, atol=config.PMF_ATOL)

        table_probs, table_aliases = build_alias_table(
            probabilities, index_dtype=index_dtype, prob_dtype=prob_dtype
        )
        if check:
            check_alias_table(table_probs, table_aliases)

        table_probs.setflags(write=False)
        table_aliases.setflags(write=False)
        return cls(probs=table_probs, aliases=table_aliases)

    @property
    def n(self) -> int:
        return int(self.probs.shape[0])

    @property
    def unset(self) -> int:
        return int(np.iinfo(self.aliases.dtype).max)

    def sample(self, u: float) -> int:
        return int(sample_alias_table(u, self.probs, self.aliases))

    def sample_square_histogram(self, u: float) -> int:
        return int(sample_alias_table_square_histogram(u, self.probs, self.aliases))

    def sample_many(self, us) -> np.ndarray:
        return sample_alias_table_many(us, self.probs, self.aliases)

    def alias_fraction(self) -> float:
        """Probability that a draw takes the alias branch."""
        return float(np.mean(1.0 - self.probs.astype(np.float64)))

    def implied_pmf(self) -> np.ndarray:
        return implied_pmf(self.probs, self.aliases)

    def check(self) -> None:
        check_alias_table(self.probs, self.aliases)
