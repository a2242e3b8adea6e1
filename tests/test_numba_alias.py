"""Tests for the numba alias table kernels."""

import numpy as np
import pytest
from scipy.stats import chisquare

from aliasmethod import (
    build_alias_table,
    check_alias_table,
    implied_pmf,
    sample_alias_table,
    sample_alias_table_many,
    sample_alias_table_square_histogram,
)


@pytest.mark.parametrize("prob_dtype", [np.float32, np.float64])
@pytest.mark.parametrize("index_dtype", [np.uint16, np.uint32, np.uint64])
def test_table_invariants(random_pmf, prob_dtype, index_dtype):
    probs, aliases = build_alias_table(random_pmf, index_dtype=index_dtype, prob_dtype=prob_dtype)
    n = len(random_pmf)

    assert probs.dtype == prob_dtype
    assert aliases.dtype == index_dtype
    assert np.all(probs >= 0) and np.all(probs <= 1)
    partial = probs < 1
    assert np.all(aliases[partial] < n)
    check_alias_table(probs, aliases)


def test_unset_aliases_only_on_full_buckets(random_pmf):
    probs, aliases = build_alias_table(random_pmf, index_dtype=np.uint32)
    unset = np.iinfo(np.uint32).max

    left_unset = aliases == unset
    assert np.any(left_unset)
    assert np.all(probs[left_unset] == 1.0)


def test_table_reproduces_pmf(random_pmf):
    probs, aliases = build_alias_table(random_pmf)
    np.testing.assert_allclose(implied_pmf(probs, aliases), random_pmf, atol=1e-12)


def test_single_outcome():
    probs, aliases = build_alias_table([1.0])

    assert probs[0] == 1.0
    for u in [0.0, 0.25, 0.5, np.nextafter(1.0, 0.0)]:
        assert sample_alias_table(u, probs, aliases) == 0


def test_two_point_distribution():
    probs, aliases = build_alias_table([0.25, 0.75])

    # Bucket 0 keeps 0.5 and gives the rest to 1, bucket 1 is full
    np.testing.assert_array_equal(probs, [0.5, 1.0])
    assert aliases[0] == 1
    assert aliases[1] == np.iinfo(aliases.dtype).max

    # 0.0 -> bucket 0, fraction 0.0 < 0.5, direct
    assert sample_alias_table(0.0, probs, aliases) == 0
    # 0.33 -> bucket 0, fraction 0.66 >= 0.5, alias
    assert sample_alias_table(0.33, probs, aliases) == 1
    # 0.5 -> bucket 1, fraction 0.0 < 1.0, direct
    assert sample_alias_table(0.5, probs, aliases) == 1
    # 0.99 -> bucket 1, fraction 0.98 < 1.0, direct
    assert sample_alias_table(0.99, probs, aliases) == 1


@pytest.mark.parametrize("n", [2, 3, 7, 10, 49, 100])
def test_uniform_distribution_never_aliases(n):
    probs, aliases = build_alias_table(np.full(n, 1.0 / n))

    np.testing.assert_array_equal(probs, np.ones(n))
    for u in np.linspace(0.0, 1.0, 1001, endpoint=False):
        assert sample_alias_table(u, probs, aliases) == min(int(n * u), n - 1)


@pytest.mark.parametrize("n", [1, 3, 5, 1000])
def test_u_just_below_one_is_clamped(n):
    pmf = np.arange(1, n + 1, dtype=np.float64)
    pmf /= pmf.sum()
    probs, aliases = build_alias_table(pmf)

    u = np.nextafter(1.0, 0.0)
    assert 0 <= sample_alias_table(u, probs, aliases) < n
    assert 0 <= sample_alias_table_square_histogram(u, probs, aliases) < n

    u32 = np.nextafter(np.float32(1.0), np.float32(0.0))
    assert 0 <= sample_alias_table(u32, probs, aliases) < n


def test_sampling_is_pure(skewed_pmf, rng):
    probs, aliases = build_alias_table(skewed_pmf)
    probs_before = probs.copy()
    aliases_before = aliases.copy()

    for u in rng.random(100):
        assert sample_alias_table(u, probs, aliases) == sample_alias_table(u, probs, aliases)

    np.testing.assert_array_equal(probs, probs_before)
    np.testing.assert_array_equal(aliases, aliases_before)


def test_empirical_frequencies(skewed_pmf, rng):
    probs, aliases = build_alias_table(skewed_pmf)
    n_draws = 1_000_000

    draws = sample_alias_table_many(rng.random(n_draws), probs, aliases)
    counts = np.bincount(draws.astype(np.int64), minlength=len(skewed_pmf))

    result = chisquare(counts, f_exp=skewed_pmf * n_draws)
    assert result.pvalue > 1e-4


def test_square_histogram_matches_frequencies(skewed_pmf, rng):
    probs, aliases = build_alias_table(skewed_pmf)
    n_draws = 200_000

    draws = np.array(
        [sample_alias_table_square_histogram(u, probs, aliases) for u in rng.random(n_draws)]
    )
    counts = np.bincount(draws, minlength=len(skewed_pmf))

    result = chisquare(counts, f_exp=skewed_pmf * n_draws)
    assert result.pvalue > 1e-4


def test_sample_many_matches_scalar(skewed_pmf, rng):
    probs, aliases = build_alias_table(skewed_pmf, index_dtype=np.uint8)
    us = rng.random((20, 5))

    draws = sample_alias_table_many(us, probs, aliases)

    assert draws.shape == us.shape
    assert draws.dtype == np.uint8
    expected = [sample_alias_table(u, probs, aliases) for u in us.ravel()]
    np.testing.assert_array_equal(draws.ravel(), expected)


def test_zero_probability_outcome_is_never_sampled(rng):
    pmf = np.array([0.5, 0.0, 0.5])
    probs, aliases = build_alias_table(pmf)

    assert probs[1] == 0.0
    draws = sample_alias_table_many(rng.random(10_000), probs, aliases)
    assert not np.any(draws == 1)


def test_unnormalized_input_is_not_rescaled():
    probs, aliases = build_alias_table([1.0, 1.0])

    # Scaled values are 2.0: both large, drained to 1 with no pairing
    np.testing.assert_array_equal(probs, [1.0, 1.0])
    assert np.all(aliases == np.iinfo(aliases.dtype).max)
