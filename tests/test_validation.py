"""Tests for PMF validation and alias table invariant checks."""

import numpy as np
import pytest

from aliasmethod import (
    AliasTableInvariantError,
    InvalidDistributionError,
    build_alias_table,
    check_alias_table,
    implied_pmf,
    validate_pmf,
)


def test_validate_accepts_pmf(skewed_pmf):
    validate_pmf(skewed_pmf)
    validate_pmf([1.0])
    validate_pmf(np.full(3, 1.0 / 3, dtype=np.float32))


@pytest.mark.parametrize(
    "pmf, message",
    [
        ([0.5, -0.1, 0.6], "negative"),
        ([0.5, np.nan, 0.5], "non-finite"),
        ([0.5, np.inf], "non-finite"),
        ([0.5, 0.4], "sum to 1"),
        ([], "non-empty"),
    ],
)
def test_validate_rejects(pmf, message):
    with pytest.raises(InvalidDistributionError, match=message):
        validate_pmf(pmf)


def test_validate_does_not_renormalize():
    pmf = np.array([0.5, 0.4])
    with pytest.raises(InvalidDistributionError):
        validate_pmf(pmf)
    np.testing.assert_array_equal(pmf, [0.5, 0.4])


def test_invalid_distribution_is_value_error():
    with pytest.raises(ValueError):
        validate_pmf([2.0])


def test_check_accepts_built_table(random_pmf):
    check_alias_table(*build_alias_table(random_pmf))


def test_check_rejects_unset_partial_bucket():
    probs = np.array([0.5, 1.0])
    aliases = np.array([np.iinfo(np.uint32).max] * 2, dtype=np.uint32)

    with pytest.raises(AliasTableInvariantError, match="unset"):
        check_alias_table(probs, aliases)


def test_check_rejects_out_of_range_alias():
    probs = np.array([0.5, 1.0])
    aliases = np.array([7, 0], dtype=np.uint32)

    with pytest.raises(AliasTableInvariantError, match="out of range"):
        check_alias_table(probs, aliases)


@pytest.mark.parametrize("bad", [-0.1, 1.5, np.nan])
def test_check_rejects_bad_probability(bad):
    probs = np.array([bad, 1.0])
    aliases = np.array([1, 0], dtype=np.uint32)

    with pytest.raises(AliasTableInvariantError, match=r"outside \[0, 1\]"):
        check_alias_table(probs, aliases)


def test_check_rejects_shape_mismatch():
    with pytest.raises(AliasTableInvariantError, match="shape"):
        check_alias_table(np.ones(2), np.zeros(3, dtype=np.uint32))


def test_invariant_error_is_assertion_error():
    with pytest.raises(AssertionError):
        check_alias_table(np.array([0.5]), np.array([5], dtype=np.uint8))


def test_implied_pmf_by_hand():
    probs = np.array([0.5, 1.0])
    aliases = np.array([1, np.iinfo(np.uint32).max], dtype=np.uint32)

    np.testing.assert_allclose(implied_pmf(probs, aliases), [0.25, 0.75])
