import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(20240607)


@pytest.fixture
def skewed_pmf() -> np.ndarray:
    return np.array([0.1, 0.2, 0.3, 0.15, 0.25])


@pytest.fixture
def random_pmf(rng) -> np.ndarray:
    weights = rng.gamma(0.3, size=257)
    return weights / weights.sum()
