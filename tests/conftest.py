import numpy as np
import pytest


def _make_sparse_regression(n=50, p=10, seed=0, sigma2=1.0, coef=(3.0, -2.0)):
    rng = np.random.default_rng(seed)
    X = rng.standard_normal((n, p))
    beta = np.zeros(p)
    beta[: len(coef)] = coef
    y = 1.0 + X @ beta + np.sqrt(sigma2) * rng.standard_normal(n)
    return X, y


@pytest.fixture
def make_data():
    return _make_sparse_regression


@pytest.fixture
def sparse_data():
    return _make_sparse_regression(n=50, p=10, seed=0)
