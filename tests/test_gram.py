import numpy as np
import pytest
import scipy.stats as st

from natural.gram import init_gram, init_y_gram


def make_x_y(N, D):
    X = st.norm().rvs((N, D), random_state=N + D)
    y = st.norm().rvs(N, random_state=N * D)
    return X, y


@pytest.mark.parametrize("N", [10, 100], ids=lambda x: f"N_{x}")
@pytest.mark.parametrize("D", [1, 2, 10], ids=lambda x: f"D_{x}")
def test_gram(N, D):
    X, y = make_x_y(N, D)
    assert np.allclose(init_gram(X), X.T @ X / N), "X-Gramian does not match"
    assert np.allclose(init_y_gram(X, y), X.T @ y / N), "y-Gramian does not match"
