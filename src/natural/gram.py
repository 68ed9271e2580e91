import numba as nb
import numpy as np


@nb.njit()
def init_gram(X: np.ndarray) -> np.ndarray:
    """Initialise the scaled Gramian Matrix.

    The scaled Gramian Matrix is defined as
    $$
    G = \\frac{1}{n} X^T X
    $$
    where $X$ is the (standardized) design matrix with $n$ rows.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        X (np.ndarray): Design matrix $X$

    Returns:
        np.ndarray: Gramian Matrix.
    """
    return (X.T @ X) / X.shape[0]


@nb.njit()
def init_y_gram(X: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Initialise the scaled y-Gramian.

    The y-Gramian is defined as $$
    H = \\frac{1}{n} X^T y
    $$ where $X$ is the design matrix and $y$ is the (centered) response variable.

    !!! numba "Numba"
        This function uses `numba` just-in-time-compilation.

    Args:
        X (np.ndarray): Design matrix $X$
        y (np.ndarray): Response variable $y$

    Returns:
        np.ndarray: y-Gramian vector.
    """
    return (X.T @ y) / X.shape[0]
