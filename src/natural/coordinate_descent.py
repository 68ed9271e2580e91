from typing import Tuple

import numba as nb
import numpy as np


@nb.njit()
def soft_threshold(value: float, threshold: float):
    """The soft thresholding function.

    For value $x$ and threshold $\\lambda$, the soft thresholding function $S(x, \\lambda)$ is
    defined as:

    $$S(x, \\lambda) = sign(x)(|x| - \\lambda)$$

    Args:
        value (float): The value
        threshold (float): The threshold

    Returns:
        out (float): The thresholded value
    """
    return np.sign(value) * np.maximum(np.abs(value) - threshold, 0)


@nb.njit(nogil=True)
def coordinate_descent(
    x_gram: np.ndarray,
    y_gram: np.ndarray,
    beta: np.ndarray,
    regularization: float,
    squared_l1: bool,
    tolerance: float = 1e-7,
    max_iterations: int = 10000,
) -> Tuple[np.ndarray, int, bool]:
    """Coordinate descent for a single regularization strength.

    Minimizes $\\frac{1}{2}\\beta^T G \\beta - \\beta^T H + \\lambda \\text{pen}(\\beta)$ for the
    scaled Gramians $G = X^TX / n$ and $H = X^Ty / n$. For the L1 penalty, the coordinate update is
    $$
    \\beta_j = S(z_j, \\lambda) / G_{jj},
    $$
    for the squared L1 penalty $\\|\\beta\\|_1^2$ the update is
    $$
    \\beta_j = S(z_j, 2 \\lambda \\sum_{k \\neq j} |\\beta_k|) / (G_{jj} + 2\\lambda),
    $$
    where $z_j = H_j - G_{j,\\cdot} \\beta + G_{jj}\\beta_j$ is the partial residual correlation.

    After the first sweep, only non-zero coefficients are updated. Once the active set has
    converged, we run a full sweep to check that no coefficient enters the active set.

    Args:
        x_gram (np.ndarray): Scaled X-Gramian $$X^TX / n$$
        y_gram (np.ndarray): Scaled Y-Gramian $$X^Ty / n$$
        beta (np.ndarray): Start value for beta
        regularization (float): Regularization parameter lambda
        squared_l1 (bool): Use the squared L1 penalty of the organic lasso.
        tolerance (float, optional): Tolerance for the beta update. Defaults to 1e-7.
        max_iterations (int, optional): Maximum iterations. Defaults to 10000.

    Returns:
        Tuple[np.ndarray, int, bool]: Converged $$ \\beta $$, the number of iterations and whether we converged.
    """
    i = 0
    J = beta.shape[0]
    beta_now = np.copy(beta)
    full_sweep = True
    converged = False

    while i < max_iterations:
        i += 1
        beta_star = np.copy(beta_now)
        l1_norm = np.sum(np.abs(beta_now))

        for j in range(J):
            if full_sweep or (beta_now[j] != 0):
                if x_gram[j, j] == 0:
                    # Constant column
                    l1_norm -= np.abs(beta_now[j])
                    beta_now[j] = 0.0
                    continue
                update = (
                    y_gram[j] - (x_gram[j, :] @ beta_now) + x_gram[j, j] * beta_now[j]
                )
                if squared_l1:
                    rest = l1_norm - np.abs(beta_now[j])
                    new = soft_threshold(update, 2 * regularization * rest) / (
                        x_gram[j, j] + 2 * regularization
                    )
                else:
                    new = soft_threshold(update, regularization) / x_gram[j, j]
                l1_norm += np.abs(new) - np.abs(beta_now[j])
                beta_now[j] = new

        change = np.max(np.abs(beta_now - beta_star))
        if change <= tolerance * np.max(np.abs(beta_now)):
            if full_sweep:
                converged = True
                break
            full_sweep = True
        else:
            full_sweep = False

    return beta_now, i, converged


@nb.njit(nogil=True)
def coordinate_descent_path(
    x_gram: np.ndarray,
    y_gram: np.ndarray,
    lambda_path: np.ndarray,
    squared_l1: bool,
    tolerance: float = 1e-7,
    max_iterations: int = 10000,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Run coordinate descent on a grid of regularization values.

    Each regularization strength is warm-started on the solution of the previous one.
    The first one starts at zero.

    Args:
        x_gram (np.ndarray): Scaled X-Gramian $$X^TX / n$$
        y_gram (np.ndarray): Scaled Y-Gramian $$X^Ty / n$$
        lambda_path (np.ndarray): The lambda grid
        squared_l1 (bool): Use the squared L1 penalty of the organic lasso.
        tolerance (float, optional): Tolerance for the beta update. Will be passed through to the parameter update. Defaults to 1e-7.
        max_iterations (int, optional): Maximum iterations. Will be passed through to the parameter update. Defaults to 10000.

    Returns:
        Tuple[np.ndarray, np.ndarray, np.ndarray]: The coefficient path, the iteration count and the convergence flag per lambda.
    """
    L = lambda_path.shape[0]
    J = x_gram.shape[0]
    beta_path = np.zeros((L, J))
    iterations = np.zeros(L, dtype=np.int64)
    converged = np.zeros(L, dtype=np.bool_)
    beta = np.zeros(J)

    for i in range(L):
        beta, iterations[i], converged[i] = coordinate_descent(
            x_gram=x_gram,
            y_gram=y_gram,
            beta=beta,
            regularization=lambda_path[i],
            squared_l1=squared_l1,
            tolerance=tolerance,
            max_iterations=max_iterations,
        )
        beta_path[i, :] = beta

    return beta_path, iterations, converged
