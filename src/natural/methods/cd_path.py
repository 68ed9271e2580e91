from typing import Tuple

import numpy as np

from ..base import PathSolver
from ..coordinate_descent import coordinate_descent_path
from ..error import SolverFailureError
from ..gram import init_gram, init_y_gram
from ..penalties import Penalty, get_penalty
from ..scaler import Standardizer
from ..types import FitRecord


class CoordinateDescentPath(PathSolver):
    """
    Path-based coordinate descent for the natural and the organic lasso.

    The method runs coordinate descent along the given grid of regularization strengths,
    warm-starting each strength on the solution of the previous one. The design matrix is
    standardized before fitting and the coefficients are reported on the original scale.
    If we fit an intercept, the columns of $X$ and the response are centered and the
    intercept is recovered afterwards.

    We use active set iterations, i.e. after the first coordinate-wise update for each
    regularization strength, only non-zero coefficients are updated until they converge.
    A final full sweep makes sure that no coefficient is left out.

    We use `numba` to speed up the coordinate descent algorithm.
    """

    def __init__(
        self,
        fit_intercept: bool = True,
        tolerance: float = 1e-7,
        max_iterations: int = 10000,
    ):
        """
        Initializes the coordinate descent method with the specified parameters.

        Args:
            fit_intercept (bool): Whether to fit an (unpenalized) intercept. Default is True.
            tolerance (float): Relative tolerance for the coefficient updates. Default is 1e-7.
            max_iterations (int): Maximum number of iterations per regularization strength. Default is 10000.
        """
        self.fit_intercept = fit_intercept
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def fit_path(
        self,
        X: np.ndarray,
        y: np.ndarray,
        lambda_path: np.ndarray,
        penalty: Penalty | str,
        standardize: bool = True,
    ) -> Tuple[FitRecord, ...]:
        penalty = get_penalty(penalty)
        lambda_path = np.asarray(lambda_path, dtype=np.float64)

        scaler = Standardizer(with_mean=self.fit_intercept, with_scale=standardize)
        X_scaled = scaler.fit_transform(X)
        y_mean = float(np.mean(y)) if self.fit_intercept else 0.0

        x_gram = init_gram(np.ascontiguousarray(X_scaled))
        y_gram = init_y_gram(np.ascontiguousarray(X_scaled), y - y_mean)

        beta_path, iterations, converged = coordinate_descent_path(
            x_gram=x_gram,
            y_gram=y_gram,
            lambda_path=lambda_path,
            squared_l1=penalty.squared,
            tolerance=self.tolerance,
            max_iterations=self.max_iterations,
        )

        if not np.all(np.isfinite(beta_path)):
            raise SolverFailureError(
                "Coordinate descent produced non-finite coefficients. "
                "Please check the design matrix for extreme values."
            )
        if not np.all(converged):
            raise SolverFailureError(
                f"Coordinate descent did not converge within {self.max_iterations} iterations "
                f"for lambda = {lambda_path[~converged]}. "
                "Increase max_iterations or the tolerance."
            )

        fits = []
        for lambda_, beta, n_iterations in zip(lambda_path, beta_path, iterations):
            coef, intercept = scaler.unscale_coef(beta, y_mean=y_mean)
            residuals = y - intercept - X @ coef
            fits.append(
                FitRecord(
                    lambda_=float(lambda_),
                    coef=coef,
                    coef_scaled=beta,
                    intercept=intercept,
                    df=float(np.count_nonzero(beta)),
                    rss=float(np.sum(residuals**2)),
                    n_iterations=int(n_iterations),
                )
            )
        return tuple(fits)
