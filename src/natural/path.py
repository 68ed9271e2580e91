import numpy as np

from .base import PathSolver
from .lambda_path import LambdaPathGenerator
from .methods import get_path_solver
from .penalties import Penalty, get_penalty
from .types import PathResult
from .validation import check_design
from .variance import VarianceEstimator


class VariancePath:
    """Variance estimates along the regularization path.

    Fits the natural or organic lasso on the full path and calculates the objective-based,
    the naive and the degrees-of-freedom corrected variance estimator for each
    regularization strength.
    """

    def __init__(
        self,
        penalty: Penalty | str = "natural",
        solver: PathSolver | str | None = None,
        lambda_n: int = 100,
        lambda_eps: float = 1e-2,
        fit_intercept: bool = True,
        standardize: bool = True,
    ):
        """
        Args:
            penalty (Penalty | str, optional): The penalty, "natural" or "organic". Defaults to "natural".
            solver (PathSolver | str | None, optional): The path solver. `None` uses coordinate descent. Defaults to None.
            lambda_n (int, optional): Length of the generated path. Defaults to 100.
            lambda_eps (float, optional): Ratio of the smallest to the largest regularization strength. Defaults to 1e-2.
            fit_intercept (bool, optional): Whether to fit an intercept. Only used for the default solver. Defaults to True.
            standardize (bool, optional): Whether to standardize the design matrix. Defaults to True.
        """
        self.penalty = penalty
        self.solver = solver
        self.lambda_n = lambda_n
        self.lambda_eps = lambda_eps
        self.fit_intercept = fit_intercept
        self.standardize = standardize

    def fit(
        self, X: np.ndarray, y: np.ndarray, lambda_path: np.ndarray | None = None
    ) -> PathResult:
        """Fit the path.

        Args:
            X (np.ndarray): Design matrix.
            y (np.ndarray): Response vector.
            lambda_path (np.ndarray | None, optional): User-defined regularization path, used as given. Defaults to None.

        Raises:
            InvalidInputError: If the data or the path is not valid. Raised before the solver is called.
            SolverFailureError: If the solver fails.

        Returns:
            PathResult: Fits and variance estimates.
        """
        penalty = get_penalty(self.penalty)
        X, y = check_design(X, y)
        lambda_path = LambdaPathGenerator(
            lambda_n=self.lambda_n,
            lambda_eps=self.lambda_eps,
            lambda_path=lambda_path,
            fit_intercept=self.fit_intercept,
            standardize=self.standardize,
        ).generate(X, y, penalty=penalty)

        solver = get_path_solver(self.solver, fit_intercept=self.fit_intercept)
        fits = solver.fit_path(
            X, y, lambda_path, penalty=penalty, standardize=self.standardize
        )
        estimates = VarianceEstimator(X.shape[0], penalty=penalty).from_path(fits)
        return PathResult(lambda_path=lambda_path, fits=fits, estimates=estimates)
