import numbers

import numpy as np
from joblib import Parallel, delayed
from sklearn.utils import check_random_state

from .base import PathSolver
from .error import InvalidInputError
from .methods import get_path_solver
from .penalties import ORGANIC
from .scaler import Standardizer
from .types import PivotalResult
from .validation import check_design, check_matrix
from .variance import VarianceEstimator


def _squared_max_correlation(X: np.ndarray, seed: int) -> float:
    """One Monte Carlo replicate of $\\|X^T e\\|_\\infty^2 / n^2$ for $e \\sim N(0, I_n)$."""
    rng = np.random.RandomState(seed)
    e = rng.standard_normal(X.shape[0])
    return float((np.max(np.abs(X.T @ e)) / X.shape[0]) ** 2)


class PivotalTuningSelector:
    """Pivotal regularization strengths for the organic lasso.

    The organic lasso achieves its rates for regularization strengths that don't depend on
    the unknown error variance. We provide two choices:

    - $\\lambda_1 = \\log(p) / n$ in closed form,
    - $\\lambda_2 = E\\|X^T e\\|_\\infty^2 / n^2$ for $e \\sim N(0, I_n)$, estimated by Monte Carlo.

    For $\\lambda_2$, each replicate draws its own seed from the random state. Replicates are
    independent and evaluated in parallel using `joblib`; the result is the same for any `n_jobs`.
    Both strengths are used for a single organic lasso fit each, giving the estimates
    `sig_obj_1` and `sig_obj_2`.
    """

    def __init__(
        self,
        n_replicates: int = 200,
        quantile: float | None = None,
        solver: PathSolver | str | None = None,
        fit_intercept: bool = True,
        standardize: bool = True,
        random_state: int | np.random.RandomState | None = None,
        n_jobs: int | None = None,
        verbose: int = 0,
    ):
        """
        Args:
            n_replicates (int, optional): Number of Monte Carlo replicates for $\\lambda_2$. Defaults to 200.
            quantile (float | None, optional): Use this quantile of the replicates instead of the mean. Defaults to None.
            solver (PathSolver | str | None, optional): The path solver. `None` uses coordinate descent. Defaults to None.
            fit_intercept (bool, optional): Whether to fit an intercept. Only used for the default solver. Defaults to True.
            standardize (bool, optional): Whether to standardize the design matrix. Defaults to True.
            random_state (int | np.random.RandomState | None, optional): Seed for the Monte Carlo draws. Defaults to None.
            n_jobs (int | None, optional): Number of parallel jobs for the replicates. Defaults to None.
            verbose (int, optional): Verbosity level for logging. 0 = silent, 1 = high-level. Defaults to 0.
        """
        self.n_replicates = n_replicates
        self.quantile = quantile
        self.solver = solver
        self.fit_intercept = fit_intercept
        self.standardize = standardize
        self.random_state = random_state
        self.n_jobs = n_jobs
        self.verbose = verbose

    def _print_message(self, message, level=0):
        if level <= self.verbose:
            print(f"[{self.__class__.__name__}]", message)

    def _validate_parameters(self) -> None:
        if not isinstance(self.n_replicates, numbers.Integral) or self.n_replicates < 1:
            raise InvalidInputError(
                f"n_replicates must be a positive integer. Got {self.n_replicates}."
            )
        if self.quantile is not None and not (0 <= self.quantile <= 1):
            raise InvalidInputError(
                f"quantile must be in [0, 1]. Got {self.quantile}."
            )

    def lambda_1(self, X: np.ndarray) -> float:
        """The closed form $\\lambda_1 = \\log(p) / n$.

        Raises:
            InvalidInputError: If $p < 2$, since then $\\lambda_1 = 0$.
        """
        n_observations, n_features = check_matrix(X).shape
        if n_features < 2:
            raise InvalidInputError(
                "The closed form lambda log(p) / n requires at least two features."
            )
        return float(np.log(n_features) / n_observations)

    def replicates(self, X: np.ndarray) -> np.ndarray:
        """The Monte Carlo replicates of $\\|X^T e\\|_\\infty^2 / n^2$."""
        self._validate_parameters()
        X = check_matrix(X)
        X_scaled = Standardizer(
            with_mean=self.fit_intercept, with_scale=self.standardize
        ).fit_transform(X)

        rng = check_random_state(self.random_state)
        seeds = rng.randint(np.iinfo(np.int32).max, size=self.n_replicates)
        out = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(_squared_max_correlation)(X_scaled, seed) for seed in seeds
        )
        return np.array(out)

    def lambda_2(self, X: np.ndarray) -> float:
        """The Monte Carlo estimate $\\lambda_2 \\approx E\\|X^T e\\|_\\infty^2 / n^2$."""
        return self._reduce(self.replicates(X))

    def _reduce(self, replicates: np.ndarray) -> float:
        if self.quantile is None:
            return float(np.mean(replicates))
        return float(np.quantile(replicates, self.quantile))

    def fit(self, X: np.ndarray, y: np.ndarray) -> PivotalResult:
        """Fit the organic lasso for both pivotal regularization strengths.

        Args:
            X (np.ndarray): Design matrix.
            y (np.ndarray): Response vector.

        Raises:
            InvalidInputError: If the data or the parameters are not valid.
            SolverFailureError: If the solver fails.

        Returns:
            PivotalResult: Regularization strengths, fits and variance estimates.
        """
        self._validate_parameters()
        X, y = check_design(X, y)

        lambda_1 = self.lambda_1(X)
        replicates = self.replicates(X)
        lambda_2 = self._reduce(replicates)
        self._print_message(
            f"lambda_1 = {lambda_1:.6g}, lambda_2 = {lambda_2:.6g} from {self.n_replicates} replicates.",
            level=1,
        )

        solver = get_path_solver(self.solver, fit_intercept=self.fit_intercept)
        estimator = VarianceEstimator(X.shape[0], penalty=ORGANIC)
        fits = []
        for lambda_ in (lambda_1, lambda_2):
            fits.extend(
                solver.fit_path(
                    X, y, np.array([lambda_]), penalty=ORGANIC, standardize=self.standardize
                )
            )

        return PivotalResult(
            lambda_1=lambda_1,
            lambda_2=lambda_2,
            fit_1=fits[0],
            fit_2=fits[1],
            estimate_1=estimator.from_fit(fits[0]),
            estimate_2=estimator.from_fit(fits[1]),
            replicates=replicates,
        )
