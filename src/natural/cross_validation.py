import numpy as np
import scipy.stats as st
from joblib import Parallel, delayed

from .base import PathSolver
from .error import SolverFailureError
from .folds import make_fold_ids
from .lambda_path import LambdaPathGenerator
from .methods import get_path_solver
from .penalties import Penalty, get_penalty
from .types import CVCurve, CVResult
from .validation import check_design, check_fold_ids
from .variance import VarianceEstimator


def _fold_errors(
    solver: PathSolver,
    X: np.ndarray,
    y: np.ndarray,
    train: np.ndarray,
    test: np.ndarray,
    lambda_path: np.ndarray,
    penalty: Penalty,
    standardize: bool,
) -> np.ndarray:
    """Held-out mean squared prediction error of one fold for every regularization strength."""
    fits = solver.fit_path(
        X[train], y[train], lambda_path, penalty=penalty, standardize=standardize
    )
    return np.array(
        [np.mean((y[test] - fit.predict(X[test])) ** 2) for fit in fits]
    )


def select_lambda_index(lambda_path: np.ndarray, cv_mean: np.ndarray) -> int:
    """Index of the regularization strength with the smallest CV error.

    If several strengths attain the minimum, we take the smallest strength, independent of
    the order of the path.
    """
    candidates = np.flatnonzero(cv_mean == np.min(cv_mean))
    return int(candidates[np.argmin(lambda_path[candidates])])


def select_lambda_1se(
    lambda_path: np.ndarray, cv_mean: np.ndarray, cv_se: np.ndarray, index_min: int
) -> float:
    """Largest regularization strength within one standard error of the minimum."""
    threshold = cv_mean[index_min] + cv_se[index_min]
    return float(np.max(lambda_path[cv_mean <= threshold]))


class CrossValidator:
    """K-fold cross-validation for the natural and the organic lasso.

    The regularization path is computed once on the full data. For each fold, the solver is
    fitted on the remaining observations over the full path and we calculate the held-out
    mean squared prediction error for each regularization strength. The folds are
    independent and are fitted in parallel using `joblib`. The CV curve is the mean error
    across folds, the standard error is calculated from the spread across folds.

    The selected regularization strength minimizes the mean CV error. Ties are broken towards
    the smaller regularization strength. Afterwards, we refit on the full data for the
    selected strength and calculate the variance estimates.

    A failing fold aborts the cross-validation. We never drop folds.
    """

    def __init__(
        self,
        penalty: Penalty | str = "natural",
        n_folds: int = 5,
        solver: PathSolver | str | None = None,
        lambda_n: int = 100,
        lambda_eps: float = 1e-2,
        fit_intercept: bool = True,
        standardize: bool = True,
        random_state: int | np.random.RandomState | None = None,
        n_jobs: int | None = None,
        verbose: int = 0,
    ):
        """
        Args:
            penalty (Penalty | str, optional): The penalty, "natural" or "organic". Defaults to "natural".
            n_folds (int, optional): Number of folds $K$. Defaults to 5.
            solver (PathSolver | str | None, optional): The path solver. `None` uses coordinate descent. Defaults to None.
            lambda_n (int, optional): Length of the generated path. Defaults to 100.
            lambda_eps (float, optional): Ratio of the smallest to the largest regularization strength. Defaults to 1e-2.
            fit_intercept (bool, optional): Whether to fit an intercept. Only used for the default solver. Defaults to True.
            standardize (bool, optional): Whether to standardize the design matrix. Defaults to True.
            random_state (int | np.random.RandomState | None, optional): Seed for the fold assignment. Defaults to None.
            n_jobs (int | None, optional): Number of parallel jobs for the folds. Defaults to None.
            verbose (int, optional): Verbosity level for logging. 0 = silent, 1 = high-level, 2 = per fold. Defaults to 0.
        """
        self.penalty = penalty
        self.n_folds = n_folds
        self.solver = solver
        self.lambda_n = lambda_n
        self.lambda_eps = lambda_eps
        self.fit_intercept = fit_intercept
        self.standardize = standardize
        self.random_state = random_state
        self.n_jobs = n_jobs
        self.verbose = verbose

    def _print_message(self, message, level=0):
        if level <= self.verbose:
            print(f"[{self.__class__.__name__}]", message)

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        lambda_path: np.ndarray | None = None,
        fold_ids: np.ndarray | None = None,
    ) -> CVResult:
        """Run the cross-validation.

        Args:
            X (np.ndarray): Design matrix.
            y (np.ndarray): Response vector.
            lambda_path (np.ndarray | None, optional): User-defined regularization path, used as given. Defaults to None.
            fold_ids (np.ndarray | None, optional): User-defined fold assignment with ids `0, ..., K - 1`.
                Overrides `n_folds` and `random_state`. Defaults to None.

        Raises:
            InvalidInputError: If the data, the path or the folds are not valid.
            SolverFailureError: If the solver fails on any fold or on the full data.

        Returns:
            CVResult: The CV curve, the selected regularization strength and the refit.
        """
        penalty = get_penalty(self.penalty)
        X, y = check_design(X, y)
        n_observations = X.shape[0]

        if fold_ids is None:
            fold_ids = make_fold_ids(
                n_observations, self.n_folds, random_state=self.random_state
            )
        else:
            fold_ids = check_fold_ids(fold_ids, n_observations)
        n_folds = int(fold_ids.max()) + 1

        lambda_path = LambdaPathGenerator(
            lambda_n=self.lambda_n,
            lambda_eps=self.lambda_eps,
            lambda_path=lambda_path,
            fit_intercept=self.fit_intercept,
            standardize=self.standardize,
        ).generate(X, y, penalty=penalty)
        solver = get_path_solver(self.solver, fit_intercept=self.fit_intercept)

        self._print_message(
            f"Cross-validating the {penalty.name} lasso on {n_folds} folds "
            f"and {lambda_path.shape[0]} regularization strengths.",
            level=1,
        )
        jobs = (
            delayed(_fold_errors)(
                solver,
                X,
                y,
                fold_ids != k,
                fold_ids == k,
                lambda_path,
                penalty,
                self.standardize,
            )
            for k in range(n_folds)
        )
        fold_errors = Parallel(
            n_jobs=self.n_jobs,
            verbose=max(self.verbose - 1, 0),
            prefer="threads",
        )(jobs)
        fold_errors = np.vstack(fold_errors)
        for k, errors in enumerate(fold_errors):
            self._print_message(
                f"Fold {k}: smallest held-out error {errors.min():.4f}", level=2
            )

        cv_mean = np.mean(fold_errors, axis=0)
        if not np.all(np.isfinite(cv_mean)):
            raise SolverFailureError(
                "The held-out prediction error is not finite for "
                f"lambda = {lambda_path[~np.isfinite(cv_mean)]}. "
                "Please check the solver's predictions."
            )
        cv_se = st.sem(fold_errors, axis=0)
        index_min = select_lambda_index(lambda_path, cv_mean)
        lambda_min = float(lambda_path[index_min])
        lambda_1se = select_lambda_1se(lambda_path, cv_mean, cv_se, index_min)
        self._print_message(
            f"Selected lambda = {lambda_min:.6g} (index {index_min}). Refitting on the full data.",
            level=1,
        )

        fit = solver.fit_path(
            X, y, lambda_path[[index_min]], penalty=penalty, standardize=self.standardize
        )[0]
        estimate = VarianceEstimator(n_observations, penalty=penalty).from_fit(fit)

        return CVResult(
            curve=CVCurve(
                lambda_path=lambda_path,
                cv_mean=cv_mean,
                cv_se=cv_se,
                fold_errors=fold_errors,
            ),
            fold_ids=fold_ids,
            index_min=index_min,
            lambda_min=lambda_min,
            lambda_1se=lambda_1se,
            fit=fit,
            estimate=estimate,
        )
