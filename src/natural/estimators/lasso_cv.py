import numbers
from typing import Optional

import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin, _fit_context
from sklearn.utils._param_validation import Interval, StrOptions
from sklearn.utils.validation import validate_data

from ..base import PathSolver, VarianceEstimatorMixin
from ..cross_validation import CrossValidator


class VarianceLassoCV(VarianceEstimatorMixin, RegressorMixin, BaseEstimator):
    """Cross-validated error variance estimation.

    Subclasses fix the penalty via the class attribute `_penalty`.
    """

    _penalty = "natural"

    _parameter_constraints = {
        "n_folds": [Interval(numbers.Integral, 2, None, closed="left")],
        "lambda_n": [Interval(numbers.Integral, 1, None, closed="left")],
        "lambda_eps": [Interval(numbers.Real, 0.0, 1.0, closed="neither")],
        "lambda_path": ["array-like", None],
        "fit_intercept": [bool],
        "standardize": [bool],
        "solver": [PathSolver, StrOptions({"cd"}), None],
        "random_state": ["random_state"],
        "n_jobs": [numbers.Integral, None],
        "verbose": [Interval(numbers.Integral, 0, None, closed="left")],
    }

    def __init__(
        self,
        n_folds: int = 5,
        lambda_n: int = 100,
        lambda_eps: float = 1e-2,
        lambda_path: Optional[np.ndarray] = None,
        fit_intercept: bool = True,
        standardize: bool = True,
        solver: PathSolver | str | None = None,
        random_state: int | np.random.RandomState | None = None,
        n_jobs: int | None = None,
        verbose: int = 0,
    ):
        """Error variance estimation with the cross-validated lasso.

        The estimator object provides the usual methods ``estimator.fit(X, y)`` and ``estimator.predict(X)``.
        After fitting, `sigma2_` holds the objective-based variance estimate at the cross-validated
        regularization strength. The naive and the degrees-of-freedom corrected estimates are
        available as `sig_naive_` and `sig_df_`.

        Args:
            n_folds (int, optional): Number of cross-validation folds. Defaults to 5.
            lambda_n (int, optional): Length of the regularization path. Defaults to 100.
            lambda_eps (float, optional): The largest regularization is determined automatically. The smallest regularization
                is taken as $\\varepsilon \\lambda^\\max$ and we use an exponential grid. Defaults to 1e-2.
            lambda_path (Optional[np.ndarray], optional): User-defined regularization path, used as given. Defaults to None.
            fit_intercept (bool, optional): Whether to fit an intercept. Defaults to True.
            standardize (bool, optional): Whether to standardize the $X$ matrix for fitting. Defaults to True.
            solver (PathSolver | str | None, optional): The path solver. `None` and `"cd"` use coordinate descent. Defaults to None.
            random_state (int | np.random.RandomState | None, optional): Seed for the fold assignment. Defaults to None.
            n_jobs (int | None, optional): Number of parallel jobs for the folds. Defaults to None.
            verbose (int, optional): Verbosity level for logging. 0 = silent, 1 = high-level, 2 = per fold. Defaults to 0.
        """
        self.n_folds = n_folds
        self.lambda_n = lambda_n
        self.lambda_eps = lambda_eps
        self.lambda_path = lambda_path
        self.fit_intercept = fit_intercept
        self.standardize = standardize
        self.solver = solver
        self.random_state = random_state
        self.n_jobs = n_jobs
        self.verbose = verbose

    @_fit_context(prefer_skip_nested_validation=True)
    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        fold_ids: Optional[np.ndarray] = None,
    ) -> "VarianceLassoCV":
        """Fit the cross-validated lasso and estimate the error variance.

        Args:
            X (np.ndarray): The design matrix $X$.
            y (np.ndarray): The response vector $y$.
            fold_ids (Optional[np.ndarray], optional): User-defined fold assignment. Defaults to None.
        """
        X, y = validate_data(self, X=X, y=y, reset=True, dtype=[np.float64])

        cross_validator = CrossValidator(
            penalty=self._penalty,
            n_folds=self.n_folds,
            solver=self.solver,
            lambda_n=self.lambda_n,
            lambda_eps=self.lambda_eps,
            fit_intercept=self.fit_intercept,
            standardize=self.standardize,
            random_state=self.random_state,
            n_jobs=self.n_jobs,
            verbose=self.verbose,
        )
        self.cv_result_ = cross_validator.fit(
            X, y, lambda_path=self.lambda_path, fold_ids=fold_ids
        )

        estimate = self.cv_result_.estimate
        self.lambda_ = self.cv_result_.lambda_min
        self.coef_ = np.asarray(self.cv_result_.fit.coef)
        self.intercept_ = self.cv_result_.fit.intercept
        self.sig_obj_ = estimate.sig_obj
        self.sig_naive_ = estimate.sig_naive
        self.sig_df_ = estimate.sig_df
        self.sigma2_ = estimate.sig_obj
        return self


class NaturalLassoCV(VarianceLassoCV):
    """Error variance estimation with the cross-validated natural lasso.

    The natural lasso estimates the error variance as the minimum of the penalized objective
    $$
    \\hat\\sigma^2 = \\min_\\beta \\left\\{ \\frac{1}{n}\\|y - X\\beta\\|_2^2 + 2\\lambda\\|\\beta\\|_1 \\right\\}.
    $$
    The regularization strength is selected by cross-validating the prediction error.
    """

    _penalty = "natural"


class OrganicLassoCV(VarianceLassoCV):
    """Error variance estimation with the cross-validated organic lasso.

    The organic lasso uses the squared L1 penalty
    $$
    \\hat\\sigma^2 = \\min_\\beta \\left\\{ \\frac{1}{n}\\|y - X\\beta\\|_2^2 + 2\\lambda\\|\\beta\\|_1^2 \\right\\}.
    $$
    See `OrganicLasso` for the pivotal choice of the regularization strength.
    """

    _penalty = "organic"
