import numbers
from typing import Literal

import numpy as np
from sklearn.base import BaseEstimator, RegressorMixin, _fit_context
from sklearn.utils._param_validation import Interval, StrOptions
from sklearn.utils.validation import validate_data

from ..base import PathSolver, VarianceEstimatorMixin
from ..pivotal import PivotalTuningSelector


class OrganicLasso(VarianceEstimatorMixin, RegressorMixin, BaseEstimator):
    """Error variance estimation with the organic lasso and a pivotal regularization strength."""

    _parameter_constraints = {
        "n_replicates": [Interval(numbers.Integral, 1, None, closed="left")],
        "quantile": [Interval(numbers.Real, 0.0, 1.0, closed="both"), None],
        "lambda_choice": [StrOptions({"lambda_1", "lambda_2"})],
        "fit_intercept": [bool],
        "standardize": [bool],
        "solver": [PathSolver, StrOptions({"cd"}), None],
        "random_state": ["random_state"],
        "n_jobs": [numbers.Integral, None],
        "verbose": [Interval(numbers.Integral, 0, None, closed="left")],
    }

    def __init__(
        self,
        n_replicates: int = 200,
        quantile: float | None = None,
        lambda_choice: Literal["lambda_1", "lambda_2"] = "lambda_2",
        fit_intercept: bool = True,
        standardize: bool = True,
        solver: PathSolver | str | None = None,
        random_state: int | np.random.RandomState | None = None,
        n_jobs: int | None = None,
        verbose: int = 0,
    ):
        """Organic lasso estimator class.

        Fits the organic lasso for both pivotal regularization strengths,
        $\\lambda_1 = \\log(p)/n$ and the Monte Carlo estimate $\\lambda_2$ of
        $E\\|X^Te\\|_\\infty^2/n^2$, and reports both variance estimates as `sig_obj_1_` and
        `sig_obj_2_`. Coefficients, predictions and `sigma2_` refer to the fit chosen
        by `lambda_choice`.

        Args:
            n_replicates (int, optional): Number of Monte Carlo replicates for $\\lambda_2$. Defaults to 200.
            quantile (float | None, optional): Use this quantile of the replicates instead of the mean. Defaults to None.
            lambda_choice (Literal["lambda_1", "lambda_2"], optional): The fit used for `coef_`, `predict` and `sigma2_`. Defaults to "lambda_2".
            fit_intercept (bool, optional): Whether to fit an intercept. Defaults to True.
            standardize (bool, optional): Whether to standardize the $X$ matrix for fitting. Defaults to True.
            solver (PathSolver | str | None, optional): The path solver. `None` and `"cd"` use coordinate descent. Defaults to None.
            random_state (int | np.random.RandomState | None, optional): Seed for the Monte Carlo draws. Defaults to None.
            n_jobs (int | None, optional): Number of parallel jobs for the replicates. Defaults to None.
            verbose (int, optional): Verbosity level for logging. Defaults to 0.
        """
        self.n_replicates = n_replicates
        self.quantile = quantile
        self.lambda_choice = lambda_choice
        self.fit_intercept = fit_intercept
        self.standardize = standardize
        self.solver = solver
        self.random_state = random_state
        self.n_jobs = n_jobs
        self.verbose = verbose

    @_fit_context(prefer_skip_nested_validation=True)
    def fit(self, X: np.ndarray, y: np.ndarray) -> "OrganicLasso":
        """Fit the organic lasso and estimate the error variance.

        Args:
            X (np.ndarray): The design matrix $X$.
            y (np.ndarray): The response vector $y$.
        """
        X, y = validate_data(self, X=X, y=y, reset=True, dtype=[np.float64])

        selector = PivotalTuningSelector(
            n_replicates=self.n_replicates,
            quantile=self.quantile,
            solver=self.solver,
            fit_intercept=self.fit_intercept,
            standardize=self.standardize,
            random_state=self.random_state,
            n_jobs=self.n_jobs,
            verbose=self.verbose,
        )
        self.pivotal_result_ = selector.fit(X, y)
        result = self.pivotal_result_

        self.lambda_1_ = result.lambda_1
        self.lambda_2_ = result.lambda_2
        self.sig_obj_1_ = result.sig_obj_1
        self.sig_obj_2_ = result.sig_obj_2

        if self.lambda_choice == "lambda_1":
            fit, estimate = result.fit_1, result.estimate_1
        else:
            fit, estimate = result.fit_2, result.estimate_2
        self.lambda_ = fit.lambda_
        self.coef_ = np.asarray(fit.coef)
        self.intercept_ = fit.intercept
        self.sig_obj_ = estimate.sig_obj
        self.sig_naive_ = estimate.sig_naive
        self.sig_df_ = estimate.sig_df
        self.sigma2_ = estimate.sig_obj
        return self
