import warnings
from typing import Iterable, Tuple

import numpy as np

from .penalties import Penalty, get_penalty
from .types import FitRecord, VarianceEstimate
from .warnings import DegenerateFitWarning


class VarianceEstimator:
    """Calculate the error variance estimators from a penalized fit.

    +-------------+------------------------------------------+------------------------------------------------------+
    | Estimator   | Description                              | Formula                                              |
    +=============+==========================================+======================================================+
    | `sig_obj`   | Objective-based (natural/organic lasso)  | $\\text{RSS}/n + 2\\lambda\\text{pen}(\\hat\\beta)$  |
    | `sig_naive` | Naive plug-in                            | $\\text{RSS}/n$                                      |
    | `sig_df`    | Degrees-of-freedom corrected             | $\\text{RSS}/(n - \\hat{s})$                          |
    +-------------+------------------------------------------+------------------------------------------------------+

    The penalty is $\\|\\hat\\beta\\|_1$ for the natural lasso and $\\|\\hat\\beta\\|_1^2$ for the
    organic lasso. For the natural lasso, `sig_obj` is the minimum of
    $\\|y - X\\beta\\|_2^2/n + 2\\lambda\\|\\beta\\|_1$, i.e. the estimator that is consistent
    with the penalized likelihood. Negative residual sums of squares (from rounding) are
    clipped at zero.

    Methods:
    -------
    from_fit(fit)
        Compute all estimators for a single `FitRecord`.
    from_path(fits)
        Compute all estimators along a path of `FitRecord`s.
    """

    def __init__(self, n_observations: int, penalty: Penalty | str = "natural"):
        """
        Args:
            n_observations (int): Number of observations used for the fit.
            penalty (Penalty | str, optional): The penalty. Defaults to "natural".
        """
        self.n_observations = n_observations
        self.penalty = get_penalty(penalty)

    def sig_obj(self, rss: float, coef: np.ndarray, lambda_: float) -> float:
        return max(rss, 0.0) / self.n_observations + 2 * lambda_ * self.penalty.norm(
            coef
        )

    def sig_naive(self, rss: float) -> float:
        return max(rss, 0.0) / self.n_observations

    def sig_df(self, rss: float, df: float) -> float:
        """The degrees-of-freedom corrected estimator.

        Args:
            rss (float): Residual sum of squares.
            df (float): Fitted degrees of freedom.

        Warns:
            DegenerateFitWarning: If `df >= n_observations`.

        Returns:
            float: The estimate. `nan` if the estimator is undefined.
        """
        if df >= self.n_observations:
            warnings.warn(
                f"[{self.__class__.__name__}] "
                f"The fitted degrees of freedom ({df}) reach the number of observations "
                f"({self.n_observations}). The degrees-of-freedom corrected estimator is undefined.",
                DegenerateFitWarning,
                stacklevel=2,
            )
            return np.nan
        return max(rss, 0.0) / (self.n_observations - df)

    def from_fit(self, fit: FitRecord) -> VarianceEstimate:
        return VarianceEstimate(
            lambda_=fit.lambda_,
            penalty=self.penalty.name,
            sig_obj=self.sig_obj(fit.rss, fit.coef_scaled, fit.lambda_),
            sig_naive=self.sig_naive(fit.rss),
            sig_df=self.sig_df(fit.rss, fit.df),
        )

    def from_path(self, fits: Iterable[FitRecord]) -> Tuple[VarianceEstimate, ...]:
        return tuple(self.from_fit(fit) for fit in fits)
