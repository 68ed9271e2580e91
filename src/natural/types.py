from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


def _frozen_array(values, dtype=np.float64) -> np.ndarray:
    out = np.array(values, dtype=dtype)
    out.setflags(write=False)
    return out


@dataclass(frozen=True)
class FitRecord:
    """The penalized regression fit for a single regularization strength.

    Attributes:
        lambda_ (float): The regularization strength.
        coef (np.ndarray): Coefficients on the original scale of $X$.
        coef_scaled (np.ndarray): Coefficients on the scale the penalty acts on,
            i.e. for the standardized design matrix. Equal to `coef` if the
            solver does not standardize.
        intercept (float): The intercept. Zero if no intercept is fitted.
        df (float): The fitted degrees of freedom.
        rss (float): The residual sum of squares.
        n_iterations (int): Number of coordinate descent iterations.
    """

    lambda_: float
    coef: np.ndarray
    coef_scaled: np.ndarray
    intercept: float
    df: float
    rss: float
    n_iterations: int = 0

    def __post_init__(self):
        object.__setattr__(self, "coef", _frozen_array(self.coef))
        object.__setattr__(self, "coef_scaled", _frozen_array(self.coef_scaled))
        object.__setattr__(self, "rss", max(float(self.rss), 0.0))

    def predict(self, X: np.ndarray) -> np.ndarray:
        return self.intercept + X @ self.coef


@dataclass(frozen=True)
class VarianceEstimate:
    """Variance estimates for a single regularization strength.

    `sig_df` is `nan` if the degrees-of-freedom correction is undefined.
    """

    lambda_: float
    penalty: str
    sig_obj: float
    sig_naive: float
    sig_df: float


@dataclass(frozen=True)
class PathResult:
    """Fits and variance estimates along a regularization path."""

    lambda_path: np.ndarray
    fits: Tuple[FitRecord, ...]
    estimates: Tuple[VarianceEstimate, ...]

    def __post_init__(self):
        object.__setattr__(self, "lambda_path", _frozen_array(self.lambda_path))
        object.__setattr__(self, "fits", tuple(self.fits))
        object.__setattr__(self, "estimates", tuple(self.estimates))

    @property
    def sig_obj_path(self) -> np.ndarray:
        return np.array([e.sig_obj for e in self.estimates])

    @property
    def sig_naive_path(self) -> np.ndarray:
        return np.array([e.sig_naive for e in self.estimates])

    @property
    def sig_df_path(self) -> np.ndarray:
        return np.array([e.sig_df for e in self.estimates])

    @property
    def df_path(self) -> np.ndarray:
        return np.array([f.df for f in self.fits])

    @property
    def coef_path(self) -> np.ndarray:
        """The coefficient path as `len(lambda_path) x p` array."""
        return np.vstack([f.coef for f in self.fits])


@dataclass(frozen=True)
class CVCurve:
    """Cross-validated prediction error along the regularization path.

    Attributes:
        lambda_path (np.ndarray): The regularization path in the order it was evaluated.
        cv_mean (np.ndarray): Mean held-out squared error across folds.
        cv_se (np.ndarray): Standard error of the held-out error across folds.
        fold_errors (np.ndarray): Held-out error per fold and lambda, `n_folds x len(lambda_path)`.
    """

    lambda_path: np.ndarray
    cv_mean: np.ndarray
    cv_se: np.ndarray
    fold_errors: np.ndarray

    def __post_init__(self):
        for name in ("lambda_path", "cv_mean", "cv_se", "fold_errors"):
            object.__setattr__(self, name, _frozen_array(getattr(self, name)))

    def __len__(self) -> int:
        return self.lambda_path.shape[0]


@dataclass(frozen=True)
class CVResult:
    curve: CVCurve
    fold_ids: np.ndarray
    index_min: int
    lambda_min: float
    lambda_1se: float
    fit: FitRecord
    estimate: VarianceEstimate

    def __post_init__(self):
        object.__setattr__(self, "fold_ids", _frozen_array(self.fold_ids, np.int64))

    @property
    def n_folds(self) -> int:
        return self.curve.fold_errors.shape[0]


@dataclass(frozen=True)
class PivotalResult:
    """Organic lasso fits at the two pivotal regularization strengths.

    `lambda_1` is the closed form $\\log(p) / n$, `lambda_2` the Monte Carlo
    estimate of $E\\|X^T e\\|_\\infty^2 / n^2$.
    """

    lambda_1: float
    lambda_2: float
    fit_1: FitRecord
    fit_2: FitRecord
    estimate_1: VarianceEstimate
    estimate_2: VarianceEstimate
    replicates: np.ndarray = field(default_factory=lambda: np.empty(0))

    def __post_init__(self):
        object.__setattr__(self, "replicates", _frozen_array(self.replicates))

    @property
    def sig_obj_1(self) -> float:
        return self.estimate_1.sig_obj

    @property
    def sig_obj_2(self) -> float:
        return self.estimate_2.sig_obj
