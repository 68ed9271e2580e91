from typing import Tuple

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin, _fit_context
from sklearn.utils.validation import check_is_fitted, validate_data


class Standardizer(TransformerMixin, BaseEstimator):

    _parameter_constraints = {
        "with_mean": [bool],
        "with_scale": [bool],
    }

    def __init__(self, with_mean: bool = True, with_scale: bool = True):
        """Column-wise standardization of the design matrix.

        The solver fits the penalized regression on the standardized matrix and reports
        the coefficients on the original scale. If we center, each column is scaled by its
        standard deviation. If we don't center (i.e. no intercept is fitted), each column
        is scaled by its root mean square, such that $\\frac{1}{n} x_j^T x_j = 1$ in both cases.
        Constant columns are not scaled.

        Args:
            with_mean (bool, optional): Whether to center the columns. Defaults to True.
            with_scale (bool, optional): Whether to scale the columns. Defaults to True.
        """
        self.with_mean = with_mean
        self.with_scale = with_scale

    @_fit_context(prefer_skip_nested_validation=True)
    def fit(self, X: np.ndarray, y: None = None) -> "Standardizer":
        """Fit the standardizer.

        Args:
            X (np.ndarray): Matrix of covariates X.
            y (None, optional): Not used, present for compatibility with sklearn API. Defaults to None.
        """
        X = validate_data(self, X=X, reset=True, dtype=[np.float64, np.float32])
        if self.with_mean:
            self.mean_ = np.mean(X, axis=0)
        else:
            self.mean_ = np.zeros(X.shape[1])

        if self.with_scale:
            scale = np.sqrt(np.mean((X - self.mean_) ** 2, axis=0))
            self.scale_ = np.where(scale > 0, scale, 1.0)
        else:
            self.scale_ = np.ones(X.shape[1])
        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Transform X to a mean-std scaled matrix.

        Args:
            X (np.ndarray): X matrix for covariates.

        Returns:
            np.ndarray: Scaled X matrix.
        """
        check_is_fitted(self, ["mean_", "scale_"])
        X = validate_data(self, X=X, reset=False, dtype=[np.float64, np.float32])
        return (X - self.mean_) / self.scale_

    def inverse_transform(self, X: np.ndarray) -> np.ndarray:
        """Back-transform a scaled X matrix to the original domain.

        Args:
            X (np.ndarray): Scaled X matrix.

        Returns:
            np.ndarray: Scaled back to the original scale.
        """
        check_is_fitted(self, ["mean_", "scale_"])
        X = validate_data(self, X=X, reset=False, dtype=[np.float64, np.float32])
        return X * self.scale_ + self.mean_

    def unscale_coef(self, coef: np.ndarray, y_mean: float = 0.0) -> Tuple[np.ndarray, float]:
        """Map coefficients of the standardized problem back to the original scale.

        Args:
            coef (np.ndarray): Coefficients for the standardized design matrix.
            y_mean (float, optional): The mean that was removed from the response. Defaults to 0.

        Returns:
            Tuple[np.ndarray, float]: Coefficients and intercept on the original scale.
        """
        check_is_fitted(self, ["mean_", "scale_"])
        coef = coef / self.scale_
        intercept = float(y_mean - self.mean_ @ coef)
        return coef, intercept
