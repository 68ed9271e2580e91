from abc import ABC

import numpy as np
from sklearn.utils.validation import check_is_fitted, validate_data


class VarianceEstimatorMixin(ABC):

    @property
    def is_fitted(self) -> bool:
        """Has the estimator been fitted."""
        return hasattr(self, "sigma2_")

    @property
    def sigma_(self) -> float:
        """The estimated error standard deviation."""
        check_is_fitted(self, "sigma2_")
        return float(np.sqrt(self.sigma2_))

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict using the refitted coefficients.

        Args:
            X (np.ndarray): The design matrix $X$.

        Returns:
            np.ndarray: The predictions.
        """
        check_is_fitted(self)
        X = validate_data(self, X=X, reset=False, dtype=[np.float64, np.float32])
        return self.intercept_ + X @ self.coef_
