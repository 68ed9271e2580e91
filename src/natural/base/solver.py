from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from ..penalties import Penalty
from ..types import FitRecord


class PathSolver(ABC):
    """The penalized regression solver used by the variance estimators.

    A solver fits the penalized least squares problem for every regularization strength
    of a given path and reports one `FitRecord` per strength, in the order of the path.
    Solvers must not keep state between calls to `fit_path`, since the cross-validation
    calls the same solver concurrently for all folds.
    """

    @abstractmethod
    def fit_path(
        self,
        X: np.ndarray,
        y: np.ndarray,
        lambda_path: np.ndarray,
        penalty: Penalty | str,
        standardize: bool = True,
    ) -> Tuple[FitRecord, ...]:
        """Fit the regularization path.

        Args:
            X (np.ndarray): Design matrix.
            y (np.ndarray): Response vector.
            lambda_path (np.ndarray): Regularization strengths.
            penalty (Penalty | str): The penalty.
            standardize (bool, optional): Fit on the standardized design matrix and
                report coefficients on the original scale. Defaults to True.

        Raises:
            SolverFailureError: If the path can not be computed.

        Returns:
            Tuple[FitRecord, ...]: One fit per regularization strength.
        """
