import numbers
from typing import Tuple

import numpy as np
from sklearn.utils.validation import check_array, check_X_y

from .error import InvalidInputError


def check_design(X: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Validate the design matrix and the response.

    Args:
        X (np.ndarray): Design matrix of shape n x p.
        y (np.ndarray): Response vector of length n.

    Raises:
        InvalidInputError: If `X` is not two-dimensional, has no columns, the number of
            rows does not match the length of `y` or the data contains non-finite values.

    Returns:
        Tuple[np.ndarray, np.ndarray]: `X` and `y` as float64 arrays.
    """
    X = np.asarray(X)
    y = np.asarray(y)
    if X.ndim != 2:
        raise InvalidInputError(
            f"The design matrix must be two-dimensional. Got {X.ndim} dimensions."
        )
    if X.shape[1] == 0:
        raise InvalidInputError("The design matrix must have at least one column.")
    if y.ndim != 1:
        y = y.squeeze()
        if y.ndim != 1:
            raise InvalidInputError("The response must be a vector.")
    if X.shape[0] != y.shape[0]:
        raise InvalidInputError(
            f"X has {X.shape[0]} rows, but y has {y.shape[0]} observations."
        )
    try:
        X, y = check_X_y(X, y, dtype=np.float64, y_numeric=True, ensure_min_samples=2)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
    return X, y


def check_lambda_path(lambda_path) -> np.ndarray:
    """Validate a user-defined regularization path.

    The path is used in the given order. We don't sort.

    Raises:
        InvalidInputError: If the path is empty, not one-dimensional or contains non-positive values.
    """
    lambda_path = np.array(lambda_path, dtype=np.float64, ndmin=1)
    if lambda_path.ndim != 1 or lambda_path.shape[0] == 0:
        raise InvalidInputError("The lambda path must be a non-empty vector.")
    if not np.all(np.isfinite(lambda_path)):
        raise InvalidInputError("The lambda path must contain only finite values.")
    if np.any(lambda_path <= 0):
        raise InvalidInputError(
            f"All values of the lambda path must be positive. Got {lambda_path[lambda_path <= 0]}."
        )
    return lambda_path


def check_lambda_n(lambda_n: int) -> int:
    if not isinstance(lambda_n, numbers.Integral) or lambda_n < 1:
        raise InvalidInputError(
            f"The length of the lambda path must be a positive integer. Got {lambda_n}."
        )
    return int(lambda_n)


def check_lambda_eps(lambda_eps: float) -> float:
    if not isinstance(lambda_eps, numbers.Real) or not (0 < lambda_eps < 1):
        raise InvalidInputError(
            f"lambda_eps must be in the open interval (0, 1). Got {lambda_eps}."
        )
    return float(lambda_eps)


def check_n_folds(n_folds: int, n_observations: int) -> int:
    """Validate the number of cross-validation folds.

    Raises:
        InvalidInputError: If `n_folds` is not an integer in `[2, n_observations]`.
    """
    if not isinstance(n_folds, numbers.Integral):
        raise InvalidInputError(f"n_folds must be an integer. Got {n_folds}.")
    if n_folds < 2 or n_folds > n_observations:
        raise InvalidInputError(
            f"n_folds must be between 2 and the number of observations ({n_observations}). Got {n_folds}."
        )
    return int(n_folds)


def check_fold_ids(fold_ids, n_observations: int) -> np.ndarray:
    """Validate a user-defined fold assignment.

    The fold ids must be integers labelling the folds `0, ..., K - 1` and every fold must
    contain at least one observation.

    Raises:
        InvalidInputError: If the fold ids do not form a partition into at least two folds.
    """
    fold_ids = np.asarray(fold_ids)
    if fold_ids.ndim != 1 or fold_ids.shape[0] != n_observations:
        raise InvalidInputError(
            f"fold_ids must be a vector of length {n_observations}. Got shape {fold_ids.shape}."
        )
    if not np.issubdtype(fold_ids.dtype, np.integer):
        raise InvalidInputError("fold_ids must be integers.")
    n_folds = int(fold_ids.max()) + 1 if fold_ids.size else 0
    if fold_ids.min() < 0 or np.unique(fold_ids).shape[0] != n_folds:
        raise InvalidInputError(
            "fold_ids must label the folds 0, ..., K - 1 and every fold must be non-empty."
        )
    check_n_folds(n_folds, n_observations)
    return fold_ids.astype(np.int64)


def check_matrix(X: np.ndarray) -> np.ndarray:
    """Validate a design matrix on its own.

    Raises:
        InvalidInputError: If `X` is not a finite two-dimensional matrix with at least one column.
    """
    X = np.asarray(X)
    if X.ndim != 2 or X.shape[1] == 0:
        raise InvalidInputError(
            f"The design matrix must be two-dimensional with at least one column. Got shape {X.shape}."
        )
    try:
        X = check_array(X, dtype=np.float64, ensure_min_samples=2)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
    return X
