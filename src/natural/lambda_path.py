import numpy as np

from .error import InvalidInputError
from .gram import init_y_gram
from .penalties import Penalty, get_penalty
from .scaler import Standardizer
from .validation import check_lambda_eps, check_lambda_n, check_lambda_path


class LambdaPathGenerator:
    """Generate the grid of regularization strengths.

    The grid is geometric and decreasing from $\\lambda_\\max$ to
    $\\lambda_\\min = \\lambda_\\max \\varepsilon_\\lambda$. The largest regularization
    strength is calculated on the same standardized and centered data the solver sees:
    $$
    \\lambda_\\max = \\max_j |\\tilde{x}_j^T \\tilde{y}| / n,
    $$
    which is the smallest strength for which all coefficients of the natural lasso are zero.
    For the organic lasso, we use $\\lambda_\\max^2$.

    A user-defined path is validated and used as it is.
    """

    def __init__(
        self,
        lambda_n: int = 100,
        lambda_eps: float = 1e-2,
        lambda_path: np.ndarray | None = None,
        fit_intercept: bool = True,
        standardize: bool = True,
    ):
        """
        Args:
            lambda_n (int, optional): Length of the regularization path. Defaults to 100.
            lambda_eps (float, optional): Ratio of the smallest to the largest regularization strength. Defaults to 1e-2.
            lambda_path (np.ndarray | None, optional): User-defined path. Overrides `lambda_n` and `lambda_eps`. Defaults to None.
            fit_intercept (bool, optional): Whether the solver fits an intercept. Defaults to True.
            standardize (bool, optional): Whether the solver standardizes the design matrix. Defaults to True.
        """
        self.lambda_n = lambda_n
        self.lambda_eps = lambda_eps
        self.lambda_path = lambda_path
        self.fit_intercept = fit_intercept
        self.standardize = standardize

    def get_lambda_max(
        self, X: np.ndarray, y: np.ndarray, penalty: Penalty | str = "natural"
    ) -> float:
        penalty = get_penalty(penalty)
        X_scaled = Standardizer(
            with_mean=self.fit_intercept, with_scale=self.standardize
        ).fit_transform(X)
        y_centered = y - np.mean(y) if self.fit_intercept else y
        score = np.max(np.abs(init_y_gram(np.ascontiguousarray(X_scaled), y_centered)))
        if not score > 0:
            raise InvalidInputError(
                "The response is orthogonal to all (centered) columns of X. "
                "Can't determine the largest regularization strength."
            )
        return penalty.lambda_max(float(score))

    def generate(
        self, X: np.ndarray, y: np.ndarray, penalty: Penalty | str = "natural"
    ) -> np.ndarray:
        """Generate the regularization path.

        Args:
            X (np.ndarray): Design matrix. Should be validated already.
            y (np.ndarray): Response vector. Should be validated already.
            penalty (Penalty | str, optional): The penalty. Defaults to "natural".

        Raises:
            InvalidInputError: If the path or its parameters are not valid.

        Returns:
            np.ndarray: The regularization path.
        """
        if self.lambda_path is not None:
            return check_lambda_path(self.lambda_path)

        lambda_n = check_lambda_n(self.lambda_n)
        lambda_eps = check_lambda_eps(self.lambda_eps)
        lambda_max = self.get_lambda_max(X, y, penalty=penalty)
        if lambda_n == 1:
            return np.array([lambda_max])
        return np.geomspace(lambda_max, lambda_max * lambda_eps, lambda_n)
