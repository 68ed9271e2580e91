from dataclasses import dataclass

import numpy as np

from .error import InvalidInputError


@dataclass(frozen=True)
class Penalty:
    """The penalty of the variance estimation problem.

    The natural lasso and the organic lasso share the estimation machinery and differ
    only in the penalty on the coefficients. For regularization strength $\\lambda$ the
    solver minimizes
    $$
    \\frac{1}{2n}\\|y - X\\beta\\|_2^2 + \\lambda \\text{pen}(\\beta)
    $$
    with $\\text{pen}(\\beta) = \\|\\beta\\|_1$ for the natural lasso and
    $\\text{pen}(\\beta) = \\|\\beta\\|_1^2$ for the organic lasso.

    Attributes:
        name (str): Name of the penalty.
        squared (bool): Whether the L1 norm enters squared.
    """

    name: str
    squared: bool

    def norm(self, coef: np.ndarray) -> float:
        l1_norm = float(np.sum(np.abs(coef)))
        if self.squared:
            return l1_norm**2
        return l1_norm

    def lambda_max(self, score: float) -> float:
        """Largest regularization strength of the path.

        Args:
            score (float): The largest absolute correlation $\\max_j |x_j^T y| / n$.

        Returns:
            float: For the natural lasso the smallest $\\lambda$ for which all coefficients
                are zero. The organic lasso never fits all coefficients to zero, we use the squared score.
        """
        if self.squared:
            return score**2
        return score


NATURAL = Penalty(name="natural", squared=False)
ORGANIC = Penalty(name="organic", squared=True)

_PENALTIES = {penalty.name: penalty for penalty in (NATURAL, ORGANIC)}


def get_penalty(penalty: Penalty | str) -> Penalty:
    if isinstance(penalty, Penalty):
        return penalty
    if isinstance(penalty, str) and penalty in _PENALTIES:
        return _PENALTIES[penalty]
    raise InvalidInputError(
        f"Did not recognize penalty {penalty!r}. Please provide one of {list(_PENALTIES)}."
    )
