import numpy as np
from sklearn.utils import check_random_state

from .validation import check_n_folds


def make_fold_ids(n_observations: int, n_folds: int, random_state=None) -> np.ndarray:
    """Randomly assign the observations to cross-validation folds.

    We draw a random permutation of the observations and assign the observation at
    position $i$ of the permutation to fold $i \\bmod K$. Hence, every fold is non-empty and
    the fold sizes differ by at most one.

    Args:
        n_observations (int): Number of observations $n$.
        n_folds (int): Number of folds $K$, needs to be in $[2, n]$.
        random_state (int | np.random.RandomState | None, optional): Seed or random state. Defaults to None.

    Raises:
        InvalidInputError: If `n_folds` is not in $[2, n]$.

    Returns:
        np.ndarray: Fold id in $[0, K)$ for each observation.
    """
    n_folds = check_n_folds(n_folds, n_observations)
    rng = check_random_state(random_state)
    permutation = rng.permutation(n_observations)
    fold_ids = np.empty(n_observations, dtype=np.int64)
    fold_ids[permutation] = np.arange(n_observations) % n_folds
    return fold_ids
