import copy

from ..base import PathSolver
from ..error import InvalidInputError
from .cd_path import CoordinateDescentPath


def get_path_solver(
    solver: PathSolver | str | None = None, fit_intercept: bool = True
) -> PathSolver:
    if solver is None or (isinstance(solver, str) and solver == "cd"):
        out = CoordinateDescentPath(fit_intercept=fit_intercept)
    elif isinstance(solver, PathSolver):
        # Each estimator works on its own copy of the solver, the user
        # might pass the same instance to several estimators.
        out = copy.copy(solver)
    else:
        raise InvalidInputError(
            f"Did not recognize solver {solver!r}. Please provide 'cd' or a PathSolver instance."
        )
    return out
