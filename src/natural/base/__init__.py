from .estimator import VarianceEstimatorMixin
from .solver import PathSolver

__all__ = [
    "PathSolver",
    "VarianceEstimatorMixin",
]
