from importlib.metadata import version

from .base import PathSolver
from .coordinate_descent import (
    coordinate_descent,
    coordinate_descent_path,
    soft_threshold,
)
from .cross_validation import CrossValidator
from .error import InvalidInputError, SolverFailureError
from .estimators import NaturalLassoCV, OrganicLasso, OrganicLassoCV
from .folds import make_fold_ids
from .lambda_path import LambdaPathGenerator
from .methods import CoordinateDescentPath, get_path_solver
from .path import VariancePath
from .penalties import NATURAL, ORGANIC, Penalty, get_penalty
from .pivotal import PivotalTuningSelector
from .scaler import Standardizer
from .types import (
    CVCurve,
    CVResult,
    FitRecord,
    PathResult,
    PivotalResult,
    VarianceEstimate,
)
from .variance import VarianceEstimator
from .warnings import DegenerateFitWarning

try:
    __version__ = version("natural-lasso")
except Exception:
    __version__ = "dev"

__all__ = [
    "InvalidInputError",
    "SolverFailureError",
    "DegenerateFitWarning",
    "Penalty",
    "NATURAL",
    "ORGANIC",
    "get_penalty",
    "PathSolver",
    "CoordinateDescentPath",
    "get_path_solver",
    "Standardizer",
    "LambdaPathGenerator",
    "VarianceEstimator",
    "VariancePath",
    "make_fold_ids",
    "CrossValidator",
    "PivotalTuningSelector",
    "NaturalLassoCV",
    "OrganicLassoCV",
    "OrganicLasso",
    "FitRecord",
    "VarianceEstimate",
    "PathResult",
    "CVCurve",
    "CVResult",
    "PivotalResult",
    "coordinate_descent",
    "coordinate_descent_path",
    "soft_threshold",
]
