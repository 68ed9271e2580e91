from .cd_path import CoordinateDescentPath
from .factory import get_path_solver

__all__ = [
    "get_path_solver",
    "CoordinateDescentPath",
]
