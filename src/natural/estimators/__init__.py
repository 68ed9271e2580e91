from .lasso_cv import NaturalLassoCV, OrganicLassoCV, VarianceLassoCV
from .organic_lasso import OrganicLasso

__all__ = [
    "NaturalLassoCV",
    "OrganicLassoCV",
    "OrganicLasso",
    "VarianceLassoCV",
]
