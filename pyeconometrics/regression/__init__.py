"""
Ordinary least squares with robust covariance estimators.

Public API:
    fit(X, y, ...) -> LinearSolution

The fit() function is the only entry point. It handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pyeconometrics.regression import fit, CovarianceType
    >>> result = fit(X, y, cov_type=CovarianceType.newey_west(4))
    >>> print(result.standard_errors)
    >>> print(result.summary())
"""

from pyeconometrics.regression.design import RegressionDesign
from pyeconometrics.regression.covariance import CovarianceType
from pyeconometrics.regression.solution import LinearSolution, OLSParams
from pyeconometrics.regression.solvers import fit

__all__ = [
    "fit",
    "RegressionDesign",
    "CovarianceType",
    "LinearSolution",
    "OLSParams",
]
