"""
PyEconometrics: ordinary least squares with robust inference.

Submodules:
    regression: OLS with classical, heteroskedasticity-robust, HAC and
        cluster-robust covariance estimators
    core: Data containers, result envelope, exceptions, numerics
"""

__version__ = "0.1.0"

from pyeconometrics import regression
from pyeconometrics.regression import fit, CovarianceType, RegressionDesign
from pyeconometrics.core import DataSource

__all__ = [
    "__version__",
    "regression",
    "fit",
    "CovarianceType",
    "RegressionDesign",
    "DataSource",
]
