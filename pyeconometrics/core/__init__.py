"""
Core infrastructure for PyEconometrics.

Shared abstractions, utilities, and numeric infrastructure used by the
estimation submodules.

Key components:
    protocols: Backend protocol
    datasource: Universal DataSource container
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, linear algebra kernels
"""

from pyeconometrics.core.protocols import Backend
from pyeconometrics.core.datasource import DataSource
from pyeconometrics.core.result import Result
from pyeconometrics.core.exceptions import (
    PyEconometricsError,
    ValidationError,
    DimensionError,
    DegreesOfFreedomError,
    NumericalError,
    SingularMatrixError,
    DistributionError,
)

__all__ = [
    # Protocols
    "Backend",
    # Data
    "DataSource",
    # Result
    "Result",
    # Exceptions
    "PyEconometricsError",
    "ValidationError",
    "DimensionError",
    "DegreesOfFreedomError",
    "NumericalError",
    "SingularMatrixError",
    "DistributionError",
]
