"""
Linear algebra kernels for PyEconometrics.

All functions follow these conventions:
    - NumPy (LAPACK under the hood) for dense algebra
    - Each operation returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    qr: QR decomposition and the collinearity guard
    normal_equations: Cross-product inversion and least squares solve
"""

from pyeconometrics.core.compute.linalg.qr import (
    QRResult,
    CollinearityResult,
    qr_cpu,
    drop_collinear_columns,
)
from pyeconometrics.core.compute.linalg.normal_equations import (
    NormalEquationsResult,
    invert_cross_product,
    solve_normal_equations,
)

__all__ = [
    # QR decomposition
    "QRResult",
    "CollinearityResult",
    "qr_cpu",
    "drop_collinear_columns",
    # Normal equations
    "NormalEquationsResult",
    "invert_cross_product",
    "solve_normal_equations",
]
