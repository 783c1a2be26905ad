"""
Numerical tolerances and thresholds.

Single source of truth for every constant the estimation kernel uses to
decide "numerically zero", plus the tolerance tiers the test suite uses
to compare results.
"""

from dataclasses import dataclass

import numpy as np


EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# |R_jj| at or below this marks column j as linearly dependent
COLLINEARITY_TOL: float = 1e-10

# Leverage at or above this falls back to the unweighted squared residual
LEVERAGE_CEILING: float = 0.9999

# Total sum of squares below this means R² is reported as 0
SST_ZERO_TOL: float = 1e-12

# Residual variance below this gives an F-statistic of 0
SIGMA2_ZERO_TOL: float = 1e-12

# cond(X'X) beyond this is treated as singular
SINGULAR_CONDITION_THRESHOLD: float = 1.0 / EPSILON_64

# Negative variances within this fraction of the classical variance are rounding
VARIANCE_ROUNDING_RTOL: float = float(np.sqrt(EPSILON_64))


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# CPU reference: exact linear algebra in double precision
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision reference',
)
