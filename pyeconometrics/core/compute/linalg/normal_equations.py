"""
Least squares via the normal equations.

Solves (X'X) β = X'y by explicit inversion of the cross-product. The
inverse is returned alongside the coefficients: it is the "bread" of
every sandwich covariance estimator, and all of them must share this
single copy.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.exceptions import SingularMatrixError
from pyeconometrics.core.compute.tolerances import SINGULAR_CONDITION_THRESHOLD


@dataclass(frozen=True)
class NormalEquationsResult:
    """
    Least squares solution and its reusable intermediates.
    
    Attributes:
        coefficients: β̂ (k,)
        bread: (X'X)⁻¹ (k x k)
        fitted_values: Xβ̂ (n,)
        residuals: y - Xβ̂ (n,)
        rss: Sum of squared residuals
        condition_number: cond(X'X) in the 2-norm
    """
    coefficients: NDArray[np.floating[Any]]
    bread: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float
    condition_number: float


def invert_cross_product(
    X: NDArray[np.floating[Any]],
    matrix_name: str = "X'X",
) -> tuple[NDArray[np.floating[Any]], float]:
    """
    Compute (X'X)⁻¹.
    
    Args:
        X: Full column rank matrix (n x k)
        matrix_name: Name used in error messages
        
    Returns:
        (inverse, condition number of X'X)
        
    Raises:
        SingularMatrixError: If X'X cannot be inverted or is numerically
            singular. There is no pseudo-inverse fallback.
    """
    xtx = X.T @ X
    k = xtx.shape[0]
    cond = float(np.linalg.cond(xtx))
    rank = int(np.linalg.matrix_rank(xtx))
    if not np.isfinite(cond) or cond > SINGULAR_CONDITION_THRESHOLD or rank < k:
        raise SingularMatrixError(
            f"Singular matrix: {matrix_name} is not invertible "
            f"(condition number {cond:.3e}). Columns of the design are "
            f"linearly dependent.",
            matrix_name=matrix_name,
            condition_number=cond,
            rank=rank,
            expected_rank=k,
        )
    try:
        xtx_inv = np.linalg.inv(xtx)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(
            f"Singular matrix: {matrix_name} is not invertible: {e}",
            matrix_name=matrix_name,
            condition_number=cond,
            expected_rank=k,
        ) from e
    return xtx_inv, cond


def solve_normal_equations(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> NormalEquationsResult:
    """
    Solve min_β ||y - Xβ||² as β = (X'X)⁻¹ X'y.
    
    Args:
        X: Design matrix (n x k), n > k, full column rank
        y: Response vector (n,)
        
    Returns:
        NormalEquationsResult
        
    Raises:
        SingularMatrixError: If X'X is singular
    """
    bread, cond = invert_cross_product(X)
    coefficients = bread @ (X.T @ y)
    fitted_values = X @ coefficients
    residuals = y - fitted_values
    rss = float(residuals @ residuals)
    
    return NormalEquationsResult(
        coefficients=coefficients,
        bread=bread,
        fitted_values=fitted_values,
        residuals=residuals,
        rss=rss,
        condition_number=cond,
    )
