"""
Solver dispatch for regression.

This module provides the fit() function (public API) and backend selection.
"""

from typing import Literal, Sequence
from numpy.typing import ArrayLike

from pyeconometrics.core.compute.tolerances import COLLINEARITY_TOL
from pyeconometrics.regression.design import RegressionDesign
from pyeconometrics.regression.covariance import CovarianceType
from pyeconometrics.regression.solution import LinearSolution
from pyeconometrics.regression.backends.cpu import CPUNormalEquationsBackend
from pyeconometrics.regression._inference import (
    InferenceDistribution,
    check_alpha,
    check_distribution,
)


BackendChoice = Literal['auto', 'cpu', 'cpu_normal_eq']


def fit(
    X: ArrayLike | RegressionDesign,
    y: ArrayLike | None = None,
    *,
    cov_type: CovarianceType | str = 'nonrobust',
    inference: InferenceDistribution = 't',
    names: Sequence[str] | None = None,
    drop_collinear: bool | None = None,
    collinearity_tol: float = COLLINEARITY_TOL,
    alpha: float = 0.05,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit a linear regression model by ordinary least squares.

    Solves min_β ||y - Xβ||² and reports coefficient covariance under the
    selected estimator, coefficient tests under the selected reference
    distribution, and goodness-of-fit statistics.

    Args:
        X: Design matrix (n x k) or a prebuilt RegressionDesign. Include a
            column of ones for an intercept.
        y: Response vector (n,). Omit when X is a RegressionDesign.
        cov_type: A CovarianceType, or one of 'nonrobust', 'hc1', 'hc2',
            'hc3', 'hc4'
        inference: 't' (Student's t with n-k' df) or 'normal'
        names: Variable names, one per column of X
        drop_collinear: Drop linearly dependent columns before solving.
            None (default) drops them only when variable names are known.
        collinearity_tol: Threshold on |R_jj| used by the guard
        alpha: Significance level for confidence intervals
        backend: 'auto' or 'cpu'

    Returns:
        LinearSolution with coefficients, inference and fit statistics

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If X, y or cluster labels have inconsistent lengths
        DegreesOfFreedomError: If n <= k before or after collinearity removal
        SingularMatrixError: If X'X is singular

    Example:
        >>> import numpy as np
        >>> from pyeconometrics.regression import fit, CovarianceType
        >>>
        >>> X = np.column_stack([np.ones(100), np.random.randn(100, 2)])
        >>> y = X @ [1, 2, 3] + np.random.randn(100) * 0.1
        >>>
        >>> result = fit(X, y, cov_type=CovarianceType.hc3())
        >>> print(result.summary())
    """
    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    cov = CovarianceType.coerce(cov_type)
    inference = check_distribution(inference)
    alpha = check_alpha(alpha)

    # === Construct Design ===
    if isinstance(X, RegressionDesign):
        if y is not None or names is not None:
            raise ValueError(
                "y and names must be omitted when X is a RegressionDesign"
            )
        design = X
    else:
        if y is None:
            raise ValueError("y is required when X is an array")
        design = RegressionDesign.build(X, y, names=names)

    cov.check_observations(design.n)

    # === Select Backend ===
    backend_impl = _get_backend(
        backend,
        cov_type=cov,
        inference=inference,
        drop_collinear=drop_collinear,
        collinearity_tol=collinearity_tol,
        alpha=alpha,
    )

    # === Solve ===
    result = backend_impl.solve(design)

    # === Wrap and Return ===
    return LinearSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice, **options) -> CPUNormalEquationsBackend:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_normal_eq'):
        return CPUNormalEquationsBackend(**options)
    raise ValueError(f"Unknown backend: {choice}")
