"""
Inference and goodness-of-fit statistics for linear regression.

Turns a coefficient covariance into standard errors, test statistics,
p-values and confidence intervals, and computes R², adjusted R², the
overall F-test, the Gaussian log-likelihood and information criteria.

The reference distribution for coefficient tests is swappable: p-values
and intervals can be recomputed from stored coefficients and standard
errors without touching the covariance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pyeconometrics.core.exceptions import ValidationError, DistributionError
from pyeconometrics.core.compute.tolerances import (
    SST_ZERO_TOL,
    SIGMA2_ZERO_TOL,
    VARIANCE_ROUNDING_RTOL,
)


InferenceDistribution = Literal['t', 'normal']

VALID_DISTRIBUTIONS: tuple[str, ...] = ('t', 'normal')


@dataclass(frozen=True)
class CoefficientTests:
    """Per-coefficient test statistics under one reference distribution."""
    statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    conf_int_lower: NDArray[np.floating[Any]]
    conf_int_upper: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class FitStatistics:
    """Goodness-of-fit and information criteria."""
    tss: float
    r_squared: float
    adjusted_r_squared: float
    df_model: int
    f_statistic: float
    f_p_value: float
    sigma: float
    log_likelihood: float
    aic: float
    bic: float


def check_distribution(inference: str) -> InferenceDistribution:
    """Validate the inference distribution name."""
    if inference not in VALID_DISTRIBUTIONS:
        raise ValidationError(
            f"inference must be one of {VALID_DISTRIBUTIONS}, got {inference!r}"
        )
    return inference


def check_alpha(alpha: float) -> float:
    """Validate a significance level is in (0, 1)."""
    if not (0.0 < alpha < 1.0):
        raise ValidationError(f"alpha must be in (0, 1), got {alpha}")
    return float(alpha)


def reference_distribution(inference: InferenceDistribution, df_residual: int):
    """
    Frozen scipy distribution for coefficient tests.

    Raises:
        DistributionError: Student's t requested with df <= 0
    """
    if inference == 'normal':
        return stats.norm()
    if df_residual <= 0:
        raise DistributionError(
            f"Student's t needs positive degrees of freedom, got {df_residual}",
            distribution='t',
            df=df_residual,
        )
    return stats.t(df_residual)


def f_distribution(df_model: int, df_residual: int):
    """
    Frozen F distribution for the overall regression test.

    Raises:
        DistributionError: Either degrees of freedom is <= 0
    """
    if df_model <= 0 or df_residual <= 0:
        raise DistributionError(
            f"F distribution needs positive degrees of freedom, "
            f"got ({df_model}, {df_residual})",
            distribution='f',
            df=(df_model, df_residual),
        )
    return stats.f(df_model, df_residual)


def standard_errors(
    vcov: NDArray[np.floating[Any]],
    classical_variances: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], tuple[str, ...]]:
    """
    Square roots of the covariance diagonal.

    Negative variances within rounding distance of zero, measured against
    the classical σ²·diag((X'X)⁻¹), are clipped to zero. Larger negative
    variances (possible for two-way clustering) become NaN.

    Returns:
        (standard errors, warning messages)
    """
    variances = np.diag(vcov).copy()
    scale = np.maximum(np.abs(classical_variances), np.abs(variances))
    rounding = (variances < 0) & (variances >= -VARIANCE_ROUNDING_RTOL * scale)
    variances[rounding] = 0.0

    negative = variances < 0
    messages: tuple[str, ...] = ()
    if np.any(negative):
        idx = np.flatnonzero(negative).tolist()
        messages = (
            f"Covariance estimate has negative variances for coefficients "
            f"{idx}; their standard errors are reported as NaN",
        )
        variances[negative] = np.nan
    return np.sqrt(variances), messages


def coefficient_tests(
    coefficients: NDArray[np.floating[Any]],
    std_errors: NDArray[np.floating[Any]],
    inference: InferenceDistribution,
    df_residual: int,
    alpha: float = 0.05,
) -> CoefficientTests:
    """
    t (or z) statistics, two-sided p-values and 1-alpha intervals.

    A zero standard error with a zero coefficient gives a NaN statistic
    and p-value; with a non-zero coefficient the statistic is infinite.
    """
    dist = reference_distribution(inference, df_residual)
    with np.errstate(divide='ignore', invalid='ignore'):
        statistics = coefficients / std_errors
    p_values = 2.0 * dist.sf(np.abs(statistics))
    critical = float(dist.ppf(1.0 - alpha / 2.0))
    margin = critical * std_errors
    return CoefficientTests(
        statistics=statistics,
        p_values=p_values,
        conf_int_lower=coefficients - margin,
        conf_int_upper=coefficients + margin,
    )


def has_intercept(X: NDArray[np.floating[Any]]) -> bool:
    """True if any column is constant and non-zero."""
    if X.shape[0] == 0:
        return False
    constant = np.all(X == X[0], axis=0) & (X[0] != 0)
    return bool(np.any(constant))


def fit_statistics(
    y: NDArray[np.floating[Any]],
    rss: float,
    n_params: int,
    intercept: bool,
) -> FitStatistics:
    """
    R², adjusted R², overall F-test, log-likelihood, AIC and BIC.

    Args:
        y: Response vector (n,)
        rss: Sum of squared residuals
        n_params: k', the number of estimated coefficients
        intercept: Whether the design contains a constant column

    Note:
        SST ≈ 0 gives R² = 0. σ² ≈ 0 gives F = 0 with p-value 1.
        df_model = 0 gives a NaN F-statistic and p-value. These are
        values, not errors.
    """
    n = y.shape[0]
    df_residual = n - n_params
    df_model = n_params - 1 if intercept else n_params

    tss = float(np.sum((y - y.mean()) ** 2))
    if abs(tss) < SST_ZERO_TOL:
        r_squared = 0.0
    else:
        r_squared = 1.0 - rss / tss
    adjusted_r_squared = 1.0 - (1.0 - r_squared) * ((n - 1.0) / df_residual)

    sigma2 = rss / df_residual
    if df_model > 0:
        if sigma2 < SIGMA2_ZERO_TOL:
            f_statistic = 0.0
        else:
            f_statistic = ((tss - rss) / df_model) / sigma2
        f_p_value = float(f_distribution(df_model, df_residual).sf(f_statistic))
    else:
        f_statistic = float('nan')
        f_p_value = float('nan')

    # ln(0) for an exact fit is -inf, giving an infinite likelihood
    with np.errstate(divide='ignore'):
        log_likelihood = float(
            -n / 2.0 * (np.log(2.0 * np.pi) + np.log(rss / n) + 1.0)
        )
    aic = 2.0 * n_params - 2.0 * log_likelihood
    bic = n_params * np.log(n) - 2.0 * log_likelihood

    return FitStatistics(
        tss=tss,
        r_squared=float(r_squared),
        adjusted_r_squared=float(adjusted_r_squared),
        df_model=int(df_model),
        f_statistic=float(f_statistic),
        f_p_value=f_p_value,
        sigma=float(np.sqrt(sigma2)),
        log_likelihood=log_likelihood,
        aic=float(aic),
        bic=float(bic),
    )
