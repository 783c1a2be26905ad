"""
Sandwich covariance estimators.

Every estimator has the shape  V = B · M · B  with B = (X'X)⁻¹ taken from
the solver and M (the "meat") chosen by the CovarianceType. Meats that are
sums of outer products of score vectors are assembled as S'S, so the
sandwich can be formed as (SB)'(SB) and stays symmetric positive
semi-definite in floating point.

All functions are pure: they read X, the residuals and the bread, and
return new arrays. X may be a projected matrix (e.g. second-stage
regressors of an IV caller) as long as the bread was built from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.exceptions import ValidationError
from pyeconometrics.core.compute.tolerances import LEVERAGE_CEILING
from pyeconometrics.core.validation import check_labels
from pyeconometrics.regression.covariance import CovarianceType


@dataclass(frozen=True)
class CovarianceEstimate:
    """
    Coefficient covariance and how it was produced.
    
    Attributes:
        matrix: V (k x k)
        correction: Small-sample factor applied to B·M·B (1.0 if none)
        n_clusters: Cluster counts per dimension, empty if unclustered
    """
    matrix: NDArray[np.floating[Any]]
    correction: float
    n_clusters: tuple[int, ...] = ()


def _sandwich_from_scores(
    scores: NDArray[np.floating[Any]],
    bread: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """B (S'S) B computed as (SB)'(SB)."""
    sb = scores @ bread
    return sb.T @ sb


def _sandwich(
    meat: NDArray[np.floating[Any]],
    bread: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """B M B, symmetrized."""
    v = bread @ meat @ bread
    return (v + v.T) / 2.0


def leverage(
    X: NDArray[np.floating[Any]],
    bread: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Hat-matrix diagonal h_i = x_i' B x_i."""
    return np.einsum('ij,jk,ik->i', X, bread, X)


def cluster_scores(
    X: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    codes: NDArray[np.intp],
) -> NDArray[np.floating[Any]]:
    """
    Per-cluster scores s_g = X_g' u_g for dense cluster codes 0..G-1 (G x k).

    s_g s_g' equals the full within-cluster double sum
    Σ_i Σ_j u_i u_j x_i x_j', not just its diagonal.
    """
    n_groups = int(codes.max()) + 1
    scores = np.zeros((n_groups, X.shape[1]))
    np.add.at(scores, codes, X * residuals[:, None])
    return scores


def cluster_meat(
    X: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    codes: NDArray[np.intp],
) -> NDArray[np.floating[Any]]:
    """Σ_g X_g' u_g u_g' X_g."""
    scores = cluster_scores(X, residuals, codes)
    return scores.T @ scores


# =====================================================================
# Estimators
# =====================================================================


def _nonrobust(cov_type, X, residuals, bread, rss):
    n, k = X.shape
    sigma2 = rss / (n - k)
    return CovarianceEstimate(matrix=bread * sigma2, correction=1.0)


def _hc1(cov_type, X, residuals, bread, rss):
    n, k = X.shape
    correction = n / (n - k)
    v = _sandwich_from_scores(X * residuals[:, None], bread)
    return CovarianceEstimate(matrix=v * correction, correction=correction)


def _leverage_weighted(weight: Callable[[NDArray, NDArray, int, int], NDArray]):
    """
    Build an HC2/HC3/HC4 estimator from a leverage discount function.
    
    weight(u², h, n, k) returns the adjusted squared residuals for the
    observations whose leverage is below the ceiling; the rest keep u².
    """
    def estimator(cov_type, X, residuals, bread, rss):
        n, k = X.shape
        h = leverage(X, bread)
        u2 = residuals ** 2
        safe = h < LEVERAGE_CEILING
        adjusted = u2.copy()
        adjusted[safe] = weight(u2[safe], h[safe], n, k)
        v = _sandwich_from_scores(X * np.sqrt(adjusted)[:, None], bread)
        return CovarianceEstimate(matrix=v, correction=1.0)
    return estimator


_hc2 = _leverage_weighted(lambda u2, h, n, k: u2 / (1.0 - h))
_hc3 = _leverage_weighted(lambda u2, h, n, k: u2 / (1.0 - h) ** 2)
_hc4 = _leverage_weighted(
    lambda u2, h, n, k: u2 / (1.0 - h) ** np.minimum(4.0, n * h / k)
)


def _newey_west(cov_type, X, residuals, bread, rss):
    n, k = X.shape
    lags = cov_type.lags
    scores = X * residuals[:, None]
    meat = scores.T @ scores
    
    # Lags at or beyond n contribute no pairs
    for lag in range(1, min(lags, n - 1) + 1):
        weight = 1.0 - lag / (lags + 1.0)
        # Ω_ℓ = Σ_{t≥ℓ} u_t u_{t-ℓ} x_t x_{t-ℓ}'
        omega = scores[lag:].T @ scores[:-lag]
        meat += weight * (omega + omega.T)
    
    correction = n / (n - k)
    return CovarianceEstimate(
        matrix=_sandwich(meat, bread) * correction,
        correction=correction,
    )


def _cluster_correction(n_groups: int, n: int, k: int) -> float:
    if n_groups < 2:
        raise ValidationError(
            f"clusters: cluster-robust covariance needs at least 2 clusters, got {n_groups}"
        )
    return (n_groups / (n_groups - 1.0)) * ((n - 1.0) / (n - k))


def _clustered(cov_type, X, residuals, bread, rss):
    n, k = X.shape
    codes = check_labels(cov_type.clusters, n, 'clusters')
    n_groups = int(codes.max()) + 1
    correction = _cluster_correction(n_groups, n, k)
    v = _sandwich_from_scores(cluster_scores(X, residuals, codes), bread)
    return CovarianceEstimate(
        matrix=v * correction,
        correction=correction,
        n_clusters=(n_groups,),
    )


def _clustered_two_way(cov_type, X, residuals, bread, rss):
    n, k = X.shape
    codes1 = check_labels(cov_type.clusters, n, 'clusters1')
    codes2 = check_labels(cov_type.clusters2, n, 'clusters2')
    g1 = int(codes1.max()) + 1
    g2 = int(codes2.max()) + 1
    
    # Dense codes make code1 * G2 + code2 unique per (dim1, dim2) pair
    _, codes12 = np.unique(codes1 * g2 + codes2, return_inverse=True)
    codes12 = codes12.reshape(-1)
    
    meat = (
        cluster_meat(X, residuals, codes1)
        + cluster_meat(X, residuals, codes2)
        - cluster_meat(X, residuals, codes12)
    )
    correction = _cluster_correction(min(g1, g2), n, k)
    return CovarianceEstimate(
        matrix=_sandwich(meat, bread) * correction,
        correction=correction,
        n_clusters=(g1, g2),
    )


_ESTIMATORS: dict[str, Callable[..., CovarianceEstimate]] = {
    'nonrobust': _nonrobust,
    'hc1': _hc1,
    'hc2': _hc2,
    'hc3': _hc3,
    'hc4': _hc4,
    'newey_west': _newey_west,
    'clustered': _clustered,
    'clustered_two_way': _clustered_two_way,
}


def compute_covariance(
    cov_type: CovarianceType,
    X: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    bread: NDArray[np.floating[Any]],
    rss: float,
) -> CovarianceEstimate:
    """
    Coefficient covariance under the selected estimator.
    
    Args:
        cov_type: Selected estimator
        X: The n x k' matrix the bread was computed from
        residuals: y - Xβ̂ (n,)
        bread: (X'X)⁻¹ from the solver (k' x k')
        rss: Sum of squared residuals
        
    Returns:
        CovarianceEstimate
        
    Raises:
        DimensionError: Cluster labels do not match the observation count
        ValidationError: Fewer than two clusters
    """
    return _ESTIMATORS[cov_type.kind](cov_type, X, residuals, bread, rss)
