"""
Covariance strategies for the coefficient estimator.

CovarianceType is a closed tagged union: the `kind` field selects one of
eight estimators and only the fields that estimator needs are populated.
Construct through the factory classmethods; instances are immutable and
are echoed back on the fitted solution for reporting.

References:
    White, H. (1980). A heteroskedasticity-consistent covariance matrix
    estimator and a direct test for heteroskedasticity. Econometrica 48(4).
    MacKinnon, J. G. & White, H. (1985). Some heteroskedasticity-consistent
    covariance matrix estimators with improved finite sample properties.
    Journal of Econometrics 29(3).
    Cribari-Neto, F. (2004). Asymptotic inference under heteroskedasticity
    of unknown form. Computational Statistics & Data Analysis 45(2).
    Newey, W. K. & West, K. D. (1987). A simple, positive semi-definite,
    heteroskedasticity and autocorrelation consistent covariance matrix.
    Econometrica 55(3).
    Cameron, A. C., Gelbach, J. B. & Miller, D. L. (2011). Robust inference
    with multiway clustering. Journal of Business & Economic Statistics 29(2).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyeconometrics.core.exceptions import ValidationError
from pyeconometrics.core.validation import check_labels, check_nonnegative_int


CovarianceKind = Literal[
    'nonrobust',
    'hc1',
    'hc2',
    'hc3',
    'hc4',
    'newey_west',
    'clustered',
    'clustered_two_way',
]

VALID_KINDS: tuple[str, ...] = (
    'nonrobust',
    'hc1',
    'hc2',
    'hc3',
    'hc4',
    'newey_west',
    'clustered',
    'clustered_two_way',
)

# String shortcuts accepted by fit() for the parameter-free estimators
_ALIASES: dict[str, str] = {
    'nonrobust': 'nonrobust',
    'non_robust': 'nonrobust',
    'classical': 'nonrobust',
    'hc1': 'hc1',
    'hc2': 'hc2',
    'hc3': 'hc3',
    'hc4': 'hc4',
}


def _frozen_labels(labels: ArrayLike) -> NDArray[Any]:
    arr = np.array(labels, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class CovarianceType:
    """
    Selected covariance estimator.
    
    Do not construct directly; use the factory classmethods.
    
    Attributes:
        kind: One of VALID_KINDS
        lags: Newey-West lag count L (newey_west only)
        clusters: Cluster labels, one per observation (clustered kinds)
        clusters2: Second-dimension labels (clustered_two_way only)
    """
    kind: CovarianceKind
    lags: int | None = None
    clusters: NDArray[Any] | None = None
    clusters2: NDArray[Any] | None = None
    
    # --- Factories ---
    
    @classmethod
    def non_robust(cls) -> CovarianceType:
        """Classical σ²(X'X)⁻¹, homoskedastic errors."""
        return cls(kind='nonrobust')
    
    @classmethod
    def hc1(cls) -> CovarianceType:
        """White's estimator with the n/(n-k) correction."""
        return cls(kind='hc1')
    
    @classmethod
    def hc2(cls) -> CovarianceType:
        """Leverage-adjusted weights u²/(1-h)."""
        return cls(kind='hc2')
    
    @classmethod
    def hc3(cls) -> CovarianceType:
        """Jackknife-style weights u²/(1-h)²."""
        return cls(kind='hc3')
    
    @classmethod
    def hc4(cls) -> CovarianceType:
        """Weights u²/(1-h)^δ with δ = min(4, n·h/k)."""
        return cls(kind='hc4')
    
    @classmethod
    def newey_west(cls, lags: int) -> CovarianceType:
        """
        HAC estimator with Bartlett weights.
        
        Args:
            lags: Number of autocovariance lags L >= 0. A common rule of
                thumb is L = floor(n^0.25).
        """
        return cls(kind='newey_west', lags=check_nonnegative_int(lags, 'lags'))
    
    @classmethod
    def clustered(cls, clusters: ArrayLike) -> CovarianceType:
        """One-way cluster-robust estimator; one label per observation."""
        return cls(kind='clustered', clusters=_frozen_labels(clusters))
    
    @classmethod
    def clustered_two_way(cls, clusters1: ArrayLike, clusters2: ArrayLike) -> CovarianceType:
        """Cameron-Gelbach-Miller two-way cluster-robust estimator."""
        return cls(
            kind='clustered_two_way',
            clusters=_frozen_labels(clusters1),
            clusters2=_frozen_labels(clusters2),
        )
    
    @classmethod
    def coerce(cls, value: CovarianceType | str) -> CovarianceType:
        """
        Accept a CovarianceType or the name of a parameter-free estimator.
        
        Raises:
            ValidationError: For unknown names or names of estimators that
                need parameters (lags, cluster labels)
        """
        if isinstance(value, CovarianceType):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace('-', '_')
            if key in _ALIASES:
                return cls(kind=_ALIASES[key])
            if key in VALID_KINDS:
                raise ValidationError(
                    f"cov_type {value!r} needs parameters; use "
                    f"CovarianceType.{key}(...)"
                )
        raise ValidationError(
            f"cov_type must be a CovarianceType or one of "
            f"{sorted(set(_ALIASES))}, got {value!r}"
        )
    
    # --- Introspection ---
    
    def n_clusters(self) -> tuple[int, ...]:
        """Distinct label counts per clustering dimension (empty if unclustered)."""
        if self.kind == 'clustered':
            return (len(np.unique(self.clusters)),)
        if self.kind == 'clustered_two_way':
            return (len(np.unique(self.clusters)), len(np.unique(self.clusters2)))
        return ()
    
    def check_observations(self, n_obs: int) -> None:
        """
        Validate cluster labels against the observation count.
        
        Raises:
            DimensionError: Label vector length differs from n_obs
        """
        if self.kind == 'clustered':
            check_labels(self.clusters, n_obs, 'clusters')
        elif self.kind == 'clustered_two_way':
            check_labels(self.clusters, n_obs, 'clusters1')
            check_labels(self.clusters2, n_obs, 'clusters2')
    
    @property
    def label(self) -> str:
        """Human-readable description used in summaries."""
        if self.kind == 'nonrobust':
            return "Non-Robust"
        if self.kind in ('hc1', 'hc2', 'hc3', 'hc4'):
            return f"Robust ({self.kind.upper()})"
        if self.kind == 'newey_west':
            return f"HAC (Newey-West, L={self.lags})"
        counts = self.n_clusters()
        if self.kind == 'clustered':
            return f"Clustered ({counts[0]} clusters)"
        return f"Two-Way Clustered ({counts[0]}x{counts[1]})"
    
    def __repr__(self) -> str:
        return f"CovarianceType({self.label})"
