"""
Regression solution types.

Contains the parameter payload and the user-facing solution wrapper.
Both are immutable: swapping the inference distribution returns a new
solution that shares coefficients and standard errors with the old one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyeconometrics.core.result import Result
from pyeconometrics.core.exceptions import ValidationError, DimensionError
from pyeconometrics.core.validation import check_array, check_2d, check_1d
from pyeconometrics.core.compute.linalg import solve_normal_equations
from pyeconometrics.core.compute.tolerances import SST_ZERO_TOL
from pyeconometrics.regression.covariance import CovarianceType
from pyeconometrics.regression._inference import (
    InferenceDistribution,
    check_alpha,
    check_distribution,
    coefficient_tests,
)

if TYPE_CHECKING:
    from pyeconometrics.regression.design import RegressionDesign


@dataclass(frozen=True)
class OLSParams:
    """
    Parameter payload for a fitted linear regression.

    Every statistic is computed from the same k' = len(coefficients), the
    number of columns that survived the collinearity guard.
    """
    # Coefficients and their covariance
    coefficients: NDArray[np.floating[Any]]
    vcov: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]

    # Tests under the current reference distribution
    test_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    conf_int_lower: NDArray[np.floating[Any]]
    conf_int_upper: NDArray[np.floating[Any]]

    # Residuals
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    sigma: float

    # Degrees of freedom
    n_obs: int
    rank: int
    df_residual: int
    df_model: int
    has_intercept: bool

    # Fit and information criteria
    r_squared: float
    adjusted_r_squared: float
    f_statistic: float
    f_p_value: float
    log_likelihood: float
    aic: float
    bic: float

    # Model options
    cov_type: CovarianceType
    inference: InferenceDistribution
    alpha: float
    names: tuple[str, ...]
    kept_indices: tuple[int, ...]
    omitted_indices: tuple[int, ...]
    omitted_names: tuple[str, ...]


def _significance_stars(p: float) -> str:
    """Return significance stars like R."""
    if np.isnan(p):
        return ' '
    if p < 0.001:
        return '***'
    elif p < 0.01:
        return '**'
    elif p < 0.05:
        return '*'
    elif p < 0.1:
        return '.'
    else:
        return ' '


@dataclass(frozen=True)
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and the design it was fitted on. All
    accessors are read-only views over the stored payload.
    """
    _result: Result[OLSParams]
    _design: 'RegressionDesign'

    @property
    def params(self) -> OLSParams:
        return self._result.params

    # --- Coefficients and inference ---

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self.params.coefficients

    @property
    def coef(self) -> dict[str, float]:
        """Coefficients as name → value dict."""
        return dict(zip(self.names, self.params.coefficients.tolist()))

    @property
    def vcov(self) -> NDArray[np.floating[Any]]:
        """Coefficient covariance matrix under the chosen estimator."""
        return self.params.vcov

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        return self.params.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """β̂ / SE (a z-statistic when inference='normal')."""
        return self.params.test_statistics

    @property
    def test_statistics(self) -> NDArray[np.floating[Any]]:
        return self.params.test_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values under the current reference distribution."""
        return self.params.p_values

    @property
    def conf_int_lower(self) -> NDArray[np.floating[Any]]:
        return self.params.conf_int_lower

    @property
    def conf_int_upper(self) -> NDArray[np.floating[Any]]:
        return self.params.conf_int_upper

    @property
    def inference(self) -> InferenceDistribution:
        return self.params.inference

    @property
    def cov_type(self) -> CovarianceType:
        return self.params.cov_type

    @property
    def alpha(self) -> float:
        return self.params.alpha

    # --- Names and collinearity ---

    @property
    def names(self) -> tuple[str, ...]:
        """Names of the estimated coefficients (kept columns only)."""
        return self.params.names

    @property
    def kept_indices(self) -> tuple[int, ...]:
        return self.params.kept_indices

    @property
    def omitted_indices(self) -> tuple[int, ...]:
        """Original column indices dropped for collinearity."""
        return self.params.omitted_indices

    @property
    def omitted(self) -> tuple[str, ...]:
        """Names of columns dropped for collinearity."""
        return self.params.omitted_names

    # --- Fit ---

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self.params.fitted_values

    @property
    def rss(self) -> float:
        return self.params.rss

    @property
    def tss(self) -> float:
        return self.params.tss

    @property
    def sigma(self) -> float:
        """Residual standard error sqrt(RSS / df_residual)."""
        return self.params.sigma

    @property
    def residual_std_error(self) -> float:
        return self.params.sigma

    @property
    def r_squared(self) -> float:
        return self.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self.params.adjusted_r_squared

    @property
    def f_statistic(self) -> float:
        return self.params.f_statistic

    @property
    def f_p_value(self) -> float:
        return self.params.f_p_value

    @property
    def log_likelihood(self) -> float:
        return self.params.log_likelihood

    @property
    def aic(self) -> float:
        return self.params.aic

    @property
    def bic(self) -> float:
        return self.params.bic

    @property
    def n_obs(self) -> int:
        return self.params.n_obs

    @property
    def rank(self) -> int:
        return self.params.rank

    @property
    def df_residual(self) -> int:
        return self.params.df_residual

    @property
    def df_model(self) -> int:
        return self.params.df_model

    @property
    def has_intercept(self) -> bool:
        return self.params.has_intercept

    # --- Envelope ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Derived operations ---

    def with_inference(self, inference: InferenceDistribution) -> LinearSolution:
        """
        Same fit, different reference distribution.

        Only test statistics' p-values and confidence intervals are
        recomputed; coefficients, covariance and standard errors are shared.

        Args:
            inference: 't' (Student's t, df_residual) or 'normal'

        Returns:
            A new LinearSolution
        """
        inference = check_distribution(inference)
        p = self.params
        tests = coefficient_tests(
            p.coefficients, p.standard_errors, inference, p.df_residual, p.alpha
        )
        new_params = replace(
            p,
            inference=inference,
            test_statistics=tests.statistics,
            p_values=tests.p_values,
            conf_int_lower=tests.conf_int_lower,
            conf_int_upper=tests.conf_int_upper,
        )
        new_info = dict(self._result.info, inference=inference)
        return LinearSolution(
            _result=replace(self._result, params=new_params, info=new_info),
            _design=self._design,
        )

    def conf_int(self, alpha: float | None = None) -> NDArray[np.floating[Any]]:
        """
        Confidence intervals for the coefficients.

        Args:
            alpha: Significance level; defaults to the level used at fit time

        Returns:
            (k', 2) array of [lower, upper] bounds
        """
        if alpha is None:
            return np.column_stack([self.conf_int_lower, self.conf_int_upper])
        alpha = check_alpha(alpha)
        p = self.params
        tests = coefficient_tests(
            p.coefficients, p.standard_errors, p.inference, p.df_residual, alpha
        )
        return np.column_stack([tests.conf_int_lower, tests.conf_int_upper])

    def model_stats(self) -> tuple[float, float, float, float]:
        """(AIC, BIC, log-likelihood, adjusted R²) for model comparison."""
        return (self.aic, self.bic, self.log_likelihood, self.adjusted_r_squared)

    def _as_kept_matrix(self, X: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
        """Accept k' columns, or the caller's original k columns."""
        X_arr = check_array(X, name)
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(1, -1)
        check_2d(X_arr, name)
        k_fit = len(self.coefficients)
        k_orig = self._design.p
        if X_arr.shape[1] == k_fit:
            return X_arr
        if X_arr.shape[1] == k_orig:
            return X_arr[:, list(self.kept_indices)]
        raise DimensionError(
            f"{name}: expected {k_fit} columns (or {k_orig} before collinearity "
            f"removal), got {X_arr.shape[1]}"
        )

    def predict(self, X_new: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Predictions X_new β̂ for new rows.

        X_new may have the fitted k' columns or the original k columns;
        in the latter case columns dropped for collinearity are ignored.
        """
        return self._as_kept_matrix(X_new, 'X_new') @ self.coefficients

    def fitted_for(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """Fitted values Xβ̂ for a given design matrix."""
        return self._as_kept_matrix(X, 'X') @ self.coefficients

    def residuals_for(self, X: ArrayLike, y: ArrayLike) -> NDArray[np.floating[Any]]:
        """Residuals y - Xβ̂ for given data."""
        X_arr = self._as_kept_matrix(X, 'X')
        y_arr = check_array(y, 'y')
        check_1d(y_arr, 'y')
        if y_arr.shape[0] != X_arr.shape[0]:
            raise DimensionError(
                f"Inconsistent lengths: X={X_arr.shape[0]}, y={y_arr.shape[0]}"
            )
        return y_arr - X_arr @ self.coefficients

    def partial_r_squared(self, columns: Sequence[int | str]) -> float:
        """
        Share of the restricted model's residual variance the columns explain.

        Refits the model without `columns` and returns
        (RSS_restricted - RSS_full) / RSS_restricted.

        Args:
            columns: Positions into the fitted coefficients, or their names

        Returns:
            Partial R². If every column is removed, the full model's R².
            If the restricted RSS is zero, 0.0.
        """
        positions = self._resolve_columns(columns)
        k_fit = len(self.coefficients)
        keep = [j for j in range(k_fit) if j not in positions]
        if not keep:
            return self.r_squared

        X_fit = self._design.X[:, list(self.kept_indices)]
        restricted = solve_normal_equations(X_fit[:, keep], self._design.y)
        if restricted.rss < SST_ZERO_TOL:
            return 0.0
        return float((restricted.rss - self.rss) / restricted.rss)

    def _resolve_columns(self, columns: Sequence[int | str]) -> set[int]:
        if isinstance(columns, (str, int, np.integer)):
            columns = [columns]
        k_fit = len(self.coefficients)
        positions: set[int] = set()
        for col in columns:
            if isinstance(col, str):
                if col not in self.names:
                    raise ValidationError(
                        f"columns: unknown variable {col!r}; available: {self.names}"
                    )
                positions.add(self.names.index(col))
            elif isinstance(col, (int, np.integer)) and not isinstance(col, bool):
                if not 0 <= col < k_fit:
                    raise ValidationError(
                        f"columns: index {col} out of range for {k_fit} coefficients"
                    )
                positions.add(int(col))
            else:
                raise ValidationError(f"columns: expected int or str, got {col!r}")
        return positions

    def summary(self) -> str:
        """Generate a regression results table."""
        stat_label = 't' if self.inference == 't' else 'z'
        level = 1.0 - self.alpha
        lo_q = f"{self.alpha / 2:.3f}"
        hi_q = f"{1 - self.alpha / 2:.3f}"

        lines = [
            "OLS Regression Results",
            "=" * 90,
            f"{'Observations:':<22}{self.n_obs:>20}    "
            f"{'R-squared:':<22}{self.r_squared:>20.4f}",
            f"{'Df Residuals:':<22}{self.df_residual:>20}    "
            f"{'Adj. R-squared:':<22}{self.adjusted_r_squared:>20.4f}",
            f"{'Df Model:':<22}{self.df_model:>20}    "
            f"{'F-statistic:':<22}{self.f_statistic:>20.4f}",
            f"{'Covariance Type:':<22}{self.cov_type.label:>20}    "
            f"{'Prob (F-statistic):':<22}{self.f_p_value:>20.4e}",
            f"{'Inference:':<22}{stat_label + '-distribution':>20}    "
            f"{'Log-Likelihood:':<22}{self.log_likelihood:>20.4f}",
            f"{'AIC:':<22}{self.aic:>20.4f}    "
            f"{'BIC:':<22}{self.bic:>20.4f}",
            "",
            f"Coefficients ({level:.0%} intervals):",
            "-" * 90,
            f"{'Variable':<16} {'Estimate':>12} {'Std.Error':>12} {stat_label + ' value':>10} "
            f"{'Pr(>|' + stat_label + '|)':>10} {'[' + lo_q:>12} {hi_q + ']':>12}",
            "-" * 90,
        ]

        for name, coef, se, stat, p, lo, hi in zip(
            self.names, self.coefficients, self.standard_errors,
            self.test_statistics, self.p_values,
            self.conf_int_lower, self.conf_int_upper,
        ):
            se_str = f"{se:12.6f}" if not np.isnan(se) else f"{'NA':>12}"
            stat_str = f"{stat:10.3f}" if np.isfinite(stat) else f"{'NA':>10}"
            p_str = f"{p:10.4f}" if not np.isnan(p) else f"{'NA':>10}"
            lines.append(
                f"{name:<16} {coef:12.6f} {se_str} {stat_str} {p_str} "
                f"{lo:12.6f} {hi:12.6f} {_significance_stars(p)}"
            )

        lines.append("-" * 90)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        lines.append(
            f"Residual Std. Error: {self.sigma:.6f} on {self.df_residual} DF"
        )
        if self.omitted:
            lines.append(
                f"Omitted for collinearity: {', '.join(self.omitted)}"
            )
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self.n_obs}, k={self.rank}, "
            f"cov_type={self.cov_type.label!r}, r_squared={self.r_squared:.4f})"
        )
