"""
CPU backend for linear regression.

Runs the full estimation pipeline on a RegressionDesign:

    guard -> solve -> covariance -> inference

The collinearity guard fixes k', the number of kept columns, once; the
solver, every covariance estimator and every fit statistic read the same
reduced matrix and the same bread (X'X)⁻¹.
"""

from typing import Any
import warnings

from pyeconometrics.core.result import Result
from pyeconometrics.core.exceptions import SingularMatrixError
from pyeconometrics.core.validation import check_degrees_of_freedom
from pyeconometrics.core.compute.timing import Timer
from pyeconometrics.core.compute.tolerances import COLLINEARITY_TOL
from pyeconometrics.core.compute.linalg import (
    drop_collinear_columns,
    solve_normal_equations,
)
from pyeconometrics.regression.design import RegressionDesign
from pyeconometrics.regression.covariance import CovarianceType
from pyeconometrics.regression.solution import OLSParams
from pyeconometrics.regression._sandwich import compute_covariance
from pyeconometrics.regression._inference import (
    InferenceDistribution,
    coefficient_tests,
    fit_statistics,
    has_intercept,
    standard_errors,
)


class CPUNormalEquationsBackend:
    """
    CPU backend solving the normal equations with a cached bread.

    Implements the Backend protocol for RegressionDesign -> OLSParams.
    Instances carry the estimation options; solve() itself is stateless.

    Args:
        cov_type: Covariance estimator
        inference: Reference distribution for coefficient tests
        drop_collinear: Apply the collinearity guard. None applies it only
            when the design carries variable names.
        collinearity_tol: Threshold on |R_jj| for the guard
        alpha: Significance level for confidence intervals
    """

    def __init__(
        self,
        cov_type: CovarianceType,
        inference: InferenceDistribution = 't',
        drop_collinear: bool | None = None,
        collinearity_tol: float = COLLINEARITY_TOL,
        alpha: float = 0.05,
    ):
        self.cov_type = cov_type
        self.inference = inference
        self.drop_collinear = drop_collinear
        self.collinearity_tol = collinearity_tol
        self.alpha = alpha

    @property
    def name(self) -> str:
        return 'cpu_normal_eq'

    def _applies_guard(self, design: RegressionDesign) -> bool:
        if self.drop_collinear is None:
            return design.has_names
        return bool(self.drop_collinear)

    def solve(self, design: RegressionDesign) -> Result[OLSParams]:
        """
        Fit OLS and compute covariance, tests and fit statistics.

        Args:
            design: Validated regression design

        Returns:
            Result containing OLSParams

        Raises:
            DegreesOfFreedomError: n <= k' after collinearity removal
            SingularMatrixError: X'X cannot be inverted, or the guard
                dropped every column
            ValidationError: Fewer than two clusters
            DimensionError: Cluster labels do not match n
        """
        timer = Timer()
        timer.start()
        messages: list[str] = []

        X = design.X
        y = design.y
        n = design.n
        all_names = design.names

        # === Collinearity Guard ===
        with timer.section('guard'):
            if self._applies_guard(design):
                guard = drop_collinear_columns(X, tol=self.collinearity_tol)
                X = guard.X
                kept, dropped = guard.kept, guard.dropped
                factorized = guard.factorized
            else:
                kept, dropped, factorized = tuple(range(design.p)), (), True

        if not kept:
            raise SingularMatrixError(
                f"Singular matrix: every column of X is linearly dependent "
                f"({design.p} dropped as collinear); nothing left to estimate",
                matrix_name="X'X",
                rank=0,
                expected_rank=design.p,
            )

        omitted_names = tuple(all_names[j] for j in dropped)
        if dropped:
            messages.append(
                f"Dropped {len(dropped)} collinear column(s): "
                f"{', '.join(omitted_names)}"
            )
        k = len(kept)
        check_degrees_of_freedom(n, k, 'X')

        # === Solve ===
        with timer.section('solve'):
            ne = solve_normal_equations(X, y)

        # === Covariance ===
        with timer.section('covariance'):
            cov = compute_covariance(
                self.cov_type, X, ne.residuals, ne.bread, ne.rss
            )

        # === Inference ===
        with timer.section('inference'):
            df_residual = n - k
            classical = ne.bread.diagonal() * (ne.rss / df_residual)
            se, se_messages = standard_errors(cov.matrix, classical)
            messages.extend(se_messages)
            tests = coefficient_tests(
                ne.coefficients, se, self.inference, df_residual, self.alpha
            )
            intercept = has_intercept(X)
            fit = fit_statistics(y, ne.rss, k, intercept)

        timer.stop()

        for message in messages:
            warnings.warn(message, UserWarning, stacklevel=3)

        params = OLSParams(
            coefficients=ne.coefficients,
            vcov=cov.matrix,
            standard_errors=se,
            test_statistics=tests.statistics,
            p_values=tests.p_values,
            conf_int_lower=tests.conf_int_lower,
            conf_int_upper=tests.conf_int_upper,
            residuals=ne.residuals,
            fitted_values=ne.fitted_values,
            rss=ne.rss,
            tss=fit.tss,
            sigma=fit.sigma,
            n_obs=n,
            rank=k,
            df_residual=df_residual,
            df_model=fit.df_model,
            has_intercept=intercept,
            r_squared=fit.r_squared,
            adjusted_r_squared=fit.adjusted_r_squared,
            f_statistic=fit.f_statistic,
            f_p_value=fit.f_p_value,
            log_likelihood=fit.log_likelihood,
            aic=fit.aic,
            bic=fit.bic,
            cov_type=self.cov_type,
            inference=self.inference,
            alpha=self.alpha,
            names=tuple(all_names[j] for j in kept),
            kept_indices=kept,
            omitted_indices=dropped,
            omitted_names=omitted_names,
        )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'rank': k,
            'kept_indices': kept,
            'dropped_indices': dropped,
            'collinearity_checked': self._applies_guard(design),
            'collinearity_factorized': factorized,
            'condition_number': ne.condition_number,
            'cov_type': self.cov_type.label,
            'cov_correction': cov.correction,
            'n_clusters': cov.n_clusters,
            'inference': self.inference,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(messages),
        )
