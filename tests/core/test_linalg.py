"""
Tests for the linear algebra kernels.

Validates:
    - drop_collinear_columns: kept/dropped bookkeeping, column order,
      tolerance, more columns than rows
    - solve_normal_equations: agreement with lstsq, bread = (X'X)⁻¹,
      singular cross-products rejected
"""

import numpy as np
import pytest

from pyeconometrics.core.exceptions import SingularMatrixError
from pyeconometrics.core.compute.tolerances import CPU_FP64
from pyeconometrics.core.compute.linalg import (
    drop_collinear_columns,
    invert_cross_product,
    qr_cpu,
    solve_normal_equations,
)


class TestQR:

    def test_reconstructs_input(self, rng):
        X = rng.standard_normal((20, 4))
        qr = qr_cpu(X)
        np.testing.assert_allclose(qr.Q @ qr.R, X, rtol=CPU_FP64.rtol, atol=CPU_FP64.atol)


class TestDropCollinearColumns:

    def test_full_rank_keeps_everything(self, rng):
        X = rng.standard_normal((30, 3))
        guard = drop_collinear_columns(X)
        assert guard.kept == (0, 1, 2)
        assert guard.dropped == ()
        assert guard.factorized
        assert guard.X is X

    def test_linear_combination_dropped(self, collinear_data):
        X, _, _ = collinear_data
        guard = drop_collinear_columns(X)
        assert guard.dropped == (3,)
        assert guard.kept == (0, 1, 2)
        assert guard.X.shape == (X.shape[0], 3)
        np.testing.assert_array_equal(guard.X, X[:, :3])

    def test_input_not_modified(self, collinear_data):
        X, _, _ = collinear_data
        before = X.copy()
        drop_collinear_columns(X)
        np.testing.assert_array_equal(X, before)

    def test_later_column_dropped_not_earlier(self, rng):
        """The column that repeats earlier information is the one flagged."""
        x = rng.standard_normal(25)
        X = np.column_stack([np.ones(25), 2.0 * x, rng.standard_normal(25), x])
        guard = drop_collinear_columns(X)
        assert guard.dropped == (3,)

    def test_zero_column_dropped(self, rng):
        X = np.column_stack([np.ones(10), np.zeros(10), rng.standard_normal(10)])
        guard = drop_collinear_columns(X)
        assert guard.dropped == (1,)
        assert guard.kept == (0, 2)

    def test_dummy_variable_trap(self):
        d1 = np.array([1, 0, 1, 0, 1, 0, 1, 0], dtype=float)
        X = np.column_stack([np.ones(8), d1, 1.0 - d1, np.arange(8.0)])
        guard = drop_collinear_columns(X)
        assert len(guard.dropped) == 1
        assert guard.dropped[0] in (1, 2)

    def test_more_columns_than_rows(self, rng):
        X = rng.standard_normal((3, 5))
        guard = drop_collinear_columns(X)
        assert guard.kept == (0, 1, 2)
        assert guard.dropped == (3, 4)

    def test_tolerance_controls_threshold(self, rng):
        x = rng.standard_normal(50)
        X = np.column_stack([np.ones(50), x, x + 1e-6 * rng.standard_normal(50)])
        assert drop_collinear_columns(X).dropped == ()
        assert drop_collinear_columns(X, tol=1e-3).dropped == (2,)


class TestSolveNormalEquations:

    def test_matches_lstsq(self, simple_regression_data):
        X, y, _ = simple_regression_data
        ne = solve_normal_equations(X, y)
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        np.testing.assert_allclose(ne.coefficients, expected, rtol=1e-8)

    def test_bread_is_inverse_cross_product(self, simple_regression_data):
        X, y, _ = simple_regression_data
        ne = solve_normal_equations(X, y)
        np.testing.assert_allclose(ne.bread @ (X.T @ X), np.eye(3), atol=1e-10)

    def test_residual_bookkeeping(self, simple_regression_data):
        X, y, _ = simple_regression_data
        ne = solve_normal_equations(X, y)
        np.testing.assert_allclose(ne.fitted_values + ne.residuals, y, atol=1e-12)
        assert ne.rss == pytest.approx(float(ne.residuals @ ne.residuals))
        # Residuals are orthogonal to the columns
        np.testing.assert_allclose(X.T @ ne.residuals, 0.0, atol=1e-9)

    def test_exact_fit(self):
        X = np.column_stack([np.ones(5), np.arange(1.0, 6.0)])
        y = np.array([5.0, 8.0, 11.0, 14.0, 17.0])
        ne = solve_normal_equations(X, y)
        np.testing.assert_allclose(ne.coefficients, [2.0, 3.0], atol=1e-10)
        assert ne.rss < 1e-20

    def test_singular_raises(self):
        x = np.arange(1.0, 7.0)
        X = np.column_stack([np.ones(6), x, x])
        with pytest.raises(SingularMatrixError) as exc_info:
            solve_normal_equations(X, x)
        assert exc_info.value.matrix_name == "X'X"
        assert exc_info.value.expected_rank == 3

    def test_invert_reports_condition_number(self, rng):
        X = rng.standard_normal((40, 3))
        inv, cond = invert_cross_product(X)
        assert cond >= 1.0
        np.testing.assert_allclose(inv, np.linalg.inv(X.T @ X), rtol=1e-10)
