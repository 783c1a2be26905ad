"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d: dimensionality checks
    - check_consistent_length: multi-array length matching
    - check_degrees_of_freedom: n > k
    - check_nonnegative_int: lag counts
    - check_labels: cluster label factorization
"""

import numpy as np
import pytest

from pyeconometrics.core.exceptions import (
    DegreesOfFreedomError,
    DimensionError,
    ValidationError,
)
from pyeconometrics.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_degrees_of_freedom,
    check_finite,
    check_labels,
    check_nonnegative_int,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "X")

    def test_rejects_homogeneous_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b", "c"], "X")

    def test_error_message_includes_name(self):
        with pytest.raises(ValidationError, match="my_var"):
            check_array(["a", "b"], "my_var")


# ═══════════════════════════════════════════════════════════════════════
# check_finite / dimensions
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0, 3.0]), "X")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan, 3.0]), "X")

    def test_inf_rejected(self):
        with pytest.raises(ValidationError, match="1 Inf"):
            check_finite(np.array([1.0, -np.inf, 3.0]), "X")


class TestCheckDimensions:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "y")

    def test_1d_rejects_2d(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((3, 2)), "y")

    def test_2d_rejects_1d(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_2d(np.zeros(3), "X")

    def test_consistent_lengths(self):
        check_consistent_length(np.zeros((5, 2)), np.zeros(5), names=("X", "y"))

    def test_inconsistent_lengths(self):
        with pytest.raises(DimensionError, match="X=5, y=4"):
            check_consistent_length(np.zeros((5, 2)), np.zeros(4), names=("X", "y"))

    def test_names_count_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(5), np.zeros(5), names=("X",))


# ═══════════════════════════════════════════════════════════════════════
# check_degrees_of_freedom
# ═══════════════════════════════════════════════════════════════════════


class TestCheckDegreesOfFreedom:

    def test_more_rows_than_params(self):
        check_degrees_of_freedom(5, 2, "X")

    @pytest.mark.parametrize("n, k", [(2, 2), (2, 3), (0, 1)])
    def test_degenerate(self, n, k):
        with pytest.raises(DegreesOfFreedomError) as exc_info:
            check_degrees_of_freedom(n, k, "X")
        assert exc_info.value.n_obs == n
        assert exc_info.value.n_params == k


# ═══════════════════════════════════════════════════════════════════════
# check_nonnegative_int
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNonnegativeInt:

    def test_accepts_zero(self):
        assert check_nonnegative_int(0, "lags") == 0

    def test_accepts_numpy_int(self):
        assert check_nonnegative_int(np.int64(3), "lags") == 3

    def test_rejects_negative(self):
        with pytest.raises(ValidationError, match="lags"):
            check_nonnegative_int(-1, "lags")

    @pytest.mark.parametrize("value", [1.5, "2", True, None])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError):
            check_nonnegative_int(value, "lags")


# ═══════════════════════════════════════════════════════════════════════
# check_labels
# ═══════════════════════════════════════════════════════════════════════


class TestCheckLabels:

    def test_dense_codes_in_input_order(self):
        codes = check_labels([30, 10, 30, 20], 4, "clusters")
        np.testing.assert_array_equal(codes, [2, 0, 2, 1])

    def test_string_labels(self):
        codes = check_labels(["b", "a", "b"], 3, "clusters")
        np.testing.assert_array_equal(codes, [1, 0, 1])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="clusters"):
            check_labels([1, 2, 3], 4, "clusters")

    def test_rejects_2d(self):
        with pytest.raises(DimensionError):
            check_labels([[1, 2], [3, 4]], 2, "clusters")

    def test_rejects_nan(self):
        with pytest.raises(ValidationError, match="NaN"):
            check_labels([1.0, np.nan, 2.0], 3, "clusters")
