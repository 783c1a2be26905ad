"""
Tests for PyEconometrics exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyEconometricsError)
    - Diagnostic attributes on SingularMatrixError, DegreesOfFreedomError,
      DistributionError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pyeconometrics.core.exceptions import (
    DegreesOfFreedomError,
    DimensionError,
    DistributionError,
    NumericalError,
    PyEconometricsError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyEconometricsError."""

    def test_validation_error_is_base_error(self):
        with pytest.raises(PyEconometricsError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_degrees_of_freedom_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DegreesOfFreedomError("n <= k", n_obs=3, n_params=3)

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_distribution_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise DistributionError("df = 0")

    def test_numerical_error_is_not_validation_error(self):
        err = SingularMatrixError("singular")
        assert not isinstance(err, ValidationError)
        assert isinstance(err, PyEconometricsError)


# ═══════════════════════════════════════════════════════════════════════
# SingularMatrixError
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "X'X is singular",
            matrix_name="X'X",
            condition_number=1e18,
            rank=3,
            expected_rank=4,
        )
        assert str(err) == "X'X is singular"
        assert err.matrix_name == "X'X"
        assert err.condition_number == 1e18
        assert err.rank == 3
        assert err.expected_rank == 4

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None


# ═══════════════════════════════════════════════════════════════════════
# DegreesOfFreedomError / DistributionError
# ═══════════════════════════════════════════════════════════════════════


class TestDegreesOfFreedomError:

    def test_attributes(self):
        err = DegreesOfFreedomError("too few rows", n_obs=2, n_params=5)
        assert err.n_obs == 2
        assert err.n_params == 5

    def test_defaults_are_none(self):
        err = DegreesOfFreedomError("too few rows")
        assert err.n_obs is None
        assert err.n_params is None


class TestDistributionError:

    def test_attributes(self):
        err = DistributionError("bad df", distribution='f', df=(0, 10))
        assert err.distribution == 'f'
        assert err.df == (0, 10)

    def test_catchable_with_attributes(self):
        with pytest.raises(DistributionError) as exc_info:
            raise DistributionError("bad df", distribution='t', df=0)
        assert exc_info.value.distribution == 't'
        assert exc_info.value.df == 0
