"""
Regression test configuration.

Small hand-checkable datasets shared by the regression tests.
"""

import numpy as np
import pytest

from pyeconometrics.regression import CovarianceType


@pytest.fixture
def exact_line():
    """y = 2 + 3x exactly, intercept plus one regressor."""
    X = np.array([[1, 1], [1, 2], [1, 3], [1, 4], [1, 5]], dtype=float)
    y = np.array([5.0, 8.0, 11.0, 14.0, 17.0])
    return X, y


@pytest.fixture
def small_example():
    """n=5, k=2 with a noisy response for hand-computed inference."""
    X = np.array([[1, 1], [1, 2], [1, 3], [1, 4], [1, 5]], dtype=float)
    y = np.array([2.0, 4.0, 5.0, 4.0, 5.0])
    return X, y


@pytest.fixture
def covariance_types():
    """Factory returning one instance of each estimator for n_obs observations."""
    return _all_covariance_types


def _all_covariance_types(n_obs):
    groups = np.arange(n_obs) % 4
    periods = np.arange(n_obs) % 5
    return [
        CovarianceType.non_robust(),
        CovarianceType.hc1(),
        CovarianceType.hc2(),
        CovarianceType.hc3(),
        CovarianceType.hc4(),
        CovarianceType.newey_west(2),
        CovarianceType.clustered(groups),
        CovarianceType.clustered_two_way(groups, periods),
    ]
