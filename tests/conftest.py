"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Intercept plus two regressors with low noise."""
    n = 100
    X = np.column_stack([
        np.ones(n),
        rng.standard_normal(n),
        rng.standard_normal(n),
    ])
    beta_true = np.array([1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def heteroskedastic_data(rng):
    """Error variance grows with the regressor."""
    n = 200
    x = rng.uniform(0.5, 3.0, n)
    X = np.column_stack([np.ones(n), x])
    y = 1.0 + 2.0 * x + rng.standard_normal(n) * x
    return X, y


@pytest.fixture
def clustered_data(rng):
    """Panel with 20 firms over 10 years and firm-level shocks."""
    n_firms, n_years = 20, 10
    firm = np.repeat(np.arange(n_firms), n_years)
    year = np.tile(np.arange(n_years), n_firms)
    n = firm.shape[0]
    x = rng.standard_normal(n) + rng.standard_normal(n_firms)[firm]
    u = rng.standard_normal(n) + rng.standard_normal(n_firms)[firm]
    X = np.column_stack([np.ones(n), x])
    y = 0.5 + 1.5 * x + u
    return X, y, firm, year


@pytest.fixture
def collinear_data(rng):
    """Intercept, x1, x2 and x3 = x1 + x2."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2
    X = np.column_stack([np.ones(n), x1, x2, x3])
    y = 1.0 + x1 - x2 + rng.standard_normal(n)
    return X, y, ['const', 'x1', 'x2', 'x3']
