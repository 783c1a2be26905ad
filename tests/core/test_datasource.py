"""
Tests for DataSource construction and column access.
"""

import numpy as np
import pandas as pd
import pytest

from pyeconometrics.core import DataSource
from pyeconometrics.core.capabilities import (
    CAPABILITY_MATERIALIZED,
    CAPABILITY_NAMED_COLUMNS,
)
from pyeconometrics.core.exceptions import ValidationError


class TestFromArrays:

    def test_matrix_and_response(self, simple_regression_data):
        X, y, _ = simple_regression_data
        ds = DataSource.from_arrays(X=X, y=y)
        assert ds.keys() == frozenset({'X', 'y'})
        assert ds.n_observations == 100
        assert ds.columns == []
        assert ds.supports(CAPABILITY_MATERIALIZED)
        assert not ds.supports(CAPABILITY_NAMED_COLUMNS)

    def test_named_columns(self):
        data = np.arange(12.0).reshape(4, 3)
        ds = DataSource.from_arrays(data=data, columns=['y', 'a', 'b'])
        assert ds.columns == ['y', 'a', 'b']
        np.testing.assert_array_equal(ds['a'], [1.0, 4.0, 7.0, 10.0])
        assert ds.supports(CAPABILITY_NAMED_COLUMNS)

    def test_column_count_mismatch(self):
        with pytest.raises(ValidationError, match="columns"):
            DataSource.from_arrays(data=np.zeros((4, 3)), columns=['a', 'b'])

    def test_missing_key_lists_available(self):
        ds = DataSource.from_arrays(X=np.zeros((3, 2)), y=np.zeros(3))
        with pytest.raises(KeyError, match="Available"):
            ds['z']

    def test_unknown_capability_is_false(self):
        ds = DataSource.from_arrays(X=np.zeros((3, 2)))
        assert ds.supports('gpu_tensors') is False


class TestFromDataFrame:

    def test_numeric_and_label_columns(self):
        df = pd.DataFrame({
            'wage': [10.0, 12.0, 9.0],
            'educ': [12, 16, 10],
            'state': ['CA', 'NY', 'CA'],
        })
        ds = DataSource.from_dataframe(df)
        assert ds.columns == ['wage', 'educ', 'state']
        assert ds['educ'].dtype == np.float64
        assert list(ds['state']) == ['CA', 'NY', 'CA']
        assert ds.n_observations == 3

    def test_from_csv(self, tmp_path):
        path = tmp_path / "data.csv"
        pd.DataFrame({'y': [1.0, 2.0, 3.0], 'x': [0.5, 1.5, 2.5]}).to_csv(path, index=False)
        ds = DataSource.from_file(path)
        assert ds.columns == ['y', 'x']
        assert ds.metadata['source_path'] == str(path)

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValidationError, match="Unknown file format"):
            DataSource.from_file(tmp_path / "data.parquet")


class TestBuild:

    def test_dispatches_to_arrays(self):
        ds = DataSource.build(X=np.zeros((4, 2)), y=np.zeros(4))
        assert ds.keys() == frozenset({'X', 'y'})

    def test_dispatches_to_file(self, tmp_path):
        path = tmp_path / "data.csv"
        pd.DataFrame({'y': [1.0, 2.0], 'x': [3.0, 4.0]}).to_csv(path, index=False)
        assert DataSource.build(str(path)).columns == ['y', 'x']
