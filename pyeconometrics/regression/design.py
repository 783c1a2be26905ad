"""
Regression Design.

Design wraps a DataSource (or raw arrays) and extracts X (design matrix),
y (response) and, when available, human-readable column names. It knows
it's building a regression; DataSource doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyeconometrics.core.datasource import DataSource
from pyeconometrics.core.exceptions import ValidationError, DimensionError
from pyeconometrics.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_degrees_of_freedom,
)


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix specification.
    
    Immutable after construction. The design matrix is borrowed, never
    modified; the estimation pipeline reads it and builds reduced copies
    when columns are dropped.
    
    Construction:
        RegressionDesign.from_datasource(ds, y='target')           # X = all other columns
        RegressionDesign.from_datasource(ds, x=['a','b'], y='c')  # X = specified columns
        RegressionDesign.from_arrays(X, y)                         # positional, unnamed
        RegressionDesign.from_arrays(X, y, names=['const', 'x'])   # named
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _names: tuple[str, ...] | None = None
    _source: DataSource | None = None
    
    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str | list[str] | None = None,
        y: str | None = None,
        add_intercept: bool = False,
    ) -> RegressionDesign:
        """
        Build a named design from a DataSource.
        
        Args:
            source: The DataSource
            x: Predictor column(s). If None and y is specified, uses all
               columns except y, in the source's column order.
            y: Response column. If None, uses 'y' from source.
            add_intercept: Prepend a constant column named 'const'
        
        Returns:
            RegressionDesign whose names are the column names
        """
        if y is not None:
            y_name = y
        elif 'y' in source:
            y_name = 'y'
        else:
            raise ValueError("Must specify y or DataSource must have 'y'")
        y_arr = check_array(source[y_name], y_name)
        
        if x is None and 'X' in source and not source.columns:
            # Unnamed matrix from DataSource.from_arrays(X=..., y=...)
            X_arr = check_array(source['X'], 'X')
            if X_arr.ndim == 1:
                X_arr = X_arr.reshape(-1, 1)
            names = [f"x{j}" for j in range(X_arr.shape[1])]
        else:
            if x is None:
                x_cols = [c for c in source.columns if c != y_name]
                if not x_cols:
                    raise ValueError("No predictor columns available")
            elif isinstance(x, str):
                x_cols = [x]
            else:
                x_cols = list(x)
            X_arr = np.column_stack([check_array(source[c], c) for c in x_cols])
            names = list(x_cols)
        if add_intercept:
            X_arr = np.column_stack([np.ones(X_arr.shape[0]), X_arr])
            names = ['const'] + names
        
        return cls._build(X_arr, y_arr, names=names, source=source)
    
    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        names: Sequence[str] | None = None,
    ) -> RegressionDesign:
        """Build RegressionDesign directly from arrays."""
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        return cls._build(X_arr, y_arr, names=names, source=None)
    
    @classmethod
    def build(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        names: Sequence[str] | None = None,
    ) -> RegressionDesign:
        """Alias of from_arrays used by the fit() boundary."""
        return cls.from_arrays(X, y, names=names)
    
    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        names: Sequence[str] | None,
        source: DataSource | None,
    ) -> RegressionDesign:
        """Internal builder with validation."""
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()
        
        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))
        
        n, p = X.shape
        if p == 0:
            raise DimensionError("X: design matrix has no columns")
        check_degrees_of_freedom(n, p, 'X')
        
        name_tuple = None
        if names is not None:
            name_tuple = tuple(str(nm) for nm in names)
            if len(name_tuple) != p:
                raise DimensionError(
                    f"names: got {len(name_tuple)} names for {p} columns"
                )
            if len(set(name_tuple)) != p:
                raise ValidationError(f"names: duplicate variable names in {name_tuple}")
        
        return cls(_X=X, _y=y, _n=n, _p=p, _names=name_tuple, _source=source)
    
    # === Properties ===
    
    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X
    
    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y
    
    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n
    
    @property
    def p(self) -> int:
        """Number of columns, including any constant."""
        return self._p
    
    @property
    def has_names(self) -> bool:
        """True if the caller supplied human-readable variable names."""
        return self._names is not None
    
    @property
    def names(self) -> tuple[str, ...]:
        """Variable names, falling back to positional labels x0, x1, ..."""
        if self._names is not None:
            return self._names
        return tuple(f"x{j}" for j in range(self._p))
    
    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source
