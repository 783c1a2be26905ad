"""
Universal DataSource for PyEconometrics.

DataSource is the "I have data" abstraction. It doesn't know or care
which estimator consumes it. It just provides named column access, and
those names are what a regression reports its coefficients under.

Usage:
    from pyeconometrics.core import DataSource
    
    ds = DataSource.from_arrays(X=X, y=y)
    ds = DataSource.from_file("data.csv")
    ds = DataSource.from_dataframe(df)
    
    ds.keys()  # frozenset({'X', 'y'})
    X = ds['X']
    y = ds['y']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.exceptions import ValidationError
from pyeconometrics.core.capabilities import (
    CAPABILITY_MATERIALIZED,
    CAPABILITY_REPEATABLE,
    CAPABILITY_NAMED_COLUMNS,
)

if TYPE_CHECKING:
    import pandas as pd


@dataclass
class DataSource:
    """
    Universal data container. Estimator-agnostic.
    
    Construct via factory classmethods, not directly.
    """
    _data: dict[str, Any]
    _capabilities: frozenset[str]
    _metadata: dict[str, Any] = field(default_factory=dict)
    
    # === Array Access ===
    
    def keys(self) -> frozenset[str]:
        """
        Return the names of all available arrays.
        
        Example:
            >>> ds = DataSource.from_arrays(X=X, y=y)
            >>> ds.keys()
            frozenset({'X', 'y'})
        """
        return frozenset(k for k in self._data.keys() if not k.startswith('_'))
    
    def __getitem__(self, key: str) -> Any:
        """
        Access a named array.
        
        Raises:
            KeyError: If key not found, with helpful message listing available keys
        """
        if key not in self._data:
            available = self.keys()
            raise KeyError(
                f"DataSource has no array '{key}'. Available: {available}"
            )
        return self._data[key]
    
    def __contains__(self, key: str) -> bool:
        """Check if a key exists."""
        return key in self._data
    
    # === Properties ===
    
    @property
    def n_observations(self) -> int:
        """Number of statistical units (rows)."""
        return self._metadata.get('n_observations', 0)
    
    @property
    def columns(self) -> list[str]:
        """Column names in their original order (empty if unnamed)."""
        return list(self._metadata.get('columns', []))
    
    @property
    def metadata(self) -> dict[str, Any]:
        """Estimator-agnostic metadata."""
        return self._metadata.copy()
    
    def supports(self, capability: str) -> bool:
        """
        Check if this DataSource supports a capability.
        
        Note:
            Unknown capabilities return False, never raise.
        """
        return capability in self._capabilities
    
    # === Factory Methods ===
    
    @classmethod
    def from_arrays(
        cls,
        *,
        X: NDArray | None = None,
        y: NDArray | None = None,
        data: NDArray | None = None,
        columns: list[str] | None = None,
        **named_arrays: NDArray,
    ) -> DataSource:
        """Construct from NumPy arrays."""
        storage: dict[str, Any] = {}
        n_obs: int | None = None
        names: list[str] = []
        
        if X is not None:
            X = np.asarray(X, dtype=np.float64)
            if X.ndim == 1:
                X = X.reshape(-1, 1)
            storage['X'] = X
            n_obs = X.shape[0]
            
        if y is not None:
            y = np.asarray(y, dtype=np.float64)
            if y.ndim == 2 and y.shape[1] == 1:
                y = y.ravel()
            storage['y'] = y
            n_obs = n_obs or y.shape[0]
        
        if data is not None:
            data = np.asarray(data, dtype=np.float64)
            n_obs = n_obs or data.shape[0]
            if columns is not None:
                if len(columns) != data.shape[1]:
                    raise ValidationError(
                        f"columns: got {len(columns)} names for {data.shape[1]} columns"
                    )
                for i, col in enumerate(columns):
                    storage[col] = data[:, i]
                names.extend(columns)
            else:
                storage['_data'] = data
        
        for name, arr in named_arrays.items():
            storage[name] = np.asarray(arr, dtype=np.float64)
            n_obs = n_obs or storage[name].shape[0]
            names.append(name)
        
        capabilities = {CAPABILITY_MATERIALIZED, CAPABILITY_REPEATABLE}
        if names:
            capabilities.add(CAPABILITY_NAMED_COLUMNS)
        
        return cls(
            _data=storage,
            _capabilities=frozenset(capabilities),
            _metadata={'n_observations': n_obs, 'source': 'arrays', 'columns': names},
        )
    
    @classmethod
    def from_file(cls, path: str | Path, *, columns: list[str] | None = None) -> DataSource:
        """Construct from file (CSV, TSV, NPY)."""
        path = Path(path)
        suffix = path.suffix.lower()
        
        if suffix in ('.csv', '.tsv'):
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            df = pd.read_csv(path, usecols=columns, sep=sep)
            return cls.from_dataframe(df, source_path=str(path))
        elif suffix == '.npy':
            data = np.load(path)
            return cls.from_arrays(data=data, columns=columns)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")
    
    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame', *, source_path: str | None = None) -> DataSource:
        """
        Construct from pandas DataFrame.
        
        Numeric columns are converted to float64. Other columns are kept as
        object arrays so they can still serve as cluster labels.
        """
        from pandas.api.types import is_numeric_dtype

        storage: dict[str, Any] = {}
        
        for col in df.columns:
            if is_numeric_dtype(df[col]):
                storage[str(col)] = df[col].to_numpy(dtype=np.float64)
            else:
                storage[str(col)] = df[col].to_numpy()
        
        metadata = {
            'n_observations': len(df),
            'source': 'dataframe',
            'columns': [str(c) for c in df.columns],
        }
        if source_path:
            metadata['source_path'] = source_path
            
        return cls(
            _data=storage,
            _capabilities=frozenset({
                CAPABILITY_MATERIALIZED,
                CAPABILITY_REPEATABLE,
                CAPABILITY_NAMED_COLUMNS,
            }),
            _metadata=metadata,
        )
    
    @classmethod  
    def build(cls, *args, **kwargs) -> DataSource:
        """
        Convenience factory that dispatches to appropriate from_* method.
        
        Examples:
            DataSource.build(X=X, y=y)  # from_arrays
            DataSource.build("data.csv")  # from_file
        """
        if args and isinstance(args[0], (str, Path)):
            return cls.from_file(args[0], **kwargs)
        else:
            return cls.from_arrays(**kwargs)
