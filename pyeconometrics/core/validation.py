"""
Input validation utilities for PyEconometrics.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No truncation or padding of mismatched inputs
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyeconometrics.core.exceptions import (
    ValidationError,
    DimensionError,
    DegreesOfFreedomError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.
    
    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    
    Args:
        array: Input to validate
        name: Parameter name for error messages
        
    Returns:
        numpy.ndarray with numeric dtype
        
    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e
    
    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.
    
    Args:
        array: Array to check
        name: Parameter name for error messages
        
    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.
    
    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[Any], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[Any], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[Any], 
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).
    
    Args:
        *arrays: Arrays to check
        names: Parameter names for error messages (must match number of arrays)
        
    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )
    
    if len(arrays) < 2:
        return
    
    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_degrees_of_freedom(n_obs: int, n_params: int, name: str) -> None:
    """
    Verify there are strictly more observations than parameters.
    
    Args:
        n_obs: Number of observations (rows)
        n_params: Number of parameters (columns)
        name: Parameter name for error messages
        
    Raises:
        DegreesOfFreedomError: If n_obs <= n_params
    """
    if n_obs <= n_params:
        raise DegreesOfFreedomError(
            f"{name}: residual degrees of freedom must be positive, "
            f"got n={n_obs} observations for k={n_params} parameters",
            n_obs=n_obs,
            n_params=n_params,
        )


def check_nonnegative_int(value: Any, name: str) -> int:
    """
    Verify value is a non-negative integer (bools rejected).
    
    Returns:
        The value as a Python int
        
    Raises:
        ValidationError: If value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: expected a non-negative integer, got {value!r}"
        )
    if value < 0:
        raise ValidationError(f"{name}: must be >= 0, got {value}")
    return int(value)


def check_labels(labels: ArrayLike, n_obs: int, name: str) -> NDArray[np.intp]:
    """
    Validate a group-label vector and factorize it to dense integer codes.
    
    Labels can be any hashable scalars numpy can sort (ints, strings).
    
    Args:
        labels: One label per observation
        n_obs: Required length
        name: Parameter name for error messages
        
    Returns:
        Integer codes 0..G-1 aligned with the input order
        
    Raises:
        DimensionError: If labels are not 1D or length != n_obs
        ValidationError: If labels contain NaN
    """
    arr = np.asarray(labels)
    check_1d(arr, name)
    if arr.shape[0] != n_obs:
        raise DimensionError(
            f"{name}: length ({arr.shape[0]}) must match number of observations ({n_obs})"
        )
    if np.issubdtype(arr.dtype, np.floating) and np.any(np.isnan(arr)):
        raise ValidationError(f"{name}: contains NaN labels")
    _, codes = np.unique(arr, return_inverse=True)
    return codes.reshape(-1)
