"""
Capability string constants for PyEconometrics.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pyeconometrics.core.capabilities import CAPABILITY_MATERIALIZED
    
    if ds.supports(CAPABILITY_MATERIALIZED):
        X, y = ds['X'], ds['y']
"""

# Data can be returned as full numpy arrays in memory
CAPABILITY_MATERIALIZED = 'materialized'

# Data can be iterated multiple times (for residuals, fitted values)
CAPABILITY_REPEATABLE = 'repeatable'

# Columns carry human-readable names
CAPABILITY_NAMED_COLUMNS = 'named_columns'

__all__ = [
    'CAPABILITY_MATERIALIZED',
    'CAPABILITY_REPEATABLE',
    'CAPABILITY_NAMED_COLUMNS',
]
