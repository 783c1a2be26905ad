"""
Shared compute infrastructure for PyEconometrics.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical thresholds and comparison tiers
    linalg: Linear algebra kernels (QR guard, normal equations)
"""

from pyeconometrics.core.compute.timing import Timer

__all__ = [
    "Timer",
]
