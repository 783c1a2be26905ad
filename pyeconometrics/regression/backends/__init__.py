"""
Regression backends.

Available backends:
    CPUNormalEquationsBackend: Normal equations with a cached (X'X)⁻¹
"""

from pyeconometrics.regression.backends.cpu import CPUNormalEquationsBackend

__all__ = [
    "CPUNormalEquationsBackend",
]
