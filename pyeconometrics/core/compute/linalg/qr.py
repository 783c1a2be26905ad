"""
QR decomposition and QR-based collinearity detection.

The collinearity guard walks the diagonal of the upper-triangular factor
in column order: a column whose |R_jj| is at or below the tolerance adds
nothing the preceding columns do not already span.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import NDArray

from pyeconometrics.core.compute.tolerances import COLLINEARITY_TOL


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.
    
    Attributes:
        Q: Orthogonal matrix (n x k where k = min(n, p) for reduced mode)
        R: Upper triangular matrix (k x p)
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class CollinearityResult:
    """
    Outcome of the collinearity guard.
    
    Attributes:
        X: Reduced matrix holding only the kept columns, in original order
        kept: Indices of kept columns
        dropped: Indices of columns flagged as linearly dependent
        factorized: False if QR failed and every column was kept untested
    """
    X: NDArray[np.floating[Any]]
    kept: tuple[int, ...]
    dropped: tuple[int, ...]
    factorized: bool = True


def qr_cpu(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    QR decomposition using LAPACK (via NumPy).
    
    Computes X = QR where Q is orthogonal and R is upper triangular.
    
    Args:
        X: Matrix to decompose (n x p)
        mode: 'reduced' for economy QR (Q is n x k, R is k x p where k = min(n,p))
              'complete' for full QR (Q is n x n, R is n x p)
        
    Returns:
        QRResult with Q and R
    """
    Q, R = np.linalg.qr(X, mode=mode)
    return QRResult(Q=Q, R=R)


def drop_collinear_columns(
    X: NDArray[np.floating[Any]],
    tol: float = COLLINEARITY_TOL,
) -> CollinearityResult:
    """
    Drop columns that are (near-)linear combinations of earlier columns.
    
    Args:
        X: Design matrix (n x k); never modified
        tol: Absolute threshold on |R_jj|
        
    Returns:
        CollinearityResult with the reduced matrix and kept/dropped indices.
        If the factorization fails, every column is kept and the failure is
        left for the solver to report.
    """
    k = X.shape[1]
    try:
        qr_result = qr_cpu(X, mode='reduced')
    except np.linalg.LinAlgError:
        return CollinearityResult(
            X=X, kept=tuple(range(k)), dropped=(), factorized=False
        )
    
    diag_R = np.abs(np.diag(qr_result.R))
    # Columns past min(n, k) have no pivot of their own
    magnitudes = np.zeros(k)
    magnitudes[:len(diag_R)] = diag_R
    
    dependent = magnitudes <= tol
    kept = tuple(int(j) for j in np.flatnonzero(~dependent))
    dropped = tuple(int(j) for j in np.flatnonzero(dependent))
    
    if not dropped:
        return CollinearityResult(X=X, kept=kept, dropped=())
    return CollinearityResult(X=X[:, list(kept)], kept=kept, dropped=dropped)
