"""
Exception hierarchy for PyEconometrics.

All exceptions inherit from PyEconometricsError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyEconometricsError(Exception):
    """Base exception for all PyEconometrics errors."""
    pass


class ValidationError(PyEconometricsError):
    """
    Input validation failed.
    
    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.
    
    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes (response vs design
    rows, cluster labels vs observations).
    """
    pass


class DegreesOfFreedomError(ValidationError):
    """
    Not enough observations for the number of parameters.
    
    Raised when n <= k, either for the raw design or after columns
    were dropped for collinearity.
    
    Attributes:
        n_obs: Number of observations
        n_params: Number of parameters being estimated
    """
    
    def __init__(
        self,
        message: str,
        n_obs: int | None = None,
        n_params: int | None = None
    ):
        super().__init__(message)
        self.n_obs = n_obs
        self.n_params = n_params


class NumericalError(PyEconometricsError):
    """
    Numerical computation failed.
    
    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.
    
    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.
    
    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """
    
    def __init__(
        self, 
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class DistributionError(NumericalError):
    """
    A reference distribution could not be constructed.
    
    Raised when Student's t or the F distribution is requested with
    non-positive degrees of freedom.
    
    Attributes:
        distribution: Name of the distribution ('t', 'f')
        df: The offending degrees of freedom
    """
    
    def __init__(
        self,
        message: str,
        distribution: str | None = None,
        df: float | tuple[float, ...] | None = None
    ):
        super().__init__(message)
        self.distribution = distribution
        self.df = df
