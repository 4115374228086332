"""
Exception hierarchy for PyMatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Callers branch on the concrete class to tell
failure categories apart.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from typing import Any


class PyMatrixError(Exception):
    """Base exception for all PyMatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when shapes don't match what an operation requires, e.g. the
    inner dimensions of a product or the operands of an elementwise sum.
    """
    pass


class NotSquareError(DimensionError):
    """
    Operation requires a square matrix.

    Raised by determinant, inversion, LU, QR, Cholesky, eigen and SVD
    routines when given a rectangular matrix.

    Attributes:
        rows: Row count of the offending matrix
        cols: Column count of the offending matrix
    """

    def __init__(
        self,
        message: str,
        rows: int | None = None,
        cols: int | None = None
    ):
        super().__init__(message)
        self.rows = rows
        self.cols = cols


class UnsupportedElementTypeError(ValidationError):
    """
    Element kind has no registered arithmetic.

    Raised at the numeric kernel boundary when a buffer's dtype (bool,
    unsigned, complex, object, string, ...) is not a registered kind.

    Attributes:
        dtype: The rejected dtype
    """

    def __init__(self, message: str, dtype: Any = None):
        super().__init__(message)
        self.dtype = dtype


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular, or a division by exact zero was attempted.

    Raised when an elimination step meets an exact-zero pivot, when a
    triangular solve meets a zero diagonal, or when the numeric kernel is
    asked to divide by zero.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step at which the zero pivot appeared
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not symmetric positive definite.

    Raised by Cholesky decomposition when the input is asymmetric or a
    diagonal pivot is not strictly positive.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Row at which the factorization broke down
        pivot_value: The non-positive value under the square root
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value


class ConvergenceError(PyMatrixError):
    """
    Iterative algorithm failed to converge.

    Raised by the Jacobi, QR-algorithm and SVD iterations when called with
    strict=True and the tolerance is not met within the iteration cap.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final off-diagonal norm
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
