"""
Core infrastructure for PyMatrix.

This module provides shared abstractions and utilities used by all
factorization engines (direct, orthogonal, spectral, fastmul).

Key components:
    matrix: Matrix storage type
    numeric: Element kinds and their arithmetic
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance infrastructure
"""

from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    NotSquareError,
    UnsupportedElementTypeError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
)
from pymatrix.core.numeric import (
    ElementKind,
    NumericKernel,
    kind_of,
    register_kind,
    supported_kinds,
    floating_kind,
)
from pymatrix.core.matrix import Matrix, as_matrix
from pymatrix.core.result import Result, Solution

__all__ = [
    # Storage
    "Matrix",
    "as_matrix",
    # Numeric kernel
    "ElementKind",
    "NumericKernel",
    "kind_of",
    "register_kind",
    "supported_kinds",
    "floating_kind",
    # Result
    "Result",
    "Solution",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "NotSquareError",
    "UnsupportedElementTypeError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
]
