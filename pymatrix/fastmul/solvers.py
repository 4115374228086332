"""
Entry points for matrix multiplication.

naive_multiply() accepts any conformable pair. strassen() and
strassen_multiply() require both operands square, of equal size and a
power of two.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from pymatrix.core.compute.tolerances import STRASSEN_THRESHOLD
from pymatrix.core.matrix import Matrix, as_matrix
from pymatrix.core.numeric import ElementKind, kind_of
from pymatrix.core.validation import (
    check_inner_dimensions,
    check_power_of_two,
    check_same_shape,
    check_square,
)
from pymatrix.fastmul import _strassen


def _common_kind(A: Matrix, B: Matrix) -> ElementKind:
    return kind_of(np.result_type(A.dtype, B.dtype))


def _strassen_operands(A, B):
    A, B = as_matrix(A), as_matrix(B)
    check_square(A, 'A')
    check_square(B, 'B')
    check_same_shape(A, B, ('A', 'B'))
    check_power_of_two(A, 'A')
    kind = _common_kind(A, B)
    return A.data.astype(kind.dtype), B.data.astype(kind.dtype), kind


def naive_multiply(A: Matrix | ArrayLike, B: Matrix | ArrayLike) -> Matrix:
    """
    Triple-loop product A @ B in the common kind of the operands.

    Raises:
        DimensionError: If A.cols != B.rows
    """
    A, B = as_matrix(A), as_matrix(B)
    check_inner_dimensions(A, B, ('A', 'B'))
    kind = _common_kind(A, B)
    return Matrix._wrap(_strassen.naive_product(
        A.data.astype(kind.dtype), B.data.astype(kind.dtype), kind
    ))


def strassen(
    A: Matrix | ArrayLike,
    B: Matrix | ArrayLike,
    *,
    threshold: int = STRASSEN_THRESHOLD,
) -> Matrix:
    """
    Strassen product, naive at or below threshold.

    Raises:
        NotSquareError: If either operand is not square
        DimensionError: If sizes differ or are not a power of two
    """
    a, b, kind = _strassen_operands(A, B)
    return Matrix._wrap(_strassen.strassen_product(a, b, kind, max(int(threshold), 1)))


def strassen_multiply(A: Matrix | ArrayLike, B: Matrix | ArrayLike) -> Matrix:
    """
    Strassen product recursing to 1 x 1 blocks.

    Raises:
        NotSquareError: If either operand is not square
        DimensionError: If sizes differ or are not a power of two
    """
    a, b, kind = _strassen_operands(A, B)
    return Matrix._wrap(_strassen.strassen_full_product(a, b, kind))
