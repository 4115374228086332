"""
Input validation utilities for PyMatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    DimensionError,
    NotPositiveDefiniteError,
    NotSquareError,
    ValidationError,
)
from pymatrix.core.numeric import kind_of

if TYPE_CHECKING:
    from pymatrix.core.matrix import Matrix


def check_array(array: ArrayLike, name: str) -> NDArray[Any]:
    """
    Validate and convert input to a numpy array of a registered kind.

    Unlike a blanket float conversion, the element kind is preserved so
    integer matrices stay integer through shape and product operations.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with a registered dtype

    Raises:
        ValidationError: If input cannot be converted to an array
        UnsupportedElementTypeError: If the resulting dtype is not registered
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    kind_of(result.dtype)
    return result


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

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


def check_2d(array: NDArray[Any], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    check_ndim(array, 2, name)


def check_square(matrix: Matrix, name: str) -> None:
    """
    Verify matrix is square.

    Raises:
        NotSquareError: If rows != cols
    """
    rows, cols = matrix.shape
    if rows != cols:
        raise NotSquareError(
            f"{name}: must be square, got shape ({rows}, {cols})",
            rows=rows,
            cols=cols,
        )


def check_same_shape(a: Matrix, b: Matrix, names: tuple[str, str]) -> None:
    """
    Verify two matrices have identical shape.

    Raises:
        DimensionError: If shapes differ
    """
    if a.shape != b.shape:
        raise DimensionError(
            f"Shape mismatch: {names[0]}={a.shape}, {names[1]}={b.shape}"
        )


def check_inner_dimensions(a: Matrix, b: Matrix, names: tuple[str, str]) -> None:
    """
    Verify a.cols == b.rows so that a @ b is defined.

    Raises:
        DimensionError: If inner dimensions differ
    """
    if a.cols != b.rows:
        raise DimensionError(
            f"Inner dimensions must match: {names[0]} is {a.shape}, "
            f"{names[1]} is {b.shape}"
        )


def check_power_of_two(matrix: Matrix, name: str) -> None:
    """
    Verify a square matrix has a power-of-two size.

    Raises:
        DimensionError: If the size is not a power of two
    """
    n = matrix.rows
    if n < 1 or (n & (n - 1)) != 0:
        raise DimensionError(
            f"{name}: size must be a power of two, got {n}"
        )


def check_symmetric(matrix: Matrix, name: str, atol: float) -> None:
    """
    Verify a square matrix is symmetric within an absolute tolerance.

    Raises:
        ValidationError: If any |A[i, j] - A[j, i]| exceeds atol
    """
    data = matrix.data
    asym = np.abs(data - data.T)
    worst = float(asym.max()) if asym.size else 0.0
    if worst > atol:
        i, j = np.unravel_index(int(np.argmax(asym)), asym.shape)
        raise ValidationError(
            f"{name}: must be symmetric, |A[{i},{j}] - A[{j},{i}]| = {worst:.3g} "
            f"exceeds {atol:.3g}"
        )


def check_symmetric_for_cholesky(matrix: Matrix, name: str, atol: float) -> None:
    """
    Symmetry precondition of Cholesky, reported as NotPositiveDefiniteError.

    Raises:
        NotPositiveDefiniteError: If the matrix is not symmetric
    """
    try:
        check_symmetric(matrix, name, atol)
    except ValidationError as e:
        raise NotPositiveDefiniteError(str(e), matrix_name=name) from e


def check_positive(value: float, name: str) -> None:
    """
    Verify a scalar parameter is strictly positive.

    Raises:
        ValidationError: If value <= 0
    """
    if not value > 0:
        raise ValidationError(f"{name}: must be positive, got {value}")


def check_choice(value: str, choices: tuple[str, ...], name: str) -> None:
    """
    Verify a string parameter is one of the allowed choices.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise ValidationError(f"Unknown {name}: {value!r}. Must be one of {allowed}")
