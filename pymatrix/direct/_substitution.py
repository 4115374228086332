"""
Triangular solves.

O(n^2) forward and back substitution for one right-hand side (n,) or
several (n, k). Only the relevant triangle of the coefficient matrix is
read; the caller is responsible for passing a triangular system.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import SingularMatrixError


def _zero_diagonal(i: int, name: str) -> SingularMatrixError:
    return SingularMatrixError(
        f"Zero on the diagonal of {name} at row {i}; the triangular system is singular",
        matrix_name=name,
        pivot_index=i,
    )


def forward_substitution(L: NDArray, b: NDArray) -> NDArray:
    """
    Solve L x = b for lower triangular L, top row first.

    Raises:
        SingularMatrixError: If L has a zero diagonal entry.
    """
    n = L.shape[0]
    x = np.array(b, dtype=np.result_type(L, b), copy=True)

    for i in range(n):
        d = L[i, i]
        if d == 0:
            raise _zero_diagonal(i, 'L')
        x[i] = (x[i] - L[i, :i] @ x[:i]) / d

    return x


def back_substitution(U: NDArray, b: NDArray) -> NDArray:
    """
    Solve U x = b for upper triangular U, bottom row first.

    Raises:
        SingularMatrixError: If U has a zero diagonal entry.
    """
    n = U.shape[0]
    x = np.array(b, dtype=np.result_type(U, b), copy=True)

    for i in range(n - 1, -1, -1):
        d = U[i, i]
        if d == 0:
            raise _zero_diagonal(i, 'U')
        x[i] = (x[i] - U[i, i + 1:] @ x[i + 1:]) / d

    return x
