"""
LU factorization kernels.

Two eliminations on a square floating buffer:

    doolittle(A)          A = LU, no row exchanges
    partial_pivot_lu(A)   PA = LU, row of largest |pivot| moved up each step

L is unit lower triangular and U upper triangular in both. The unpivoted
form computes U row by row by subtracting the contributions of earlier
rows, then the column of L below the diagonal by dividing by the new
U diagonal; it fails on an exact-zero pivot whenever that division is
needed. The pivoted form never divides by zero: a column that is
already zero below the diagonal is skipped, leaving a zero on U's
diagonal for the determinant and the solvers to see.

References:
    Golub, G. H., & Van Loan, C. F. (2013). Matrix Computations (4th ed.),
    Sections 3.2 and 3.4.
"""

from __future__ import annotations

from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class PivotedLU:
    """Result of partial_pivot_lu.

    Attributes:
        L: Unit lower triangular factor (n, n).
        U: Upper triangular factor (n, n).
        permutation: perm with (PA)[i] = A[perm[i]].
        n_swaps: Number of row exchanges performed.
    """
    L: NDArray
    U: NDArray
    permutation: NDArray
    n_swaps: int


def doolittle(A: NDArray) -> tuple[NDArray, NDArray]:
    """
    LU factorization without pivoting.

    Args:
        A: Square floating matrix (n, n). Not modified.

    Returns:
        (L, U) with L @ U == A up to rounding.

    Raises:
        SingularMatrixError: If a pivot U[i, i] is exactly zero while
            rows below it still need eliminating.
    """
    n = A.shape[0]
    L = np.zeros_like(A)
    U = np.zeros_like(A)

    for i in range(n):
        U[i, i:] = A[i, i:] - L[i, :i] @ U[:i, i:]
        L[i, i] = 1

        if i == n - 1:
            break

        pivot = U[i, i]
        if pivot == 0:
            raise SingularMatrixError(
                f"Zero pivot at step {i} of LU decomposition without pivoting. "
                f"Use pivoting='partial' or check that A is nonsingular.",
                matrix_name='A',
                pivot_index=i,
            )
        L[i + 1:, i] = (A[i + 1:, i] - L[i + 1:, :i] @ U[:i, i]) / pivot

    return L, U


def partial_pivot_lu(A: NDArray) -> PivotedLU:
    """
    LU factorization with partial (row) pivoting: PA = LU.

    Args:
        A: Square floating matrix (n, n). Not modified.

    Returns:
        PivotedLU with L, U, the row permutation and the swap count.
    """
    n = A.shape[0]
    U = A.copy()
    L = np.eye(n, dtype=A.dtype)
    perm = np.arange(n)
    n_swaps = 0

    for k in range(n):
        p = k + int(np.argmax(np.abs(U[k:, k])))
        if p != k:
            U[[k, p], :] = U[[p, k], :]
            L[[k, p], :k] = L[[p, k], :k]
            perm[[k, p]] = perm[[p, k]]
            n_swaps += 1

        pivot = U[k, k]
        if pivot == 0:
            # Column already eliminated; U keeps the zero pivot.
            continue

        L[k + 1:, k] = U[k + 1:, k] / pivot
        U[k + 1:, k:] -= np.outer(L[k + 1:, k], U[k, k:])
        U[k + 1:, k] = 0

    return PivotedLU(L=L, U=U, permutation=perm, n_swaps=n_swaps)
