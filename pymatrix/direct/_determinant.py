"""
Determinant kernels.

lu_determinant is the production path: the product of U's diagonal from
a pivoted LU, signed by the parity of the row exchanges.

cofactor_determinant is the textbook recursive expansion along the
first row. It costs O(n!) and exists as an independent oracle for small
matrices.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def lu_determinant(U: NDArray, n_swaps: int) -> float:
    """det(A) from the U factor of PA = LU and the number of row swaps."""
    sign = -1.0 if n_swaps % 2 else 1.0
    return sign * float(np.prod(np.diag(U)))


def cofactor_determinant(A: NDArray) -> float:
    """det(A) by recursive cofactor expansion along the first row."""
    n = A.shape[0]
    if n == 0:
        return 1.0
    if n == 1:
        return float(A[0, 0])
    if n == 2:
        return float(A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0])

    total = 0.0
    rest = A[1:, :]
    for j in range(n):
        if A[0, j] == 0:
            continue
        sub = np.delete(rest, j, axis=1)
        sign = -1.0 if j % 2 else 1.0
        total += sign * float(A[0, j]) * cofactor_determinant(sub)
    return total
