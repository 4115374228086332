"""
Cholesky-Banachiewicz factorization, row by row.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import NotPositiveDefiniteError
from pymatrix.core.numeric import ElementKind


def cholesky_lower(A: NDArray, kind: ElementKind) -> NDArray:
    """
    Lower triangular L with A = L L'.

    Only the lower triangle of A is read; symmetry is the caller's check.

    Raises:
        NotPositiveDefiniteError: If a diagonal pivot is not strictly
            positive.
    """
    n = A.shape[0]
    L = np.zeros_like(A)

    for i in range(n):
        for j in range(i):
            L[i, j] = (A[i, j] - L[i, :j] @ L[j, :j]) / L[j, j]

        pivot = A[i, i] - L[i, :i] @ L[i, :i]
        if not pivot > 0:
            raise NotPositiveDefiniteError(
                f"Matrix is not positive definite: pivot {i} is {pivot:.6g} "
                f"(leading minor of order {i + 1} is not positive)",
                matrix_name='A',
                pivot_index=i,
                pivot_value=float(pivot),
            )
        L[i, i] = kind.sqrt(pivot)

    return L
