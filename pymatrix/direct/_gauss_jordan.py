"""
Gauss-Jordan inversion with partial pivoting.

The augmented buffer [A | I] is reduced column by column: the row with
the largest |entry| in the active column becomes the pivot row, it is
scaled so the pivot is 1, and the pivot column is eliminated from every
other row. When the left block has become I the right block is A^-1.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import SingularMatrixError


def gauss_jordan_inverse(A: NDArray) -> NDArray:
    """
    Invert a square floating matrix.

    Args:
        A: Square floating matrix (n, n). Not modified.

    Returns:
        A^-1 as a new (n, n) array.

    Raises:
        SingularMatrixError: If the best available pivot is exactly zero.
    """
    n = A.shape[0]
    aug = np.hstack([A, np.eye(n, dtype=A.dtype)])

    for i in range(n):
        pivot_row = i + int(np.argmax(np.abs(aug[i:, i])))
        if pivot_row != i:
            aug[[i, pivot_row], :] = aug[[pivot_row, i], :]

        pivot = aug[i, i]
        if pivot == 0:
            raise SingularMatrixError(
                f"Matrix is singular: no nonzero pivot in column {i}",
                matrix_name='A',
                pivot_index=i,
            )
        aug[i, :] /= pivot

        factors = aug[:, i].copy()
        factors[i] = 0
        aug -= np.outer(factors, aug[i, :])

    return aug[:, n:].copy()
