"""
Modified Gram-Schmidt QR.

Column j is normalized, then projected out of every later column
immediately, which keeps Q far closer to orthogonal than the classical
variant in floating point.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import SingularMatrixError
from pymatrix.core.numeric import ElementKind


def _complement_vector(Q: NDArray, j: int) -> NDArray:
    """Unit vector orthogonal to Q[:, :j], built from the best basis vector."""
    m = Q.shape[0]
    basis = Q[:, :j]
    # residual of every e_k against the current basis, one per column
    E = np.eye(m, dtype=Q.dtype)
    for _ in range(2):
        E -= basis @ (basis.T @ E)
    norms = np.sqrt(np.sum(E * E, axis=0))
    k = int(np.argmax(norms))
    return E[:, k] / norms[k]


def gram_schmidt_qr(
    A: NDArray,
    kind: ElementKind,
    complete: bool = False,
) -> tuple[NDArray, NDArray]:
    """
    Factor A (m x n, m >= n) as Q R by modified Gram-Schmidt.

    Args:
        A: Floating matrix to factor; not modified.
        kind: Element kind supplying sqrt.
        complete: If True, a column that is dependent on the previous ones
            (to within rounding of its own norm) gets R[j, j] = 0 and an
            arbitrary unit vector orthogonal to Q[:, :j]. The iterative
            solvers use this so rank-deficient input still factors.

    Returns:
        (Q, R) with Q m x n having orthonormal columns and R n x n upper
        triangular with a non-negative diagonal.

    Raises:
        SingularMatrixError: If complete is False and a column reduces to
            exactly zero, i.e. the columns of A are linearly dependent.
    """
    m, n = A.shape
    V = A.copy()
    Q = np.zeros_like(A)
    R = np.zeros((n, n), dtype=A.dtype)
    eps = np.finfo(A.dtype).eps

    for j in range(n):
        r_jj = kind.sqrt(V[:, j] @ V[:, j])
        if complete:
            dependent = r_jj <= m * eps * kind.sqrt(A[:, j] @ A[:, j])
        else:
            dependent = r_jj == 0
        if dependent:
            if not complete:
                raise SingularMatrixError(
                    f"Column {j} is linearly dependent on the previous columns; "
                    f"Gram-Schmidt cannot normalize it",
                    matrix_name='A',
                    pivot_index=j,
                    rank=j,
                    expected_rank=n,
                )
            Q[:, j] = _complement_vector(Q, j)
        else:
            R[j, j] = r_jj
            Q[:, j] = V[:, j] / r_jj
        R[j, j + 1:] = Q[:, j] @ V[:, j + 1:]
        V[:, j + 1:] -= np.outer(Q[:, j], R[j, j + 1:])

    return Q, R
