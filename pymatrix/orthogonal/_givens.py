"""
Givens QR.

Subdiagonal entries are zeroed one at a time, bottom to top within each
column, by plane rotations of rows (k, i). Rotations have determinant
+1, so det(Q) = 1.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def givens_qr(A: NDArray) -> tuple[NDArray, NDArray]:
    """
    Factor A (m x n) as Q R with Givens rotations.

    Returns:
        (Q, R) with Q m x m orthogonal and R m x n upper triangular.
    """
    m, n = A.shape
    R = A.copy()
    Q = np.eye(m, dtype=A.dtype)

    for k in range(min(m - 1, n)):
        for i in range(m - 1, k, -1):
            b = R[i, k]
            if b == 0:
                continue
            a = R[k, k]
            r = np.hypot(a, b)
            c, s = a / r, b / r

            R[k, k:], R[i, k:] = (
                c * R[k, k:] + s * R[i, k:],
                -s * R[k, k:] + c * R[i, k:],
            )
            # Q <- Q G'
            Q[:, k], Q[:, i] = (
                c * Q[:, k] + s * Q[:, i],
                -s * Q[:, k] + c * Q[:, i],
            )
            R[i, k] = 0.0

    return Q, R
