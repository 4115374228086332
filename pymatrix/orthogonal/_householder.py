"""
Householder QR.

Each column below the diagonal is annihilated by a reflector
H = I - 2 v v' with ||v|| = 1, applied to R as a rank-one update and
accumulated into Q from the right. Every reflector has determinant -1,
so det(Q) = (-1)^n_reflections.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.numeric import ElementKind


def householder_qr(
    A: NDArray,
    kind: ElementKind,
) -> tuple[NDArray, NDArray, int]:
    """
    Factor A (m x n, m >= n) as Q R with Householder reflections.

    Columns whose subdiagonal part is already zero are left alone.

    Returns:
        (Q, R, n_reflections) with Q m x m orthogonal and R m x n upper
        triangular.
    """
    m, n = A.shape
    R = A.copy()
    Q = np.eye(m, dtype=A.dtype)
    n_reflections = 0

    for k in range(min(m - 1, n)):
        x = R[k:, k]
        if not np.any(x[1:]):
            continue

        norm_x = kind.sqrt(x @ x)
        # alpha takes the sign opposite to x[0] to avoid cancellation
        alpha = -norm_x if x[0] >= 0 else norm_x
        v = x.copy()
        v[0] -= alpha
        v = kind.divide(v, kind.sqrt(v @ v))

        R[k:, :] -= 2.0 * np.outer(v, v @ R[k:, :])
        Q[:, k:] -= 2.0 * np.outer(Q[:, k:] @ v, v)
        R[k + 1:, k] = 0.0
        n_reflections += 1

    return Q, R, n_reflections
