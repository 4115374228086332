"""
SVD by two-sided QR iteration.

Starting from U = V = I and S = A, each sweep factors

    S  = Q1 R1        U <- U Q1
    R1' = Q2 R2       V <- V Q2,   S <- R2'

so A = U S V' holds throughout while the off-diagonal part of S decays.
The working arrays are private; A is never written.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.spectral._iteration import IterationState, off_diagonal_norm
from pymatrix.spectral._qr_algorithm import QRFactor


def svd_qr_iteration(
    A: NDArray,
    factor: QRFactor,
    tol: float,
    max_iter: int,
) -> tuple[NDArray, NDArray, NDArray, IterationState]:
    """
    Singular value decomposition of square A.

    Returns:
        (U, s, V, state) with s non-negative and sorted descending,
        and A ~= U diag(s) V'.
    """
    n = A.shape[0]
    S = A.copy()
    U = np.eye(n, dtype=A.dtype)
    V = np.eye(n, dtype=A.dtype)

    iterations = 0
    off = off_diagonal_norm(S)
    while off >= tol and iterations < max_iter:
        Q1, R1 = factor(S)
        U = U @ Q1
        Q2, R2 = factor(R1.T)
        V = V @ Q2
        S = R2.T
        iterations += 1
        off = off_diagonal_norm(S)

    s = np.diag(S).copy()
    signs = np.where(s < 0, -1.0, 1.0).astype(A.dtype)
    s = np.abs(s)
    U = U * signs

    order = np.argsort(-s, kind='stable')
    state = IterationState(iterations=iterations, off_norm=off, converged=off < tol)
    return U[:, order], s[order], V[:, order], state
