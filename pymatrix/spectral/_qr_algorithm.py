"""
Unshifted QR algorithm.

    A_0 = A,  A_k = Q_k R_k,  A_{k+1} = R_k Q_k

Every A_k is orthogonally similar to A. For real eigenvalues of distinct
magnitude A_k tends to upper triangular form with the eigenvalues on
its diagonal; for symmetric A the accumulated Q_0 Q_1 ... holds the
eigenvectors in its columns.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray

from pymatrix.spectral._iteration import IterationState, strictly_lower_norm

QRFactor = Callable[[NDArray], tuple[NDArray, NDArray]]


def qr_iteration(
    A: NDArray,
    factor: QRFactor,
    tol: float,
    max_iter: int,
) -> tuple[NDArray, NDArray, IterationState]:
    """
    Iterate A <- R Q until the strictly lower part is below tol.

    Returns:
        (diag, Q_acc, state)
    """
    T = A.copy()
    Q_acc = np.eye(A.shape[0], dtype=A.dtype)

    iterations = 0
    off = strictly_lower_norm(T)
    while off >= tol and iterations < max_iter:
        Q, R = factor(T)
        T = R @ Q
        Q_acc = Q_acc @ Q
        iterations += 1
        off = strictly_lower_norm(T)

    state = IterationState(iterations=iterations, off_norm=off, converged=off < tol)
    return np.diag(T).copy(), Q_acc, state


def qr_single_step(A: NDArray, factor: QRFactor) -> NDArray:
    """Diagonal of R Q after one QR factorization of A."""
    Q, R = factor(A)
    return np.diag(R @ Q).copy()
