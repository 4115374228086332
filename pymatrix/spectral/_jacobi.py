"""
Classical Jacobi eigenvalue iteration for symmetric matrices.

Each step picks the largest off-diagonal entry a_pq and applies the
plane rotation J(p, q, theta) on both sides, with

    tan(2 theta) = 2 a_pq / (a_qq - a_pp),

which zeros a_pq. The rotations are accumulated into V, so on
convergence A = V diag(w) V'.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pymatrix.spectral._iteration import IterationState, off_diagonal_norm


def jacobi_rotations(
    A: NDArray,
    tol: float,
    max_iter: int,
) -> tuple[NDArray, NDArray, IterationState]:
    """
    Diagonalize symmetric A by Jacobi rotations.

    Args:
        A: Symmetric square array; not modified
        tol: Stop once the off-diagonal Frobenius norm is below tol
        max_iter: Maximum number of rotations

    Returns:
        (w, V, state): diagonal of the rotated matrix, accumulated
        rotations with eigenvector i in column i, and the final state.
    """
    n = A.shape[0]
    D = A.copy()
    V = np.eye(n, dtype=A.dtype)

    iterations = 0
    off = off_diagonal_norm(D)
    while off >= tol and iterations < max_iter:
        mag = np.abs(D)
        np.fill_diagonal(mag, 0.0)
        p, q = np.unravel_index(int(np.argmax(mag)), mag.shape)

        theta = 0.5 * np.arctan2(2.0 * D[p, q], D[q, q] - D[p, p])
        c, s = np.cos(theta), np.sin(theta)

        # D <- J' D J, V <- V J
        Dp, Dq = D[:, p].copy(), D[:, q].copy()
        D[:, p], D[:, q] = c * Dp - s * Dq, s * Dp + c * Dq
        Dp, Dq = D[p, :].copy(), D[q, :].copy()
        D[p, :], D[q, :] = c * Dp - s * Dq, s * Dp + c * Dq
        D[p, q] = D[q, p] = 0.0

        Vp, Vq = V[:, p].copy(), V[:, q].copy()
        V[:, p], V[:, q] = c * Vp - s * Vq, s * Vp + c * Vq

        iterations += 1
        off = off_diagonal_norm(D)

    state = IterationState(iterations=iterations, off_norm=off, converged=off < tol)
    return np.diag(D).copy(), V, state
