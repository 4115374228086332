"""
Orthogonal factorization engine.

Public API:
    qr(A, method=...)      - Householder (default), Givens or Gram-Schmidt
    householder_qr(A), givens_qr(A), gram_schmidt_qr(A)
    least_squares(A, b)    - x minimizing ||A x - b|| for tall A, by QR
    cholesky(A)            - A = L L' for symmetric positive definite A
    is_positive_definite(A)
"""

from pymatrix.orthogonal.solution import (
    CholeskyParams,
    CholeskySolution,
    QRParams,
    QRSolution,
)
from pymatrix.orthogonal.solvers import (
    qr,
    householder_qr,
    givens_qr,
    gram_schmidt_qr,
    least_squares,
    cholesky,
    is_positive_definite,
)

__all__ = [
    "qr",
    "householder_qr",
    "givens_qr",
    "gram_schmidt_qr",
    "least_squares",
    "cholesky",
    "is_positive_definite",
    "QRParams",
    "QRSolution",
    "CholeskyParams",
    "CholeskySolution",
]
