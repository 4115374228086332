"""
Spectral engine.

Public API:
    jacobi_eigen(A)             - Symmetric eigen decomposition (Jacobi)
    qr_eigenvalues(A)           - Unshifted QR algorithm, iterated
    qr_step_eigenvalues(A)      - One-step approximation diag(R Q)
    eigenvalues(A), eigenvectors(A)
    svd(A, method=...)          - Two-sided QR iteration SVD
    singular_values(A), rank(A), condition_number(A), pseudoinverse(A)
    is_singular(A), is_full_rank(A)
"""

from pymatrix.spectral.solution import (
    EigenParams,
    EigenSolution,
    SVDParams,
    SVDSolution,
)
from pymatrix.spectral.solvers import (
    jacobi_eigen,
    qr_eigenvalues,
    qr_step_eigenvalues,
    eigenvalues,
    eigenvectors,
    svd,
    singular_values,
    rank,
    condition_number,
    pseudoinverse,
    is_singular,
    is_full_rank,
)

__all__ = [
    "jacobi_eigen",
    "qr_eigenvalues",
    "qr_step_eigenvalues",
    "eigenvalues",
    "eigenvectors",
    "svd",
    "singular_values",
    "rank",
    "condition_number",
    "pseudoinverse",
    "is_singular",
    "is_full_rank",
    "EigenParams",
    "EigenSolution",
    "SVDParams",
    "SVDSolution",
]
