"""
Direct factorization engine.

Elimination-based factorizations and the solvers built on them.

Public API:
    lu(A)                    - LU decomposition (unpivoted or PA = LU)
    inverse(A)               - Gauss-Jordan or LU-based inverse
    solve(A, b)              - Linear system via pivoted LU
    det(A)                   - Determinant (LU, QR variants, cofactor oracle)
    forward_substitution(L, b), back_substitution(U, b)
    adjugate(A), matrix_power(A, k), permutation_matrix(perm)
"""

from pymatrix.direct.solution import LUParams, LUSolution
from pymatrix.direct.solvers import (
    lu,
    inverse,
    solve,
    det,
    forward_substitution,
    back_substitution,
    adjugate,
    matrix_power,
    permutation_matrix,
)

__all__ = [
    "lu",
    "inverse",
    "solve",
    "det",
    "forward_substitution",
    "back_substitution",
    "adjugate",
    "matrix_power",
    "permutation_matrix",
    "LUParams",
    "LUSolution",
]
