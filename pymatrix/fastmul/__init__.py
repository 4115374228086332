"""
Fast multiplication.

Public API:
    naive_multiply(A, B)      - ikj triple loop
    strassen(A, B)            - Strassen with a naive cutoff
    strassen_multiply(A, B)   - Strassen down to 1 x 1
"""

from pymatrix.fastmul.solvers import naive_multiply, strassen, strassen_multiply

__all__ = [
    "naive_multiply",
    "strassen",
    "strassen_multiply",
]
