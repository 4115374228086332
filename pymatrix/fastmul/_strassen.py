"""
Naive and Strassen multiplication kernels.

Both Strassen entry points use the canonical seven products

    M1 = (A11 + A22)(B11 + B22)    M5 = (A11 + A12) B22
    M2 = (A21 + A22) B11           M6 = (A21 - A11)(B11 + B12)
    M3 = A11 (B12 - B22)           M7 = (A12 - A22)(B21 + B22)
    M4 = A22 (B21 - B11)

    C11 = M1 + M4 - M5 + M7        C12 = M3 + M5
    C21 = M2 + M4                  C22 = M1 - M2 + M3 + M6

and differ only in where the recursion stops. Arithmetic goes through
the operands' ElementKind, so integer kinds multiply exactly.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.numeric import ElementKind

Multiply = Callable[[NDArray, NDArray], NDArray]


def naive_product(A: NDArray, B: NDArray, kind: ElementKind) -> NDArray:
    """
    C = A B by the ikj loop order: row i of C accumulates A[i, k] * B[k, :].
    """
    m, p = A.shape
    n = B.shape[1]
    C = np.zeros((m, n), dtype=kind.dtype)
    for i in range(m):
        row = C[i]
        for k in range(p):
            a = A[i, k]
            if a != 0:
                row += kind.multiply(a, B[k])
    return C


def _quadrants(M: NDArray) -> tuple[NDArray, NDArray, NDArray, NDArray]:
    h = M.shape[0] // 2
    return M[:h, :h], M[:h, h:], M[h:, :h], M[h:, h:]


def _seven_products(A: NDArray, B: NDArray, kind: ElementKind, mul: Multiply) -> NDArray:
    A11, A12, A21, A22 = _quadrants(A)
    B11, B12, B21, B22 = _quadrants(B)
    add, sub = kind.add, kind.subtract

    M1 = mul(add(A11, A22), add(B11, B22))
    M2 = mul(add(A21, A22), B11)
    M3 = mul(A11, sub(B12, B22))
    M4 = mul(A22, sub(B21, B11))
    M5 = mul(add(A11, A12), B22)
    M6 = mul(sub(A21, A11), add(B11, B12))
    M7 = mul(sub(A12, A22), add(B21, B22))

    n = A.shape[0]
    h = n // 2
    C = np.empty((n, n), dtype=kind.dtype)
    C[:h, :h] = add(sub(add(M1, M4), M5), M7)
    C[:h, h:] = add(M3, M5)
    C[h:, :h] = add(M2, M4)
    C[h:, h:] = add(add(sub(M1, M2), M3), M6)
    return C


def strassen_product(A: NDArray, B: NDArray, kind: ElementKind, threshold: int) -> NDArray:
    """Strassen recursion, switching to naive_product at size <= threshold."""
    if A.shape[0] <= threshold:
        return naive_product(A, B, kind)
    return _seven_products(
        A, B, kind, lambda X, Y: strassen_product(X, Y, kind, threshold)
    )


def strassen_full_product(A: NDArray, B: NDArray, kind: ElementKind) -> NDArray:
    """Strassen recursion carried all the way down to 1 x 1 blocks."""
    if A.shape[0] == 1:
        return kind.multiply(A, B)
    return _seven_products(
        A, B, kind, lambda X, Y: strassen_full_product(X, Y, kind)
    )
