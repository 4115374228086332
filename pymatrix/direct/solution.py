"""
LU solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.matrix import Matrix, as_matrix
from pymatrix.core.result import Solution
from pymatrix.core.validation import check_ndim
from pymatrix.core.exceptions import DimensionError
from pymatrix.direct._determinant import lu_determinant
from pymatrix.direct._substitution import back_substitution, forward_substitution


@dataclass(frozen=True)
class LUParams:
    """
    Parameter payload for an LU factorization PA = LU.

    For pivoting='none' the permutation is the identity and n_swaps is 0.
    """
    L: NDArray[np.floating[Any]]
    U: NDArray[np.floating[Any]]
    permutation: NDArray[np.integer[Any]]
    n_swaps: int
    pivoting: str


@dataclass
class LUSolution(Solution[LUParams]):
    """
    User-facing LU factorization.

    Unpacks as the two-element sequence (L, U):

        L, U = lu(A)
        sol = lu(A, pivoting='partial'); sol.P @ A ≈ sol.L @ sol.U
    """

    _factors = ('L', 'U')

    @property
    def L(self) -> Matrix:
        """Unit lower triangular factor."""
        return Matrix(self._result.params.L)

    @property
    def U(self) -> Matrix:
        """Upper triangular factor."""
        return Matrix(self._result.params.U)

    @property
    def P(self) -> Matrix:
        """Row permutation matrix with P @ A = L @ U."""
        return Matrix.permutation(self._result.params.permutation,
                                  dtype=self._result.params.L.dtype)

    @property
    def permutation(self) -> tuple[int, ...]:
        """perm with (P @ A)[i] = A[perm[i]]."""
        return tuple(int(p) for p in self._result.params.permutation)

    @property
    def n_swaps(self) -> int:
        return self._result.params.n_swaps

    @property
    def pivoting(self) -> str:
        return self._result.params.pivoting

    @property
    def determinant(self) -> float:
        """det(A): signed product of U's diagonal."""
        p = self._result.params
        return lu_determinant(p.U, p.n_swaps)

    def solve(self, b: Matrix | Any) -> Matrix:
        """
        Solve A x = b reusing this factorization.

        Args:
            b: Right-hand side, a vector of length n or an (n, k) matrix.

        Raises:
            DimensionError: If b has the wrong number of rows
            SingularMatrixError: If U has a zero on its diagonal
        """
        p = self._result.params
        rhs = np.asarray(b.data if isinstance(b, Matrix) else b)
        if rhs.ndim == 1:
            rhs = rhs.reshape(-1, 1)
        check_ndim(rhs, 2, 'b')
        n = p.L.shape[0]
        if rhs.shape[0] != n:
            raise DimensionError(f"b: expected {n} rows, got {rhs.shape[0]}")

        rhs = rhs[p.permutation, :].astype(p.L.dtype)
        y = forward_substitution(p.L, rhs)
        return as_matrix(back_substitution(p.U, y))

    def __repr__(self) -> str:
        n = self._result.params.L.shape[0]
        return f"LUSolution(n={n}, pivoting={self.pivoting!r}, n_swaps={self.n_swaps})"
