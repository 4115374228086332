"""
QR and Cholesky solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import DimensionError
from pymatrix.core.matrix import Matrix, as_matrix
from pymatrix.core.result import Solution
from pymatrix.direct._substitution import back_substitution, forward_substitution


def _rhs(b: Matrix | Any, n: int) -> NDArray:
    rhs = np.asarray(b.data if isinstance(b, Matrix) else b)
    if rhs.ndim == 1:
        rhs = rhs.reshape(-1, 1)
    if rhs.ndim != 2 or rhs.shape[0] != n:
        raise DimensionError(f"b: expected {n} rows, got shape {rhs.shape}")
    return rhs


@dataclass(frozen=True)
class QRParams:
    """
    Parameter payload for A = QR.

    Attributes:
        Q: Orthogonal factor
        R: Upper triangular factor
        method: 'householder', 'givens' or 'gram_schmidt'
        q_determinant: det(Q), +1 or -1
        rank: Numerical rank read off R's diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    method: str
    q_determinant: float
    rank: int


@dataclass
class QRSolution(Solution[QRParams]):
    """
    User-facing QR factorization.

    Unpacks as (Q, R):

        Q, R = qr(A)
        qr(A, method='givens').determinant
    """

    _factors = ('Q', 'R')

    @property
    def Q(self) -> Matrix:
        return Matrix(self._result.params.Q)

    @property
    def R(self) -> Matrix:
        return Matrix(self._result.params.R)

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def determinant(self) -> float:
        """det(A) = det(Q) * prod(diag(R))."""
        p = self._result.params
        return p.q_determinant * float(np.prod(np.diag(p.R)))

    def solve(self, b: Matrix | Any) -> Matrix:
        """
        Solve A x = b as x = R^-1 Q' b.

        Raises:
            DimensionError: If b has the wrong number of rows
            SingularMatrixError: If R has a zero on its diagonal
        """
        p = self._result.params
        rhs = _rhs(b, p.Q.shape[0]).astype(p.Q.dtype)
        return as_matrix(back_substitution(p.R, p.Q.T @ rhs))

    def __repr__(self) -> str:
        n = self._result.params.R.shape[0]
        return f"QRSolution(n={n}, method={self.method!r}, rank={self.rank})"


@dataclass(frozen=True)
class CholeskyParams:
    """Parameter payload for A = L L'."""
    L: NDArray[np.floating[Any]]


@dataclass
class CholeskySolution(Solution[CholeskyParams]):
    """
    User-facing Cholesky factorization.

    Unpacks as the one-element sequence (L,):

        (L,) = cholesky(A)
        cholesky(A).L
    """

    _factors = ('L',)

    @property
    def L(self) -> Matrix:
        """Lower triangular factor with positive diagonal."""
        return Matrix(self._result.params.L)

    @property
    def determinant(self) -> float:
        """det(A) = prod(diag(L))^2."""
        return float(np.prod(np.diag(self._result.params.L))) ** 2

    def solve(self, b: Matrix | Any) -> Matrix:
        """Solve A x = b by L y = b, then L' x = y."""
        L = self._result.params.L
        rhs = _rhs(b, L.shape[0]).astype(L.dtype)
        y = forward_substitution(L, rhs)
        return as_matrix(back_substitution(L.T, y))

    def __repr__(self) -> str:
        return f"CholeskySolution(n={self._result.params.L.shape[0]})"
