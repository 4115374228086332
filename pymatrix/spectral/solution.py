"""
Eigen and singular value solution types.

Contains the parameter payloads and user-facing solution wrappers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.matrix import Matrix
from pymatrix.core.result import Solution


@dataclass(frozen=True)
class EigenParams:
    """
    Parameter payload for an eigen decomposition.

    Attributes:
        eigenvalues: Eigenvalue estimates, ascending
        eigenvectors: Unit eigenvector estimates as rows; row i pairs
            with eigenvalues[i]
    """
    eigenvalues: NDArray[np.floating[Any]]
    eigenvectors: NDArray[np.floating[Any]]


@dataclass
class EigenSolution(Solution[EigenParams]):
    """
    User-facing eigen decomposition.

    Unpacks as (eigenvalues, eigenvectors):

        w, vecs = jacobi_eigen(A)
        A @ vecs.row(i).T ≈ w[i] * vecs.row(i).T
    """

    _factors = ('eigenvalues', 'eigenvectors')

    @property
    def eigenvalues(self) -> NDArray[np.floating[Any]]:
        return self._result.params.eigenvalues.copy()

    @property
    def eigenvectors(self) -> Matrix:
        """Eigenvectors as unit-length rows."""
        return Matrix(self._result.params.eigenvectors)

    @property
    def converged(self) -> bool:
        return self._result.info['converged']

    @property
    def iterations(self) -> int:
        return self._result.info['iterations']

    @property
    def method(self) -> str:
        return self._result.info['method']

    def __repr__(self) -> str:
        return (
            f"EigenSolution(n={len(self._result.params.eigenvalues)}, "
            f"method={self.method!r}, converged={self.converged}, "
            f"iterations={self.iterations})"
        )


@dataclass(frozen=True)
class SVDParams:
    """
    Parameter payload for A = U diag(s) V'.

    Attributes:
        U: Left singular vectors as columns
        singular_values: Non-negative, sorted descending
        V: Right singular vectors as columns
    """
    U: NDArray[np.floating[Any]]
    singular_values: NDArray[np.floating[Any]]
    V: NDArray[np.floating[Any]]


@dataclass
class SVDSolution(Solution[SVDParams]):
    """
    User-facing singular value decomposition.

    Unpacks as (U, S, V) with S the diagonal matrix of singular values:

        U, S, V = svd(A)
        U @ S @ V.T ≈ A
    """

    _factors = ('U', 'S', 'V')

    @property
    def U(self) -> Matrix:
        return Matrix(self._result.params.U)

    @property
    def S(self) -> Matrix:
        return Matrix(np.diag(self._result.params.singular_values))

    @property
    def V(self) -> Matrix:
        return Matrix(self._result.params.V)

    @property
    def singular_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.singular_values.copy()

    @property
    def converged(self) -> bool:
        return self._result.info['converged']

    @property
    def iterations(self) -> int:
        return self._result.info['iterations']

    def __repr__(self) -> str:
        return (
            f"SVDSolution(n={len(self._result.params.singular_values)}, "
            f"method={self._result.info['method']!r}, converged={self.converged})"
        )
