"""
Solver dispatch for the direct factorization engine.

Provides lu() as the factorization entry point, plus inverse(), solve(),
det(), forward_substitution(), back_substitution(), adjugate(),
matrix_power() and permutation_matrix().
"""

from __future__ import annotations

from typing import Literal, Sequence
import warnings

import numpy as np
from numpy.typing import ArrayLike

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import COFACTOR_MAX_SIZE
from pymatrix.core.exceptions import DimensionError, SingularMatrixError
from pymatrix.core.matrix import Matrix, as_matrix
from pymatrix.core.numeric import floating_kind
from pymatrix.core.result import Result
from pymatrix.core.validation import check_choice, check_square
from pymatrix.direct._determinant import cofactor_determinant, lu_determinant
from pymatrix.direct._gauss_jordan import gauss_jordan_inverse
from pymatrix.direct._lu import doolittle, partial_pivot_lu
from pymatrix.direct import _substitution
from pymatrix.direct.solution import LUParams, LUSolution


Pivoting = Literal['none', 'partial']
InverseMethod = Literal['gauss_jordan', 'lu']
DetMethod = Literal['lu', 'householder', 'givens', 'gram_schmidt', 'cofactor']

_PIVOTING = ('none', 'partial')
_INVERSE_METHODS = ('gauss_jordan', 'lu')
_DET_METHODS = ('lu', 'householder', 'givens', 'gram_schmidt', 'cofactor')


def _floating_square(A: Matrix | ArrayLike, name: str = 'A') -> np.ndarray:
    """Validate squareness and return a private floating copy of the buffer."""
    A = as_matrix(A)
    check_square(A, name)
    return A.data.astype(floating_kind(A.kind).dtype)


def lu(
    A: Matrix | ArrayLike,
    *,
    pivoting: Pivoting = 'none',
) -> LUSolution:
    """
    LU decomposition of a square matrix.

    Parameters
    ----------
    A : Matrix or array-like
        Square matrix. Integer kinds are factored in float64.
    pivoting : str
        'none' (default): A = LU by Doolittle elimination; raises
        SingularMatrixError on an exact-zero pivot.
        'partial': PA = LU with row exchanges; never fails, singular
        input leaves a zero on U's diagonal.

    Returns
    -------
    LUSolution unpacking as (L, U), with P, permutation and determinant.
    """
    check_choice(pivoting, _PIVOTING, 'pivoting')
    work = _floating_square(A)
    n = work.shape[0]

    timer = Timer()
    timer.start()
    with timer.section('factorization'):
        if pivoting == 'none':
            L, U = doolittle(work)
            perm = np.arange(n)
            n_swaps = 0
        else:
            plu = partial_pivot_lu(work)
            L, U, perm, n_swaps = plu.L, plu.U, plu.permutation, plu.n_swaps
    timer.stop()

    result = Result(
        params=LUParams(L=L, U=U, permutation=perm, n_swaps=n_swaps, pivoting=pivoting),
        info={'method': 'lu', 'pivoting': pivoting, 'n': n, 'n_swaps': n_swaps},
        timing=timer.result(),
        backend_name='cpu_lu',
    )
    return LUSolution(_result=result)


def inverse(
    A: Matrix | ArrayLike,
    *,
    method: InverseMethod = 'gauss_jordan',
) -> Matrix:
    """
    Inverse of a square matrix.

    Parameters
    ----------
    A : Matrix or array-like
        Square matrix.
    method : str
        'gauss_jordan' (default): row reduction of [A | I] with partial
        pivoting. 'lu': pivoted LU, then one forward/back solve per
        column of the identity.

    Raises
    ------
    NotSquareError
        If A is not square.
    SingularMatrixError
        If an exact-zero pivot is met.
    """
    check_choice(method, _INVERSE_METHODS, 'method')
    if method == 'gauss_jordan':
        return Matrix._wrap(gauss_jordan_inverse(_floating_square(A)))

    sol = lu(A, pivoting='partial')
    n = sol.params.L.shape[0]
    return sol.solve(np.eye(n, dtype=sol.params.L.dtype))


def solve(A: Matrix | ArrayLike, b: Matrix | ArrayLike) -> Matrix:
    """
    Solve A x = b through a pivoted LU factorization.

    b may be a vector of length n or an (n, k) matrix; x is returned as
    an (n, 1) or (n, k) Matrix.
    """
    return lu(A, pivoting='partial').solve(b)


def _triangular_operands(T: Matrix | ArrayLike, b: Matrix | ArrayLike, name: str):
    T = as_matrix(T)
    check_square(T, name)
    rhs = np.asarray(b.data if isinstance(b, Matrix) else b)
    if rhs.ndim == 1:
        rhs = rhs.reshape(-1, 1)
    if rhs.ndim != 2 or rhs.shape[0] != T.rows:
        raise DimensionError(
            f"b: expected {T.rows} rows to match {name} {T.shape}, got shape {rhs.shape}"
        )
    dtype = floating_kind(T.kind).dtype
    return T.data.astype(dtype), rhs.astype(dtype)


def forward_substitution(L: Matrix | ArrayLike, b: Matrix | ArrayLike) -> Matrix:
    """
    Solve L x = b for lower triangular L.

    The strictly upper part of L is ignored, not verified.

    Raises
    ------
    SingularMatrixError
        If L has a zero diagonal entry.
    """
    Ld, rhs = _triangular_operands(L, b, 'L')
    return Matrix._wrap(_substitution.forward_substitution(Ld, rhs))


def back_substitution(U: Matrix | ArrayLike, b: Matrix | ArrayLike) -> Matrix:
    """
    Solve U x = b for upper triangular U.

    The strictly lower part of U is ignored, not verified.

    Raises
    ------
    SingularMatrixError
        If U has a zero diagonal entry.
    """
    Ud, rhs = _triangular_operands(U, b, 'U')
    return Matrix._wrap(_substitution.back_substitution(Ud, rhs))


def det(A: Matrix | ArrayLike, *, method: DetMethod = 'lu') -> float:
    """
    Determinant of a square matrix.

    Parameters
    ----------
    A : Matrix or array-like
        Square matrix.
    method : str
        'lu' (default): signed product of U's diagonal from PA = LU.
        'householder', 'givens', 'gram_schmidt': det(Q) times the
        product of R's diagonal from the corresponding QR.
        'cofactor': recursive cofactor expansion, O(n!); warns for
        matrices larger than COFACTOR_MAX_SIZE.
    """
    check_choice(method, _DET_METHODS, 'method')
    work = _floating_square(A)

    if work.shape[0] == 0:
        return 1.0

    if method == 'lu':
        plu = partial_pivot_lu(work)
        return lu_determinant(plu.U, plu.n_swaps)

    if method == 'cofactor':
        n = work.shape[0]
        if n > COFACTOR_MAX_SIZE:
            warnings.warn(
                f"Cofactor expansion on a {n}x{n} matrix costs O(n!); "
                f"use method='lu'.",
                RuntimeWarning,
                stacklevel=2,
            )
        return cofactor_determinant(work)

    from pymatrix.orthogonal.solvers import qr
    try:
        return qr(Matrix._wrap(work), method=method).determinant
    except SingularMatrixError:
        if method != 'gram_schmidt':
            raise
        # Gram-Schmidt met an exactly dependent column
        return 0.0


def permutation_matrix(perm: Sequence[int]) -> Matrix:
    """Permutation matrix P with (P @ A)[i] = A[perm[i]]."""
    return Matrix.permutation(perm)


def adjugate(A: Matrix | ArrayLike) -> Matrix:
    """
    Adjugate (classical adjoint): transpose of the cofactor matrix.

    Each cofactor is the signed LU determinant of the corresponding
    minor, so singular matrices are handled too; A @ adj(A) = det(A) I.
    """
    work = _floating_square(A)
    n = work.shape[0]
    if n == 1:
        return Matrix._wrap(np.ones((1, 1), dtype=work.dtype))

    cof = np.empty_like(work)
    for i in range(n):
        for j in range(n):
            minor = np.delete(np.delete(work, i, axis=0), j, axis=1)
            plu = partial_pivot_lu(minor)
            sign = -1.0 if (i + j) % 2 else 1.0
            cof[i, j] = sign * lu_determinant(plu.U, plu.n_swaps)
    return Matrix._wrap(cof.T.copy())


def matrix_power(A: Matrix | ArrayLike, k: int) -> Matrix:
    """
    Integer power A^k by binary exponentiation.

    k = 0 gives the identity of A's kind; negative k raises the inverse
    (Gauss-Jordan) to -k.

    Raises
    ------
    NotSquareError
        If A is not square.
    SingularMatrixError
        If k < 0 and A is singular.
    """
    A = as_matrix(A)
    check_square(A, 'A')
    if k < 0:
        base = inverse(A)
        k = -k
    else:
        base = A.copy()

    result = Matrix.identity(A.rows, dtype=base.dtype)
    while k > 0:
        if k & 1:
            result = result @ base
        base = base @ base
        k >>= 1
    return result
