"""
Solver dispatch for the orthogonal factorization engine.

Provides qr() as the entry point for the three QR variants, the named
shortcuts householder_qr(), givens_qr() and gram_schmidt_qr(), the
least_squares() solver for tall systems, and cholesky() /
is_positive_definite().
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.exceptions import DimensionError, NotPositiveDefiniteError
from pymatrix.core.matrix import Matrix, as_matrix
from pymatrix.core.numeric import ElementKind, floating_kind
from pymatrix.core.result import Result
from pymatrix.core.validation import (
    check_choice,
    check_square,
    check_symmetric_for_cholesky,
)
from pymatrix.direct._lu import partial_pivot_lu
from pymatrix.direct._substitution import back_substitution
from pymatrix.orthogonal._cholesky import cholesky_lower
from pymatrix.orthogonal._givens import givens_qr as _givens_kernel
from pymatrix.orthogonal._gram_schmidt import gram_schmidt_qr as _gram_schmidt_kernel
from pymatrix.orthogonal._householder import householder_qr as _householder_kernel
from pymatrix.orthogonal.solution import (
    CholeskyParams,
    CholeskySolution,
    QRParams,
    QRSolution,
    _rhs,
)


QRMethod = Literal['householder', 'givens', 'gram_schmidt']

_QR_METHODS = ('householder', 'givens', 'gram_schmidt')


def _numerical_rank(R: NDArray, shape: tuple[int, int]) -> int:
    diag_R = np.abs(np.diag(R))
    if len(diag_R) == 0 or diag_R.max() == 0:
        return 0
    tol = max(shape) * np.finfo(R.dtype).eps * diag_R.max()
    return int(np.sum(diag_R > tol))


def _orthonormal_sign(Q: NDArray) -> float:
    """det(Q) of a square orthogonal Q, snapped to +1 or -1."""
    plu = partial_pivot_lu(Q)
    d = np.prod(np.diag(plu.U)) * (-1.0 if plu.n_swaps % 2 else 1.0)
    return 1.0 if d >= 0 else -1.0


def _factor(work: NDArray, method: str, kind: ElementKind) -> tuple[NDArray, NDArray, dict]:
    """Run one QR kernel; returns (Q, R, kernel-specific info)."""
    if method == 'householder':
        Q, R, n_reflections = _householder_kernel(work, kind)
        return Q, R, {'n_reflections': n_reflections}
    if method == 'givens':
        Q, R = _givens_kernel(work)
        return Q, R, {}
    Q, R = _gram_schmidt_kernel(work, kind)
    return Q, R, {}


def qr(
    A: Matrix | ArrayLike,
    *,
    method: QRMethod = 'householder',
) -> QRSolution:
    """
    QR decomposition A = QR of a square matrix.

    Parameters
    ----------
    A : Matrix or array-like
        Square matrix. Integer kinds are factored in float64.
    method : str
        'householder' (default): reflections.
        'givens': plane rotations.
        'gram_schmidt': modified Gram-Schmidt; R has a positive diagonal.

    Returns
    -------
    QRSolution unpacking as (Q, R), with rank and determinant.

    Raises
    ------
    NotSquareError
        If A is not square. Use least_squares() for tall systems.
    SingularMatrixError
        With method='gram_schmidt', if the columns of A are exactly
        linearly dependent.
    """
    check_choice(method, _QR_METHODS, 'method')
    A = as_matrix(A)
    check_square(A, 'A')
    kind = floating_kind(A.kind)
    work = A.data.astype(kind.dtype)

    timer = Timer()
    timer.start()
    with timer.section('factorization'):
        Q, R, info_extra = _factor(work, method, kind)
        if method == 'householder':
            q_det = -1.0 if info_extra['n_reflections'] % 2 else 1.0
        elif method == 'givens':
            q_det = 1.0
        else:
            q_det = _orthonormal_sign(Q)
    timer.stop()

    rank = _numerical_rank(R, A.shape)
    result = Result(
        params=QRParams(Q=Q, R=R, method=method, q_determinant=q_det, rank=rank),
        info={'method': method, 'n': A.rows, 'rank': rank, **info_extra},
        timing=timer.result(),
        backend_name=f'cpu_{method}',
    )
    return QRSolution(_result=result)


def least_squares(
    A: Matrix | ArrayLike,
    b: Matrix | ArrayLike,
    *,
    method: QRMethod = 'householder',
) -> Matrix:
    """
    Least squares solution of A x = b for m x n A with m >= n.

    Factors A = QR with the chosen variant and back-substitutes
    R[:n, :n] x = (Q' b)[:n]. Exact for square nonsingular A.

    Returns
    -------
    Matrix of shape (n, k) for b of shape (m, k); a vector b gives (n, 1).

    Raises
    ------
    DimensionError
        If A has fewer rows than columns, or b does not have m rows.
    SingularMatrixError
        If A is rank deficient.
    """
    check_choice(method, _QR_METHODS, 'method')
    A = as_matrix(A)
    m, n = A.shape
    if m < n:
        raise DimensionError(
            f"A: least squares requires rows >= cols, got shape ({m}, {n})"
        )
    kind = floating_kind(A.kind)
    Q, R, _ = _factor(A.data.astype(kind.dtype), method, kind)
    rhs = _rhs(b, m).astype(Q.dtype)
    Qtb = Q.T @ rhs
    return as_matrix(back_substitution(R[:n, :n], Qtb[:n]))


def householder_qr(A: Matrix | ArrayLike) -> QRSolution:
    """QR by Householder reflections. See qr()."""
    return qr(A, method='householder')


def givens_qr(A: Matrix | ArrayLike) -> QRSolution:
    """QR by Givens rotations. See qr()."""
    return qr(A, method='givens')


def gram_schmidt_qr(A: Matrix | ArrayLike) -> QRSolution:
    """QR by modified Gram-Schmidt. See qr()."""
    return qr(A, method='gram_schmidt')


def cholesky(
    A: Matrix | ArrayLike,
    *,
    symmetry_atol: float | None = None,
) -> CholeskySolution:
    """
    Cholesky factorization A = L L' of a symmetric positive definite matrix.

    Parameters
    ----------
    A : Matrix or array-like
        Square symmetric matrix.
    symmetry_atol : float, optional
        Absolute tolerance of the symmetry check. Defaults to the
        tolerance tier of A's kind.

    Returns
    -------
    CholeskySolution unpacking as (L,).

    Raises
    ------
    NotSquareError
        If A is not square.
    NotPositiveDefiniteError
        If A is not symmetric, or a pivot is not strictly positive.
    """
    A = as_matrix(A)
    check_square(A, 'A')
    if symmetry_atol is None:
        symmetry_atol = select_tolerance(A.dtype).atol
    check_symmetric_for_cholesky(A, 'A', symmetry_atol)

    kind = floating_kind(A.kind)
    work = A.data.astype(kind.dtype)

    timer = Timer()
    timer.start()
    with timer.section('factorization'):
        L = cholesky_lower(work, kind)
    timer.stop()

    result = Result(
        params=CholeskyParams(L=L),
        info={'method': 'cholesky', 'n': A.rows},
        timing=timer.result(),
        backend_name='cpu_cholesky',
    )
    return CholeskySolution(_result=result)


def is_positive_definite(A: Matrix | ArrayLike) -> bool:
    """True when A is square, symmetric and admits a Cholesky factorization."""
    A = as_matrix(A)
    if not A.is_square():
        return False
    try:
        cholesky(A)
    except NotPositiveDefiniteError:
        return False
    return True
