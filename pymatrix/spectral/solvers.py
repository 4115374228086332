"""
Solver dispatch for the spectral engine.

Eigen decompositions (Jacobi, QR algorithm), the QR-iteration SVD and
the diagnostics derived from singular values: rank, condition number,
pseudoinverse, is_singular and is_full_rank.
"""

from __future__ import annotations

from typing import Any, Literal
import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    RANK_TOLERANCE,
    select_tolerance,
)
from pymatrix.core.exceptions import ConvergenceError
from pymatrix.core.matrix import Matrix, as_matrix
from pymatrix.core.numeric import ElementKind, floating_kind
from pymatrix.core.result import Result
from pymatrix.core.validation import (
    check_choice,
    check_finite,
    check_positive,
    check_square,
    check_symmetric,
)
from pymatrix.orthogonal._givens import givens_qr
from pymatrix.orthogonal._gram_schmidt import gram_schmidt_qr
from pymatrix.orthogonal._householder import householder_qr
from pymatrix.spectral._iteration import IterationState
from pymatrix.spectral._jacobi import jacobi_rotations
from pymatrix.spectral._qr_algorithm import QRFactor, qr_iteration, qr_single_step
from pymatrix.spectral._svd import svd_qr_iteration
from pymatrix.spectral.solution import (
    EigenParams,
    EigenSolution,
    SVDParams,
    SVDSolution,
)


QRMethod = Literal['householder', 'givens', 'gram_schmidt']
EigenMethod = Literal['jacobi', 'qr']

_QR_METHODS = ('householder', 'givens', 'gram_schmidt')
_EIGEN_METHODS = ('jacobi', 'qr')


def _qr_factor(method: str, kind: ElementKind) -> QRFactor:
    if method == 'householder':
        return lambda M: householder_qr(M, kind)[:2]
    if method == 'givens':
        return givens_qr
    return lambda M: gram_schmidt_qr(M, kind, complete=True)


def _prepare(A: Matrix | ArrayLike, tol: float, max_iter: int) -> tuple[Matrix, ElementKind, NDArray]:
    A = as_matrix(A)
    check_square(A, 'A')
    check_finite(A.data, 'A')
    check_positive(tol, 'tol')
    check_positive(max_iter, 'max_iter')
    kind = floating_kind(A.kind)
    return A, kind, A.data.astype(kind.dtype)


def _report_convergence(
    state: IterationState,
    what: str,
    tol: float,
    strict: bool,
) -> tuple[str, ...]:
    """Warn (or raise when strict) if an iteration hit its cap."""
    if state.converged:
        return ()

    msg = (
        f"{what} did not converge after {state.iterations} iterations: "
        f"off-diagonal norm {state.off_norm:.3g} >= tol {tol:.3g}"
    )
    if strict:
        raise ConvergenceError(
            msg,
            iterations=state.iterations,
            final_change=state.off_norm,
            reason='max_iter',
            threshold=tol,
        )
    warnings.warn(msg, RuntimeWarning, stacklevel=3)
    return (msg,)


def _eigen_result(
    w: NDArray,
    vectors_as_columns: NDArray,
    state: IterationState,
    method: str,
    timer: Timer,
    backend: str,
    warns: tuple[str, ...],
    extra_info: dict[str, Any] | None = None,
) -> EigenSolution:
    order = np.argsort(w, kind='stable')
    rows = vectors_as_columns.T[order]
    norms = np.sqrt(np.sum(rows * rows, axis=1, keepdims=True))
    rows = rows / np.where(norms == 0, 1.0, norms)

    info = {
        'method': method,
        'converged': state.converged,
        'iterations': state.iterations,
        'off_norm': state.off_norm,
    }
    if extra_info:
        info.update(extra_info)

    result = Result(
        params=EigenParams(eigenvalues=w[order], eigenvectors=rows),
        info=info,
        timing=timer.result(),
        backend_name=backend,
        warnings=warns,
    )
    return EigenSolution(_result=result)


def jacobi_eigen(
    A: Matrix | ArrayLike,
    *,
    tol: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
    strict: bool = False,
    symmetry_atol: float | None = None,
) -> EigenSolution:
    """
    Eigen decomposition of a symmetric matrix by classical Jacobi rotations.

    Parameters
    ----------
    A : Matrix or array-like
        Square symmetric matrix.
    tol : float
        Convergence threshold on the off-diagonal Frobenius norm.
    max_iter : int
        Maximum number of rotations.
    strict : bool
        If True, raise ConvergenceError instead of warning when max_iter
        is reached.
    symmetry_atol : float, optional
        Absolute tolerance of the symmetry check. Defaults to the
        tolerance tier of A's kind.

    Returns
    -------
    EigenSolution unpacking as (eigenvalues, eigenvectors): eigenvalues
    ascending, eigenvectors as unit rows in matching order.

    Raises
    ------
    NotSquareError
        If A is not square.
    ValidationError
        If A is not symmetric.
    ConvergenceError
        If strict=True and the iteration cap is reached.
    """
    A, kind, work = _prepare(A, tol, max_iter)
    if symmetry_atol is None:
        symmetry_atol = select_tolerance(A.dtype).atol
    check_symmetric(A, 'A', symmetry_atol)

    timer = Timer()
    timer.start()
    with timer.section('rotations'):
        w, V, state = jacobi_rotations(work, tol, max_iter)
    timer.stop()

    warns = _report_convergence(state, 'Jacobi iteration', tol, strict)
    return _eigen_result(w, V, state, 'jacobi', timer, 'cpu_jacobi', warns)


def qr_eigenvalues(
    A: Matrix | ArrayLike,
    *,
    method: QRMethod = 'householder',
    tol: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
    strict: bool = False,
) -> EigenSolution:
    """
    Eigenvalues by the unshifted QR algorithm, iterated to convergence.

    Converges for matrices with real eigenvalues of distinct magnitude.
    The returned eigenvectors are the accumulated Q columns: exact
    eigenvectors for symmetric A, Schur vectors otherwise.

    Parameters
    ----------
    A : Matrix or array-like
        Square matrix.
    method : str
        QR variant used for each step: 'householder', 'givens' or
        'gram_schmidt'.
    tol : float
        Convergence threshold on the strictly lower Frobenius norm.
    max_iter : int
        Maximum number of QR steps.
    strict : bool
        If True, raise ConvergenceError instead of warning when max_iter
        is reached.
    """
    check_choice(method, _QR_METHODS, 'method')
    A, kind, work = _prepare(A, tol, max_iter)

    timer = Timer()
    timer.start()
    with timer.section('qr_iteration'):
        w, Q_acc, state = qr_iteration(work, _qr_factor(method, kind), tol, max_iter)
    timer.stop()

    warns = _report_convergence(state, 'QR algorithm', tol, strict)
    return _eigen_result(
        w, Q_acc, state, 'qr', timer, f'cpu_qr_{method}', warns,
        extra_info={'qr_method': method},
    )


def qr_step_eigenvalues(
    A: Matrix | ArrayLike,
    *,
    method: QRMethod = 'householder',
) -> NDArray[np.floating[Any]]:
    """
    One-step approximation: the diagonal of R Q for A = Q R, ascending.

    Only close to the eigenvalues when A is already nearly triangular;
    use qr_eigenvalues() for the converged values.
    """
    check_choice(method, _QR_METHODS, 'method')
    A = as_matrix(A)
    check_square(A, 'A')
    kind = floating_kind(A.kind)
    approx = qr_single_step(A.data.astype(kind.dtype), _qr_factor(method, kind))
    return np.sort(approx)


def eigenvalues(
    A: Matrix | ArrayLike,
    *,
    method: EigenMethod = 'jacobi',
    **kwargs: Any,
) -> NDArray[np.floating[Any]]:
    """Eigenvalues, ascending, by 'jacobi' (symmetric A) or 'qr'."""
    check_choice(method, _EIGEN_METHODS, 'method')
    if method == 'jacobi':
        return jacobi_eigen(A, **kwargs).eigenvalues
    return qr_eigenvalues(A, **kwargs).eigenvalues


def eigenvectors(
    A: Matrix | ArrayLike,
    *,
    method: EigenMethod = 'jacobi',
    **kwargs: Any,
) -> Matrix:
    """Unit eigenvectors as rows, ordered like eigenvalues()."""
    check_choice(method, _EIGEN_METHODS, 'method')
    if method == 'jacobi':
        return jacobi_eigen(A, **kwargs).eigenvectors
    return qr_eigenvalues(A, **kwargs).eigenvectors


def svd(
    A: Matrix | ArrayLike,
    *,
    method: QRMethod = 'householder',
    tol: float = DEFAULT_TOLERANCE,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
    strict: bool = False,
) -> SVDSolution:
    """
    Singular value decomposition A = U S V' by two-sided QR iteration.

    Parameters
    ----------
    A : Matrix or array-like
        Square matrix; not modified.
    method : str
        QR variant used for each half-step: 'householder' (default),
        'givens' or 'gram_schmidt'. Every variant handles rank-deficient
        input; Gram-Schmidt completes Q across dependent columns.
    tol : float
        Convergence threshold on the off-diagonal Frobenius norm of S.
    max_iter : int
        Maximum number of sweeps.
    strict : bool
        If True, raise ConvergenceError instead of warning when max_iter
        is reached.

    Returns
    -------
    SVDSolution unpacking as (U, S, V), singular values non-negative and
    sorted descending.
    """
    check_choice(method, _QR_METHODS, 'method')
    A, kind, work = _prepare(A, tol, max_iter)

    timer = Timer()
    timer.start()
    with timer.section('qr_iteration'):
        U, s, V, state = svd_qr_iteration(work, _qr_factor(method, kind), tol, max_iter)
    timer.stop()

    warns = _report_convergence(state, 'SVD iteration', tol, strict)
    result = Result(
        params=SVDParams(U=U, singular_values=s, V=V),
        info={
            'method': method,
            'converged': state.converged,
            'iterations': state.iterations,
            'off_norm': state.off_norm,
        },
        timing=timer.result(),
        backend_name=f'cpu_svd_{method}',
        warnings=warns,
    )
    return SVDSolution(_result=result)


def singular_values(
    A: Matrix | ArrayLike,
    *,
    method: QRMethod = 'householder',
) -> NDArray[np.floating[Any]]:
    """Singular values of A, non-negative and sorted descending."""
    return svd(A, method=method).singular_values


def rank(A: Matrix | ArrayLike, *, tol: float = RANK_TOLERANCE) -> int:
    """Numerical rank: the number of singular values greater than tol."""
    return int(np.sum(singular_values(A) > tol))


def condition_number(A: Matrix | ArrayLike) -> float:
    """2-norm condition number sigma_max / sigma_min; inf if sigma_min is 0."""
    s = singular_values(A)
    if len(s) == 0:
        return 1.0
    if s[-1] == 0:
        return float('inf')
    return float(s[0] / s[-1])


def pseudoinverse(A: Matrix | ArrayLike, *, tol: float = RANK_TOLERANCE) -> Matrix:
    """
    Moore-Penrose pseudoinverse V S+ U'.

    Singular values at or below tol are treated as zero.
    """
    sol = svd(A)
    p = sol.params
    s_inv = np.zeros_like(p.singular_values)
    keep = p.singular_values > tol
    s_inv[keep] = 1.0 / p.singular_values[keep]
    return Matrix._wrap((p.V * s_inv) @ p.U.T)


def is_singular(A: Matrix | ArrayLike, *, tol: float = RANK_TOLERANCE) -> bool:
    """True when the numerical rank of square A is below its size."""
    A = as_matrix(A)
    return rank(A, tol=tol) < A.rows


def is_full_rank(A: Matrix | ArrayLike, *, tol: float = RANK_TOLERANCE) -> bool:
    return not is_singular(A, tol=tol)
