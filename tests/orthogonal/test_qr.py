"""
Tests for the three QR variants.

Validates:
    - Q R = A and Q' Q = I for every variant
    - |diag(R)| agrees across variants and with numpy.linalg.qr
    - Non-square input rejected by qr(); tall systems via least_squares()
    - Gram-Schmidt on dependent columns raises SingularMatrixError
    - Rank, determinant, solve and the solution envelope
"""

import numpy as np
import pytest

from pymatrix import (
    Matrix,
    givens_qr,
    gram_schmidt_qr,
    householder_qr,
    least_squares,
    qr,
)
from pymatrix.core.exceptions import (
    DimensionError,
    NotSquareError,
    SingularMatrixError,
    ValidationError,
)
from pymatrix.core.numeric import kind_of
from pymatrix.orthogonal import QRSolution
from pymatrix.orthogonal._gram_schmidt import gram_schmidt_qr as _gram_schmidt_kernel


METHODS = ["householder", "givens", "gram_schmidt"]


# ═══════════════════════════════════════════════════════════════════════
# Factorization properties
# ═══════════════════════════════════════════════════════════════════════


class TestFactorization:

    @pytest.mark.parametrize("method", METHODS)
    def test_reconstructs(self, rng, method):
        A = rng.standard_normal((6, 6))
        Q, R = qr(A, method=method)
        np.testing.assert_allclose((Q @ R).to_numpy(), A, atol=1e-12)

    @pytest.mark.parametrize("method", METHODS)
    def test_q_orthonormal(self, rng, method):
        A = rng.standard_normal((6, 6))
        Q, _ = qr(A, method=method)
        np.testing.assert_allclose((Q.T @ Q).to_numpy(), np.eye(6), atol=1e-12)

    @pytest.mark.parametrize("method", METHODS)
    def test_r_upper_triangular(self, rng, method):
        _, R = qr(rng.standard_normal((5, 5)), method=method)
        assert R.is_upper_triangular(atol=0.0)

    def test_diagonal_agrees_across_variants(self, rng):
        A = rng.standard_normal((5, 5))
        expected = np.abs(np.diag(np.linalg.qr(A)[1]))
        for method in METHODS:
            _, R = qr(A, method=method)
            np.testing.assert_allclose(np.abs(R.diag()), expected, rtol=1e-10)

    def test_gram_schmidt_positive_diagonal(self, rng):
        _, R = gram_schmidt_qr(rng.standard_normal((4, 4)))
        assert np.all(R.diag() > 0)

    @pytest.mark.parametrize("method", METHODS)
    def test_identity_scenario(self, method):
        Q, R = qr(Matrix.identity(3), method=method)
        assert Q.is_orthogonal()
        np.testing.assert_allclose(np.abs(R.diag()), np.ones(3))

    def test_named_shortcuts(self, rng):
        A = rng.standard_normal((3, 3))
        assert householder_qr(A).method == 'householder'
        assert givens_qr(A).method == 'givens'
        assert gram_schmidt_qr(A).method == 'gram_schmidt'

    def test_integer_input(self):
        Q, R = qr([[3, 1], [4, 2]])
        assert Q.dtype == np.float64
        np.testing.assert_allclose((Q @ R).to_numpy(), [[3, 1], [4, 2]], atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Shapes
# ═══════════════════════════════════════════════════════════════════════


class TestShapes:

    @pytest.mark.parametrize("method", METHODS)
    @pytest.mark.parametrize("shape", [(3, 2), (2, 3)])
    def test_non_square_rejected(self, method, shape):
        with pytest.raises(NotSquareError):
            qr(np.ones(shape), method=method)

    def test_shortcuts_reject_non_square(self):
        for fn in (householder_qr, givens_qr, gram_schmidt_qr):
            with pytest.raises(NotSquareError):
                fn(np.ones((4, 2)))

    def test_unknown_method(self):
        with pytest.raises(ValidationError, match="method"):
            qr(np.eye(2), method='lapack')


# ═══════════════════════════════════════════════════════════════════════
# Least squares
# ═══════════════════════════════════════════════════════════════════════


class TestLeastSquares:

    @pytest.mark.parametrize("method", METHODS)
    def test_matches_lstsq(self, rng, method):
        A = rng.standard_normal((8, 3))
        b = rng.standard_normal(8)
        x = least_squares(A, b, method=method)
        expected = np.linalg.lstsq(A, b, rcond=None)[0]
        assert x.shape == (3, 1)
        np.testing.assert_allclose(x.to_numpy().ravel(), expected, atol=1e-10)

    def test_square_is_exact(self, square_matrix, rng):
        b = rng.standard_normal(6)
        x = least_squares(square_matrix, b)
        np.testing.assert_allclose(x.to_numpy().ravel(), np.linalg.solve(square_matrix, b))

    def test_multiple_right_hand_sides(self, rng):
        A = rng.standard_normal((6, 2))
        B = rng.standard_normal((6, 3))
        X = least_squares(A, B, method='givens')
        np.testing.assert_allclose(X.to_numpy(), np.linalg.lstsq(A, B, rcond=None)[0], atol=1e-10)

    def test_wide_rejected(self):
        with pytest.raises(DimensionError, match="rows >= cols"):
            least_squares(np.ones((2, 3)), np.ones(2))

    def test_rhs_rows_checked(self, rng):
        with pytest.raises(DimensionError, match="expected 5 rows"):
            least_squares(rng.standard_normal((5, 2)), np.ones(4))

    def test_rank_deficient(self):
        A = [[1.0, 0.0], [2.0, 0.0], [3.0, 0.0]]
        for method in METHODS:
            with pytest.raises(SingularMatrixError):
                least_squares(A, [1.0, 2.0, 3.0], method=method)


# ═══════════════════════════════════════════════════════════════════════
# Rank deficiency
# ═══════════════════════════════════════════════════════════════════════


class TestRankDeficient:

    def test_gram_schmidt_zero_column(self):
        A = [[1.0, 0.0], [1.0, 0.0]]
        with pytest.raises(SingularMatrixError) as exc_info:
            gram_schmidt_qr(A)
        assert exc_info.value.pivot_index == 1
        assert exc_info.value.expected_rank == 2

    def test_gram_schmidt_completes_dependent_column(self):
        A = np.array([[1.0, 0.0, 2.0], [1.0, 0.0, 2.0], [0.0, 3.0, 0.0]])
        Q, R = _gram_schmidt_kernel(A, kind_of(np.float64), complete=True)
        np.testing.assert_allclose(Q.T @ Q, np.eye(3), atol=1e-12)
        np.testing.assert_allclose(Q @ R, A, atol=1e-12)
        assert R[1, 1] == pytest.approx(3.0)
        assert R[2, 2] == 0.0

    @pytest.mark.parametrize("method", ["householder", "givens"])
    def test_reflections_handle_dependent_columns(self, method):
        A = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 1.0, 1.0]])
        sol = qr(A, method=method)
        np.testing.assert_allclose((sol.Q @ sol.R).to_numpy(), A, atol=1e-12)

    @pytest.mark.parametrize("method", ["householder", "givens"])
    def test_rank_with_zero_column(self, method):
        A = [[2.0, 0.0, 1.0], [1.0, 0.0, 3.0], [4.0, 0.0, 1.0]]
        sol = qr(A, method=method)
        assert sol.rank == 2
        assert sol.determinant == 0.0

    def test_full_rank(self, rng):
        assert qr(rng.standard_normal((5, 5))).rank == 5


# ═══════════════════════════════════════════════════════════════════════
# Solution envelope
# ═══════════════════════════════════════════════════════════════════════


class TestQRSolution:

    @pytest.mark.parametrize("method", METHODS)
    def test_determinant(self, rng, method):
        A = rng.standard_normal((4, 4))
        assert qr(A, method=method).determinant == pytest.approx(np.linalg.det(A), rel=1e-10)

    @pytest.mark.parametrize("method", METHODS)
    def test_solve(self, square_matrix, rng, method):
        b = rng.standard_normal(6)
        x = qr(square_matrix, method=method).solve(b)
        np.testing.assert_allclose(x.to_numpy().ravel(), np.linalg.solve(square_matrix, b))

    def test_envelope(self, rng):
        sol = qr(rng.standard_normal((3, 3)), method='givens')
        assert isinstance(sol, QRSolution)
        assert sol.backend_name == 'cpu_givens'
        assert sol.info['method'] == 'givens'
        assert 'factorization' in sol.timing
        assert 'method=' in repr(sol)

    def test_householder_counts_reflections(self):
        sol = householder_qr(Matrix.identity(3))
        assert sol.info['n_reflections'] == 0

    @pytest.mark.parametrize("method", METHODS)
    def test_input_not_modified(self, square_matrix, method):
        A = Matrix(square_matrix)
        before = A.copy()
        qr(A, method=method)
        assert A == before
