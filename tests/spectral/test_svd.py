"""
Tests for the QR-iteration SVD and the diagnostics built on it.

Validates:
    - U S V' = A with orthogonal U, V for every QR variant
    - Singular values non-negative, descending, matching numpy.linalg.svd
    - rank / condition_number / pseudoinverse, including the documented
      singular scenario [[1,2],[2,4]]
    - Rank-deficient input factors under every QR variant
    - Non-convergence reporting and input purity
"""

import numpy as np
import pytest

from pymatrix import (
    Matrix,
    condition_number,
    is_full_rank,
    is_singular,
    pseudoinverse,
    rank,
    singular_values,
    svd,
)
from pymatrix.core.exceptions import ConvergenceError, NotSquareError, ValidationError
from pymatrix.spectral import SVDSolution


METHODS = ["householder", "givens", "gram_schmidt"]


# ═══════════════════════════════════════════════════════════════════════
# Decomposition
# ═══════════════════════════════════════════════════════════════════════


class TestSVD:

    @pytest.mark.parametrize("method", METHODS)
    def test_reconstructs(self, spaced_matrix, method):
        U, S, V = svd(spaced_matrix, method=method)
        np.testing.assert_allclose((U @ S @ V.T).to_numpy(), spaced_matrix, atol=1e-9)

    @pytest.mark.parametrize("method", METHODS)
    def test_orthogonal_factors(self, spaced_matrix, method):
        U, _, V = svd(spaced_matrix, method=method)
        assert U.is_orthogonal(atol=1e-9)
        assert V.is_orthogonal(atol=1e-9)

    @pytest.mark.parametrize("method", METHODS)
    def test_singular_values_match_numpy(self, spaced_matrix, method):
        s = svd(spaced_matrix, method=method).singular_values
        np.testing.assert_allclose(s, [8.0, 4.0, 2.0, 1.0, 0.5], rtol=1e-9)
        np.testing.assert_allclose(s, np.linalg.svd(spaced_matrix, compute_uv=False), rtol=1e-9)

    def test_sorted_non_negative(self, rng):
        s = singular_values(rng.standard_normal((5, 5)))
        assert np.all(s >= 0)
        assert np.all(np.diff(s) <= 0)

    def test_s_is_diagonal_matrix(self, rng):
        sol = svd(rng.standard_normal((3, 3)))
        assert sol.S.is_diagonal(atol=0.0)
        np.testing.assert_array_equal(sol.S.diag(), sol.singular_values)

    def test_identity(self):
        U, S, V = svd(Matrix.identity(3))
        assert S.is_identity()

    def test_symmetric_negative_definite(self):
        A = np.array([[-2.0, 0.0], [0.0, -5.0]])
        np.testing.assert_allclose(singular_values(A), [5.0, 2.0])

    def test_envelope(self, spaced_matrix):
        sol = svd(spaced_matrix, method='givens')
        assert isinstance(sol, SVDSolution)
        assert len(sol) == 3
        assert sol.converged
        assert sol.backend_name == 'cpu_svd_givens'
        assert 'qr_iteration' in sol.timing

    def test_not_square(self):
        with pytest.raises(NotSquareError):
            svd(np.ones((3, 2)))

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="1 Inf"):
            svd([[1.0, np.inf], [0.0, 1.0]])

    def test_iteration_cap(self, rng):
        A = rng.standard_normal((5, 5))
        with pytest.warns(RuntimeWarning, match="SVD iteration"):
            sol = svd(A, max_iter=1)
        assert not sol.converged
        with pytest.raises(ConvergenceError):
            svd(A, max_iter=1, strict=True)

    @pytest.mark.parametrize("method", METHODS)
    @pytest.mark.parametrize("A, expected_rank", [
        ([[1.0, 2.0], [2.0, 4.0]], 1),
        ([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]], 2),
    ])
    def test_rank_deficient(self, method, A, expected_rank):
        A = np.array(A)
        U, S, V = svd(A, method=method)
        s = S.diag()
        np.testing.assert_allclose((U @ S @ V.T).to_numpy(), A, atol=1e-9)
        assert U.is_orthogonal(atol=1e-9)
        assert V.is_orthogonal(atol=1e-9)
        np.testing.assert_allclose(s, np.linalg.svd(A, compute_uv=False), atol=1e-9)
        assert int(np.sum(s > 1e-10)) == expected_rank

    @pytest.mark.parametrize("method", METHODS)
    def test_input_not_modified(self, rng, method):
        A = Matrix(rng.standard_normal((4, 4)))
        before = A.copy()
        svd(A, method=method)
        assert A == before


# ═══════════════════════════════════════════════════════════════════════
# Derived diagnostics
# ═══════════════════════════════════════════════════════════════════════


class TestDiagnostics:

    def test_singular_scenario(self):
        A = Matrix([[1, 2], [2, 4]])
        assert rank(A) == 1
        assert condition_number(A) > 1e10
        assert is_singular(A)
        assert not is_full_rank(A)

    def test_full_rank(self, spaced_matrix):
        assert rank(spaced_matrix) == 5
        assert is_full_rank(spaced_matrix)

    def test_rank_deficient_3x3(self):
        A = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]]
        assert rank(A) == 2

    def test_zero_matrix(self):
        assert rank(np.zeros((3, 3))) == 0
        assert condition_number(np.zeros((3, 3))) == float('inf')

    def test_condition_number_matches_numpy(self, spaced_matrix):
        assert condition_number(spaced_matrix) == pytest.approx(16.0, rel=1e-8)
        assert condition_number(spaced_matrix) == pytest.approx(np.linalg.cond(spaced_matrix), rel=1e-8)

    def test_identity_condition(self):
        assert condition_number(Matrix.identity(4)) == pytest.approx(1.0)

    def test_pseudoinverse_of_invertible(self, spaced_matrix):
        np.testing.assert_allclose(pseudoinverse(spaced_matrix).to_numpy(),
                                   np.linalg.inv(spaced_matrix), atol=1e-8)

    def test_pseudoinverse_moore_penrose(self):
        A = np.array([[1.0, 2.0], [2.0, 4.0]])
        A_pinv = pseudoinverse(A).to_numpy()
        np.testing.assert_allclose(A @ A_pinv @ A, A, atol=1e-9)
        np.testing.assert_allclose(A_pinv @ A @ A_pinv, A_pinv, atol=1e-9)
        np.testing.assert_allclose(A_pinv, np.linalg.pinv(A), atol=1e-9)
