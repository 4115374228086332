"""
Tests for Cholesky factorization.

Validates:
    - Documented scenario [[4,2],[2,3]]
    - L L' = A and agreement with numpy.linalg.cholesky
    - NotPositiveDefiniteError for asymmetric, indefinite and singular input
    - solve, determinant, is_positive_definite
"""

import numpy as np
import pytest

from pymatrix import Matrix, cholesky, is_positive_definite
from pymatrix.core.exceptions import NotPositiveDefiniteError, NotSquareError


class TestCholesky:

    def test_documented_scenario(self):
        (L,) = cholesky(Matrix([[4, 2], [2, 3]]))
        np.testing.assert_allclose(L.to_numpy(), [[2.0, 0.0], [1.0, np.sqrt(2.0)]])
        np.testing.assert_allclose((L @ L.T).to_numpy(), [[4.0, 2.0], [2.0, 3.0]])

    def test_matches_numpy(self, spd_matrix):
        L = cholesky(spd_matrix).L
        np.testing.assert_allclose(L.to_numpy(), np.linalg.cholesky(spd_matrix), atol=1e-12)
        assert L.is_lower_triangular(atol=0.0)
        assert np.all(L.diag() > 0)

    def test_identity(self):
        assert cholesky(Matrix.identity(4)).L.is_identity()

    def test_float32_kept(self):
        L = cholesky(np.array([[4.0, 2.0], [2.0, 3.0]], dtype=np.float32)).L
        assert L.dtype == np.float32


class TestCholeskyErrors:

    def test_indefinite(self):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            cholesky([[1.0, 2.0], [2.0, 1.0]])
        assert exc_info.value.pivot_index == 1
        assert exc_info.value.pivot_value == pytest.approx(-3.0)

    def test_negative_first_pivot(self):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            cholesky([[-1.0, 0.0], [0.0, 1.0]])
        assert exc_info.value.pivot_index == 0

    def test_singular_semidefinite(self):
        with pytest.raises(NotPositiveDefiniteError):
            cholesky([[1.0, 1.0], [1.0, 1.0]])

    def test_asymmetric(self):
        with pytest.raises(NotPositiveDefiniteError, match="symmetric"):
            cholesky([[4.0, 1.0], [2.0, 3.0]])

    def test_symmetry_tolerance(self):
        A = [[4.0, 2.0], [2.0 + 1e-6, 3.0]]
        with pytest.raises(NotPositiveDefiniteError):
            cholesky(A)
        cholesky(A, symmetry_atol=1e-5)

    def test_not_square(self):
        with pytest.raises(NotSquareError):
            cholesky(np.ones((2, 3)))


class TestCholeskySolution:

    def test_solve(self, spd_matrix, rng):
        b = rng.standard_normal(5)
        x = cholesky(spd_matrix).solve(b)
        np.testing.assert_allclose(x.to_numpy().ravel(), np.linalg.solve(spd_matrix, b))

    def test_determinant(self, spd_matrix):
        assert cholesky(spd_matrix).determinant == pytest.approx(np.linalg.det(spd_matrix))

    def test_envelope(self, spd_matrix):
        sol = cholesky(spd_matrix)
        assert len(sol) == 1
        assert sol.backend_name == 'cpu_cholesky'
        assert sol.info['n'] == 5

    def test_input_not_modified(self, spd_matrix):
        A = Matrix(spd_matrix)
        before = A.copy()
        cholesky(A)
        assert A == before


class TestIsPositiveDefinite:

    def test_spd(self, spd_matrix):
        assert is_positive_definite(spd_matrix)

    @pytest.mark.parametrize("A", [
        [[1.0, 2.0], [2.0, 1.0]],
        [[4.0, 1.0], [2.0, 3.0]],
        [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
    ])
    def test_not_pd(self, A):
        assert not is_positive_definite(A)
