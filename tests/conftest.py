"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def square_matrix(rng):
    """Well-conditioned 6x6 matrix (diagonally dominant)."""
    n = 6
    A = rng.standard_normal((n, n))
    return A + n * np.eye(n)


@pytest.fixture
def spd_matrix(rng):
    """Symmetric positive definite 5x5 matrix."""
    n = 5
    X = rng.standard_normal((n, n))
    return X @ X.T + n * np.eye(n)


@pytest.fixture
def symmetric_matrix(rng):
    """Symmetric 5x5 matrix with well separated eigenvalues."""
    Q, _ = np.linalg.qr(rng.standard_normal((5, 5)))
    w = np.array([-3.0, -1.0, 0.5, 2.0, 6.0])
    return Q @ np.diag(w) @ Q.T


@pytest.fixture
def spaced_matrix(rng):
    """5x5 matrix with singular values 8, 4, 2, 1, 0.5."""
    U, _ = np.linalg.qr(rng.standard_normal((5, 5)))
    V, _ = np.linalg.qr(rng.standard_normal((5, 5)))
    return U @ np.diag([8.0, 4.0, 2.0, 1.0, 0.5]) @ V.T
