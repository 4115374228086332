"""
Convergence measures shared by the iterative spectral kernels.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class IterationState:
    """
    Final state of an iterative kernel.

    Attributes:
        iterations: Number of sweeps/rotations performed
        off_norm: Convergence measure after the last iteration
        converged: True if off_norm fell below the tolerance
    """
    iterations: int
    off_norm: float
    converged: bool


def off_diagonal_norm(A: NDArray) -> float:
    """Frobenius norm of A with its diagonal removed."""
    off = A - np.diag(np.diag(A))
    return float(np.sqrt(np.sum(off * off)))


def strictly_lower_norm(A: NDArray) -> float:
    """Frobenius norm of the strictly lower triangle of A."""
    low = np.tril(A, k=-1)
    return float(np.sqrt(np.sum(low * low)))
