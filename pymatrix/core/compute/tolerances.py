"""
Tolerance tiers and algorithm defaults.

Defines precision expectations for the element kinds PyMatrix supports,
and the default convergence and rank thresholds used by the iterative
and spectral algorithms:
- FP64: double precision
- FP32: single precision (also used for float16 buffers)
- EXACT: integer kinds, compared exactly

Used by approximate predicates (is_identity, is_orthogonal, ...), by
the test suite, and as keyword defaults throughout the engines.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Absolute and relative tolerance pair for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    name='fp64',
    description='double precision',
)

FP32 = ToleranceTier(
    rtol=1e-5,
    atol=1e-5,
    name='fp32',
    description='single precision',
)

EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='integer kinds, exact comparison',
)

# Off-diagonal Frobenius norm below which Jacobi / QR iterations stop.
DEFAULT_TOLERANCE = 1e-10

# Iteration cap for Jacobi, the QR algorithm and the SVD iteration.
DEFAULT_MAX_ITERATIONS = 1000

# Singular values at or below this count as zero for rank / pseudoinverse.
RANK_TOLERANCE = 1e-10

# Strassen falls back to the naive product at or below this size.
STRASSEN_THRESHOLD = 32

# Cofactor expansion is O(n!); beyond this size it warns.
COFACTOR_MAX_SIZE = 8


def select_tolerance(dtype: np.dtype | type) -> ToleranceTier:
    """Select the tolerance tier appropriate for an element dtype."""
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.integer):
        return EXACT
    if dtype.itemsize <= 4:
        return FP32
    return FP64
