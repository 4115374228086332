"""
Shared compute infrastructure for PyMatrix.

IMPORTANT: This is NOT where the factorization algorithms live. Those go
in their engine packages (direct, orthogonal, spectral, fastmul). This
module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers and algorithm defaults
"""

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import (
    ToleranceTier,
    FP64,
    FP32,
    EXACT,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "FP64",
    "FP32",
    "EXACT",
    "select_tolerance",
]
