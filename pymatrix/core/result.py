"""
Generic result container for all PyMatrix factorizations.

The Result class provides a standardized envelope that every engine's
result uses. This enables shared tooling for timing, diagnostics and
reproducibility while allowing each engine to define its own payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, converged, iterations)
    - timing is optional (don't burden unit tests)
    - provenance records library versions for reproducibility
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any, ClassVar, Iterator

import numpy as np

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Version metadata attached to every result."""
    from pymatrix import __version__

    return {
        'pymatrix_version': __version__,
        'numpy_version': np.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for matrix computations.

    Type Parameters:
        P: The engine-specific parameter payload type

    Attributes:
        params: Engine-specific payload (factors, eigenvalues, etc.)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the kernel that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions used to produce the result

    Examples:
        >>> # Direct method (no convergence notion)
        >>> Result(
        ...     params=LUParams(L=L, U=U, permutation=perm, n_swaps=0),
        ...     info={'method': 'lu', 'pivoting': 'none'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_lu'
        ... )

        >>> # Iterative method
        >>> Result(
        ...     params=EigenParams(eigenvalues=w, eigenvectors=V),
        ...     info={'method': 'jacobi', 'converged': True, 'iterations': 23},
        ...     timing={'total_seconds': 0.5},
        ...     backend_name='cpu_jacobi'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)


@dataclass
class Solution(Generic[P]):
    """
    User-facing wrapper around Result[P].

    Subclasses name their factors in ``_factors``; the solution then
    unpacks as that fixed-length sequence (``L, U = lu(A)``) while also
    exposing the factors and the envelope metadata by name.
    """
    _result: Result[P]

    _factors: ClassVar[tuple[str, ...]] = ()

    def __iter__(self) -> Iterator[Any]:
        return (getattr(self, name) for name in self._factors)

    def __len__(self) -> int:
        return len(self._factors)

    def __getitem__(self, index: int) -> Any:
        return getattr(self, self._factors[index])

    @property
    def params(self) -> P:
        return self._result.params

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings
