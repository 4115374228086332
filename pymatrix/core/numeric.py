"""
Numeric kernel: scalar and elementwise arithmetic per element kind.

Every Matrix buffer has a NumPy dtype, and every dtype the library
accepts is registered here as an ElementKind carrying its identities and
its arithmetic. Resolution happens once, when a buffer is wrapped, so
algorithms never test element types at run time; an unregistered dtype
fails immediately with UnsupportedElementTypeError.

Registered by default:
    signed integers: int8, int16, int32, int64
    floating point:  float16, float32, float64, longdouble

Integer division is floor division (Python semantics) and integer sqrt
is the integer Newton iteration (math.isqrt). Division by zero raises
SingularMatrixError and sqrt of a negative value raises NumericalError
for every kind, rather than propagating inf/NaN.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike

from pymatrix.core.exceptions import (
    NumericalError,
    SingularMatrixError,
    UnsupportedElementTypeError,
    ValidationError,
)


@runtime_checkable
class NumericKernel(Protocol):
    """
    Arithmetic contract an element kind must satisfy.

    Operands may be scalars or arrays of the kind; results are always of
    the kind's dtype.
    """

    @property
    def zero(self) -> Any:
        """Additive identity."""
        ...

    @property
    def one(self) -> Any:
        """Multiplicative identity."""
        ...

    def add(self, a: ArrayLike, b: ArrayLike) -> Any: ...

    def subtract(self, a: ArrayLike, b: ArrayLike) -> Any: ...

    def multiply(self, a: ArrayLike, b: ArrayLike) -> Any: ...

    def divide(self, a: ArrayLike, b: ArrayLike) -> Any: ...

    def negate(self, a: ArrayLike) -> Any: ...

    def sqrt(self, a: ArrayLike) -> Any: ...


@dataclass(frozen=True)
class ElementKind:
    """
    A registered element kind and its arithmetic.

    Attributes:
        dtype: NumPy dtype of the kind
        name: Short identifier ('int32', 'float64', ...)
        is_integer: True for integer kinds
    """
    dtype: np.dtype
    name: str
    is_integer: bool

    @property
    def zero(self) -> Any:
        return self.dtype.type(0)

    @property
    def one(self) -> Any:
        return self.dtype.type(1)

    def _cast(self, value: Any) -> Any:
        out = np.asarray(value).astype(self.dtype, copy=False)
        return out[()] if out.ndim == 0 else out

    def add(self, a: ArrayLike, b: ArrayLike) -> Any:
        return self._cast(np.add(a, b))

    def subtract(self, a: ArrayLike, b: ArrayLike) -> Any:
        return self._cast(np.subtract(a, b))

    def multiply(self, a: ArrayLike, b: ArrayLike) -> Any:
        return self._cast(np.multiply(a, b))

    def divide(self, a: ArrayLike, b: ArrayLike) -> Any:
        """
        Divide a by b.

        Raises:
            SingularMatrixError: If any divisor is exactly zero
        """
        if np.any(np.asarray(b) == 0):
            raise SingularMatrixError(
                f"Division by zero in {self.name} arithmetic"
            )
        if self.is_integer:
            return self._cast(np.floor_divide(a, b))
        return self._cast(np.true_divide(a, b))

    def negate(self, a: ArrayLike) -> Any:
        return self._cast(np.negative(a))

    def sqrt(self, a: ArrayLike) -> Any:
        """
        Non-negative square root.

        Raises:
            NumericalError: If any argument is negative
        """
        arr = np.asarray(a)
        if np.any(arr < 0):
            raise NumericalError(
                f"Square root of negative value in {self.name} arithmetic"
            )
        if self.is_integer:
            roots = [math.isqrt(int(v)) for v in arr.ravel()]
            return self._cast(np.array(roots).reshape(arr.shape))
        return self._cast(np.sqrt(arr))


_REGISTRY: dict[np.dtype, ElementKind] = {}


def register_kind(dtype: np.dtype | type | str) -> ElementKind:
    """
    Register a NumPy real dtype as an element kind.

    Registering an already registered dtype returns the existing kind.

    Raises:
        ValidationError: If dtype is not a real integer or floating dtype
    """
    dtype = np.dtype(dtype)
    existing = _REGISTRY.get(dtype)
    if existing is not None:
        return existing

    if not (np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)):
        raise ValidationError(
            f"Only real integer or floating dtypes can be registered, got {dtype}"
        )

    kind = ElementKind(
        dtype=dtype,
        name=dtype.name,
        is_integer=bool(np.issubdtype(dtype, np.integer)),
    )
    _REGISTRY[dtype] = kind
    return kind


for _dtype in (np.int8, np.int16, np.int32, np.int64,
               np.float16, np.float32, np.float64, np.longdouble):
    register_kind(_dtype)


def kind_of(obj: Any) -> ElementKind:
    """
    Resolve the element kind of a dtype, type, array or Matrix.

    Raises:
        UnsupportedElementTypeError: If the kind has no registered arithmetic
    """
    dtype = obj.dtype if hasattr(obj, 'dtype') else obj
    try:
        dtype = np.dtype(dtype)
    except TypeError as e:
        raise UnsupportedElementTypeError(
            f"Cannot interpret {dtype!r} as an element type: {e}", dtype=dtype
        ) from e

    kind = _REGISTRY.get(dtype)
    if kind is None:
        raise UnsupportedElementTypeError(
            f"No arithmetic registered for element type {dtype}. "
            f"Supported: {', '.join(supported_kinds())}",
            dtype=dtype,
        )
    return kind


def supported_kinds() -> tuple[str, ...]:
    """Names of all registered element kinds."""
    return tuple(sorted({k.name for k in _REGISTRY.values()}))


def floating_kind(kind: ElementKind) -> ElementKind:
    """
    Kind in which factorizations of the given kind are carried out.

    Integers promote to float64, float16 to float32; other floating
    kinds are kept.
    """
    if kind.is_integer:
        return kind_of(np.float64)
    if kind.dtype.itemsize < 4:
        return kind_of(np.float32)
    return kind
