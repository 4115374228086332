"""
Tests for the numeric kernel registry.

Validates:
    - Default kinds are registered, unsupported kinds rejected
    - Arithmetic stays in the kind's dtype
    - Integer division floors, integer sqrt is exact
    - Division by zero and sqrt of negatives raise
    - Floating promotion used by factorizations
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    NumericalError,
    SingularMatrixError,
    UnsupportedElementTypeError,
    ValidationError,
)
from pymatrix.core.numeric import (
    ElementKind,
    NumericKernel,
    floating_kind,
    kind_of,
    register_kind,
    supported_kinds,
)


# ═══════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════


class TestRegistry:

    @pytest.mark.parametrize("dtype", [np.int8, np.int16, np.int32, np.int64,
                                       np.float16, np.float32, np.float64])
    def test_default_kinds_registered(self, dtype):
        kind = kind_of(dtype)
        assert kind.dtype == np.dtype(dtype)

    def test_supported_names(self):
        names = supported_kinds()
        assert "int64" in names
        assert "float64" in names

    @pytest.mark.parametrize("dtype", [np.uint8, np.bool_, np.complex128, np.str_])
    def test_unsupported_kind_rejected(self, dtype):
        with pytest.raises(UnsupportedElementTypeError) as exc_info:
            kind_of(dtype)
        assert exc_info.value.dtype == np.dtype(dtype)

    def test_kind_of_array(self):
        assert kind_of(np.zeros(3, dtype=np.float32)).name == "float32"

    def test_register_existing_returns_same(self):
        assert register_kind(np.float64) is kind_of(np.float64)

    def test_register_complex_rejected(self):
        with pytest.raises(ValidationError, match="real"):
            register_kind(np.complex64)

    def test_kind_satisfies_protocol(self):
        assert isinstance(kind_of(np.int32), NumericKernel)


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestArithmetic:

    def test_identities(self):
        kind = kind_of(np.int32)
        assert kind.zero == 0 and kind.zero.dtype == np.int32
        assert kind.one == 1

    def test_integer_ops_stay_integer(self):
        kind = kind_of(np.int16)
        out = kind.add(np.array([1, 2], dtype=np.int16), np.array([3, 4], dtype=np.int16))
        assert out.dtype == np.int16
        np.testing.assert_array_equal(out, [4, 6])

    def test_float32_ops_stay_float32(self):
        kind = kind_of(np.float32)
        out = kind.multiply(np.ones(2, dtype=np.float32), 2.5)
        assert out.dtype == np.float32

    def test_integer_division_floors(self):
        kind = kind_of(np.int64)
        assert kind.divide(7, 2) == 3
        assert kind.divide(-7, 2) == -4

    def test_float_division(self):
        assert kind_of(np.float64).divide(7.0, 2.0) == 3.5

    @pytest.mark.parametrize("dtype", [np.int32, np.float64])
    def test_division_by_zero_raises(self, dtype):
        with pytest.raises(SingularMatrixError, match="Division by zero"):
            kind_of(dtype).divide(1, 0)

    def test_division_by_array_with_zero_raises(self):
        with pytest.raises(SingularMatrixError):
            kind_of(np.float64).divide(np.ones(3), np.array([1.0, 0.0, 2.0]))

    def test_negate(self):
        np.testing.assert_array_equal(kind_of(np.int8).negate(np.array([1, -2], dtype=np.int8)), [-1, 2])

    def test_integer_sqrt_is_floor(self):
        kind = kind_of(np.int64)
        assert kind.sqrt(16) == 4
        assert kind.sqrt(17) == 4
        np.testing.assert_array_equal(kind.sqrt(np.array([0, 1, 9, 10])), [0, 1, 3, 3])

    def test_float_sqrt(self):
        assert kind_of(np.float64).sqrt(2.0) == pytest.approx(np.sqrt(2.0))

    @pytest.mark.parametrize("dtype", [np.int32, np.float64])
    def test_sqrt_of_negative_raises(self, dtype):
        with pytest.raises(NumericalError, match="negative"):
            kind_of(dtype).sqrt(-1)


# ═══════════════════════════════════════════════════════════════════════
# Floating promotion
# ═══════════════════════════════════════════════════════════════════════


class TestFloatingKind:

    def test_int_promotes_to_float64(self):
        assert floating_kind(kind_of(np.int32)).dtype == np.float64

    def test_float16_promotes_to_float32(self):
        assert floating_kind(kind_of(np.float16)).dtype == np.float32

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_float_kept(self, dtype):
        kind = kind_of(dtype)
        assert floating_kind(kind) is kind

    def test_element_kind_is_frozen(self):
        kind = kind_of(np.float64)
        assert isinstance(kind, ElementKind)
        with pytest.raises(Exception):
            kind.name = "other"
