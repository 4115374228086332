"""
Tests for PyMatrix exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyMatrixError)
    - Diagnostic attributes on NotSquareError, UnsupportedElementTypeError,
      SingularMatrixError, NotPositiveDefiniteError, ConvergenceError
    - Default attribute values (None for optional attributes)
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    ConvergenceError,
    DimensionError,
    NotPositiveDefiniteError,
    NotSquareError,
    NumericalError,
    PyMatrixError,
    SingularMatrixError,
    UnsupportedElementTypeError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyMatrixError."""

    def test_validation_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_not_square_is_dimension_error(self):
        with pytest.raises(DimensionError):
            raise NotSquareError("not square", rows=2, cols=3)

    def test_unsupported_element_type_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise UnsupportedElementTypeError("complex", dtype=np.complex128)

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_not_positive_definite_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise NotPositiveDefiniteError("not PD")

    def test_numerical_errors_are_not_validation_errors(self):
        assert not isinstance(SingularMatrixError("s"), ValidationError)
        assert not isinstance(NotPositiveDefiniteError("p"), ValidationError)

    def test_convergence_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise ConvergenceError("did not converge", iterations=100)

    def test_convergence_error_is_not_numerical_error(self):
        """ConvergenceError inherits from PyMatrixError, not NumericalError."""
        err = ConvergenceError("did not converge", iterations=100)
        assert not isinstance(err, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Shape errors
# ═══════════════════════════════════════════════════════════════════════


class TestShapeErrors:

    def test_dimension_error_message(self):
        err = DimensionError("Inner dimensions must match")
        assert "Inner dimensions" in str(err)

    def test_not_square_attributes(self):
        err = NotSquareError("A: must be square, got shape (2, 3)", rows=2, cols=3)
        assert err.rows == 2
        assert err.cols == 3
        assert "(2, 3)" in str(err)

    def test_not_square_defaults(self):
        err = NotSquareError("not square")
        assert err.rows is None
        assert err.cols is None

    def test_unsupported_element_type_dtype(self):
        err = UnsupportedElementTypeError("no arithmetic", dtype=np.dtype(np.complex64))
        assert err.dtype == np.complex64


# ═══════════════════════════════════════════════════════════════════════
# SingularMatrixError
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "A is singular",
            matrix_name="A",
            pivot_index=2,
            condition_number=1e18,
            rank=3,
            expected_rank=5,
        )
        assert str(err) == "A is singular"
        assert err.matrix_name == "A"
        assert err.pivot_index == 2
        assert err.condition_number == 1e18
        assert err.rank == 3
        assert err.expected_rank == 5

    def test_defaults_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None


# ═══════════════════════════════════════════════════════════════════════
# NotPositiveDefiniteError
# ═══════════════════════════════════════════════════════════════════════


class TestNotPositiveDefiniteError:

    def test_all_attributes(self):
        err = NotPositiveDefiniteError(
            "pivot 1 is -2", matrix_name="A", pivot_index=1, pivot_value=-2.0
        )
        assert err.matrix_name == "A"
        assert err.pivot_index == 1
        assert err.pivot_value == -2.0

    def test_defaults_none(self):
        err = NotPositiveDefiniteError("not PD")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.pivot_value is None


# ═══════════════════════════════════════════════════════════════════════
# ConvergenceError
# ═══════════════════════════════════════════════════════════════════════


class TestConvergenceError:

    def test_all_attributes(self):
        err = ConvergenceError(
            "Jacobi iteration did not converge",
            iterations=1000,
            final_change=1e-4,
            reason="max_iter",
            threshold=1e-10,
        )
        assert err.iterations == 1000
        assert err.final_change == 1e-4
        assert err.reason == "max_iter"
        assert err.threshold == 1e-10

    def test_optional_defaults(self):
        err = ConvergenceError("stalled", iterations=5)
        assert err.iterations == 5
        assert err.final_change is None
        assert err.reason is None
        assert err.threshold is None
