"""
Matrix: dense row-major storage for PyMatrix.

A Matrix owns a C-contiguous 2D NumPy buffer of a registered element
kind (see pymatrix.core.numeric). It provides the storage surface the
factorization engines consume (shape, element access by (row, col) and
by flat index, submatrix extraction, concatenation, transpose, deep
copy) plus matrix algebra and structural predicates.

The container is mutable, but no engine writes to a matrix it was given:
every factorization copies the buffer first and returns fresh matrices.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.exceptions import DimensionError, SingularMatrixError, ValidationError
from pymatrix.core.numeric import ElementKind, floating_kind, kind_of
from pymatrix.core.validation import (
    check_2d,
    check_array,
    check_inner_dimensions,
    check_same_shape,
)


class Matrix:
    """
    Dense, row-major, mutable 2D numeric container.

    Construction:
        Matrix([[1, 2], [3, 4]])
        Matrix(np_array, dtype=np.float32)
        Matrix.zeros(3, 3), Matrix.identity(4), Matrix.from_flat(values, 2, 3)

    Element access:
        m[i, j]       element at row i, column j
        m[k]          element k of the row-major flat buffer
    """

    __slots__ = ('_data', '_kind')
    __hash__ = None  # mutable container
    __array_ufunc__ = None  # numpy scalars defer to Matrix operators

    def __init__(self, data: ArrayLike | Matrix, dtype: Any = None):
        if isinstance(data, Matrix):
            data = data._data
        if dtype is not None:
            # the requested kind is the one validated
            try:
                data = np.asarray(data, dtype=dtype)
            except (ValueError, TypeError) as e:
                raise ValidationError(f"data: cannot convert to {dtype}: {e}") from e
        arr = check_array(data, 'data')
        check_2d(arr, 'data')
        arr = np.array(arr, dtype=dtype, order='C', copy=True)
        self._kind: ElementKind = kind_of(arr.dtype)
        self._data: NDArray[Any] = arr

    @classmethod
    def _wrap(cls, arr: NDArray[Any]) -> Matrix:
        """Adopt a freshly computed buffer without copying it again."""
        out = cls.__new__(cls)
        arr = np.ascontiguousarray(arr)
        out._kind = kind_of(arr.dtype)
        out._data = arr
        return out

    # --- Constructors ---

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype: Any = np.float64) -> Matrix:
        return cls._wrap(np.zeros((rows, cols), dtype=dtype))

    @classmethod
    def ones(cls, rows: int, cols: int, dtype: Any = np.float64) -> Matrix:
        return cls._wrap(np.ones((rows, cols), dtype=dtype))

    @classmethod
    def full(cls, rows: int, cols: int, value: Any, dtype: Any = None) -> Matrix:
        return cls._wrap(np.full((rows, cols), value, dtype=dtype))

    @classmethod
    def identity(cls, n: int, dtype: Any = np.float64) -> Matrix:
        return cls._wrap(np.eye(n, dtype=dtype))

    @classmethod
    def diagonal(cls, values: ArrayLike, dtype: Any = None) -> Matrix:
        """Square matrix with the given values on its diagonal."""
        return cls._wrap(np.diag(np.asarray(values, dtype=dtype)))

    @classmethod
    def from_flat(cls, values: ArrayLike, rows: int, cols: int) -> Matrix:
        """
        Build a matrix from a row-major flat buffer.

        Raises:
            DimensionError: If len(values) != rows * cols
        """
        flat = check_array(values, 'values').ravel()
        if flat.size != rows * cols:
            raise DimensionError(
                f"Buffer length {flat.size} does not match shape ({rows}, {cols})"
            )
        return cls(flat.reshape(rows, cols))

    @classmethod
    def column_vector(cls, values: ArrayLike) -> Matrix:
        return cls(np.asarray(values).reshape(-1, 1))

    @classmethod
    def row_vector(cls, values: ArrayLike) -> Matrix:
        return cls(np.asarray(values).reshape(1, -1))

    @classmethod
    def random(
        cls,
        rows: int,
        cols: int,
        *,
        rng: np.random.Generator | None = None,
        low: float = 0.0,
        high: float = 1.0,
    ) -> Matrix:
        """Uniformly distributed float64 entries in [low, high)."""
        rng = rng if rng is not None else np.random.default_rng()
        return cls._wrap(rng.uniform(low, high, size=(rows, cols)))

    @classmethod
    def permutation(cls, perm: Sequence[int], dtype: Any = np.float64) -> Matrix:
        """
        Permutation matrix P with P[i, perm[i]] = 1.

        (P @ A)[i] is row perm[i] of A.

        Raises:
            ValidationError: If perm is not a permutation of range(n)
        """
        perm = [int(p) for p in perm]
        n = len(perm)
        if sorted(perm) != list(range(n)):
            raise ValidationError(f"perm: not a permutation of 0..{n - 1}: {perm}")
        P = np.zeros((n, n), dtype=dtype)
        P[np.arange(n), perm] = 1
        return cls._wrap(P)

    @staticmethod
    def hstack(*matrices: Matrix) -> Matrix:
        """
        Concatenate matrices left to right.

        Raises:
            DimensionError: If row counts differ
        """
        if not matrices:
            raise ValidationError("hstack: need at least one matrix")
        rows = {m.rows for m in matrices}
        if len(rows) > 1:
            raise DimensionError(
                f"hstack: row counts differ: {[m.rows for m in matrices]}"
            )
        return Matrix._wrap(np.hstack([m._data for m in matrices]))

    @staticmethod
    def vstack(*matrices: Matrix) -> Matrix:
        """
        Concatenate matrices top to bottom.

        Raises:
            DimensionError: If column counts differ
        """
        if not matrices:
            raise ValidationError("vstack: need at least one matrix")
        cols = {m.cols for m in matrices}
        if len(cols) > 1:
            raise DimensionError(
                f"vstack: column counts differ: {[m.cols for m in matrices]}"
            )
        return Matrix._wrap(np.vstack([m._data for m in matrices]))

    @staticmethod
    def from_blocks(blocks: Iterable[Iterable[Matrix]]) -> Matrix:
        """Assemble a matrix from a grid of blocks (rows of blocks)."""
        return Matrix.vstack(*(Matrix.hstack(*row) for row in blocks))

    # --- Shape and kind ---

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self._data.shape[0], self._data.shape[1])

    @property
    def size(self) -> int:
        return self._data.size

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def kind(self) -> ElementKind:
        """Numeric kernel entry for this matrix's elements."""
        return self._kind

    @property
    def data(self) -> NDArray[Any]:
        """Read-only view of the backing buffer."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    # --- Element access ---

    def __getitem__(self, key: int | tuple[int, int]) -> Any:
        if isinstance(key, tuple):
            return self._data[key]
        return self._data.reshape(-1)[key]

    def __setitem__(self, key: int | tuple[int, int], value: Any) -> None:
        if isinstance(key, tuple):
            self._data[key] = value
        else:
            self._data.reshape(-1)[key] = value

    def row(self, i: int) -> Matrix:
        """Row i as a 1 x cols matrix."""
        return Matrix._wrap(self._data[i:i + 1, :].copy())

    def column(self, j: int) -> Matrix:
        """Column j as a rows x 1 matrix."""
        return Matrix._wrap(self._data[:, j:j + 1].copy())

    def submatrix(self, row_start: int, row_end: int, col_start: int, col_end: int) -> Matrix:
        """
        Copy of rows [row_start, row_end) and columns [col_start, col_end).

        Raises:
            DimensionError: If the ranges are empty or out of bounds
        """
        if not (0 <= row_start < row_end <= self.rows and 0 <= col_start < col_end <= self.cols):
            raise DimensionError(
                f"Invalid submatrix range rows [{row_start}, {row_end}), "
                f"cols [{col_start}, {col_end}) for shape {self.shape}"
            )
        return Matrix._wrap(self._data[row_start:row_end, col_start:col_end].copy())

    def minor(self, i: int, j: int) -> Matrix:
        """Copy with row i and column j removed."""
        reduced = np.delete(np.delete(self._data, i, axis=0), j, axis=1)
        return Matrix._wrap(reduced)

    def partition(self) -> tuple[tuple[Matrix, Matrix], tuple[Matrix, Matrix]]:
        """
        Split into quadrants ((A11, A12), (A21, A22)) at rows // 2, cols // 2.

        Raises:
            DimensionError: If either dimension is smaller than 2
        """
        if self.rows < 2 or self.cols < 2:
            raise DimensionError(f"Cannot partition a matrix of shape {self.shape}")
        m, k = self.rows // 2, self.cols // 2
        d = self._data
        return (
            (Matrix._wrap(d[:m, :k].copy()), Matrix._wrap(d[:m, k:].copy())),
            (Matrix._wrap(d[m:, :k].copy()), Matrix._wrap(d[m:, k:].copy())),
        )

    def swap_rows(self, i: int, j: int) -> None:
        """Exchange rows i and j in place."""
        if i != j:
            self._data[[i, j], :] = self._data[[j, i], :]

    def diag(self) -> NDArray[Any]:
        """Main diagonal as a 1D array (copy)."""
        return np.diag(self._data).copy()

    def trace(self) -> Any:
        return self._data.trace()

    # --- Copies and conversions ---

    def copy(self) -> Matrix:
        """Independent deep copy."""
        return Matrix._wrap(self._data.copy())

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> Matrix:
        return self.copy()

    def astype(self, dtype: Any) -> Matrix:
        return Matrix._wrap(self._data.astype(dtype))

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def conjugate(self) -> Matrix:
        """Elementwise conjugate; a copy for the real kinds supported."""
        return self.copy()

    def conjugate_transpose(self) -> Matrix:
        """Conjugate transpose; the plain transpose for real kinds."""
        return self.transpose()

    def to_numpy(self) -> NDArray[Any]:
        """Independent NumPy copy of the buffer."""
        return self._data.copy()

    def tolist(self) -> list[list[Any]]:
        return self._data.tolist()

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        return np.array(self._data, dtype=dtype, copy=True)

    # --- Algebra ---

    def _operand(self, other: Any) -> NDArray[Any] | Any:
        if isinstance(other, Matrix):
            check_same_shape(self, other, ('left', 'right'))
            return other._data
        if np.ndim(other) != 0:
            raise ValidationError(
                f"Operand must be a Matrix or scalar, got {type(other).__name__}"
            )
        return other

    def __add__(self, other: Matrix | Any) -> Matrix:
        return Matrix._wrap(self._data + self._operand(other))

    def __radd__(self, other: Any) -> Matrix:
        return self.__add__(other)

    def __sub__(self, other: Matrix | Any) -> Matrix:
        return Matrix._wrap(self._data - self._operand(other))

    def __rsub__(self, other: Any) -> Matrix:
        return Matrix._wrap(self._operand(other) - self._data)

    def __mul__(self, other: Matrix | Any) -> Matrix:
        """Scalar multiple, or elementwise product with a same-shape Matrix."""
        return Matrix._wrap(self._data * self._operand(other))

    def __rmul__(self, other: Any) -> Matrix:
        return self.__mul__(other)

    def __truediv__(self, scalar: Any) -> Matrix:
        """
        Division by a scalar, carried out in the floating kind.

        Raises:
            SingularMatrixError: If scalar is zero
        """
        if np.ndim(scalar) != 0:
            raise ValidationError("Matrix can only be divided by a scalar")
        if scalar == 0:
            raise SingularMatrixError("Division of a matrix by zero")
        kind = floating_kind(self._kind)
        return Matrix._wrap(kind.divide(self._data.astype(kind.dtype), scalar))

    def __neg__(self) -> Matrix:
        return Matrix._wrap(self._kind.negate(self._data))

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        check_inner_dimensions(self, other, ('left', 'right'))
        return Matrix._wrap(self._data @ other._data)

    def frobenius_norm(self) -> float:
        return float(np.sqrt(np.sum(np.square(self._data, dtype=np.float64))))

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def allclose(self, other: Matrix | ArrayLike, rtol: float | None = None,
                 atol: float | None = None) -> bool:
        """Approximate equality using the tolerance tier of this matrix's kind."""
        other_data = other._data if isinstance(other, Matrix) else np.asarray(other)
        if self._data.shape != other_data.shape:
            return False
        tier = select_tolerance(self.dtype)
        return bool(np.allclose(
            self._data, other_data,
            rtol=tier.rtol if rtol is None else rtol,
            atol=tier.atol if atol is None else atol,
        ))

    # --- Predicates ---

    def _atol(self, atol: float | None) -> float:
        return select_tolerance(self.dtype).atol if atol is None else atol

    def is_square(self) -> bool:
        return self.rows == self.cols

    def is_empty(self) -> bool:
        return self.rows == 0 or self.cols == 0

    def is_symmetric(self, atol: float | None = None) -> bool:
        if not self.is_square():
            return False
        return bool(np.allclose(self._data, self._data.T, rtol=0.0, atol=self._atol(atol)))

    def is_hermitian(self, atol: float | None = None) -> bool:
        """Hermitian check; equals is_symmetric for the real kinds supported."""
        return self.is_symmetric(atol)

    def is_diagonal(self, atol: float | None = None) -> bool:
        off_diagonal = ~np.eye(self.rows, self.cols, dtype=bool)
        return bool(np.all(np.abs(self._data[off_diagonal]) <= self._atol(atol)))

    def is_identity(self, atol: float | None = None) -> bool:
        if not self.is_square():
            return False
        eye = np.eye(self.rows, dtype=self.dtype)
        return bool(np.allclose(self._data, eye, rtol=0.0, atol=self._atol(atol)))

    def is_orthogonal(self, atol: float | None = None) -> bool:
        """True when A @ A.T is the identity (within tolerance)."""
        if not self.is_square():
            return False
        return (self @ self.T).is_identity(atol)

    def is_upper_triangular(self, atol: float | None = None) -> bool:
        below = np.tril(self._data, k=-1)
        return bool(np.all(np.abs(below) <= self._atol(atol)))

    def is_lower_triangular(self, atol: float | None = None) -> bool:
        above = np.triu(self._data, k=1)
        return bool(np.all(np.abs(above) <= self._atol(atol)))

    def is_normal(self, atol: float | None = None) -> bool:
        """True when A commutes with its conjugate transpose."""
        if not self.is_square():
            return False
        ah = self.conjugate_transpose()
        return (self @ ah).allclose(ah @ self, rtol=0.0, atol=self._atol(atol))

    def __repr__(self) -> str:
        body = np.array2string(self._data, separator=', ', prefix='Matrix(')
        return f"Matrix({body}, dtype={self.dtype.name})"


def as_matrix(data: Matrix | ArrayLike) -> Matrix:
    """Return data unchanged if it is a Matrix, otherwise wrap a copy."""
    if isinstance(data, Matrix):
        return data
    return Matrix(data)
