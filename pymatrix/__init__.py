"""
PyMatrix: dense matrix factorizations for Python.

Generic over the registered element kinds (signed integers and floating
point), with every factorization returning fresh matrices and leaving
its input untouched.

Submodules:
    core: Matrix storage, numeric kernel, results, exceptions
    direct: LU, inverse, solve, determinant, substitution
    orthogonal: Householder / Givens / Gram-Schmidt QR, Cholesky
    spectral: Jacobi and QR-algorithm eigen, SVD, rank, pseudoinverse
    fastmul: Naive and Strassen multiplication
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from pymatrix.core import (
    Matrix,
    as_matrix,
    PyMatrixError,
    ValidationError,
    DimensionError,
    NotSquareError,
    UnsupportedElementTypeError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
)
from pymatrix import direct
from pymatrix import orthogonal
from pymatrix import spectral
from pymatrix import fastmul
from pymatrix.direct import (
    lu,
    inverse,
    solve,
    det,
    forward_substitution,
    back_substitution,
    adjugate,
    matrix_power,
    permutation_matrix,
)
from pymatrix.orthogonal import (
    qr,
    householder_qr,
    givens_qr,
    gram_schmidt_qr,
    least_squares,
    cholesky,
    is_positive_definite,
)
from pymatrix.spectral import (
    jacobi_eigen,
    qr_eigenvalues,
    qr_step_eigenvalues,
    eigenvalues,
    eigenvectors,
    svd,
    singular_values,
    rank,
    condition_number,
    pseudoinverse,
    is_singular,
    is_full_rank,
)
from pymatrix.fastmul import naive_multiply, strassen, strassen_multiply

__all__ = [
    "__version__",
    "direct",
    "orthogonal",
    "spectral",
    "fastmul",
    "Matrix",
    "as_matrix",
    # Direct
    "lu",
    "inverse",
    "solve",
    "det",
    "forward_substitution",
    "back_substitution",
    "adjugate",
    "matrix_power",
    "permutation_matrix",
    # Orthogonal
    "qr",
    "householder_qr",
    "givens_qr",
    "gram_schmidt_qr",
    "least_squares",
    "cholesky",
    "is_positive_definite",
    # Spectral
    "jacobi_eigen",
    "qr_eigenvalues",
    "qr_step_eigenvalues",
    "eigenvalues",
    "eigenvectors",
    "svd",
    "singular_values",
    "rank",
    "condition_number",
    "pseudoinverse",
    "is_singular",
    "is_full_rank",
    # Fast multiplication
    "naive_multiply",
    "strassen",
    "strassen_multiply",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "NotSquareError",
    "UnsupportedElementTypeError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
]
