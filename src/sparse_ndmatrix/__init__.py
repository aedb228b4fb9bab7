"""
Sparse N-dimensional matrix with a fixed default value.

Stores only explicitly assigned, non-default cells while reading like a dense
array of unbounded extent. Supports tuple (``m[i, j]``) and chained
(``m[i][j]``) indexing, and ordered iteration over the populated cells.
"""

__version__ = "0.1.0"

from .matrix import SparseMatrix
from .sparse_store import SparseStore
from .accessor import IndexBuilder, MatrixCell
from .enumerator import MatrixEnumerator, iter_entries
from .config import MatrixConfig
from .matrix_errors import (
    MatrixConfigError,
    MatrixContractError,
    InvalidDimensionalityError,
    InvalidDTypeError,
    CoordinateError,
    CoordinateLengthError,
    NegativeCoordinateError,
    InvalidCoordinateTypeError,
    IncompleteIndexError,
    UnsupportedExportError,
)

__all__ = [
    "SparseMatrix",
    "SparseStore",
    "IndexBuilder",
    "MatrixCell",
    "MatrixEnumerator",
    "iter_entries",
    "MatrixConfig",
    "MatrixConfigError",
    "MatrixContractError",
    "InvalidDimensionalityError",
    "InvalidDTypeError",
    "CoordinateError",
    "CoordinateLengthError",
    "NegativeCoordinateError",
    "InvalidCoordinateTypeError",
    "IncompleteIndexError",
    "UnsupportedExportError",
]
