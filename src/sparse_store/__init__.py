"""
Sparse matrix store for double-precision values.

Keeps only the non-zero entries of a matrix, ordered by row and then by column,
and builds addition, subtraction, scalar and matrix products, transpose and
small closed-form determinants / inverses on top of that storage.
"""

__version__ = "0.1.0"

from .sparse_matrix import SparseMatrixStore
from .store_utils import from_dense, from_entries, identity, entries_equal
from .display import format_dense, format_sparse, to_frame
from .calculator import SparseMatrixCalculator
from .config import DisplayConfig
from .constants import ZERO_TOLERANCE
from .store_errors import (
    SparseStoreConfigError,
    SparseStoreRuntimeError,
    InvalidDimensionsError,
    IndexOutOfBoundsError,
    DimensionMismatchError,
    DivisionByZeroError,
    NotSquareError,
    UnsupportedSizeError,
    SingularMatrixError,
)

__all__ = [
    "SparseMatrixStore",
    "from_dense",
    "from_entries",
    "identity",
    "entries_equal",
    "format_dense",
    "format_sparse",
    "to_frame",
    "SparseMatrixCalculator",
    "DisplayConfig",
    "ZERO_TOLERANCE",
    "SparseStoreConfigError",
    "SparseStoreRuntimeError",
    "InvalidDimensionsError",
    "IndexOutOfBoundsError",
    "DimensionMismatchError",
    "DivisionByZeroError",
    "NotSquareError",
    "UnsupportedSizeError",
    "SingularMatrixError",
]
