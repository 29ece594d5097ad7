import numpy as np
from typing import Iterable

from .constants import ZERO_TOLERANCE
from .sparse_matrix import SparseMatrixStore
from .store_errors import InvalidDimensionsError


def from_dense(array) -> SparseMatrixStore:
    """
    Build a store from a dense 2-D array, keeping only the non-zero entries.

    Args:
        array: Anything numpy can turn into a 2-D float array (nested lists, ndarray)

    Returns:
        New SparseMatrixStore with the same shape

    Raises:
        InvalidDimensionsError: If the data is not 2-D or has an empty axis
    """
    dense = np.asarray(array, dtype=np.float64)
    if dense.ndim != 2:
        rows = dense.shape[0] if dense.ndim > 0 else 0
        raise InvalidDimensionsError(rows, 0, ndim=dense.ndim)

    store = SparseMatrixStore(dense.shape[0], dense.shape[1])
    # np.nonzero walks in C order, so rows are appended already sorted
    for r, c in zip(*np.nonzero(np.abs(dense) >= ZERO_TOLERANCE)):
        store.set(int(r), int(c), float(dense[r, c]))
    return store


def from_entries(rows: int, cols: int, entries: Iterable[tuple[int, int, float]]) -> SparseMatrixStore:
    """
    Build a store of the given shape from (row, col, value) triples.

    Later triples overwrite earlier ones at the same position, and zero values
    delete, exactly as successive ``set`` calls would.
    """
    store = SparseMatrixStore(rows, cols)
    for r, c, v in entries:
        store.set(r, c, v)
    return store


def identity(n: int) -> SparseMatrixStore:
    """Return the n x n identity store."""
    store = SparseMatrixStore(n, n)
    for i in range(n):
        store.set(i, i, 1.0)
    return store


def entries_equal(a: SparseMatrixStore, b: SparseMatrixStore, tol: float = 1e-8) -> bool:
    """True if both stores have the same shape and every entry agrees within tol."""
    return a.is_equal(b, tol=tol)
