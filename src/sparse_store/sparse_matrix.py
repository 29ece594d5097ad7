import bisect
import operator
from typing import Callable, Iterator, Optional

import numpy as np
from scipy import sparse as sp

from .constants import ZERO_TOLERANCE, MAX_CLOSED_FORM_SIZE
from .store_errors import (
    InvalidDimensionsError,
    IndexOutOfBoundsError,
    DimensionMismatchError,
    DivisionByZeroError,
    NotSquareError,
    UnsupportedSizeError,
    SingularMatrixError,
)


class SparseRow:
    """Non-zero entries of one row, kept sorted by column index."""

    def __init__(self, index: int):
        self.index = index
        # parallel lists, strictly increasing by column
        self.cols: list[int] = []
        self.values: list[float] = []

    def _position(self, col: int) -> tuple[int, bool]:
        pos = bisect.bisect_left(self.cols, col)
        return pos, pos < len(self.cols) and self.cols[pos] == col

    def get(self, col: int) -> float:
        pos, found = self._position(col)
        return self.values[pos] if found else 0.0

    def put(self, col: int, value: float) -> None:
        """Insert the value at its sorted position, or overwrite the existing one."""
        pos, found = self._position(col)
        if found:
            self.values[pos] = value
        else:
            self.cols.insert(pos, col)
            self.values.insert(pos, value)

    def remove(self, col: int) -> None:
        pos, found = self._position(col)
        if found:
            del self.cols[pos]
            del self.values[pos]

    def __len__(self) -> int:
        return len(self.cols)

    def __iter__(self) -> Iterator[tuple[int, float]]:
        return zip(self.cols, self.values)

    def copy(self) -> 'SparseRow':
        result = SparseRow(self.index)
        result.cols = self.cols.copy()
        result.values = self.values.copy()
        return result


class SparseMatrixStore:
    """
    Sparse matrix of doubles that stores only non-zero entries.

    Rows are kept in a list sorted by row index, and each row keeps its
    columns sorted by column index, so a full traversal is always row-major
    and column-ascending. Every mutation goes through ``set``, which drops
    values whose magnitude is below ``ZERO_TOLERANCE`` and removes rows as
    soon as their last entry is gone. Arithmetic never touches the operands;
    it always builds a fresh store.
    """

    # numpy scalars on the left defer to __rmul__ instead of treating the store as a sequence
    __array_ufunc__ = None

    def __init__(self, rows: int, cols: int):
        """
        Create an empty (all-zero) store.

        Args:
            rows: Number of rows, must be positive.
            cols: Number of columns, must be positive.

        Raises:
            InvalidDimensionsError: If either dimension is not a positive integer.
        """
        if not _is_positive_int(rows) or not _is_positive_int(cols):
            raise InvalidDimensionsError(rows, cols)
        self._rows = int(rows)
        self._cols = int(cols)
        # parallel lists, strictly increasing by row index
        self._row_ids: list[int] = []
        self._row_entries: list[SparseRow] = []

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._cols

    # ------------------------------------------------------------------
    # storage primitives
    # ------------------------------------------------------------------

    def _check_index(self, row, col) -> tuple[int, int]:
        row = operator.index(row)
        col = operator.index(col)
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexOutOfBoundsError(row, col, self.shape)
        return row, col

    def _row_position(self, row: int) -> tuple[int, bool]:
        pos = bisect.bisect_left(self._row_ids, row)
        return pos, pos < len(self._row_ids) and self._row_ids[pos] == row

    def _find_row(self, row: int) -> Optional[SparseRow]:
        pos, found = self._row_position(row)
        return self._row_entries[pos] if found else None

    def set(self, row: int, col: int, value: float) -> None:
        """Set the value at position (row, col).

        A value within ``ZERO_TOLERANCE`` of zero deletes the entry, and the
        row itself once it holds nothing else.

        Raises:
            IndexOutOfBoundsError: If (row, col) is outside the store.
        """
        row, col = self._check_index(row, col)
        value = float(value)
        pos, found = self._row_position(row)

        if abs(value) < ZERO_TOLERANCE:
            if found:
                entry = self._row_entries[pos]
                entry.remove(col)
                if len(entry) == 0:
                    del self._row_ids[pos]
                    del self._row_entries[pos]
            return

        if not found:
            self._row_ids.insert(pos, row)
            self._row_entries.insert(pos, SparseRow(row))
        self._row_entries[pos].put(col, value)

    def get(self, row: int, col: int) -> float:
        """Get the value at position (row, col), 0.0 if nothing is stored there.

        Raises:
            IndexOutOfBoundsError: If (row, col) is outside the store.
        """
        row, col = self._check_index(row, col)
        entry = self._find_row(row)
        if entry is None:
            return 0.0
        return entry.get(col)

    def nonzero_count(self) -> int:
        """Returns the number of stored (non-zero) entries."""
        return sum(len(entry) for entry in self._row_entries)

    def enumerate(self) -> Iterator[tuple[int, int, float]]:
        """Yield (row, col, value) for every stored entry, row-major and column-ascending."""
        for entry in self._row_entries:
            for col, value in entry:
                yield entry.index, col, value

    def copy(self) -> 'SparseMatrixStore':
        """Returns a copy of the store, sharing no rows with the original."""
        result = SparseMatrixStore(self._rows, self._cols)
        result._row_ids = self._row_ids.copy()
        result._row_entries = [entry.copy() for entry in self._row_entries]
        return result

    # ------------------------------------------------------------------
    # arithmetic
    # ------------------------------------------------------------------

    def _combine(self, other: 'SparseMatrixStore', op: Callable[[float, float], float], operation: str) -> 'SparseMatrixStore':
        if self.shape != other.shape:
            raise DimensionMismatchError(operation, self.shape, other.shape)
        result = self.copy()
        for r, c, v in other.enumerate():
            # may cancel to zero, which set() turns into a removal
            result.set(r, c, op(result.get(r, c), v))
        return result

    def add(self, other: 'SparseMatrixStore') -> 'SparseMatrixStore':
        """Element-wise sum of two stores of the same shape.

        Raises:
            DimensionMismatchError: If the shapes differ.
        """
        return self._combine(other, operator.add, 'addition')

    def subtract(self, other: 'SparseMatrixStore') -> 'SparseMatrixStore':
        """Element-wise difference ``self - other`` of two stores of the same shape.

        Raises:
            DimensionMismatchError: If the shapes differ.
        """
        return self._combine(other, operator.sub, 'subtraction')

    def scalar_multiply(self, scalar: float) -> 'SparseMatrixStore':
        """Multiply every entry by ``scalar``.

        Products that land below ``ZERO_TOLERANCE`` are dropped, so the result
        can hold fewer entries than ``self``.
        """
        scalar = float(scalar)
        result = SparseMatrixStore(self._rows, self._cols)
        if abs(scalar) < ZERO_TOLERANCE:
            return result

        for r, c, v in self.enumerate():
            product = v * scalar
            if abs(product) >= ZERO_TOLERANCE:
                result.set(r, c, product)
        return result

    def scalar_divide(self, scalar: float) -> 'SparseMatrixStore':
        """Divide every entry by ``scalar``.

        Raises:
            DivisionByZeroError: If ``scalar`` is within ``ZERO_TOLERANCE`` of zero.
        """
        scalar = float(scalar)
        if abs(scalar) < ZERO_TOLERANCE:
            raise DivisionByZeroError(scalar)
        return self.scalar_multiply(1.0 / scalar)

    def multiply(self, other: 'SparseMatrixStore') -> 'SparseMatrixStore':
        """Matrix product ``self @ other``.

        Each populated row of ``self`` is combined with every column of
        ``other``; rows of ``self`` with no entries are skipped entirely.

        Raises:
            DimensionMismatchError: If ``self.cols != other.rows``.
        """
        if self._cols != other.rows:
            raise DimensionMismatchError('multiplication', self.shape, other.shape)

        result = SparseMatrixStore(self._rows, other.cols)
        for entry in self._row_entries:
            for j in range(other.cols):
                total = 0.0
                for k, value in entry:
                    other_value = other.get(k, j)
                    if other_value != 0.0:
                        total += value * other_value
                if abs(total) >= ZERO_TOLERANCE:
                    result.set(entry.index, j, total)
        return result

    def transpose(self) -> 'SparseMatrixStore':
        result = SparseMatrixStore(self._cols, self._rows)
        for r, c, v in self.enumerate():
            result.set(c, r, v)
        return result

    # ------------------------------------------------------------------
    # closed-form determinant / inverse
    # ------------------------------------------------------------------

    def _check_square(self, operation: str) -> int:
        if self._rows != self._cols:
            raise NotSquareError(operation, self.shape)
        return self._rows

    def _square_values(self) -> list[list[float]]:
        return [[self.get(i, j) for j in range(self._cols)] for i in range(self._rows)]

    def determinant(self) -> float:
        """Determinant of a 1x1, 2x2 or 3x3 store.

        Raises:
            NotSquareError: If the store is not square.
            UnsupportedSizeError: If the store is larger than 3x3.
        """
        n = self._check_square('determinant')
        if n > MAX_CLOSED_FORM_SIZE:
            raise UnsupportedSizeError('determinant', n, MAX_CLOSED_FORM_SIZE)

        m = self._square_values()
        if n == 1:
            return m[0][0]
        if n == 2:
            return m[0][0] * m[1][1] - m[0][1] * m[1][0]

        (a, b, c), (d, e, f), (g, h, i) = m
        # cofactor expansion along the first row
        return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)

    def inverse(self) -> 'SparseMatrixStore':
        """Inverse of a 1x1, 2x2 or 3x3 store, computed as adjugate / determinant.

        Raises:
            NotSquareError: If the store is not square.
            UnsupportedSizeError: If the store is larger than 3x3.
            SingularMatrixError: If the determinant is within ``ZERO_TOLERANCE`` of zero.
        """
        n = self._check_square('inverse')
        if n > MAX_CLOSED_FORM_SIZE:
            raise UnsupportedSizeError('inverse', n, MAX_CLOSED_FORM_SIZE)

        det = self.determinant()
        if abs(det) < ZERO_TOLERANCE:
            raise SingularMatrixError(det)

        m = self._square_values()
        result = SparseMatrixStore(n, n)
        if n == 1:
            result.set(0, 0, 1.0 / m[0][0])
            return result

        if n == 2:
            adjugate = [[m[1][1], -m[0][1]],
                        [-m[1][0], m[0][0]]]
        else:
            (a, b, c), (d, e, f), (g, h, i) = m
            cofactors = [[e * i - f * h, -(d * i - f * g), d * h - e * g],
                         [-(b * i - c * h), a * i - c * g, -(a * h - b * g)],
                         [b * f - c * e, -(a * f - c * d), a * e - b * d]]
            adjugate = [list(column) for column in zip(*cofactors)]

        for r in range(n):
            for c in range(n):
                result.set(r, c, adjugate[r][c] / det)
        return result

    # ------------------------------------------------------------------
    # comparison / conversion
    # ------------------------------------------------------------------

    def is_equal(self, other: 'SparseMatrixStore', tol: float = 1e-8) -> bool:
        """
        Check if this store matches another one entry by entry.

        Args:
            other: Another SparseMatrixStore to compare with
            tol: Absolute tolerance for every entry

        Returns:
            bool: True if the shapes agree and no entry differs by more than tol
        """
        if self.shape != other.shape:
            return False
        positions = {(r, c) for r, c, _ in self.enumerate()}
        positions.update((r, c) for r, c, _ in other.enumerate())
        return all(abs(self.get(r, c) - other.get(r, c)) <= tol for r, c in positions)

    def to_dense(self) -> np.ndarray:
        """Returns the full (rows, cols) float64 array, implicit zeros included."""
        dense = np.zeros(self.shape, dtype=np.float64)
        for r, c, v in self.enumerate():
            dense[r, c] = v
        return dense

    def to_scipy(self) -> sp.csr_matrix:
        """Returns the store as a scipy CSR matrix of the same shape."""
        entries = list(self.enumerate())
        row_idx = np.array([r for r, _, _ in entries], dtype=np.int64)
        col_idx = np.array([c for _, c, _ in entries], dtype=np.int64)
        data = np.array([v for _, _, v in entries], dtype=np.float64)
        return sp.csr_matrix((data, (row_idx, col_idx)), shape=self.shape)

    # ------------------------------------------------------------------
    # python protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key) -> float:
        """Returns the value at position (i, j).

        Args:
            key: A tuple (i, j)

        Returns:
            The value at position (i, j), or 0.0 if not stored.
        """
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrixStore indices must be a tuple of length 2")
        return self.get(i, j)

    def __setitem__(self, key, value: float) -> None:
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrixStore indices must be a tuple of length 2")
        self.set(i, j, value)

    def __contains__(self, key) -> bool:
        """True if a non-zero value is stored at position (i, j)."""
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            return False
        try:
            i, j = operator.index(i), operator.index(j)
        except TypeError:
            return False
        entry = self._find_row(i)
        return entry is not None and entry.get(j) != 0.0

    def __len__(self) -> int:
        return self.nonzero_count()

    def __iter__(self) -> Iterator[tuple[int, int, float]]:
        return self.enumerate()

    def __eq__(self, other) -> bool:
        if not isinstance(other, SparseMatrixStore):
            return NotImplemented
        return self.shape == other.shape and list(self.enumerate()) == list(other.enumerate())

    def __add__(self, other: 'SparseMatrixStore') -> 'SparseMatrixStore':
        if not isinstance(other, SparseMatrixStore):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'SparseMatrixStore') -> 'SparseMatrixStore':
        if not isinstance(other, SparseMatrixStore):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other: 'SparseMatrixStore') -> 'SparseMatrixStore':
        if not isinstance(other, SparseMatrixStore):
            return NotImplemented
        return self.multiply(other)

    def __mul__(self, scalar: float) -> 'SparseMatrixStore':
        if not _is_scalar(scalar):
            return NotImplemented
        return self.scalar_multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> 'SparseMatrixStore':
        if not _is_scalar(scalar):
            return NotImplemented
        return self.scalar_divide(scalar)

    def __neg__(self) -> 'SparseMatrixStore':
        return self.scalar_multiply(-1.0)

    def __repr__(self) -> str:
        """String representation of the store."""
        items_str = ", ".join(f"({r}, {c}): {v}" for r, c, v in self.enumerate())
        return f"SparseMatrixStore({self._rows}x{self._cols}, {{{items_str}}})"


def _is_positive_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool) and value > 0


def _is_scalar(value) -> bool:
    return isinstance(value, (int, float, np.number)) and not isinstance(value, bool)
