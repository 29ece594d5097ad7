import pytest
import os
import sys
import numpy as np

# Add the src directory to Python path to import local sparse_store
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_store import (
    SparseMatrixStore,
    NotSquareError,
    UnsupportedSizeError,
    SingularMatrixError,
    from_dense,
    identity,
)
from test_utils import validate_store, assert_store_invariants


class TestDeterminant:

    def test_1x1(self):
        assert from_dense([[-3.5]]).determinant() == -3.5
        assert SparseMatrixStore(1, 1).determinant() == 0.0

    def test_2x2(self):
        assert from_dense([[1, 2], [3, 4]]).determinant() == -2.0

    def test_3x3(self):
        dense = [[2, -3, 1], [2, 0, -1], [1, 4, 5]]
        assert from_dense(dense).determinant() == pytest.approx(np.linalg.det(dense))
        assert from_dense(dense).determinant() == pytest.approx(49.0)

    def test_3x3_sparse(self):
        store = from_dense([[0, 0, 2], [0, 3, 0], [4, 0, 0]])
        assert store.determinant() == pytest.approx(-24.0)

    def test_identity(self):
        for n in (1, 2, 3):
            assert identity(n).determinant() == 1.0

    def test_not_square(self):
        with pytest.raises(NotSquareError):
            SparseMatrixStore(2, 3).determinant()

    def test_unsupported_size(self):
        with pytest.raises(UnsupportedSizeError) as excinfo:
            identity(4).determinant()
        assert excinfo.value.size == 4


class TestInverse:

    def test_1x1(self):
        validate_store(from_dense([[4.0]]).inverse(), [[0.25]])

    def test_2x2(self):
        validate_store(from_dense([[1, 2], [3, 4]]).inverse(), [[-2, 1], [1.5, -0.5]])

    def test_3x3(self):
        dense = np.array([[2, -3, 1], [2, 0, -1], [1, 4, 5]], dtype=float)
        result = from_dense(dense).inverse()
        validate_store(result, np.linalg.inv(dense))
        assert_store_invariants(result)

    def test_zero_adjugate_entries_not_stored(self):
        result = from_dense([[2, 0], [0, 4]]).inverse()
        assert list(result.enumerate()) == [(0, 0, 0.5), (1, 1, 0.25)]

    def test_multiply_by_inverse_is_identity(self):
        rng = np.random.default_rng(23)
        for n in (1, 2, 3):
            for _ in range(10):
                dense = rng.standard_normal((n, n)) + 3 * np.eye(n)
                store = from_dense(dense)
                product = store.multiply(store.inverse())
                np.testing.assert_allclose(product.to_dense(), np.eye(n), rtol=0, atol=1e-9)

    def test_singular(self):
        with pytest.raises(SingularMatrixError):
            from_dense([[1, 2], [2, 4]]).inverse()
        with pytest.raises(SingularMatrixError):
            SparseMatrixStore(3, 3).inverse()

    def test_not_square(self):
        with pytest.raises(NotSquareError):
            SparseMatrixStore(3, 2).inverse()

    def test_unsupported_size(self):
        with pytest.raises(UnsupportedSizeError):
            identity(5).inverse()

    def test_operand_unchanged(self):
        store = from_dense([[1, 2], [3, 4]])
        before = store.copy()
        store.inverse()
        assert store == before
