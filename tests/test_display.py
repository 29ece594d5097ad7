import pytest
import os
import sys
import numpy as np
import pandas as pd

# Add the src directory to Python path to import local sparse_store
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_store import (
    SparseMatrixStore,
    DisplayConfig,
    InvalidDimensionsError,
    format_dense,
    format_sparse,
    to_frame,
    from_dense,
    from_entries,
    identity,
    entries_equal,
)
from test_utils import validate_store


@pytest.fixture
def sparse_3x3() -> SparseMatrixStore:
    return from_entries(3, 3, [(0, 0, 1), (0, 2, 3), (2, 1, 7)])


class TestFormatDense:

    def test_default_format(self):
        text = format_dense(from_dense([[1, 2], [3, -4.5]]))
        assert text.splitlines() == [
            "Matrix 2x2:",
            "    1.00     2.00",
            "    3.00    -4.50",
        ]

    def test_implicit_zeros_printed(self, sparse_3x3):
        lines = format_dense(sparse_3x3).splitlines()
        assert lines[0] == "Matrix 3x3:"
        assert lines[2] == "    0.00     0.00     0.00"
        assert lines[3] == "    0.00     7.00     0.00"

    def test_empty_store(self):
        assert format_dense(SparseMatrixStore(2, 3)) == "Matrix 2x3:\nEmpty matrix (all zeros)"

    def test_custom_config(self):
        config = DisplayConfig(precision=1, column_width=5)
        assert format_dense(from_dense([[1.25, 10]]), config).splitlines()[1] == "  1.2  10.0"


class TestFormatSparse:

    def test_default_format(self, sparse_3x3):
        assert format_sparse(sparse_3x3).splitlines() == [
            "Sparse representation of 3x3 matrix:",
            "Row\tColumn\tValue",
            "0\t0\t1.00",
            "0\t2\t3.00",
            "2\t1\t7.00",
            "Total non-zero elements: 3",
        ]

    def test_empty_store(self):
        assert format_sparse(SparseMatrixStore(1, 1)).splitlines()[-1] == "Total non-zero elements: 0"

    def test_precision(self, sparse_3x3):
        assert format_sparse(sparse_3x3, DisplayConfig(precision=0)).splitlines()[2] == "0\t0\t1"


class TestToFrame:

    def test_columns_and_order(self, sparse_3x3):
        df = to_frame(sparse_3x3)
        assert list(df.columns) == ['row', 'col', 'value']
        assert df['row'].tolist() == [0, 0, 2]
        assert df['col'].tolist() == [0, 2, 1]
        assert df['value'].tolist() == [1.0, 3.0, 7.0]
        assert df['value'].dtype == np.float64

    def test_empty_store(self):
        df = to_frame(SparseMatrixStore(2, 2))
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 0
        assert list(df.columns) == ['row', 'col', 'value']


class TestDisplayConfig:

    def test_defaults(self):
        config = DisplayConfig()
        config.validate()
        assert config.precision == 2
        assert config.column_width == 8

    @pytest.mark.parametrize("kwargs", [{'precision': -1}, {'column_width': 0}, {'precision': 1.5}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            DisplayConfig(**kwargs).validate()


class TestStoreUtils:

    def test_from_dense_skips_zeros(self):
        store = from_dense(np.array([[0.0, 1e-12, 2.0], [0.0, 0.0, 0.0]]))
        assert list(store.enumerate()) == [(0, 2, 2.0)]
        assert store.shape == (2, 3)

    @pytest.mark.parametrize("data", [[1, 2, 3], [[[1]]], 5.0, np.zeros((0, 3))])
    def test_from_dense_rejects_bad_shapes(self, data):
        with pytest.raises(InvalidDimensionsError):
            from_dense(data)

    def test_from_entries_applies_in_order(self):
        store = from_entries(2, 2, [(0, 0, 1.0), (0, 0, 5.0), (1, 1, 2.0), (1, 1, 0.0)])
        assert list(store.enumerate()) == [(0, 0, 5.0)]

    def test_identity(self):
        validate_store(identity(3), np.eye(3))
        assert identity(3).nonzero_count() == 3

    def test_entries_equal(self):
        a = from_dense([[1, 2], [3, 4]])
        b = from_dense([[1, 2], [3, 4 + 1e-12]])
        assert entries_equal(a, b)
        assert not entries_equal(a, from_dense([[1, 2, 0], [3, 4, 0]]))
