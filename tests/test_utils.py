import os
import sys
import numpy as np

# Add the src directory to Python path to import local sparse_store
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_store import ZERO_TOLERANCE


def validate_store(store, expected, tol=1e-9):
    failed_positions = []
    expected = np.asarray(expected, dtype=np.float64)

    if store.shape != expected.shape:
        raise AssertionError(f"Store shape {store.shape} does not match expected shape {expected.shape}")

    dense = store.to_dense()
    for r in range(expected.shape[0]):
        for c in range(expected.shape[1]):
            if not np.isclose(dense[r, c], expected[r, c], rtol=0, atol=tol):
                print(f"Failed on position: ({r}, {c})")
                print(f"  difference: {dense[r, c] - expected[r, c]}")
                failed_positions.append((r, c))

    if len(failed_positions) > 0:
        raise AssertionError(f"Store check failed on positions: {failed_positions}")


def assert_store_invariants(store):
    """Check ordering, zero-free and bounds invariants directly on the store's rows."""
    row_ids = store._row_ids
    assert row_ids == sorted(set(row_ids)), f"row indices not strictly increasing: {row_ids}"
    assert [entry.index for entry in store._row_entries] == row_ids

    for entry in store._row_entries:
        assert len(entry) > 0, f"empty row {entry.index} retained"
        assert 0 <= entry.index < store.rows
        assert entry.cols == sorted(set(entry.cols)), f"columns of row {entry.index} not strictly increasing: {entry.cols}"
        assert len(entry.cols) == len(entry.values)
        for col, value in entry:
            assert 0 <= col < store.cols
            assert abs(value) >= ZERO_TOLERANCE, f"near-zero value {value} stored at ({entry.index}, {col})"


def random_dense(rng, shape, density=0.4):
    """Dense float array with roughly `density` of its entries non-zero."""
    values = rng.standard_normal(shape)
    mask = rng.random(shape) < density
    return values * mask
