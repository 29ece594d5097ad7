import pandas as pd

from .config import DisplayConfig
from .sparse_matrix import SparseMatrixStore


def format_dense(store: SparseMatrixStore, config: DisplayConfig = DisplayConfig()) -> str:
    """
    Render the full grid of a store, implicit zeros included.

    Args:
        store: Store to render
        config: Precision and column width of every value

    Returns:
        Multi-line string, header line first
    """
    lines = [f"Matrix {store.rows}x{store.cols}:"]
    if store.nonzero_count() == 0:
        lines.append("Empty matrix (all zeros)")
        return "\n".join(lines)

    dense = store.to_dense()
    for row in dense:
        lines.append(" ".join(f"{v:{config.column_width}.{config.precision}f}" for v in row))
    return "\n".join(lines)


def format_sparse(store: SparseMatrixStore, config: DisplayConfig = DisplayConfig()) -> str:
    """
    Render only the stored entries of a store, one tab-separated (row, col, value) per line.
    """
    lines = [f"Sparse representation of {store.rows}x{store.cols} matrix:", "Row\tColumn\tValue"]
    count = 0
    for r, c, v in store.enumerate():
        lines.append(f"{r}\t{c}\t{v:.{config.precision}f}")
        count += 1
    lines.append(f"Total non-zero elements: {count}")
    return "\n".join(lines)


def to_frame(store: SparseMatrixStore) -> pd.DataFrame:
    """Returns the stored entries as a DataFrame with columns row, col, value in traversal order."""
    df = pd.DataFrame(list(store.enumerate()), columns=['row', 'col', 'value'])
    return df.astype({'row': 'int64', 'col': 'int64', 'value': 'float64'})
