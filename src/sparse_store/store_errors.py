
class SparseStoreConfigError(ValueError):
    """Base class for sparse store construction and configuration errors."""
    pass

class SparseStoreRuntimeError(ValueError):
    """Base class for sparse store operation errors."""
    pass



class InvalidDimensionsError(SparseStoreConfigError):
    """Raised when a store is constructed with a non-positive row or column count."""

    def __init__(self, rows, cols, ndim: int = 2):
        self.rows = rows
        self.cols = cols
        self.ndim = ndim
        if ndim != 2:
            message = f"Matrix data must be 2-dimensional, got {ndim} dimensions"
        else:
            message = f"Matrix dimensions must be positive, got {rows}x{cols}"
        super().__init__(message)


class IndexOutOfBoundsError(SparseStoreRuntimeError, IndexError):
    """Raised when a row or column index falls outside the store's dimensions."""

    def __init__(self, row: int, col: int, shape: tuple[int, int]):
        self.row = row
        self.col = col
        self.shape = shape
        message = f"Index ({row}, {col}) out of range for {shape[0]}x{shape[1]} matrix"
        super().__init__(message)


class DimensionMismatchError(SparseStoreRuntimeError):
    """Raised when operand shapes are incompatible for add, subtract or multiply."""

    def __init__(self, operation: str, left_shape: tuple[int, int], right_shape: tuple[int, int]):
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape
        message = (
            f"Matrix dimensions do not match for {operation}: "
            f"{left_shape[0]}x{left_shape[1]} and {right_shape[0]}x{right_shape[1]}"
        )
        super().__init__(message)


class DivisionByZeroError(SparseStoreRuntimeError, ZeroDivisionError):
    """Raised when a scalar divisor is within the zero tolerance of 0."""

    def __init__(self, divisor: float):
        self.divisor = divisor
        message = f"Division by zero (divisor {divisor!r} is below the zero tolerance)"
        super().__init__(message)


class NotSquareError(SparseStoreRuntimeError):
    """Raised when a determinant or inverse is requested on a non-square store."""

    def __init__(self, operation: str, shape: tuple[int, int]):
        self.operation = operation
        self.shape = shape
        message = f"Matrix must be square to calculate {operation}, got {shape[0]}x{shape[1]}"
        super().__init__(message)


class UnsupportedSizeError(SparseStoreRuntimeError):
    """Raised when a determinant or inverse is requested for a size without a closed form."""

    def __init__(self, operation: str, size: int, max_size: int):
        self.operation = operation
        self.size = size
        self.max_size = max_size
        message = f"{operation.capitalize()} calculation for matrices larger than {max_size}x{max_size} not implemented (got {size}x{size})"
        super().__init__(message)


class SingularMatrixError(SparseStoreRuntimeError):
    """Raised when an inverse is requested for a matrix whose determinant is within the zero tolerance."""

    def __init__(self, determinant: float):
        self.determinant = determinant
        message = f"Matrix is singular, inverse does not exist (determinant {determinant!r})"
        super().__init__(message)
