from typing import Callable, Optional

from .config import DisplayConfig
from .constants import MenuChoice
from .display import format_dense, format_sparse
from .sparse_matrix import SparseMatrixStore
from .store_utils import from_dense, from_entries


class SparseMatrixCalculator:
    """
    Interactive menu around SparseMatrixStore.

    Every matrix the user creates, and every result an operation produces,
    is appended to ``self.matrices`` and addressed by its position there.
    All errors raised by the store are reported and the menu keeps running.
    """

    MENU_ITEMS = [
        (MenuChoice.CREATE, "Create a new matrix"),
        (MenuChoice.ADD, "Add two matrices"),
        (MenuChoice.SUBTRACT, "Subtract two matrices"),
        (MenuChoice.SCALAR_MULTIPLY, "Multiply by scalar"),
        (MenuChoice.MULTIPLY, "Multiply two matrices"),
        (MenuChoice.SCALAR_DIVIDE, "Divide by scalar"),
        (MenuChoice.TRANSPOSE, "Transpose a matrix"),
        (MenuChoice.DETERMINANT, "Calculate determinant"),
        (MenuChoice.INVERSE, "Calculate inverse"),
        (MenuChoice.VIEW_DENSE, "View matrix"),
        (MenuChoice.VIEW_SPARSE, "View sparse representation"),
        (MenuChoice.RUN_TESTS, "Run tests"),
        (MenuChoice.EXIT, "Exit"),
    ]

    def __init__(self,
                 config: DisplayConfig = DisplayConfig(),
                 input_fn: Optional[Callable[[str], str]] = None,
                 output_fn: Optional[Callable[[str], None]] = None):
        """
        Initialize the calculator

        Args:
            config: DisplayConfig used for every printed matrix and the menu prompt
            input_fn: Reads one line of user input, given a prompt (defaults to input)
            output_fn: Writes one block of text (defaults to print)
        """
        self.config = config
        self.config.validate()
        self.input_fn = input_fn if input_fn is not None else input
        self.output_fn = output_fn if output_fn is not None else print
        self.matrices: list[SparseMatrixStore] = []

        self._actions = {
            MenuChoice.CREATE: self.create_matrix,
            MenuChoice.ADD: lambda: self._binary_op(SparseMatrixStore.add),
            MenuChoice.SUBTRACT: lambda: self._binary_op(SparseMatrixStore.subtract),
            MenuChoice.SCALAR_MULTIPLY: lambda: self._scalar_op(SparseMatrixStore.scalar_multiply),
            MenuChoice.MULTIPLY: lambda: self._binary_op(SparseMatrixStore.multiply),
            MenuChoice.SCALAR_DIVIDE: lambda: self._scalar_op(SparseMatrixStore.scalar_divide),
            MenuChoice.TRANSPOSE: lambda: self._unary_op(SparseMatrixStore.transpose),
            MenuChoice.DETERMINANT: self.show_determinant,
            MenuChoice.INVERSE: lambda: self._unary_op(SparseMatrixStore.inverse),
            MenuChoice.VIEW_DENSE: lambda: self._view(format_dense),
            MenuChoice.VIEW_SPARSE: lambda: self._view(format_sparse),
            MenuChoice.RUN_TESTS: self.run_demo,
        }

    def menu_text(self) -> str:
        lines = ["", "=== SPARSE MATRIX CALCULATOR ==="]
        lines.extend(f"{choice}. {label}" for choice, label in self.MENU_ITEMS)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # input helpers
    # ------------------------------------------------------------------

    def _read_int(self, prompt: str) -> int:
        return int(self.input_fn(prompt).strip())

    def _read_float(self, prompt: str) -> float:
        return float(self.input_fn(prompt).strip())

    def _select_one(self) -> Optional[SparseMatrixStore]:
        if not self.matrices:
            self.output_fn("No matrices available. Create a matrix first.")
            return None
        idx = self._read_int(f"Enter index of matrix (0-{len(self.matrices) - 1}): ")
        if not 0 <= idx < len(self.matrices):
            self.output_fn("Invalid matrix index.")
            return None
        return self.matrices[idx]

    def _select_two(self) -> Optional[tuple[SparseMatrixStore, SparseMatrixStore]]:
        if len(self.matrices) < 2:
            self.output_fn("You need at least two matrices. Create more matrices.")
            return None
        last = len(self.matrices) - 1
        idx1 = self._read_int(f"Enter index of first matrix (0-{last}): ")
        idx2 = self._read_int(f"Enter index of second matrix (0-{last}): ")
        if not (0 <= idx1 <= last and 0 <= idx2 <= last):
            self.output_fn("Invalid matrix indices.")
            return None
        return self.matrices[idx1], self.matrices[idx2]

    def _store_result(self, result: SparseMatrixStore) -> None:
        self.matrices.append(result)
        self.output_fn(f"Result stored as matrix {len(self.matrices) - 1}")
        self.output_fn(format_dense(result, self.config))

    # ------------------------------------------------------------------
    # menu actions
    # ------------------------------------------------------------------

    def create_matrix(self) -> SparseMatrixStore:
        """Read the dimensions and then every element, row by row, and store the new matrix."""
        rows = self._read_int("Enter number of rows: ")
        cols = self._read_int("Enter number of columns: ")
        matrix = SparseMatrixStore(rows, cols)

        self.output_fn("Enter matrix elements row by row:")
        for i in range(rows):
            self.output_fn(f"Row {i}:")
            for j in range(cols):
                matrix.set(i, j, self._read_float(f"Element at position ({i}, {j}): "))

        self.matrices.append(matrix)
        self.output_fn(f"Matrix {len(self.matrices) - 1} created successfully.")
        return matrix

    def _binary_op(self, op: Callable[[SparseMatrixStore, SparseMatrixStore], SparseMatrixStore]) -> None:
        operands = self._select_two()
        if operands is None:
            return
        self._store_result(op(*operands))

    def _unary_op(self, op: Callable[[SparseMatrixStore], SparseMatrixStore]) -> None:
        matrix = self._select_one()
        if matrix is None:
            return
        self._store_result(op(matrix))

    def _scalar_op(self, op: Callable[[SparseMatrixStore, float], SparseMatrixStore]) -> None:
        matrix = self._select_one()
        if matrix is None:
            return
        scalar = self._read_float("Enter scalar value: ")
        self._store_result(op(matrix, scalar))

    def show_determinant(self) -> None:
        matrix = self._select_one()
        if matrix is None:
            return
        self.output_fn(f"Determinant: {matrix.determinant():g}")

    def _view(self, formatter: Callable[[SparseMatrixStore, DisplayConfig], str]) -> None:
        matrix = self._select_one()
        if matrix is None:
            return
        self.output_fn(formatter(matrix, self.config))

    def run_demo(self) -> None:
        """Walk through every operation on two fixed 2x2 matrices and a sparse 3x3 one."""
        show = self.output_fn
        show("=== RUNNING TESTS ===")

        m1 = from_dense([[1, 2], [3, 4]])
        m2 = from_dense([[5, 6], [7, 8]])

        show("Test 1: Addition")
        show("Matrix 1:")
        show(format_dense(m1, self.config))
        show("Matrix 2:")
        show(format_dense(m2, self.config))
        show("Result of addition:")
        show(format_dense(m1.add(m2), self.config) + "\n")

        show("Test 2: Subtraction")
        show("Result of subtraction (M1 - M2):")
        show(format_dense(m1.subtract(m2), self.config) + "\n")

        show("Test 3: Scalar multiplication")
        show("Result of M1 * 2.5:")
        show(format_dense(m1.scalar_multiply(2.5), self.config) + "\n")

        show("Test 4: Matrix multiplication")
        show("Result of M1 * M2:")
        show(format_dense(m1.multiply(m2), self.config) + "\n")

        show("Test 5: Transpose")
        show("Transpose of M1:")
        show(format_dense(m1.transpose(), self.config) + "\n")

        show("Test 6: Determinant")
        show(f"Determinant of M1: {m1.determinant():g}\n")

        show("Test 7: Inverse")
        try:
            m1_inv = m1.inverse()
        except ValueError as e:
            show(f"Error: {e}\n")
        else:
            show("Inverse of M1:")
            show(format_dense(m1_inv, self.config))
            show("Verification M1 * M1^-1:")
            show(format_dense(m1.multiply(m1_inv), self.config) + "\n")

        show("Test 8: Sparse representation")
        m3 = from_entries(3, 3, [(0, 0, 1), (0, 2, 3), (2, 1, 7)])
        show("Matrix:")
        show(format_dense(m3, self.config))
        show("Sparse representation:")
        show(format_sparse(m3, self.config) + "\n")

    # ------------------------------------------------------------------
    # main loop
    # ------------------------------------------------------------------

    def dispatch(self, choice: int) -> None:
        if choice == MenuChoice.EXIT:
            self.output_fn("Exiting program.")
            return
        action = self._actions.get(choice)
        if action is None:
            self.output_fn("Invalid choice. Please try again.")
            return
        action()

    def run(self) -> None:
        """Show the menu and run the chosen action until the user exits or input runs out."""
        choice = None
        while choice != MenuChoice.EXIT:
            self.output_fn(self.menu_text())
            try:
                choice = self._read_int(self.config.prompt)
                self.dispatch(choice)
            except EOFError:
                break
            except ValueError as e:
                self.output_fn(f"Error: {e}")


def main() -> None:
    SparseMatrixCalculator().run()
