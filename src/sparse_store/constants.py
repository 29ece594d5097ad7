ZERO_TOLERANCE = 1e-10  # values with a smaller magnitude are treated as exactly zero

MAX_CLOSED_FORM_SIZE = 3  # determinant / inverse are closed form up to 3x3


class DisplayDefaults:
    PRECISION = 2
    COLUMN_WIDTH = 8
    PROMPT = "Enter your choice: "


class MenuChoice:
    EXIT = 0
    CREATE = 1
    ADD = 2
    SUBTRACT = 3
    SCALAR_MULTIPLY = 4
    MULTIPLY = 5
    SCALAR_DIVIDE = 6
    TRANSPOSE = 7
    DETERMINANT = 8
    INVERSE = 9
    VIEW_DENSE = 10
    VIEW_SPARSE = 11
    RUN_TESTS = 12
