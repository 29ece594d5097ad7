from dataclasses import dataclass

from .constants import DisplayDefaults


@dataclass
class DisplayConfig:
    """
    Configuration for printing sparse stores.

    This class defines how the dense and sparse views render values and
    what prompt the interactive calculator shows.
    """

    precision: int = DisplayDefaults.PRECISION
    """Number of decimals printed for every value, in both the dense and the sparse view."""

    column_width: int = DisplayDefaults.COLUMN_WIDTH
    """Field width each value is right-aligned to in the dense view."""

    prompt: str = DisplayDefaults.PROMPT
    """Prompt shown after the calculator menu."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.precision, int) or self.precision < 0:
            raise ValueError(f"precision must be a non-negative integer, got {self.precision!r}")
        if not isinstance(self.column_width, int) or self.column_width < 1:
            raise ValueError(f"column_width must be a positive integer, got {self.column_width!r}")
