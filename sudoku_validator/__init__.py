"""Validation of Sudoku boards read from photographed puzzles."""

from .core import (
    SudokuBoard,
    MalformedBoardError,
    ValidationResult,
    ValidationReport,
    validate,
    validate_with_details,
)

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "MalformedBoardError",
    "ValidationResult",
    "ValidationReport",
    "validate",
    "validate_with_details",
]
