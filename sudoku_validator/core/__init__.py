"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard
from .errors import ValidatorError, MalformedBoardError, ConfigError
from .validator import (
    ValidationResult,
    ValidationReport,
    Conflict,
    check_group,
    validate,
    validate_with_details,
    find_conflicts,
    is_valid_board,
    is_solved,
)

__all__ = [
    "SudokuBoard",
    "ValidatorError",
    "MalformedBoardError",
    "ConfigError",
    "ValidationResult",
    "ValidationReport",
    "Conflict",
    "check_group",
    "validate",
    "validate_with_details",
    "find_conflicts",
    "is_valid_board",
    "is_solved",
]
