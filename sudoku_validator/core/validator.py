"""Validation of Sudoku boards."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from .board import SIZE, BoardLike, SudokuBoard, group_cells
from .errors import MalformedBoardError


class ValidationResult(Enum):
    """Classification of a board."""
    INVALID = "invalid"
    VALID_COMPLETE = "valid_complete"
    VALID_INCOMPLETE = "valid_incomplete"

    @property
    def is_valid(self) -> bool:
        return self is not ValidationResult.INVALID

    @property
    def message(self) -> str:
        """Sentence shown to the user for this result."""
        messages = {
            ValidationResult.INVALID: "The board is invalid: a row, column or square breaks the rules.",
            ValidationResult.VALID_COMPLETE: "The board is valid and complete. Puzzle solved!",
            ValidationResult.VALID_INCOMPLETE: "The board is valid so far, but some cells are still empty.",
        }
        return messages[self]


@dataclass(frozen=True)
class Conflict:
    """A value that breaks the rules of one row, column or square."""
    kind: str
    index: int
    value: int
    reason: str
    cells: Tuple[Tuple[int, int], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "kind": self.kind,
            "index": self.index,
            "value": self.value,
            "reason": self.reason,
            "cells": [list(cell) for cell in self.cells],
        }

    def __str__(self) -> str:
        where = ", ".join(f"({r}, {c})" for r, c in self.cells)
        if self.reason == "out_of_range":
            return f"{self.kind} {self.index}: value {self.value} is out of range at {where}"
        return f"{self.kind} {self.index}: {self.value} repeated at {where}"


@dataclass
class ValidationReport:
    """Classification of a board together with every conflict found."""
    result: ValidationResult
    conflicts: List[Conflict] = field(default_factory=list)
    empty_cells: int = 0

    @property
    def is_valid(self) -> bool:
        return self.result.is_valid

    @property
    def is_complete(self) -> bool:
        return self.empty_cells == 0

    @property
    def first_conflict(self) -> Optional[Conflict]:
        return self.conflicts[0] if self.conflicts else None

    @property
    def message(self) -> str:
        return self.result.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.value,
            "empty_cells": self.empty_cells,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


def check_group(values: Iterable[int]) -> bool:
    """
    Check one row, column or square.

    Empty cells (0) are skipped. The group fails on a value outside 1-9
    or on a repeated value.

    Args:
        values: The nine cell values of the group.

    Returns:
        True if the group breaks no rule.
    """
    seen = 0
    for value in values:
        value = int(value)
        if value == 0:
            continue
        if value < 1 or value > SIZE:
            return False
        bit = 1 << value
        if seen & bit:
            return False
        seen |= bit
    return True


def _check_range(board: SudokuBoard) -> None:
    bad = np.argwhere((board.grid < 0) | (board.grid > SIZE))
    if len(bad):
        row, col = (int(x) for x in bad[0])
        raise MalformedBoardError(
            f"Cell ({row}, {col}) holds {board.get(row, col)}, expected a value in 0-{SIZE}"
        )


def _classify(board: SudokuBoard, has_conflict: bool) -> ValidationResult:
    if has_conflict:
        return ValidationResult.INVALID
    if board.is_complete():
        return ValidationResult.VALID_COMPLETE
    return ValidationResult.VALID_INCOMPLETE


def validate(board: BoardLike, strict: bool = False) -> ValidationResult:
    """
    Classify a board as invalid, valid and complete, or valid and incomplete.

    Rows are checked first, then columns, then squares; the first failing
    group ends the check.

    Args:
        board: A SudokuBoard, a 9x9 nested list or a 9x9 integer array.
        strict: Raise MalformedBoardError for cell values outside 0-9
            instead of returning INVALID.

    Returns:
        The ValidationResult of the board.

    Raises:
        MalformedBoardError: If `board` is not a 9x9 grid of integers.
    """
    board = SudokuBoard.coerce(board)
    if strict:
        _check_range(board)

    has_conflict = any(not check_group(values) for _, _, values in board.iter_groups())
    return _classify(board, has_conflict)


def find_conflicts(board: BoardLike) -> List[Conflict]:
    """
    List every rule violation on the board.

    All 27 groups are inspected. A value out of range is reported once for
    each group it sits in. Conflicts come in group order: rows, columns,
    then squares, each by index.
    """
    board = SudokuBoard.coerce(board)
    conflicts = []

    for kind, index, values in board.iter_groups():
        positions: Dict[int, List[Tuple[int, int]]] = {}
        for cell, value in zip(group_cells(kind, index), values):
            value = int(value)
            if value != 0:
                positions.setdefault(value, []).append(cell)

        for value, cells in positions.items():
            if value < 1 or value > SIZE:
                reason = "out_of_range"
            elif len(cells) > 1:
                reason = "duplicate"
            else:
                continue
            conflicts.append(Conflict(kind, index, value, reason, tuple(cells)))

    return conflicts


def validate_with_details(board: BoardLike, strict: bool = False) -> ValidationReport:
    """
    Classify a board and report where it breaks the rules.

    The report's result is always the same as `validate(board)`.
    """
    board = SudokuBoard.coerce(board)
    if strict:
        _check_range(board)

    conflicts = find_conflicts(board)
    return ValidationReport(
        result=_classify(board, bool(conflicts)),
        conflicts=conflicts,
        empty_cells=board.count_empty(),
    )


def is_valid_board(board: BoardLike) -> bool:
    """Check if the board state has no conflicts. Empty cells are allowed."""
    return validate(board).is_valid


def is_solved(board: BoardLike) -> bool:
    """Check if the board is completely and correctly filled."""
    return validate(board) is ValidationResult.VALID_COMPLETE
