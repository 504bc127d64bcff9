"""Reading boards from puzzle files."""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..core.board import SudokuBoard
from ..core.errors import MalformedBoardError, ValidatorError

logger = logging.getLogger(__name__)


@dataclass
class BoardEntry:
    """One board read from a file, or the reason it could not be read."""
    name: str
    board: Optional[SudokuBoard] = None
    error: Optional[str] = None


def parse_board(data: Any) -> SudokuBoard:
    """
    Build a board from a JSON value.

    Accepts an 81-character string or a 9x9 list of integers.

    Raises:
        MalformedBoardError: If `data` has neither form.
    """
    if isinstance(data, str):
        return SudokuBoard.from_string(data)
    if isinstance(data, list):
        return SudokuBoard.from_2d_list(data)
    raise MalformedBoardError(f"Expected a string or a 9x9 list, got {type(data).__name__}")


def _entry_from_json(item: Any, default_name: str) -> BoardEntry:
    name = default_name
    data = item
    if isinstance(item, dict):
        name = str(item.get("name", default_name))
        if "board" not in item:
            return BoardEntry(name, error="Entry has no 'board' field")
        data = item["board"]

    try:
        return BoardEntry(name, board=parse_board(data))
    except MalformedBoardError as e:
        return BoardEntry(name, error=str(e))


def load_boards_from_json(path: str) -> List[BoardEntry]:
    """
    Load boards from a JSON file holding a list of entries.

    Each entry is an 81-character string, a 9x9 list, or an object with a
    "board" field (either form) and an optional "name".
    """
    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValidatorError(f"{path} must hold a JSON list of boards")

    return [_entry_from_json(item, f"board_{i}") for i, item in enumerate(data, 1)]


def load_boards_from_text(path: str) -> List[BoardEntry]:
    """Load boards from a text file, one 81-character board per line. '#' starts a comment line."""
    entries = []
    with open(path, "r") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            name = f"line_{line_no}"
            try:
                entries.append(BoardEntry(name, board=SudokuBoard.from_string(line)))
            except MalformedBoardError as e:
                entries.append(BoardEntry(name, error=str(e)))
    return entries


def load_boards(path: str) -> List[BoardEntry]:
    """
    Load boards from a JSON (.json) or plain text file.

    Entries that cannot be parsed are returned with their error set
    instead of aborting the load.
    """
    if path.lower().endswith(".json"):
        entries = load_boards_from_json(path)
    else:
        entries = load_boards_from_text(path)

    bad = sum(1 for e in entries if e.error is not None)
    logger.info("Loaded %d boards from %s (%d malformed)", len(entries), path, bad)
    return entries
