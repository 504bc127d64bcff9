"""Batch module for validating files of boards."""

from .loader import BoardEntry, load_boards, parse_board
from .runner import BatchValidator, BatchRecord
from .visualizer import Visualizer

__all__ = ["BoardEntry", "load_boards", "parse_board", "BatchValidator", "BatchRecord", "Visualizer"]
