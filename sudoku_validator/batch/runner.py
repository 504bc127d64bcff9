"""Validation of many boards at once."""

from __future__ import annotations
import json
import logging
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..core.errors import MalformedBoardError
from ..core.validator import ValidationResult, validate_with_details
from .loader import BoardEntry

logger = logging.getLogger(__name__)

MALFORMED = "malformed"

RESULT_NAMES = [r.value for r in ValidationResult] + [MALFORMED]


@dataclass
class BatchRecord:
    """Outcome of validating one board."""
    board_id: int
    name: str
    result: str
    filled: Optional[int] = None
    conflicts: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.result in (
            ValidationResult.VALID_COMPLETE.value,
            ValidationResult.VALID_INCOMPLETE.value,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "board_id": self.board_id,
            "name": self.name,
            "result": self.result,
            "filled": self.filled,
            "conflicts": self.conflicts,
            "error": self.error,
        }


class BatchValidator:
    """
    Validates a list of boards and collects the outcome of each.

    Boards are independent, so with `workers > 1` they are spread over a
    thread pool. Records always come back in input order.
    """

    def __init__(self, workers: int = 1, strict: bool = False, show_progress: bool = True):
        """
        Initialize the batch validator.

        Args:
            workers: Number of threads used to validate boards.
            strict: Treat out-of-range cell values as malformed input.
            show_progress: Display a tqdm progress bar.
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.strict = strict
        self.show_progress = show_progress
        self.records: List[BatchRecord] = []

    def run(self, entries: List[BoardEntry]) -> List[BatchRecord]:
        """
        Validate every entry.

        Returns:
            List of BatchRecord objects, one per entry.
        """
        jobs = list(enumerate(entries))
        records = []

        with tqdm(total=len(jobs), desc="Validating", disable=not self.show_progress) as pbar:
            if self.workers == 1:
                for job in jobs:
                    records.append(self._validate_single(*job))
                    pbar.update(1)
            else:
                with ThreadPoolExecutor(max_workers=self.workers) as executor:
                    # map yields in input order on this thread
                    for record in executor.map(lambda job: self._validate_single(*job), jobs):
                        records.append(record)
                        pbar.update(1)

        self.records = records
        logger.info("Validated %d boards with %d worker(s)", len(self.records), self.workers)
        return self.records

    def _validate_single(self, board_id: int, entry: BoardEntry) -> BatchRecord:
        """Validate one board, turning malformed input into a record."""
        if entry.board is None:
            logger.debug("Skipping %s: %s", entry.name, entry.error)
            return BatchRecord(board_id, entry.name, MALFORMED, error=entry.error)

        try:
            report = validate_with_details(entry.board, strict=self.strict)
        except MalformedBoardError as e:
            logger.debug("Board %s is malformed: %s", entry.name, e)
            return BatchRecord(
                board_id, entry.name, MALFORMED,
                filled=entry.board.count_filled(), error=str(e)
            )

        return BatchRecord(
            board_id=board_id,
            name=entry.name,
            result=report.result.value,
            filled=entry.board.count_filled(),
            conflicts=[c.to_dict() for c in report.conflicts],
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from the last run."""
        counts = Counter(r.result for r in self.records)
        total = len(self.records)
        valid = sum(1 for r in self.records if r.is_valid)

        conflicts = [c for r in self.records for c in r.conflicts]
        return {
            "total_boards": total,
            "results": {name: counts.get(name, 0) for name in RESULT_NAMES},
            "valid_percent": valid / total * 100 if total else 0.0,
            "conflicts_by_kind": dict(Counter(c["kind"] for c in conflicts)),
            "conflicts_by_reason": dict(Counter(c["reason"] for c in conflicts)),
        }

    def save_results(self, output_dir: str) -> List[str]:
        """Save per-board records and the summary as JSON files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "validation_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.records], f, indent=2)

        summary_file = os.path.join(output_dir, "validation_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        logger.info("Results saved to %s", output_dir)
        return [results_file, summary_file]
