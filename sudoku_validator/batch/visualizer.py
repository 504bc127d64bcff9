"""Charts for batch validation results."""

from __future__ import annotations
import os
from collections import Counter
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from ..core.board import GROUP_KINDS, SIZE
from .runner import RESULT_NAMES, BatchRecord


class Visualizer:
    """
    Chart generator for a batch of validated boards.

    Shows how the boards were classified and where their conflicts sit.
    """

    COLORS = {
        "valid_complete": "#2ecc71",    # Green
        "valid_incomplete": "#3498db",  # Blue
        "invalid": "#e74c3c",           # Red
        "malformed": "#95a5a6",         # Grey
    }

    def __init__(self, records: List[BatchRecord], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            records: Records from BatchValidator.run.
            output_dir: Directory to save generated charts.
        """
        self.records = records
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_result_counts(),
            self.plot_conflict_kinds(),
            self.plot_conflict_heatmap(),
        ]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_result_counts(self) -> str:
        """Bar chart of how many boards fell into each classification."""
        fig, ax = plt.subplots(figsize=(10, 6))

        counts = Counter(r.result for r in self.records)
        values = [counts.get(name, 0) for name in RESULT_NAMES]
        labels = [name.replace("_", " ").capitalize() for name in RESULT_NAMES]
        colors = [self.COLORS[name] for name in RESULT_NAMES]

        bars = ax.bar(labels, values, color=colors, edgecolor='black', linewidth=0.5)

        for bar, value in zip(bars, values):
            ax.annotate(f'{value}',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Result', fontsize=12)
        ax.set_ylabel('Boards', fontsize=12)
        ax.set_title('Validation Results', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("result_counts.png")

    def plot_conflict_kinds(self) -> str:
        """Grouped bars of conflicts per group kind, split by reason."""
        fig, ax = plt.subplots(figsize=(10, 6))

        conflicts = [c for r in self.records for c in r.conflicts]
        reasons = ["duplicate", "out_of_range"]
        x = np.arange(len(GROUP_KINDS))
        width = 0.8 / len(reasons)

        for i, reason in enumerate(reasons):
            counts = [
                sum(1 for c in conflicts if c["kind"] == kind and c["reason"] == reason)
                for kind in GROUP_KINDS
            ]
            offset = (i - len(reasons) / 2 + 0.5) * width
            ax.bar(x + offset, counts, width,
                   label=reason.replace("_", " "),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Group', fontsize=12)
        ax.set_ylabel('Conflicts', fontsize=12)
        ax.set_title('Conflicts by Group Kind', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([k.capitalize() for k in GROUP_KINDS])
        ax.legend(title='Reason')
        ax.set_ylim(bottom=0)

        return self._save("conflict_kinds.png")

    def conflict_matrix(self) -> np.ndarray:
        """
        Count, per cell, how many boards have that cell in a conflict.

        A cell caught by several groups of the same board counts once.
        """
        matrix = np.zeros((SIZE, SIZE), dtype=np.int64)
        for record in self.records:
            cells = {tuple(cell) for c in record.conflicts for cell in c["cells"]}
            for row, col in cells:
                matrix[row, col] += 1
        return matrix

    def plot_conflict_heatmap(self) -> str:
        """Heatmap of conflicting cells across all boards."""
        plt.figure(figsize=(8, 7))
        ax = sns.heatmap(self.conflict_matrix(), annot=True, fmt='d', cmap='YlOrRd',
                         square=True, cbar_kws={'label': 'Boards'})

        # Square borders
        for k in range(0, SIZE + 1, 3):
            ax.axhline(k, color='black', linewidth=2)
            ax.axvline(k, color='black', linewidth=2)

        ax.set_xlabel('Column', fontsize=12)
        ax.set_ylabel('Row', fontsize=12)
        ax.set_title('Cells Involved in Conflicts', fontsize=14, fontweight='bold')

        return self._save("conflict_heatmap.png")

    def generate_summary_table(self) -> str:
        """Write a markdown table with one line per board."""
        lines = [
            "# Validation Results",
            "",
            "| # | Board | Result | Filled | Conflicts |",
            "|---|-------|--------|--------|-----------|",
        ]
        for r in self.records:
            filled = "-" if r.filled is None else str(r.filled)
            detail = r.error if r.error else str(len(r.conflicts))
            lines.append(f"| {r.board_id} | {r.name} | {r.result} | {filled} | {detail} |")

        path = os.path.join(self.output_dir, "summary_table.md")
        with open(path, "w") as f:
            f.write("\n".join(lines) + "\n")
        return path
