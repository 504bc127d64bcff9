"""Tests for batch result charts."""

import os

import matplotlib
matplotlib.use("Agg")

import pytest
from sudoku_validator.batch import BatchRecord, Visualizer


def conflict(kind, index, cells, reason="duplicate"):
    return {"kind": kind, "index": index, "value": 5, "reason": reason,
            "cells": [list(c) for c in cells]}


@pytest.fixture
def records():
    return [
        BatchRecord(0, "solved", "valid_complete", filled=81),
        BatchRecord(1, "partial", "valid_incomplete", filled=30),
        BatchRecord(2, "dup", "invalid", filled=2, conflicts=[
            conflict("row", 0, [(0, 0), (0, 1)]),
            conflict("square", 0, [(0, 0), (0, 1)]),
        ]),
        BatchRecord(3, "noisy", "invalid", filled=1, conflicts=[
            conflict("row", 2, [(2, 2)], "out_of_range"),
            conflict("column", 2, [(2, 2)], "out_of_range"),
            conflict("square", 0, [(2, 2)], "out_of_range"),
        ]),
        BatchRecord(4, "bad", "malformed", error="String length must be 81, got 3"),
    ]


class TestVisualizer:
    """Tests for Visualizer."""

    def test_conflict_matrix(self, records, tmp_path):
        matrix = Visualizer(records, str(tmp_path)).conflict_matrix()
        assert matrix[0, 0] == 1
        assert matrix[0, 1] == 1
        assert matrix[2, 2] == 1
        assert matrix.sum() == 3

    def test_generate_all(self, records, tmp_path):
        charts = Visualizer(records, str(tmp_path)).generate_all()
        assert [os.path.basename(c) for c in charts] == [
            "result_counts.png", "conflict_kinds.png", "conflict_heatmap.png"
        ]
        for chart in charts:
            assert os.path.getsize(chart) > 0

    def test_summary_table(self, records, tmp_path):
        path = Visualizer(records, str(tmp_path)).generate_summary_table()
        with open(path) as f:
            lines = f.read().splitlines()
        assert len(lines) == 4 + len(records)
        assert lines[-1] == "| 4 | bad | malformed | - | String length must be 81, got 3 |"
        assert lines[6] == "| 2 | dup | invalid | 2 | 2 |"

    def test_no_records(self, tmp_path):
        charts = Visualizer([], str(tmp_path / "empty")).generate_all()
        assert all(os.path.exists(c) for c in charts)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
