"""Tests for the command-line interface."""

import json
import os

import matplotlib
matplotlib.use("Agg")

import pytest
from sudoku_validator.cli import EXIT_INVALID, EXIT_MALFORMED, EXIT_VALID, main


SOLVED = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


class TestValidateCommand:
    """Tests for `validate`."""

    def test_solved(self, capsys):
        assert run(["validate", "--board", SOLVED]) == EXIT_VALID
        out = capsys.readouterr().out
        assert "valid and complete" in out
        assert "Filled cells: 81/81" in out

    def test_incomplete(self, capsys):
        assert run(["validate", "--board", "0" + SOLVED[1:]]) == EXIT_VALID
        assert "still empty" in capsys.readouterr().out

    def test_invalid_with_details(self, capsys):
        board = SOLVED[1] + SOLVED[0] + SOLVED[2:]
        assert run(["validate", "--board", board, "--details"]) == EXIT_INVALID
        out = capsys.readouterr().out
        assert "invalid" in out
        assert "column 0: 3 repeated at (0, 0), (8, 0)" in out

    def test_malformed(self, capsys):
        assert run(["validate", "--board", "123"]) == EXIT_MALFORMED
        assert "Malformed board" in capsys.readouterr().out

    def test_file(self, tmp_path):
        path = tmp_path / "board.txt"
        path.write_text("\n".join(SOLVED[i:i + 9] for i in range(0, 81, 9)))
        assert run(["validate", "--file", str(path)]) == EXIT_VALID

    def test_missing_file(self, tmp_path, capsys):
        assert run(["validate", "--file", str(tmp_path / "none.txt")]) == EXIT_MALFORMED
        assert "Error reading board" in capsys.readouterr().out

    def test_file_not_utf8(self, tmp_path, capsys):
        path = tmp_path / "board.txt"
        path.write_bytes(b"\xff\xfe" + b"0" * 79)
        assert run(["validate", "--file", str(path)]) == EXIT_MALFORMED
        assert "Error reading board" in capsys.readouterr().out

    def test_no_command(self):
        assert run([]) == 1


class TestBatchCommand:
    """Tests for `batch`."""

    def test_batch(self, tmp_path, capsys):
        boards = tmp_path / "boards.json"
        boards.write_text(json.dumps([SOLVED, "0" * 81]))
        out_dir = tmp_path / "results"

        code = run(["batch", str(boards), "--output", str(out_dir), "--no-progress"])

        assert code == EXIT_VALID
        assert os.path.exists(out_dir / "validation_results.json")
        assert os.path.exists(out_dir / "conflict_heatmap.png")
        assert os.path.exists(out_dir / "summary_table.md")
        assert "Validation complete!" in capsys.readouterr().out

    def test_batch_with_invalid(self, tmp_path):
        boards = tmp_path / "boards.txt"
        boards.write_text(SOLVED + "\n" + "55" + "0" * 79 + "\n")
        code = run(["batch", str(boards), "-o", str(tmp_path / "out"),
                    "--no-charts", "--no-progress", "--workers", "2"])
        assert code == EXIT_INVALID
        assert not os.path.exists(tmp_path / "out" / "result_counts.png")

    def test_batch_config(self, tmp_path):
        boards = tmp_path / "boards.json"
        noisy = [[0] * 9 for _ in range(9)]
        noisy[0][0] = 10
        boards.write_text(json.dumps([noisy]))
        config = tmp_path / "config.json"
        config.write_text(json.dumps({
            "strict": True, "charts": False, "show_progress": False,
            "output_dir": str(tmp_path / "cfg_out"),
        }))

        assert run(["batch", str(boards), "--config", str(config)]) == EXIT_INVALID

        with open(tmp_path / "cfg_out" / "validation_results.json") as f:
            results = json.load(f)
        assert results[0]["result"] == "malformed"

    def test_bad_config(self, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"workers": -1}))
        assert run(["batch", "boards.json", "--config", str(config)]) == EXIT_MALFORMED
        assert "Config error" in capsys.readouterr().out

    def test_missing_input(self, tmp_path, capsys):
        assert run(["batch", str(tmp_path / "none.json"), "--no-progress"]) == EXIT_MALFORMED
        assert "Error loading boards" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
