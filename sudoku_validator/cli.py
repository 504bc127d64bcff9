"""Command-line interface for the Sudoku validator."""

import argparse
import logging
import sys

from .batch import BatchValidator, Visualizer, load_boards
from .config import load_config
from .core.board import SudokuBoard
from .core.errors import ConfigError, MalformedBoardError, ValidatorError
from .core.validator import validate_with_details

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_MALFORMED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-validator",
        description="Check Sudoku boards for rule violations and completeness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a single board (0 or . for empty cells)
  sudoku-validator validate --board "530070000600195000..."

  # Check a board written as a 9-line grid, listing every conflict
  sudoku-validator validate --file board.txt --details

  # Check a file of boards and write results and charts
  sudoku-validator batch boards.json --output results/ --workers 4
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    val_parser = subparsers.add_parser("validate", help="Validate a single board")
    source = val_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--board", "-b", type=str,
        help="Board string (81 chars, 0 or . for empty cells)"
    )
    source.add_argument(
        "--file", "-f", type=str,
        help="Text file holding one board; whitespace and line breaks are ignored"
    )
    val_parser.add_argument(
        "--strict", action="store_true",
        help="Reject out-of-range cell values as malformed input"
    )
    val_parser.add_argument(
        "--details", "-d", action="store_true",
        help="List every conflicting row, column and square"
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Validate a file of boards")
    batch_parser.add_argument(
        "input", type=str,
        help="JSON list of boards, or a text file with one board per line"
    )
    batch_parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON config file with batch settings"
    )
    batch_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output directory for results (default: results)"
    )
    batch_parser.add_argument(
        "--workers", "-w", type=int, default=None,
        help="Number of validation threads (default: 1)"
    )
    batch_parser.add_argument(
        "--strict", action="store_true", default=None,
        help="Count out-of-range cell values as malformed boards"
    )
    batch_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    batch_parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "validate":
        sys.exit(cmd_validate(args))
    elif args.command == "batch":
        sys.exit(cmd_batch(args))


def _read_board(args) -> SudokuBoard:
    if args.board is not None:
        return SudokuBoard.from_string(args.board)
    with open(args.file, "r") as f:
        return SudokuBoard.from_string(f.read())


def cmd_validate(args) -> int:
    """Handle the validate command."""
    try:
        board = _read_board(args)
        report = validate_with_details(board, strict=args.strict)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading board: {e}")
        return EXIT_MALFORMED
    except MalformedBoardError as e:
        print(f"Malformed board: {e}")
        return EXIT_MALFORMED

    print(board)
    print()
    print(report.message)
    print(f"Filled cells: {board.count_filled()}/81")

    if args.details and report.conflicts:
        print("\nConflicts:")
        for conflict in report.conflicts:
            print(f"  - {conflict}")

    return EXIT_VALID if report.is_valid else EXIT_INVALID


def cmd_batch(args) -> int:
    """Handle the batch command."""
    try:
        config = load_config(args.config).override(
            workers=args.workers,
            strict=args.strict,
            output_dir=args.output,
            charts=False if args.no_charts else None,
            show_progress=False if args.no_progress else None,
        )
    except ConfigError as e:
        print(f"Config error: {e}")
        return EXIT_MALFORMED

    try:
        entries = load_boards(args.input)
    except (OSError, ValueError, ValidatorError) as e:
        print(f"Error loading boards: {e}")
        return EXIT_MALFORMED

    print("=" * 60)
    print("SUDOKU BOARD VALIDATION")
    print("=" * 60)
    print(f"Input: {args.input} ({len(entries)} boards)")
    print(f"Workers: {config.workers}")
    print(f"Strict: {config.strict}")
    print(f"Output directory: {config.output_dir}")
    print("=" * 60)

    validator = BatchValidator(
        workers=config.workers,
        strict=config.strict,
        show_progress=config.show_progress,
    )
    records = validator.run(entries)
    summary = validator.get_summary()

    print("\nResults:")
    print("-" * 50)
    for name, count in summary["results"].items():
        print(f"  {name.replace('_', ' ').capitalize()}: {count}")
    print(f"  Valid: {summary['valid_percent']:.1f}%")

    validator.save_results(config.output_dir)

    if config.charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(records, config.output_dir)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {config.output_dir}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Validation complete!")

    return EXIT_VALID if all(r.is_valid for r in records) else EXIT_INVALID


if __name__ == "__main__":
    main()
