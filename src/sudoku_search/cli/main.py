"""Main CLI entry point for the Sudoku search engine."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='sudoku-search',
        description='Sudoku solver - state-space search with BFS, IDDFS, UCS, A* and greedy best-first',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sudoku-search solve 530070000 600195000 098000060 800060003 400080001 \\
                      700020006 060000280 000419005 000080079 -a A
  sudoku-search solve inputs/easy/case001.in --algorithm I --max-depth 40
  sudoku-search batch inputs/ --algorithm G
  sudoku-search benchmark inputs/ --algorithms BIAUG --data-dir data
  sudoku-search grade inputs/
  sudoku-search config show
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        action='append',
        help='Configuration override, repeatable (e.g., search.astar.heuristic=manhattan)'
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        help='Configuration directory (default: the project conf/ directory)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Solve a single puzzle',
        description='Solve a puzzle given as nine digit rows (0 = empty) or a case file'
    )

    solve_parser.add_argument(
        'puzzle',
        nargs='+',
        help='Nine rows of nine digits, or the path of a case file'
    )

    solve_parser.add_argument(
        '--algorithm', '-a',
        type=str,
        help='B (BFS), I (IDDFS), U (UCS), A (A*) or G (greedy); default from config'
    )

    solve_parser.add_argument(
        '--max-depth',
        type=int,
        help='Largest IDDFS depth limit (default: number of empty cells)'
    )

    solve_parser.add_argument(
        '--python-style',
        action='store_true',
        help='Print grids as nested lists'
    )

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Solve multiple puzzles',
        description='Solve every case file in a directory tree or file list'
    )

    batch_parser.add_argument(
        'input_path',
        type=str,
        help='Directory containing .in files or file with list of paths'
    )

    batch_parser.add_argument(
        '--algorithm', '-a',
        type=str,
        help='Algorithm code (default from config)'
    )

    batch_parser.add_argument(
        '--max-cases',
        type=int,
        help='Maximum number of puzzles to process'
    )

    batch_parser.add_argument(
        '--report-interval',
        type=int,
        default=10,
        help='Progress report interval (default: 10)'
    )

    # Benchmark command
    benchmark_parser = subparsers.add_parser(
        'benchmark',
        help='Benchmark algorithms over case files',
        description='Append per-case time and expanded states to per-algorithm data files'
    )

    benchmark_parser.add_argument(
        'input_path',
        type=str,
        help='Directory containing graded case files'
    )

    benchmark_parser.add_argument(
        '--algorithms',
        type=str,
        default='BIAUG',
        help='Algorithm codes to run (default: BIAUG)'
    )

    benchmark_parser.add_argument(
        '--data-dir',
        type=str,
        help='Directory for .dat files (default: io.benchmark.data_dir)'
    )

    benchmark_parser.add_argument(
        '--max-cases',
        type=int,
        help='Maximum number of puzzles to process'
    )

    # Grade command
    grade_parser = subparsers.add_parser(
        'grade',
        help='Grade puzzle difficulty',
        description='Grade each puzzle by the number of states BFS expands'
    )

    grade_parser.add_argument(
        'input_path',
        type=str,
        help='Case file, directory or file list'
    )

    grade_parser.add_argument(
        '--max-cases',
        type=int,
        help='Maximum number of puzzles to process'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Inspect and validate the solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def _log_level(parsed_args: argparse.Namespace) -> int:
    """-q wins over -v; each -v lowers the threshold one step."""
    if parsed_args.quiet:
        return logging.ERROR
    return {0: logging.WARNING, 1: logging.INFO}.get(parsed_args.verbose, logging.DEBUG)


def main_cli(args: Optional[List[str]] = None) -> int:
    """Parse arguments and run the chosen subcommand.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        0 on success, 1 on failure, 130 when interrupted
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    setup_logging(_log_level(parsed_args))
    logger = logging.getLogger(__name__)

    if not parsed_args.command:
        parser.print_help()
        return 1

    handler = getattr(commands, f"{parsed_args.command}_command", None)
    if handler is None:
        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    try:
        return handler(parsed_args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Console-script entry point."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
