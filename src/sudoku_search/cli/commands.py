"""CLI command implementations."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from sudoku_search.config import ConfigManager, ConfigValidationError, PACKAGE_LOGGER
from sudoku_search.core.constants import Algorithm
from sudoku_search.core.data_models import SearchResult
from sudoku_search.core import grid as grid_ops
from sudoku_search.integration.io import (
    parse_rows, load_puzzle, find_case_files, case_difficulty, grade_difficulty,
    write_benchmark_record, save_results
)
from sudoku_search.search.solver import SudokuSolver

from .utils import ProgressReporter, create_result_summary, print_summary

logger = logging.getLogger(__name__)


class SudokuRunner:
    """Runs the search engine with settings taken from the configuration."""

    def __init__(self,
                 config_overrides: Optional[List[str]] = None,
                 config_dir: Optional[str] = None):
        """Initialize the runner.

        Args:
            config_overrides: Hydra overrides, e.g. ``search.astar.heuristic=manhattan``
            config_dir: Configuration directory (project ``conf`` if None)
        """
        self.config_manager = ConfigManager(config_dir)
        self.config = self.config_manager.load_config(overrides=config_overrides or [])
        self.search_config = self.config_manager.search_config()
        self.default_algorithm = Algorithm.from_code(
            self.config_manager.get_parameter('solver.algorithm', 'A'))

        logger.debug(f"Search settings: {self.search_config}")

    def solve(self, start_grid: Any, algorithm: Optional[str] = None) -> SearchResult:
        chosen = Algorithm.from_code(algorithm) if algorithm else self.default_algorithm
        solver = SudokuSolver(start_grid, algorithm=chosen, config=self.search_config)
        return solver.solve()

    @property
    def data_dir(self) -> str:
        return str(self.config_manager.get_parameter('io.benchmark.data_dir', 'data'))


def _config_overrides(args, extra: Optional[List[str]] = None) -> List[str]:
    overrides = list(getattr(args, 'config', None) or [])
    if extra:
        overrides.extend(extra)
    return overrides


def _make_runner(args, extra: Optional[List[str]] = None) -> SudokuRunner:
    runner = SudokuRunner(_config_overrides(args, extra), getattr(args, 'config_dir', None))
    # -v and -q take precedence over solver.log_level
    if getattr(args, 'verbose', 0) or getattr(args, 'quiet', False):
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)
    else:
        runner.config_manager.apply_log_level()
    return runner


def _load_start_grid(puzzle: List[str]):
    """Puzzle given as a single case file path or as nine row strings."""
    if len(puzzle) == 1 and Path(puzzle[0]).is_file():
        logger.info(f"Loading puzzle from {puzzle[0]}")
        return load_puzzle(puzzle[0])
    return parse_rows(puzzle)


def _render(grid, python_style: bool) -> str:
    if python_style:
        return grid_ops.format_grid_python_style(grid)
    return grid_ops.format_grid(grid)


def solve_command(args) -> int:
    """Handle solve command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        start_grid = _load_start_grid(args.puzzle)

        extra = []
        if args.max_depth is not None:
            extra.append(f"search.iddfs.max_depth={args.max_depth}")

        runner = _make_runner(args, extra)
        result = runner.solve(start_grid, args.algorithm)

        if args.output:
            save_results(result.to_dict(), args.output)
            logger.info(f"Results saved to {args.output}")

        if result.termination_reason == 'invalid_grid':
            print("Invalid grid")
            return 1

        if not args.quiet:
            print("Solving the following grid:")
            print(_render(result.start_grid, args.python_style))
            print()

            if result.success:
                print("Solution found\n")
                print(_render(result.solution, args.python_style))
            else:
                print("No solution found\n")
            print()

            print(f"Algorithm: {result.algorithm.display_name}")
            print(f"Total time: {result.computation_time * 1000:.3f} ms")
            print(f"Total expanded states: {result.expanded_states}")

        return 0 if result.success else 1

    except Exception as e:
        logger.error(f"Solve command failed: {e}")
        return 1


def batch_command(args) -> int:
    """Handle batch command."""
    try:
        logger.info(f"Finding case files in {args.input_path}")
        case_files = find_case_files(args.input_path, args.max_cases)

        if not case_files:
            logger.error("No case files found")
            return 1

        logger.info(f"Found {len(case_files)} case files")

        runner = _make_runner(args)

        results = []
        progress = ProgressReporter(len(case_files), args.report_interval)

        def process_single_case(case_file: Path) -> Dict[str, Any]:
            try:
                result = runner.solve(load_puzzle(case_file), args.algorithm).to_dict()
                result['case_file'] = str(case_file)
                return result
            except Exception as e:
                logger.error(f"Failed to process {case_file}: {e}")
                return {
                    'success': False,
                    'error': str(e),
                    'case_file': str(case_file),
                    'computation_time': 0.0,
                    'expanded_states': 0
                }

        start_time = time.perf_counter()
        for case_file in case_files:
            result = process_single_case(case_file)
            results.append(result)
            if not args.quiet:
                progress.update(result['success'], result['expanded_states'])
        total_time = time.perf_counter() - start_time

        summary = create_result_summary(results)
        summary.update({
            'batch_settings': {
                'input_path': str(args.input_path),
                'algorithm': args.algorithm or runner.default_algorithm.value,
                'max_cases': args.max_cases
            },
            'timestamp': time.time(),
            'wall_clock_time': total_time
        })

        if args.output:
            save_results({'summary': summary, 'results': results}, args.output)
            logger.info(f"Results saved to {args.output}")

        if not args.quiet:
            print_summary(summary)

        return 0 if summary['failed_cases'] == 0 else 1

    except Exception as e:
        logger.error(f"Batch command failed: {e}")
        return 1


def benchmark_command(args) -> int:
    """Handle benchmark command.

    Every algorithm is run on every case; one ``caseNNN TIME EXPANDED`` line
    per run is appended to the algorithm's data file for the case's grade.
    """
    try:
        algorithms = [Algorithm.from_code(code) for code in args.algorithms]
        case_files = find_case_files(args.input_path, args.max_cases)

        if not case_files:
            logger.error("No case files found")
            return 1

        runner = _make_runner(args)
        data_dir = Path(args.data_dir or runner.data_dir)

        records = []
        for case_file in case_files:
            difficulty = case_difficulty(case_file)
            start_grid = load_puzzle(case_file)

            if not args.quiet:
                print(f"Running {case_file.stem} in {difficulty}")

            for algorithm in algorithms:
                result = runner.solve(start_grid, algorithm.value)
                time_ms = result.computation_time * 1000
                write_benchmark_record(data_dir, difficulty, algorithm.display_name,
                                       case_file.stem, time_ms, result.expanded_states)
                records.append({
                    'case': case_file.stem,
                    'difficulty': difficulty,
                    'algorithm': algorithm.display_name,
                    'success': result.success,
                    'time_ms': time_ms,
                    'expanded_states': result.expanded_states
                })

        if args.output:
            save_results({'records': records}, args.output)

        if not args.quiet:
            print(f"Benchmark finished! Data written to {data_dir}")
        return 0

    except Exception as e:
        logger.error(f"Benchmark command failed: {e}")
        return 1


def grade_command(args) -> int:
    """Handle grade command: BFS effort decides each puzzle's grade."""
    try:
        case_files = find_case_files(args.input_path, args.max_cases)

        if not case_files:
            logger.error("No case files found")
            return 1

        runner = _make_runner(args)

        grades = []
        for case_file in case_files:
            result = runner.solve(load_puzzle(case_file), Algorithm.BFS.value)
            grade = grade_difficulty(result.expanded_states)
            grades.append({
                'case_file': str(case_file),
                'expanded_states': result.expanded_states,
                'grade': grade
            })
            if not args.quiet:
                print(f"{case_file.name}: {grade} ({result.expanded_states} expanded states)")

        if args.output:
            save_results({'grades': grades}, args.output)

        return 0

    except Exception as e:
        logger.error(f"Grade command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command."""
    try:
        if args.config_action == 'show':
            manager = ConfigManager(getattr(args, 'config_dir', None))
            manager.load_config(overrides=_config_overrides(args))
            print("Current Configuration:")
            print("=" * 50)
            print(manager.to_yaml())
            return 0

        elif args.config_action == 'validate':
            try:
                manager = ConfigManager(getattr(args, 'config_dir', None))
                manager.load_config(overrides=_config_overrides(args), validate=True)
                print("✅ Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"❌ Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
