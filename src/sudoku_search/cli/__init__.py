"""Command-line interface for the Sudoku search engine.

This module provides CLI commands for solving single puzzles, batch runs,
benchmarking and difficulty grading.
"""

from .main import main_cli
from .commands import (
    solve_command, batch_command, benchmark_command, grade_command, config_command,
    SudokuRunner
)
from .utils import setup_logging

__all__ = [
    'main_cli',
    'solve_command',
    'batch_command',
    'benchmark_command',
    'grade_command',
    'config_command',
    'SudokuRunner',
    'setup_logging'
]
