"""File formats and persistence for puzzles and benchmark data."""

from .io import (
    PuzzleFormatError, parse_rows, load_puzzle, format_rows, find_case_files,
    case_difficulty, grade_difficulty, write_benchmark_record, save_results,
    GRADES, GRADE_THRESHOLDS
)

__all__ = [
    'PuzzleFormatError',
    'parse_rows',
    'load_puzzle',
    'format_rows',
    'find_case_files',
    'case_difficulty',
    'grade_difficulty',
    'write_benchmark_record',
    'save_results',
    'GRADES',
    'GRADE_THRESHOLDS'
]
