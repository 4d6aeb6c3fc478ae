"""Puzzle loading, case discovery and result persistence.

Case files hold the nine rows of a puzzle as whitespace-separated strings
of nine digits, ``0`` marking an empty cell::

    530070000 600195000 098000060 800060003 400080001 700000006 000000000 000000000 000000000

Graded collections keep each ``caseNNN.in`` under a directory named after
its difficulty grade (``super_easy`` ... ``super_hard``).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import numpy as np

from sudoku_search.core.constants import GRID_SIZE

logger = logging.getLogger(__name__)

CASE_SUFFIX = '.in'

# Minimum BFS expansions for each grade, hardest first
GRADE_THRESHOLDS = (
    ('super_hard', 500000),
    ('hard', 100000),
    ('medium', 25000),
    ('easy', 1000),
)
DEFAULT_GRADE = 'super_easy'
GRADES = tuple(name for name, _ in GRADE_THRESHOLDS) + (DEFAULT_GRADE,)


class PuzzleFormatError(ValueError):
    """Raised when puzzle text cannot be turned into a grid."""
    pass


def parse_rows(rows: Sequence[str]) -> np.ndarray:
    """Build a grid from nine row strings.

    Args:
        rows: Nine strings of nine digits each, ``0`` for empty

    Returns:
        9x9 int32 grid

    Raises:
        PuzzleFormatError: On a wrong row count, row length or character
    """
    if len(rows) != GRID_SIZE:
        raise PuzzleFormatError(f"Expected {GRID_SIZE} rows, got {len(rows)}")

    grid = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.int32)
    for i, row in enumerate(rows):
        row = row.strip()
        if len(row) != GRID_SIZE:
            raise PuzzleFormatError(
                f"Row {i} must have {GRID_SIZE} digits, got {len(row)}: '{row}'"
            )
        for j, char in enumerate(row):
            if not char.isdigit():
                raise PuzzleFormatError(f"Row {i} has a non-digit character '{char}'")
            grid[i, j] = int(char)

    return grid


def load_puzzle(file_path: Union[str, Path]) -> np.ndarray:
    """Load a puzzle from a case file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PuzzleFormatError: If its content is not nine digit rows
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Puzzle file not found: {file_path}")

    with open(file_path, 'r') as f:
        rows = f.read().split()

    try:
        return parse_rows(rows)
    except PuzzleFormatError as e:
        raise PuzzleFormatError(f"Invalid puzzle in {file_path}: {e}")


def format_rows(grid: np.ndarray) -> str:
    """Inverse of ``parse_rows``: the grid as one case-file line."""
    return " ".join("".join(str(int(v)) for v in grid[i, :]) for i in range(GRID_SIZE))


def find_case_files(input_path: Union[str, Path],
                    max_files: Optional[int] = None) -> List[Path]:
    """Find puzzle case files in a directory tree or from a file list.

    Args:
        input_path: Case file, directory searched recursively, or a text
            file listing one case path per line
        max_files: Maximum number of files to return

    Returns:
        Sorted list of case file paths
    """
    input_path = Path(input_path)

    if input_path.is_file():
        if input_path.suffix == CASE_SUFFIX:
            return [input_path]
        with open(input_path, 'r') as f:
            file_paths = [Path(line.strip()) for line in f if line.strip()]
        return file_paths[:max_files] if max_files else file_paths

    if input_path.is_dir():
        case_files = sorted(input_path.rglob(f'*{CASE_SUFFIX}'))
        return case_files[:max_files] if max_files else case_files

    raise FileNotFoundError(f"Input path not found: {input_path}")


def case_difficulty(case_file: Path) -> str:
    """Grade a case belongs to, read from its parent directory name."""
    parent = Path(case_file).parent.name
    return parent if parent in GRADES else 'ungraded'


def grade_difficulty(expanded_states: int) -> str:
    """Map the number of states BFS expanded to a difficulty grade."""
    for name, threshold in GRADE_THRESHOLDS:
        if expanded_states >= threshold:
            return name
    return DEFAULT_GRADE


def write_benchmark_record(data_dir: Union[str, Path],
                           difficulty: str,
                           algorithm_name: str,
                           case_name: str,
                           total_time_ms: float,
                           expanded_states: int) -> Path:
    """Append one ``CASE TIME EXPANDED`` line to the algorithm's data file.

    Records go to ``<data_dir>/<difficulty>/<algorithm>_<difficulty>.dat``.

    Returns:
        Path of the data file written
    """
    target_dir = Path(data_dir) / difficulty
    target_dir.mkdir(parents=True, exist_ok=True)

    data_file = target_dir / f"{algorithm_name}_{difficulty}.dat"
    with open(data_file, 'a') as f:
        f.write(f"{case_name} {total_time_ms:.3f} {expanded_states}\n")

    logger.debug(f"Benchmark record appended to {data_file}")
    return data_file


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    def convert_numpy(obj):
        if isinstance(obj, np.generic):
            return obj.item()
        if hasattr(obj, 'tolist'):
            return obj.tolist()
        if isinstance(obj, dict):
            return {k: convert_numpy(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [convert_numpy(item) for item in obj]
        return obj

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(convert_numpy(results), f, indent=2, sort_keys=True)
        else:
            json.dump(convert_numpy(results), f)
