"""Sudoku constraint oracle over numpy grids.

Every function is pure: grids passed in are never modified.
"""

from typing import Iterable, List, Optional, Sequence, Tuple, Union
import numpy as np

from .constants import EMPTY, GRID_SIZE, SUBGRID_SIZE
from .data_models import Change

GridLike = Union[np.ndarray, Sequence[Sequence[int]]]


def as_grid(values: GridLike) -> np.ndarray:
    """Copy ``values`` into a fresh ``GRID_SIZE`` x ``GRID_SIZE`` int grid.

    Raises:
        ValueError: If the shape is wrong
    """
    grid = np.array(values, dtype=np.int32)
    if grid.shape != (GRID_SIZE, GRID_SIZE):
        raise ValueError(f"Expected a {GRID_SIZE}x{GRID_SIZE} grid, got shape {grid.shape}")
    return grid


def is_in_row(grid: np.ndarray, row: int, num: int) -> bool:
    return bool(np.any(grid[row, :] == num))


def is_in_col(grid: np.ndarray, col: int, num: int) -> bool:
    return bool(np.any(grid[:, col] == num))


def is_in_box(grid: np.ndarray, row: int, col: int, num: int) -> bool:
    corner_row = row - row % SUBGRID_SIZE
    corner_col = col - col % SUBGRID_SIZE
    box = grid[corner_row:corner_row + SUBGRID_SIZE, corner_col:corner_col + SUBGRID_SIZE]
    return bool(np.any(box == num))


def is_valid(grid: np.ndarray, row: int, col: int, num: int) -> bool:
    """Whether ``num`` can be placed at ``(row, col)`` without a clash."""
    return (not is_in_row(grid, row, num) and
            not is_in_col(grid, col, num) and
            not is_in_box(grid, row, col, num))


def candidates(grid: np.ndarray, row: int, col: int) -> List[int]:
    """Digits that may legally go in ``(row, col)``."""
    return [num for num in range(1, GRID_SIZE + 1) if is_valid(grid, row, col, num)]


def find_empty_cell(grid: np.ndarray) -> Optional[Tuple[int, int]]:
    """First empty cell in row-major order, or None for a full grid."""
    empty = np.argwhere(grid == EMPTY)
    if len(empty) == 0:
        return None
    row, col = empty[0]
    return int(row), int(col)


def count_empty_cells(grid: np.ndarray) -> int:
    return int(np.count_nonzero(grid == EMPTY))


def is_solved(grid: np.ndarray) -> bool:
    """A grid is solved when no cell is empty."""
    return not np.any(grid == EMPTY)


def apply_changes(grid: np.ndarray, changes: Iterable[Change]) -> np.ndarray:
    """Return a copy of ``grid`` with ``changes`` applied in order."""
    result = grid.copy()
    for change in changes:
        result[change.row, change.col] = change.digit
    return result


def _has_duplicates(values: np.ndarray) -> bool:
    filled = values[values != EMPTY]
    return len(filled) != len(np.unique(filled))


def grid_is_valid(grid: np.ndarray) -> bool:
    """Check that a start grid is well formed.

    The grid must have the right shape, hold only digits 0..GRID_SIZE, and
    repeat no given digit within a row, column or box.
    """
    grid = np.asarray(grid)
    if grid.shape != (GRID_SIZE, GRID_SIZE):
        return False
    if np.any(grid < EMPTY) or np.any(grid > GRID_SIZE):
        return False

    for i in range(GRID_SIZE):
        if _has_duplicates(grid[i, :]) or _has_duplicates(grid[:, i]):
            return False

    for corner_row in range(0, GRID_SIZE, SUBGRID_SIZE):
        for corner_col in range(0, GRID_SIZE, SUBGRID_SIZE):
            box = grid[corner_row:corner_row + SUBGRID_SIZE, corner_col:corner_col + SUBGRID_SIZE]
            if _has_duplicates(box.ravel()):
                return False

    return True


def format_grid(grid: np.ndarray) -> str:
    """Render the grid with box separators."""
    lines = []
    for i in range(GRID_SIZE):
        if i % SUBGRID_SIZE == 0 and i != 0:
            lines.append("------+-------+------")
        cells = []
        for j in range(GRID_SIZE):
            if j % SUBGRID_SIZE == 0 and j != 0:
                cells.append("|")
            cells.append(str(int(grid[i, j])))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def format_grid_python_style(grid: np.ndarray) -> str:
    """Render the grid as a nested float-list literal."""
    rows = [" ".join(f"{int(v)}." for v in grid[i, :]) for i in range(GRID_SIZE)]
    return "[[" + "]\n [".join(rows) + "]]"
