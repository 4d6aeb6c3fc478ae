"""Shared puzzle fixtures."""

import pytest
import numpy as np


SOLVED_ROWS = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]


def grid_from_rows(rows):
    return np.array([[int(c) for c in row] for row in rows], dtype=np.int32)


@pytest.fixture
def solved_rows():
    return list(SOLVED_ROWS)


@pytest.fixture
def solved_grid():
    """A complete, valid grid."""
    return grid_from_rows(SOLVED_ROWS)


@pytest.fixture
def one_empty_grid(solved_grid):
    """Solved grid with (0, 0) blanked; the only legal digit there is 5."""
    grid = solved_grid.copy()
    grid[0, 0] = 0
    return grid


@pytest.fixture
def first_row_empty_grid(solved_grid):
    """Solved grid with its first row blanked; every cell is forced by its column."""
    grid = solved_grid.copy()
    grid[0, :] = 0
    return grid


@pytest.fixture
def two_rows_empty_grid(solved_grid):
    """Solved grid with its first two rows blanked."""
    grid = solved_grid.copy()
    grid[0:2, :] = 0
    return grid


@pytest.fixture
def dead_end_grid():
    """Well-formed grid without a solution.

    The first cell accepts 1 or 2 but either choice leaves no digit for the
    cell to its right, whose column already holds 1 and 2.
    """
    grid = np.zeros((9, 9), dtype=np.int32)
    grid[0, :] = [0, 0, 3, 4, 5, 6, 7, 8, 9]
    grid[3, 1] = 1
    grid[4, 1] = 2
    return grid


@pytest.fixture
def stuck_grid():
    """Well-formed grid whose first empty cell has no legal digit."""
    grid = np.zeros((9, 9), dtype=np.int32)
    grid[0, :] = [0, 1, 2, 3, 4, 5, 6, 7, 8]
    grid[1, 0] = 9
    return grid


@pytest.fixture
def invalid_grid():
    """Grid repeating a digit in its first row."""
    grid = np.zeros((9, 9), dtype=np.int32)
    grid[0, 0] = 5
    grid[0, 1] = 5
    return grid
