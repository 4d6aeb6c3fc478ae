"""Sudoku solved as state-space search.

Puzzles are explored as a lazily built graph of partial grids with BFS,
IDDFS, uniform-cost, A* and greedy best-first search.
"""

from sudoku_search.core.constants import Algorithm
from sudoku_search.core.data_models import SearchResult
from sudoku_search.search.solver import SudokuSolver, SearchConfig, create_solver

__version__ = "0.1.0"

__all__ = [
    'Algorithm',
    'SearchResult',
    'SudokuSolver',
    'SearchConfig',
    'create_solver'
]
