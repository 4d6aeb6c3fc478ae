"""Search engine: heuristics and the state-space solver."""

from .heuristics import (
    Heuristic, HEURISTICS, get_heuristic,
    euclidean, manhattan, minkowski, hamming, empty_cells, candidate_count
)
from .solver import SudokuSolver, SearchConfig, create_solver, EDGE_COST_MODES

__all__ = [
    'Heuristic',
    'HEURISTICS',
    'get_heuristic',
    'euclidean',
    'manhattan',
    'minkowski',
    'hamming',
    'empty_cells',
    'candidate_count',
    'SudokuSolver',
    'SearchConfig',
    'create_solver',
    'EDGE_COST_MODES'
]
