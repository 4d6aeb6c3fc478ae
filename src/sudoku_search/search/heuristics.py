"""Heuristic estimators for the informed searches.

Every estimator has the signature ``estimate(current, reference) -> float``
and returns a non-negative value. ``current`` is the grid of the vertex
being scored and ``reference`` the proxy target the search compares it
against (the start grid).

Two families are provided:
- Distance metrics over the flattened grids (Euclidean, Manhattan,
  Minkowski, Hamming)
- Puzzle-aware estimates (remaining empty cells, candidate count of the
  next cell to fill)
"""

import logging
from functools import partial
from typing import Callable, Dict
import numpy as np

from sudoku_search.core.constants import GRID_SIZE
from sudoku_search.core import grid as grid_ops

logger = logging.getLogger(__name__)

Heuristic = Callable[[np.ndarray, np.ndarray], float]


def _as_vectors(source: np.ndarray, target: np.ndarray):
    a = np.asarray(source, dtype=np.float64).ravel()
    b = np.asarray(target, dtype=np.float64).ravel()
    if a.shape != b.shape:
        raise ValueError(f"Dimension mismatch: {a.shape} vs {b.shape}")
    return a, b


def euclidean(source: np.ndarray, target: np.ndarray) -> float:
    a, b = _as_vectors(source, target)
    return float(np.sqrt(np.sum((a - b) ** 2)))


def manhattan(source: np.ndarray, target: np.ndarray) -> float:
    a, b = _as_vectors(source, target)
    return float(np.sum(np.abs(a - b)))


def minkowski(source: np.ndarray, target: np.ndarray, p: float = 3.0) -> float:
    """Minkowski distance of order ``p`` (``p=1`` Manhattan, ``p=2`` Euclidean)."""
    if p <= 0:
        raise ValueError(f"Minkowski order must be positive, got {p}")
    a, b = _as_vectors(source, target)
    return float(np.sum(np.abs(a - b) ** p) ** (1.0 / p))


def hamming(source: np.ndarray, target: np.ndarray) -> float:
    """Number of coordinates that differ."""
    a, b = _as_vectors(source, target)
    return float(np.count_nonzero(np.abs(a - b) > np.finfo(np.float64).eps))


def empty_cells(current: np.ndarray, reference: np.ndarray) -> float:
    """Cells still to fill. Admissible when every placement costs at least 1."""
    return float(grid_ops.count_empty_cells(current))


def candidate_count(current: np.ndarray, reference: np.ndarray) -> float:
    """Legal digits for the next cell the expansion rule will fill.

    Fewer candidates means a narrower branch, so lower is better. A grid
    with nothing left to fill scores ``GRID_SIZE``.
    """
    cell = grid_ops.find_empty_cell(current)
    if cell is None:
        return float(GRID_SIZE)
    return float(len(grid_ops.candidates(current, *cell)))


HEURISTICS: Dict[str, Heuristic] = {
    'euclidean': euclidean,
    'manhattan': manhattan,
    'minkowski': minkowski,
    'hamming': hamming,
    'empty_cells': empty_cells,
    'candidate_count': candidate_count,
}


def get_heuristic(name: str, minkowski_p: float = 3.0) -> Heuristic:
    """Look up an estimator by name.

    Unknown names fall back to Euclidean distance with a warning.

    Args:
        name: Registered estimator name (case-insensitive)
        minkowski_p: Order used when ``name`` is ``minkowski``

    Returns:
        The estimator callable
    """
    key = str(name).strip().lower()
    if key == 'minkowski':
        return partial(minkowski, p=minkowski_p)
    if key not in HEURISTICS:
        logger.warning(f"Invalid heuristic function '{name}'. Using Euclidean distance as default.")
        return euclidean
    return HEURISTICS[key]
