"""Puzzle constants, data models and the constraint oracle."""

from .constants import GRID_SIZE, SUBGRID_SIZE, EMPTY, Algorithm
from .data_models import Change, ChangeHistory, SearchResult, SearchStatistics

__all__ = [
    'GRID_SIZE',
    'SUBGRID_SIZE',
    'EMPTY',
    'Algorithm',
    'Change',
    'ChangeHistory',
    'SearchResult',
    'SearchStatistics'
]
