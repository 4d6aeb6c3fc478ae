"""Core data models for the Sudoku search engine."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import numpy as np

from .constants import Algorithm


@dataclass(frozen=True)
class Change:
    """Placement of one digit in one cell."""
    row: int
    col: int
    digit: int


# Ordered history of placements applied to the start grid
ChangeHistory = Tuple[Change, ...]


@dataclass
class SearchStatistics:
    """Counters collected during one algorithm run."""
    expanded_states: int = 0
    vertices_evicted: int = 0
    max_frontier_size: int = 0
    iterations: int = 0  # depth limits tried by IDDFS

    def update_frontier(self, size: int) -> None:
        if size > self.max_frontier_size:
            self.max_frontier_size = size

    def to_dict(self) -> Dict[str, Any]:
        return {
            'expanded_states': self.expanded_states,
            'vertices_evicted': self.vertices_evicted,
            'max_frontier_size': self.max_frontier_size,
            'iterations': self.iterations
        }


@dataclass
class SearchResult:
    """Outcome of solving one puzzle with one algorithm."""
    success: bool
    algorithm: Algorithm
    start_grid: np.ndarray
    solution: Optional[np.ndarray] = None
    changes: List[Change] = field(default_factory=list)
    expanded_states: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    statistics: Optional[SearchStatistics] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'success': self.success,
            'algorithm': self.algorithm.display_name,
            'algorithm_code': self.algorithm.value,
            'start_grid': self.start_grid.tolist(),
            'solution': self.solution.tolist() if self.solution is not None else None,
            'changes': [[c.row, c.col, c.digit] for c in self.changes],
            'expanded_states': self.expanded_states,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'statistics': self.statistics.to_dict() if self.statistics else {}
        }
