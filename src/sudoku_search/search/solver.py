"""State-space search solver for Sudoku.

Each graph vertex is a partially filled grid, stored compactly as the
history of placements applied to the start grid. Vertices are expanded
lazily by filling the first empty cell with every legal digit, and evicted
from the graph as soon as their outgoing edges have been examined, so the
graph only ever holds the live frontier.

Five traversal strategies share the expansion rule and the goal test:
breadth-first, iterative deepening, uniform-cost, A* and greedy best-first.
"""

import logging
import math
import random
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

import numpy as np

from sudoku_search.core.constants import GRID_SIZE, Algorithm
from sudoku_search.core.data_models import Change, SearchResult, SearchStatistics
from sudoku_search.core import grid as grid_ops
from sudoku_search.graph import (
    Graph, Vertex, VertexLabel, relax, get_adjacent_vertex,
    compare_vertex_cost, compare_vertex_heuristic
)
from sudoku_search.structures import PriorityQueue
from .heuristics import Heuristic, get_heuristic

logger = logging.getLogger(__name__)

EDGE_COST_MODES = ('unit', 'random')


@dataclass
class SearchConfig:
    """Tunable parameters of the search engine."""
    max_depth: Optional[int] = None  # IDDFS; None means "number of empty cells"
    astar_heuristic: str = "candidate_count"
    greedy_heuristic: str = "empty_cells"
    minkowski_p: float = 3.0
    edge_cost_mode: str = "unit"
    edge_cost_seed: Optional[int] = 42

    @classmethod
    def from_config(cls, config: Any) -> 'SearchConfig':
        """Build from a loaded configuration (``search`` section)."""
        search_cfg = config.get('search', {}) or {}
        iddfs_cfg = search_cfg.get('iddfs', {}) or {}
        astar_cfg = search_cfg.get('astar', {}) or {}
        greedy_cfg = search_cfg.get('greedy', {}) or {}
        heuristics_cfg = search_cfg.get('heuristics', {}) or {}
        edge_cfg = search_cfg.get('edge_cost', {}) or {}

        max_depth = iddfs_cfg.get('max_depth', None)
        seed = edge_cfg.get('seed', 42)
        return cls(
            max_depth=int(max_depth) if max_depth is not None else None,
            astar_heuristic=str(astar_cfg.get('heuristic', cls.astar_heuristic)),
            greedy_heuristic=str(greedy_cfg.get('heuristic', cls.greedy_heuristic)),
            minkowski_p=float(heuristics_cfg.get('minkowski_p', cls.minkowski_p)),
            edge_cost_mode=str(edge_cfg.get('mode', cls.edge_cost_mode)),
            edge_cost_seed=int(seed) if seed is not None else None
        )


class SudokuSolver:
    """Solve a Sudoku by exploring its state graph with one algorithm."""

    def __init__(self,
                 start_grid: Any,
                 algorithm: Union[Algorithm, str] = Algorithm.A_STAR,
                 config: Optional[SearchConfig] = None,
                 rng: Optional[random.Random] = None,
                 astar_heuristic: Optional[Heuristic] = None,
                 greedy_heuristic: Optional[Heuristic] = None):
        """Initialize the solver.

        Args:
            start_grid: 9x9 grid, 0 marks an empty cell
            algorithm: Algorithm or its single-letter code
            config: Search parameters (defaults if None)
            rng: Randomness source for the ``random`` edge-cost mode
            astar_heuristic: Estimator overriding ``config.astar_heuristic``
            greedy_heuristic: Estimator overriding ``config.greedy_heuristic``
        """
        self.start_grid = grid_ops.as_grid(start_grid)
        self.algorithm = Algorithm.from_code(algorithm)
        self.config = config or SearchConfig()

        if self.config.edge_cost_mode not in EDGE_COST_MODES:
            raise ValueError(
                f"Unknown edge cost mode '{self.config.edge_cost_mode}' "
                f"(expected one of: {', '.join(EDGE_COST_MODES)})"
            )

        self.rng = rng if rng is not None else random.Random(self.config.edge_cost_seed)
        self.astar_heuristic = astar_heuristic or get_heuristic(
            self.config.astar_heuristic, self.config.minkowski_p)
        self.greedy_heuristic = greedy_heuristic or get_heuristic(
            self.config.greedy_heuristic, self.config.minkowski_p)

        # Directed: only the parent indexes the edge to each child
        self.graph = Graph(directed=True)
        self.solution_vertex_id: Optional[int] = None
        self.stats = SearchStatistics()

        self._algorithms: Dict[Algorithm, Callable[[], bool]] = {
            Algorithm.BFS: self.bfs,
            Algorithm.IDDFS: self.iddfs,
            Algorithm.UCS: self.ucs,
            Algorithm.A_STAR: self.astar,
            Algorithm.GBFS: self.greedy_bfs,
        }

    @property
    def expanded_states(self) -> int:
        return self.stats.expanded_states

    # ------------------------------------------------------------------
    # State handling
    # ------------------------------------------------------------------

    def get_vertex_state(self, vertex: Vertex) -> np.ndarray:
        """Rebuild the grid a vertex stands for."""
        return grid_ops.apply_changes(self.start_grid, vertex.data)

    def check_solution(self, vertex: Vertex) -> bool:
        return grid_ops.is_solved(self.get_vertex_state(vertex))

    def create_initial_state(self) -> Vertex:
        """Reset the graph and seed it with the root vertex."""
        self.graph.destroy()
        root = self.graph.add_vertex(data=())
        root.label = VertexLabel.UNVISITED
        return root

    def _edge_cost(self) -> int:
        if self.config.edge_cost_mode == 'random':
            return self.rng.randint(1, GRID_SIZE + 1)
        return 1

    def expand_node(self, father: Vertex) -> None:
        """Generate one child per legal digit for the first empty cell.

        Children start UNVISITED with an infinite cost so their first
        relaxation always succeeds.
        """
        current_grid = self.get_vertex_state(father)
        cell = grid_ops.find_empty_cell(current_grid)

        if cell is not None:
            row, col = cell
            for num in range(1, GRID_SIZE + 1):
                if not grid_ops.is_valid(current_grid, row, col, num):
                    continue
                child = self.graph.add_vertex(data=father.data + (Change(row, col, num),))
                child.current_cost = math.inf
                child.label = VertexLabel.UNVISITED
                self.graph.add_edge(father.id, child.id, self._edge_cost())
                self.stats.expanded_states += 1

        father.label = VertexLabel.PROCESSING

    def _evict(self, vertex: Vertex) -> None:
        vertex.label = VertexLabel.VISITED
        self.graph.remove_vertex(vertex.id)
        self.stats.vertices_evicted += 1

    def _record_solution(self, vertex: Vertex) -> bool:
        self.solution_vertex_id = vertex.id
        return True

    def _estimate(self, heuristic: Heuristic, vertex: Vertex) -> float:
        return float(heuristic(self.get_vertex_state(vertex), self.start_grid))

    # ------------------------------------------------------------------
    # Algorithms
    # ------------------------------------------------------------------

    def bfs(self) -> bool:
        """Breadth-first search with a FIFO frontier."""
        root = self.create_initial_state()
        if self.check_solution(root):
            return self._record_solution(root)

        queue = deque([root])
        while queue:
            self.stats.update_frontier(len(queue))
            u = queue.popleft()

            self.expand_node(u)

            for uv in u.adjacency.values():
                v = get_adjacent_vertex(self.graph, u, uv)

                if self.check_solution(v):
                    return self._record_solution(v)

                if v.label == VertexLabel.UNVISITED:
                    queue.append(v)

            self._evict(u)

        return False

    def iddfs(self, max_depth: Optional[int] = None) -> bool:
        """Iterative deepening depth-first search.

        Each depth limit starts from a fresh graph. A vertex's cost holds its
        depth, and vertices reached during an iteration carry that
        iteration's marker label.

        Args:
            max_depth: Largest depth limit to try. Defaults to the configured
                value, then to the number of empty cells.
        """
        if max_depth is None:
            max_depth = self.config.max_depth
        if max_depth is None:
            max_depth = grid_ops.count_empty_cells(self.start_grid)

        for limit in range(0, max_depth + 1):
            self.stats.iterations += 1
            marker = VertexLabel.VISITED + 1 + limit
            logger.debug(f"IDDFS: depth limit {limit}")

            root = self.create_initial_state()
            root.current_cost = 0
            root.label = marker

            if self.check_solution(root):
                return self._record_solution(root)

            stack = [root]
            while stack:
                self.stats.update_frontier(len(stack))
                u = stack.pop()

                # Depth budget exhausted
                if u.current_cost >= limit:
                    self._evict(u)
                    continue

                self.expand_node(u)

                for uv in u.adjacency.values():
                    v = get_adjacent_vertex(self.graph, u, uv)

                    if self.check_solution(v):
                        return self._record_solution(v)

                    if v.label == VertexLabel.UNVISITED:
                        v.current_cost = u.current_cost + 1
                        v.label = marker
                        stack.append(v)

                self._evict(u)

        return False

    def ucs(self) -> bool:
        """Uniform-cost search (Dijkstra over the lazily built tree)."""
        root = self.create_initial_state()
        if self.check_solution(root):
            return self._record_solution(root)

        queue: PriorityQueue[Vertex] = PriorityQueue(compare_vertex_cost)
        queue.enqueue(root)
        return self._label_correcting(queue, heuristic=None)

    def astar(self) -> bool:
        """A* search ordered by ``cost + heuristic``."""
        root = self.create_initial_state()
        if self.check_solution(root):
            return self._record_solution(root)

        heuristic_cost = self._estimate(self.astar_heuristic, root)
        root.current_cost = heuristic_cost
        root.heuristic_cost = heuristic_cost

        queue: PriorityQueue[Vertex] = PriorityQueue(compare_vertex_cost)
        queue.enqueue(root)
        return self._label_correcting(queue, heuristic=self.astar_heuristic)

    def _label_correcting(self, queue: PriorityQueue, heuristic: Optional[Heuristic]) -> bool:
        """Main loop shared by UCS and A*.

        A child's heuristic is computed before it is relaxed, so ``relax``
        always sees a finalized estimate on both ends of the edge.
        """
        while not queue.is_empty():
            self.stats.update_frontier(len(queue))
            u = queue.dequeue()

            # Already expanded through an earlier queue entry
            if not self.graph.contains_vertex(u.id):
                continue

            self.expand_node(u)

            for uv in u.adjacency.values():
                v = get_adjacent_vertex(self.graph, u, uv)

                if self.check_solution(v):
                    return self._record_solution(v)

                if v.label == VertexLabel.UNVISITED:
                    if heuristic is not None:
                        v.heuristic_cost = self._estimate(heuristic, v)
                    if relax(u, v, uv):
                        queue.enqueue(v)

            self._evict(u)

        return False

    def greedy_bfs(self) -> bool:
        """Greedy best-first search ordered by the heuristic alone."""
        root = self.create_initial_state()
        if self.check_solution(root):
            return self._record_solution(root)

        root.heuristic_cost = self._estimate(self.greedy_heuristic, root)

        queue: PriorityQueue[Vertex] = PriorityQueue(compare_vertex_heuristic)
        queue.enqueue(root)

        while not queue.is_empty():
            self.stats.update_frontier(len(queue))
            u = queue.dequeue()

            if not self.graph.contains_vertex(u.id):
                continue

            self.expand_node(u)

            for uv in u.adjacency.values():
                v = get_adjacent_vertex(self.graph, u, uv)

                if self.check_solution(v):
                    return self._record_solution(v)

                if v.label == VertexLabel.UNVISITED:
                    v.heuristic_cost = self._estimate(self.greedy_heuristic, v)
                    queue.enqueue(v)

            self._evict(u)

        return False

    # ------------------------------------------------------------------
    # Front door
    # ------------------------------------------------------------------

    def solution_grid(self) -> Optional[np.ndarray]:
        """Grid of the recorded goal vertex, if any."""
        if self.solution_vertex_id is None:
            return None
        return self.get_vertex_state(self.graph.get_vertex(self.solution_vertex_id))

    def solve(self) -> SearchResult:
        """Validate the start grid and run the configured algorithm.

        Returns:
            SearchResult describing the outcome; "no solution" is reported
            through ``success=False``, not an exception
        """
        self.solution_vertex_id = None
        self.stats = SearchStatistics()
        start_time = time.perf_counter()

        if not grid_ops.grid_is_valid(self.start_grid):
            logger.warning("Invalid grid: a given digit repeats or is out of range")
            return SearchResult(
                success=False,
                algorithm=self.algorithm,
                start_grid=self.start_grid.copy(),
                computation_time=time.perf_counter() - start_time,
                termination_reason="invalid_grid",
                statistics=self.stats
            )

        if grid_ops.is_solved(self.start_grid):
            logger.info("Start grid is already solved")
            return SearchResult(
                success=True,
                algorithm=self.algorithm,
                start_grid=self.start_grid.copy(),
                solution=self.start_grid.copy(),
                computation_time=time.perf_counter() - start_time,
                termination_reason="already_solved",
                statistics=self.stats
            )

        logger.info(f"Solving with {self.algorithm.display_name} "
                    f"({grid_ops.count_empty_cells(self.start_grid)} empty cells)")

        solved = self._algorithms[self.algorithm]()
        computation_time = time.perf_counter() - start_time

        solution = None
        changes = []
        if solved:
            goal = self.graph.get_vertex(self.solution_vertex_id)
            solution = self.get_vertex_state(goal)
            changes = list(goal.data)

        logger.info(f"{self.algorithm.display_name} finished: solved={solved}, "
                    f"expanded={self.stats.expanded_states}, time={computation_time:.4f}s")

        return SearchResult(
            success=solved,
            algorithm=self.algorithm,
            start_grid=self.start_grid.copy(),
            solution=solution,
            changes=changes,
            expanded_states=self.stats.expanded_states,
            computation_time=computation_time,
            termination_reason="solved" if solved else "exhausted",
            statistics=self.stats
        )


def create_solver(start_grid: Any,
                  algorithm: Union[Algorithm, str] = Algorithm.A_STAR,
                  config: Any = None,
                  **kwargs) -> SudokuSolver:
    """Factory for a configured solver.

    Args:
        start_grid: 9x9 grid, 0 marks an empty cell
        algorithm: Algorithm or its single-letter code
        config: Loaded configuration; its ``search`` section is used
        **kwargs: SearchConfig fields, applied when ``config`` is None

    Returns:
        Configured SudokuSolver
    """
    if config is not None:
        search_config = SearchConfig.from_config(config)
    else:
        search_config = SearchConfig(**kwargs)
    return SudokuSolver(start_grid, algorithm=algorithm, config=search_config)
