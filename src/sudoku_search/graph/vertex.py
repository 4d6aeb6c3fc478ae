"""Graph vertex and its visitation labels."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Tuple

from sudoku_search.structures import OrderedMap
from .edge import Edge


class VertexLabel(IntEnum):
    """Visitation state of a vertex during a traversal.

    Labels are stored as plain ints on the vertex, so traversals that need
    more states (IDDFS iteration markers) can use values past ``VISITED``.
    """
    UNVISITED = 0
    PROCESSING = 1
    VISITED = 2


@dataclass(eq=False)
class Vertex:
    """Vertex with a payload, search bookkeeping and an adjacency table."""
    id: int
    data: Any = None
    coordinates: Tuple[float, ...] = ()
    current_cost: float = 0.0  # g(n) + h(n) when a heuristic is in play
    heuristic_cost: float = 0.0  # h(n)
    label: int = VertexLabel.UNVISITED
    predecessor: Optional[Edge] = None
    successor: Optional[Edge] = None
    arrival_time: int = 0
    departure_time: int = 0
    # Edge ID -> Edge; outgoing edges only in directed graphs
    adjacency: OrderedMap = field(default_factory=OrderedMap, repr=False)
    # Edge ID -> Edge for incoming edges, maintained only by directed graphs
    incoming: OrderedMap = field(default_factory=OrderedMap, repr=False)

    @property
    def degree(self) -> int:
        return len(self.adjacency)

    def __lt__(self, other: 'Vertex') -> bool:
        return self.current_cost < other.current_cost

    def __le__(self, other: 'Vertex') -> bool:
        return self.current_cost <= other.current_cost
