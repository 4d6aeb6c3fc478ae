"""Graph edge."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(eq=False)
class Edge:
    """Connection between two vertices, identified by integer ID.

    The edge only refers to its endpoints by vertex ID; the owning graph
    resolves them to live vertices.
    """
    id: int
    source: int
    target: int
    cost: float = 0

    @property
    def endpoints(self) -> Tuple[int, int]:
        return self.source, self.target

    def other(self, vertex_id: int) -> int:
        """Return the endpoint opposite to ``vertex_id``."""
        if vertex_id == self.source:
            return self.target
        if vertex_id == self.target:
            return self.source
        raise ValueError(f"Vertex {vertex_id} is not an endpoint of edge {self.id}")

    def __lt__(self, other: 'Edge') -> bool:
        return self.cost < other.cost
