"""Mutable directed/undirected graph indexed by ordered maps."""

import logging
from typing import Any, Optional, Sequence

from sudoku_search.structures import OrderedMap
from .edge import Edge
from .vertex import Vertex

logger = logging.getLogger(__name__)


class GraphInvariantError(RuntimeError):
    """Raised when a lookup targets a vertex or edge that must exist but does not.

    This signals a bookkeeping bug in the caller, not a recoverable condition.
    """
    pass


class Graph:
    """Graph owning its vertices and edges.

    Vertices and edges get sequential integer IDs. In a directed graph an
    edge is indexed by its source vertex's adjacency table (and the target's
    incoming table); in an undirected graph by both adjacency tables.
    Every edge in an adjacency table is also in the edge table and vice versa.
    """

    def __init__(self, directed: bool = False):
        """Initialize an empty graph.

        Args:
            directed: Whether edges are one-way
        """
        self.directed = directed
        self._vertices: OrderedMap[int, Vertex] = OrderedMap()
        self._edges: OrderedMap[int, Edge] = OrderedMap()
        self._vertex_count = 0
        self._edge_count = 0

    def add_vertex(self, data: Any = None,
                   coordinates: Optional[Sequence[float]] = None) -> Vertex:
        """Create a vertex with a fresh ID.

        Args:
            data: Payload stored in the vertex
            coordinates: Optional position used by distance heuristics

        Returns:
            The new live vertex
        """
        vertex = Vertex(id=self._vertex_count, data=data,
                        coordinates=tuple(coordinates) if coordinates is not None else ())
        self._vertices.insert(vertex.id, vertex)
        self._vertex_count += 1
        return vertex

    def add_edge(self, vertex_id: int, neighbor_id: int, cost: float = 0) -> bool:
        """Connect two existing vertices.

        Returns:
            False if either vertex is missing, True once the edge is registered
        """
        if not (self._vertices.contains(vertex_id) and self._vertices.contains(neighbor_id)):
            return False

        edge = Edge(id=self._edge_count, source=vertex_id, target=neighbor_id, cost=cost)
        source = self._vertices.get(vertex_id)
        target = self._vertices.get(neighbor_id)

        source.adjacency.insert(edge.id, edge)
        if self.directed:
            target.incoming.insert(edge.id, edge)
        else:
            target.adjacency.insert(edge.id, edge)

        self._edges.insert(edge.id, edge)
        self._edge_count += 1
        return True

    def remove_vertex(self, vertex_id: int) -> bool:
        """Remove a vertex together with every edge touching it."""
        if not self._vertices.contains(vertex_id):
            return False

        vertex = self._vertices.get(vertex_id)
        # Snapshot the IDs: remove_edge mutates the tables being walked
        incident = list(vertex.adjacency.keys())
        if self.directed:
            incident.extend(vertex.incoming.keys())

        for edge_id in incident:
            self.remove_edge(edge_id)

        self._vertices.remove(vertex_id)
        return True

    def remove_edge(self, edge_id: int) -> bool:
        """Unregister an edge from its endpoints and the edge table."""
        if not self._edges.contains(edge_id):
            return False

        edge = self._edges.get(edge_id)
        source = self._vertices.get(edge.source)
        target = self._vertices.get(edge.target)

        source.adjacency.remove(edge_id)
        if self.directed:
            target.incoming.remove(edge_id)
        else:
            target.adjacency.remove(edge_id)

        self._edges.remove(edge_id)
        return True

    @property
    def vertices(self) -> OrderedMap:
        return self._vertices

    @property
    def edges(self) -> OrderedMap:
        return self._edges

    def get_vertex(self, vertex_id: int) -> Vertex:
        """Resolve a vertex that the caller knows to be alive.

        Raises:
            GraphInvariantError: If the vertex does not exist
        """
        if not self._vertices.contains(vertex_id):
            logger.critical(f"Vertex with ID {vertex_id} not found")
            raise GraphInvariantError(f"Vertex with ID {vertex_id} not found")
        return self._vertices.get(vertex_id)

    def get_edge(self, edge_id: int) -> Edge:
        """Resolve an edge that the caller knows to be alive.

        Raises:
            GraphInvariantError: If the edge does not exist
        """
        if not self._edges.contains(edge_id):
            logger.critical(f"Edge with ID {edge_id} not found")
            raise GraphInvariantError(f"Edge with ID {edge_id} not found")
        return self._edges.get(edge_id)

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    @property
    def last_vertex_id(self) -> int:
        return self._vertex_count - 1

    @property
    def last_edge_id(self) -> int:
        return self._edge_count - 1

    def contains_vertex(self, vertex_id: int) -> bool:
        return self._vertices.contains(vertex_id)

    def contains_edge(self, edge_id: int) -> bool:
        return self._edges.contains(edge_id)

    def destroy(self) -> None:
        """Release every edge and vertex and restart ID numbering.

        Safe to call repeatedly.
        """
        for vertex in self._vertices.values():
            vertex.adjacency.clear()
            vertex.incoming.clear()

        self._vertices.clear()
        self._edges.clear()
        self._vertex_count = 0
        self._edge_count = 0

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, vertices={self.num_vertices}, edges={self.num_edges})"
