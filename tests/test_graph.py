"""Tests for the graph, its vertices and edges."""

import logging

import pytest

from sudoku_search.graph import (
    Graph, GraphInvariantError, Edge, Vertex, VertexLabel,
    relax, get_adjacent_vertex, reconstruct_path, format_path,
    compare_vertex_cost, compare_vertex_heuristic, compare_edge_cost
)


class TestGraph:
    """Test graph construction and removal."""

    @pytest.fixture
    def triangle(self):
        """Undirected triangle 0-1-2."""
        graph = Graph()
        for name in "abc":
            graph.add_vertex(data=name)
        graph.add_edge(0, 1, 1)
        graph.add_edge(1, 2, 2)
        graph.add_edge(2, 0, 3)
        return graph

    def test_sequential_ids(self):
        graph = Graph()
        first = graph.add_vertex(data="x", coordinates=[1.0, 2.0])
        second = graph.add_vertex()

        assert (first.id, second.id) == (0, 1)
        assert first.coordinates == (1.0, 2.0)
        assert first.label == VertexLabel.UNVISITED
        assert graph.last_vertex_id == 1
        assert graph.num_vertices == 2

    def test_add_edge_counts(self, triangle):
        assert triangle.num_edges == 3
        assert triangle.last_edge_id == 2
        # Undirected: both endpoints index every edge
        assert triangle.get_vertex(0).degree == 2
        assert triangle.get_vertex(1).degree == 2

    def test_add_edge_missing_endpoint(self, triangle):
        """An edge to a missing vertex is rejected without side effects."""
        assert triangle.add_edge(0, 99) is False
        assert triangle.num_edges == 3
        assert triangle.last_edge_id == 2

    def test_remove_vertex_drops_incident_edges(self, triangle):
        """No dangling edge survives a vertex removal."""
        assert triangle.remove_vertex(1)

        assert triangle.num_vertices == 2
        assert triangle.num_edges == 1
        assert not triangle.contains_vertex(1)
        for vertex in triangle.vertices.values():
            for edge in vertex.adjacency.values():
                assert triangle.contains_vertex(edge.source)
                assert triangle.contains_vertex(edge.target)

    def test_remove_missing_vertex(self, triangle):
        assert triangle.remove_vertex(42) is False

    def test_remove_edge(self, triangle):
        assert triangle.remove_edge(0)
        assert not triangle.contains_edge(0)
        assert triangle.get_vertex(0).degree == 1
        assert triangle.remove_edge(0) is False

    def test_directed_edges(self):
        """Directed edges live in the source's adjacency and the target's incoming table."""
        graph = Graph(directed=True)
        parent = graph.add_vertex()
        child = graph.add_vertex()
        graph.add_edge(parent.id, child.id, 5)

        assert parent.degree == 1
        assert child.degree == 0
        assert len(child.incoming) == 1

        graph.remove_vertex(parent.id)
        assert graph.num_edges == 0
        assert len(child.incoming) == 0

    def test_get_missing_vertex_is_invariant_error(self, triangle, caplog):
        """Lookups of dead IDs log CRITICAL before raising."""
        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(GraphInvariantError):
                triangle.get_vertex(77)
        assert "Vertex with ID 77 not found" in caplog.text

        with pytest.raises(RuntimeError):
            triangle.get_edge(77)

    def test_destroy_is_idempotent(self, triangle):
        """Destroying twice leaves zero counts and restarts numbering."""
        triangle.destroy()
        triangle.destroy()

        assert triangle.num_vertices == 0
        assert triangle.num_edges == 0
        assert triangle.last_vertex_id == -1
        assert triangle.add_vertex().id == 0

    def test_repr(self, triangle):
        assert repr(triangle) == "Graph(undirected, vertices=3, edges=3)"


class TestEdgeAndVertex:
    """Test Edge and Vertex helpers."""

    def test_edge_other_endpoint(self):
        edge = Edge(id=0, source=3, target=8, cost=2)
        assert edge.endpoints == (3, 8)
        assert edge.other(3) == 8
        assert edge.other(8) == 3
        with pytest.raises(ValueError):
            edge.other(5)

    def test_vertex_ordering_by_cost(self):
        cheap = Vertex(id=0, current_cost=1.0)
        dear = Vertex(id=1, current_cost=2.0)
        assert cheap < dear
        assert cheap <= Vertex(id=2, current_cost=1.0)

    def test_comparators_favour_ties(self):
        a = Vertex(id=0, current_cost=1.0, heuristic_cost=4.0)
        b = Vertex(id=1, current_cost=1.0, heuristic_cost=2.0)
        assert compare_vertex_cost(a, b) and compare_vertex_cost(b, a)
        assert compare_vertex_heuristic(b, a)
        assert not compare_vertex_heuristic(a, b)
        assert compare_edge_cost(Edge(0, 0, 1, 1), Edge(1, 0, 1, 2))


class TestGraphUtils:
    """Test relaxation and path reconstruction."""

    @pytest.fixture
    def chain(self):
        """Directed chain 0 -> 1 -> 2 with costs 1 and 4."""
        graph = Graph(directed=True)
        for _ in range(3):
            graph.add_vertex()
        graph.add_edge(0, 1, 1)
        graph.add_edge(1, 2, 4)
        return graph

    def test_relax_improves(self, chain):
        """Relaxation lowers the cost and records the predecessor."""
        u, v = chain.get_vertex(0), chain.get_vertex(1)
        v.current_cost = float('inf')
        uv = chain.get_edge(0)

        assert relax(u, v, uv) is True
        assert v.current_cost == 1
        assert v.predecessor is uv

    def test_relax_no_improvement(self, chain):
        u, v = chain.get_vertex(0), chain.get_vertex(1)
        v.current_cost = 1
        assert relax(u, v, chain.get_edge(0)) is False
        assert v.predecessor is None

    def test_relax_with_heuristics(self, chain):
        """Costs carry g + h; u's heuristic is swapped for v's."""
        u, v = chain.get_vertex(0), chain.get_vertex(1)
        u.heuristic_cost = 3
        u.current_cost = 3  # g = 0
        v.heuristic_cost = 2
        v.current_cost = float('inf')

        assert relax(u, v, chain.get_edge(0))
        assert v.current_cost == 0 + 1 + 2

    def test_get_adjacent_vertex(self, chain):
        u = chain.get_vertex(1)
        assert get_adjacent_vertex(chain, u, chain.get_edge(1)).id == 2
        assert get_adjacent_vertex(chain, u, chain.get_edge(0)).id == 0

    def test_reconstruct_and_format_path(self, chain):
        for edge_id, (u_id, v_id) in enumerate([(0, 1), (1, 2)]):
            u, v = chain.get_vertex(u_id), chain.get_vertex(v_id)
            v.current_cost = float('inf')
            relax(u, v, chain.get_edge(edge_id))

        target = chain.get_vertex(2)
        assert reconstruct_path(chain, target) == [(0, 0), (1, 1), (2, 4)]
        assert format_path(chain, target) == "0 --:1:-> 1 --:4:-> 2"

    def test_reconstruct_stops_at_evicted_vertex(self, chain):
        for edge_id, (u_id, v_id) in enumerate([(0, 1), (1, 2)]):
            u, v = chain.get_vertex(u_id), chain.get_vertex(v_id)
            v.current_cost = float('inf')
            relax(u, v, chain.get_edge(edge_id))

        target = chain.get_vertex(2)
        chain.remove_vertex(0)
        assert reconstruct_path(chain, target) == [(1, 0), (2, 4)]
