"""Helpers shared by the traversal algorithms."""

from typing import List, Tuple

from .edge import Edge
from .graph import Graph
from .vertex import Vertex


# Priority predicates for PriorityQueue. Ties favour the newer element.

def compare_vertex_cost(v1: Vertex, v2: Vertex) -> bool:
    return v1.current_cost <= v2.current_cost


def compare_vertex_heuristic(v1: Vertex, v2: Vertex) -> bool:
    return v1.heuristic_cost <= v2.heuristic_cost


def compare_edge_cost(e1: Edge, e2: Edge) -> bool:
    return e1.cost <= e2.cost


def relax(u: Vertex, v: Vertex, uv: Edge) -> bool:
    """Relax edge ``uv`` from ``u`` into ``v``.

    Vertex costs carry their own heuristic (``g + h``). The path cost of
    ``u`` is recovered by subtracting ``u``'s heuristic, extended by the
    edge, and ``v``'s heuristic is added back. With a zero heuristic this is
    plain Dijkstra relaxation.

    Returns:
        True if ``v``'s cost strictly decreased; ``uv`` is then recorded as
        ``v``'s predecessor edge
    """
    candidate = (u.current_cost - u.heuristic_cost) + uv.cost + v.heuristic_cost
    if v.current_cost > candidate:
        v.current_cost = candidate
        v.predecessor = uv
        return True
    return False


def get_adjacent_vertex(graph: Graph, u: Vertex, uv: Edge) -> Vertex:
    """Return the live vertex at the other end of ``uv`` from ``u``."""
    return graph.get_vertex(uv.other(u.id))


def reconstruct_path(graph: Graph, v: Vertex) -> List[Tuple[int, float]]:
    """Follow predecessor edges back from ``v``.

    The walk stops at a vertex without a predecessor or at one whose
    predecessor has already been evicted from the graph.

    Returns:
        ``(vertex_id, cost_of_edge_into_it)`` pairs from the oldest reachable
        ancestor to ``v``; the first pair has cost 0
    """
    path = []
    while True:
        uv = v.predecessor
        if uv is None or not graph.contains_vertex(uv.other(v.id)):
            path.append((v.id, 0))
            break
        path.append((v.id, uv.cost))
        v = graph.get_vertex(uv.other(v.id))
    path.reverse()
    return path


def format_path(graph: Graph, v: Vertex) -> str:
    """Render the predecessor chain of ``v`` as ``0 --:1:-> 4 --:1:-> 9``."""
    path = reconstruct_path(graph, v)
    parts = [str(path[0][0])]
    for vertex_id, cost in path[1:]:
        parts.append(f"--:{cost:g}:-> {vertex_id}")
    return " ".join(parts)
