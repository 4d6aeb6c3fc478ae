"""Graph abstraction used to hold the explored state space."""

from .edge import Edge
from .vertex import Vertex, VertexLabel
from .graph import Graph, GraphInvariantError
from .graph_utils import (
    relax, get_adjacent_vertex, reconstruct_path, format_path,
    compare_vertex_cost, compare_vertex_heuristic, compare_edge_cost
)

__all__ = [
    'Edge',
    'Vertex',
    'VertexLabel',
    'Graph',
    'GraphInvariantError',
    'relax',
    'get_adjacent_vertex',
    'reconstruct_path',
    'format_path',
    'compare_vertex_cost',
    'compare_vertex_heuristic',
    'compare_edge_cost'
]
