"""Graph module - Export of validated Varion node graphs."""

from varion.graph.serialize import (
    graph_to_json,
    graph_to_text,
    serialize_error,
    serialize_errors,
    serialize_graph,
    serialize_node,
)

__all__ = [
    "graph_to_json",
    "graph_to_text",
    "serialize_error",
    "serialize_errors",
    "serialize_graph",
    "serialize_node",
]
