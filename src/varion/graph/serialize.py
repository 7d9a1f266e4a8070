"""Graph Serialization - Export NodeGraph and errors to JSON-compatible data.

This module provides functions to serialize NodeGraph, NodeDefinition and
ScriptError values to plain dicts, JSON text, and a readable text outline.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Iterable

from varion.core.models import ChoicesAmong, DirectTo

if TYPE_CHECKING:
    from varion.core.errors import ScriptError
    from varion.core.models import NodeDefinition, NodeGraph


def serialize_node(node: NodeDefinition) -> dict[str, Any]:
    """Serialize a NodeDefinition to a JSON-compatible dict.

    Args:
        node: The node to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {
        "id": node.id,
        "line": node.line_number,
        "text": list(node.text),
        "tags": sorted(node.tags),
    }

    if node.meta:
        result["meta"] = dict(node.meta)

    if node.actions:
        result["actions"] = [action.command for action in node.actions]

    if isinstance(node.exit, DirectTo):
        result["next"] = node.exit.target
    elif isinstance(node.exit, ChoicesAmong):
        result["choices"] = [
            {
                "label": choice.label,
                "target": choice.target,
                **({"condition": choice.condition} if choice.condition else {}),
            }
            for choice in node.exit.choices
        ]

    return result


def serialize_graph(graph: NodeGraph) -> dict[str, Any]:
    """Serialize a NodeGraph to a JSON-compatible dict.

    Nodes are listed in source order.
    """
    result: dict[str, Any] = {
        "entry": graph.entry,
        "nodes": [serialize_node(graph[node_id]) for node_id in graph],
    }
    if graph.source:
        result["source"] = graph.source
    return result


def serialize_error(error: ScriptError) -> dict[str, Any]:
    """Serialize a ScriptError to a JSON-compatible dict."""
    result: dict[str, Any] = {
        "kind": error.kind.value,
        "line": error.line_number,
        "message": error.message,
    }
    if error.node_id is not None:
        result["node"] = error.node_id
    if error.related_lines:
        result["related_lines"] = list(error.related_lines)
    if error.source:
        result["source"] = error.source
    return result


def serialize_errors(errors: Iterable[ScriptError]) -> list[dict[str, Any]]:
    return [serialize_error(error) for error in errors]


def graph_to_json(graph: NodeGraph, indent: int | None = 2) -> str:
    """Serialize a NodeGraph to a JSON string."""
    return json.dumps(serialize_graph(graph), indent=indent, ensure_ascii=False)


def node_to_text(node: NodeDefinition) -> str:
    """Render a node as a short human-readable outline."""
    lines = [f":: {node.id}"]
    if node.tags:
        lines.append("   tags: " + ", ".join(sorted(node.tags)))
    for key, value in node.meta.items():
        lines.append(f"   {key}: {value}")
    for action in node.actions:
        lines.append(f"   action: {action.command}")
    for text in node.text:
        lines.append(f"   | {text}")
    if isinstance(node.exit, DirectTo):
        lines.append(f"   -> {node.exit.target}")
    for index, choice in enumerate(node.choices, start=1):
        suffix = f"  (if {choice.condition})" if choice.condition else ""
        lines.append(f"   {index}. {choice.label} -> {choice.target}{suffix}")
    return "\n".join(lines)


def graph_to_text(graph: NodeGraph) -> str:
    """Render every node of a graph, entry first."""
    header = f"entry: {graph.entry}"
    return "\n\n".join([header] + [node_to_text(graph[node_id]) for node_id in graph])
