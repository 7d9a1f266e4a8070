"""
Tests for varion.graph.serialize module.
"""

import json

from varion import parse
from varion.graph.serialize import (
    graph_to_json,
    graph_to_text,
    serialize_errors,
    serialize_graph,
    serialize_node,
)


SCRIPT = """\
:: start
# intro
@who: Guard
@action: set seen = 1
Halt!
* Friend => friend @if reputation > 2
* Flee => friend

:: friend
Welcome.
@next start
"""


class TestSerializeGraph:
    """Tests for JSON-compatible graph export."""

    def test_serialize_graph(self):
        data = serialize_graph(parse(SCRIPT, source="gate.va").graph)

        assert data["entry"] == "start"
        assert data["source"] == "gate.va"
        assert [n["id"] for n in data["nodes"]] == ["start", "friend"]

    def test_serialize_choice_node(self):
        node = parse(SCRIPT).graph["start"]
        data = serialize_node(node)

        assert data["tags"] == ["intro"]
        assert data["meta"] == {"who": "Guard"}
        assert data["actions"] == ["set seen = 1"]
        assert data["choices"] == [
            {"label": "Friend", "target": "friend", "condition": "reputation > 2"},
            {"label": "Flee", "target": "friend"},
        ]
        assert "next" not in data

    def test_serialize_direct_node(self):
        data = serialize_node(parse(SCRIPT).graph["friend"])
        assert data["next"] == "start"
        assert "choices" not in data

    def test_graph_to_json_round_trips_through_json(self):
        data = json.loads(graph_to_json(parse(SCRIPT).graph))
        assert data["nodes"][1]["text"] == ["Welcome."]


class TestSerializeErrors:
    """Tests for error export."""

    def test_serialize_errors(self):
        result = parse(":: a\n:: a\n@next b\n", source="x.va")
        data = serialize_errors(result.errors)

        assert data[0] == {
            "kind": "DuplicateNodeId",
            "line": 2,
            "message": data[0]["message"],
            "node": "a",
            "related_lines": [1],
            "source": "x.va",
        }
        assert data[1]["kind"] == "DanglingReference"


class TestTextOutline:
    """Tests for the human-readable outline."""

    def test_graph_to_text(self):
        text = graph_to_text(parse(SCRIPT).graph)

        assert text.startswith("entry: start")
        assert "1. Friend -> friend  (if reputation > 2)" in text
        assert "-> start" in text
