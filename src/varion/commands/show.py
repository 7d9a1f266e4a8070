"""
varion.commands.show - Show a script's node graph.
"""

import argparse
import json
import sys
from pathlib import Path

from varion.commands.check import load_configuration
from varion.graph.serialize import graph_to_json, graph_to_text, node_to_text, serialize_node
from varion.loader import parse_file


def run(args: argparse.Namespace) -> int:
    """Print the validated graph of one script, or a single node of it."""
    script = Path(args.script)
    if not script.is_file():
        print(f"Error: script not found: {script}", file=sys.stderr)
        return 1

    config = load_configuration(args)
    if config is None:
        return 1

    result = parse_file(script)
    if not result.ok:
        for error in result.errors:
            print(error, file=sys.stderr)
        return 1

    graph = result.unwrap()
    output_format = args.format or config.get("output", {}).get("format", "text")

    if args.node:
        node = graph.get(args.node)
        if node is None:
            print(f"Error: no node '{args.node}' in {script}", file=sys.stderr)
            return 1
        if output_format == "json":
            print(json.dumps(serialize_node(node), indent=2, ensure_ascii=False))
        else:
            print(node_to_text(node))
        return 0

    if output_format == "json":
        print(graph_to_json(graph))
    else:
        print(graph_to_text(graph))
    return 0
