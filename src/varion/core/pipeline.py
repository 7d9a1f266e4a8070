"""
varion.core.pipeline - Text to NodeGraph in one call.

Runs the scanner, node parser and validator, merging the errors of every
stage into a single list ordered by source line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from varion.core.errors import ErrorCollector, ScriptError, ScriptValidationError
from varion.core.models import NodeGraph
from varion.core.parser import NodeParser
from varion.core.scanner import Scanner
from varion.core.validator import GraphValidator


@dataclass
class ParseResult:
    """
    Outcome of parsing one script.

    Attributes:
        graph: The validated graph, or None if there were errors
        errors: Every error found, ordered by line number
        source: Script path, when parsed from a file
    """

    graph: Optional[NodeGraph] = None
    errors: List[ScriptError] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.graph is not None and not self.errors

    def unwrap(self) -> NodeGraph:
        """Return the graph, raising ScriptValidationError if parsing failed."""
        if self.graph is None or self.errors:
            raise ScriptValidationError(self.errors)
        return self.graph


def parse(text: str, source: Optional[str] = None) -> ParseResult:
    """
    Parse and validate a Varion script.

    Malformed input is always reported through ParseResult.errors; this
    function does not raise for it.

    Args:
        text: Script source
        source: Optional path used to attribute errors

    Returns:
        ParseResult with either a graph or a non-empty error list
    """
    front_errors = ErrorCollector()
    lines = Scanner().scan(text, front_errors)
    nodes = NodeParser().parse(lines, front_errors)

    graph, validation_errors = GraphValidator().validate(nodes, source=source)

    # Stable sort keeps stage order for errors on the same line
    errors = sorted(front_errors.errors + validation_errors, key=lambda e: e.line_number)
    if source is not None:
        errors = [error.with_source(source) for error in errors]

    if errors:
        return ParseResult(graph=None, errors=errors, source=source)
    return ParseResult(graph=graph, errors=[], source=source)
