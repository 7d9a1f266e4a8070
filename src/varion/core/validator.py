"""
varion.core.validator - Whole-script validation.

Checks the parsed nodes of one script against each other and, when nothing
is wrong, freezes them into a NodeGraph. Every check runs so that authors
see all problems in one pass.

Reachability from the entry node is deliberately not checked; orphan nodes
are allowed while drafting.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from varion.core.errors import ErrorCollector, ErrorKind, ScriptError
from varion.core.models import (
    ChoicesAmong,
    DirectTo,
    Exit,
    NodeDefinition,
    NodeGraph,
    NoExit,
    ParsedNode,
)

logger = logging.getLogger(__name__)


class GraphValidator:
    """
    Validates parsed nodes and builds the NodeGraph.
    """

    # Tags are single words; '#' may not repeat inside one
    TAG_PATTERN = re.compile(r"^[^\s#]+$")

    def validate(
        self,
        nodes: List[ParsedNode],
        source: Optional[str] = None,
    ) -> Tuple[Optional[NodeGraph], List[ScriptError]]:
        """
        Validate all nodes of a script.

        Args:
            nodes: ParsedNodes in source order
            source: Script path recorded on the resulting graph

        Returns:
            Tuple of (NodeGraph or None, validation errors). The graph is
            None whenever the error list is non-empty.
        """
        errors = ErrorCollector()

        if not nodes:
            errors.add(ErrorKind.EMPTY_SCRIPT, 1, "Script declares no nodes")
            return None, errors.errors

        self._check_duplicate_ids(nodes, errors)
        exits = self._reduce_exits(nodes, errors)
        self._check_references(nodes, errors)
        self._check_tags(nodes, errors)

        if errors:
            logger.debug("Validation found %d errors", len(errors))
            return None, errors.errors

        definitions = [self._freeze(node, exits[index]) for index, node in enumerate(nodes)]
        return NodeGraph.from_nodes(definitions, source=source), []

    def _check_duplicate_ids(self, nodes: List[ParsedNode], errors: ErrorCollector) -> None:
        """Check that no two nodes share an id."""
        first_seen: Dict[str, ParsedNode] = {}
        for node in nodes:
            original = first_seen.get(node.id)
            if original is None:
                first_seen[node.id] = node
                continue
            errors.add(
                ErrorKind.DUPLICATE_NODE_ID,
                node.line_number,
                f"Node '{node.id}' is declared on line {original.line_number} "
                f"and again on line {node.line_number}",
                node_id=node.id,
                related_lines=(original.line_number,),
            )

    def _reduce_exits(
        self, nodes: List[ParsedNode], errors: ErrorCollector
    ) -> List[Optional[Exit]]:
        """Reduce each node's directive and choice lines to a single Exit."""
        return [self.reduce_exit(node, errors) for node in nodes]

    @staticmethod
    def reduce_exit(node: ParsedNode, errors: ErrorCollector) -> Optional[Exit]:
        """
        Reduce one node to its outgoing-edge mechanism.

        Returns:
            The Exit, or None if the node declares both a directive and choices
        """
        if node.directives and node.choices:
            errors.add(
                ErrorKind.CONFLICTING_NEXT_AND_CHOICES,
                node.directives[0][1],
                f"Node '{node.id}' has both an @next directive and "
                f"{len(node.choices)} choice(s); use one or the other",
                node_id=node.id,
                related_lines=tuple(choice.line_number for choice in node.choices),
            )
            return None
        if node.choices:
            return ChoicesAmong(tuple(node.choices))
        if node.directives:
            return DirectTo(node.directives[-1][0])
        return NoExit()

    def _check_references(self, nodes: List[ParsedNode], errors: ErrorCollector) -> None:
        """Check that every directive and choice target names a declared node."""
        known_ids = {node.id for node in nodes}
        for node in nodes:
            for target, line_number in node.references():
                if target not in known_ids:
                    errors.add(
                        ErrorKind.DANGLING_REFERENCE,
                        line_number,
                        f"Node '{node.id}' refers to undeclared node '{target}'",
                        node_id=node.id,
                    )

    def _check_tags(self, nodes: List[ParsedNode], errors: ErrorCollector) -> None:
        """Check tag well-formedness."""
        for node in nodes:
            for tag, line_number in node.tags:
                if not self.TAG_PATTERN.match(tag):
                    errors.add(
                        ErrorKind.MALFORMED_TAG,
                        line_number,
                        f"Malformed tag {tag!r} (tags are single words without '#')",
                        node_id=node.id,
                    )

    @staticmethod
    def _freeze(node: ParsedNode, exit_: Optional[Exit]) -> NodeDefinition:
        if exit_ is None:
            raise RuntimeError(f"Node '{node.id}' has no reduced exit despite passing validation")
        return NodeDefinition(
            id=node.id,
            text=tuple(node.text),
            tags=frozenset(tag for tag, _ in node.tags),
            meta=MappingProxyType(dict(node.meta)),
            actions=tuple(node.actions),
            exit=exit_,
            line_number=node.line_number,
        )
