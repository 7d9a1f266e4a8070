"""
varion.core.parser - Node grouping for Varion scripts.

Consumes classified lines and groups them into ParsedNodes at header
boundaries. Structural problems local to one node are reported here; checks
that need the whole script live in varion.core.validator.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from varion.core.errors import ErrorCollector, ErrorKind
from varion.core.models import Action, Choice, ClassifiedLine, LineKind, ParsedNode

logger = logging.getLogger(__name__)


class NodeParser:
    """
    Groups a classified line stream into ParsedNodes.

    A header closes the node under construction and opens a new one; end of
    input closes the last node. An ``@if`` line applies to the choice that
    immediately follows it.
    """

    def parse(self, lines: Iterable[ClassifiedLine], errors: ErrorCollector) -> List[ParsedNode]:
        """
        Parse classified lines into nodes.

        Args:
            lines: Classified lines in source order (may be a lazy iterator)
            errors: Accumulator receiving structural errors

        Returns:
            ParsedNodes in source order, not yet cross-validated
        """
        nodes: List[ParsedNode] = []
        current: Optional[ParsedNode] = None
        pending: Optional[ClassifiedLine] = None
        # Set after a rejected header: its lines belong to no node and are dropped
        skipping = False

        for line in lines:
            if line.kind == LineKind.HEADER:
                if pending is not None:
                    self._dangling_condition(pending, current, errors, "before the next node")
                    pending = None
                if line.invalid:
                    current = None
                    skipping = True
                    continue
                skipping = False
                current = ParsedNode(id=line.content, line_number=line.line_number)
                nodes.append(current)
                continue

            if skipping:
                continue

            if line.invalid:
                pending = None
                continue

            if current is None:
                errors.add(
                    ErrorKind.CONTENT_OUTSIDE_NODE,
                    line.line_number,
                    "Content found outside of a node declaration. "
                    "Every line must belong to a node starting with '::'.",
                )
                continue

            if line.kind == LineKind.CONDITION:
                if pending is not None:
                    errors.add(
                        ErrorKind.MISPLACED_CONDITION,
                        line.line_number,
                        "Consecutive @if conditions are not allowed",
                        node_id=current.id,
                        related_lines=(pending.line_number,),
                    )
                pending = line
                continue

            if line.kind == LineKind.CHOICE:
                condition = line.condition
                if pending is not None:
                    if condition is not None:
                        errors.add(
                            ErrorKind.MISPLACED_CONDITION,
                            line.line_number,
                            "A choice cannot have both a preceding @if and an inline @if",
                            node_id=current.id,
                            related_lines=(pending.line_number,),
                        )
                    else:
                        condition = pending.content
                    pending = None
                current.choices.append(
                    Choice(
                        label=line.label or "",
                        target=line.target or "",
                        condition=condition,
                        line_number=line.line_number,
                    )
                )
                continue

            if pending is not None:
                errors.add(
                    ErrorKind.MISPLACED_CONDITION,
                    pending.line_number,
                    f"@if must be immediately followed by a choice, not a {line.kind.value} line",
                    node_id=current.id,
                    related_lines=(line.line_number,),
                )
                pending = None

            self._accumulate(current, line, errors)

        if pending is not None:
            self._dangling_condition(pending, current, errors, "at end of input")

        logger.debug("Parsed %d nodes", len(nodes))
        return nodes

    def _accumulate(self, node: ParsedNode, line: ClassifiedLine, errors: ErrorCollector) -> None:
        if line.kind == LineKind.DIRECTIVE:
            if node.directives:
                first_line = node.directives[0][1]
                errors.add(
                    ErrorKind.DUPLICATE_DIRECTIVE,
                    line.line_number,
                    f"Node '{node.id}' declares @next more than once "
                    f"(first on line {first_line})",
                    node_id=node.id,
                    related_lines=(first_line,),
                )
            node.directives.append((line.content, line.line_number))
        elif line.kind == LineKind.TAG:
            node.tags.append((line.content, line.line_number))
        elif line.kind == LineKind.META:
            node.meta[line.key or ""] = line.content
        elif line.kind == LineKind.ACTION:
            node.actions.append(Action(command=line.content, line_number=line.line_number))
        elif line.kind == LineKind.TEXT:
            node.text.append(line.content)
        else:
            raise RuntimeError(f"Unexpected line kind in node body: {line.kind}")

    @staticmethod
    def _dangling_condition(
        pending: ClassifiedLine,
        node: Optional[ParsedNode],
        errors: ErrorCollector,
        where: str,
    ) -> None:
        errors.add(
            ErrorKind.MISPLACED_CONDITION,
            pending.line_number,
            f"Dangling @if condition {where}",
            node_id=node.id if node else None,
        )
