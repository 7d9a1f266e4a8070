"""
varion.core.errors - Error taxonomy for script parsing.

Malformed scripts are reported as ScriptError values collected across all
stages; exceptions are reserved for callers that ask for them explicitly
(ParseResult.unwrap) and for configuration problems.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple


class ErrorKind(Enum):
    """Kinds of problems found in a Varion script."""

    LEXICAL = "LexicalError"
    CONTENT_OUTSIDE_NODE = "ContentOutsideNode"
    DUPLICATE_NODE_ID = "DuplicateNodeId"
    CONFLICTING_NEXT_AND_CHOICES = "ConflictingNextAndChoices"
    DUPLICATE_DIRECTIVE = "DuplicateDirective"
    DANGLING_REFERENCE = "DanglingReference"
    MALFORMED_TAG = "MalformedTag"
    MISPLACED_CONDITION = "MisplacedCondition"
    EMPTY_SCRIPT = "EmptyScript"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScriptError:
    """
    A single problem found while parsing or validating a script.

    Attributes:
        kind: Error category
        line_number: 1-indexed source line the error is attached to
        message: Human-readable description
        node_id: ID of the node the error belongs to, if any
        related_lines: Other source lines involved (e.g., first declaration
            of a duplicated node)
        source: Script path, when the text came from a file
    """

    kind: ErrorKind
    line_number: int
    message: str
    node_id: Optional[str] = None
    related_lines: Tuple[int, ...] = ()
    source: Optional[str] = None

    def location(self) -> str:
        """Return path:line location string."""
        if self.source:
            return f"{self.source}:{self.line_number}"
        return f"line {self.line_number}"

    def with_source(self, source: Optional[str]) -> "ScriptError":
        """Return a copy of this error attributed to ``source``."""
        return ScriptError(
            kind=self.kind,
            line_number=self.line_number,
            message=self.message,
            node_id=self.node_id,
            related_lines=self.related_lines,
            source=source,
        )

    def __str__(self) -> str:
        return f"{self.location()}: [{self.kind}] {self.message}"


class VarionError(Exception):
    """Base class for exceptions raised by varion."""


class ScriptValidationError(VarionError):
    """Raised when a caller requests a graph from a script that has errors."""

    def __init__(self, errors: Sequence[ScriptError]):
        self.errors: List[ScriptError] = list(errors)
        count = len(self.errors)
        summary = f"{count} error{'s' if count != 1 else ''} in script"
        if self.errors:
            summary += f"; first: {self.errors[0]}"
        super().__init__(summary)


class ConfigError(VarionError):
    """Raised when a configuration file cannot be read or parsed."""


@dataclass
class ErrorCollector:
    """Accumulator threaded through the scanner, parser and validator."""

    errors: List[ScriptError] = field(default_factory=list)

    def add(
        self,
        kind: ErrorKind,
        line_number: int,
        message: str,
        node_id: Optional[str] = None,
        related_lines: Tuple[int, ...] = (),
    ) -> None:
        self.errors.append(
            ScriptError(
                kind=kind,
                line_number=line_number,
                message=message,
                node_id=node_id,
                related_lines=related_lines,
            )
        )

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)
