"""
varion.core.scanner - Line classification for Varion scripts.

Turns raw script text into ClassifiedLines in a single forward pass.
Comments and blank lines are dropped; lexical errors are recorded and
scanning continues with the next line.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Tuple

from varion.core.errors import ErrorCollector, ErrorKind, ScriptError
from varion.core.models import ClassifiedLine, LineKind

logger = logging.getLogger(__name__)


class Scanner:
    """
    Classifies script lines.

    Markers (checked on the stripped line):
        ``//``       comment, discarded
        ``::``       node header
        ``#``        tag
        ``@next``    directive
        ``@if``      condition for the following choice
        ``@action:`` action
        ``@key:``    metadata
        ``*``        choice, ``label => target [@if condition]``
    """

    COMMENT_MARKER = "//"
    HEADER_MARKER = "::"
    TAG_MARKER = "#"
    CHOICE_MARKER = "*"
    CHOICE_SEPARATOR = "=>"

    DIRECTIVE_PATTERN = re.compile(r"^@next(?:\s+(?P<target>.*))?$")
    CONDITION_PATTERN = re.compile(r"^@if(?:\s+(?P<condition>.*))?$")
    ACTION_PATTERN = re.compile(r"^@action\s*:(?P<command>.*)$")
    META_PATTERN = re.compile(r"^@(?P<key>[^\s:]+)\s*:(?P<value>.*)$")
    INLINE_CONDITION_PATTERN = re.compile(r"(?:^|\s)@if(?:\s+(?P<condition>.*))?$")

    # Keys that look like metadata but are reserved for other line kinds
    RESERVED_META_KEYS = ("next", "if")

    def scan(self, text: str, errors: ErrorCollector) -> Iterator[ClassifiedLine]:
        """
        Lazily classify every line of ``text``.

        Args:
            text: Script source
            errors: Accumulator receiving lexical errors

        Yields:
            ClassifiedLine for each non-blank, non-comment line that is valid or
            is a rejected header or choice
        """
        for index, line in enumerate(text.split("\n")):
            classified = self.classify(line, index + 1, errors)
            if classified is not None:
                yield classified

    def classify(
        self, line: str, line_number: int, errors: ErrorCollector
    ) -> Optional[ClassifiedLine]:
        """
        Classify a single line.

        Returns None for blank, comment and rejected lines, except that rejected
        headers and choices come back flagged ``invalid``.
        """
        stripped = line.strip()

        if not stripped or stripped.startswith(self.COMMENT_MARKER):
            return None

        if stripped.startswith(self.HEADER_MARKER):
            node_id = stripped[len(self.HEADER_MARKER) :].strip()
            valid = self._check_identifier(node_id, "Node header", line_number, errors)
            return ClassifiedLine(LineKind.HEADER, node_id, line, line_number, invalid=not valid)

        if stripped.startswith(self.TAG_MARKER):
            tag = stripped[len(self.TAG_MARKER) :].strip()
            if not tag:
                errors.add(ErrorKind.LEXICAL, line_number, "Tag marker '#' must be followed by a tag")
                return None
            return ClassifiedLine(LineKind.TAG, tag, line, line_number)

        if stripped.startswith("@"):
            return self._classify_at_line(stripped, line, line_number, errors)

        if stripped.startswith(self.CHOICE_MARKER):
            return self._classify_choice(stripped, line, line_number, errors)

        return ClassifiedLine(LineKind.TEXT, line.rstrip(), line, line_number)

    def _classify_at_line(
        self, stripped: str, line: str, line_number: int, errors: ErrorCollector
    ) -> Optional[ClassifiedLine]:
        match = self.DIRECTIVE_PATTERN.match(stripped)
        if match:
            target = (match.group("target") or "").strip()
            if not self._check_identifier(target, "Directive '@next'", line_number, errors):
                return None
            return ClassifiedLine(LineKind.DIRECTIVE, target, line, line_number)

        match = self.CONDITION_PATTERN.match(stripped)
        if match:
            condition = (match.group("condition") or "").strip()
            if not condition:
                errors.add(ErrorKind.LEXICAL, line_number, "'@if' must be followed by a condition")
                return None
            return ClassifiedLine(LineKind.CONDITION, condition, line, line_number)

        match = self.ACTION_PATTERN.match(stripped)
        if match:
            command = match.group("command").strip()
            if not command:
                errors.add(ErrorKind.LEXICAL, line_number, "'@action:' must be followed by a command")
                return None
            return ClassifiedLine(LineKind.ACTION, command, line, line_number)

        match = self.META_PATTERN.match(stripped)
        if match and match.group("key") not in self.RESERVED_META_KEYS:
            return ClassifiedLine(
                LineKind.META,
                match.group("value").strip(),
                line,
                line_number,
                key=match.group("key"),
            )

        errors.add(ErrorKind.LEXICAL, line_number, f"Invalid meta or action line: {stripped}")
        return None

    def _classify_choice(
        self, stripped: str, line: str, line_number: int, errors: ErrorCollector
    ) -> Optional[ClassifiedLine]:
        body = stripped[len(self.CHOICE_MARKER) :]
        # A rejected choice still consumes any pending @if
        rejected = ClassifiedLine(LineKind.CHOICE, body.strip(), line, line_number, invalid=True)
        parts = body.split(self.CHOICE_SEPARATOR)
        if len(parts) != 2:
            errors.add(
                ErrorKind.LEXICAL,
                line_number,
                f"Invalid choice format (expected 'label => target'): {body.strip()}",
            )
            return rejected

        label = parts[0].strip()
        target, condition = self._split_inline_condition(parts[1].strip())

        if not label:
            errors.add(ErrorKind.LEXICAL, line_number, "Choice label must not be empty")
            return rejected
        if condition is not None and not condition:
            errors.add(ErrorKind.LEXICAL, line_number, "Inline '@if' must be followed by a condition")
            return rejected
        if not self._check_identifier(target, "Choice target", line_number, errors):
            return rejected

        return ClassifiedLine(
            LineKind.CHOICE,
            body.strip(),
            line,
            line_number,
            label=label,
            target=target,
            condition=condition,
        )

    def _split_inline_condition(self, rest: str) -> Tuple[str, Optional[str]]:
        match = self.INLINE_CONDITION_PATTERN.search(rest)
        if not match:
            return rest, None
        return rest[: match.start()].strip(), (match.group("condition") or "").strip()

    @staticmethod
    def _check_identifier(
        value: str, what: str, line_number: int, errors: ErrorCollector
    ) -> bool:
        if not value:
            errors.add(ErrorKind.LEXICAL, line_number, f"{what} must name a node id")
            return False
        if any(ch.isspace() for ch in value):
            errors.add(
                ErrorKind.LEXICAL,
                line_number,
                f"{what} has an invalid node id {value!r} (whitespace is not allowed)",
            )
            return False
        return True


def scan_lines(text: str) -> Tuple[List[ClassifiedLine], List[ScriptError]]:
    """
    Classify all lines of ``text`` eagerly.

    Returns:
        Tuple of (classified lines, lexical errors)
    """
    errors = ErrorCollector()
    lines = list(Scanner().scan(text, errors))
    logger.debug("Scanned %d lines with %d lexical errors", len(lines), len(errors))
    return lines, errors.errors
