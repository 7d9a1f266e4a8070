"""
varion.core - Scanner, node parser and graph validator
"""

from varion.core.errors import (
    ErrorKind,
    ScriptError,
    ScriptValidationError,
    VarionError,
)
from varion.core.models import (
    Action,
    Choice,
    ChoicesAmong,
    ClassifiedLine,
    DirectTo,
    LineKind,
    NodeDefinition,
    NodeGraph,
    NoExit,
    ParsedNode,
)
from varion.core.parser import NodeParser
from varion.core.pipeline import ParseResult, parse
from varion.core.scanner import Scanner, scan_lines
from varion.core.validator import GraphValidator

__all__ = [
    "Action",
    "Choice",
    "ChoicesAmong",
    "ClassifiedLine",
    "DirectTo",
    "ErrorKind",
    "GraphValidator",
    "LineKind",
    "NodeDefinition",
    "NodeGraph",
    "NodeParser",
    "NoExit",
    "ParsedNode",
    "ParseResult",
    "Scanner",
    "ScriptError",
    "ScriptValidationError",
    "VarionError",
    "parse",
    "scan_lines",
]
