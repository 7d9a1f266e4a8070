"""
varion - Parser and validator for Varion branching-dialogue scripts

A Varion script is a sequence of named nodes, each holding display text,
tags and metadata, and either an ``@next`` directive or a list of choices.
varion turns script text into an immutable, validated NodeGraph for a
playback runtime to walk.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("varion")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from varion.core import (
    Choice,
    ErrorKind,
    NodeDefinition,
    NodeGraph,
    ParseResult,
    ScriptError,
    ScriptValidationError,
    VarionError,
    parse,
)
from varion.loader import load_graph, parse_file

__all__ = [
    "__version__",
    "Choice",
    "ErrorKind",
    "NodeDefinition",
    "NodeGraph",
    "ParseResult",
    "ScriptError",
    "ScriptValidationError",
    "VarionError",
    "load_graph",
    "parse",
    "parse_file",
]
