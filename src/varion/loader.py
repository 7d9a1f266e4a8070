"""
Script loading utilities.

Reads Varion scripts from disk and runs them through the parsing pipeline.
Used by the CLI commands; the core itself never touches the filesystem.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from varion.core.models import NodeGraph
from varion.core.pipeline import ParseResult, parse

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = [".va", ".vion"]


def read_script(path: Path) -> str:
    """Read a script file as UTF-8 text."""
    return Path(path).read_text(encoding="utf-8")


def parse_file(path: Path) -> ParseResult:
    """
    Parse a script file.

    Args:
        path: Path to a .va/.vion file

    Returns:
        ParseResult whose errors and graph are attributed to ``path``
    """
    logger.debug("Parsing %s", path)
    return parse(read_script(path), source=str(path))


def load_graph(path: Path) -> NodeGraph:
    """
    Load a script file as a NodeGraph.

    Raises:
        ScriptValidationError: If the script has errors
    """
    return parse_file(path).unwrap()


def discover_scripts(
    paths: Iterable[Path],
    extensions: Optional[Sequence[str]] = None,
    skip_files: Optional[Sequence[str]] = None,
    recursive: bool = True,
) -> List[Path]:
    """
    Find script files under the given files and directories.

    Files named explicitly are always included; directories are searched for
    files with a matching extension.

    Args:
        paths: Files and/or directories
        extensions: Accepted suffixes (default: .va, .vion)
        skip_files: File names to ignore
        recursive: If True, search subdirectories

    Returns:
        Sorted list of unique script paths
    """
    suffixes = {ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS)}
    skipped = set(skip_files or [])
    found = set()

    for path in paths:
        path = Path(path)
        if path.is_file():
            found.add(path)
            continue
        if not path.is_dir():
            logger.warning("Script path does not exist: %s", path)
            continue
        candidates = path.rglob("*") if recursive else path.glob("*")
        for candidate in candidates:
            if (
                candidate.is_file()
                and candidate.suffix.lower() in suffixes
                and candidate.name not in skipped
            ):
                found.add(candidate)

    return sorted(found)


def discover_from_config(
    config: Dict[str, Any], paths: Optional[Sequence[Path]] = None
) -> List[Path]:
    """Find scripts using the ``[scripts]`` section of a configuration dict."""
    scripts_config = config.get("scripts", {})
    if not paths:
        paths = [Path(p) for p in scripts_config.get("paths", ["."])]
    return discover_scripts(
        paths,
        extensions=scripts_config.get("extensions", DEFAULT_EXTENSIONS),
        skip_files=scripts_config.get("skip_files", []),
        recursive=scripts_config.get("recursive", True),
    )
