"""
varion.commands.check - Check scripts command.

Parses and validates every discovered script and reports all errors.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from varion.config import get_config
from varion.core.errors import ConfigError
from varion.core.pipeline import ParseResult
from varion.graph.serialize import serialize_errors
from varion.loader import discover_from_config, parse_file

logger = logging.getLogger(__name__)


def run(args: argparse.Namespace) -> int:
    """
    Run the check command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 if every script is valid, 1 otherwise)
    """
    config = load_configuration(args)
    if config is None:
        return 1

    scripts = discover_from_config(config, args.paths)
    if not scripts:
        print("No scripts found.", file=sys.stderr)
        return 1

    results: List[ParseResult] = []
    for script in scripts:
        try:
            results.append(parse_file(script))
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {script}: {e}", file=sys.stderr)
            return 1

    use_json = args.json or config.get("output", {}).get("format") == "json"
    if use_json:
        print(json.dumps(build_report(results), indent=2, ensure_ascii=False))
    else:
        print_report(results, quiet=args.quiet)

    return 1 if any(not result.ok for result in results) else 0


def load_configuration(args: argparse.Namespace) -> Optional[Dict[str, Any]]:
    """Load configuration from file or use defaults."""
    try:
        return get_config(args.config)
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None


def build_report(results: List[ParseResult]) -> Dict[str, Any]:
    """Build a JSON-compatible report of every checked script."""
    return {
        "scripts": [
            {
                "source": result.source,
                "valid": result.ok,
                "nodes": len(result.graph) if result.graph else 0,
                "errors": serialize_errors(result.errors),
            }
            for result in results
        ],
        "valid": all(result.ok for result in results),
    }


def print_report(results: List[ParseResult], quiet: bool = False) -> None:
    """Print errors for each script followed by a summary."""
    error_count = 0
    for result in results:
        if result.ok:
            logger.debug("%s: %d nodes", result.source, len(result.graph))
            continue
        error_count += len(result.errors)
        for error in result.errors:
            print(error)

    if quiet:
        return

    valid = sum(1 for result in results if result.ok)
    print("─" * 60)
    print(f"✓ {valid}/{len(results)} scripts valid")
    if error_count:
        print(f"❌ {error_count} errors")
