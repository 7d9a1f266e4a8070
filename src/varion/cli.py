"""
varion.cli - Command-line interface.

Main entry point for the varion CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from varion import __version__
from varion.commands import check, config_cmd, show


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="varion",
        description="Parse and validate Varion branching-dialogue scripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  varion check                      # Check all scripts under the configured paths
  varion check story/ intro.va      # Check specific files and directories
  varion check -j                   # Output JSON for tooling
  varion show intro.va              # Print the node graph
  varion show intro.va --node start --format json

Configuration:
  varion config path                # Show config file location
  varion config show                # View effective settings

For detailed command help: varion <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"varion {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Parse and validate scripts, reporting every error",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Error kinds:
  LexicalError                Marker with an empty or invalid payload
  ContentOutsideNode          Lines before the first '::' header
  DuplicateNodeId             Two nodes share an id
  ConflictingNextAndChoices   A node has both @next and choices
  DuplicateDirective          A node declares @next twice
  DanglingReference           @next or a choice names an undeclared node
  MalformedTag                Tag with whitespace or a second '#'
  MisplacedCondition          @if not directly followed by a choice
  EmptyScript                 Script declares no nodes
""",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Script files or directories (default: [scripts] paths from config)",
        metavar="PATH",
    )
    check_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output results as JSON",
    )

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Print the validated node graph of a script",
    )
    show_parser.add_argument("script", type=Path, help="Script file", metavar="SCRIPT")
    show_parser.add_argument(
        "--node",
        help="Only show the node with this id",
        metavar="ID",
    )
    show_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default=None,
        help="Output format (default: [output] format from config)",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_parser.add_argument(
        "config_action",
        choices=["show", "path"],
        help="show: print effective settings; path: print config file location",
    )

    # version command
    subparsers.add_parser("version", help="Show version")

    return parser


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr; DEBUG with -v, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install varion[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "check":
            return check.run(args)
        elif args.command == "show":
            return show.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "version":
            print(f"varion {__version__}")
            return 0
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
