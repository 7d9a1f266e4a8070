"""
varion.commands.config_cmd - Inspect configuration.
"""

import argparse
import sys
from pathlib import Path

import tomlkit

from varion.config import CONFIG_FILENAME, find_config_file, get_config
from varion.core.errors import ConfigError


def run(args: argparse.Namespace) -> int:
    """Run the config command (``show`` or ``path``)."""
    if args.config_action == "path":
        path = args.config or find_config_file(Path.cwd())
        if path is None:
            print(f"No {CONFIG_FILENAME} found (using defaults)")
            return 1
        print(path)
        return 0

    if args.config_action == "show":
        try:
            config = get_config(args.config)
        except ConfigError as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            return 1
        print(tomlkit.dumps(config), end="")
        return 0

    print("Usage: varion config {show,path}")
    return 1
