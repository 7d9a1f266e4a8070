"""
varion.config - Configuration loading and defaults

Configuration lives in a ``.varion.toml`` file found by walking up from the
working directory. It is parsed with tomlkit, deep-merged over
DEFAULT_CONFIG, and finally overridden by ``VARION_<SECTION>_<KEY>``
environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from varion.core.errors import ConfigError

CONFIG_FILENAME = ".varion.toml"
ENV_PREFIX = "VARION_"

DEFAULT_CONFIG: dict[str, Any] = {
    "scripts": {
        "paths": ["."],
        "extensions": [".va", ".vion"],
        "skip_files": [],
        "recursive": True,
    },
    "output": {
        "format": "text",
    },
}


def parse_toml_document(content: str) -> tomlkit.TOMLDocument:
    """Parse TOML text into a style-preserving tomlkit document.

    Raises:
        ConfigError: If the text is not valid TOML
    """
    try:
        return tomlkit.parse(content)
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python dicts and lists."""
    return parse_toml_document(content).unwrap()


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested tables are merged key by key; any other value in ``override``
    replaces the base value.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def find_config_file(start: Path) -> Path | None:
    """Find the nearest config file at or above ``start``."""
    start = Path(start).resolve()
    for directory in [start, *start.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _try_parse_env_value(raw: str) -> Any:
    """Interpret an environment value as JSON list/object, boolean, or string."""
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if raw.strip().startswith(("[", "{")):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw
    return raw


def _apply_env_overrides(
    config: dict[str, Any], environ: dict[str, str] | None = None
) -> dict[str, Any]:
    """Apply ``VARION_<SECTION>_<KEY>`` environment variables to ``config``.

    The section is the first word after the prefix; the rest (lowercased)
    is the key, so ``VARION_SCRIPTS_SKIP_FILES`` sets ``scripts.skip_files``.
    """
    environ = dict(os.environ) if environ is None else environ
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, _, key = name[len(ENV_PREFIX) :].lower().partition("_")
        if not section or not key:
            continue
        config.setdefault(section, {})
        if isinstance(config[section], dict):
            config[section][key] = _try_parse_env_value(raw)
    return config


def load_config(path: Path) -> dict[str, Any]:
    """Load a config file merged over the defaults, with env overrides applied.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return _apply_env_overrides(merge_configs(DEFAULT_CONFIG, parse_toml(content)))


def get_config(config_path: Path | None = None, start: Path | None = None) -> dict[str, Any]:
    """Return the effective configuration.

    Uses ``config_path`` if given, otherwise the nearest config file above
    ``start`` (default: cwd), otherwise the defaults.
    """
    if config_path is None:
        config_path = find_config_file(start or Path.cwd())
    if config_path is None:
        return _apply_env_overrides(copy.deepcopy(DEFAULT_CONFIG))
    return load_config(config_path)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
]
