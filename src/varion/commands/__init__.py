"""
varion.commands - CLI command implementations
"""

__all__ = [
    "check",
    "config_cmd",
    "show",
]
