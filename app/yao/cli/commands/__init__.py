"""CLI commands for yao.

This package contains all subcommand implementations.
"""

from yao.cli.commands import config, get, sync

__all__ = ["config", "get", "sync"]
