"""CLI package for yao.

This package contains the Typer application and all subcommands.
"""

from yao.cli.main import app

__all__ = ["app"]
