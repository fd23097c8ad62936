"""Shared setup for CLI commands.

Resolves the configuration, checks external tools and prepares the
cache directories before any package work begins.
"""

import typer

from yao.cli.display import print_config
from yao.core.config import Config, load_config
from yao.core.errors import YaoError
from yao.core.paths import ensure_dir
from yao.core.tools import ensure_tools
from yao.utils.formatting import print_error


def is_verbose(ctx: typer.Context) -> bool:
    """Read the global --verbose flag from the context."""
    obj = ctx.obj or {}
    return bool(obj.get("verbose", False))


def prepare_runtime(ctx: typer.Context) -> Config:
    """Load configuration, verify tools and create directories.

    Args:
        ctx: Typer context carrying global options.

    Returns:
        Resolved configuration.

    Raises:
        typer.Exit: If any step fails.
    """
    try:
        config = load_config(verbose=is_verbose(ctx))
        ensure_tools(config)
        ensure_dir(config.pkgdest, "package destination")
        ensure_dir(config.snapshot_cache, "snapshot cache")
    except (YaoError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if config.verbose:
        print_config(config.summary())
    return config
