"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from yao import __version__
from yao.cli.commands import config, get, sync
from yao.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="yao",
    help="Install packages from the Arch repositories or the AUR.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"yao version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Print executed commands and resolved configuration.",
        ),
    ] = False,
) -> None:
    """yao - fast minimal repository + AUR helper.

    Repository packages are installed with pacman; AUR packages are
    downloaded, built with makepkg and installed with pacman -U.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


# Register commands
app.command(name="sync")(sync.sync_packages)
app.command(name="get")(get.get_pkgbuilds)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
