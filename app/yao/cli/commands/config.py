"""Config command implementation.

Shows the resolved configuration and writes a default config file.
"""

from typing import Annotated

import typer

from yao.cli.display import print_config
from yao.cli.runtime import is_verbose
from yao.core.config import Config, load_config, save_config
from yao.core.errors import ConfigError
from yao.core.paths import get_config_path
from yao.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the yao configuration.",
    no_args_is_help=True,
)


@app.command("show")
def show_config(ctx: typer.Context) -> None:
    """Show the configuration after applying the file and environment."""
    try:
        config = load_config(verbose=is_verbose(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_config(config.summary(), stderr=False)
    print_info(f"Config file: {get_config_path()}")


@app.command("init")
def init_config(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file containing the default values."""
    path = get_config_path()
    if path.exists() and not force:
        print_error(f"Config file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(Config(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written: {saved}")
