"""Sync command implementation.

Installs packages from the sync repositories or, for names pacman does
not know, builds them from the AUR and installs the result.
"""

from typing import Annotated

import typer

from yao.aur.client import AurClient
from yao.cli.display import print_plan
from yao.cli.runtime import prepare_runtime
from yao.core.errors import YaoError
from yao.core.orchestrator import SyncOrchestrator, SyncState
from yao.core.review import RecipeReviewer
from yao.utils.formatting import print_error


def _confirm_plan() -> bool:
    """Ask once whether to proceed; empty input means yes."""
    return typer.confirm(":: Proceed with installation?", default=True)


def _confirm(question: str) -> bool:
    return typer.confirm(question, default=True)


def _prompt(question: str, default: str) -> str:
    return typer.prompt(question, default=default)


def sync_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package names to install, in order.", show_default=False),
    ],
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Rebuild AUR packages even if their package files already exist.",
        ),
    ] = False,
    review: Annotated[
        bool,
        typer.Option(
            "--review/--no-review",
            help="Offer to open each PKGBUILD in an editor before building.",
        ),
    ] = True,
) -> None:
    """Install packages from the repositories or the AUR.

    Every name is classified first: names found by pacman -Si install from
    the repositories, other names must exist in the AUR. The plan is shown
    and confirmed once, then packages are processed in the given order.

    Examples:
        yao sync htop                # Repository package
        yao sync yay paru            # AUR packages
        yao sync -f yay              # Rebuild even if the package file exists
        yao sync --no-review yay     # Skip the PKGBUILD review prompt
    """
    config = prepare_runtime(ctx)
    reviewer = RecipeReviewer(config, confirm=_confirm, prompt=_prompt) if review else None

    try:
        with AurClient() as client:
            orchestrator = SyncOrchestrator.from_config(
                config,
                client,
                present=print_plan,
                confirm=_confirm_plan,
                review=reviewer,
            )
            state = orchestrator.run(packages, force=force)
    except (YaoError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=SyncState.FAILED.exit_code) from e

    raise typer.Exit(code=state.exit_code)
