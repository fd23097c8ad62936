"""Get command implementation.

Downloads AUR snapshots and unpacks each PKGBUILD tree into the current
directory, without building anything.
"""

from pathlib import Path
from typing import Annotated

import typer

from yao.aur.cache import SnapshotCache
from yao.aur.client import AurClient
from yao.build.extract import Extractor
from yao.cli.runtime import prepare_runtime
from yao.core.errors import YaoError
from yao.core.recipes import RecipeFetcher
from yao.utils.formatting import print_error


def get_pkgbuilds(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="AUR package names to fetch.", show_default=False),
    ],
) -> None:
    """Save AUR PKGBUILD trees to ./<package>/.

    An existing directory with the same name is replaced.

    Examples:
        yao get yay
        yao get yay paru
    """
    config = prepare_runtime(ctx)

    try:
        with AurClient() as client:
            fetcher = RecipeFetcher(
                client,
                SnapshotCache(config.snapshot_cache, client, verbose=config.verbose),
                Extractor(verbose=config.verbose),
            )
            fetcher.fetch_all(packages, Path.cwd())
    except (YaoError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
