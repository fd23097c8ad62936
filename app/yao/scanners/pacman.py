"""Pacman database probes.

Answers the two yes/no questions yao asks the package manager before
planning: is a name available in the sync repositories, and is it
already installed locally. Output of the probes is discarded.
"""

import logging
import shlex

from yao.utils.formatting import print_command
from yao.utils.shell import run_quiet

logger = logging.getLogger(__name__)


class PacmanProbe:
    """Queries pacman for repository availability and installed status.

    In verbose mode each probe command line is echoed.

    Attributes:
        pacman: Package manager binary name or path.
    """

    def __init__(self, pacman: str = "pacman", *, verbose: bool = False) -> None:
        self._pacman = pacman
        self._verbose = verbose

    @property
    def pacman(self) -> str:
        """Package manager binary used for probes."""
        return self._pacman

    def _probe(self, flag: str, name: str) -> bool:
        args = [self._pacman, flag, "--", name]
        if self._verbose:
            print_command(shlex.join(args))
        returncode = run_quiet(args)
        logger.debug("pacman %s %s -> %d", flag, name, returncode)
        return returncode == 0

    def in_repos(self, name: str) -> bool:
        """Check if a package is available in the sync repositories.

        Any non-zero exit of ``pacman -Si`` counts as absent; pacman does
        not distinguish "target not found" from database errors by status.
        """
        return self._probe("-Si", name)

    def is_installed(self, name: str) -> bool:
        """Check if a package is installed (``pacman -Qi``)."""
        return self._probe("-Qi", name)
