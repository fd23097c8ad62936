"""Pacman install operator.

Runs ``pacman -S`` for repository packages and ``pacman -U`` for built
package files. Pacman's own summary and ``[Y/n]`` prompt are passed
through untouched; yao never answers for the user.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from yao.core.errors import InstallFailedError
from yao.utils.formatting import print_command
from yao.utils.shell import ProcessSpec, elevate, is_elevated, run_streaming

logger = logging.getLogger(__name__)

# pacman exits with 1 when the user answers "n" at its prompt
DECLINED_EXIT_CODE = 1


class InstallStatus(Enum):
    """Outcome of a pacman install invocation.

    Attributes:
        INSTALLED: pacman exited successfully.
        DECLINED: The user answered "no" at pacman's prompt.
    """

    INSTALLED = "installed"
    DECLINED = "declined"


class PacmanOperator:
    """Operator installing packages through pacman.

    When the current process is not root, every invocation is wrapped by
    the elevation command (``sudo pacman ...``).

    Example:
        >>> operator = PacmanOperator(pacman="pacman", elevator="sudo")
        >>> operator.install_repo(["htop"])
        <InstallStatus.INSTALLED: 'installed'>
    """

    def __init__(
        self, pacman: str = "pacman", elevator: str = "sudo", *, verbose: bool = False
    ) -> None:
        """Initialize the operator.

        Args:
            pacman: Package manager binary name or path.
            elevator: Elevation binary used when not running as root.
            verbose: Echo the command line before running it.
        """
        self._pacman = pacman
        self._elevator = elevator
        self._verbose = verbose

    def command(self, args: Sequence[str]) -> ProcessSpec:
        """Build the process spec for a pacman call, elevated if needed."""
        spec = ProcessSpec(program=self._pacman, args=tuple(args))
        if not is_elevated():
            spec = elevate(spec, self._elevator)
        return spec

    def install_repo(self, names: Sequence[str]) -> InstallStatus:
        """Install packages from the sync repositories (``pacman -S``).

        No ``--needed`` is passed, so installed packages are reinstalled
        exactly like plain pacman would.

        Args:
            names: Package names in request order.

        Returns:
            INSTALLED or DECLINED.

        Raises:
            InstallFailedError: If pacman fails with any other status.
        """
        return self._run(["-S", *names], target=", ".join(names))

    def install_files(self, paths: Sequence[Path], target: str | None = None) -> InstallStatus:
        """Install local package files (``pacman -U``).

        Args:
            paths: Package file paths in install order.
            target: Name used in error messages (defaults to the file list).

        Returns:
            INSTALLED or DECLINED.

        Raises:
            InstallFailedError: If pacman fails with any other status.
        """
        args = [str(p) for p in paths]
        return self._run(["-U", *args], target=target or " ".join(args))

    def _run(self, args: list[str], target: str) -> InstallStatus:
        spec = self.command(args)
        if self._verbose:
            print_command(spec.display())

        logger.info("Running pacman %s for %s", args[0], target)
        returncode = run_streaming(spec)

        if returncode == 0:
            return InstallStatus.INSTALLED
        if returncode == DECLINED_EXIT_CODE:
            logger.info("pacman %s declined by user", args[0])
            return InstallStatus.DECLINED
        raise InstallFailedError(target, returncode)
