"""Package builds with makepkg."""

import logging
import shutil
from pathlib import Path

from yao.core.errors import BuildFailedError, NoArtifactsProducedError
from yao.models.artifact import ArtifactSet
from yao.utils.formatting import print_command, print_warning
from yao.utils.shell import ProcessSpec, run_streaming

logger = logging.getLogger(__name__)

BUILD_TOOL = "makepkg"
MAKEPKG_CONF = Path("/etc/makepkg.conf")

# Clean build with dependency sync and log files
BUILD_FLAGS: tuple[str, ...] = ("--clean", "--cleanbuild", "--syncdeps", "--needed", "--log")

# Overwrite existing packages and clean srcdir first
FORCE_FLAGS: tuple[str, ...] = ("-f", "-C")


class Builder:
    """Builds packages and reconciles their artifacts.

    Some PKGBUILDs ignore PKGDEST and leave the package in the build
    directory; after a successful build such files are moved into place.
    """

    def __init__(
        self,
        makepkg: str = BUILD_TOOL,
        makepkg_conf: Path = MAKEPKG_CONF,
        *,
        verbose: bool = False,
    ) -> None:
        self._makepkg = makepkg
        self._makepkg_conf = makepkg_conf
        self._verbose = verbose

    def command(self, workspace: Path, destination: Path, force: bool) -> ProcessSpec:
        """Build the makepkg invocation for a workspace."""
        args = [*BUILD_FLAGS, "--config", str(self._makepkg_conf)]
        if force:
            args.extend(FORCE_FLAGS)
        return ProcessSpec(
            program=self._makepkg,
            args=tuple(args),
            env={"PKGDEST": str(destination)},
            cwd=workspace,
        )

    def build(
        self,
        workspace: Path,
        destination: Path,
        artifacts: ArtifactSet,
        force: bool,
        name: str | None = None,
    ) -> ArtifactSet:
        """Run makepkg and return the artifacts that actually exist.

        Args:
            workspace: Directory holding the PKGBUILD.
            destination: PKGDEST for built packages.
            artifacts: Planned artifact set.
            force: Pass makepkg's force and clean flags.
            name: Package name for messages (defaults to the workspace name).

        Returns:
            The planned artifacts present after the build, in plan order.

        Raises:
            BuildFailedError: If makepkg exits non-zero.
            NoArtifactsProducedError: If none of the planned files exist.
        """
        name = name or workspace.name
        spec = self.command(workspace, destination, force)
        if self._verbose:
            print_command(spec.display())

        returncode = run_streaming(spec)
        if returncode != 0:
            raise BuildFailedError(name, returncode)

        return self.reconcile(workspace, artifacts, name)

    def reconcile(self, workspace: Path, artifacts: ArtifactSet, name: str) -> ArtifactSet:
        """Move stray artifacts into place and drop the ones still missing.

        Raises:
            NoArtifactsProducedError: If no planned artifact exists afterwards.
        """
        for target in artifacts.missing():
            local = workspace / target.name
            if local.exists():
                logger.info("Moving %s to %s", local, target)
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(local, target)

        for lost in artifacts.missing():
            print_warning(f"{name}: expected package file {lost} was not produced")

        produced = artifacts.existing()
        if not produced:
            raise NoArtifactsProducedError(name)
        return produced
