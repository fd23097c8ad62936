"""Artifact planning with ``makepkg --packagelist``.

makepkg can tell, without building, which package files a PKGBUILD will
produce for the configured PKGDEST. That list drives three decisions:
what to delete on a forced rebuild, whether a build is needed at all,
and what to hand to ``pacman -U`` afterwards.
"""

import logging
from pathlib import Path

from yao.core.errors import BuildFailedError, EmptyPlanError
from yao.models.artifact import ArtifactSet
from yao.utils.formatting import print_command
from yao.utils.shell import ProcessSpec, run_command

logger = logging.getLogger(__name__)

BUILD_TOOL = "makepkg"


class ArtifactPlanner:
    """Computes and reconciles the artifact set of a build."""

    def __init__(self, makepkg: str = BUILD_TOOL, *, verbose: bool = False) -> None:
        self._makepkg = makepkg
        self._verbose = verbose

    def command(self, workspace: Path, destination: Path) -> ProcessSpec:
        """Build the listing invocation for a workspace."""
        return ProcessSpec(
            program=self._makepkg,
            args=("--packagelist",),
            env={"PKGDEST": str(destination)},
            cwd=workspace,
        )

    def list_artifacts(self, workspace: Path, destination: Path, name: str) -> ArtifactSet:
        """Ask makepkg which files a build would produce.

        Raises:
            BuildFailedError: If the listing command fails.
        """
        spec = self.command(workspace, destination)
        if self._verbose:
            print_command(spec.display())

        result = run_command(spec.argv, timeout=None, cwd=spec.cwd, env=spec.env)
        if not result.success:
            logger.debug("makepkg --packagelist stderr: %s", result.stderr.strip())
            raise BuildFailedError(name, result.returncode, stage="--packagelist")
        return ArtifactSet.from_listing(result.stdout)

    def plan(
        self,
        workspace: Path,
        destination: Path,
        force: bool,
        name: str | None = None,
    ) -> ArtifactSet:
        """Resolve the artifact set, clearing old artifacts when forced.

        Args:
            workspace: Directory holding the PKGBUILD.
            destination: PKGDEST for built packages.
            force: Delete every planned artifact that already exists, at
                the destination and under the same name in the workspace.
            name: Package name for error messages (defaults to the
                workspace directory name).

        Returns:
            Non-empty ArtifactSet.

        Raises:
            BuildFailedError: If the listing command fails.
            EmptyPlanError: If makepkg lists no artifacts.
        """
        name = name or workspace.name
        artifacts = self.list_artifacts(workspace, destination, name)
        if not artifacts:
            raise EmptyPlanError(name)

        logger.debug("Planned artifacts for %s: %s", name, artifacts.as_args())
        if force:
            self.clear(artifacts, workspace)
        return artifacts

    def clear(self, artifacts: ArtifactSet, workspace: Path) -> None:
        """Delete existing copies of planned artifacts before a rebuild."""
        for target in artifacts:
            for candidate in (target, workspace / target.name):
                if candidate.exists():
                    if self._verbose:
                        print_command(f"rm {candidate}")
                    logger.info("Removing previous artifact %s", candidate)
                    candidate.unlink()

    @staticmethod
    def should_build(artifacts: ArtifactSet, force: bool) -> bool:
        """Check whether a build is needed.

        The build is skipped only when not forced and every planned file
        already exists. The check is by output path, not source content.
        """
        return force or not artifacts.all_exist
