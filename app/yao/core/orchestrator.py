"""Sync orchestration: classify, confirm, build and install.

A sync run moves through a small state machine::

    PLANNING -> AWAITING_CONFIRMATION -> EXECUTING -> DONE
                         |                  |   \\-> ABORTED
                         \\-> ABORTED       \\-> FAILED

Packages are processed strictly in request order. Consecutive repository
packages share a single ``pacman -S`` call; each AUR package runs
fetch -> extract -> review -> plan -> build -> install in its own
temporary workspace. The first error stops the whole batch.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from yao.aur.cache import SnapshotCache
from yao.build.builder import Builder
from yao.build.extract import Extractor
from yao.build.planner import ArtifactPlanner
from yao.build.workspace import build_workspace
from yao.core.classifier import Classifier
from yao.core.errors import ExtractionFailedError, FileOperationError, YaoError
from yao.models.package import PackageKind, PlanItem
from yao.operators.pacman import InstallStatus, PacmanOperator
from yao.scanners.pacman import PacmanProbe
from yao.utils.formatting import print_info, print_step

if TYPE_CHECKING:
    from yao.aur.client import AurClient
    from yao.core.config import Config

logger = logging.getLogger(__name__)

ABORT_NOTICE = ":: Aborted by user."

PresentFn = Callable[[Sequence[PlanItem]], None]
ConfirmFn = Callable[[], bool]
ReviewFn = Callable[[str, Path], bool]


class SyncState(Enum):
    """States of a sync run."""

    PLANNING = "planning"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    EXECUTING = "executing"
    DONE = "done"
    ABORTED = "aborted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Check if the run has finished."""
        return self in (SyncState.DONE, SyncState.ABORTED, SyncState.FAILED)

    @property
    def exit_code(self) -> int:
        """Process exit status for a terminal state."""
        return 1 if self is SyncState.FAILED else 0


class SyncOrchestrator:
    """Drives a sync run end to end.

    Collaborators are injected so the run can be exercised without
    pacman, makepkg or network access. Use :meth:`from_config` to wire
    the real implementations.

    Attributes:
        state: Current state of the run.
    """

    def __init__(
        self,
        config: Config,
        *,
        classifier: Classifier,
        probe: PacmanProbe,
        cache: SnapshotCache,
        extractor: Extractor,
        planner: ArtifactPlanner,
        builder: Builder,
        operator: PacmanOperator,
        present: PresentFn,
        confirm: ConfirmFn,
        review: ReviewFn | None = None,
    ) -> None:
        self._config = config
        self._classifier = classifier
        self._probe = probe
        self._cache = cache
        self._extractor = extractor
        self._planner = planner
        self._builder = builder
        self._operator = operator
        self._present = present
        self._confirm = confirm
        self._review = review
        self.state = SyncState.PLANNING

    @classmethod
    def from_config(
        cls,
        config: Config,
        client: AurClient,
        *,
        present: PresentFn,
        confirm: ConfirmFn,
        review: ReviewFn | None = None,
    ) -> SyncOrchestrator:
        """Wire an orchestrator with the real pacman/makepkg/bsdtar tools."""
        probe = PacmanProbe(config.pacman, verbose=config.verbose)
        return cls(
            config,
            classifier=Classifier(probe, client),
            probe=probe,
            cache=SnapshotCache(config.snapshot_cache, client, verbose=config.verbose),
            extractor=Extractor(verbose=config.verbose),
            planner=ArtifactPlanner(verbose=config.verbose),
            builder=Builder(verbose=config.verbose),
            operator=PacmanOperator(config.pacman, config.elevator, verbose=config.verbose),
            present=present,
            confirm=confirm,
            review=review,
        )

    def run(self, names: Sequence[str], force: bool = False) -> SyncState:
        """Run the full sync for the requested names.

        Args:
            names: Package names in request order.
            force: Rebuild AUR packages even if their files exist.

        Returns:
            Terminal state, DONE or ABORTED.

        Raises:
            YaoError: Any failure; the state is FAILED afterwards.
            OSError: A filesystem failure outside a package pipeline; the
                state is FAILED afterwards.
        """
        self.state = SyncState.PLANNING
        try:
            plan = self.plan(names)

            self.state = SyncState.AWAITING_CONFIRMATION
            self._present(plan)
            if not self._confirm():
                print_info(ABORT_NOTICE)
                self.state = SyncState.ABORTED
                return self.state

            self.state = SyncState.EXECUTING
            status = self.execute(plan, force)
        except (YaoError, OSError):
            self.state = SyncState.FAILED
            raise

        if status is InstallStatus.DECLINED:
            print_info(ABORT_NOTICE)
            self.state = SyncState.ABORTED
        else:
            self.state = SyncState.DONE
        return self.state

    def plan(self, names: Sequence[str]) -> tuple[PlanItem, ...]:
        """Classify every name in request order.

        Raises:
            PackageNotFoundError: On the first unknown name.
            LookupFailedError: If an AUR lookup fails.
        """
        items: list[PlanItem] = []
        for name in names:
            kind = self._classifier.classify(name)
            installed = self._probe.is_installed(name)
            items.append(PlanItem(name=name, kind=kind, installed=installed))
        return tuple(items)

    def execute(self, plan: Sequence[PlanItem], force: bool) -> InstallStatus:
        """Install the plan in order, stopping at the first decline.

        Returns:
            INSTALLED when everything was installed, DECLINED when the user
            said no at a pacman prompt or aborted a PKGBUILD review.
        """
        for kind, group in itertools.groupby(plan, key=lambda item: item.kind):
            items = list(group)
            if kind is PackageKind.REPO:
                names = [item.name for item in items]
                print_step(f"[repo] installing {', '.join(names)}")
                if self._operator.install_repo(names) is InstallStatus.DECLINED:
                    return InstallStatus.DECLINED
                continue

            for item in items:
                if self.build_and_install(item.name, force) is InstallStatus.DECLINED:
                    return InstallStatus.DECLINED

        return InstallStatus.INSTALLED

    def build_and_install(self, name: str, force: bool) -> InstallStatus:
        """Fetch, build and install a single AUR package.

        Raises:
            DownloadFailedError: If the snapshot cannot be downloaded.
            ExtractionFailedError: If unpacking fails or the layout is wrong.
            EditorNotFoundError: If the review editor cannot be started.
            EmptyPlanError: If makepkg lists no artifacts.
            BuildFailedError: If makepkg fails.
            NoArtifactsProducedError: If the build leaves no package file.
            InstallFailedError: If pacman -U fails.
            FileOperationError: If a cache, workspace or PKGDEST operation fails.
        """
        pkgdest = self._config.pkgdest
        print_step(f"[aur] building {name}")

        stage = "snapshot fetch"
        try:
            archive = self._cache.fetch(name)

            with build_workspace(name) as workspace:
                stage = "extract"
                self._extractor.extract(archive, workspace)
                build_dir = workspace / name
                if not build_dir.is_dir():
                    msg = f"unexpected snapshot layout for {name}"
                    raise ExtractionFailedError(msg)

                stage = "PKGBUILD review"
                if self._review is not None and not self._review(name, build_dir):
                    logger.info("PKGBUILD review aborted for %s", name)
                    return InstallStatus.DECLINED

                stage = "artifact planning"
                artifacts = self._planner.plan(build_dir, pkgdest, force, name=name)

                stage = "build"
                if self._planner.should_build(artifacts, force):
                    print_step(f"Building {name} (makepkg)...")
                    artifacts = self._builder.build(build_dir, pkgdest, artifacts, force, name=name)
                else:
                    print_step(f"Using existing package file(s) for {name}, skipping rebuild")

                stage = "install"
                print_step(f"Installing {name}")
                return self._operator.install_files(artifacts.paths, target=name)
        except OSError as e:
            raise FileOperationError(name, stage, e) from e
