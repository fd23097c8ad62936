"""Fetch-only workflow: download PKGBUILD trees into a directory."""

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path

from yao.aur.cache import SnapshotCache
from yao.aur.client import AurClient
from yao.build.extract import Extractor
from yao.build.workspace import build_workspace
from yao.core.errors import ExtractionFailedError, FileOperationError, PackageNotFoundError
from yao.utils.formatting import print_step

logger = logging.getLogger(__name__)


class RecipeFetcher:
    """Places the unpacked snapshot of AUR packages under a target directory."""

    def __init__(self, client: AurClient, cache: SnapshotCache, extractor: Extractor) -> None:
        self._client = client
        self._cache = cache
        self._extractor = extractor

    def fetch(self, name: str, target_root: Path) -> Path:
        """Unpack ``name``'s snapshot into ``target_root/name``.

        An existing directory of that name is replaced.

        Raises:
            PackageNotFoundError: If the name is not in the AUR.
            DownloadFailedError: If the snapshot cannot be downloaded.
            ExtractionFailedError: If the archive cannot be unpacked or has
                an unexpected layout.
            FileOperationError: If the destination cannot be replaced.
        """
        if not self._client.exists(name):
            raise PackageNotFoundError(name, "AUR")

        archive = self._cache.fetch(name)
        destination = target_root / name

        with build_workspace(name) as workspace:
            self._extractor.extract(archive, workspace)
            source = workspace / name
            if not source.is_dir():
                msg = f"unexpected snapshot layout for {name}"
                raise ExtractionFailedError(msg)

            try:
                if destination.exists():
                    logger.info("Replacing existing directory %s", destination)
                    shutil.rmtree(destination)
                shutil.move(source, destination)
            except OSError as e:
                raise FileOperationError(name, "PKGBUILD placement", e) from e

        print_step(f"PKGBUILD for {name} saved to {destination}")
        return destination

    def fetch_all(self, names: Sequence[str], target_root: Path) -> list[Path]:
        """Fetch several packages in order, stopping at the first error."""
        return [self.fetch(name, target_root) for name in names]
