"""Snapshot cache for AUR source tarballs.

A snapshot is stored once under ``<cache>/<name>.tar.gz`` and reused
forever; there is no expiry or checksum. Downloads land in a temporary
file inside the cache directory and are published with ``os.replace``
so a partial download never appears under the stable name.
"""

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from yao.aur.client import AurClient
from yao.core.paths import ensure_dir, snapshot_path
from yao.utils.formatting import err_console, print_step

logger = logging.getLogger(__name__)


class SnapshotCache:
    """Maps package names to locally cached snapshot archives.

    Attributes:
        cache_dir: Directory holding the archives.
    """

    def __init__(self, cache_dir: Path, client: AurClient, *, verbose: bool = False) -> None:
        self._cache_dir = cache_dir
        self._client = client
        self._verbose = verbose

    @property
    def cache_dir(self) -> Path:
        """Directory holding the cached archives."""
        return self._cache_dir

    def path_for(self, name: str) -> Path:
        """Deterministic cache path for a package's archive."""
        return snapshot_path(self._cache_dir, name)

    def fetch(self, name: str) -> Path:
        """Return the local archive for ``name``, downloading it on a miss.

        Args:
            name: AUR package name.

        Returns:
            Path to the cached ``.tar.gz`` archive.

        Raises:
            DownloadFailedError: If the download does not succeed.
            RuntimeError: If the cache directory cannot be created.
        """
        out = self.path_for(name)
        if out.exists():
            logger.debug("Snapshot cache hit for %s", name)
            if self._verbose:
                print_step(f"Using cached snapshot {out}")
            return out

        ensure_dir(self._cache_dir, "snapshot cache")

        tmp_path: Path | None = None
        published = False
        try:
            with NamedTemporaryFile(
                mode="wb",
                dir=self._cache_dir,
                prefix=f".{name}.",
                suffix=".part",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                with err_console.status(f"downloading {name}"):
                    self._client.download_snapshot(name, f)
            os.replace(tmp_path, out)
            published = True
        finally:
            if not published and tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()

        logger.info("Cached snapshot for %s at %s", name, out)
        return out
