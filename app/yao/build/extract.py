"""Snapshot extraction with bsdtar."""

import logging
from pathlib import Path

from yao.core.errors import ExtractionFailedError
from yao.utils.formatting import print_command
from yao.utils.shell import ProcessSpec, run_streaming

logger = logging.getLogger(__name__)

ARCHIVE_TOOL = "bsdtar"


class Extractor:
    """Unpacks snapshot tarballs into a destination directory."""

    def __init__(self, tool: str = ARCHIVE_TOOL, *, verbose: bool = False) -> None:
        self._tool = tool
        self._verbose = verbose

    def command(self, archive: Path, destination: Path) -> ProcessSpec:
        """Build the ``bsdtar -xzf <archive> -C <dest>`` invocation."""
        return ProcessSpec(
            program=self._tool,
            args=("-xzf", str(archive), "-C", str(destination)),
        )

    def extract(self, archive: Path, destination: Path) -> None:
        """Extract ``archive`` into ``destination``.

        Nothing is cleaned up on failure; callers extract into a
        workspace that is discarded as a whole.

        Raises:
            ExtractionFailedError: If the archive tool exits non-zero.
        """
        spec = self.command(archive, destination)
        if self._verbose:
            print_command(spec.display())

        returncode = run_streaming(spec)
        if returncode != 0:
            msg = f"{self._tool} failed to extract {archive} (status {returncode})"
            raise ExtractionFailedError(msg)
        logger.debug("Extracted %s into %s", archive, destination)
