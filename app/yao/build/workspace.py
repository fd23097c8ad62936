"""Ephemeral build workspaces."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from tempfile import TemporaryDirectory

logger = logging.getLogger(__name__)


@contextmanager
def build_workspace(name: str) -> Iterator[Path]:
    """Create a private temporary directory for one package's build.

    The directory and everything extracted or built inside it is removed
    when the context exits, whether the build succeeded or not.

    Args:
        name: Package name, used as a readable prefix.

    Yields:
        Path to the empty workspace directory.
    """
    with TemporaryDirectory(prefix=f"yao-{name}-") as tmp:
        logger.debug("Created workspace %s for %s", tmp, name)
        yield Path(tmp)
    logger.debug("Removed workspace for %s", name)
