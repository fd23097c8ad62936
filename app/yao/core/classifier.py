"""Package source classification.

Decides for each requested name whether it is installed from the sync
repositories or built from the AUR.
"""

import logging

from yao.aur.client import AurClient
from yao.core.errors import PackageNotFoundError
from yao.models.package import PackageKind
from yao.scanners.pacman import PacmanProbe

logger = logging.getLogger(__name__)


class Classifier:
    """Resolves package names to a PackageKind.

    The sync repositories are always probed first and win when a name
    exists in both places; the AUR is only queried for names pacman does
    not know.
    """

    def __init__(self, probe: PacmanProbe, client: AurClient) -> None:
        self._probe = probe
        self._client = client

    def classify(self, name: str) -> PackageKind:
        """Classify a single package name.

        Args:
            name: Requested package name.

        Returns:
            PackageKind.REPO or PackageKind.AUR.

        Raises:
            PackageNotFoundError: If the name exists in neither source.
            LookupFailedError: If the AUR RPC request fails.
        """
        if self._probe.in_repos(name):
            logger.debug("%s resolved to the sync repositories", name)
            return PackageKind.REPO

        if self._client.exists(name):
            logger.debug("%s resolved to the AUR", name)
            return PackageKind.AUR

        raise PackageNotFoundError(name)
