"""HTTP client for the AUR.

Wraps the RPC info endpoint used to decide whether a name exists in the
AUR, and the cgit snapshot endpoint serving source tarballs.
"""

import logging
from typing import BinaryIO

import httpx
from pydantic import ValidationError

from yao import __version__
from yao.aur.models import AurInfoResponse
from yao.core.errors import DownloadFailedError, LookupFailedError

logger = logging.getLogger(__name__)

AUR_BASE_URL = "https://aur.archlinux.org"
RPC_PATH = "/rpc/"
RPC_VERSION = "5"
USER_AGENT = f"yao/{__version__}"

# Connecting may time out; transfers run as long as they need to.
DEFAULT_TIMEOUT = httpx.Timeout(30.0, read=None)


def snapshot_url_path(name: str) -> str:
    """Relative URL of a package's snapshot tarball."""
    return f"/cgit/aur.git/snapshot/{name}.tar.gz"


class AurClient:
    """Client for AUR lookups and snapshot downloads.

    Example:
        >>> with AurClient() as client:
        ...     if client.exists("yay"):
        ...         with open("yay.tar.gz", "wb") as f:
        ...             client.download_snapshot("yay", f)
    """

    def __init__(
        self,
        base_url: str = AUR_BASE_URL,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: AUR web root.
            transport: Optional httpx transport (tests use MockTransport).
            timeout: httpx timeout configuration.
        """
        self._client = httpx.Client(
            base_url=base_url,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
            timeout=timeout,
            follow_redirects=True,
        )

    def __enter__(self) -> "AurClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    def info(self, name: str) -> AurInfoResponse:
        """Query the RPC info endpoint for a package name.

        Args:
            name: Package name to look up.

        Returns:
            Parsed RPC response.

        Raises:
            LookupFailedError: On transport errors, non-success status
                or a malformed response body.
        """
        params = {"v": RPC_VERSION, "type": "info", "arg[]": name}
        logger.debug("AUR info lookup for %s", name)
        try:
            response = self._client.get(RPC_PATH, params=params)
        except httpx.HTTPError as e:
            raise LookupFailedError(name, str(e)) from e

        if not response.is_success:
            raise LookupFailedError(name, response.status_code)

        try:
            return AurInfoResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise LookupFailedError(name, f"malformed RPC response: {e}") from e

    def exists(self, name: str) -> bool:
        """Check if a package with exactly this name exists in the AUR."""
        return self.info(name).has_exact(name)

    def download_snapshot(self, name: str, sink: BinaryIO) -> int:
        """Stream a package's snapshot tarball into ``sink``.

        Args:
            name: Package name.
            sink: Binary file object receiving the archive bytes.

        Returns:
            Number of bytes written.

        Raises:
            DownloadFailedError: On transport errors or non-success status.
        """
        written = 0
        try:
            with self._client.stream("GET", snapshot_url_path(name)) as response:
                if not response.is_success:
                    raise DownloadFailedError(name, response.status_code)
                for chunk in response.iter_bytes():
                    sink.write(chunk)
                    written += len(chunk)
        except httpx.HTTPError as e:
            raise DownloadFailedError(name, str(e)) from e

        logger.debug("Downloaded %d bytes for %s", written, name)
        return written
