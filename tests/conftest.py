"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import httpx
import pytest

from yao.aur.client import AurClient
from yao.core.config import Config


class FakeAur:
    """In-memory AUR answering RPC info and snapshot requests.

    Attributes:
        packages: Package name -> snapshot bytes served by the fake.
        requests: Every request received, in order.
        rpc_status: Status returned by the RPC endpoint.
        snapshot_status: Status returned for known snapshots.
    """

    def __init__(self) -> None:
        self.packages: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []
        self.rpc_status = 200
        self.snapshot_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/rpc/":
            if self.rpc_status != 200:
                return httpx.Response(self.rpc_status)
            name = request.url.params.get("arg[]", "")
            results = [{"Name": name, "Version": "1.0-1"}] if name in self.packages else []
            return httpx.Response(
                200,
                json={
                    "version": 5,
                    "type": "multiinfo",
                    "resultcount": len(results),
                    "results": results,
                },
            )

        prefix = "/cgit/aur.git/snapshot/"
        if path.startswith(prefix):
            name = path[len(prefix) :].removesuffix(".tar.gz")
            if name not in self.packages:
                return httpx.Response(404)
            if self.snapshot_status != 200:
                return httpx.Response(self.snapshot_status)
            return httpx.Response(200, content=self.packages[name])

        return httpx.Response(404)

    @property
    def rpc_requests(self) -> list[httpx.Request]:
        """Requests that hit the RPC endpoint."""
        return [r for r in self.requests if r.url.path == "/rpc/"]

    @property
    def snapshot_requests(self) -> list[httpx.Request]:
        """Requests that hit the snapshot endpoint."""
        return [r for r in self.requests if r.url.path.startswith("/cgit/")]

    def client(self) -> AurClient:
        """Create an AurClient routed to this fake."""
        return AurClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_aur() -> FakeAur:
    """Empty fake AUR; tests add packages as needed."""
    return FakeAur()


@pytest.fixture
def aur_client(fake_aur: FakeAur) -> AurClient:
    """AurClient talking to the fake AUR."""
    client = fake_aur.client()
    yield client
    client.close()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config pointing all directories into tmp_path."""
    pkgdest = tmp_path / "pkgdest"
    snapshots = tmp_path / "snapshots"
    pkgdest.mkdir()
    snapshots.mkdir()
    return Config(pkgdest=pkgdest, snapshot_cache=snapshots)


@pytest.fixture
def sample_snapshot() -> bytes:
    """Bytes standing in for a snapshot tarball."""
    return b"\x1f\x8b\x08\x00fake-tarball-bytes"
