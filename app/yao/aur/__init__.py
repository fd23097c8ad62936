"""AUR access: RPC lookups, snapshot downloads and the snapshot cache."""

from yao.aur.cache import SnapshotCache
from yao.aur.client import AurClient
from yao.aur.models import AurInfoResponse, AurPackage

__all__ = ["AurClient", "AurInfoResponse", "AurPackage", "SnapshotCache"]
