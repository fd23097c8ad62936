"""Artifact models for makepkg outputs."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ArtifactSet:
    """Ordered package files a build produces, as listed by makepkg.

    Paths are absolute and normally live in PKGDEST. Order follows the
    ``makepkg --packagelist`` output and is preserved through install.

    Attributes:
        paths: Artifact paths in listing order.
    """

    paths: tuple[Path, ...]

    @classmethod
    def from_listing(cls, output: str) -> "ArtifactSet":
        """Parse makepkg listing output, one path per non-blank line."""
        return cls.of(Path(line.strip()) for line in output.splitlines() if line.strip())

    @classmethod
    def of(cls, paths: Iterable[Path]) -> "ArtifactSet":
        """Build a set from any iterable of paths."""
        return cls(tuple(paths))

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __bool__(self) -> bool:
        return bool(self.paths)

    @property
    def all_exist(self) -> bool:
        """Check if every artifact is already present on disk."""
        return bool(self.paths) and all(p.exists() for p in self.paths)

    def existing(self) -> "ArtifactSet":
        """Subset of artifacts present on disk, order preserved."""
        return ArtifactSet.of(p for p in self.paths if p.exists())

    def missing(self) -> "ArtifactSet":
        """Subset of artifacts not present on disk, order preserved."""
        return ArtifactSet.of(p for p in self.paths if not p.exists())

    def as_args(self) -> list[str]:
        """Paths as command-line arguments."""
        return [str(p) for p in self.paths]
