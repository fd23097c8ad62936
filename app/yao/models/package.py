"""Package models for classification and planning.

This module defines the data structures describing where a requested
package comes from and how it appears in the installation plan.
"""

from dataclasses import dataclass
from enum import Enum


class PackageKind(Enum):
    """Source that provides a requested package.

    Attributes:
        REPO: Binary package from the pacman sync repositories.
        AUR: Source package from the AUR, built locally with makepkg.
    """

    REPO = "repo"
    AUR = "aur"

    @property
    def label(self) -> str:
        """Display tag used in the plan table."""
        return "repo" if self is PackageKind.REPO else "AUR"


@dataclass(frozen=True, slots=True)
class PlanItem:
    """A single classified package in the installation plan.

    Attributes:
        name: Package name as requested by the user.
        kind: Source the package resolves to.
        installed: Whether pacman reports it as already installed.
    """

    name: str
    kind: PackageKind
    installed: bool = False

    def __post_init__(self) -> None:
        """Validate plan item data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def is_repo(self) -> bool:
        """Check if the package installs from the sync repositories."""
        return self.kind is PackageKind.REPO

    @property
    def is_aur(self) -> bool:
        """Check if the package is built from the AUR."""
        return self.kind is PackageKind.AUR
