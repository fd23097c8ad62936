"""Pydantic models for the AUR RPC interface."""

from pydantic import BaseModel, ConfigDict, Field


class AurPackage(BaseModel):
    """A single package record from an AUR RPC response.

    Only the fields yao reads are declared; the rest are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(alias="Name")
    version: str | None = Field(default=None, alias="Version")
    package_base: str | None = Field(default=None, alias="PackageBase")


class AurInfoResponse(BaseModel):
    """Response envelope of an RPC ``type=info`` query."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str
    version: int | None = None
    resultcount: int
    results: list[AurPackage] | None = None

    def has_exact(self, name: str) -> bool:
        """Check if the response contains a package named exactly ``name``."""
        return self.resultcount > 0 and any(pkg.name == name for pkg in self.results or [])
