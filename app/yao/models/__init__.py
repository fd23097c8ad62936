"""Data models for yao.

This module exports the core data structures used throughout the application.
"""

from yao.models.artifact import ArtifactSet
from yao.models.package import PackageKind, PlanItem

__all__ = [
    "ArtifactSet",
    "PackageKind",
    "PlanItem",
]
