"""Unit tests for package plan models."""

import pytest

from yao.models.package import PackageKind, PlanItem


class TestPackageKind:
    """Tests for PackageKind."""

    def test_labels(self) -> None:
        """Labels match the plan table tags."""
        assert PackageKind.REPO.label == "repo"
        assert PackageKind.AUR.label == "AUR"


class TestPlanItem:
    """Tests for PlanItem."""

    def test_defaults(self) -> None:
        """Items are not installed unless stated."""
        item = PlanItem(name="yay", kind=PackageKind.AUR)

        assert item.installed is False
        assert item.is_aur
        assert not item.is_repo

    def test_empty_name_rejected(self) -> None:
        """An empty name is invalid."""
        with pytest.raises(ValueError, match="empty"):
            PlanItem(name="", kind=PackageKind.REPO)

    def test_frozen(self) -> None:
        """Items are immutable."""
        item = PlanItem(name="htop", kind=PackageKind.REPO)

        with pytest.raises(AttributeError):
            item.name = "curl"  # type: ignore[misc]
