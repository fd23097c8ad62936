"""Unit tests for the makepkg builder."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from yao.build.builder import Builder
from yao.core.errors import BuildFailedError, NoArtifactsProducedError
from yao.models.artifact import ArtifactSet


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    path = tmp_path / "work" / "yay"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def pkgdest(tmp_path: Path) -> Path:
    path = tmp_path / "pkgdest"
    path.mkdir()
    return path


class TestCommand:
    """Tests for the makepkg invocation."""

    def test_default_flags(self, workspace: Path, pkgdest: Path) -> None:
        """A normal build cleans, syncs deps and logs."""
        spec = Builder().command(workspace, pkgdest, force=False)

        assert spec.argv == [
            "makepkg",
            "--clean",
            "--cleanbuild",
            "--syncdeps",
            "--needed",
            "--log",
            "--config",
            "/etc/makepkg.conf",
        ]
        assert spec.env == {"PKGDEST": str(pkgdest)}
        assert spec.cwd == workspace

    def test_force_flags(self, workspace: Path, pkgdest: Path) -> None:
        """A forced build appends -f -C."""
        spec = Builder().command(workspace, pkgdest, force=True)

        assert spec.args[-2:] == ("-f", "-C")


class TestBuild:
    """Tests for Builder.build."""

    def test_success_returns_artifacts(self, workspace: Path, pkgdest: Path) -> None:
        """Artifacts produced at the destination are returned in order."""
        targets = [pkgdest / "yay-12-1.pkg.tar.zst", pkgdest / "yay-debug-12-1.pkg.tar.zst"]

        def fake_makepkg(spec) -> int:
            for t in targets:
                t.write_bytes(b"new")
            return 0

        with patch("yao.build.builder.run_streaming", side_effect=fake_makepkg):
            result = Builder().build(workspace, pkgdest, ArtifactSet.of(targets), force=False)

        assert result.paths == tuple(targets)

    def test_non_zero_exit(self, workspace: Path, pkgdest: Path) -> None:
        """A failing makepkg raises BuildFailedError with the status."""
        with (
            patch("yao.build.builder.run_streaming", return_value=4),
            pytest.raises(BuildFailedError) as exc_info,
        ):
            Builder().build(workspace, pkgdest, ArtifactSet.of([pkgdest / "x.pkg"]), force=False)

        assert exc_info.value.returncode == 4
        assert exc_info.value.name == "yay"

    def test_relocates_stray_artifacts(self, workspace: Path, pkgdest: Path) -> None:
        """Files left in the workspace are moved to the destination."""
        target = pkgdest / "yay-12-1.pkg.tar.zst"

        def fake_makepkg(spec) -> int:
            (workspace / target.name).write_bytes(b"built-here")
            return 0

        with patch("yao.build.builder.run_streaming", side_effect=fake_makepkg):
            result = Builder().build(workspace, pkgdest, ArtifactSet.of([target]), force=False)

        assert result.paths == (target,)
        assert target.read_bytes() == b"built-here"
        assert not (workspace / target.name).exists()

    def test_drops_missing_artifacts(self, workspace: Path, pkgdest: Path) -> None:
        """Planned files that never appear are dropped with a warning."""
        present = pkgdest / "yay-12-1.pkg.tar.zst"
        absent = pkgdest / "yay-debug-12-1.pkg.tar.zst"

        def fake_makepkg(spec) -> int:
            present.write_bytes(b"")
            return 0

        with (
            patch("yao.build.builder.run_streaming", side_effect=fake_makepkg),
            patch("yao.build.builder.print_warning") as mock_warn,
        ):
            result = Builder().build(
                workspace, pkgdest, ArtifactSet.of([present, absent]), force=False
            )

        assert result.paths == (present,)
        mock_warn.assert_called_once()
        assert absent.name in mock_warn.call_args.args[0]

    def test_nothing_produced(self, workspace: Path, pkgdest: Path) -> None:
        """A build that leaves no planned file is fatal."""
        with (
            patch("yao.build.builder.run_streaming", return_value=0),
            patch("yao.build.builder.print_warning"),
            pytest.raises(NoArtifactsProducedError, match="yay"),
        ):
            Builder().build(workspace, pkgdest, ArtifactSet.of([pkgdest / "x.pkg"]), force=False)

    @patch("yao.build.builder.print_command")
    @patch("yao.build.builder.run_streaming", return_value=0)
    def test_verbose_echo(
        self, _mock_run: MagicMock, mock_echo: MagicMock, workspace: Path, pkgdest: Path
    ) -> None:
        """Verbose mode echoes the makepkg command."""
        target = pkgdest / "x.pkg"
        target.write_bytes(b"")

        Builder(verbose=True).build(workspace, pkgdest, ArtifactSet.of([target]), force=True)

        assert "makepkg --clean" in mock_echo.call_args.args[0]
