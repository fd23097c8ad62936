"""Unit tests for the top-level CLI."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from yao import __version__
from yao.cli.main import app
from yao.core.config import Config
from yao.core.errors import ToolMissingError

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits 0."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"yao version {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        """Help lists every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("sync", "get", "config"):
            assert command in result.output


class TestRuntime:
    """Tests for shared startup checks."""

    @patch("yao.cli.runtime.ensure_tools", side_effect=ToolMissingError("bsdtar"))
    @patch("yao.cli.runtime.load_config", return_value=Config())
    def test_missing_tool_exits_one(self, _mock_load: MagicMock, _mock_tools: MagicMock) -> None:
        """A missing tool stops the run before any package work."""
        with patch("yao.cli.commands.sync.SyncOrchestrator") as mock_orch:
            result = runner.invoke(app, ["sync", "htop"])

        assert result.exit_code == 1
        assert "bsdtar" in result.output
        mock_orch.from_config.assert_not_called()

    @patch("yao.cli.runtime.ensure_tools", return_value={})
    def test_creates_directories(self, _mock_tools: MagicMock, tmp_path: Path) -> None:
        """PKGDEST and the snapshot cache are created at startup."""
        config = Config(pkgdest=tmp_path / "pkg", snapshot_cache=tmp_path / "snap")
        with (
            patch("yao.cli.runtime.load_config", return_value=config),
            patch("yao.cli.commands.get.RecipeFetcher"),
        ):
            result = runner.invoke(app, ["get", "yay"])

        assert result.exit_code == 0
        assert (tmp_path / "pkg").is_dir()
        assert (tmp_path / "snap").is_dir()

    @patch("yao.cli.runtime.ensure_tools", return_value={})
    def test_verbose_flag_reaches_config(self, _mock_tools: MagicMock, tmp_path: Path) -> None:
        """-v is forwarded to load_config."""
        config = Config(pkgdest=tmp_path / "pkg", snapshot_cache=tmp_path / "snap", verbose=True)

        with (
            patch("yao.cli.runtime.load_config", return_value=config) as mock_load,
            patch("yao.cli.commands.get.RecipeFetcher"),
        ):
            result = runner.invoke(app, ["-v", "get", "yay"])

        assert result.exit_code == 0
        mock_load.assert_called_once_with(verbose=True)
        assert "PKGDEST" in result.output
