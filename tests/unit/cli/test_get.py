"""Unit tests for the get command."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from yao.cli.main import app
from yao.core.config import Config
from yao.core.errors import PackageNotFoundError

runner = CliRunner()


@pytest.fixture
def runtime(tmp_path: Path):
    config = Config(pkgdest=tmp_path / "pkgdest", snapshot_cache=tmp_path / "snapshots")
    with patch("yao.cli.commands.get.prepare_runtime", return_value=config) as mock:
        yield mock


class TestGetCommand:
    """Tests for yao get."""

    @patch("yao.cli.commands.get.RecipeFetcher")
    def test_fetches_into_cwd(self, mock_fetcher_cls: MagicMock, runtime: MagicMock) -> None:
        """All names are fetched, in order, into the working directory."""
        result = runner.invoke(app, ["get", "yay", "paru"])

        assert result.exit_code == 0
        mock_fetcher_cls.return_value.fetch_all.assert_called_once_with(
            ["yay", "paru"], Path.cwd()
        )

    @patch("yao.cli.commands.get.RecipeFetcher")
    def test_error_exits_one(self, mock_fetcher_cls: MagicMock, runtime: MagicMock) -> None:
        """A failure is reported and exits with status 1."""
        mock_fetcher_cls.return_value.fetch_all.side_effect = PackageNotFoundError("nope", "AUR")

        result = runner.invoke(app, ["get", "nope"])

        assert result.exit_code == 1
        assert "nope not found in AUR" in result.output

    @patch("yao.cli.commands.get.RecipeFetcher")
    def test_os_error_exits_one(self, mock_fetcher_cls: MagicMock, runtime: MagicMock) -> None:
        """A filesystem error is reported and exits with status 1."""
        mock_fetcher_cls.return_value.fetch_all.side_effect = PermissionError(
            13, "Permission denied"
        )

        result = runner.invoke(app, ["get", "yay"])

        assert result.exit_code == 1
        assert "Permission denied" in result.output

    def test_missing_names(self) -> None:
        """At least one name is required."""
        assert runner.invoke(app, ["get"]).exit_code == 2
