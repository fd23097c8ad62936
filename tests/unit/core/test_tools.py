"""Unit tests for external tool discovery."""

from unittest.mock import MagicMock, patch

import pytest

from yao.core.config import Config
from yao.core.errors import ToolMissingError
from yao.core.tools import ensure_tools, required_tools


class TestRequiredTools:
    """Tests for required_tools."""

    @patch("yao.core.tools.is_elevated", return_value=False)
    def test_includes_elevator_when_not_root(self, _mock_root: MagicMock) -> None:
        """Non-root runs need the elevation command."""
        config = Config(pacman="pacman", elevator="doas")

        assert required_tools(config) == ["bsdtar", "makepkg", "pacman", "doas"]

    @patch("yao.core.tools.is_elevated", return_value=True)
    def test_root_skips_elevator(self, _mock_root: MagicMock) -> None:
        """Root runs never invoke the elevation command."""
        assert "sudo" not in required_tools(Config())


@patch("yao.core.tools.is_elevated", return_value=False)
class TestEnsureTools:
    """Tests for ensure_tools."""

    def test_all_present(self, _mock_root: MagicMock) -> None:
        """Resolved paths are returned per tool."""
        with patch("yao.core.tools.which", side_effect=lambda t: f"/usr/bin/{t}"):
            resolved = ensure_tools(Config())

        assert resolved["makepkg"] == "/usr/bin/makepkg"
        assert set(resolved) == {"bsdtar", "makepkg", "pacman", "sudo"}

    def test_missing_tool(self, _mock_root: MagicMock) -> None:
        """The first missing tool raises ToolMissingError."""
        with (
            patch("yao.core.tools.which", side_effect=lambda t: None if t == "bsdtar" else t),
            pytest.raises(ToolMissingError) as exc_info,
        ):
            ensure_tools(Config())

        assert exc_info.value.tool == "bsdtar"
        assert "bsdtar" in str(exc_info.value)

    def test_verbose_reports_paths(self, _mock_root: MagicMock) -> None:
        """Verbose mode prints each resolved tool."""
        with (
            patch("yao.core.tools.which", side_effect=lambda t: f"/usr/bin/{t}"),
            patch("yao.core.tools.print_step") as mock_step,
        ):
            ensure_tools(Config(verbose=True))

        mock_step.assert_any_call("using pacman at /usr/bin/pacman")
