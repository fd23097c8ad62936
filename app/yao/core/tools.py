"""External tool discovery."""

import logging

from yao.build.builder import BUILD_TOOL
from yao.build.extract import ARCHIVE_TOOL
from yao.core.config import Config
from yao.core.errors import ToolMissingError
from yao.utils.formatting import print_step
from yao.utils.shell import is_elevated, which

logger = logging.getLogger(__name__)


def required_tools(config: Config) -> list[str]:
    """List the binaries a run depends on.

    The elevation command is only needed when not running as root.
    """
    tools = [ARCHIVE_TOOL, BUILD_TOOL, config.pacman]
    if not is_elevated():
        tools.append(config.elevator)
    return tools


def ensure_tools(config: Config) -> dict[str, str]:
    """Resolve every required tool before any package work starts.

    Args:
        config: Resolved configuration.

    Returns:
        Mapping of tool name to its resolved path.

    Raises:
        ToolMissingError: For the first tool that is not on PATH.
    """
    resolved: dict[str, str] = {}
    for tool in required_tools(config):
        path = which(tool)
        if path is None:
            raise ToolMissingError(tool)
        resolved[tool] = path
        logger.debug("Using %s at %s", tool, path)
        if config.verbose:
            print_step(f"using {tool} at {path}")
    return resolved
