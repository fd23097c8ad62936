"""XDG-compliant path management for yao.

User configuration and theme overrides follow the XDG Base Directory
Specification. Build artifacts and snapshots default to system-wide
cache locations shared with makepkg.

XDG defaults:
- Config: ~/.config/yao/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "yao"

# Where makepkg places built packages unless PKGDEST says otherwise
DEFAULT_PKGDEST = Path("/var/cache/makepkg")

# Cache for downloaded AUR snapshot tarballs
DEFAULT_SNAPSHOT_CACHE = Path("/var/cache/yao/snapshots")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/yao/ (or XDG_CONFIG_HOME/yao/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/yao/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/yao/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def snapshot_path(cache_dir: Path, name: str) -> Path:
    """Deterministic cache location of a package's snapshot tarball."""
    return cache_dir / f"{name}.tar.gz"


def ensure_dir(path: Path, name: str) -> Path:
    """Create a directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created (or existing) directory path.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
