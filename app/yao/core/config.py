"""Runtime configuration for yao.

The configuration is resolved once at startup and passed explicitly to
every component. Sources, lowest priority first:

1. Built-in defaults
2. ~/.config/yao/config.toml
3. Environment variables (PKGDEST, YAO_*)
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from yao.core.errors import ConfigError
from yao.core.paths import DEFAULT_PKGDEST, DEFAULT_SNAPSHOT_CACHE, get_config_path

logger = logging.getLogger(__name__)


class RootMode(str, Enum):
    """How yao behaves when it runs as root.

    Only AUTO has an implementation: builds run as the current user and
    installs are elevated when needed. The other modes are reserved names
    accepted from configuration so that existing setups keep parsing.
    """

    AUTO = "auto"
    SANDBOX = "sandbox"
    USER = "user"
    TRUST_ROOT = "trust-root"

    @property
    def is_reserved(self) -> bool:
        """Check if this mode is a placeholder without behavior."""
        return self is not RootMode.AUTO

    @classmethod
    def parse(cls, value: str) -> "RootMode":
        """Parse a mode name, falling back to AUTO for unknown values."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.warning("Unknown root mode %r, using 'auto'", value)
            return cls.AUTO


# Environment variable -> config field
ENV_VARS: dict[str, str] = {
    "PKGDEST": "pkgdest",
    "YAO_SNAPSHOT_CACHE": "snapshot_cache",
    "YAO_PACMAN": "pacman",
    "YAO_SUDO": "elevator",
    "YAO_ROOT_MODE": "root_mode",
    "YAO_BUILD_USER": "build_user",
    "YAO_AUTO_TRUST_ROOT": "auto_trust_root",
    "YAO_EDITOR": "editor",
}


class Config(BaseModel):
    """Resolved yao configuration.

    Attributes:
        pkgdest: Directory where makepkg places built packages.
        snapshot_cache: Directory holding downloaded AUR snapshots.
        pacman: Package manager binary name or path.
        elevator: Privilege elevation binary name or path.
        root_mode: Behavior when running as root (only 'auto' is active).
        build_user: Build user for the reserved 'user' root mode.
        auto_trust_root: Reserved switch for the 'trust-root' root mode.
        editor: Editor for PKGBUILD review (None = VISUAL/EDITOR/prompt).
        verbose: Echo external commands and resolved configuration.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pkgdest: Annotated[
        Path,
        Field(description="makepkg PKGDEST for built packages"),
    ] = DEFAULT_PKGDEST
    snapshot_cache: Annotated[
        Path,
        Field(description="Cache directory for AUR snapshot tarballs"),
    ] = DEFAULT_SNAPSHOT_CACHE
    pacman: Annotated[str, Field(min_length=1)] = "pacman"
    elevator: Annotated[str, Field(min_length=1)] = "sudo"
    root_mode: RootMode = RootMode.AUTO
    build_user: str = "nobody"
    auto_trust_root: bool = False
    editor: str | None = None
    verbose: bool = False

    def summary(self) -> dict[str, str]:
        """Human-readable key/value view used by verbose output."""
        return {
            "PKGDEST": str(self.pkgdest),
            "snapshot_cache": str(self.snapshot_cache),
            "pacman": self.pacman,
            "sudo": self.elevator,
            "root_mode": self.root_mode.value,
            "auto_trust_root": str(self.auto_trust_root).lower(),
            "build_user": self.build_user,
            "editor": self.editor or "-",
            "euid": str(os.geteuid()),
        }


def _parse_bool(value: str) -> bool:
    return value == "1" or value.lower() == "true"


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect config values from environment variables."""
    overrides: dict[str, Any] = {}
    for var, field_name in ENV_VARS.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        if field_name == "auto_trust_root":
            overrides[field_name] = _parse_bool(value)
        elif field_name == "root_mode":
            overrides[field_name] = RootMode.parse(value)
        else:
            overrides[field_name] = value
    return overrides


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read the TOML config file, returning an empty dict when absent.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    if "root_mode" in data and isinstance(data["root_mode"], str):
        data["root_mode"] = RootMode.parse(data["root_mode"])
    return data


def load_config(
    *,
    verbose: bool = False,
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Resolve the configuration from file, environment and CLI flags.

    Args:
        verbose: Value of the --verbose flag.
        path: Config file path. If None, uses ~/.config/yao/config.toml.
        environ: Environment mapping. If None, uses os.environ.

    Returns:
        Validated, immutable Config.

    Raises:
        ConfigError: If the file or the merged values are invalid.
    """
    config_path = path or get_config_path()
    env = os.environ if environ is None else environ

    data = _read_config_file(config_path)
    data.update(_env_overrides(env))
    data["verbose"] = verbose

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if config.root_mode.is_reserved:
        logger.warning(
            "Root mode '%s' is reserved and has no effect; behaving as 'auto'",
            config.root_mode.value,
        )
    return config


def _config_to_dict(config: Config) -> dict[str, object]:
    """Convert Config to a dictionary for TOML serialization.

    The verbose flag and unset optional values are left out.
    """
    result: dict[str, object] = {
        "pkgdest": str(config.pkgdest),
        "snapshot_cache": str(config.snapshot_cache),
        "pacman": config.pacman,
        "elevator": config.elevator,
        "root_mode": config.root_mode.value,
        "build_user": config.build_user,
        "auto_trust_root": config.auto_trust_root,
    }
    if config.editor is not None:
        result["editor"] = config.editor
    return result


def save_config(config: Config, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The Config object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
