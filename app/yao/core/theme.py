"""Console colours for yao.

The palette ships as ``yao/data/theme.toml``. A ``[colors]`` table in
``~/.config/yao/theme.toml`` may replace any subset of it; a broken user
file is reported and ignored rather than stopping a sync.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError
from rich.theme import Theme

from yao.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

HexColor = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"),
]


class Palette(BaseModel):
    """Named colours, each ``#RGB`` or ``#RRGGBB``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Plan table tags
    source_repo: HexColor = "#0e8ac8"
    source_aur: HexColor = "#c1ff62"
    installed: HexColor = "#faf870"

    def styles(self) -> dict[str, str]:
        """Rich style definitions keyed by the names used in markup."""
        styles = self.model_dump()
        styles["error"] = f"bold {self.error}"
        styles["source_aur"] = f"bold {self.source_aur}"
        styles["bold_header"] = f"bold {self.header}"
        styles["command"] = f"italic {self.muted}"
        return styles


def read_colors(path: Path) -> dict[str, str]:
    """Return the ``[colors]`` table of a theme file, or {} if unusable."""
    try:
        with open(path, "rb") as f:
            table = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return table


def load_palette(user_path: Path | None = None) -> Palette:
    """Merge the bundled palette with the user's overrides.

    Args:
        user_path: Override file. If None, uses ~/.config/yao/theme.toml.

    Returns:
        The merged palette, or the bundled one if the overrides are invalid.
    """
    bundled = read_colors(Path(str(resources.files("yao.data").joinpath("theme.toml"))))
    overrides = read_colors(user_path or get_user_theme_path())
    try:
        return Palette.model_validate({**bundled, **overrides})
    except ValidationError as e:
        logger.warning("Invalid theme overrides, using bundled colours: %s", e)
        return Palette.model_validate(bundled)


@cache
def get_theme() -> Theme:
    """Rich theme shared by both consoles, loaded once per process."""
    return Theme(load_palette().styles())
