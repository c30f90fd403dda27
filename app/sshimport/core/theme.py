"""Colors used by the sshimport CLI output.

The bundled ``data/theme.toml`` holds the defaults; a ``[colors]`` table in
``~/.config/sshimport/theme.toml`` may override any of them.
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from sshimport.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# Styles rendered in bold on top of their color
_BOLD_STYLES = frozenset({"error", "key"})


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) of the CLI styles."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    key: str = "#c1ff62"
    config_file: str = "#0e8ac8"
    selected: str = "#03b971"
    skipped: str = "#636e72"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def _read_colors(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file.

    Missing or broken files give an empty table; non-string values are dropped.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user's colors over the bundled ones.

    Invalid colors make the whole theme fall back to the defaults.
    """
    with resources.as_file(resources.files("sshimport.data") / "theme.toml") as bundled:
        colors = _read_colors(bundled)
    colors.update(_read_colors(get_user_theme_path()))

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors) -> Theme:
    """Convert theme colors into the named Rich styles used by the CLI."""
    styles = {
        name: f"bold {color}" if name in _BOLD_STYLES else color
        for name, color in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Get the Rich theme, loaded once per process."""
    return get_rich_theme(load_theme())
