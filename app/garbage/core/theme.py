"""Colour theme for the garbage CLI.

The bundled data/theme.toml defines every colour. A user file at
~/.config/garbage/theme.toml may override any subset of them::

    [colors]
    path = "#ffaa00"
    date = "#888"

Invalid user files are reported and ignored.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from garbage.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# Rich style name -> (colour field, extra style attributes)
STYLE_MAP: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "trash.path": ("path", ""),
    "trash.date": ("date", ""),
    "trash.index": ("index", "bold"),
}


class ThemeColors(BaseModel):
    """Colours used by the CLI, as #RGB or #RRGGBB hex strings."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    path: str = "#c1ff62"
    date: str = "#0e8ac8"
    index: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"expected a #RGB or #RRGGBB colour, got {value!r}"
            raise ValueError(msg)
        return value.strip()


def get_bundled_theme_path() -> Path:
    """Location of the theme shipped inside the package."""
    return Path(str(resources.files("garbage.data").joinpath("theme.toml")))


def read_theme_file(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file.

    A missing file is not an error. Unreadable or malformed files are
    logged and treated as empty.

    Args:
        path: Theme file to read.

    Returns:
        Colour names mapped to their string values.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge the bundled theme with the user's overrides.

    Args:
        user_path: User theme file; defaults to ~/.config/garbage/theme.toml.

    Returns:
        Validated colours. Falls back to the built-in defaults when the
        merged result is invalid.
    """
    colors = read_theme_file(get_bundled_theme_path())
    if not colors:
        logger.error("Bundled theme is missing or empty, using built-in colours")

    user_file = user_path or get_user_theme_path()
    overrides = read_theme_file(user_file)
    if overrides:
        logger.debug("Applying %d colour override(s) from %s", len(overrides), user_file)

    try:
        return ThemeColors(**{**colors, **overrides})
    except ValidationError as e:
        logger.warning("Invalid theme %s: %s", user_file, e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colours.

    Args:
        colors: Colours to use; loaded from disk when None.

    Returns:
        Rich Theme defining every style in STYLE_MAP.
    """
    colors = colors or load_theme()
    styles = {}
    for name, (field, attributes) in STYLE_MAP.items():
        color = getattr(colors, field)
        styles[name] = f"{attributes} {color}".strip()
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme shared by all consoles, loaded once per process."""
    return get_rich_theme()
