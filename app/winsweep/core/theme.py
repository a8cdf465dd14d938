"""Colour theme for winsweep output.

The bundled data/theme.toml supplies every colour; ~/.config/winsweep/theme.toml
may override any subset of them.
"""

import functools
import logging
import re
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from winsweep.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Palette used by the CLI. Every value is a #RGB or #RRGGBB code."""

    model_config = ConfigDict(extra="forbid")

    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Cleanup reporting
    size: str = "#c1ff62"
    protected: str = "#d44ebc"
    dry_run: str = "#0e8ac8"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, value: object) -> str:
        """Reject anything that is not a hex colour code."""
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            msg = f"expected a #RGB or #RRGGBB colour, got {value!r}"
            raise ValueError(msg)
        return value.strip()

    def styles(self) -> dict[str, str]:
        """Map the palette onto the style names used in console markup."""
        return {
            "muted": self.muted,
            "dim": self.muted,
            "header": self.header,
            "bold_header": f"bold {self.header}",
            "border": self.border,
            "success": self.success,
            "warning": self.warning,
            "error": f"bold {self.error}",
            "info": self.info,
            "size": self.size,
            "protected": f"bold {self.protected}",
            "dry_run": self.dry_run,
        }


def bundled_theme_path() -> Path:
    """Get the theme file shipped with the package."""
    return Path(str(resources.files("winsweep.data").joinpath("theme.toml")))


def read_colors(path: Path) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file.

    Missing, unreadable, or malformed files yield an empty mapping;
    non-string values are dropped.
    """
    try:
        with path.open("rb") as f:
            table = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return {}
    return {key: value for key, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the user's overrides onto the bundled colours.

    Falls back to the built-in palette when the result does not validate.
    """
    merged = {**read_colors(bundled_theme_path()), **read_colors(get_user_theme_path())}
    try:
        return ThemeColors(**merged)
    except ValidationError as e:
        logger.warning("Invalid theme colours, using defaults: %s", e)
        return ThemeColors()


@functools.cache
def get_theme() -> Theme:
    """Get the Rich theme, built once per process."""
    return Theme(load_theme().styles())
