"""Unit tests for theme module.

Tests for colour validation, bundled and user theme loading, and the
styles exposed to Rich.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from rich.theme import Theme
from winsweep.core.theme import (
    ThemeColors,
    bundled_theme_path,
    get_theme,
    load_theme,
    read_colors,
)


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has defaults for the cleanup styles."""
        colors = ThemeColors()

        assert colors.size == "#c1ff62"
        assert colors.protected == "#d44ebc"
        assert colors.dry_run == "#0e8ac8"

    def test_accepts_short_hex(self) -> None:
        """Three-digit hex codes are valid and surrounding space is trimmed."""
        assert ThemeColors(protected=" #f0f ").protected == "#f0f"

    @pytest.mark.parametrize("value", ["c1ff62", "#zzzzzz", "#12345", "green", 123])
    def test_rejects_invalid(self, value: object) -> None:
        """Anything but #RGB or #RRGGBB is rejected."""
        with pytest.raises(ValueError, match="#RGB or #RRGGBB"):
            ThemeColors(size=value)  # type: ignore[arg-type]

    def test_extra_fields_forbidden(self) -> None:
        """Unknown colour names are rejected."""
        with pytest.raises(ValueError):
            ThemeColors(package_manual="#ffffff")  # type: ignore[call-arg]

    def test_styles(self) -> None:
        """Styles cover the names used in console markup."""
        styles = ThemeColors().styles()

        for name in ("success", "warning", "info", "size", "dry_run", "dim", "border"):
            assert name in styles
        assert styles["protected"] == "bold #d44ebc"
        assert styles["bold_header"] == "bold #69B9A1"


class TestReadColors:
    """Tests for read_colors function."""

    def test_reads_colors_table(self, tmp_path: Path) -> None:
        """Loads colours from a valid TOML file, ignoring non-strings."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nsize = "#000000"\nbogus = 3\n')

        assert read_colors(theme_file) == {"size": "#000000"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files give no colours."""
        assert read_colors(tmp_path / "missing.toml") == {}

    def test_invalid_toml(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Malformed TOML is ignored with a warning."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("[colors\n")

        assert read_colors(theme_file) == {}
        assert "Ignoring theme file" in caplog.text

    def test_colors_not_a_table(self, tmp_path: Path) -> None:
        """A non-table colours entry is ignored."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('colors = "red"\n')

        assert read_colors(theme_file) == {}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_bundled_theme_matches_defaults(self, tmp_path: Path) -> None:
        """The shipped theme file and the model defaults agree."""
        assert bundled_theme_path().is_file()

        with patch(
            "winsweep.core.theme.get_user_theme_path",
            return_value=tmp_path / "none.toml",
        ):
            colors = load_theme()

        assert colors == ThemeColors()

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User theme overrides only the colours it names."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nprotected = "#ff0000"\n')

        with patch("winsweep.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.protected == "#ff0000"
        assert colors.size == "#c1ff62"

    def test_invalid_user_colour_falls_back(self, tmp_path: Path) -> None:
        """An invalid user colour falls back to the defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nsize = "green"\n')

        with patch("winsweep.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestGetTheme:
    """Tests for the cached Rich theme."""

    def test_cached(self) -> None:
        """get_theme returns the same instance on every call."""
        first = get_theme()

        assert isinstance(first, Theme)
        assert get_theme() is first
        assert "protected" in first.styles
