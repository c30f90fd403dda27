"""Unit tests for theme module."""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
import sshimport.core.theme as theme_module
from rich.theme import Theme
from sshimport.core.theme import ThemeColors, _read_colors, get_rich_theme, get_theme, load_theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.key == "#c1ff62"
        assert colors.config_file == "#0e8ac8"

    def test_short_hex_accepted(self) -> None:
        """#RGB colors are valid."""
        assert ThemeColors(muted=" #abc ").muted == "#abc"

    @pytest.mark.parametrize("color", ["ffffff", "#ff", "#gggggg", "#1234567"])
    def test_invalid_hex_rejected(self, color: str) -> None:
        """Anything but #RGB or #RRGGBB is rejected."""
        with pytest.raises(ValueError, match="expected #RGB or #RRGGBB"):
            ThemeColors(text=color)

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(unknown_field="#ffffff")  # type: ignore[call-arg]


class TestReadColors:
    """Tests for reading the [colors] table."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads string colors from the [colors] table."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nkey = "#aabbcc"\nbogus = 3\n')

        assert _read_colors(theme_file) == {"text": "#000000", "key": "#aabbcc"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files give no colors."""
        assert _read_colors(tmp_path / "missing.toml") == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML gives no colors."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("[colors\n")

        assert _read_colors(theme_file) == {}

    def test_colors_not_a_table(self, tmp_path: Path) -> None:
        """A non-table colors entry gives no colors."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('colors = "red"\n')

        assert _read_colors(theme_file) == {}


class TestLoadTheme:
    """Tests for load_theme."""

    def test_bundled_theme_is_valid(self, tmp_path: Path) -> None:
        """Without user overrides the bundled colors load."""
        with patch.object(theme_module, "get_user_theme_path", return_value=tmp_path / "none"):
            colors = load_theme()

        assert colors == ThemeColors()

    def test_user_override(self, tmp_path: Path) -> None:
        """User colors override bundled ones."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nkey = "#123456"\n')

        with patch.object(theme_module, "get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.key == "#123456"
        assert colors.text == ThemeColors().text

    def test_invalid_user_theme_falls_back(self, tmp_path: Path) -> None:
        """Invalid user colors fall back to defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nkey = "not-a-color"\n')

        with patch.object(theme_module, "get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestRichTheme:
    """Tests for Rich theme conversion and caching."""

    def test_get_rich_theme_styles(self) -> None:
        """Item styles are present in the Rich theme."""
        theme = get_rich_theme(ThemeColors())

        assert isinstance(theme, Theme)
        for style in ("key", "config_file", "selected", "skipped", "bold_header", "error"):
            assert style in theme.styles
        assert theme.styles["key"].bold
        assert not theme.styles["selected"].bold

    def test_get_theme_is_cached(self) -> None:
        """get_theme returns the same instance on every call."""
        assert get_theme() is get_theme()
