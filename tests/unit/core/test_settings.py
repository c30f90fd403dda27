"""Unit tests for ImportSettings and related functions."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from sshimport.core.paths import get_settings_path
from sshimport.core.settings import (
    DEFAULT_BACKUP_SUFFIX,
    ImportSettings,
    SettingsError,
    SettingsNotFoundError,
    SettingsParseError,
    load_settings,
    load_settings_or_default,
    save_settings,
)


class TestImportSettings:
    """Tests for ImportSettings Pydantic model."""

    def test_default_values(self) -> None:
        """ImportSettings has conservative defaults."""
        settings = ImportSettings()

        assert settings.copy_config_files is False
        assert settings.backup_existing is True
        assert settings.backup_suffix == DEFAULT_BACKUP_SUFFIX

    def test_effective_backup_suffix(self) -> None:
        """Disabling backups yields no suffix."""
        assert ImportSettings().effective_backup_suffix == DEFAULT_BACKUP_SUFFIX
        assert ImportSettings(backup_existing=False).effective_backup_suffix is None

    def test_empty_suffix_rejected(self) -> None:
        """The backup suffix cannot be empty."""
        with pytest.raises(ValidationError):
            ImportSettings(backup_suffix="")

    def test_extra_fields_forbidden(self) -> None:
        """Unknown settings are rejected."""
        with pytest.raises(ValidationError):
            ImportSettings(unknown=True)  # type: ignore[call-arg]


class TestLoadSettings:
    """Tests for load_settings and load_settings_or_default."""

    def test_load_valid_file(self, tmp_path: Path) -> None:
        """Settings are read from TOML."""
        path = tmp_path / "settings.toml"
        path.write_text('copy_config_files = true\nbackup_suffix = ".old"\n')

        settings = load_settings(path)

        assert settings.copy_config_files is True
        assert settings.backup_suffix == ".old"
        assert settings.backup_existing is True

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises SettingsNotFoundError."""
        with pytest.raises(SettingsNotFoundError):
            load_settings(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises SettingsParseError."""
        path = tmp_path / "settings.toml"
        path.write_text("copy_config_files = \n")

        with pytest.raises(SettingsParseError):
            load_settings(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise SettingsError."""
        path = tmp_path / "settings.toml"
        path.write_text('copy_config_files = "maybe"\n')

        with pytest.raises(SettingsError, match="Invalid settings content"):
            load_settings(path)

    def test_default_path(self, isolated_config_home: Path) -> None:
        """Without a path, the XDG settings path is used."""
        path = get_settings_path()
        path.parent.mkdir(parents=True)
        path.write_text("backup_existing = false\n")

        assert load_settings().backup_existing is False

    def test_or_default_without_file(self, tmp_path: Path) -> None:
        """Defaults are returned when there is no settings file."""
        assert load_settings_or_default(tmp_path / "missing.toml") == ImportSettings()

    def test_or_default_propagates_parse_errors(self, tmp_path: Path) -> None:
        """Broken files are still reported."""
        path = tmp_path / "settings.toml"
        path.write_text("[[[")

        with pytest.raises(SettingsParseError):
            load_settings_or_default(path)


class TestSaveSettings:
    """Tests for save_settings."""

    def test_save_and_reload(self, tmp_path: Path) -> None:
        """Saved settings can be loaded again."""
        path = tmp_path / "nested" / "settings.toml"
        settings = ImportSettings(copy_config_files=True, backup_suffix=".bak")

        saved = save_settings(settings, path)

        assert saved == path
        assert load_settings(path) == settings
        with open(path, "rb") as f:
            assert tomllib.load(f)["backup_suffix"] == ".bak"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Atomic write leaves only the settings file behind."""
        save_settings(ImportSettings(), tmp_path / "settings.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["settings.toml"]

    def test_write_failure(self, tmp_path: Path) -> None:
        """Write failures raise SettingsError."""
        with (
            patch("sshimport.core.settings.os.replace", side_effect=OSError("disk full")),
            pytest.raises(SettingsError, match="disk full"),
        ):
            save_settings(ImportSettings(), tmp_path / "settings.toml")

        assert list(tmp_path.iterdir()) == []
