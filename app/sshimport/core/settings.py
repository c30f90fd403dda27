"""Import settings.

This module provides the settings model and I/O functions controlling
the default selection of discovered items and how existing files in
the target system are preserved.

Settings are stored in ~/.config/sshimport/settings.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sshimport.core.paths import get_settings_path

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_SUFFIX = ".sshimport.orig"


class ImportSettings(BaseModel):
    """Settings for importing SSH keys and config files.

    Attributes:
        copy_config_files: Whether discovered config files are selected for export by default.
        backup_existing: Back up files in the target SSH directory before overwriting them.
        backup_suffix: Suffix appended to the name of backup copies.
    """

    model_config = ConfigDict(extra="forbid")

    copy_config_files: Annotated[
        bool,
        Field(description="Select config files (sshd_config, moduli...) for export by default"),
    ] = False
    backup_existing: Annotated[
        bool,
        Field(description="Back up overwritten files in the target system"),
    ] = True
    backup_suffix: Annotated[
        str,
        Field(min_length=1, description="Suffix for backup copies"),
    ] = DEFAULT_BACKUP_SUFFIX

    @property
    def effective_backup_suffix(self) -> str | None:
        """Get the backup suffix to pass to writers.

        Returns:
            The configured suffix, or None when backups are disabled.
        """
        return self.backup_suffix if self.backup_existing else None


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> ImportSettings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default settings path.

    Returns:
        Validated ImportSettings object.

    Raises:
        SettingsNotFoundError: If the settings file doesn't exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return ImportSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def load_settings_or_default(path: Path | None = None) -> ImportSettings:
    """Load settings, falling back to defaults if no settings file exists.

    Args:
        path: Path to the settings file. If None, uses the default settings path.

    Returns:
        Loaded settings, or default ImportSettings if the file is missing.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    try:
        return load_settings(path)
    except SettingsNotFoundError:
        logger.debug("No settings file, using defaults")
        return ImportSettings()


def save_settings(settings: ImportSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The ImportSettings object to save.
        path: Path to save the settings. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
