"""Path management for sshimport.

Provides the conventional locations of SSH material and release
metadata relative to a mounted filesystem root, plus XDG-compliant
paths for the tool's own configuration.

XDG defaults:
- Config: ~/.config/sshimport/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "sshimport"


def ssh_dir(root: Path) -> Path:
    """Get the SSH directory below a filesystem root.

    Args:
        root: Path where a "/" is mounted (source partition or target system).

    Returns:
        Path to <root>/etc/ssh.
    """
    return Path(root) / "etc" / "ssh"


def os_release_file(root: Path) -> Path:
    """Get the os-release file below a filesystem root.

    Args:
        root: Path where a "/" is mounted.

    Returns:
        Path to <root>/etc/os-release.
    """
    return Path(root) / "etc" / "os-release"


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
        Path to ~/.config/sshimport/ (or XDG_CONFIG_HOME/sshimport/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/sshimport/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/sshimport/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
