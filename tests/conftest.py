"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real ~/.config/sshimport."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def make_root(tmp_path: Path) -> Callable[..., Path]:
    """Factory building a fake mounted "/" of a previous installation.

    Args (of the returned callable):
        name: Directory name below tmp_path.
        ssh_files: File name to content for etc/ssh. None means no SSH directory.
        os_release: Content of etc/os-release. None means no such file.
    """

    def _make(
        name: str = "root",
        ssh_files: dict[str, str] | None = None,
        os_release: str | None = None,
    ) -> Path:
        root = tmp_path / name
        etc = root / "etc"
        etc.mkdir(parents=True)
        if os_release is not None:
            (etc / "os-release").write_text(os_release)
        if ssh_files is not None:
            ssh = etc / "ssh"
            ssh.mkdir()
            for file_name, content in ssh_files.items():
                (ssh / file_name).write_text(content)
        return root

    return _make

