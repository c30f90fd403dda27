"""Scanner for the SSH directory of a mounted partition.

Classifies the top-level entries of ``<root>/etc/ssh`` into key pairs
("xyz" & "xyz.pub") and plain configuration files, and reads them so
they can later be written to the freshly installed system.
"""

import logging
from pathlib import Path

from sshimport.core.errors import SshReadError
from sshimport.core.os_release import name_for
from sshimport.core.paths import ssh_dir
from sshimport.ssh.models import PUBLIC_FILE_SUFFIX, SshConfigFile, SshKey
from sshimport.ssh.source import SourceConfig

logger = logging.getLogger(__name__)


class SshDirScanner:
    """Builds a SourceConfig from the SSH directory of a mounted root.

    Entries are processed in lexicographic order of their names, so the
    resulting keys and config files are sorted by name.

    Attributes:
        _copy_config_files: Default export selection for config files.
    """

    def __init__(self, *, copy_config_files: bool = False) -> None:
        """Initialize the scanner.

        Args:
            copy_config_files: Whether config files are selected for export by default.
        """
        self._copy_config_files = copy_config_files

    def scan(self, root: Path, device: str) -> SourceConfig:
        """Scan a mounted partition.

        A missing SSH directory is not an error: the result is simply empty.

        Args:
            root: Path where the original "/" is mounted.
            device: Name of the mounted device.

        Returns:
            SourceConfig with the keys and config files found.

        Raises:
            SshReadError: If the directory or any of its files cannot be read.
        """
        root = Path(root)
        config = SourceConfig(name=name_for(root), device=device)
        directory = ssh_dir(root)

        names = self._list_names(directory)

        # Keys first: pairs of files like "xyz" & "xyz.pub"
        pub_names = [n for n in names if _is_public_key_name(n)]
        remaining = list(names)
        for pub_name in pub_names:
            priv_name = pub_name.removesuffix(PUBLIC_FILE_SUFFIX)
            config.keys.append(self._read_key(directory, priv_name, pub_name))
            if pub_name in remaining:
                remaining.remove(pub_name)
            if priv_name in remaining:
                remaining.remove(priv_name)

        for name in remaining:
            path = directory / name
            if not path.is_file():
                logger.debug("Skipping non-regular entry %s", path)
                continue
            config.config_files.append(self._read_config_file(path))

        logger.info(
            "Found %d key(s) and %d config file(s) in %s (%s)",
            len(config.keys),
            len(config.config_files),
            directory,
            config.name,
        )
        return config

    def _list_names(self, directory: Path) -> list[str]:
        """List the entry names of a directory, sorted.

        Args:
            directory: SSH directory to list.

        Returns:
            Sorted entry names, empty if the directory doesn't exist.

        Raises:
            SshReadError: If the directory exists but cannot be listed.
        """
        if not directory.is_dir():
            logger.debug("No SSH directory at %s", directory)
            return []

        try:
            return sorted(entry.name for entry in directory.iterdir())
        except OSError as e:
            raise SshReadError(f"Cannot list {directory}: {e}") from e

    def _read_key(self, directory: Path, priv_name: str, pub_name: str) -> SshKey:
        """Create and read a key, tolerating a missing private key file."""
        priv_path = directory / priv_name
        key = SshKey(
            base_name=priv_name,
            private_path=priv_path if priv_path.is_file() else None,
            public_path=directory / pub_name,
            export_selected=True,
        )
        key.read_files()
        return key

    def _read_config_file(self, path: Path) -> SshConfigFile:
        """Create and read a config file."""
        file = SshConfigFile(
            file_name=path.name,
            source_path=path,
            export_selected=self._copy_config_files,
        )
        file.read()
        return file


def _is_public_key_name(name: str) -> bool:
    """Check for the public key suffix, ignoring a bare ".pub" file."""
    return name.endswith(PUBLIC_FILE_SUFFIX) and len(name) > len(PUBLIC_FILE_SUFFIX)
