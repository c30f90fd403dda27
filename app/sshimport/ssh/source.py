"""SSH keys and config files discovered on one partition."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from sshimport.core.settings import DEFAULT_BACKUP_SUFFIX
from sshimport.ssh.models import SshConfigFile, SshKey

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SourceConfig:
    """Content of the SSH directory of one previous installation.

    The shape (which keys and files exist) is fixed once scanned. Only
    the ``export_selected`` flags of the items change afterwards.

    Attributes:
        name: Name to help the user identify the installation.
        device: Device name of the scanned partition.
        keys: Keys found in the partition, sorted by name.
        config_files: Configuration files found in the partition, sorted by name.
    """

    name: str
    device: str
    keys: list[SshKey] = field(default_factory=list)
    config_files: list[SshConfigFile] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Whether neither keys nor config files were found."""
        return not self.keys and not self.config_files

    def keys_to_export(self) -> list[SshKey]:
        """Get the keys selected for export."""
        return [key for key in self.keys if key.export_selected]

    def config_files_to_export(self) -> list[SshConfigFile]:
        """Get the config files selected for export."""
        return [file for file in self.config_files if file.export_selected]

    def keys_atime(self) -> datetime | None:
        """Access time of the most recently accessed SSH key.

        Returns:
            Latest key access time, None if there are no keys (or none was read).
        """
        atimes = [key.atime for key in self.keys if key.atime is not None]
        return max(atimes, default=None)

    def write_files(
        self, target_dir: Path, backup_suffix: str | None = DEFAULT_BACKUP_SUFFIX
    ) -> list[Path]:
        """Write the selected keys and config files to a directory.

        Keys are written first, then config files, each in list order.
        Writing stops at the first failure; files already written stay.

        Args:
            target_dir: Target SSH directory.
            backup_suffix: Suffix for backups of overwritten files, None to disable.

        Returns:
            Paths of all written files, in write order.

        Raises:
            SshWriteError: If a file cannot be written.
        """
        written: list[Path] = []
        for key in self.keys_to_export():
            written.extend(key.write(target_dir, backup_suffix))
        for file in self.config_files_to_export():
            written.extend(file.write(target_dir, backup_suffix))

        logger.debug("Exported %d file(s) from %s (%s)", len(written), self.name, self.device)
        return written
