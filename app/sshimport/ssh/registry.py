"""Registry of the SSH configurations found during one installation run.

The registry is created by the caller and passed along the installer
workflow. Partitions are imported one by one; a single export at the
end writes the selected items of every imported partition.

Example:
    >>> registry = SshConfigRegistry()
    >>> registry.import_dir(Path("/mnt/sda2"), "/dev/sda2")
    >>> registry.export(Path("/mnt/target"))
"""

import logging
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from sshimport.core.errors import SshWriteError
from sshimport.core.paths import ssh_dir
from sshimport.core.settings import DEFAULT_BACKUP_SUFFIX
from sshimport.ssh.models import backup_file
from sshimport.ssh.scanner import SshDirScanner
from sshimport.ssh.source import SourceConfig

logger = logging.getLogger(__name__)


class SshConfigRegistry:
    """Ordered, append-only collection of scanned SourceConfigs.

    Not thread-safe: concurrent imports must be serialized by the caller.
    """

    def __init__(self, scanner: SshDirScanner | None = None) -> None:
        """Initialize an empty registry.

        Args:
            scanner: Scanner used by ``import_dir``. Defaults to an SshDirScanner
                with default settings.
        """
        self._scanner = scanner or SshDirScanner()
        self._configs: list[SourceConfig] = []

    @property
    def configs(self) -> tuple[SourceConfig, ...]:
        """All imported configurations, in import order."""
        return tuple(self._configs)

    def __iter__(self) -> Iterator[SourceConfig]:
        return iter(self.configs)

    def __len__(self) -> int:
        return len(self._configs)

    def import_dir(self, root: Path, device: str) -> SourceConfig | None:
        """Import the SSH keys and config files of a mounted partition.

        Partitions without any key or config file are silently discarded.

        Args:
            root: Path where the original "/" is mounted.
            device: Name of the mounted device.

        Returns:
            The registered SourceConfig, or None if nothing was found.

        Raises:
            SshReadError: If the partition's SSH data cannot be read.
        """
        config = self._scanner.scan(root, device)
        if config.is_empty:
            logger.debug("Nothing to import from %s", device)
            return None

        self._configs.append(config)
        return config

    def export(
        self, root: Path, backup_suffix: str | None = DEFAULT_BACKUP_SUFFIX
    ) -> list[Path]:
        """Write the selected keys and config files to the SSH directory of a root.

        Configurations are written in import order, so a later configuration
        overwrites files of an earlier one. Existing files of the target are
        backed up once before anything is written, so their backups always
        hold the target's original content. The export is not
        transactional: on failure, files written so far are kept.

        Args:
            root: Path to use as "/" to locate the target SSH directory.
            backup_suffix: Suffix for backups of overwritten files, None to disable.

        Returns:
            Paths of all written files, in write order.

        Raises:
            SshWriteError: If a file cannot be written.
        """
        target_dir = ssh_dir(root)
        if backup_suffix is not None:
            self._back_up_targets(target_dir, backup_suffix)

        written: list[Path] = []
        for config in self._configs:
            written.extend(config.write_files(target_dir, backup_suffix=None))

        logger.info("Exported %d file(s) to %s", len(written), target_dir)
        return written

    def keys_atime(self) -> datetime | None:
        """Access time of the most recently accessed key across all configurations.

        Returns:
            Latest key access time, None if no keys were found at all.
        """
        atimes = [atime for config in self._configs if (atime := config.keys_atime()) is not None]
        return max(atimes, default=None)

    def most_recent(self) -> SourceConfig | None:
        """Get the configuration whose keys were accessed most recently.

        Configurations without keys are only considered when no
        configuration has keys; ties keep the earliest imported one.

        Returns:
            The most recently used SourceConfig, None if the registry is empty.
        """
        best: SourceConfig | None = None
        best_atime: datetime | None = None
        for config in self._configs:
            atime = config.keys_atime()
            if best is None or (atime is not None and (best_atime is None or atime > best_atime)):
                best = config
                best_atime = atime
        return best

    def _back_up_targets(self, target_dir: Path, backup_suffix: str) -> list[Path]:
        """Back up the target files that the export is about to overwrite.

        Raises:
            SshWriteError: If a backup cannot be written.
        """
        names = {
            name
            for config in self._configs
            for item in [*config.keys_to_export(), *config.config_files_to_export()]
            for name in item.file_names
        }
        backups: list[Path] = []
        for name in sorted(names):
            path = target_dir / name
            try:
                backup = backup_file(path, backup_suffix)
            except OSError as e:
                raise SshWriteError(f"Cannot back up {path}: {e}") from e
            if backup is not None:
                backups.append(backup)
        if backups:
            logger.info("Backed up %d file(s) in %s", len(backups), target_dir)
        return backups
