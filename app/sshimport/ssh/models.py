"""SSH item models for keys and config files found on a partition.

Both item kinds share the ``SshItem`` interface: an ``export_selected``
flag toggled by the selection front-end, and ``write(target_dir)`` which
re-materializes the item in the target SSH directory.
"""

import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from sshimport.core.errors import SshReadError, SshWriteError
from sshimport.core.settings import DEFAULT_BACKUP_SUFFIX

logger = logging.getLogger(__name__)

PUBLIC_FILE_SUFFIX = ".pub"


@dataclass(frozen=True, slots=True)
class SshFile:
    """Content of one file read from a source SSH directory.

    Attributes:
        name: Base name of the file.
        content: Raw file content.
        permissions: Permission bits of the source file (e.g. 0o600).
    """

    name: str
    content: bytes
    permissions: int

    @classmethod
    def read(cls, path: Path) -> "SshFile":
        """Read a file's content and permission bits.

        The access time of the file is left untouched, as it is used later
        to find the most recently used installation.

        Args:
            path: File to read.

        Returns:
            SshFile holding the file data.

        Raises:
            SshReadError: If the file cannot be read.
        """
        try:
            st = path.stat()
            content = _read_bytes_noatime(path)
        except OSError as e:
            raise SshReadError(f"Cannot read {path}: {e}") from e
        _restore_times(path, st)
        return cls(name=path.name, content=content, permissions=st.st_mode & 0o7777)

    def write(self, target_dir: Path, backup_suffix: str | None = DEFAULT_BACKUP_SUFFIX) -> Path:
        """Atomically write the file into a directory, preserving its permissions.

        The content goes to a temporary file in ``target_dir`` which gets the
        source permissions before any byte is written, then replaces the target.

        An existing file with the same name is copied to
        ``<name><backup_suffix>`` first, unless ``backup_suffix`` is None or
        that backup already exists. The first backup is never overwritten,
        so it keeps the original file across several writes.

        Args:
            target_dir: Directory to write to (created if missing).
            backup_suffix: Suffix for the backup of an existing file.

        Returns:
            Path of the written file.

        Raises:
            SshWriteError: If the backup or the file cannot be written.
        """
        path = target_dir / self.name
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            if backup_suffix is not None:
                backup_file(path, backup_suffix)
            self._write_atomic(path)
        except OSError as e:
            raise SshWriteError(f"Cannot write {path}: {e}") from e

        logger.info("Wrote %s", path)
        return path

    def _write_atomic(self, path: Path) -> None:
        """Write via a temp file created 0600 and chmod'ed before writing."""
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{self.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            os.fchmod(fd, self.permissions)
            with os.fdopen(fd, "wb") as f:
                fd = -1
                f.write(self.content)
            os.replace(tmp_path, path)
        except OSError:
            if fd != -1:
                os.close(fd)
            tmp_path.unlink(missing_ok=True)
            raise


def _read_bytes_noatime(path: Path) -> bytes:
    """Read a file without updating its access time where the OS allows it.

    O_NOATIME is refused with EPERM for files not owned by the caller, in
    which case the file is opened normally.
    """
    noatime = getattr(os, "O_NOATIME", 0)
    try:
        fd = os.open(path, os.O_RDONLY | noatime)
    except PermissionError:
        if not noatime:
            raise
        fd = os.open(path, os.O_RDONLY)
    with os.fdopen(fd, "rb") as f:
        return f.read()


def _restore_times(path: Path, st: os.stat_result) -> None:
    """Reset access and modification times to the values before reading."""
    try:
        os.utime(path, ns=(st.st_atime_ns, st.st_mtime_ns))
    except OSError as e:
        # Read-only mounts: O_NOATIME or the mount itself kept atime intact
        logger.debug("Cannot restore access time of %s: %s", path, e)


def backup_file(path: Path, suffix: str) -> Path | None:
    """Copy a file to <name><suffix>, never overwriting an earlier backup.

    Args:
        path: File that is about to be overwritten.
        suffix: Suffix appended to the file name.

    Returns:
        Path of the new backup, None if the file doesn't exist or a backup is already there.

    Raises:
        OSError: If the copy fails.
    """
    backup = path.with_name(path.name + suffix)
    if not path.exists():
        return None
    if backup.exists():
        logger.debug("Keeping existing backup %s", backup)
        return None
    shutil.copy2(path, backup)
    logger.debug("Backed up %s to %s", path, backup)
    return backup


def _atime(path: Path) -> datetime:
    """Get the last access time of a file as an aware UTC datetime."""
    try:
        return datetime.fromtimestamp(path.stat().st_atime, tz=UTC)
    except OSError as e:
        raise SshReadError(f"Cannot stat {path}: {e}") from e


class SshItem(ABC):
    """Common interface of the items that can be exported to a target system."""

    export_selected: bool

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name identifying the item within its source."""

    @property
    @abstractmethod
    def file_names(self) -> list[str]:
        """Return the names of the files written by ``write``."""

    @abstractmethod
    def write(
        self, target_dir: Path, backup_suffix: str | None = DEFAULT_BACKUP_SUFFIX
    ) -> list[Path]:
        """Write the item into the target SSH directory.

        Args:
            target_dir: Target SSH directory.
            backup_suffix: Suffix for backups of overwritten files, None to disable.

        Returns:
            Paths of the written files.

        Raises:
            SshWriteError: If any file cannot be written.
        """


@dataclass(slots=True)
class SshKey(SshItem):
    """A key pair ("xyz" and "xyz.pub") found in a source SSH directory.

    Either path may be missing, but not both: a lone public key is
    still a valid key.

    Attributes:
        base_name: Name of the private key file (public key name without ``.pub``).
        private_path: Path of the private key, None if not present.
        public_path: Path of the public key, None if not present.
        atime: Last access time, populated by ``read_files()``.
        export_selected: Whether the key should be written to the target system.
        files: File contents, populated by ``read_files()``.
    """

    base_name: str
    private_path: Path | None = None
    public_path: Path | None = None
    atime: datetime | None = None
    export_selected: bool = True
    files: list[SshFile] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate key data after initialization."""
        if not self.base_name:
            msg = "Key name cannot be empty"
            raise ValueError(msg)
        if self.private_path is None and self.public_path is None:
            msg = f"Key {self.base_name} needs a private or a public key file"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        return self.base_name

    @property
    def file_names(self) -> list[str]:
        return [p.name for p in (self.private_path, self.public_path) if p is not None]

    @property
    def has_private_key(self) -> bool:
        return self.private_path is not None

    def read_files(self) -> None:
        """Read the key files and record the access time.

        The access time is taken from the private key, or from the
        public key when there is no private one.

        Raises:
            SshReadError: If any of the files cannot be read.
        """
        paths = [p for p in (self.private_path, self.public_path) if p is not None]
        self.atime = _atime(paths[0])
        self.files = [SshFile.read(path) for path in paths]

    def write(
        self, target_dir: Path, backup_suffix: str | None = DEFAULT_BACKUP_SUFFIX
    ) -> list[Path]:
        if not self.files:
            msg = f"Key {self.base_name} was not read from its source"
            raise SshWriteError(msg)
        return [file.write(target_dir, backup_suffix) for file in self.files]


@dataclass(slots=True)
class SshConfigFile(SshItem):
    """A non-key file found in a source SSH directory (sshd_config, moduli...).

    Attributes:
        file_name: Base name of the file.
        source_path: Path of the file on the source partition.
        export_selected: Whether the file should be written to the target system.
        atime: Last access time, populated by ``read()``.
        file: File content, populated by ``read()``.
    """

    file_name: str
    source_path: Path
    export_selected: bool = False
    atime: datetime | None = None
    file: SshFile | None = None

    def __post_init__(self) -> None:
        """Validate config file data after initialization."""
        if not self.file_name:
            msg = "Config file name cannot be empty"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        return self.file_name

    @property
    def file_names(self) -> list[str]:
        return [self.file_name]

    def read(self) -> None:
        """Read the file content and record the access time.

        Raises:
            SshReadError: If the file cannot be read.
        """
        self.atime = _atime(self.source_path)
        self.file = SshFile.read(self.source_path)

    def write(
        self, target_dir: Path, backup_suffix: str | None = DEFAULT_BACKUP_SUFFIX
    ) -> list[Path]:
        if self.file is None:
            msg = f"Config file {self.file_name} was not read from {self.source_path}"
            raise SshWriteError(msg)
        return [self.file.write(target_dir, backup_suffix)]
