"""Exception hierarchy for SSH key and config import."""


class SshImportError(Exception):
    """Base exception for SSH import errors."""


class SshReadError(SshImportError):
    """Raised when a source partition cannot be listed or read."""


class SshWriteError(SshImportError):
    """Raised when an SSH key or config file cannot be written to the target."""
