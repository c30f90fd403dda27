"""sshimport - Import SSH host keys and configuration from previous installations."""

__version__ = "0.1.0"
