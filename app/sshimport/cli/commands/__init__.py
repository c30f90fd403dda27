"""CLI commands for sshimport.

This package contains all subcommand implementations.
"""

from sshimport.cli.commands import config, import_keys, scan

__all__ = ["config", "import_keys", "scan"]
