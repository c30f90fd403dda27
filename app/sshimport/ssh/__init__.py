"""SSH key and config import module.

This module provides discovery of SSH keys and config files on
mounted partitions, the registry aggregating them across partitions,
and the selective export into a target system.
"""

from sshimport.ssh.models import PUBLIC_FILE_SUFFIX, SshConfigFile, SshFile, SshItem, SshKey
from sshimport.ssh.registry import SshConfigRegistry
from sshimport.ssh.scanner import SshDirScanner
from sshimport.ssh.selection import default_selection, select_all_config_files, select_only
from sshimport.ssh.source import SourceConfig

__all__ = [
    "PUBLIC_FILE_SUFFIX",
    "SourceConfig",
    "SshConfigFile",
    "SshConfigRegistry",
    "SshDirScanner",
    "SshFile",
    "SshItem",
    "SshKey",
    "default_selection",
    "select_all_config_files",
    "select_only",
]
