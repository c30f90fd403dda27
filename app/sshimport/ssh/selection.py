"""Selection helpers for front-ends choosing what to export.

These functions only toggle the ``export_selected`` flags of the items
held by a registry. Nothing is written until ``SshConfigRegistry.export``.
"""

import logging
from collections.abc import Collection

from sshimport.ssh.registry import SshConfigRegistry

logger = logging.getLogger(__name__)


def select_only(
    registry: SshConfigRegistry,
    *,
    devices: Collection[str] | None = None,
    keys: Collection[str] | None = None,
    config_files: Collection[str] | None = None,
) -> None:
    """Narrow the current selection.

    Each filter that is given deselects the items not matching it.
    Items that are already deselected are never selected again.

    Args:
        registry: Registry holding the scanned configurations.
        devices: Keep only items from these devices.
        keys: Keep only keys with these names.
        config_files: Keep only config files with these names.
    """
    for config in registry:
        device_excluded = devices is not None and config.device not in devices
        for key in config.keys:
            if device_excluded or (keys is not None and key.name not in keys):
                key.export_selected = False
        for file in config.config_files:
            if device_excluded or (config_files is not None and file.name not in config_files):
                file.export_selected = False


def select_all_config_files(registry: SshConfigRegistry, selected: bool = True) -> None:
    """Select (or deselect) every config file in the registry."""
    for config in registry:
        for file in config.config_files:
            file.export_selected = selected


def default_selection(registry: SshConfigRegistry) -> None:
    """Keep only the most recently used installation selected.

    Importing keys from several installations at once usually makes no
    sense, as they would overwrite each other in the target system.
    """
    recent = registry.most_recent()
    if recent is None:
        return

    logger.debug("Defaulting to %s (%s)", recent.name, recent.device)
    select_only(registry, devices={recent.device})
