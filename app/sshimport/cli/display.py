"""Shared Rich display functions for discovered SSH configurations.

Provides reusable table builders and JSON conversion used by the scan
and import commands.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from rich.table import Table

from sshimport.ssh.source import SourceConfig
from sshimport.utils.formatting import console, format_atime


def create_source_table(config: SourceConfig, title_suffix: str = "") -> Table:
    """Create a Rich table listing the keys and config files of one source.

    The first column marks items selected for export.

    Args:
        config: Scanned configuration to display.
        title_suffix: Optional text appended to the table title.

    Returns:
        Rich Table configured for display.
    """
    table = Table(
        title=f"{config.name} ({config.device}){title_suffix}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Type", width=8)
    table.add_column("Name", no_wrap=True)
    table.add_column("Last access", style="muted")
    table.add_column("Files", style="muted")

    for key in config.keys:
        files = ", ".join(f.name for f in key.files)
        if not key.has_private_key:
            files += " [warning](no private key)[/warning]"
        table.add_row(
            _selection_mark(key.export_selected),
            "key",
            f"[key]{key.name}[/key]",
            format_atime(key.atime),
            files,
        )

    for file in config.config_files:
        table.add_row(
            _selection_mark(file.export_selected),
            "config",
            f"[config_file]{file.name}[/config_file]",
            format_atime(file.atime),
            file.name,
        )

    return table


def print_sources(configs: Sequence[SourceConfig]) -> None:
    """Print one table per source configuration."""
    for config in configs:
        console.print(create_source_table(config))


def sources_to_dicts(configs: Sequence[SourceConfig]) -> list[dict[str, Any]]:
    """Convert source configurations to plain dictionaries for JSON output."""
    return [
        {
            "name": config.name,
            "device": config.device,
            "keys_atime": _isoformat(config.keys_atime()),
            "keys": [
                {
                    "name": key.name,
                    "private_key": str(key.private_path) if key.private_path else None,
                    "public_key": str(key.public_path) if key.public_path else None,
                    "atime": _isoformat(key.atime),
                    "selected": key.export_selected,
                }
                for key in config.keys
            ],
            "config_files": [
                {
                    "name": file.name,
                    "path": str(file.source_path),
                    "atime": _isoformat(file.atime),
                    "selected": file.export_selected,
                }
                for file in config.config_files
            ],
        }
        for config in configs
    ]


def count_selected(configs: Sequence[SourceConfig]) -> tuple[int, int]:
    """Count selected keys and config files.

    Returns:
        Tuple of (selected_keys, selected_config_files).
    """
    keys = sum(len(c.keys_to_export()) for c in configs)
    files = sum(len(c.config_files_to_export()) for c in configs)
    return keys, files


def _selection_mark(selected: bool) -> str:
    if selected:
        return "[selected]●[/]"  # Filled circle
    return "[skipped]○[/]"  # Empty circle


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
