"""Scan command implementation.

Lists the SSH keys and config files found on mounted partitions
without writing anything.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from sshimport.cli.display import print_sources, sources_to_dicts
from sshimport.cli.types import parse_sources
from sshimport.core.errors import SshReadError
from sshimport.core.settings import SettingsError, load_settings_or_default
from sshimport.ssh.registry import SshConfigRegistry
from sshimport.ssh.scanner import SshDirScanner
from sshimport.utils.formatting import console, print_error, print_info, print_warning


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def scan_sources(
    sources: Annotated[
        list[str],
        typer.Argument(
            help="Mounted partitions as ROOT[:DEVICE], e.g. /mnt/sda2:/dev/sda2.",
            show_default=False,
        ),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Scan mounted partitions for SSH keys and config files."""
    specs = parse_sources(sources)

    try:
        settings = load_settings_or_default()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    registry = SshConfigRegistry(SshDirScanner(copy_config_files=settings.copy_config_files))
    for spec in specs:
        try:
            found = registry.import_dir(spec.root, spec.device) is not None
            if not found and output_format == OutputFormat.TABLE:
                print_info(f"No SSH keys or config files on {spec.device}")
        except SshReadError as e:
            print_warning(f"Skipping {spec.device}: {e}")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(sources_to_dicts(registry.configs)))
        return

    if not registry:
        return

    print_sources(registry.configs)

    recent = registry.most_recent()
    if recent is not None and len(registry) > 1:
        console.print(f"\n[dim]Most recently used: {recent.name} ({recent.device})[/dim]")
