"""Import command implementation.

Scans the given partitions, narrows the selection according to the
command line and writes the selected SSH keys and config files into
the SSH directory of the target system.
"""

from pathlib import Path
from typing import Annotated

import typer

from sshimport.cli.display import count_selected, create_source_table
from sshimport.cli.types import parse_sources
from sshimport.core.errors import SshReadError, SshWriteError
from sshimport.core.paths import ssh_dir
from sshimport.core.settings import SettingsError, load_settings_or_default
from sshimport.ssh.registry import SshConfigRegistry
from sshimport.ssh.scanner import SshDirScanner
from sshimport.ssh.selection import default_selection, select_all_config_files, select_only
from sshimport.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def import_keys(
    sources: Annotated[
        list[str],
        typer.Option(
            "--from",
            "-f",
            help="Mounted partition to import from, as ROOT[:DEVICE]. Repeatable.",
            show_default=False,
        ),
    ],
    target: Annotated[
        Path,
        typer.Option(
            "--target",
            "-t",
            help="Root of the target system (its etc/ssh receives the files).",
            show_default=False,
        ),
    ],
    keys: Annotated[
        list[str] | None,
        typer.Option("--key", "-k", help="Only import keys with this name. Repeatable."),
    ] = None,
    config_files: Annotated[
        list[str] | None,
        typer.Option(
            "--config",
            "-c",
            help="Import this config file (implies selecting it). Repeatable.",
        ),
    ] = None,
    devices: Annotated[
        list[str] | None,
        typer.Option("--device", "-d", help="Only import from this device. Repeatable."),
    ] = None,
    all_sources: Annotated[
        bool,
        typer.Option(
            "--all-sources",
            help="Import from every partition instead of the most recently used one.",
        ),
    ] = False,
    copy_config: Annotated[
        bool | None,
        typer.Option(
            "--copy-config/--no-copy-config",
            help="Also import config files (default from settings).",
            show_default=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be imported."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Import SSH keys and config files from previous installations."""
    specs = parse_sources(sources)

    try:
        settings = load_settings_or_default()
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if copy_config is None:
        copy_config = settings.copy_config_files

    registry = SshConfigRegistry(SshDirScanner(copy_config_files=copy_config))
    for spec in specs:
        try:
            registry.import_dir(spec.root, spec.device)
        except SshReadError as e:
            print_warning(f"Skipping {spec.device}: {e}")

    if not registry:
        print_info("No SSH keys or config files found.")
        return

    _warn_unmatched("key", keys, {key.name for config in registry for key in config.keys})
    _warn_unmatched(
        "config file",
        config_files,
        {file.name for config in registry for file in config.config_files},
    )

    # Naming config files selects them, even without --copy-config
    if config_files:
        select_all_config_files(registry)
    # An explicit device filter replaces the most-recently-used default
    if not all_sources and not devices:
        default_selection(registry)
    select_only(
        registry,
        devices=devices or None,
        keys=keys or None,
        config_files=config_files or None,
    )

    key_count, file_count = count_selected(registry.configs)
    if key_count + file_count == 0:
        print_info("Nothing selected for import.")
        return

    suffix = " (dry run)" if dry_run else ""
    for config in registry:
        console.print(create_source_table(config, title_suffix=suffix))

    target_dir = ssh_dir(target)
    console.print(
        f"\nSummary: [key]{key_count} key(s)[/key], "
        f"[config_file]{file_count} config file(s)[/config_file] to {target_dir}"
    )

    if dry_run:
        return

    if not yes:
        confirmed = typer.confirm("\nProceed with the import?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        written = registry.export(target, settings.effective_backup_suffix)
    except SshWriteError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Imported {len(written)} file(s) into {target_dir}.")


def _warn_unmatched(kind: str, names: list[str] | None, found: set[str]) -> None:
    """Warn about names given on the command line that match nothing scanned."""
    for name in names or []:
        if name not in found:
            print_warning(f"No {kind} named {name!r} was found.")
