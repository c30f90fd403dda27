"""Settings commands.

Provides commands to display and create the sshimport settings file.
"""

from typing import Annotated

import typer

from sshimport.core.paths import get_settings_path
from sshimport.core.settings import (
    ImportSettings,
    SettingsError,
    load_settings_or_default,
    save_settings,
)
from sshimport.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the import settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    path = get_settings_path()
    try:
        settings = load_settings_or_default(path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "defaults"
    console.print(f"[bold_header]Settings[/] [muted]({source})[/muted]")
    for name, value in settings.model_dump().items():
        console.print(f"  {name} = [info]{value!r}[/info]")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = get_settings_path()
    if path.exists() and not force:
        print_info(f"Settings already exist: {path} (use --force to overwrite)")
        return

    try:
        saved = save_settings(ImportSettings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
