"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from sshimport import __version__
from sshimport.cli.commands import config, import_keys, scan
from sshimport.utils.formatting import err_console

app = typer.Typer(
    name="sshimport",
    help="Import SSH keys and configuration from previous Linux installations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sshimport version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """sshimport - Carry SSH host keys over to a fresh installation.

    Scan the partitions of previous installations for /etc/ssh content
    and write the chosen keys and config files into the new system.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# Register commands
app.command(name="scan")(scan.scan_sources)
app.command(name="import")(import_keys.import_keys)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
