"""CLI package for sshimport.

This package contains the Typer application and all subcommands.
"""

from sshimport.cli.main import app

__all__ = ["app"]
