"""CLI package for azsnaffler.

This package contains the Typer application and all subcommands.
"""

from azsnaffler.cli.main import app

__all__ = ["app"]
