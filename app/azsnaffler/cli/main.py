"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from azsnaffler import __version__
from azsnaffler.cli.commands import config, local, rules, scan

# Create main Typer app
app = typer.Typer(
    name="azsnaffler",
    help="Find credential-bearing files across Azure storage.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"azsnaffler version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> int:
    """Route log records to stderr at the level implied by the flags.

    Returns:
        The level applied to the azsnaffler logger.
    """
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("azsnaffler").setLevel(level)
    return level


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
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
) -> None:
    """azsnaffler - find credential-bearing files across Azure storage.

    Walks file shares and blob containers and flags entries whose names,
    extensions or locations suggest secrets. File contents are never read.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose, quiet)


# Register commands
app.add_typer(scan.app, name="scan")
app.command(name="local")(local.scan_local)
app.add_typer(rules.app, name="rules")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
