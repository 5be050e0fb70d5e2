"""Settings commands.

``config show`` prints the effective settings and ``config init`` writes
a settings file with the defaults.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from azsnaffler.core.config import ConfigError, ScanSettings, load_settings, save_settings
from azsnaffler.core.paths import get_settings_path
from azsnaffler.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or create scan settings.",
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (TOML)."),
    ] = None,
) -> None:
    """Show the effective scan settings."""
    path = config_path or get_settings_path()
    try:
        settings = load_settings(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(title=f"Settings ({path})", header_style="bold_header", border_style="border")
    table.add_column("Key", style="header")
    table.add_column("Value", style="text")
    for key, value in settings.model_dump().items():
        shown = ", ".join(value) if isinstance(value, list) else str(value)
        table.add_row(key, shown or "-")
    console.print(table)


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (TOML)."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with the default values."""
    path = config_path or get_settings_path()
    if path.exists() and not force:
        print_warning(f"Settings file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        written = save_settings(ScanSettings(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {written}")
