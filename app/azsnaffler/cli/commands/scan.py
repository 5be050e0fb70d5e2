"""Scan command implementation.

Walks every file share and blob container of every storage account the
current Azure identity can see.
"""

import threading
from pathlib import Path
from typing import Annotated, Any

import typer

from azsnaffler.cli.types import OutputFormat, load_classifier, run_scan
from azsnaffler.core.config import ConfigError, ScanSettings, load_settings
from azsnaffler.core.enumerator import Enumerator
from azsnaffler.providers.azure import AzureProvider
from azsnaffler.utils.formatting import print_error

app = typer.Typer(
    help="Scan Azure storage accounts for sensitive files.",
    invoke_without_command=True,
)


def _apply_overrides(settings: ScanSettings, overrides: dict[str, Any]) -> ScanSettings:
    """Return settings with every non-None CLI override applied."""
    update = {key: value for key, value in overrides.items() if value is not None}
    if not update:
        return settings
    return ScanSettings.model_validate({**settings.model_dump(), **update})


@app.callback(invoke_without_command=True)
def scan_azure(
    ctx: typer.Context,
    subscriptions: Annotated[
        list[str] | None,
        typer.Option(
            "--subscription",
            "-s",
            help="Subscription id or name to scan (repeatable; default: all).",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-w", min=1, max=64, help="Containers walked in parallel."),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", min=1, help="Deepest share directory level to descend."),
    ] = None,
    no_shares: Annotated[
        bool,
        typer.Option("--no-shares", help="Do not walk file shares."),
    ] = False,
    no_blobs: Annotated[
        bool,
        typer.Option("--no-blobs", help="Do not walk blob containers."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: text, table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
    export_path: Annotated[
        Path | None,
        typer.Option("--export", "-e", help="Export results to JSON file."),
    ] = None,
    rules_path: Annotated[
        Path | None,
        typer.Option("--rules", "-r", help="Rule override file (TOML)."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (TOML)."),
    ] = None,
) -> None:
    """Scan Azure file shares and blob containers for sensitive files.

    Examples:
        azsnaffler scan                           # Every visible subscription
        azsnaffler scan -s Production             # One subscription
        azsnaffler scan --no-blobs -w 8           # Shares only, 8 workers
        azsnaffler scan --format json             # Machine-readable output
        azsnaffler scan --export findings.json    # Also write a JSON report
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    settings = _apply_overrides(
        settings,
        {
            "subscriptions": subscriptions or None,
            "workers": workers,
            "max_depth": max_depth,
            "scan_shares": False if no_shares else None,
            "scan_blobs": False if no_blobs else None,
        },
    )

    classifier = load_classifier(rules_path or settings.rules_path)
    enumerator = Enumerator(
        AzureProvider(settings),
        classifier,
        settings,
        cancel_event=threading.Event(),
    )
    run_scan(enumerator, target="azure", output_format=output_format, export_path=export_path)
