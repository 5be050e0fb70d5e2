"""Local command implementation.

Walks a directory on the local machine, typically an Azure Files or SMB
share mounted on the assessment host.
"""

from pathlib import Path
from typing import Annotated

import typer

from azsnaffler.cli.types import OutputFormat, load_classifier, run_scan
from azsnaffler.core.config import ScanSettings
from azsnaffler.core.enumerator import Enumerator
from azsnaffler.providers.local import LocalProvider
from azsnaffler.walkers.tree import DEFAULT_MAX_DEPTH


def scan_local(
    path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            help="Directory to scan.",
        ),
    ],
    flat: Annotated[
        bool,
        typer.Option("--flat", help="Treat the directory as a flat blob container."),
    ] = False,
    max_depth: Annotated[
        int,
        typer.Option("--max-depth", min=1, help="Deepest directory level to descend."),
    ] = DEFAULT_MAX_DEPTH,
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
) -> None:
    """Walk a local directory with the same rules as a cloud scan.

    Examples:
        azsnaffler local /mnt/share               # Walk as a file share
        azsnaffler local ./export --flat          # Walk as a blob container
    """
    classifier = load_classifier(rules_path)
    settings = ScanSettings(workers=1, max_depth=max_depth)
    enumerator = Enumerator(LocalProvider(path, flat=flat), classifier, settings)
    run_scan(
        enumerator,
        target=str(path.resolve()),
        output_format=output_format,
        export_path=export_path,
    )
