"""Rule inspection commands.

``rules show`` lists the active rule tables and ``rules check`` explains
how a single path would be classified.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from azsnaffler.cli.types import load_classifier
from azsnaffler.classifier.models import ReasonKind
from azsnaffler.utils.formatting import console

app = typer.Typer(
    help="Inspect and test classification rules.",
    no_args_is_help=True,
)


class RuleCategory(str, Enum):
    """Rule tables selectable with --category."""

    EXCLUDED_DIRECTORY_NAMES = "excluded_directory_names"
    INTERESTING_DIRECTORY_NAMES = "interesting_directory_names"
    EXCLUDED_EXTENSIONS = "excluded_extensions"
    EXCLUDED_PATH_SUFFIXES = "excluded_path_suffixes"
    INTERESTING_FILENAME_SUBSTRINGS = "interesting_filename_substrings"
    INTERESTING_EXTENSIONS = "interesting_extensions"
    INTERESTING_PATH_SUFFIXES = "interesting_path_suffixes"


class EntryShape(str, Enum):
    """How the checked path should be interpreted."""

    FILE = "file"
    DIRECTORY = "directory"
    BLOB = "blob"


@app.command()
def show(
    category: Annotated[
        RuleCategory | None,
        typer.Option("--category", "-c", help="Only show one rule table.", case_sensitive=False),
    ] = None,
    rules_path: Annotated[
        Path | None,
        typer.Option("--rules", "-r", help="Rule override file (TOML)."),
    ] = None,
) -> None:
    """Show the active rule tables."""
    rules = load_classifier(rules_path).rules

    table = Table(
        title="Active Rules",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Table", style="header", no_wrap=True)
    table.add_column("Count", justify="right", style="info")
    table.add_column("Entries", style="text", overflow="fold")

    for name, tokens in rules.tables().items():
        if category is not None and name != category.value:
            continue
        table.add_row(name, str(len(tokens)), escape(", ".join(tokens)))

    console.print(table)


@app.command()
def check(
    path: Annotated[str, typer.Argument(help="Path to classify, '/'-separated.")],
    shape: Annotated[
        EntryShape,
        typer.Option("--as", help="Classify as a file, directory or blob.", case_sensitive=False),
    ] = EntryShape.FILE,
    rules_path: Annotated[
        Path | None,
        typer.Option("--rules", "-r", help="Rule override file (TOML)."),
    ] = None,
) -> None:
    """Explain how a single path would be classified.

    Examples:
        azsnaffler rules check /home/user/.ssh/id_rsa
        azsnaffler rules check ADMIN$ --as directory
        azsnaffler rules check backups/2023/secrets.txt --as blob
    """
    classifier = load_classifier(rules_path)
    name = path.rstrip("/").rsplit("/", 1)[-1]

    skipped: bool
    reason: ReasonKind | None
    if shape == EntryShape.DIRECTORY:
        skipped = classifier.should_skip_container(name)
        reason = ReasonKind.DIRECTORY if classifier.should_raise_container(name) else None
    elif shape == EntryShape.BLOB:
        skipped = classifier.should_skip_blob(path)
        reason = None if skipped else classifier.should_raise_blob(path)
    else:
        skipped = classifier.should_skip_file(path, name)
        reason = None if skipped else classifier.should_raise_file(path, name)

    if skipped:
        console.print(f"[muted]skip[/] {escape(path)}")
    elif reason is not None:
        console.print(f"[reason.{reason.value}]raise ({reason.value})[/] {escape(path)}")
    else:
        console.print(f"[info]pass[/] {escape(path)}")
