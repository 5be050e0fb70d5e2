"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from azsnaffler.core.theme import get_theme

if TYPE_CHECKING:
    from azsnaffler.classifier.models import Finding


def _detect_color_system() -> str | None:
    """Use truecolor on interactive terminals, let Rich decide otherwise."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_finding(finding: Finding) -> str:
    """Format a finding as a single line of Rich markup.

    Args:
        finding: The finding to format.

    Returns:
        Markup string with the padded reason followed by the path.
    """
    reason = finding.reason.value
    return f"[reason.{reason}]{reason:<9}[/] {escape(finding.full_path)}"


def create_findings_table(title: str) -> Table:
    """Create a pre-configured table for findings.

    Args:
        title: Table title.

    Returns:
        Rich Table with Reason, Container and Path columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Reason", width=10)
    table.add_column("Container", style="muted", no_wrap=True)
    table.add_column("Path", style="text", overflow="fold")
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
