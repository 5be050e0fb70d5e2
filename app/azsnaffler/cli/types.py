"""Shared types and utilities for CLI commands.

Provides the output format choice, classifier construction and the scan
runner shared by the ``scan`` and ``local`` commands.
"""

import json
import logging
from enum import Enum
from pathlib import Path

import typer

from azsnaffler.classifier.classifier import Classifier
from azsnaffler.cli.display import print_findings_table, print_resource_report, print_summary
from azsnaffler.core.enumerator import Enumerator
from azsnaffler.models.report import ResourceReport, ScanReport
from azsnaffler.providers.base import ProviderError
from azsnaffler.rules.ruleset import RuleSetError, load_ruleset
from azsnaffler.utils.formatting import console, print_error, print_info, print_warning

logger = logging.getLogger(__name__)

# Exit status for a scan stopped with Ctrl-C
EXIT_INTERRUPTED = 130


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    TABLE = "table"
    JSON = "json"


def load_classifier(rules_path: Path | None) -> Classifier:
    """Build the process classifier, exiting on a broken rule file.

    Args:
        rules_path: Rule override file, or None for the default location.

    Returns:
        Classifier over the loaded rule set.
    """
    try:
        return Classifier(load_ruleset(rules_path))
    except RuleSetError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def run_scan(
    enumerator: Enumerator,
    *,
    target: str,
    output_format: OutputFormat,
    export_path: Path | None,
) -> ScanReport:
    """Run an enumerator to completion and present the results.

    Text output is printed as each resource completes; table and JSON
    output are printed at the end. Ctrl-C cancels the scan and reports
    whatever was found so far.

    Args:
        enumerator: Configured enumerator.
        target: Description of what is scanned, for the report metadata.
        output_format: How to print results.
        export_path: Optional JSON export destination.

    Returns:
        The final ScanReport.
    """
    reports: list[ResourceReport] = []
    try:
        for report in enumerator.scan():
            reports.append(report)
            if output_format == OutputFormat.TEXT:
                print_resource_report(report)
    except KeyboardInterrupt:
        enumerator.cancel()
        print_warning("Scan interrupted, reporting partial results.")
    except ProviderError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    scan_report = ScanReport.create(reports, target=target, cancelled=enumerator.cancelled)

    if export_path is not None:
        _export_report(scan_report, export_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(scan_report.to_dict()))
    else:
        if output_format == OutputFormat.TABLE:
            print_findings_table(reports)
        print_summary(scan_report.summary)

    if scan_report.metadata.cancelled:
        raise typer.Exit(code=EXIT_INTERRUPTED)

    return scan_report


def _export_report(scan_report: ScanReport, export_path: Path) -> None:
    """Write the report as JSON, exiting on failure."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(scan_report.to_dict(), indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
