"""Shared Rich display functions for scan results.

Used by both the Azure and the local scan commands, so the two print
resources, findings and summaries identically.
"""

from rich.markup import escape

from azsnaffler.models.report import ContainerKind, ContainerReport, ResourceReport
from azsnaffler.utils.formatting import console, create_findings_table, format_finding

_KIND_LABELS: dict[ContainerKind, str] = {
    ContainerKind.SHARE: "Share",
    ContainerKind.BLOB: "Blob container",
}


def print_resource_report(report: ResourceReport) -> None:
    """Print one resource with its containers and findings as an outline.

    Args:
        report: Completed resource report.
    """
    resource = report.resource
    subscription = f" [muted]({escape(resource.subscription)})[/]" if resource.subscription else ""
    console.print(f"[bold_header]+ {escape(resource.name)}[/]{subscription}")

    if resource.error:
        console.print(f"    [warning]{escape(resource.error)}[/]")
        return

    for table_name in resource.tables:
        console.print(f"    [muted]Table: {escape(table_name)}[/]")

    if not resource.shares and not resource.blob_containers:
        console.print("    [muted]No shares or blob containers[/]")

    for container in report.containers:
        _print_container(container)


def _print_container(container: ContainerReport) -> None:
    label = _KIND_LABELS[container.kind]
    console.print(f"    [header]{label}:[/] {escape(container.container)}")

    if container.error:
        console.print(f"        [error]Failed:[/] {escape(container.error)}")
        return

    for finding in container.findings:
        console.print(f"        {format_finding(finding)}")


def print_findings_table(reports: list[ResourceReport], title: str = "Findings") -> None:
    """Print every finding of every resource in a single table."""
    table = create_findings_table(title)
    for report in reports:
        for container in report.containers:
            location = f"{report.resource.name}/{container.container}"
            for finding in container.findings:
                reason = finding.reason.value
                table.add_row(
                    f"[reason.{reason}]{reason}[/]",
                    escape(location),
                    escape(finding.full_path),
                )
    console.print(table)


def print_summary(summary: dict[str, int]) -> None:
    """Print the one-line finding summary."""
    console.print(
        f"\n[dim]Found {summary['total']} interesting entries in "
        f"{summary['containers']} containers "
        f"(path: {summary['path']}, directory: {summary['directory']}, "
        f"name: {summary['name']}, extension: {summary['extension']}; "
        f"errors: {summary['errors']})[/]"
    )
