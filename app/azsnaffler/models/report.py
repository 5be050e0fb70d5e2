"""Scan report models for display and JSON export."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from azsnaffler.classifier.models import Finding, ReasonKind
from azsnaffler.providers.base import StorageResource


class ContainerKind(str, Enum):
    """Shape of a walked container."""

    SHARE = "share"
    BLOB = "blob"


@dataclass(frozen=True, slots=True)
class ContainerReport:
    """Outcome of walking one container.

    Attributes:
        resource: Name of the owning storage resource.
        container: Share or blob container name.
        kind: Whether the container was walked as a tree or flat.
        findings: Findings in traversal order.
        error: Why the container could not be walked, if it could not.
    """

    resource: str
    container: str
    kind: ContainerKind
    findings: tuple[Finding, ...] = ()
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "container": self.container,
            "kind": self.kind.value,
            "findings": [f.to_dict() for f in self.findings],
            "error": self.error,
        }


@dataclass(frozen=True, slots=True)
class ResourceReport:
    """All container outcomes for one storage resource."""

    resource: StorageResource
    containers: tuple[ContainerReport, ...] = ()

    @property
    def findings(self) -> list[Finding]:
        """Every finding of every container, in order."""
        return [f for c in self.containers for f in c.findings]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.resource.name,
            "subscription": self.resource.subscription,
            "tables": list(self.resource.tables),
            "error": self.resource.error,
            "containers": [c.to_dict() for c in self.containers],
        }


@dataclass(frozen=True, slots=True)
class ScanMetadata:
    """Metadata for an exported scan.

    Attributes:
        timestamp: ISO format timestamp when the report was created.
        hostname: Machine the scan ran on.
        azsnaffler_version: Version that produced the report.
        target: What was scanned ("azure" or a local path).
        cancelled: Whether the scan was interrupted before completion.
    """

    timestamp: str
    hostname: str
    azsnaffler_version: str
    target: str
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "azsnaffler_version": self.azsnaffler_version,
            "target": self.target,
            "cancelled": self.cancelled,
        }


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Complete scan report for export."""

    metadata: ScanMetadata
    resources: list[ResourceReport]
    summary: dict[str, int] = field(default_factory=lambda: {})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "metadata": self.metadata.to_dict(),
            "resources": [r.to_dict() for r in self.resources],
            "summary": self.summary,
        }

    @classmethod
    def create(
        cls,
        resources: list[ResourceReport],
        target: str,
        cancelled: bool = False,
    ) -> "ScanReport":
        """Create a ScanReport with generated metadata and summary.

        Args:
            resources: Per-resource outcomes.
            target: Description of what was scanned.
            cancelled: Whether the scan was interrupted.

        Returns:
            ScanReport with finding counts per reason kind.
        """
        import socket

        from azsnaffler import __version__

        summary = summarize(resources)
        metadata = ScanMetadata(
            timestamp=datetime.now(UTC).isoformat(),
            hostname=socket.gethostname(),
            azsnaffler_version=__version__,
            target=target,
            cancelled=cancelled,
        )
        return cls(metadata=metadata, resources=resources, summary=summary)


def summarize(resources: list[ResourceReport]) -> dict[str, int]:
    """Count findings per reason kind, plus totals and errors."""
    summary: dict[str, int] = {reason.value: 0 for reason in ReasonKind}
    containers = 0
    errors = 0

    for report in resources:
        if report.resource.error:
            errors += 1
        for container in report.containers:
            containers += 1
            if container.error:
                errors += 1
            for finding in container.findings:
                summary[finding.reason.value] += 1

    summary["total"] = sum(summary[reason.value] for reason in ReasonKind)
    summary["containers"] = containers
    summary["errors"] = errors
    return summary
