"""Report models for azsnaffler."""

from azsnaffler.models.report import (
    ContainerKind,
    ContainerReport,
    ResourceReport,
    ScanMetadata,
    ScanReport,
    summarize,
)

__all__ = [
    "ContainerKind",
    "ContainerReport",
    "ResourceReport",
    "ScanMetadata",
    "ScanReport",
    "summarize",
]
