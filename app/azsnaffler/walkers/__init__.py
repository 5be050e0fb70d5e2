"""Traversal of hierarchical and flat storage containers."""

from azsnaffler.walkers.base import (
    AccessDeniedError,
    DirectoryEntry,
    DirectoryHandle,
    FlatContainer,
    ListingError,
    ListingFaultError,
)
from azsnaffler.walkers.flat import FlatWalker
from azsnaffler.walkers.tree import DEFAULT_MAX_DEPTH, TreeWalker

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "AccessDeniedError",
    "DirectoryEntry",
    "DirectoryHandle",
    "FlatContainer",
    "FlatWalker",
    "ListingError",
    "ListingFaultError",
    "TreeWalker",
]
