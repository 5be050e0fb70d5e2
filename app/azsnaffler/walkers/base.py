"""Listing capabilities consumed by the walkers.

Storage providers implement these interfaces on top of their SDKs. Every
listing failure must surface as one of the two ListingError subclasses so
the walkers can tell an expected access denial from a genuine fault.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass


class ListingError(Exception):
    """Base exception for failures while enumerating a container."""


class AccessDeniedError(ListingError):
    """The caller's credentials cannot read this container.

    Expected during an assessment; walkers end the sub-tree silently.
    """


class ListingFaultError(ListingError):
    """Any other failure while enumerating a container."""


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One immediate child of a hierarchical container.

    Attributes:
        name: Entry name (no separators).
        is_directory: True for a sub-container, False for a file.
    """

    name: str
    is_directory: bool


class DirectoryHandle(ABC):
    """A node of a hierarchical container (file share or directory tree)."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Path accumulated from the share root ("" for the root itself)."""

    @abstractmethod
    def list_entries(self) -> Iterable[DirectoryEntry]:
        """Lazily list immediate children.

        Raises:
            AccessDeniedError: If the directory cannot be read.
            ListingFaultError: On any other listing failure. May also be
                raised part-way through iteration.
        """

    @abstractmethod
    def child(self, name: str) -> "DirectoryHandle":
        """Return a handle for the named sub-directory.

        Raises:
            AccessDeniedError: If the sub-directory cannot be opened.
            ListingFaultError: On any other failure.
        """


class FlatContainer(ABC):
    """A flat object container (blob container or flattened directory)."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Container name, used for logging and reports."""

    @abstractmethod
    def list_paths(self) -> Iterable[str]:
        """Lazily list full object paths.

        Raises:
            AccessDeniedError: If the container cannot be listed.
            ListingFaultError: On any other listing failure.
        """
