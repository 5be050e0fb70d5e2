"""Abstract storage provider interface.

A provider discovers storage resources (for Azure, storage accounts) and
builds the listing handles the walkers consume.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass

from azsnaffler.walkers.base import DirectoryHandle, FlatContainer


class ProviderError(Exception):
    """Raised when resource discovery cannot start at all."""


@dataclass(frozen=True, slots=True)
class StorageResource:
    """A storage resource and the containers it exposes.

    Attributes:
        name: Resource name (storage account or local root).
        subscription: Owning subscription display name, if any.
        shares: Hierarchical containers (file shares) to walk.
        blob_containers: Flat containers to walk.
        tables: Table names, reported but never walked.
        error: Why the resource could not be enumerated, if it could not.
    """

    name: str
    subscription: str | None = None
    shares: tuple[str, ...] = ()
    blob_containers: tuple[str, ...] = ()
    tables: tuple[str, ...] = ()
    error: str | None = None


class StorageProvider(ABC):
    """Source of storage resources and their listing handles."""

    @abstractmethod
    def discover(self) -> Iterator[StorageResource]:
        """Yield every reachable storage resource.

        Raises:
            ProviderError: If discovery cannot start (e.g. authentication).
        """

    @abstractmethod
    def open_share(self, resource: StorageResource, share: str) -> DirectoryHandle:
        """Return the root directory handle of a file share."""

    @abstractmethod
    def open_blob_container(self, resource: StorageResource, container: str) -> FlatContainer:
        """Return a listing handle for a blob container."""

    def release(self, resource: StorageResource) -> None:
        """Drop anything held for a resource once all its containers are walked."""
